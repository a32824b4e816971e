"""SchedulerPool - runs Schedule tasks on cron triggers."""

import asyncio
import logging
from contextlib import AsyncExitStack
from dataclasses import dataclass, field
from typing import Any, NewType

from apscheduler import AsyncScheduler
from apscheduler.triggers.cron import CronTrigger
from dishka import AsyncContainer

from factgrid.domain.shared.schedule import Schedule
from factgrid.util.di.scope import Scope

logger = logging.getLogger(__name__)

# Consecutive failures before a schedule is reported as critical
FAILURE_ALERT_THRESHOLD = 5


@dataclass
class ScheduleConfig:
    """Configuration for a scheduled task."""

    schedule_type: type[Schedule]
    cron: str
    id: str
    params: dict[str, Any] = field(default_factory=dict)


ScheduleConfigs = NewType("ScheduleConfigs", list[ScheduleConfig])


class SchedulerPool:
    """Owns the APScheduler instance and runs each schedule in its own UOW scope.

    Usage:
        pool = SchedulerPool(container, schedules)

        async with pool:
            # Schedules fire on their cron triggers
            await some_long_running_task()
        # Scheduler is stopped
    """

    def __init__(
        self,
        container: AsyncContainer | None = None,
        schedules: ScheduleConfigs | None = None,
    ) -> None:
        self._container = container
        self._schedules = schedules or ScheduleConfigs([])
        self._scheduler: AsyncScheduler | None = None
        self._exit_stack: AsyncExitStack | None = None
        self._schedule_failures: dict[str, int] = {}

    def set_container(self, container: AsyncContainer) -> None:
        self._container = container

    @property
    def schedules(self) -> list[ScheduleConfig]:
        return list(self._schedules)

    def failures(self, schedule_id: str) -> int:
        """Consecutive failures of a schedule since its last success."""
        return self._schedule_failures.get(schedule_id, 0)

    async def start(self) -> None:
        if self._container is None:
            raise RuntimeError("Container not set. Call set_container() first.")

        self._exit_stack = AsyncExitStack()
        await self._exit_stack.__aenter__()

        self._scheduler = AsyncScheduler()
        await self._exit_stack.enter_async_context(self._scheduler)

        for config in self._schedules:
            await self._scheduler.add_schedule(
                self._run_schedule,
                CronTrigger.from_crontab(config.cron),
                id=config.id,
                kwargs={"config": config},
            )
            logger.debug("Registered schedule %s (cron=%s)", config.id, config.cron)

        await self._scheduler.start_in_background()
        logger.info("SchedulerPool started with %d schedules", len(self._schedules))

    async def stop(self) -> None:
        if self._exit_stack:
            await self._exit_stack.__aexit__(None, None, None)
            self._exit_stack = None
            self._scheduler = None
        logger.info("SchedulerPool stopped")

    async def _run_schedule(self, config: ScheduleConfig) -> None:
        """Cron task: run a scheduled task in UOW scope."""
        if self._container is None:
            return

        try:
            async with self._container(scope=Scope.UOW) as scope:
                schedule = await scope.get(config.schedule_type)
                await schedule.run(**config.params)

            self._schedule_failures.pop(config.id, None)
            logger.debug("Ran schedule %s", config.id)

        except (asyncio.CancelledError, SystemExit, KeyboardInterrupt):
            raise
        except Exception as e:
            failures = self._schedule_failures.get(config.id, 0) + 1
            self._schedule_failures[config.id] = failures
            logger.error("Failed to run schedule %s (failures: %d): %s", config.id, failures, e)
            if failures >= FAILURE_ALERT_THRESHOLD:
                logger.critical("Schedule %s has failed %d consecutive times", config.id, failures)

    async def __aenter__(self) -> "SchedulerPool":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        await self.stop()
