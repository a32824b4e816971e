"""Dependency injection provider for the scheduler."""

import logging

from dishka import AsyncContainer, provide

from factgrid.config import Config
from factgrid.domain.refresh.schedule.refresh_schedule import RefreshSchedule
from factgrid.domain.watchdog.schedule.watchdog_schedule import WatchdogSchedule
from factgrid.infrastructure.scheduler.worker import ScheduleConfig, ScheduleConfigs, SchedulerPool
from factgrid.util.di.base import Provider
from factgrid.util.di.scope import Scope

logger = logging.getLogger(__name__)


class SchedulerProvider(Provider):
    @provide(scope=Scope.APP)
    def get_schedule_configs(self, config: Config) -> ScheduleConfigs:
        return ScheduleConfigs(
            [
                ScheduleConfig(
                    schedule_type=RefreshSchedule,
                    cron=config.triggers.refresh_cron,
                    id="refresh-datasets",
                ),
                ScheduleConfig(
                    schedule_type=WatchdogSchedule,
                    cron=config.triggers.watchdog_cron,
                    id="watch-for-new-publications",
                    params={"refresh": True},
                ),
            ]
        )

    @provide(scope=Scope.APP)
    def get_scheduler_pool(
        self, container: AsyncContainer, schedules: ScheduleConfigs
    ) -> SchedulerPool:
        return SchedulerPool(container=container, schedules=schedules)
