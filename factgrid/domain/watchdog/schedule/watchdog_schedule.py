"""WatchdogSchedule - daily new-publication check."""

from dataclasses import dataclass
from typing import Any

from factgrid.domain.shared.schedule import Schedule
from factgrid.domain.watchdog.service.watchdog import WatchdogService


@dataclass
class WatchdogSchedule(Schedule):
    """Runs all probes and immediately refreshes datasets with new data."""

    watchdog: WatchdogService

    async def run(self, **params: Any) -> None:
        await self.watchdog.run(refresh_changed=bool(params.get("refresh", True)))
