"""RefreshSchedule - periodic rate-gated refresh of all datasets."""

import logging
from dataclasses import dataclass
from typing import Any

from factgrid.domain.refresh.service.refresh import RefreshService
from factgrid.domain.shared.schedule import Schedule

logger = logging.getLogger(__name__)


@dataclass
class RefreshSchedule(Schedule):
    refresh: RefreshService

    async def run(self, **params: Any) -> None:
        """Params:
        force: Ignore the rate gate (default False).
        """
        report = await self.refresh.refresh_all(force=bool(params.get("force", False)))
        for outcome in report.results:
            if outcome.error:
                logger.warning("Scheduled refresh of %s: %s", outcome.slug, outcome.error)
