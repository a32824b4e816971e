from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from factgrid.domain.dataset.model.value import RefreshRate


class Dataset(BaseModel):
    """Tracking record for one external metric.

    Created once at seed time and afterwards only updated by the refresh
    and watchdog orchestrators.
    """

    id: UUID
    slug: str
    name: str
    refresh_rate: RefreshRate
    last_refreshed_at: datetime | None = None
    last_watchdog_at: datetime | None = None
    latest_source_year: int | None = None
    latest_snapshot_id: UUID | None = None

    def hours_since_refresh(self, now: datetime) -> float | None:
        if self.last_refreshed_at is None:
            return None
        return (now - self.last_refreshed_at).total_seconds() / 3600
