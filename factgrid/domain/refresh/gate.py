from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime

from factgrid.domain.dataset.model.aggregate import Dataset
from factgrid.domain.dataset.model.value import RefreshRate

DEFAULT_MIN_HOURS: Mapping[RefreshRate, float] = {
    RefreshRate.HOURLY: 0.5,
    RefreshRate.DAILY: 12.0,
    RefreshRate.WEEKLY: 72.0,
}


@dataclass(frozen=True)
class RateGate:
    """Minimum hours between scheduled refreshes, per refresh rate."""

    min_hours: Mapping[RefreshRate, float] = field(default_factory=lambda: dict(DEFAULT_MIN_HOURS))

    def is_too_recent(self, dataset: Dataset, now: datetime) -> bool:
        threshold = self.min_hours.get(dataset.refresh_rate)
        hours = dataset.hours_since_refresh(now)
        if threshold is None or hours is None:
            return False
        return hours < threshold
