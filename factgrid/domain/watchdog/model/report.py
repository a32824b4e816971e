from datetime import datetime

from factgrid.domain.dataset.model.aggregate import Dataset
from factgrid.domain.refresh.model.value import RefreshOutcome
from factgrid.domain.shared.model.value import ValueObject
from factgrid.domain.watchdog.model.value import NewData, WatchdogResult, WatchdogSummary


class WatchdogReport(ValueObject):
    summary: WatchdogSummary
    probes: tuple[WatchdogResult, ...]
    new_data_available: tuple[NewData, ...] = ()
    refreshes: tuple[RefreshOutcome, ...] = ()

    @classmethod
    def build(
        cls,
        results: list[WatchdogResult],
        refreshes: list[RefreshOutcome],
        checked_at: datetime,
    ) -> "WatchdogReport":
        changed = [r for r in results if r.changed]
        return cls(
            summary=WatchdogSummary(
                total=len(results),
                changed=len(changed),
                errors=sum(1 for r in results if r.error),
                checked_at=checked_at,
            ),
            probes=tuple(results),
            new_data_available=tuple(
                NewData(
                    slug=r.slug,
                    previous_year=r.previous_year,
                    detected_year=r.detected_year,
                    method=r.method,
                )
                for r in changed
            ),
            refreshes=tuple(refreshes),
        )


class ProbeCheck(ValueObject):
    """Result of probing a single dataset on demand."""

    probe: WatchdogResult
    dataset: Dataset
    refresh: RefreshOutcome | None = None
