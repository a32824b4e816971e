from datetime import datetime
from enum import StrEnum
from uuid import UUID

from factgrid.domain.shared.error import FactGridError
from factgrid.domain.shared.model.value import ValueObject


class RefreshStatus(StrEnum):
    REFRESHED = "refreshed"
    UNCHANGED = "unchanged"
    ERROR = "error"
    SKIPPED_TOO_RECENT = "skipped_too_recent"
    NO_FETCHER = "no_fetcher"


class RefreshOutcome(ValueObject):
    """Per-dataset status line of a refresh run."""

    slug: str
    status: RefreshStatus
    snapshot_id: UUID | None = None
    source_year: int | None = None
    hours_since_refresh: float | None = None
    error: str | None = None
    error_code: str | None = None

    @classmethod
    def failed(cls, slug: str, error: FactGridError) -> "RefreshOutcome":
        return cls(slug=slug, status=RefreshStatus.ERROR, error=error.message, error_code=error.code)


class RefreshSummary(ValueObject):
    total: int
    refreshed: int
    unchanged: int
    errors: int
    skipped: int


class RefreshReport(ValueObject):
    summary: RefreshSummary
    results: tuple[RefreshOutcome, ...]
    timestamp: datetime

    @classmethod
    def from_outcomes(cls, outcomes: list[RefreshOutcome], timestamp: datetime) -> "RefreshReport":
        def count(status: RefreshStatus) -> int:
            return sum(1 for o in outcomes if o.status == status)

        refreshed = count(RefreshStatus.REFRESHED)
        unchanged = count(RefreshStatus.UNCHANGED)
        errors = count(RefreshStatus.ERROR)
        return cls(
            summary=RefreshSummary(
                total=len(outcomes),
                refreshed=refreshed,
                unchanged=unchanged,
                errors=errors,
                # skipped_too_recent and no_fetcher
                skipped=len(outcomes) - refreshed - unchanged - errors,
            ),
            results=tuple(outcomes),
            timestamp=timestamp,
        )
