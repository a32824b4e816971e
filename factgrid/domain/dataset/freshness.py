"""How current a dataset's latest snapshot is, for display next to it."""

from datetime import datetime
from enum import StrEnum

from factgrid.domain.dataset.model.value import SourceKind


class FreshnessLevel(StrEnum):
    LIVE = "live"
    RECENT = "recent"
    STALE = "stale"
    STATIC = "static"


# kind -> (hours within which the data counts as fresh, level when fresh)
_WINDOWS: dict[SourceKind, tuple[float, FreshnessLevel]] = {
    SourceKind.REALTIME: (2, FreshnessLevel.LIVE),
    SourceKind.DAILY: (30, FreshnessLevel.RECENT),
    SourceKind.ANNUAL: (168, FreshnessLevel.RECENT),
}


def assess_freshness(
    kind: SourceKind | None,
    last_refreshed_at: datetime | None,
    now: datetime,
) -> FreshnessLevel:
    """Classify a dataset by its source kind and time since the last refresh.

    Datasets without an adapter, and constant estimates, are static.
    Realtime sources past their window degrade to recent rather than stale,
    since a missed hour is still usable data.
    """
    if kind is None or kind == SourceKind.ESTIMATED:
        return FreshnessLevel.STATIC
    if last_refreshed_at is None:
        return FreshnessLevel.STALE

    hours = (now - last_refreshed_at).total_seconds() / 3600
    window, fresh_level = _WINDOWS[kind]
    if hours < window:
        return fresh_level
    if kind == SourceKind.REALTIME:
        return FreshnessLevel.RECENT
    return FreshnessLevel.STALE
