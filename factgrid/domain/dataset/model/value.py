from enum import StrEnum


class RefreshRate(StrEnum):
    """Expected update cadence of a dataset."""

    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"
    MANUAL = "manual"


# Rates picked up by the scheduled refresh run
AUTOMATED_RATES: tuple[RefreshRate, ...] = (
    RefreshRate.HOURLY,
    RefreshRate.DAILY,
    RefreshRate.WEEKLY,
)

# Rates whose underlying data changes rarely enough to be worth probing
WATCHED_RATES: tuple[RefreshRate, ...] = (RefreshRate.DAILY, RefreshRate.WEEKLY)


class SourceKind(StrEnum):
    """How live the data behind an adapter really is."""

    REALTIME = "realtime"
    DAILY = "daily"
    ANNUAL = "annual"
    ESTIMATED = "estimated"
