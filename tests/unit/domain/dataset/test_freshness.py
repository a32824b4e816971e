"""Unit tests for freshness classification."""

from datetime import UTC, datetime, timedelta

import pytest

from factgrid.domain.dataset.freshness import FreshnessLevel, assess_freshness
from factgrid.domain.dataset.model.value import SourceKind

NOW = datetime(2025, 3, 10, 12, 0, tzinfo=UTC)


def _ago(hours: float) -> datetime:
    return NOW - timedelta(hours=hours)


class TestAssessFreshness:
    @pytest.mark.parametrize(
        ("kind", "hours", "expected"),
        [
            (SourceKind.REALTIME, 1, FreshnessLevel.LIVE),
            (SourceKind.REALTIME, 5, FreshnessLevel.RECENT),
            (SourceKind.DAILY, 20, FreshnessLevel.RECENT),
            (SourceKind.DAILY, 31, FreshnessLevel.STALE),
            (SourceKind.ANNUAL, 100, FreshnessLevel.RECENT),
            (SourceKind.ANNUAL, 200, FreshnessLevel.STALE),
        ],
    )
    def test_windows(self, kind, hours, expected):
        assert assess_freshness(kind, _ago(hours), NOW) == expected

    def test_estimates_are_static(self):
        assert assess_freshness(SourceKind.ESTIMATED, _ago(1000), NOW) == FreshnessLevel.STATIC

    def test_no_adapter_is_static(self):
        assert assess_freshness(None, None, NOW) == FreshnessLevel.STATIC

    def test_never_refreshed_is_stale(self):
        assert assess_freshness(SourceKind.DAILY, None, NOW) == FreshnessLevel.STALE
