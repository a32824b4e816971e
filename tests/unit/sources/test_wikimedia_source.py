"""Unit tests for the Wikipedia pageviews adapter."""

from datetime import UTC, datetime

import pytest

from factgrid.domain.shared.error import MalformedResponseError, UpstreamUnavailableError
from factgrid.sdk import SourceConfig
from sources.wikimedia.source import WikipediaPageviewsSource

BASE = "https://wikimedia.org/api/rest_v1/metrics/pageviews/aggregate/en.wikipedia"


def _url(access: str, stamp: str) -> str:
    return f"{BASE}/{access}/user/daily/{stamp}"


def _views(n: int) -> dict:
    return {"items": [{"views": n}]}


def _source(client) -> WikipediaPageviewsSource:
    source = WikipediaPageviewsSource(SourceConfig(), client)
    source.now = lambda: datetime(2025, 3, 10, 8, tzinfo=UTC)
    return source


class TestWikipediaPageviewsSource:
    @pytest.mark.asyncio
    async def test_yesterday(self, route, respond):
        client = route(
            {
                _url("all-access", "2025030900"): respond(_views(250_000_000)),
                _url("desktop", "2025030900"): respond(_views(100_000_000)),
                _url("mobile-web", "2025030900"): respond(_views(140_000_000)),
                _url("mobile-app", "2025030900"): respond(_views(10_000_000)),
            }
        )

        payload = await _source(client).fetch()

        assert payload.total == 250_000_000
        assert [c.key for c in payload.categories] == ["desktop", "mobile_web", "mobile_app"]
        assert "2025-03-09" in payload.notes

    @pytest.mark.asyncio
    async def test_empty_day_falls_back_to_day_before(self, route, respond):
        client = route(
            {
                _url("all-access", "2025030900"): respond({"items": []}),
                _url("all-access", "2025030800"): respond(_views(240_000_000)),
                _url("desktop", "2025030800"): respond(_views(100_000_000)),
                _url("mobile-web", "2025030800"): respond(_views(130_000_000)),
                _url("mobile-app", "2025030800"): respond(_views(10_000_000)),
            }
        )

        payload = await _source(client).fetch()

        assert payload.total == 240_000_000
        assert "2025-03-08" in payload.notes

    @pytest.mark.asyncio
    async def test_no_recent_day_raises(self, route, respond):
        client = route(
            {
                _url("all-access", "2025030900"): respond({"items": []}),
                _url("all-access", "2025030800"): respond(status_code=404),
            }
        )

        with pytest.raises(UpstreamUnavailableError, match="no pageview data for recent dates"):
            await _source(client).fetch()

    @pytest.mark.asyncio
    async def test_empty_access_type_raises(self, route, respond):
        client = route(
            {
                _url("all-access", "2025030900"): respond(_views(250_000_000)),
                _url("desktop", "2025030900"): respond(_views(100_000_000)),
                _url("mobile-web", "2025030900"): respond({"items": []}),
                _url("mobile-app", "2025030900"): respond(_views(10_000_000)),
            }
        )

        with pytest.raises(MalformedResponseError, match="items"):
            await _source(client).fetch()
