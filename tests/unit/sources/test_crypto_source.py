"""Unit tests for the crypto price adapters."""

import httpx
import pytest

from factgrid.domain.shared.error import AllFallbacksExhaustedError, UpstreamUnavailableError
from factgrid.sdk import SourceConfig
from sources.crypto.source import BitcoinPriceSource, EthereumPriceSource


class TestBitcoinPriceSource:
    @pytest.mark.asyncio
    async def test_coingecko_first(self, route, respond):
        client = route(
            {"https://api.coingecko.com": respond({"bitcoin": {"usd": 65432.4, "usd_24h_change": 1.234}})}
        )
        source = BitcoinPriceSource(SourceConfig(), client)

        payload = await source.fetch()

        assert payload.total == 65432
        assert payload.categories[0].value == 65432
        assert payload.unit_label == "USD per BTC"
        assert payload.dot_value == 1000
        assert "via CoinGecko (+1.2% 24h)" in payload.notes
        assert client.get.await_count == 1

    @pytest.mark.asyncio
    async def test_falls_back_to_coinlore(self, route, respond):
        client = route(
            {
                "https://api.coingecko.com": respond(status_code=429),
                "https://api.coinlore.net": respond([{"price_usd": "64001.2", "percent_change_24h": "-0.50"}]),
            }
        )
        source = BitcoinPriceSource(SourceConfig(), client)

        payload = await source.fetch()

        assert payload.total == 64001
        assert "via Coinlore (-0.5% 24h)" in payload.notes

    @pytest.mark.asyncio
    async def test_falls_back_to_coindesk(self, route, respond):
        client = route(
            {
                "https://api.coingecko.com": httpx.ConnectError("boom"),
                "https://api.coinlore.net": respond([]),
                "https://api.coindesk.com": respond({"bpi": {"USD": {"rate_float": 63999.9}}}),
            }
        )
        source = BitcoinPriceSource(SourceConfig(), client)

        payload = await source.fetch()

        assert payload.total == 64000
        assert "via CoinDesk" in payload.notes

    @pytest.mark.asyncio
    async def test_all_providers_failing_raises(self, route, respond):
        client = route(
            {
                "https://api.coingecko.com": respond(status_code=503),
                "https://api.coinlore.net": respond(status_code=503),
                "https://api.coindesk.com": respond(status_code=503),
            }
        )
        source = BitcoinPriceSource(SourceConfig(), client)

        with pytest.raises(AllFallbacksExhaustedError) as exc:
            await source.fetch()

        assert len(exc.value.errors) == 3
        assert all(isinstance(e, UpstreamUnavailableError) for e in exc.value.errors)

    @pytest.mark.asyncio
    async def test_missing_quote_moves_on(self, route, respond):
        client = route(
            {
                "https://api.coingecko.com": respond({}),
                "https://api.coinlore.net": respond([{"price_usd": "65000"}]),
            }
        )

        payload = await BitcoinPriceSource(SourceConfig(), client).fetch()

        assert payload.total == 65000
        assert "24h" not in payload.notes


class TestEthereumPriceSource:
    @pytest.mark.asyncio
    async def test_only_two_providers(self, route, respond):
        client = route(
            {
                "https://api.coingecko.com": respond(status_code=429),
                "https://api.coinlore.net": respond(status_code=500),
            }
        )

        with pytest.raises(AllFallbacksExhaustedError) as exc:
            await EthereumPriceSource(SourceConfig(), client).fetch()

        assert len(exc.value.errors) == 2

    @pytest.mark.asyncio
    async def test_price(self, route, respond):
        client = route({"https://api.coingecko.com": respond({"ethereum": {"usd": 3120.6}})})

        payload = await EthereumPriceSource(SourceConfig(), client).fetch()

        assert payload.total == 3121
        assert payload.unit_label == "USD per ETH"
        assert payload.dot_value == 50
