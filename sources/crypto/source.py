"""Live crypto prices with a chain of keyless fallback APIs."""

from collections.abc import Awaitable, Callable
from typing import ClassVar

from factgrid.domain.dataset.model.value import SourceKind
from factgrid.domain.shared.error import MalformedResponseError
from factgrid.sdk import Category, SnapshotPayload, Source, first_success, get_json, parse
from sources.crypto.schema import CoinDeskPrice, CoinGeckoPrices, CoinloreTickers

COINGECKO_URL = "https://api.coingecko.com/api/v3/simple/price"
COINLORE_URL = "https://api.coinlore.net/api/ticker/"
COINDESK_URL = "https://api.coindesk.com/v1/bpi/currentprice/USD.json"


def _change(pct: float | None) -> str:
    return f" ({pct:+.1f}% 24h)" if pct else ""


class CoinPriceSource(Source):
    """USD spot price of one coin, first from CoinGecko then from Coinlore."""

    kind = SourceKind.REALTIME

    coingecko_id: ClassVar[str]
    coinlore_id: ClassVar[str]
    symbol: ClassVar[str]
    label: ClassVar[str]
    dot_value: ClassVar[float]

    def variants(self) -> list[tuple[str, Callable[[], Awaitable[SnapshotPayload]]]]:
        return [("CoinGecko", self.from_coingecko), ("Coinlore", self.from_coinlore)]

    async def fetch(self) -> SnapshotPayload:
        result = await first_success(self.slug, self.variants())
        return result.unwrap()

    def payload(self, price: float, provider: str, suffix: str = "") -> SnapshotPayload:
        value = round(price)
        stamp = self.now().strftime("%Y-%m-%dT%H:%M")
        return SnapshotPayload(
            unit_label=f"USD per {self.symbol}",
            dot_value=self.dot_value,
            total=value,
            categories=(Category(key="price", label=self.label, value=value),),
            notes=f"Live price as of {stamp} UTC via {provider}{suffix}.",
        )

    async def from_coingecko(self) -> SnapshotPayload:
        data = await get_json(
            self.client,
            COINGECKO_URL,
            source="CoinGecko",
            params={"ids": self.coingecko_id, "vs_currencies": "usd", "include_24hr_change": "true"},
        )
        prices = parse(CoinGeckoPrices, data, source="CoinGecko").root
        quote = prices.get(self.coingecko_id)
        if quote is None:
            raise MalformedResponseError(f"CoinGecko: no quote for {self.coingecko_id}")
        return self.payload(quote.usd, "CoinGecko", _change(quote.usd_24h_change))

    async def from_coinlore(self) -> SnapshotPayload:
        data = await get_json(
            self.client, COINLORE_URL, source="Coinlore", params={"id": self.coinlore_id}
        )
        ticker = parse(CoinloreTickers, data, source="Coinlore").root[0]
        return self.payload(ticker.price_usd, "Coinlore", _change(ticker.percent_change_24h))


class BitcoinPriceSource(CoinPriceSource):
    slug = "bitcoin-price"
    coingecko_id = "bitcoin"
    coinlore_id = "90"
    symbol = "BTC"
    label = "Bitcoin Price"
    dot_value = 1000

    def variants(self) -> list[tuple[str, Callable[[], Awaitable[SnapshotPayload]]]]:
        return [*super().variants(), ("CoinDesk", self.from_coindesk)]

    async def from_coindesk(self) -> SnapshotPayload:
        data = await get_json(self.client, COINDESK_URL, source="CoinDesk")
        price = parse(CoinDeskPrice, data, source="CoinDesk")
        return self.payload(price.bpi.USD.rate_float, "CoinDesk")


class EthereumPriceSource(CoinPriceSource):
    slug = "ethereum-price"
    coingecko_id = "ethereum"
    coinlore_id = "80"
    symbol = "ETH"
    label = "Ethereum Price"
    dot_value = 50
