"""Largest listed companies by market cap, via Finnhub company profiles."""

import asyncio
import logging

from pydantic import BaseModel

from factgrid.domain.dataset.model.value import SourceKind
from factgrid.domain.shared.error import MalformedResponseError
from factgrid.sdk import Category, SnapshotPayload, Source, get_json, parse
from sources.finnhub.config import FinnhubConfig

logger = logging.getLogger(__name__)

PROFILE_URL = "https://finnhub.io/api/v1/stock/profile2"

# symbol -> (category key, label)
TICKERS = {
    "AAPL": ("apple", "Apple"),
    "NVDA": ("nvidia", "NVIDIA"),
    "MSFT": ("microsoft", "Microsoft"),
    "GOOGL": ("google", "Alphabet (Google)"),
    "AMZN": ("amazon", "Amazon"),
    "META": ("meta", "Meta"),
    "TSM": ("tsmc", "TSMC"),
    "AVGO": ("broadcom", "Broadcom"),
}

# Approximate USD per unit of the listing currency
USD_RATES = {
    "TWD": 0.031,
    "KRW": 0.00072,
    "JPY": 0.0065,
    "GBP": 1.27,
    "EUR": 1.08,
    "USD": 1.0,
}

# Trillions USD, used when no API key is configured
ESTIMATED_CAPS = {
    "apple": 3.7,
    "nvidia": 3.4,
    "microsoft": 3.1,
    "google": 2.4,
    "amazon": 2.3,
    "meta": 1.8,
    "tsmc": 1.0,
    "broadcom": 0.8,
}


class CompanyProfile(BaseModel):
    # Millions, in the listing currency
    marketCapitalization: float = 0.0
    currency: str = "USD"

    @property
    def trillions_usd(self) -> float:
        millions = self.marketCapitalization * USD_RATES.get(self.currency, 1.0)
        return round(millions / 10_000) / 100


class TrillionDollarClubSource(Source):
    slug = "trillion-dollar-club"
    kind = SourceKind.DAILY
    config_class = FinnhubConfig

    config: FinnhubConfig

    async def _market_cap(self, symbol: str) -> float:
        data = await get_json(
            self.client,
            PROFILE_URL,
            source="Finnhub",
            params={"symbol": symbol, "token": self.config.api_key},
        )
        return parse(CompanyProfile, data, source="Finnhub").trillions_usd

    async def fetch(self) -> SnapshotPayload:
        if not self.config.api_key:
            return self.estimate()

        caps = await asyncio.gather(*(self._market_cap(symbol) for symbol in TICKERS))
        qualified = sorted(
            (
                (key, label, cap)
                for (key, label), cap in zip(TICKERS.values(), caps, strict=True)
                if cap >= self.config.min_market_cap
            ),
            key=lambda item: item[2],
            reverse=True,
        )
        if not qualified:
            raise MalformedResponseError("Finnhub: no company above the market cap threshold")

        total = round(sum(cap for _, _, cap in qualified), 1)
        return SnapshotPayload(
            unit_label="trillion USD (market cap)",
            dot_value=0.5,
            total=total,
            categories=tuple(Category(key=key, label=label, value=cap) for key, label, cap in qualified),
            notes=(
                f"Live market caps via Finnhub API. {len(qualified)} companies above "
                f"${self.config.min_market_cap * 1000:.0f}B. Total: ${total}T."
            ),
        )

    @staticmethod
    def estimate() -> SnapshotPayload:
        return SnapshotPayload(
            unit_label="trillion USD (market cap)",
            dot_value=0.5,
            total=18.5,
            categories=tuple(
                Category(key=key, label=label, value=ESTIMATED_CAPS[key]) for key, label in TICKERS.values()
            ),
            notes=(
                "Estimated market caps (no Finnhub API key configured). "
                "Set sources.trillion-dollar-club.api_key for live data."
            ),
        )
