"""World Bank indicators API: https://api.worldbank.org/v2/."""

from collections.abc import Iterable

import httpx

from factgrid.domain.shared.error import MalformedResponseError
from factgrid.sdk import get_json, parse
from sources.worldbank.schema import IndicatorEntry

INDICATOR_URL = "https://api.worldbank.org/v2/country/{countries}/indicator/{indicator}"


async def fetch_indicator(
    client: httpx.AsyncClient,
    indicator: str,
    countries: Iterable[str],
    *,
    start: int,
    end: int,
    per_page: int = 10,
) -> list[IndicatorEntry]:
    """Observations for ``indicator`` between ``start`` and ``end`` inclusive.

    The API answers ``[paging, entries]``; ``entries`` is null when the range
    holds no data, which comes back as an empty list.
    """
    source = f"World Bank {indicator}"
    data = await get_json(
        client,
        INDICATOR_URL.format(countries=";".join(countries), indicator=indicator),
        source=source,
        params={"format": "json", "date": f"{start}:{end}", "per_page": per_page},
    )
    if not isinstance(data, list) or not data:
        raise MalformedResponseError(f"{source}: unexpected response shape")
    if len(data) < 2 or data[1] is None:
        if isinstance(data[0], dict) and "message" in data[0]:
            raise MalformedResponseError(f"{source}: {data[0]['message']}")
        return []
    if not isinstance(data[1], list):
        raise MalformedResponseError(f"{source}: unexpected response shape")
    return [parse(IndicatorEntry, entry, source=source) for entry in data[1]]


def newest(entries: Iterable[IndicatorEntry]) -> IndicatorEntry | None:
    """Observation with a value for the most recent year."""
    present = [e for e in entries if e.value is not None]
    return max(present, key=lambda e: e.year) if present else None


def require_newest(entries: Iterable[IndicatorEntry], indicator: str) -> IndicatorEntry:
    entry = newest(entries)
    if entry is None:
        raise MalformedResponseError(f"World Bank returned no data for {indicator}")
    return entry
