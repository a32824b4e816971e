"""World Inequality Database year check for wealth shares."""

import re
from typing import Any

from factgrid.domain.shared.error import MalformedResponseError
from factgrid.domain.watchdog.rules import newer_year_signal
from factgrid.sdk import Detection, Probe, get_json

TIME_SERIES_URL = "https://wid.world/api/country-time-series"

_YEAR_KEY = re.compile(r"[0-9]{4}")


def latest_series_year(data: Any) -> int | None:
    """Highest year key across every series in a country-time-series response."""
    if not isinstance(data, dict):
        raise MalformedResponseError("WID API: expected an object of series")
    years = [
        int(key)
        for series in data.values()
        if isinstance(series, dict)
        for key in series
        if _YEAR_KEY.fullmatch(str(key))
    ]
    return max(years) if years else None


class WealthInequalityProbe(Probe):
    slug = "wealth-inequality"
    label = "WID API"

    async def detect(self, previous_year: int | None) -> Detection:
        data = await get_json(
            self.client,
            TIME_SERIES_URL,
            source="WID API",
            params={"variable": "shweal", "country": "WO", "percentile": "p99p100", "year": "all"},
        )
        latest = latest_series_year(data)
        if latest is None:
            raise MalformedResponseError("WID API: no yearly values in response")
        signal = newer_year_signal(latest, previous_year)
        return Detection(
            changed=signal.changed,
            detected_year=signal.detected_year,
            method=f"WID API shweal: latest year = {latest}",
        )
