"""Latest-year checks against World Bank indicators."""

from typing import ClassVar

from factgrid.domain.shared.error import MalformedResponseError
from factgrid.domain.watchdog.rules import latest_non_null_year, newer_year_signal
from factgrid.sdk import Detection, Probe
from sources.worldbank.client import fetch_indicator

# How far back to look for the newest observation
WINDOW_YEARS = 5


class IndicatorProbe(Probe):
    """Asks for the last few years of one indicator and reports the newest year with data."""

    indicator: ClassVar[str]
    country: ClassVar[str] = "WLD"

    @property
    def label(self) -> str:  # type: ignore[override]
        return f"World Bank {self.indicator}"

    async def detect(self, previous_year: int | None) -> Detection:
        this_year = self.now().year
        entries = await fetch_indicator(
            self.client,
            self.indicator,
            [self.country],
            start=this_year - WINDOW_YEARS,
            end=this_year,
        )
        latest = latest_non_null_year((e.year, e.value) for e in entries)
        if latest is None:
            raise MalformedResponseError(f"World Bank {self.indicator}: no data in range")
        signal = newer_year_signal(latest, previous_year)
        return Detection(
            changed=signal.changed,
            detected_year=signal.detected_year,
            method=f"World Bank {self.indicator}: latest data year = {latest}",
        )


class MilitarySpendingProbe(IndicatorProbe):
    slug = "military-spending"
    indicator = "MS.MIL.XPND.CD"
    country = "USA"


class InternetAccessProbe(IndicatorProbe):
    slug = "internet-access"
    indicator = "IT.NET.USER.ZS"


class SmartphoneAccessProbe(IndicatorProbe):
    slug = "smartphone-access"
    indicator = "IT.CEL.SETS"
