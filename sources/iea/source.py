"""Global EV sales from the IEA Global EV Outlook API."""

import logging

from factgrid.domain.dataset.model.value import SourceKind
from factgrid.domain.shared.error import MalformedResponseError, UpstreamUnavailableError
from factgrid.sdk import Category, SnapshotPayload, Source, get_json, parse
from sources.iea.schema import EVRecord, EVRecords

logger = logging.getLogger(__name__)

IEA_EV_URL = "https://api.iea.org/evs/"

# IEA publishes with a lag; look this many years back from the current one
LOOKBACK_YEARS = 2

SALES_POWERTRAINS = {"BEV", "PHEV", "EV"}


def world_car_sales(records: list[EVRecord]) -> tuple[float, float]:
    """Sum of world EV car sales and the EV share of new cars, in percent."""
    sales = 0.0
    share = 0.0
    for r in records:
        if r.region != "World" or r.mode != "Cars":
            continue
        if r.parameter == "EV sales" and r.powertrain in SALES_POWERTRAINS:
            sales += r.value
        elif r.parameter == "EV sales share" and r.powertrain == "EV":
            share = r.value
    return sales, share


class EVAdoptionSource(Source):
    slug = "ev-adoption"
    kind = SourceKind.ANNUAL

    async def fetch(self) -> SnapshotPayload:
        this_year = self.now().year
        for year in range(this_year, this_year - LOOKBACK_YEARS - 1, -1):
            try:
                data = await get_json(self.client, IEA_EV_URL, source="IEA", params={"year": year})
            except UpstreamUnavailableError as e:
                logger.debug("IEA has no EV data for %d: %s", year, e.message)
                continue
            sales, share = world_car_sales(parse(EVRecords, data, source="IEA").root)
            if sales > 0 and share > 0:
                return self._payload(sales, share, year)
        raise MalformedResponseError("IEA: no recent world EV data")

    @staticmethod
    def _payload(sales: float, share: float, year: int) -> SnapshotPayload:
        ev = round(sales / 1_000_000)
        # EV sales are ``share`` percent of all new cars
        total = round(ev / (share / 100))
        return SnapshotPayload(
            unit_label="million cars sold",
            dot_value=1,
            total=total,
            categories=(
                Category(key="ev", label="Electric (BEV + PHEV)", value=ev),
                Category(key="ice", label="Internal combustion", value=total - ev),
            ),
            notes=f"IEA Global EV Outlook API ({year}). EV share: {round(share)}%. Auto-refreshed weekly.",
        )
