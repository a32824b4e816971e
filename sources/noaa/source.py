"""NOAA climate and space weather feeds."""

from factgrid.domain.dataset.model.value import SourceKind
from factgrid.domain.shared.error import MalformedResponseError
from factgrid.sdk import Category, SnapshotPayload, Source, get_json, parse
from sources.noaa.schema import ClimateSeries, SolarCycle

CLIMATE_URL = (
    "https://www.ncei.noaa.gov/access/monitoring/climate-at-a-glance/global/time-series/"
    "globe/land_ocean/1/0/{start}-{end}.json"
)
SOLAR_CYCLE_URL = "https://services.swpc.noaa.gov/json/solar-cycle/observed-solar-cycle-indices.json"

# Warming attributed to the 20th century, in degrees C
PRE_2000_WARMING = 0.6
# Warming accrued 2000-2015 before the recent acceleration
STEADY_WARMING = 0.23


def _period(key: str) -> str:
    return f"{key[:4]}-{key[4:6]}" if len(key) == 6 and key.isdigit() else key


class TemperatureAnomalySource(Source):
    slug = "temperature-anomaly"
    kind = SourceKind.ANNUAL

    async def fetch(self) -> SnapshotPayload:
        this_year = self.now().year
        data = await get_json(
            self.client,
            CLIMATE_URL.format(start=this_year - 2, end=this_year),
            source="NOAA Climate at a Glance",
        )
        series = parse(ClimateSeries, data, source="NOAA Climate at a Glance").data
        if not series:
            raise MalformedResponseError("NOAA Climate at a Glance: no temperature data returned")

        period, latest = list(series.items())[-1]
        anomaly = latest.anomaly
        since_2000 = max(0.0, anomaly - PRE_2000_WARMING - STEADY_WARMING)
        recent = anomaly - PRE_2000_WARMING - since_2000

        return SnapshotPayload(
            unit_label="°C anomaly breakdown",
            dot_value=0.01,
            total=anomaly,
            categories=(
                Category(key="pre_2000", label="Pre-2000 warming", value=PRE_2000_WARMING),
                Category(key="since_2000", label="Since 2000", value=round(since_2000, 2)),
                Category(key="recent_spike", label="Recent acceleration", value=round(recent, 2)),
            ),
            notes=(
                "NOAA Global Land-Ocean Temperature Anomaly relative to 1901-2000 average. "
                f"Latest ({_period(period)}): +{anomaly}°C."
            ),
        )


class SolarActivitySource(Source):
    slug = "solar-activity-today"
    kind = SourceKind.DAILY

    async def fetch(self) -> SnapshotPayload:
        data = await get_json(self.client, SOLAR_CYCLE_URL, source="NOAA SWPC")
        observations = parse(SolarCycle, data, source="NOAA SWPC").root
        if not observations:
            raise MalformedResponseError("NOAA SWPC: no solar cycle observations")

        ssn = round(observations[-1].ssn)
        return SnapshotPayload(
            unit_label="sunspots",
            dot_value=1,
            total=ssn,
            categories=(Category(key="sunspots", label="Active Sunspots today", value=ssn),),
            notes=f"NOAA Space Weather Prediction Center. Latest measured monthly sunspot number: {ssn}.",
        )
