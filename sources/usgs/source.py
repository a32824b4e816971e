"""Earthquakes of magnitude 2.5 and above in the last 24 hours, from USGS."""

from datetime import timedelta

from pydantic import BaseModel

from factgrid.domain.dataset.model.value import SourceKind
from factgrid.sdk import Category, SnapshotPayload, Source, get_json, parse

QUERY_URL = "https://earthquake.usgs.gov/fdsnws/event/1/query"
MIN_MAGNITUDE = 2.5


class QuakeProperties(BaseModel):
    mag: float | None = None


class QuakeFeature(BaseModel):
    properties: QuakeProperties = QuakeProperties()


class QuakeCollection(BaseModel):
    features: list[QuakeFeature] = []


class GlobalEarthquakesSource(Source):
    slug = "global-earthquakes"
    kind = SourceKind.REALTIME

    async def fetch(self) -> SnapshotPayload:
        end = self.now()
        data = await get_json(
            self.client,
            QUERY_URL,
            source="USGS",
            params={
                "format": "geojson",
                "starttime": (end - timedelta(hours=24)).isoformat(),
                "endtime": end.isoformat(),
                "minmagnitude": MIN_MAGNITUDE,
            },
        )
        features = parse(QuakeCollection, data, source="USGS").features

        major = moderate = minor = 0
        for f in features:
            mag = f.properties.mag or 0
            if mag >= 6.0:
                major += 1
            elif mag >= 4.5:
                moderate += 1
            else:
                minor += 1

        return SnapshotPayload(
            unit_label="earthquakes",
            dot_value=1,
            # A quiet day still renders one dot
            total=len(features) or 1,
            categories=(
                Category(key="major", label="Major (6.0+)", value=major),
                Category(key="moderate", label="Moderate (4.5-5.9)", value=moderate),
                Category(key="minor", label="Minor (2.5-4.4)", value=minor),
            ),
            notes="Global earthquakes (M2.5+) in the last 24h via USGS GeoJSON API.",
        )
