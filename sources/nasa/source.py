"""Near-Earth objects making close approaches today, from NASA NeoWs."""

from pydantic import BaseModel

from factgrid.domain.dataset.model.value import SourceKind
from factgrid.sdk import Category, SnapshotPayload, Source, get_json, parse
from sources.nasa.config import NasaConfig

FEED_URL = "https://api.nasa.gov/neo/rest/v1/feed"


class NearEarthObject(BaseModel):
    is_potentially_hazardous_asteroid: bool = False


class NeoFeed(BaseModel):
    near_earth_objects: dict[str, list[NearEarthObject]] = {}


class NearEarthAsteroidsSource(Source):
    slug = "near-earth-asteroids"
    kind = SourceKind.DAILY
    config_class = NasaConfig

    config: NasaConfig

    async def fetch(self) -> SnapshotPayload:
        today = self.now().date().isoformat()
        data = await get_json(
            self.client,
            FEED_URL,
            source="NASA NeoWs",
            params={"start_date": today, "end_date": today, "api_key": self.config.api_key},
        )
        objects = parse(NeoFeed, data, source="NASA NeoWs").near_earth_objects.get(today, [])
        hazardous = sum(1 for o in objects if o.is_potentially_hazardous_asteroid)

        return SnapshotPayload(
            unit_label="asteroids",
            dot_value=1,
            total=len(objects) or 1,
            categories=(
                Category(key="hazardous", label="Potentially Hazardous", value=hazardous),
                Category(key="safe", label="Non-Hazardous", value=len(objects) - hazardous),
            ),
            notes=f"Asteroids making close approaches today ({today}) via NASA NeoWs API.",
        )
