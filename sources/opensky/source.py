"""Airborne flights right now from the OpenSky Network."""

from typing import Any

from pydantic import BaseModel

from factgrid.domain.dataset.model.value import SourceKind
from factgrid.sdk import Category, SnapshotPayload, Source, get_json, parse

STATES_URL = "https://opensky-network.org/api/states/all"

# Position of the ADS-B emitter category in a state vector
CATEGORY_INDEX = 17
# Large, high-vortex large and heavy aircraft
COMMERCIAL_CATEGORIES = range(4, 7)


class StateVectors(BaseModel):
    states: list[list[Any]] | None = None


def is_commercial(state: list[Any]) -> bool:
    if len(state) <= CATEGORY_INDEX:
        return False
    category = state[CATEGORY_INDEX]
    return isinstance(category, int) and category in COMMERCIAL_CATEGORIES


class GlobalFlightsSource(Source):
    slug = "global-flights"
    kind = SourceKind.REALTIME

    async def fetch(self) -> SnapshotPayload:
        data = await get_json(self.client, STATES_URL, source="OpenSky")
        states = parse(StateVectors, data, source="OpenSky").states or []
        commercial = sum(1 for s in states if is_commercial(s))
        stamp = self.now().strftime("%Y-%m-%dT%H:%M")
        return SnapshotPayload(
            unit_label="airborne flights",
            dot_value=100,
            total=len(states),
            categories=(
                Category(key="commercial", label="Commercial (Large/Heavy)", value=commercial),
                Category(key="other", label="General/Light Aviation", value=len(states) - commercial),
            ),
            notes=(
                f"Live ADS-B flight count as of {stamp} UTC via OpenSky Network. "
                "Classified by ADS-B emitter category."
            ),
        )
