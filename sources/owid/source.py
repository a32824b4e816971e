"""Annual datasets published by Our World in Data."""

import csv
import io
from typing import Any

from factgrid.domain.dataset.model.value import SourceKind
from factgrid.domain.shared.error import MalformedResponseError
from factgrid.sdk import Category, SnapshotPayload, Source, get_json, get_text, parse
from sources.owid.schema import CountrySeries

CO2_URL = "https://owid-public.owid.io/data/co2/owid-co2-data.json"
ENERGY_CSV_URL = "https://raw.githubusercontent.com/owid/energy-data/master/owid-energy-data.csv"

# display key -> (OWID country name, label)
EMITTERS = {
    "china": ("China", "China"),
    "us": ("United States", "United States"),
    "india": ("India", "India"),
    "eu": ("European Union (27)", "EU-27"),
}

# category key -> (CSV column, label), in display order
ELECTRICITY_MIX = {
    "coal": ("coal_share_elec", "Coal"),
    "gas": ("gas_share_elec", "Natural gas"),
    "oil": ("oil_share_elec", "Oil"),
    "nuclear": ("nuclear_share_elec", "Nuclear"),
    "hydro": ("hydro_share_elec", "Hydropower"),
    "wind": ("wind_share_elec", "Wind"),
    "solar": ("solar_share_elec", "Solar"),
    "other_renew": ("other_renewables_share_elec", "Bio & other renewables"),
}


def _to_gt(mt: float) -> float:
    """Megatonnes to gigatonnes, one decimal."""
    return round(mt / 100) / 10


def latest_emissions(data: dict[str, Any], country: str) -> tuple[float, int]:
    """Most recent positive CO2 figure for ``country`` as (Mt, year)."""
    series = parse(CountrySeries, data.get(country, {}), source="OWID CO2")
    for entry in reversed(series.data):
        if entry.co2 is not None and entry.co2 > 0:
            return entry.co2, entry.year
    raise MalformedResponseError(f"OWID CO2: no emissions recorded for {country}")


class CO2EmissionsSource(Source):
    slug = "co2-emissions"
    kind = SourceKind.ANNUAL
    # The full OWID dump is tens of megabytes
    timeout = 120.0

    async def fetch(self) -> SnapshotPayload:
        data = await get_json(self.client, CO2_URL, source="OWID CO2")
        if not isinstance(data, dict):
            raise MalformedResponseError("OWID CO2: expected an object keyed by country")

        world, year = latest_emissions(data, "World")
        emitters = {key: latest_emissions(data, name)[0] for key, (name, _) in EMITTERS.items()}
        rest = max(0.0, world - sum(emitters.values()))

        categories = [
            Category(key=key, label=label, value=_to_gt(emitters[key]))
            for key, (_, label) in EMITTERS.items()
        ]
        categories.append(Category(key="rest", label="Rest of world", value=_to_gt(rest)))

        return SnapshotPayload(
            unit_label="billion tonnes CO₂/year",
            dot_value=0.4,
            total=_to_gt(world),
            categories=tuple(categories),
            notes=f"Global Carbon Project via OWID ({year}). Auto-refreshed weekly.",
        )


def latest_world_mix(text: str) -> tuple[int, dict[str, str]]:
    """Newest World row that has a positive coal share."""
    latest: tuple[int, dict[str, str]] | None = None
    for row in csv.DictReader(io.StringIO(text)):
        if (row.get("country") or "").strip() != "World":
            continue
        try:
            year = int(row["year"])
            coal = float(row.get("coal_share_elec") or 0)
        except (KeyError, ValueError):
            continue
        if coal > 0 and (latest is None or year > latest[0]):
            latest = (year, row)
    if latest is None:
        raise MalformedResponseError("OWID energy: no World electricity mix in CSV")
    return latest


class RenewableEnergySource(Source):
    slug = "renewable-energy"
    kind = SourceKind.ANNUAL
    timeout = 120.0

    async def fetch(self) -> SnapshotPayload:
        text = await get_text(self.client, ENERGY_CSV_URL, source="OWID energy")
        year, row = latest_world_mix(text)

        shares: dict[str, int] = {}
        for key, (column, _) in ELECTRICITY_MIX.items():
            try:
                shares[key] = round(float(row.get(column) or 0))
            except ValueError:
                shares[key] = 0
        # Rounding drift goes to the catch-all bucket so shares total 100
        shares["other_renew"] += 100 - sum(shares.values())

        return SnapshotPayload(
            unit_label="% of global electricity",
            dot_value=1,
            total=100,
            categories=tuple(
                Category(key=key, label=label, value=shares[key])
                for key, (_, label) in ELECTRICITY_MIX.items()
            ),
            notes=(
                f"OWID Energy Data ({year}), sourced from Ember & Energy Institute. "
                "Auto-refreshed weekly."
            ),
        )
