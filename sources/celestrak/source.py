"""Active satellites in orbit from the CelesTrak GP catalog."""

from pydantic import BaseModel, Field, RootModel

from factgrid.domain.dataset.model.value import SourceKind
from factgrid.sdk import Category, SnapshotPayload, Source, get_json, parse

GP_URL = "https://celestrak.org/NORAD/elements/gp.php"

COMMERCIAL_OPERATORS = (
    "ONEWEB",
    "IRIDIUM",
    "GLOBALSTAR",
    "ORBCOMM",
    "PLANET",
    "SPIRE",
    "SWARM",
    "LEMUR",
    "FLOCK",
    "DOVE",
    "SKYSAT",
)


class OrbitalElements(BaseModel):
    object_name: str = Field(default="", alias="OBJECT_NAME")


class ActiveGroup(RootModel[list[OrbitalElements]]):
    pass


def classify(name: str) -> str:
    """Bucket a satellite by its catalog name."""
    name = name.upper()
    if "STARLINK" in name:
        return "starlink"
    if any(operator in name for operator in COMMERCIAL_OPERATORS):
        return "other_commercial"
    return "government"


class ActiveSatellitesSource(Source):
    slug = "active-satellites"
    kind = SourceKind.DAILY

    async def fetch(self) -> SnapshotPayload:
        data = await get_json(
            self.client, GP_URL, source="CelesTrak", params={"GROUP": "active", "FORMAT": "JSON"}
        )
        satellites = parse(ActiveGroup, data, source="CelesTrak").root

        counts = {"starlink": 0, "other_commercial": 0, "government": 0}
        for sat in satellites:
            counts[classify(sat.object_name)] += 1

        return SnapshotPayload(
            unit_label="satellites",
            dot_value=100,
            total=len(satellites),
            categories=(
                Category(key="starlink", label="Starlink", value=counts["starlink"]),
                Category(key="other_commercial", label="Other Commercial", value=counts["other_commercial"]),
                Category(key="government", label="Government & Other", value=counts["government"]),
            ),
            notes=(
                "Live active satellite count from CelesTrak GP API. "
                f"{len(satellites):,} active satellites tracked."
            ),
        )
