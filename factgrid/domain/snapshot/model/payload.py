import re

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from factgrid.domain.shared.model.value import ValueObject

Number = int | float

_DATA_YEAR = re.compile(r"20[1-9]\d")


class _WireModel(ValueObject):
    # camelCase on the wire, snake_case in Python
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        allow_inf_nan=False,
    )


class Category(_WireModel):
    key: str = Field(min_length=1)
    label: str
    value: Number


class SnapshotPayload(_WireModel):
    """Normalized fact produced by every source adapter.

    Category values should sum to roughly ``total``; adapters fold any
    remainder into a rest/other bucket.
    """

    unit_label: str = Field(min_length=1)
    dot_value: Number = Field(gt=0)
    total: Number
    categories: tuple[Category, ...] = Field(min_length=1)
    notes: str | None = None

    def data_year(self) -> int | None:
        """Highest year between 2010 and 2099 mentioned in the notes."""
        if not self.notes:
            return None
        years = [int(y) for y in _DATA_YEAR.findall(self.notes)]
        return max(years) if years else None

    def category(self, key: str) -> Category | None:
        return next((c for c in self.categories if c.key == key), None)
