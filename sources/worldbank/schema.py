import re

from pydantic import BaseModel, field_validator


class CountryRef(BaseModel):
    id: str
    value: str = ""


class IndicatorEntry(BaseModel):
    date: str
    value: float | None = None
    countryiso3code: str = ""
    country: CountryRef | None = None

    @field_validator("date")
    @classmethod
    def _annual(cls, v: str) -> str:
        if not re.fullmatch(r"[0-9]{4}", v):
            raise ValueError(f"expected a four-digit year, got {v!r}")
        return v

    @property
    def year(self) -> int:
        return int(self.date)

    @property
    def code(self) -> str:
        # The world aggregate comes back with an empty ISO3 code
        if self.country is not None and self.country.id == "1W":
            return "WLD"
        return self.countryiso3code
