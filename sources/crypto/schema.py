from typing import Annotated

from pydantic import BaseModel, Field, RootModel


class CoinGeckoQuote(BaseModel):
    usd: float = Field(gt=0)
    usd_24h_change: float | None = None


class CoinGeckoPrices(RootModel[dict[str, CoinGeckoQuote]]):
    pass


class CoinloreTicker(BaseModel):
    # Coinlore sends numbers as strings
    price_usd: float = Field(gt=0)
    percent_change_24h: float | None = None


class CoinloreTickers(RootModel[Annotated[list[CoinloreTicker], Field(min_length=1)]]):
    pass


class CoinDeskRate(BaseModel):
    rate_float: float = Field(gt=0)


class CoinDeskBpi(BaseModel):
    USD: CoinDeskRate


class CoinDeskPrice(BaseModel):
    bpi: CoinDeskBpi
