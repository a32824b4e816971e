from typing import Annotated

from pydantic import BaseModel, Field


class DebtRecord(BaseModel):
    # Fiscal Data returns amounts as decimal strings
    record_date: str
    tot_pub_debt_out_amt: float
    debt_held_public_amt: float
    intragov_hold_amt: float


class DebtToPenny(BaseModel):
    data: Annotated[list[DebtRecord], Field(min_length=1)]
