from pydantic import BaseModel, RootModel


class EVRecord(BaseModel):
    region: str
    mode: str
    parameter: str
    powertrain: str
    value: float


class EVRecords(RootModel[list[EVRecord]]):
    pass
