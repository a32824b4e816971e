from pydantic import BaseModel, RootModel


class AnomalyPoint(BaseModel):
    anomaly: float


class ClimateSeries(BaseModel):
    # "YYYYMM" -> point, oldest first
    data: dict[str, AnomalyPoint] = {}


class SolarObservation(BaseModel):
    ssn: float


class SolarCycle(RootModel[list[SolarObservation]]):
    pass
