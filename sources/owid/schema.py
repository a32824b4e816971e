from datetime import datetime

from pydantic import BaseModel, RootModel


class YearEntry(BaseModel):
    year: int
    co2: float | None = None


class CountrySeries(BaseModel):
    data: list[YearEntry] = []


class CommitAuthor(BaseModel):
    date: datetime


class CommitDetail(BaseModel):
    message: str
    committer: CommitAuthor


class Commit(BaseModel):
    commit: CommitDetail


class CommitList(RootModel[list[Commit]]):
    pass
