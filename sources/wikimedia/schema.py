from pydantic import BaseModel, Field


class PageviewItem(BaseModel):
    views: int


class PageviewAggregate(BaseModel):
    # An empty list means the day has not been published yet
    items: list[PageviewItem] = Field(min_length=1)

    @property
    def views(self) -> int:
        return self.items[0].views
