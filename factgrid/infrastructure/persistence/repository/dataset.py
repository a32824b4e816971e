from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any, List
from uuid import UUID

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from factgrid.domain.dataset.model.aggregate import Dataset
from factgrid.domain.dataset.model.value import RefreshRate
from factgrid.domain.dataset.port.repository import DatasetRepository
from factgrid.infrastructure.persistence.mappers.dataset import dataset_to_dict, row_to_dataset
from factgrid.infrastructure.persistence.tables import datasets_table


class SQLAlchemyDatasetRepository(DatasetRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, slug: str) -> Dataset | None:
        stmt = select(datasets_table).where(datasets_table.c.slug == slug)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_dataset(dict(row)) if row else None

    async def list(self, *, rates: Iterable[RefreshRate] | None = None) -> List[Dataset]:
        stmt = select(datasets_table).order_by(datasets_table.c.slug)
        if rates is not None:
            stmt = stmt.where(datasets_table.c.refresh_rate.in_([r.value for r in rates]))
        result = await self.session.execute(stmt)
        return [row_to_dataset(dict(r)) for r in result.mappings().all()]

    async def add(self, dataset: Dataset) -> bool:
        exists = await self.session.execute(
            select(datasets_table.c.id).where(datasets_table.c.slug == dataset.slug)
        )
        if exists.first() is not None:
            return False
        row = dataset_to_dict(dataset)
        row["created_at"] = datetime.now(UTC)
        await self.session.execute(insert(datasets_table).values(**row))
        await self.session.flush()
        return True

    async def touch_refreshed(
        self, dataset_id: UUID, at: datetime, *, source_year: int | None = None
    ) -> None:
        values: dict[str, Any] = {"last_refreshed_at": at}
        if source_year is not None:
            values["latest_source_year"] = source_year
        await self._update(dataset_id, values)

    async def point_to_snapshot(
        self,
        dataset_id: UUID,
        snapshot_id: UUID,
        refreshed_at: datetime,
        *,
        source_year: int | None = None,
    ) -> None:
        values: dict[str, Any] = {
            "latest_snapshot_id": str(snapshot_id),
            "last_refreshed_at": refreshed_at,
        }
        if source_year is not None:
            values["latest_source_year"] = source_year
        await self._update(dataset_id, values)

    async def set_source_year(self, dataset_id: UUID, year: int) -> None:
        await self._update(dataset_id, {"latest_source_year": year})

    async def mark_watchdog_checked(self, slugs: Iterable[str], at: datetime) -> int:
        slug_list = list(slugs)
        if not slug_list:
            return 0
        stmt = (
            update(datasets_table)
            .where(datasets_table.c.slug.in_(slug_list))
            .values(last_watchdog_at=at)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount or 0

    async def _update(self, dataset_id: UUID, values: dict[str, Any]) -> None:
        stmt = update(datasets_table).where(datasets_table.c.id == str(dataset_id)).values(**values)
        await self.session.execute(stmt)
        await self.session.flush()
