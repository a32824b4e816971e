from typing import List
from uuid import UUID

from sqlalchemy import func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from factgrid.domain.snapshot.model.snapshot import Snapshot
from factgrid.domain.snapshot.port.repository import SnapshotRepository
from factgrid.infrastructure.persistence.mappers.snapshot import row_to_snapshot, snapshot_to_dict
from factgrid.infrastructure.persistence.tables import snapshots_table


class SQLAlchemySnapshotRepository(SnapshotRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, snapshot_id: UUID) -> Snapshot | None:
        stmt = select(snapshots_table).where(snapshots_table.c.id == str(snapshot_id))
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_snapshot(dict(row)) if row else None

    async def add(self, snapshot: Snapshot) -> None:
        await self.session.execute(insert(snapshots_table).values(**snapshot_to_dict(snapshot)))
        await self.session.flush()

    async def list_for_dataset(self, dataset_id: UUID, *, limit: int = 20) -> List[Snapshot]:
        stmt = (
            select(snapshots_table)
            .where(snapshots_table.c.dataset_id == str(dataset_id))
            .order_by(snapshots_table.c.collected_at.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [row_to_snapshot(dict(r)) for r in result.mappings().all()]

    async def count_for_dataset(self, dataset_id: UUID) -> int:
        stmt = select(func.count()).select_from(snapshots_table).where(
            snapshots_table.c.dataset_id == str(dataset_id)
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one())
