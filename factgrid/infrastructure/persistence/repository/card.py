from uuid import UUID

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from factgrid.domain.snapshot.port.repository import CardRepository
from factgrid.infrastructure.persistence.tables import cards_table


class SQLAlchemyCardRepository(CardRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def repoint(self, dataset_id: UUID, snapshot_id: UUID) -> int:
        stmt = (
            update(cards_table)
            .where(cards_table.c.dataset_id == str(dataset_id))
            .values(snapshot_id=str(snapshot_id))
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount or 0
