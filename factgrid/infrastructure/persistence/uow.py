from sqlalchemy.ext.asyncio import AsyncSession

from factgrid.domain.shared.port import UnitOfWork


class SQLAlchemyUnitOfWork(UnitOfWork):
    """Commits the UOW-scoped session that the repositories share."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()
