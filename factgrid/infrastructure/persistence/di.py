from typing import AsyncIterable

from dishka import provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from factgrid.config import Config
from factgrid.domain.dataset.port.repository import DatasetRepository
from factgrid.domain.shared.port import UnitOfWork
from factgrid.domain.snapshot.port.repository import CardRepository, SnapshotRepository
from factgrid.infrastructure.persistence.database import create_db_engine, create_session_factory
from factgrid.infrastructure.persistence.repository.card import SQLAlchemyCardRepository
from factgrid.infrastructure.persistence.repository.dataset import SQLAlchemyDatasetRepository
from factgrid.infrastructure.persistence.repository.snapshot import SQLAlchemySnapshotRepository
from factgrid.infrastructure.persistence.uow import SQLAlchemyUnitOfWork
from factgrid.util.di.base import Provider
from factgrid.util.di.scope import Scope


class PersistenceProvider(Provider):
    # APP-scoped factories
    @provide(scope=Scope.APP)
    async def get_engine(self, config: Config) -> AsyncIterable[AsyncEngine]:
        engine = create_db_engine(config)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(self, engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    # UOW-scoped session (one per unit of work)
    @provide(scope=Scope.UOW)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterable[AsyncSession]:
        async with session_factory() as session:
            yield session
            await session.commit()

    # UOW-scoped repositories
    dataset_repo = provide(SQLAlchemyDatasetRepository, scope=Scope.UOW, provides=DatasetRepository)
    snapshot_repo = provide(SQLAlchemySnapshotRepository, scope=Scope.UOW, provides=SnapshotRepository)
    card_repo = provide(SQLAlchemyCardRepository, scope=Scope.UOW, provides=CardRepository)
    uow = provide(SQLAlchemyUnitOfWork, scope=Scope.UOW, provides=UnitOfWork)
