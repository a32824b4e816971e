"""Fixtures for repository tests on an in-memory SQLite database."""

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from factgrid.config import Config, DatabaseConfig
from factgrid.infrastructure.persistence.database import create_db_engine, create_session_factory
from factgrid.infrastructure.persistence.seed import seed_catalog
from factgrid.infrastructure.persistence.tables import metadata


@pytest_asyncio.fixture
async def engine():
    """Per-test engine with all tables created."""
    config = Config(database=DatabaseConfig(url="sqlite+aiosqlite:///:memory:"))
    engine = create_db_engine(config)
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine: AsyncEngine):
    """Per-test session, rolled back afterwards."""
    factory = create_session_factory(engine)
    async with factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def seeded_session(engine: AsyncEngine, session: AsyncSession) -> AsyncSession:
    """Session over a database seeded with the full catalog."""
    await seed_catalog(engine)
    return session
