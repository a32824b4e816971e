"""Database maintenance commands."""

import asyncio

from sqlalchemy.ext.asyncio import AsyncEngine

from factgrid.application.di import create_container
from factgrid.cli.console import get_console
from factgrid.cli.util.runtime import load_config
from factgrid.infrastructure.persistence.migrate import run_migrations
from factgrid.infrastructure.persistence.seed import seed_catalog


def migrate() -> None:
    """Apply pending schema migrations."""
    config = load_config()
    run_migrations(config.database.url)
    get_console().success("Database is up to date")


def seed() -> None:
    """Insert catalog datasets and cards that are missing. Safe to re-run."""
    config = load_config()
    run_migrations(config.database.url)

    async def _seed() -> int:
        container = create_container(config)
        try:
            return await seed_catalog(await container.get(AsyncEngine))
        finally:
            await container.close()

    inserted = asyncio.run(_seed())
    get_console().success(f"Seeded {inserted} new dataset{'s' if inserted != 1 else ''}")
