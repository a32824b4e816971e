"""Run service calls in-process from CLI commands."""

import asyncio
import logging
import sys
from collections.abc import Awaitable, Callable
from typing import TypeVar

from dishka import AsyncContainer
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncEngine

from factgrid.application.di import create_container
from factgrid.cli.console import get_console
from factgrid.config import Config, configure_logging
from factgrid.infrastructure.persistence.migrate import run_migrations
from factgrid.infrastructure.persistence.seed import seed_catalog
from factgrid.util.di.scope import Scope

T = TypeVar("T")

logger = logging.getLogger(__name__)


def load_config() -> Config:
    """Load config, exiting with a readable message when it is invalid."""
    try:
        # Pydantic Settings populates from env vars at runtime
        return Config()  # type: ignore[call-arg]
    except ValidationError as e:
        console = get_console()
        console.error("Invalid configuration")
        for err in e.errors():
            loc = ".".join(str(x) for x in err.get("loc", []))
            console.print(f"  [dim]{loc}:[/dim] {err.get('msg', 'Unknown error')}")
        sys.exit(1)


def prepare_database(config: Config) -> None:
    if config.database.auto_migrate:
        run_migrations(config.database.url)


def run_in_uow(work: Callable[[AsyncContainer], Awaitable[T]], *, config: Config | None = None) -> T:
    """Migrate, seed, then await ``work`` inside a single UOW scope."""
    config = config or load_config()
    configure_logging(config.logging)
    prepare_database(config)

    async def _main() -> T:
        container = create_container(config)
        try:
            await seed_catalog(await container.get(AsyncEngine))
            async with container(scope=Scope.UOW) as scope:
                return await work(scope)
        finally:
            await container.close()

    return asyncio.run(_main())
