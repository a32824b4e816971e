import logging
from contextlib import asynccontextmanager

import logfire
from dishka import AsyncContainer
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncEngine

from factgrid.application.api.v1.errors import map_factgrid_error
from factgrid.application.api.v1.routes import datasets, health, refresh, watchdog
from factgrid.application.di import create_container
from factgrid.config import Config, configure_logging
from factgrid.domain.shared.error import FactGridError
from factgrid.infrastructure.persistence.seed import seed_catalog
from factgrid.infrastructure.scheduler.worker import SchedulerPool
from factgrid.util.di.fastapi import setup_dishka

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    container = app.state.dishka_container
    config = await container.get(Config)

    # Tracking rows must exist before any trigger can fire
    engine = await container.get(AsyncEngine)
    inserted = await seed_catalog(engine)
    if inserted:
        logger.info("Seeded %d datasets", inserted)

    if config.triggers.enabled:
        pool = await container.get(SchedulerPool)
        async with pool:
            yield
    else:
        logger.info("Scheduled triggers disabled; on-demand routes only")
        yield

    await container.close()


def create_app(config: Config | None = None, container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Used as a uvicorn factory (``factgrid serve``); tests pass their own
    config or container.
    """
    if config is None:
        # Pydantic Settings populates from env vars at runtime
        config = Config()  # type: ignore[call-arg]

    # Configure logging early
    configure_logging(config.logging)
    logger.info("Starting %s server v%s", config.server.name, config.server.version)

    app_instance = FastAPI(
        title=config.server.name,
        description=config.server.description,
        version=config.server.version,
        lifespan=lifespan,
    )

    # Instrument FastAPI and outbound upstream calls for tracing
    logfire.instrument_httpx()
    logfire.instrument_fastapi(app_instance)

    # Setup dependency injection
    if container is None:
        container = create_container(config)
    setup_dishka(container, app_instance)

    app_instance.include_router(health.router, prefix="/api/v1")
    app_instance.include_router(refresh.router, prefix="/api/v1")
    app_instance.include_router(watchdog.router, prefix="/api/v1")
    app_instance.include_router(datasets.router, prefix="/api/v1")

    # Domain and infrastructure errors -> HTTP responses
    @app_instance.exception_handler(FactGridError)
    async def factgrid_error_handler(request: Request, exc: FactGridError):
        http_exc = map_factgrid_error(exc)
        return JSONResponse(
            status_code=http_exc.status_code,
            content=http_exc.detail,
            headers=http_exc.headers,
        )

    @app_instance.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(
            "Unhandled exception on %s %s",
            request.method,
            request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )

    return app_instance
