"""Fixtures for exercising the v1 routes against mocked services."""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from dishka import from_context, make_async_container
from fastapi.testclient import TestClient

from factgrid.application.api.rest.app import create_app
from factgrid.application.api.v1.guard import ApiProvider
from factgrid.application.di import AppProvider
from factgrid.cli.util.paths import FactGridPaths
from factgrid.config import Config, DatabaseConfig, TriggersConfig
from factgrid.domain.dataset.model.value import SourceKind
from factgrid.domain.dataset.port.repository import DatasetRepository
from factgrid.domain.refresh.service.refresh import RefreshService
from factgrid.domain.snapshot.port.repository import SnapshotRepository
from factgrid.domain.source.model.registry import ProbeRegistry, SourceRegistry
from factgrid.domain.watchdog.service.watchdog import WatchdogService
from factgrid.util.di.base import Provider
from factgrid.util.di.scope import Scope

SECRET = "test-trigger-secret"


class StubProvider(Provider):
    """Serves test doubles from the container context."""

    refresh = from_context(provides=RefreshService, scope=Scope.APP)
    watchdog = from_context(provides=WatchdogService, scope=Scope.APP)
    datasets = from_context(provides=DatasetRepository, scope=Scope.APP)
    snapshots = from_context(provides=SnapshotRepository, scope=Scope.APP)
    sources = from_context(provides=SourceRegistry, scope=Scope.APP)
    probes = from_context(provides=ProbeRegistry, scope=Scope.APP)


@pytest.fixture
def config() -> Config:
    return Config(
        database=DatabaseConfig(url="sqlite+aiosqlite:///:memory:"),
        triggers=TriggersConfig(cron_secret=SECRET, enabled=False),
    )


@pytest.fixture
def refresh_service() -> AsyncMock:
    return AsyncMock(spec=RefreshService)


@pytest.fixture
def watchdog_service() -> AsyncMock:
    return AsyncMock(spec=WatchdogService)


@pytest.fixture
def dataset_repo() -> AsyncMock:
    return AsyncMock(spec=DatasetRepository)


@pytest.fixture
def snapshot_repo() -> AsyncMock:
    return AsyncMock(spec=SnapshotRepository)


@pytest.fixture
def sources() -> SourceRegistry:
    return SourceRegistry(
        {
            "bitcoin-price": SimpleNamespace(kind=SourceKind.REALTIME),
            "co2-emissions": SimpleNamespace(kind=SourceKind.ANNUAL),
        }
    )


@pytest.fixture
def probes() -> ProbeRegistry:
    return ProbeRegistry({"co2-emissions": SimpleNamespace()})


@pytest.fixture
def client(config, refresh_service, watchdog_service, dataset_repo, snapshot_repo, sources, probes):
    """TestClient over the real app wiring with mocked services.

    The client is not entered as a context manager, so the lifespan (seeding
    and the scheduler) never runs.
    """
    container = make_async_container(
        AppProvider(),
        ApiProvider(),
        StubProvider(),
        context={
            Config: config,
            FactGridPaths: FactGridPaths(),
            RefreshService: refresh_service,
            WatchdogService: watchdog_service,
            DatasetRepository: dataset_repo,
            SnapshotRepository: snapshot_repo,
            SourceRegistry: sources,
            ProbeRegistry: probes,
        },
        scopes=Scope,  # type: ignore[arg-type]
    )
    app = create_app(config, container)
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def auth() -> dict[str, str]:
    return {"Authorization": f"Bearer {SECRET}"}
