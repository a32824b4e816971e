from dishka import AsyncContainer, from_context, make_async_container

from factgrid.application.api.v1.guard import ApiProvider
from factgrid.cli.util.paths import FactGridPaths
from factgrid.config import Config
from factgrid.domain.refresh.util.di import RefreshProvider
from factgrid.domain.watchdog.util.di import WatchdogProvider
from factgrid.infrastructure.http import HttpProvider
from factgrid.infrastructure.persistence import PersistenceProvider
from factgrid.infrastructure.scheduler.di import SchedulerProvider
from factgrid.infrastructure.source.di import SourceProvider
from factgrid.util.di.base import Provider
from factgrid.util.di.scope import Scope


class AppProvider(Provider):
    config = from_context(provides=Config, scope=Scope.APP)
    paths = from_context(provides=FactGridPaths, scope=Scope.APP)


def create_container(config: Config | None = None) -> AsyncContainer:
    # Pydantic Settings populates from env vars at runtime
    if config is None:
        config = Config()  # type: ignore[call-arg]

    # FactGridPaths reads FACTGRID_DATA_DIR from environment automatically
    paths = FactGridPaths()

    return make_async_container(
        AppProvider(),
        PersistenceProvider(),
        HttpProvider(),
        SourceProvider(),
        RefreshProvider(),
        WatchdogProvider(),
        SchedulerProvider(),
        ApiProvider(),
        context={Config: config, FactGridPaths: paths},
        scopes=Scope,  # type: ignore[arg-type]  # Custom scope class
    )
