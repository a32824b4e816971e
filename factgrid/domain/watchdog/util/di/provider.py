from dishka import provide

from factgrid.config import Config
from factgrid.domain.dataset.port.repository import DatasetRepository
from factgrid.domain.refresh.service.refresh import RefreshService
from factgrid.domain.shared.port import UnitOfWork
from factgrid.domain.source.model.registry import ProbeRegistry
from factgrid.domain.watchdog.schedule.watchdog_schedule import WatchdogSchedule
from factgrid.domain.watchdog.service.watchdog import WatchdogService
from factgrid.util.di.base import Provider
from factgrid.util.di.scope import Scope


class WatchdogProvider(Provider):
    @provide(scope=Scope.UOW)
    def get_watchdog_service(
        self,
        datasets: DatasetRepository,
        probes: ProbeRegistry,
        refresh: RefreshService,
        uow: UnitOfWork,
        config: Config,
    ) -> WatchdogService:
        return WatchdogService(
            datasets=datasets,
            probes=probes,
            refresh=refresh,
            uow=uow,
            probe_timeout=config.watchdog.probe_timeout,
            watched_rates=tuple(config.watchdog.watched_rates),
        )

    watchdog_schedule = provide(WatchdogSchedule, scope=Scope.UOW)
