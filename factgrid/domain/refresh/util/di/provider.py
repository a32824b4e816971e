from dishka import provide

from factgrid.config import Config
from factgrid.domain.dataset.port.repository import DatasetRepository
from factgrid.domain.refresh.gate import RateGate
from factgrid.domain.refresh.schedule.refresh_schedule import RefreshSchedule
from factgrid.domain.refresh.service.refresh import RefreshService
from factgrid.domain.shared.port import UnitOfWork
from factgrid.domain.snapshot.service.snapshot import SnapshotService
from factgrid.domain.source.model.registry import SourceRegistry
from factgrid.util.di.base import Provider
from factgrid.util.di.scope import Scope


class RefreshProvider(Provider):
    @provide(scope=Scope.APP)
    def get_rate_gate(self, config: Config) -> RateGate:
        return RateGate(min_hours=dict(config.refresh.min_hours))

    snapshot_service = provide(SnapshotService, scope=Scope.UOW)

    @provide(scope=Scope.UOW)
    def get_refresh_service(
        self,
        datasets: DatasetRepository,
        sources: SourceRegistry,
        snapshots: SnapshotService,
        uow: UnitOfWork,
        gate: RateGate,
        config: Config,
    ) -> RefreshService:
        return RefreshService(
            datasets=datasets,
            sources=sources,
            snapshots=snapshots,
            uow=uow,
            gate=gate,
            fetch_timeout=config.refresh.fetch_timeout,
        )

    refresh_schedule = provide(RefreshSchedule, scope=Scope.UOW)
