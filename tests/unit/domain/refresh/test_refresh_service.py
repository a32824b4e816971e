"""Unit tests for RefreshService."""

import asyncio
from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from factgrid.domain.dataset.model.aggregate import Dataset
from factgrid.domain.dataset.model.value import RefreshRate, SourceKind
from factgrid.domain.refresh.gate import RateGate
from factgrid.domain.refresh.model.value import RefreshStatus
from factgrid.domain.refresh.service.refresh import RefreshService
from factgrid.domain.shared.error import MalformedResponseError, NotFoundError
from factgrid.domain.snapshot.model.payload import Category, SnapshotPayload
from factgrid.domain.snapshot.service.snapshot import SnapshotService
from factgrid.domain.source.model.registry import SourceRegistry


def _payload(value: float) -> SnapshotPayload:
    return SnapshotPayload(
        unit_label="USD",
        dot_value=1000,
        total=value,
        categories=(Category(key="price", label="Price", value=value),),
    )


def _dataset(slug: str, rate: RefreshRate = RefreshRate.HOURLY, hours_ago: float | None = None) -> Dataset:
    return Dataset(
        id=uuid4(),
        slug=slug,
        name=slug,
        refresh_rate=rate,
        last_refreshed_at=datetime.now(UTC) - timedelta(hours=hours_ago) if hours_ago is not None else None,
    )


class FakeSource:
    kind = SourceKind.REALTIME
    timeout = None

    def __init__(self, slug: str, value: float = 65000.0) -> None:
        self.slug = slug
        self.value = value
        self.calls = 0

    async def fetch(self) -> SnapshotPayload:
        self.calls += 1
        return _payload(self.value)


class FailingSource(FakeSource):
    async def fetch(self) -> SnapshotPayload:
        self.calls += 1
        raise MalformedResponseError("price missing")


class HangingSource(FakeSource):
    timeout = 0.05

    async def fetch(self) -> SnapshotPayload:
        await asyncio.sleep(10)
        raise AssertionError("unreachable")


class BrokenSource(FakeSource):
    async def fetch(self) -> SnapshotPayload:
        raise KeyError("bug")


@pytest.fixture
def make_service(dataset_repo, snapshot_repo, card_repo, uow):
    """Build a RefreshService around the given adapters."""

    def _make(*adapters) -> RefreshService:
        snapshots = SnapshotService(datasets=dataset_repo, snapshots=snapshot_repo, cards=card_repo)
        return RefreshService(
            datasets=dataset_repo,
            sources=SourceRegistry({a.slug: a for a in adapters}),
            snapshots=snapshots,
            uow=uow,
            gate=RateGate(),
        )

    return _make


class TestRefreshAll:
    @pytest.mark.asyncio
    async def test_refreshes_every_automated_dataset(self, make_service, dataset_repo, uow):
        # Arrange
        dataset_repo.put(_dataset("bitcoin-price"), _dataset("ethereum-price"))
        service = make_service(FakeSource("bitcoin-price"), FakeSource("ethereum-price", 3000.0))

        # Act
        report = await service.refresh_all()

        # Assert
        assert report.summary.total == 2
        assert report.summary.refreshed == 2
        assert {o.status for o in report.results} == {RefreshStatus.REFRESHED}
        assert uow.commits == 2

    @pytest.mark.asyncio
    async def test_manual_datasets_are_not_refreshed(self, make_service, dataset_repo):
        dataset_repo.put(_dataset("data-creation", rate=RefreshRate.MANUAL))
        source = FakeSource("data-creation")
        service = make_service(source)

        report = await service.refresh_all()

        assert report.summary.total == 0
        assert source.calls == 0

    @pytest.mark.asyncio
    async def test_recent_dataset_is_skipped(self, make_service, dataset_repo):
        dataset_repo.put(_dataset("bitcoin-price", hours_ago=0.1))
        source = FakeSource("bitcoin-price")
        service = make_service(source)

        report = await service.refresh_all()

        outcome = report.results[0]
        assert outcome.status == RefreshStatus.SKIPPED_TOO_RECENT
        assert outcome.hours_since_refresh == pytest.approx(0.1, abs=0.01)
        assert report.summary.skipped == 1
        assert source.calls == 0

    @pytest.mark.asyncio
    async def test_force_ignores_rate_gate(self, make_service, dataset_repo):
        dataset_repo.put(_dataset("bitcoin-price", hours_ago=0.1))
        source = FakeSource("bitcoin-price")
        service = make_service(source)

        report = await service.refresh_all(force=True)

        assert report.results[0].status == RefreshStatus.REFRESHED
        assert source.calls == 1

    @pytest.mark.asyncio
    async def test_dataset_without_adapter_reports_no_fetcher(self, make_service, dataset_repo):
        dataset_repo.put(_dataset("ships-at-sea", rate=RefreshRate.WEEKLY))
        service = make_service()

        report = await service.refresh_all()

        assert report.results[0].status == RefreshStatus.NO_FETCHER
        assert report.summary.skipped == 1

    @pytest.mark.asyncio
    async def test_failure_is_isolated_to_its_dataset(self, make_service, dataset_repo):
        dataset_repo.put(_dataset("bitcoin-price"), _dataset("ethereum-price"))
        service = make_service(FailingSource("bitcoin-price"), FakeSource("ethereum-price"))

        report = await service.refresh_all()

        by_slug = {o.slug: o for o in report.results}
        assert by_slug["bitcoin-price"].status == RefreshStatus.ERROR
        assert by_slug["bitcoin-price"].error == "price missing"
        assert by_slug["bitcoin-price"].error_code == "MalformedResponseError"
        assert by_slug["ethereum-price"].status == RefreshStatus.REFRESHED
        assert report.summary.errors == 1

    @pytest.mark.asyncio
    async def test_timeout_becomes_error(self, make_service, dataset_repo):
        dataset_repo.put(_dataset("bitcoin-price"))
        service = make_service(HangingSource("bitcoin-price"))

        report = await service.refresh_all()

        assert report.results[0].status == RefreshStatus.ERROR
        assert "timed out" in report.results[0].error

    @pytest.mark.asyncio
    async def test_unexpected_exception_becomes_error(self, make_service, dataset_repo):
        dataset_repo.put(_dataset("bitcoin-price"), _dataset("ethereum-price"))
        service = make_service(BrokenSource("bitcoin-price"), FakeSource("ethereum-price"))

        report = await service.refresh_all()

        assert report.summary.errors == 1
        assert report.summary.refreshed == 1

    @pytest.mark.asyncio
    async def test_identical_content_reports_unchanged(self, make_service, dataset_repo, snapshot_repo):
        dataset_repo.put(_dataset("bitcoin-price"))
        service = make_service(FakeSource("bitcoin-price"))

        await service.refresh_all(force=True)
        report = await service.refresh_all(force=True)

        assert report.results[0].status == RefreshStatus.UNCHANGED
        assert report.summary.unchanged == 1
        assert len(snapshot_repo.rows) == 1


class TestRefreshStorageFailure:
    @pytest.mark.asyncio
    async def test_commit_failure_rolls_back_and_reports_error(self, make_service, dataset_repo, uow):
        async def failing_commit() -> None:
            raise RuntimeError("database is locked")

        uow.commit = failing_commit
        dataset_repo.put(_dataset("bitcoin-price"))
        service = make_service(FakeSource("bitcoin-price"))

        report = await service.refresh_all()

        outcome = report.results[0]
        assert outcome.status == RefreshStatus.ERROR
        assert outcome.error_code == "StorageUnavailableError"
        assert uow.rollbacks == 1


class TestRefreshDataset:
    @pytest.mark.asyncio
    async def test_bypasses_rate_gate(self, make_service, dataset_repo):
        dataset_repo.put(_dataset("bitcoin-price", hours_ago=0.1))
        service = make_service(FakeSource("bitcoin-price"))

        outcome = await service.refresh_dataset("bitcoin-price")

        assert outcome.status == RefreshStatus.REFRESHED
        assert outcome.snapshot_id is not None

    @pytest.mark.asyncio
    async def test_records_detected_year(self, make_service, dataset_repo):
        dataset_repo.put(_dataset("co2-emissions", rate=RefreshRate.WEEKLY))
        service = make_service(FakeSource("co2-emissions", 37.8))

        outcome = await service.refresh_dataset("co2-emissions", detected_year=2024)

        assert outcome.source_year == 2024
        assert dataset_repo.by_slug["co2-emissions"].latest_source_year == 2024

    @pytest.mark.asyncio
    async def test_unknown_slug_raises(self, make_service):
        service = make_service()

        with pytest.raises(NotFoundError):
            await service.refresh_dataset("nope")
