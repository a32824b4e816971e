"""Unit tests for WatchdogService."""

import asyncio
from datetime import UTC, datetime
from uuid import uuid4

import pytest

from factgrid.domain.dataset.model.aggregate import Dataset
from factgrid.domain.dataset.model.value import RefreshRate
from factgrid.domain.refresh.model.value import RefreshOutcome, RefreshStatus
from factgrid.domain.shared.error import NotFoundError
from factgrid.domain.source.model.registry import ProbeRegistry
from factgrid.domain.watchdog.model.value import WatchdogResult
from factgrid.domain.watchdog.service.watchdog import WatchdogService


def _dataset(slug: str, year: int | None = 2023, rate: RefreshRate = RefreshRate.WEEKLY) -> Dataset:
    return Dataset(id=uuid4(), slug=slug, name=slug, refresh_rate=rate, latest_source_year=year)


class FakeProbe:
    def __init__(self, slug: str, detected: int | None = None, error: str | None = None) -> None:
        self.slug = slug
        self.detected = detected
        self.error = error
        self.seen: list[int | None] = []

    async def check(self, previous_year: int | None) -> WatchdogResult:
        self.seen.append(previous_year)
        changed = self.error is None and self.detected is not None and (
            previous_year is None or self.detected > previous_year
        )
        return WatchdogResult(
            slug=self.slug,
            changed=changed,
            previous_year=previous_year,
            detected_year=self.detected,
            method="fake",
            checked_at=datetime.now(UTC),
            error=self.error,
        )


class RaisingProbe(FakeProbe):
    async def check(self, previous_year: int | None) -> WatchdogResult:
        raise RuntimeError("probe bug")


class HangingProbe(FakeProbe):
    async def check(self, previous_year: int | None) -> WatchdogResult:
        await asyncio.sleep(10)
        raise AssertionError("unreachable")


class FakeRefreshService:
    def __init__(self) -> None:
        self.calls: list[tuple[str, int | None]] = []

    async def refresh_dataset(self, slug: str, *, detected_year: int | None = None) -> RefreshOutcome:
        self.calls.append((slug, detected_year))
        return RefreshOutcome(slug=slug, status=RefreshStatus.REFRESHED, source_year=detected_year)


@pytest.fixture
def refresh() -> FakeRefreshService:
    return FakeRefreshService()


@pytest.fixture
def make_service(dataset_repo, refresh, uow):
    """Build a WatchdogService around the given probes."""

    def _make(*probes, timeout: float = 20.0) -> WatchdogService:
        return WatchdogService(
            datasets=dataset_repo,
            probes=ProbeRegistry({p.slug: p for p in probes}),
            refresh=refresh,
            uow=uow,
            probe_timeout=timeout,
        )

    return _make


class TestRunAllProbes:
    @pytest.mark.asyncio
    async def test_passes_known_year_to_each_probe(self, make_service):
        co2 = FakeProbe("co2-emissions", detected=2023)
        wid = FakeProbe("wealth-inequality", detected=2023)
        service = make_service(co2, wid)

        await service.run_all_probes({"co2-emissions": 2023})

        assert co2.seen == [2023]
        assert wid.seen == [None]

    @pytest.mark.asyncio
    async def test_raising_probe_becomes_error_result(self, make_service):
        service = make_service(RaisingProbe("co2-emissions"), FakeProbe("ev-adoption", detected=2024))

        results = await service.run_all_probes({"co2-emissions": 2023, "ev-adoption": 2023})

        by_slug = {r.slug: r for r in results}
        assert by_slug["co2-emissions"].error == "probe bug"
        assert not by_slug["co2-emissions"].changed
        assert by_slug["ev-adoption"].changed

    @pytest.mark.asyncio
    async def test_hanging_probe_times_out_alone(self, make_service):
        service = make_service(HangingProbe("co2-emissions"), FakeProbe("ev-adoption", detected=2024), timeout=0.05)

        results = await service.run_all_probes({"co2-emissions": 2023, "ev-adoption": 2023})

        by_slug = {r.slug: r for r in results}
        assert "timed out" in by_slug["co2-emissions"].error
        assert by_slug["ev-adoption"].error is None


class TestRun:
    @pytest.mark.asyncio
    async def test_reports_new_data_and_refreshes(self, make_service, dataset_repo, refresh, uow):
        # Arrange
        dataset_repo.put(_dataset("co2-emissions", 2023), _dataset("wealth-inequality", 2023))
        service = make_service(
            FakeProbe("co2-emissions", detected=2024),
            FakeProbe("wealth-inequality", detected=2023),
        )

        # Act
        report = await service.run()

        # Assert
        assert report.summary.total == 2
        assert report.summary.changed == 1
        assert [n.slug for n in report.new_data_available] == ["co2-emissions"]
        assert refresh.calls == [("co2-emissions", 2024)]
        assert report.refreshes[0].status == RefreshStatus.REFRESHED
        assert uow.commits == 1

    @pytest.mark.asyncio
    async def test_marks_every_probed_dataset_checked(self, make_service, dataset_repo):
        dataset_repo.put(_dataset("co2-emissions"), _dataset("ev-adoption"))
        service = make_service(FakeProbe("co2-emissions"), RaisingProbe("ev-adoption"))

        report = await service.run()

        marked, at = dataset_repo.watchdog_marks[0]
        assert sorted(marked) == ["co2-emissions", "ev-adoption"]
        assert at == report.summary.checked_at
        assert dataset_repo.by_slug["ev-adoption"].last_watchdog_at == at

    @pytest.mark.asyncio
    async def test_refresh_can_be_disabled(self, make_service, dataset_repo, refresh):
        dataset_repo.put(_dataset("co2-emissions", 2023))
        service = make_service(FakeProbe("co2-emissions", detected=2024))

        report = await service.run(refresh_changed=False)

        assert report.summary.changed == 1
        assert refresh.calls == []
        assert report.refreshes == ()

    @pytest.mark.asyncio
    async def test_errored_probe_is_not_refreshed(self, make_service, dataset_repo, refresh):
        dataset_repo.put(_dataset("co2-emissions", 2023))
        service = make_service(FakeProbe("co2-emissions", detected=2024, error="rate limited"))

        report = await service.run()

        assert report.summary.errors == 1
        assert refresh.calls == []

    @pytest.mark.asyncio
    async def test_uses_recorded_years_of_watched_datasets_only(self, make_service, dataset_repo):
        dataset_repo.put(_dataset("co2-emissions", 2022, rate=RefreshRate.HOURLY))
        probe = FakeProbe("co2-emissions")
        service = make_service(probe)

        await service.run()

        assert probe.seen == [None]


class TestRunProbe:
    @pytest.mark.asyncio
    async def test_single_probe(self, make_service, dataset_repo):
        dataset_repo.put(_dataset("co2-emissions", 2023))
        service = make_service(FakeProbe("co2-emissions", detected=2024))

        check = await service.run_probe("co2-emissions")

        assert check.probe.changed
        assert check.dataset.slug == "co2-emissions"
        assert check.refresh is None

    @pytest.mark.asyncio
    async def test_single_probe_with_refresh(self, make_service, dataset_repo, refresh):
        dataset_repo.put(_dataset("co2-emissions", 2023))
        service = make_service(FakeProbe("co2-emissions", detected=2024))

        check = await service.run_probe("co2-emissions", refresh_changed=True)

        assert check.refresh is not None
        assert refresh.calls == [("co2-emissions", 2024)]

    @pytest.mark.asyncio
    async def test_dataset_without_probe(self, make_service, dataset_repo):
        dataset_repo.put(_dataset("bitcoin-price", None, rate=RefreshRate.HOURLY))
        service = make_service()

        check = await service.run_probe("bitcoin-price")

        assert not check.probe.changed
        assert check.probe.method == "no probe available"

    @pytest.mark.asyncio
    async def test_raising_probe(self, make_service, dataset_repo):
        dataset_repo.put(_dataset("co2-emissions"))
        service = make_service(RaisingProbe("co2-emissions"))

        check = await service.run_probe("co2-emissions")

        assert check.probe.error == "probe bug"

    @pytest.mark.asyncio
    async def test_unknown_slug_raises(self, make_service):
        with pytest.raises(NotFoundError):
            await make_service().run_probe("nope")
