"""In-memory fakes for the domain ports."""

from collections.abc import Iterable
from datetime import datetime
from typing import List
from uuid import UUID

import pytest

from factgrid.domain.dataset.model.aggregate import Dataset
from factgrid.domain.dataset.model.value import RefreshRate
from factgrid.domain.snapshot.model.snapshot import Snapshot


class FakeDatasetRepository:
    def __init__(self, datasets: Iterable[Dataset] = ()) -> None:
        self.by_slug: dict[str, Dataset] = {d.slug: d for d in datasets}
        self.watchdog_marks: list[tuple[list[str], datetime]] = []

    def put(self, *datasets: Dataset) -> None:
        for d in datasets:
            self.by_slug[d.slug] = d

    def _by_id(self, dataset_id: UUID) -> Dataset:
        return next(d for d in self.by_slug.values() if d.id == dataset_id)

    def _update(self, dataset_id: UUID, **values) -> None:
        current = self._by_id(dataset_id)
        self.by_slug[current.slug] = current.model_copy(update=values)

    async def get(self, slug: str) -> Dataset | None:
        return self.by_slug.get(slug)

    async def list(self, *, rates: Iterable[RefreshRate] | None = None) -> List[Dataset]:
        wanted = set(rates) if rates is not None else None
        return sorted(
            (d for d in self.by_slug.values() if wanted is None or d.refresh_rate in wanted),
            key=lambda d: d.slug,
        )

    async def add(self, dataset: Dataset) -> bool:
        if dataset.slug in self.by_slug:
            return False
        self.by_slug[dataset.slug] = dataset
        return True

    async def touch_refreshed(self, dataset_id: UUID, at: datetime, *, source_year: int | None = None) -> None:
        values: dict = {"last_refreshed_at": at}
        if source_year is not None:
            values["latest_source_year"] = source_year
        self._update(dataset_id, **values)

    async def point_to_snapshot(
        self,
        dataset_id: UUID,
        snapshot_id: UUID,
        refreshed_at: datetime,
        *,
        source_year: int | None = None,
    ) -> None:
        values: dict = {"latest_snapshot_id": snapshot_id, "last_refreshed_at": refreshed_at}
        if source_year is not None:
            values["latest_source_year"] = source_year
        self._update(dataset_id, **values)

    async def set_source_year(self, dataset_id: UUID, year: int) -> None:
        self._update(dataset_id, latest_source_year=year)

    async def mark_watchdog_checked(self, slugs: Iterable[str], at: datetime) -> int:
        slug_list = [s for s in slugs if s in self.by_slug]
        self.watchdog_marks.append((slug_list, at))
        for slug in slug_list:
            self.by_slug[slug] = self.by_slug[slug].model_copy(update={"last_watchdog_at": at})
        return len(slug_list)


class FakeSnapshotRepository:
    def __init__(self) -> None:
        self.rows: dict[UUID, Snapshot] = {}

    async def get(self, snapshot_id: UUID) -> Snapshot | None:
        return self.rows.get(snapshot_id)

    async def add(self, snapshot: Snapshot) -> None:
        self.rows[snapshot.id] = snapshot

    async def list_for_dataset(self, dataset_id: UUID, *, limit: int = 20) -> List[Snapshot]:
        rows = [s for s in self.rows.values() if s.dataset_id == dataset_id]
        return sorted(rows, key=lambda s: s.collected_at, reverse=True)[:limit]

    async def count_for_dataset(self, dataset_id: UUID) -> int:
        return sum(1 for s in self.rows.values() if s.dataset_id == dataset_id)


class FakeCardRepository:
    def __init__(self, cards_per_dataset: int = 1) -> None:
        self.cards_per_dataset = cards_per_dataset
        self.pointers: dict[UUID, UUID] = {}

    async def repoint(self, dataset_id: UUID, snapshot_id: UUID) -> int:
        self.pointers[dataset_id] = snapshot_id
        return self.cards_per_dataset


class FakeUnitOfWork:
    def __init__(self) -> None:
        self.commits = 0
        self.rollbacks = 0

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        self.rollbacks += 1


@pytest.fixture
def dataset_repo() -> FakeDatasetRepository:
    """Empty in-memory dataset repository."""
    return FakeDatasetRepository()


@pytest.fixture
def snapshot_repo() -> FakeSnapshotRepository:
    return FakeSnapshotRepository()


@pytest.fixture
def card_repo() -> FakeCardRepository:
    return FakeCardRepository()


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Unit of work that only counts commits and rollbacks."""
    return FakeUnitOfWork()
