from __future__ import annotations

from abc import abstractmethod
from collections.abc import Iterable
from datetime import datetime
from typing import List, Protocol
from uuid import UUID

from factgrid.domain.dataset.model.aggregate import Dataset
from factgrid.domain.dataset.model.value import RefreshRate
from factgrid.domain.shared.port import Port


class DatasetRepository(Port, Protocol):
    """Reads and targeted writes on dataset tracking records.

    Writes touch only the fields they name; concurrent writers are
    last-write-wins per field.
    """

    @abstractmethod
    async def get(self, slug: str) -> Dataset | None: ...

    @abstractmethod
    async def list(self, *, rates: Iterable[RefreshRate] | None = None) -> List[Dataset]: ...

    @abstractmethod
    async def add(self, dataset: Dataset) -> bool:
        """Insert a dataset unless the slug already exists. Returns True if inserted."""
        ...

    @abstractmethod
    async def touch_refreshed(
        self, dataset_id: UUID, at: datetime, *, source_year: int | None = None
    ) -> None:
        """Bump last_refreshed_at, and latest_source_year when given."""
        ...

    @abstractmethod
    async def point_to_snapshot(
        self,
        dataset_id: UUID,
        snapshot_id: UUID,
        refreshed_at: datetime,
        *,
        source_year: int | None = None,
    ) -> None: ...

    @abstractmethod
    async def set_source_year(self, dataset_id: UUID, year: int) -> None:
        """Overwrite latest_source_year unconditionally (explicit correction)."""
        ...

    @abstractmethod
    async def mark_watchdog_checked(self, slugs: Iterable[str], at: datetime) -> int: ...
