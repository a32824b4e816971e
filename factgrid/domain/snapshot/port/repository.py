from __future__ import annotations

from abc import abstractmethod
from typing import List, Protocol
from uuid import UUID

from factgrid.domain.shared.port import Port
from factgrid.domain.snapshot.model.snapshot import Snapshot


class SnapshotRepository(Port, Protocol):
    """Append-only snapshot log."""

    @abstractmethod
    async def get(self, snapshot_id: UUID) -> Snapshot | None: ...

    @abstractmethod
    async def add(self, snapshot: Snapshot) -> None: ...

    @abstractmethod
    async def list_for_dataset(self, dataset_id: UUID, *, limit: int = 20) -> List[Snapshot]: ...

    @abstractmethod
    async def count_for_dataset(self, dataset_id: UUID) -> int: ...


class CardRepository(Port, Protocol):
    """Downstream consumer records that display a dataset's latest snapshot."""

    @abstractmethod
    async def repoint(self, dataset_id: UUID, snapshot_id: UUID) -> int:
        """Point every card of the dataset at the snapshot. Returns the number updated."""
        ...
