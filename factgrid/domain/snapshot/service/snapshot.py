"""SnapshotService - change detection and the snapshot store."""

import logging
from datetime import datetime
from enum import StrEnum
from uuid import UUID, uuid4

import logfire

from factgrid.domain.dataset.model.aggregate import Dataset
from factgrid.domain.dataset.port.repository import DatasetRepository
from factgrid.domain.shared.model.value import ValueObject
from factgrid.domain.shared.service import Service
from factgrid.domain.snapshot.fingerprint import fingerprint
from factgrid.domain.snapshot.model.payload import SnapshotPayload
from factgrid.domain.snapshot.model.snapshot import Snapshot
from factgrid.domain.snapshot.port.repository import CardRepository, SnapshotRepository

logger = logging.getLogger(__name__)


class AcceptOutcome(StrEnum):
    CREATED = "created"
    UNCHANGED = "unchanged"


class Acceptance(ValueObject):
    outcome: AcceptOutcome
    snapshot_id: UUID
    source_hash: str
    source_year: int | None = None


def _advance(current: int | None, *candidates: int | None) -> int | None:
    """Return the newest candidate year if it moves past ``current``."""
    newest = max((c for c in candidates if c is not None), default=None)
    if newest is None or (current is not None and newest <= current):
        return None
    return newest


class SnapshotService(Service):
    """Decides whether a freshly fetched payload is new and records it.

    Identical content never produces a second snapshot: only the refresh
    timestamp moves (plus the source year, when a watchdog probe supplied
    one). New content is appended as a snapshot, downstream cards are
    repointed, and the dataset pointer is moved last so a dataset never
    references a snapshot that was not written.
    """

    datasets: DatasetRepository
    snapshots: SnapshotRepository
    cards: CardRepository

    async def accept(
        self,
        dataset: Dataset,
        payload: SnapshotPayload,
        *,
        now: datetime,
        detected_year: int | None = None,
    ) -> Acceptance:
        source_hash = fingerprint(payload)

        latest = None
        if dataset.latest_snapshot_id is not None:
            latest = await self.snapshots.get(dataset.latest_snapshot_id)

        if latest is not None and latest.source_hash == source_hash:
            year = _advance(dataset.latest_source_year, detected_year)
            await self.datasets.touch_refreshed(dataset.id, now, source_year=year)
            logger.debug("Dataset %s unchanged (hash=%s)", dataset.slug, source_hash[:12])
            return Acceptance(
                outcome=AcceptOutcome.UNCHANGED,
                snapshot_id=latest.id,
                source_hash=source_hash,
                source_year=year,
            )

        snapshot = Snapshot(
            id=uuid4(),
            dataset_id=dataset.id,
            payload=payload,
            source_hash=source_hash,
            collected_at=now,
        )
        await self.snapshots.add(snapshot)
        repointed = await self.cards.repoint(dataset.id, snapshot.id)

        year = _advance(dataset.latest_source_year, detected_year, payload.data_year())
        await self.datasets.point_to_snapshot(dataset.id, snapshot.id, now, source_year=year)

        logfire.info(
            "New snapshot recorded",
            dataset=dataset.slug,
            snapshot_id=str(snapshot.id),
            cards=repointed,
            source_year=year,
        )
        return Acceptance(
            outcome=AcceptOutcome.CREATED,
            snapshot_id=snapshot.id,
            source_hash=source_hash,
            source_year=year,
        )
