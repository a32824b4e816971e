from typing import Any
from uuid import UUID

from factgrid.domain.snapshot.model.payload import SnapshotPayload
from factgrid.domain.snapshot.model.snapshot import Snapshot
from factgrid.infrastructure.persistence.mappers.dataset import as_utc


def row_to_snapshot(row: dict[str, Any]) -> Snapshot:
    return Snapshot(
        id=UUID(row["id"]),
        dataset_id=UUID(row["dataset_id"]),
        payload=SnapshotPayload.model_validate(row["payload"]),
        source_hash=row["source_hash"],
        collected_at=as_utc(row["collected_at"]),
    )


def snapshot_to_dict(snapshot: Snapshot) -> dict[str, Any]:
    return {
        "id": str(snapshot.id),
        "dataset_id": str(snapshot.dataset_id),
        # Stored in wire form so other consumers read the same shape
        "payload": snapshot.payload.model_dump(mode="json", by_alias=True, exclude_none=True),
        "source_hash": snapshot.source_hash,
        "collected_at": snapshot.collected_at,
    }
