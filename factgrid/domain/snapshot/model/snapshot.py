from datetime import datetime
from uuid import UUID

from factgrid.domain.shared.model.value import ValueObject
from factgrid.domain.snapshot.model.payload import SnapshotPayload


class Snapshot(ValueObject):
    """One immutable, content-addressed capture of a dataset's payload."""

    id: UUID
    dataset_id: UUID
    payload: SnapshotPayload
    source_hash: str
    collected_at: datetime
