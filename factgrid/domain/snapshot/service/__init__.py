from factgrid.domain.snapshot.service.snapshot import Acceptance, AcceptOutcome, SnapshotService

__all__ = ["Acceptance", "AcceptOutcome", "SnapshotService"]
