"""Source adapter protocol and a convenience base class."""

from datetime import UTC, datetime
from typing import ClassVar, Protocol

import httpx

from factgrid.domain.dataset.model.value import SourceKind
from factgrid.domain.snapshot.model.payload import SnapshotPayload
from factgrid.sdk.config import SourceConfig


class SourceAdapter(Protocol):
    """Protocol for dataset source adapters.

    Class attributes:
        slug: Dataset slug this adapter feeds. Must match the entry point name.
        kind: Freshness class of the upstream data.
        config_class: Pydantic model for validating ``sources.<slug>`` settings.
        timeout: Per-fetch deadline in seconds, or None for the global default.

    ``fetch`` either returns a normalized payload or raises a ``SourceError``.
    It must never substitute default numbers for a failed upstream.
    """

    slug: ClassVar[str]
    kind: ClassVar[SourceKind]
    config_class: ClassVar[type[SourceConfig]]
    timeout: ClassVar[float | None]

    def __init__(self, config: SourceConfig, client: httpx.AsyncClient) -> None: ...

    async def fetch(self) -> SnapshotPayload: ...


class Source:
    """Base class holding the validated config and the shared HTTP client."""

    slug: ClassVar[str]
    kind: ClassVar[SourceKind]
    config_class: ClassVar[type[SourceConfig]] = SourceConfig
    timeout: ClassVar[float | None] = None

    def __init__(self, config: SourceConfig, client: httpx.AsyncClient) -> None:
        self.config = config
        self.client = client

    async def fetch(self) -> SnapshotPayload:
        raise NotImplementedError

    def now(self) -> datetime:
        return datetime.now(UTC)
