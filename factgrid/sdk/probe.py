"""Watchdog probe protocol and a base class that keeps errors inside the probe."""

import logging
from datetime import UTC, datetime
from typing import ClassVar, Protocol

import httpx

from factgrid.domain.shared.error import SourceError
from factgrid.domain.watchdog.model.value import Detection, WatchdogResult
from factgrid.sdk.config import SourceConfig

logger = logging.getLogger(__name__)


class WatchdogProbe(Protocol):
    """Protocol for cheap new-publication checks.

    ``check`` answers whether the upstream likely holds data newer than
    ``previous_year`` using a small request, and reports failures through
    ``WatchdogResult.error`` instead of raising.
    """

    slug: ClassVar[str]
    config_class: ClassVar[type[SourceConfig]]

    def __init__(self, config: SourceConfig, client: httpx.AsyncClient) -> None: ...

    async def check(self, previous_year: int | None) -> WatchdogResult: ...


class Probe:
    """Base class for probes. Subclasses implement ``detect``."""

    slug: ClassVar[str]
    config_class: ClassVar[type[SourceConfig]] = SourceConfig
    # Reported as the method when the probe fails
    label: ClassVar[str] = "probe"

    def __init__(self, config: SourceConfig, client: httpx.AsyncClient) -> None:
        self.config = config
        self.client = client

    async def detect(self, previous_year: int | None) -> Detection:
        raise NotImplementedError

    def now(self) -> datetime:
        return datetime.now(UTC)

    async def check(self, previous_year: int | None) -> WatchdogResult:
        try:
            detection = await self.detect(previous_year)
        except SourceError as e:
            logger.warning("Probe %s failed: %s", self.slug, e.message)
            return WatchdogResult(
                slug=self.slug,
                changed=False,
                previous_year=previous_year,
                detected_year=None,
                method=self.label,
                checked_at=self.now(),
                error=e.message,
            )
        return WatchdogResult(
            slug=self.slug,
            changed=detection.changed,
            previous_year=previous_year,
            detected_year=detection.detected_year,
            method=detection.method or self.label,
            checked_at=self.now(),
        )
