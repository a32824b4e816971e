"""Building blocks for writing factgrid source adapters and watchdog probes."""

from factgrid.domain.snapshot.model.payload import Category, SnapshotPayload
from factgrid.domain.source.fallback import first_success
from factgrid.domain.watchdog.model.value import Detection, WatchdogResult
from factgrid.sdk.config import SourceConfig
from factgrid.sdk.http import get_json, get_text, parse
from factgrid.sdk.probe import Probe, WatchdogProbe
from factgrid.sdk.source import Source, SourceAdapter

__all__ = [
    "Category",
    "Detection",
    "Probe",
    "SnapshotPayload",
    "Source",
    "SourceAdapter",
    "SourceConfig",
    "WatchdogProbe",
    "WatchdogResult",
    "first_success",
    "get_json",
    "get_text",
    "parse",
]
