"""Immutable registries of the adapters and probes available to a process."""

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Generic, TypeVar

from factgrid.sdk.probe import WatchdogProbe
from factgrid.sdk.source import SourceAdapter

T = TypeVar("T")


class _Registry(Mapping[str, T], Generic[T]):
    """Read-only slug -> implementation map, built once at startup."""

    def __init__(self, entries: Mapping[str, T] | None = None) -> None:
        self._entries: Mapping[str, T] = MappingProxyType(dict(entries or {}))

    def __getitem__(self, slug: str) -> T:
        return self._entries[slug]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({sorted(self._entries)})"


class SourceRegistry(_Registry[SourceAdapter]):
    """Adapters keyed by dataset slug."""


class ProbeRegistry(_Registry[WatchdogProbe]):
    """Watchdog probes keyed by dataset slug."""
