"""Dependency injection provider for adapters and probes."""

from dishka import provide

from factgrid.config import Config
from factgrid.domain.source.model.registry import ProbeRegistry, SourceRegistry
from factgrid.infrastructure.http.di import UpstreamHttpClient
from factgrid.infrastructure.source.discovery import (
    discover_probes,
    discover_sources,
    validate_all_source_configs,
)
from factgrid.util.di.base import Provider
from factgrid.util.di.scope import Scope


class SourceProvider(Provider):
    """Provides the adapter and probe registries, built once per process."""

    @provide(scope=Scope.APP)
    def get_sources(self, config: Config, client: UpstreamHttpClient) -> SourceRegistry:
        """Discover adapters, validate their settings and instantiate each one."""
        available = discover_sources()
        validated = validate_all_source_configs(config.sources, available)
        return SourceRegistry({slug: cls(validated[slug], client) for slug, cls in available.items()})

    @provide(scope=Scope.APP)
    def get_probes(self, client: UpstreamHttpClient) -> ProbeRegistry:
        available = discover_probes()
        return ProbeRegistry(
            {slug: cls(cls.config_class(), client) for slug, cls in available.items()}
        )
