"""Adapter and probe discovery via entry points."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from importlib.metadata import entry_points
from typing import Any

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

SOURCES_GROUP = "factgrid.sources"
PROBES_GROUP = "factgrid.probes"


def discover(group: str) -> dict[str, type]:
    """Load every class published in an entry point group.

    Entry point names are dataset slugs and must match the class's ``slug``.

    Example pyproject.toml entry:
        [project.entry-points."factgrid.sources"]
        bitcoin-price = "sources.crypto.source:BitcoinSource"
    """
    found: dict[str, type] = {}
    for ep in entry_points(group=group):
        try:
            cls = ep.load()
            _validate_class(cls, ep.name)
            found[ep.name] = cls
            logger.debug("Discovered %s: %s -> %s", group, ep.name, cls.__name__)
        except Exception as e:
            logger.warning("Failed to load %s entry point '%s': %s", group, ep.name, e)
    return found


def discover_sources() -> dict[str, type]:
    return discover(SOURCES_GROUP)


def discover_probes() -> dict[str, type]:
    return discover(PROBES_GROUP)


def _validate_class(cls: Any, name: str) -> None:
    """Validate that a loaded object looks like an adapter or probe class.

    Raises:
        TypeError: If the class is missing a required attribute.
    """
    if not isinstance(cls, type):
        raise TypeError(f"{name} must be a class, got {type(cls).__name__}")
    if getattr(cls, "slug", None) != name:
        raise TypeError(f"{name}: class slug {getattr(cls, 'slug', None)!r} does not match entry point")
    if not issubclass(getattr(cls, "config_class", object), BaseModel):
        raise TypeError(f"{name} config_class must be a Pydantic BaseModel")


class SourceConfigError(Exception):
    """Raised when adapter configuration validation fails."""

    def __init__(self, slug: str, validation_error: ValidationError) -> None:
        self.slug = slug
        self.validation_error = validation_error
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        lines = [f"Invalid config for source '{self.slug}':"]
        for err in self.validation_error.errors():
            loc = ".".join(str(x) for x in err.get("loc", []))
            msg = err.get("msg", "Unknown error")
            lines.append(f"  - {loc}: {msg}")
        return "\n".join(lines)


def validate_all_source_configs(
    sources_config: Mapping[str, dict[str, Any]],
    available: Mapping[str, type],
) -> dict[str, BaseModel]:
    """Validate settings for every available class.

    Classes without an entry in ``sources_config`` get their defaults.

    Returns:
        Dict of slug -> validated config.

    Raises:
        SourceConfigError: If any configuration is invalid.
        ValueError: If settings name an unknown slug.
    """
    unknown = sorted(set(sources_config) - set(available))
    if unknown:
        known = ", ".join(sorted(available)) or "(none)"
        raise ValueError(f"Unknown source(s) in config: {', '.join(unknown)}. Available: {known}")

    validated: dict[str, BaseModel] = {}
    for slug, cls in available.items():
        try:
            validated[slug] = cls.config_class.model_validate(sources_config.get(slug, {}))
        except ValidationError as e:
            raise SourceConfigError(slug, e) from e
    return validated
