"""Tests for adapter discovery and settings validation."""

from types import SimpleNamespace

import pytest

from factgrid.infrastructure.source import discovery
from factgrid.infrastructure.source.discovery import (
    SourceConfigError,
    discover,
    validate_all_source_configs,
)
from factgrid.sdk import SourceConfig
from sources.crypto.source import BitcoinPriceSource
from sources.finnhub.source import TrillionDollarClubSource
from sources.nasa.source import NearEarthAsteroidsSource


class _EntryPoint(SimpleNamespace):
    def load(self):
        if isinstance(self.target, Exception):
            raise self.target
        return self.target


def _patch_entry_points(monkeypatch, *eps: _EntryPoint) -> None:
    monkeypatch.setattr(discovery, "entry_points", lambda group: list(eps))


class TestDiscover:
    def test_loads_matching_classes(self, monkeypatch):
        _patch_entry_points(monkeypatch, _EntryPoint(name="bitcoin-price", target=BitcoinPriceSource))

        found = discover("factgrid.sources")

        assert found == {"bitcoin-price": BitcoinPriceSource}

    def test_skips_slug_mismatch(self, monkeypatch):
        _patch_entry_points(monkeypatch, _EntryPoint(name="ethereum-price", target=BitcoinPriceSource))

        assert discover("factgrid.sources") == {}

    def test_skips_non_class(self, monkeypatch):
        _patch_entry_points(monkeypatch, _EntryPoint(name="bitcoin-price", target=lambda: None))

        assert discover("factgrid.sources") == {}

    def test_skips_import_failure(self, monkeypatch):
        _patch_entry_points(
            monkeypatch,
            _EntryPoint(name="broken", target=ImportError("no module")),
            _EntryPoint(name="bitcoin-price", target=BitcoinPriceSource),
        )

        assert list(discover("factgrid.sources")) == ["bitcoin-price"]


class TestValidateAllSourceConfigs:
    def test_defaults_for_unconfigured(self):
        validated = validate_all_source_configs(
            {}, {"near-earth-asteroids": NearEarthAsteroidsSource, "bitcoin-price": BitcoinPriceSource}
        )

        assert validated["near-earth-asteroids"].api_key == "DEMO_KEY"
        assert type(validated["bitcoin-price"]) is SourceConfig

    def test_applies_settings(self):
        validated = validate_all_source_configs(
            {"trillion-dollar-club": {"api_key": "k", "min_market_cap": 1.0}},
            {"trillion-dollar-club": TrillionDollarClubSource},
        )

        assert validated["trillion-dollar-club"].api_key == "k"
        assert validated["trillion-dollar-club"].min_market_cap == 1.0

    def test_unknown_slug(self):
        with pytest.raises(ValueError, match="Unknown source"):
            validate_all_source_configs({"nope": {}}, {"bitcoin-price": BitcoinPriceSource})

    def test_invalid_settings(self):
        with pytest.raises(SourceConfigError) as exc:
            validate_all_source_configs(
                {"bitcoin-price": {"unexpected": 1}}, {"bitcoin-price": BitcoinPriceSource}
            )

        assert exc.value.slug == "bitcoin-price"
        assert "Invalid config for source 'bitcoin-price'" in str(exc.value)
