"""Unit tests for the Probe base class."""

from unittest.mock import AsyncMock

import httpx
import pytest

from factgrid.domain.shared.error import ProbeError
from factgrid.sdk import Detection, Probe, SourceConfig


class StaticProbe(Probe):
    slug = "co2-emissions"
    label = "Static"

    def __init__(self, detection: Detection | None = None, error: Exception | None = None) -> None:
        super().__init__(SourceConfig(), AsyncMock(spec=httpx.AsyncClient))
        self.detection = detection
        self.error = error

    async def detect(self, previous_year: int | None) -> Detection:
        if self.error is not None:
            raise self.error
        return self.detection


class TestProbeCheck:
    @pytest.mark.asyncio
    async def test_wraps_detection(self):
        probe = StaticProbe(Detection(changed=True, detected_year=2024, method="commit mentions 2024"))

        result = await probe.check(2023)

        assert result.slug == "co2-emissions"
        assert result.changed
        assert result.previous_year == 2023
        assert result.detected_year == 2024
        assert result.method == "commit mentions 2024"
        assert result.actionable

    @pytest.mark.asyncio
    async def test_empty_method_falls_back_to_label(self):
        result = await StaticProbe(Detection(changed=False, detected_year=2023)).check(2023)

        assert result.method == "Static"

    @pytest.mark.asyncio
    async def test_source_error_becomes_error_result(self):
        result = await StaticProbe(error=ProbeError("rate limited")).check(2023)

        assert not result.changed
        assert result.error == "rate limited"
        assert result.detected_year is None
        assert not result.actionable

    @pytest.mark.asyncio
    async def test_other_exceptions_propagate(self):
        with pytest.raises(KeyError):
            await StaticProbe(error=KeyError("bug")).check(2023)
