"""Mocked HTTP plumbing for adapter and probe tests."""

from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest


def make_response(json_data: Any = None, *, status_code: int = 200, text: str = "") -> MagicMock:
    response = MagicMock(spec=httpx.Response)
    response.status_code = status_code
    response.json.return_value = json_data
    response.text = text
    return response


@pytest.fixture
def respond() -> Callable[..., MagicMock]:
    """Factory for mocked httpx responses."""
    return make_response


@pytest.fixture
def client() -> AsyncMock:
    """Mock httpx.AsyncClient; tests set return_value or side_effect on get."""
    return AsyncMock(spec=httpx.AsyncClient)


@pytest.fixture
def route(client: AsyncMock):
    """Answer client.get by URL prefix.

    Usage:
        route({"https://api.coingecko.com": response, ...})
    """

    def _route(table: dict[str, Any]) -> AsyncMock:
        def get(url: str, params=None, headers=None):
            for prefix, answer in table.items():
                if url.startswith(prefix):
                    if isinstance(answer, Exception):
                        raise answer
                    return answer
            raise AssertionError(f"unexpected request to {url}")

        client.get.side_effect = get
        return client

    return _route
