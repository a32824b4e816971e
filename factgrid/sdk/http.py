"""HTTP and parsing helpers that translate failures into source errors."""

from typing import Any, TypeVar

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from factgrid.domain.shared.error import MalformedResponseError, UpstreamUnavailableError

M = TypeVar("M", bound=BaseModel)


async def _get(
    client: httpx.AsyncClient,
    url: str,
    *,
    source: str,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
) -> httpx.Response:
    try:
        response = await client.get(url, params=params, headers=headers)
    except httpx.HTTPError as e:
        raise UpstreamUnavailableError(f"{source}: {type(e).__name__}: {e}") from e
    if not 200 <= response.status_code < 300:
        raise UpstreamUnavailableError(
            f"{source}: HTTP {response.status_code}", status_code=response.status_code
        )
    return response


async def get_json(
    client: httpx.AsyncClient,
    url: str,
    *,
    source: str,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
) -> Any:
    """GET ``url`` and decode JSON.

    Raises:
        UpstreamUnavailableError: Network failure or non-2xx status.
        MalformedResponseError: Body is not valid JSON.
    """
    response = await _get(client, url, source=source, params=params, headers=headers)
    try:
        return response.json()
    except ValueError as e:
        raise MalformedResponseError(f"{source}: response is not valid JSON") from e


async def get_text(
    client: httpx.AsyncClient,
    url: str,
    *,
    source: str,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
) -> str:
    response = await _get(client, url, source=source, params=params, headers=headers)
    return response.text


def parse(schema: type[M], data: Any, *, source: str) -> M:
    """Validate an upstream response against its schema.

    Raises:
        MalformedResponseError: The data does not match ``schema``.
    """
    try:
        return schema.model_validate(data)
    except PydanticValidationError as e:
        first = e.errors()[0]
        loc = ".".join(str(x) for x in first.get("loc", ())) or "<root>"
        raise MalformedResponseError(
            f"{source}: unexpected response shape at {loc}: {first.get('msg')}"
        ) from e
