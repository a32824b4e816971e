"""Explicit outcome type for adapter and probe invocations."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from factgrid.domain.shared.error import SourceError, UpstreamUnavailableError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    error: SourceError

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self):
        raise self.error


Result = Ok[T] | Err


async def attempt(
    call: Callable[[], Awaitable[T]],
    *,
    timeout: float | None = None,
    label: str = "source",
) -> Ok[T] | Err:
    """Run ``call`` and capture its outcome.

    Source errors become ``Err``; a timeout becomes ``Err`` carrying an
    ``UpstreamUnavailableError``. Any other exception is a bug in the
    adapter, so it is logged with its traceback and also captured, keeping
    one broken adapter from aborting the caller's batch.
    """
    try:
        if timeout is None:
            value = await call()
        else:
            value = await asyncio.wait_for(call(), timeout=timeout)
    except SourceError as e:
        return Err(e)
    except TimeoutError:
        return Err(UpstreamUnavailableError(f"{label} timed out after {timeout:g}s"))
    except Exception as e:
        logger.exception("Unexpected failure in %s", label)
        return Err(UpstreamUnavailableError(f"{label} failed unexpectedly: {e}"))
    return Ok(value)
