"""Sequential fallback over alternate upstream sources."""

import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

from factgrid.domain.shared.error import AllFallbacksExhaustedError, SourceError
from factgrid.domain.shared.result import Err, Ok, attempt

logger = logging.getLogger(__name__)

T = TypeVar("T")

Variant = tuple[str, Callable[[], Awaitable[T]]]


async def first_success(
    name: str,
    variants: Sequence[Variant[T]],
    *,
    timeout: float | None = None,
) -> Ok[T] | Err:
    """Try each labelled variant in order and stop at the first success.

    Variants never run concurrently. When all of them fail the result is an
    ``AllFallbacksExhaustedError`` carrying every attempt's error.
    """
    errors: list[SourceError] = []
    for label, call in variants:
        result = await attempt(call, timeout=timeout, label=f"{name} ({label})")
        if isinstance(result, Ok):
            if errors:
                logger.info("%s: %s succeeded after %d failure(s)", name, label, len(errors))
            return result
        logger.warning("%s: %s failed: %s", name, label, result.error.message)
        errors.append(result.error)
    return Err(AllFallbacksExhaustedError(name, errors))
