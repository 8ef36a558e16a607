"""Chunked fan-out with per-batch error isolation."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterable, Sequence
from typing import TypeVar

from ..logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")
R = TypeVar("R")


def unique(items: Iterable[str]) -> list[str]:
    """Drop empty and duplicate entries, keeping first-seen order."""
    return list(dict.fromkeys(item for item in items if item))


def chunked(items: Sequence[T], size: int) -> list[list[T]]:
    if size <= 0:
        raise ValueError(f"Batch size must be positive, got {size}")
    return [list(items[i : i + size]) for i in range(0, len(items), size)]


async def gather_batches(
    batches: Sequence[list[T]],
    fetch: Callable[[list[T]], Awaitable[R]],
    *,
    label: str,
) -> tuple[list[R], list[BaseException]]:
    """Run ``fetch`` for every batch concurrently.

    A failing batch never cancels its siblings: failures are logged and
    returned next to the successful results so the caller can record the
    degradation.

    Args:
        batches: Identifier groups already sized to the provider limit
        fetch: Coroutine function issuing one provider call
        label: Provider name used in log lines

    Returns:
        Tuple of (successful results, failures)
    """
    results = await asyncio.gather(
        *(fetch(batch) for batch in batches), return_exceptions=True
    )

    successes: list[R] = []
    failures: list[BaseException] = []
    for batch, result in zip(batches, results):
        if isinstance(result, asyncio.CancelledError):
            raise result
        if isinstance(result, BaseException):
            logger.warning(
                "%s batch of %d failed: %s", label, len(batch), result
            )
            failures.append(result)
        else:
            successes.append(result)

    if batches:
        logger.debug(
            "%s: %d/%d batches succeeded", label, len(successes), len(batches)
        )
    return successes, failures
