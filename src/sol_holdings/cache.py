"""Process-wide time-to-live cache for the bulk token catalogue."""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from .logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    value: T
    fetched_at: float


class TokenListCache(Generic[T]):
    """Single-slot cache refreshed on first access after ``ttl_seconds``.

    Built once per process and shared by concurrent requests. Concurrent
    refreshes may race; the last writer wins.

    Args:
        ttl_seconds: Lifetime of a populated entry
        clock: Monotonic time source, injectable for tests
    """

    def __init__(
        self,
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entry: CacheEntry[T] | None = None

    @property
    def entry(self) -> CacheEntry[T] | None:
        return self._entry

    def is_fresh(self) -> bool:
        entry = self._entry
        return entry is not None and self._clock() - entry.fetched_at < self.ttl_seconds

    async def get_or_refresh(self, loader: Callable[[], Awaitable[T]]) -> T:
        """Return the cached value, calling ``loader`` when absent or expired.

        Loader errors propagate and leave any previous entry in place.
        """
        entry = self._entry
        now = self._clock()
        if entry is not None and now - entry.fetched_at < self.ttl_seconds:
            return entry.value

        logger.debug(
            "Token list cache %s; refreshing",
            "empty" if entry is None else "expired",
        )
        value = await loader()
        self._entry = CacheEntry(value=value, fetched_at=now)
        return value
