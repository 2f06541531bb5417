"""In-memory resource cache keyed by logical resource identifiers."""

from __future__ import annotations

import asyncio
import threading
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

from mentor_client.core.log import get_logger


_LOGGER = get_logger(__name__)

Fetcher = Callable[[], Awaitable[Any]]

_MAX_RETRY_DELAY = 30.0


def _normalize_key(key: str) -> str:
    normalized = key.strip()
    if not normalized:
        raise ValueError("Cache keys cannot be empty.")
    return normalized


def retry_delay(attempt: int) -> float:
    """Exponential back-off in seconds for the ``attempt``-th retry (0-based)."""

    return min(1.0 * 2**attempt, _MAX_RETRY_DELAY)


@dataclass
class _CacheEntry:
    value: Any
    updated_at: float
    invalidated: bool = False


class ResourceCache:
    """Process-wide key to value cache with deduplicated fetches.

    Values are written either explicitly through :meth:`set_query_data` or by
    :meth:`fetch_query`, which serves fresh entries from memory, joins a fetch
    already in flight for the same key, and otherwise runs ``fetcher``.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None) -> None:
        self._lock = threading.RLock()
        self._clock = clock or time.monotonic
        self._entries: Dict[str, _CacheEntry] = {}
        self._in_flight: Dict[str, "asyncio.Task[Any]"] = {}
        # Bumped on clear() so fetches started earlier never write back.
        self._generation = 0
        # Explicit writes per key; a fetch started before one never overwrites it.
        self._versions: Dict[str, int] = {}

    def get_query_data(self, key: str, default: Any = None) -> Any:
        with self._lock:
            entry = self._entries.get(_normalize_key(key))
        return default if entry is None else entry.value

    def has(self, key: str) -> bool:
        with self._lock:
            return _normalize_key(key) in self._entries

    def set_query_data(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key`` as a fresh entry, replacing any previous one."""

        normalized = _normalize_key(key)
        with self._lock:
            self._entries[normalized] = _CacheEntry(value=value, updated_at=self._clock())
            self._versions[normalized] = self._versions.get(normalized, 0) + 1
        _LOGGER.debug("Cache entry set for %s", normalized)

    def invalidate(self, key: str) -> None:
        """Mark ``key`` stale so the next fetch goes to the fetcher."""

        normalized = _normalize_key(key)
        with self._lock:
            entry = self._entries.get(normalized)
            if entry is not None:
                entry.invalidated = True
        _LOGGER.debug("Cache entry invalidated for %s", normalized)

    def remove(self, key: str) -> None:
        with self._lock:
            self._entries.pop(_normalize_key(key), None)

    def clear(self) -> None:
        """Drop every entry and detach fetches that are still running."""

        with self._lock:
            count = len(self._entries)
            self._entries.clear()
            self._in_flight.clear()
            self._versions.clear()
            self._generation += 1
        _LOGGER.info("Resource cache cleared (%d entries)", count)

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def is_stale(self, key: str, stale_time: float) -> bool:
        """Return True when ``key`` is missing, invalidated or older than ``stale_time``."""

        with self._lock:
            entry = self._entries.get(_normalize_key(key))
            if entry is None or entry.invalidated:
                return True
            return self._clock() - entry.updated_at >= stale_time

    def is_fetching(self, key: str) -> bool:
        with self._lock:
            task = self._in_flight.get(_normalize_key(key))
        return task is not None and not task.done()

    async def fetch_query(
        self,
        key: str,
        fetcher: Fetcher,
        *,
        stale_time: float = 0.0,
        retry: int = 3,
    ) -> Any:
        """Return the value for ``key``, fetching it when missing or stale.

        Concurrent callers for the same key share a single ``fetcher`` run.
        Failed attempts are retried ``retry`` more times with exponential
        back-off; ``retry=0`` surfaces the first failure. The last failure
        propagates to every waiting caller and leaves the entry untouched.
        """

        normalized = _normalize_key(key)
        with self._lock:
            entry = self._entries.get(normalized)
            if entry is not None and not entry.invalidated:
                if self._clock() - entry.updated_at < stale_time:
                    return entry.value
            task = self._in_flight.get(normalized)
            if task is None or task.done():
                task = asyncio.ensure_future(
                    self._run_fetch(
                        normalized,
                        fetcher,
                        retry,
                        (self._generation, self._versions.get(normalized, 0)),
                    )
                )
                self._in_flight[normalized] = task
            else:
                _LOGGER.debug("Joining in-flight fetch for %s", normalized)
        return await asyncio.shield(task)

    async def _run_fetch(
        self, key: str, fetcher: Fetcher, retry: int, stamp: Tuple[int, int]
    ) -> Any:
        attempt = 0
        try:
            while True:
                try:
                    value = await fetcher()
                    break
                except Exception as exc:
                    if attempt >= retry:
                        _LOGGER.warning("Fetch for %s failed after %d attempt(s): %s", key, attempt + 1, exc)
                        raise
                    delay = retry_delay(attempt)
                    attempt += 1
                    _LOGGER.info("Fetch for %s failed (%s); retry %d/%d in %.1fs", key, exc, attempt, retry, delay)
                    await asyncio.sleep(delay)
            with self._lock:
                if stamp == (self._generation, self._versions.get(key, 0)):
                    self._entries[key] = _CacheEntry(value=value, updated_at=self._clock())
                else:
                    _LOGGER.debug("Discarding result for %s superseded by a clear or explicit write", key)
            return value
        finally:
            with self._lock:
                if self._in_flight.get(key) is asyncio.current_task():
                    del self._in_flight[key]


__all__ = ["Fetcher", "ResourceCache", "retry_delay"]
