import asyncio
import json
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from .config import settings


@dataclass
class CacheEntry:
    value: Any
    expires_at: float


class TTLCache:
    """In-memory TTL cache with least-recently-used eviction.

    Used for upstream HTTP responses so that identical lookups issued within a
    short window hit the provider once.
    """

    def __init__(
        self,
        default_ttl: int = 60,
        max_size: int = 1000,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.default_ttl = default_ttl
        self.max_size = max_size
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self._clock = clock
        self._lock = asyncio.Lock()

    async def get(self, key: str) -> Optional[Any]:
        async with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None

            if self._clock() >= entry.expires_at:
                del self._entries[key]
                return None

            self._entries.move_to_end(key)
            return entry.value

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        async with self._lock:
            ttl = ttl or self.default_ttl
            self._entries[key] = CacheEntry(value=value, expires_at=self._clock() + ttl)
            self._entries.move_to_end(key)

            while len(self._entries) > self.max_size:
                self._entries.popitem(last=False)

    async def clear(self) -> None:
        async with self._lock:
            self._entries.clear()

    def size(self) -> int:
        return len(self._entries)


def request_cache_key(method: str, url: str, body: Optional[Dict[str, Any]] = None) -> str:
    """Build the cache key for an upstream request.

    GET requests are keyed by their full URL (query string included). POST
    bodies are folded in because the token API carries the wallet address in
    the body rather than the URL.
    """
    key = f"{method.upper()} {url}"
    if body is not None:
        key += " " + json.dumps(body, sort_keys=True, separators=(",", ":"))
    return key


# Global cache instance
cache = TTLCache(
    default_ttl=settings.upstream_cache_ttl_seconds,
    max_size=settings.max_cache_size,
)
