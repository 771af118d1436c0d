import json
import logging
import time
from typing import Any, Dict, Optional, Tuple

import redis.asyncio as redis

from config import ApplicationConfig
from src.app.services.cache import ResponseCache

logger = logging.getLogger(__name__)


class MemoryResponseCache(ResponseCache):
    """
    In-process TTL cache; one store per application process.

    Expired entries are swept on every write and the store never holds more
    than `max_entries`; the oldest entry is evicted first.
    """

    def __init__(self, default_ttl: int, max_entries: int = 1000):
        self.default_ttl = default_ttl
        self.max_entries = max_entries
        self._store: Dict[str, Tuple[float, Any]] = {}

    def __len__(self) -> int:
        return len(self._store)

    async def get(self, key: str) -> Optional[Any]:
        entry = self._store.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if expires_at <= time.monotonic():
            self._store.pop(key, None)
            return None
        return value

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        ttl = self.default_ttl if ttl is None else ttl
        now = time.monotonic()
        self._sweep(now)
        self._store.pop(key, None)
        while self._store and len(self._store) >= self.max_entries:
            # Dicts keep insertion order: the first key is the oldest write
            self._store.pop(next(iter(self._store)))
        self._store[key] = (now + ttl, value)

    async def clear(self) -> None:
        self._store.clear()

    def _sweep(self, now: float) -> None:
        expired = [key for key, (expires_at, _) in self._store.items() if expires_at <= now]
        for key in expired:
            del self._store[key]



class RedisResponseCache(ResponseCache):
    """Redis-backed cache, shared between workers. Keys live under one prefix."""

    def __init__(self, client: redis.Redis, default_ttl: int, prefix: str = "cinema:cache:"):
        self.client = client
        self.default_ttl = default_ttl
        self.prefix = prefix

    async def get(self, key: str) -> Optional[Any]:
        raw = await self.client.get(self.prefix + key)
        if raw is None:
            return None
        return json.loads(raw)

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        ttl = self.default_ttl if ttl is None else ttl
        await self.client.setex(self.prefix + key, ttl, json.dumps(value))

    async def clear(self) -> None:
        keys = [key async for key in self.client.scan_iter(match=self.prefix + "*")]
        if keys:
            await self.client.delete(*keys)


def build_response_cache(backend: str = None) -> ResponseCache:
    """Create the cache selected by CACHE_BACKEND (memory | redis)"""
    backend = (backend or ApplicationConfig.CACHE_BACKEND).lower()
    if backend == "redis":
        logger.info("Using redis response cache")
        client = redis.Redis.from_url(ApplicationConfig.REDIS_URL, decode_responses=True)
        return RedisResponseCache(client, ApplicationConfig.CACHE_TTL_SEC)
    if backend != "memory":
        raise ValueError(f"Unknown CACHE_BACKEND: {backend}")
    return MemoryResponseCache(
        ApplicationConfig.CACHE_TTL_SEC, ApplicationConfig.CACHE_MAX_ENTRIES
    )
