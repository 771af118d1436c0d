from abc import ABC, abstractmethod
from typing import Any, Optional


class ResponseCache(ABC):
    """
    Read-through cache for GET listings, keyed by request path and query.

    Values are JSON-compatible payloads. Writes clear the whole store;
    there is no per-key invalidation.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        pass

    @abstractmethod
    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        pass

    @abstractmethod
    async def clear(self) -> None:
        pass
