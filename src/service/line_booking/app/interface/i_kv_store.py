"""
Key-Value Store Interface

Durable mapping from string key to JSON value. Listing is eventually consistent.
Transport failures propagate to the caller; nothing here retries.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional


class IKvStore(ABC):
    @abstractmethod
    async def get_json(self, *, key: str) -> Optional[Any]:
        """Decoded JSON value; None when the key is absent or does not hold JSON text."""
        pass

    @abstractmethod
    async def get_text(self, *, key: str) -> Optional[str]:
        """Raw stored text; None when the key is absent."""
        pass

    @abstractmethod
    async def put(
        self, *, key: str, value: Any, expiration_seconds: Optional[int] = None
    ) -> None:
        """Overwrite `key` with the JSON encoding of `value`, optionally expiring it."""
        pass

    @abstractmethod
    async def list_keys(self, *, prefix: str = '') -> List[str]:
        """All keys starting with `prefix` (every key when empty)."""
        pass
