"""Persistent key-value cache contract and key naming.

The cache stores the last known code sets and tables so a helper can start
with data when every source is unreachable, plus the resolver state
(selected code, last observed device code). Values are strings; structured
values are JSON-encoded.

Durable stores (files, keychains, databases) are supplied by the
application by implementing PersistentCache. InMemoryCache is the bundled
implementation and the default.

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from .codes import LanguageCode
from .constants import (
    AUTO_SAVE_CODE_KEY,
    CODES_SUFFIX,
    DATA_KEY,
    DATA_OVERRIDES_KEY,
    DEFAULT_PREFIX,
    DEVICE_CODE_KEY,
)
from .diagnostics import ErrorTemplate

__all__ = [
    "CacheKeys",
    "InMemoryCache",
    "PersistentCache",
    "read_json",
    "write_json",
]

logger = logging.getLogger(__name__)


@runtime_checkable
class PersistentCache(Protocol):
    """Async string get/set store.

    Example:
        >>> class RedisCache:
        ...     def __init__(self, redis):
        ...         self._redis = redis
        ...     async def get(self, key: str) -> str | None:
        ...         return await self._redis.get(key)
        ...     async def set(self, key: str, value: str) -> None:
        ...         await self._redis.set(key, value)
    """

    async def get(self, key: str) -> str | None:
        """Return the stored value, or None when absent."""
        ...

    async def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        ...


class InMemoryCache:
    """Process-lifetime PersistentCache backed by a dict.

    Sharing one instance between helpers (or across a simulated restart in
    tests) shares the persisted state; prefixes keep helpers apart.
    """

    __slots__ = ("_store",)

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._store: dict[str, str] = dict(initial or {})

    def __repr__(self) -> str:
        return f"InMemoryCache(keys={len(self._store)})"

    def __contains__(self, key: object) -> bool:
        return key in self._store

    async def get(self, key: str) -> str | None:
        return self._store.get(key)

    async def set(self, key: str, value: str) -> None:
        self._store[key] = value

    def snapshot(self) -> dict[str, str]:
        """Copy of every stored key and value."""
        return dict(self._store)


@dataclass(frozen=True, slots=True)
class CacheKeys:
    """Cache key names for one helper instance.

    Example:
        >>> keys = CacheKeys("Shop")
        >>> keys.codes()
        'Shop.Data.codes'
        >>> keys.table(LanguageCode.parse("vi"), overrides=True)
        'Shop.DataOverrides.vi'
    """

    prefix: str = DEFAULT_PREFIX

    def __post_init__(self) -> None:
        if not self.prefix:
            msg = "Cache prefix cannot be empty"
            raise ValueError(msg)

    def _data(self, overrides: bool) -> str:
        section = DATA_OVERRIDES_KEY if overrides else DATA_KEY
        return f"{self.prefix}.{section}"

    def codes(self, *, overrides: bool = False) -> str:
        """Key of the persisted code list."""
        return f"{self._data(overrides)}.{CODES_SUFFIX}"

    def table(self, code: LanguageCode, *, overrides: bool = False) -> str:
        """Key of the persisted table for ``code``."""
        return f"{self._data(overrides)}.{code.code}"

    @property
    def auto_save_code(self) -> str:
        return f"{self.prefix}.{AUTO_SAVE_CODE_KEY}"

    @property
    def device_code(self) -> str:
        return f"{self.prefix}.{DEVICE_CODE_KEY}"


async def read_json(cache: PersistentCache, key: str) -> Any | None:
    """Read and decode a JSON value; unreadable values count as absent."""
    raw = await cache.get(key)
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        diagnostic = ErrorTemplate.cache_decode_failed(key, str(e))
        logger.warning("[%s] %s", diagnostic.code.name, diagnostic.message)
        return None


async def write_json(cache: PersistentCache, key: str, value: Any) -> None:
    """Encode ``value`` as JSON and store it."""
    await cache.set(key, json.dumps(value, ensure_ascii=False))
