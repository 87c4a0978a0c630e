"""First-non-empty-wins source selection with persistent-cache fallback.

Sources are ranked by list position. The first source that reports any
codes becomes authoritative for its dataset; the others are ignored, not
merged. When every source is empty the last persisted result is used, so a
helper that once saw data keeps working offline.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from .cache import CacheKeys, PersistentCache, read_json, write_json
from .codes import LanguageCode
from .diagnostics import ErrorTemplate, SourceDecodeError
from .entries import TranslationTable, decode_table, encode_table
from .enums import SelectionOrigin
from .sources.base import DataSource, decode_codes

__all__ = [
    "Selection",
    "SourceSelector",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Selection:
    """Outcome of SourceSelector.choose().

    Attributes:
        source: The authoritative source, or None when all were empty
        codes: Supported codes, in source order
        origin: Whether the codes came from a live source or the cache
    """

    source: DataSource | None
    codes: tuple[LanguageCode, ...]
    origin: SelectionOrigin


class SourceSelector:
    """Pick the authoritative source of one dataset (base or overrides).

    Args:
        cache: Store for the last known codes and tables
        keys: Key naming for the owning helper
        overrides: True for the override dataset
    """

    __slots__ = ("_cache", "_keys", "_overrides")

    def __init__(
        self, cache: PersistentCache, keys: CacheKeys, *, overrides: bool = False
    ) -> None:
        self._cache = cache
        self._keys = keys
        self._overrides = overrides

    @property
    def label(self) -> str:
        return "overrides" if self._overrides else "base"

    async def choose(self, sources: Sequence[DataSource]) -> Selection:
        """Return the first source with a non-empty code set.

        Falls back to the cached code set when every source is empty. A live
        result is persisted.
        """
        for index, source in enumerate(sources):
            codes = await self.fetch_codes(source)
            if codes:
                logger.info(
                    "Using %s source #%d (%s) for %s: %d codes",
                    getattr(source, "kind", "custom"), index, type(source).__name__,
                    self.label, len(codes),
                )
                await self.save_codes(codes)
                return Selection(source, codes, SelectionOrigin.LIVE)

        cached = await self.cached_codes()
        if cached:
            logger.warning(
                "All %s sources are empty, using %d cached codes", self.label, len(cached)
            )
            return Selection(None, cached, SelectionOrigin.CACHE)

        if sources:
            logger.warning("No %s codes available from sources or cache", self.label)
        return Selection(None, (), SelectionOrigin.NONE)

    async def load_entries(
        self, source: DataSource | None, code: LanguageCode
    ) -> tuple[TranslationTable, SelectionOrigin]:
        """Fetch the table for ``code`` from ``source``, else from the cache.

        A live, non-empty result refreshes the cache.
        """
        if source is not None:
            table = await self.fetch_entries(source, code)
            if table:
                await write_json(
                    self._cache,
                    self._keys.table(code, overrides=self._overrides),
                    encode_table(table),
                )
                return table, SelectionOrigin.LIVE

        cached = await self.cached_entries(code)
        if cached:
            logger.debug("Using cached %s entries for %s", self.label, code)
            return cached, SelectionOrigin.CACHE
        return {}, SelectionOrigin.NONE

    async def cached_codes(self) -> tuple[LanguageCode, ...]:
        key = self._keys.codes(overrides=self._overrides)
        raw = await read_json(self._cache, key)
        if raw is None:
            return ()
        try:
            return decode_codes(raw, location=key)
        except SourceDecodeError as e:
            logger.warning("Ignoring cached codes: %s", e.diagnostic or e)
            return ()

    async def cached_entries(self, code: LanguageCode) -> TranslationTable:
        key = self._keys.table(code, overrides=self._overrides)
        raw = await read_json(self._cache, key)
        if raw is None:
            return {}
        try:
            return decode_table(raw, location=key)
        except SourceDecodeError as e:
            diagnostic = ErrorTemplate.cache_decode_failed(key, str(e.diagnostic or e))
            logger.warning("[%s] %s", diagnostic.code.name, diagnostic.message)
            return {}

    async def save_codes(self, codes: Iterable[LanguageCode]) -> None:
        await write_json(
            self._cache,
            self._keys.codes(overrides=self._overrides),
            [code.code for code in codes],
        )

    async def fetch_codes(self, source: DataSource) -> tuple[LanguageCode, ...]:
        """Live codes of ``source``, without cache fallback."""
        try:
            return decode_codes(await source.fetch_codes(), location=type(source).__name__)
        except Exception as exc:  # noqa: BLE001 - custom sources must not break selection
            diagnostic = ErrorTemplate.source_fetch_failed(type(source).__name__, repr(exc))
            logger.warning("[%s] %s", diagnostic.code.name, diagnostic.message)
            return ()

    async def fetch_entries(self, source: DataSource, code: LanguageCode) -> TranslationTable:
        """Live table of ``source`` for ``code``, without cache fallback."""
        try:
            return dict(await source.fetch_entries(code))
        except Exception as exc:  # noqa: BLE001 - custom sources must not break selection
            diagnostic = ErrorTemplate.source_fetch_failed(type(source).__name__, repr(exc))
            logger.warning("[%s] %s", diagnostic.code.name, diagnostic.message)
            return {}
