"""In-process DataSources: inline tables, lazy loaders and the empty source.

Python 3.13+.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar

from ..codes import CodeLike, LanguageCode
from ..diagnostics import ErrorTemplate, SourceDecodeError, SourceFetchError
from ..entries import TranslationTable, decode_table
from ..enums import SourceKind
from .base import log_fetch_failure

__all__ = [
    "EmptySource",
    "InlineSource",
    "LazySource",
    "TableLoader",
]

logger = logging.getLogger(__name__)

type TableLoader = Callable[[], Mapping[str, Any] | Awaitable[Mapping[str, Any]]]


def _index_by_code[T](data: Mapping[CodeLike, T], kind: SourceKind) -> dict[LanguageCode, T]:
    indexed: dict[LanguageCode, T] = {}
    for raw_code, value in data.items():
        code = LanguageCode.lookup(raw_code)
        if code is None:
            logger.warning("Skipping unknown language code %r in %s source", raw_code, kind)
            continue
        indexed[code] = value
    return indexed


@dataclass(frozen=True, slots=True)
class InlineSource:
    """Translation tables held in memory.

    Values may be plain strings, TranslationEntry objects, or the JSON
    conditional form. Decoding happens on fetch; an invalid table degrades
    to empty like any other source failure.

    Example:
        >>> source = InlineSource({
        ...     "en": {"Hello": "Hello"},
        ...     "vi": {"Hello": "Xin chào"},
        ... })
    """

    kind: ClassVar[SourceKind] = SourceKind.INLINE

    data: Mapping[CodeLike, Mapping[str, Any]]
    overwrite: bool = False
    _tables: dict[LanguageCode, Mapping[str, Any]] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_tables", _index_by_code(self.data, self.kind))

    async def fetch_codes(self) -> tuple[LanguageCode, ...]:
        return tuple(self._tables)

    async def fetch_entries(self, code: LanguageCode) -> TranslationTable:
        raw = self._tables.get(code)
        if raw is None:
            return {}
        try:
            return decode_table(raw, location=f"inline:{code}")
        except SourceDecodeError as e:
            log_fetch_failure(e, self.kind)
            return {}


@dataclass(frozen=True, slots=True)
class LazySource:
    """Per-code loaders invoked only when that code is fetched.

    A loader is a zero-argument callable returning the raw table, or an
    awaitable of it. Loaders are not memoized; the Dataset and the cache
    keep what they return.

    Example:
        >>> source = LazySource({
        ...     "en": lambda: {"Hello": "Hello"},
        ...     "vi": load_vietnamese_table,
        ... })
    """

    kind: ClassVar[SourceKind] = SourceKind.LAZY

    loaders: Mapping[CodeLike, TableLoader]
    overwrite: bool = False
    _loaders: dict[LanguageCode, TableLoader] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_loaders", _index_by_code(self.loaders, self.kind))

    async def fetch_codes(self) -> tuple[LanguageCode, ...]:
        return tuple(self._loaders)

    async def fetch_entries(self, code: LanguageCode) -> TranslationTable:
        loader = self._loaders.get(code)
        if loader is None:
            return {}
        location = f"lazy:{code}"
        try:
            raw = loader()
            if inspect.isawaitable(raw):
                raw = await raw
        except Exception as exc:  # noqa: BLE001 - loader failures degrade to empty
            error = SourceFetchError(ErrorTemplate.source_fetch_failed(location, repr(exc)))
            log_fetch_failure(error, self.kind)
            return {}
        try:
            return decode_table(raw, location=location)
        except SourceDecodeError as e:
            log_fetch_failure(e, self.kind)
            return {}


@dataclass(frozen=True, slots=True)
class EmptySource:
    """Source that never yields data.

    Useful as an explicit placeholder in a priority list, e.g. when remote
    overrides are disabled.
    """

    kind: ClassVar[SourceKind] = SourceKind.EMPTY

    overwrite: bool = False

    async def fetch_codes(self) -> tuple[LanguageCode, ...]:
        return ()

    async def fetch_entries(self, code: LanguageCode) -> TranslationTable:
        return {}
