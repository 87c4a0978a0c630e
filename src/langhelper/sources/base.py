"""DataSource protocol and shared decoding helpers.

A DataSource supplies the set of language codes it has data for and the
translation table of one code. Both operations are coroutines that never
raise: a failing source logs a warning and reports nothing, which lets the
SourceSelector move on to the next source or to the persisted cache.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from ..codes import LanguageCode
from ..diagnostics import ErrorTemplate, SourceDecodeError

if TYPE_CHECKING:
    from ..diagnostics import SourceFetchError
    from ..entries import TranslationTable
    from ..enums import SourceKind

__all__ = [
    "DataSource",
    "decode_codes",
    "log_fetch_failure",
    "validate_path_code",
]

logger = logging.getLogger(__name__)


@runtime_checkable
class DataSource(Protocol):
    """Protocol for suppliers of translation data.

    This is a Protocol (structural typing) rather than ABC so applications can
    plug in their own sources without subclassing.

    Implementations must not raise from fetch_codes() or fetch_entries();
    any failure degrades to an empty result.

    Example:
        >>> class RemoteConfigSource:
        ...     kind = SourceKind.NETWORK
        ...     overwrite = False
        ...     async def fetch_codes(self) -> tuple[LanguageCode, ...]:
        ...         return (LanguageCode.parse("en"),)
        ...     async def fetch_entries(self, code: LanguageCode) -> TranslationTable:
        ...         return {"Hello": LiteralEntry("Hello")}
    """

    @property
    def kind(self) -> SourceKind:
        """Kind of source, for logging and diagnostics."""
        ...

    @property
    def overwrite(self) -> bool:
        """Whether add_data() replaces keys that already exist."""
        ...

    async def fetch_codes(self) -> tuple[LanguageCode, ...]:
        """Return the codes this source has data for, in source order."""
        ...

    async def fetch_entries(self, code: LanguageCode) -> TranslationTable:
        """Return the translation table for ``code`` (empty if none)."""
        ...


def decode_codes(raw: Any, *, location: str) -> tuple[LanguageCode, ...]:
    """Decode a raw code list into LanguageCodes, keeping source order.

    Unknown codes are skipped with a warning; duplicates are dropped.

    Raises:
        SourceDecodeError: If ``raw`` is not a list of strings
    """
    if isinstance(raw, str | bytes | Mapping) or not isinstance(raw, Iterable):
        reason = f"expected an array of codes, got {type(raw).__name__}"
        raise SourceDecodeError(ErrorTemplate.source_decode_failed(location, reason))

    result: dict[LanguageCode, None] = {}
    for item in raw:
        if not isinstance(item, str | LanguageCode):
            reason = f"code {item!r} is not a string"
            raise SourceDecodeError(ErrorTemplate.source_decode_failed(location, reason))
        code = LanguageCode.lookup(item)
        if code is None:
            logger.warning("Skipping unknown language code %r from %s", item, location)
            continue
        result.setdefault(code, None)
    return tuple(result)


def validate_path_code(code: LanguageCode) -> str:
    """Return ``code.code`` if it is safe to use as a path segment.

    Raises:
        SourceDecodeError: If the code contains separators or traversal sequences
    """
    value = code.code
    if not value or ".." in value or "/" in value or "\\" in value:
        raise SourceDecodeError(ErrorTemplate.unsafe_code_path(value))
    return value


def log_fetch_failure(error: SourceFetchError, kind: SourceKind) -> None:
    """Log a degraded fetch at WARNING with its diagnostic code."""
    diagnostic = error.diagnostic
    if diagnostic is None:
        logger.warning("%s source failed: %s", kind, error)
        return
    logger.warning("%s source failed [%s]: %s", kind, diagnostic.code.name, diagnostic.message)
