"""Language code value type.

LanguageCode pairs a canonical locale identifier with its English and native
display names. The universe of valid codes is the set of locales Babel ships
CLDR data for.

Python 3.13+.
"""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass, field

from .constants import MAX_LOCALE_CACHE_SIZE
from .diagnostics import ErrorTemplate, UnknownLanguageCodeError
from .locale_utils import canonicalize_locale, get_babel_locale

__all__ = [
    "CodeLike",
    "LanguageCode",
    "clear_language_code_cache",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LanguageCode:
    """Immutable language identifier with display metadata.

    Equality and hashing use ``code`` only, so a LanguageCode built by hand
    matches the one returned by lookup().

    Attributes:
        code: Canonical POSIX-style identifier (e.g., "en", "en_US", "zh_CN")
        name: English display name (e.g., "English (United States)")
        native_name: Display name in the language itself (e.g., "Tiếng Việt")

    Example:
        >>> vi = LanguageCode.parse("vi")
        >>> vi.name, vi.native_name
        ('Vietnamese', 'Tiếng Việt')
        >>> LanguageCode.lookup("not-a-language") is None
        True
    """

    code: str
    name: str = field(default="", compare=False)
    native_name: str = field(default="", compare=False)

    def __str__(self) -> str:
        return self.code

    @property
    def language(self) -> str:
        """Base language subtag ("en" for "en_US")."""
        return self.code.split("_", 1)[0]

    @property
    def territory(self) -> str | None:
        """Region subtag, or None when the code has none or is malformed."""
        from babel.core import parse_locale  # noqa: PLC0415

        try:
            return parse_locale(self.code)[1]
        except ValueError:
            return None

    @property
    def base(self) -> LanguageCode | None:
        """LanguageCode for the base language, or None if already a base code."""
        if self.language == self.code:
            return None
        return LanguageCode.lookup(self.language)

    @classmethod
    def lookup(cls, code: CodeLike) -> LanguageCode | None:
        """Return the LanguageCode for ``code``, or None if unknown.

        Never raises. Hyphenated and mis-cased input is accepted. A
        LanguageCode built by hand is checked like a string.
        """
        if isinstance(code, LanguageCode):
            code = code.code
        if not isinstance(code, str):
            return None
        canonical = canonicalize_locale(code)
        if canonical is None:
            return None
        return _lookup_canonical(canonical)

    @classmethod
    def parse(cls, code: CodeLike) -> LanguageCode:
        """Return the LanguageCode for ``code``.

        Raises:
            UnknownLanguageCodeError: If the code is not a known locale
        """
        result = cls.lookup(code)
        if result is None:
            raise UnknownLanguageCodeError(ErrorTemplate.unknown_language_code(str(code)))
        return result

    @classmethod
    def all(cls) -> tuple[LanguageCode, ...]:
        """Every known LanguageCode, sorted by code."""
        return _all_codes()


type CodeLike = LanguageCode | str


@functools.lru_cache(maxsize=MAX_LOCALE_CACHE_SIZE)
def _lookup_canonical(canonical: str) -> LanguageCode | None:
    from babel.core import UnknownLocaleError  # noqa: PLC0415

    try:
        locale = get_babel_locale(canonical)
    except (UnknownLocaleError, ValueError, TypeError):
        logger.debug("Unknown language code %r", canonical)
        return None

    name = locale.get_display_name("en") or canonical
    native_name = locale.get_display_name() or name
    return LanguageCode(canonical, name, native_name)


@functools.cache
def _all_codes() -> tuple[LanguageCode, ...]:
    from babel import localedata  # noqa: PLC0415

    result: dict[LanguageCode, None] = {}
    for identifier in localedata.locale_identifiers():
        if identifier == "root":
            continue
        code = LanguageCode.lookup(identifier)
        if code is not None:
            result.setdefault(code, None)
    return tuple(sorted(result, key=lambda c: c.code))


def clear_language_code_cache() -> None:
    """Clear cached LanguageCode lookups."""
    _lookup_canonical.cache_clear()
    _all_codes.cache_clear()
