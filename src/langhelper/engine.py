"""Translation resolution engine.

Resolves ``(key, params, code)`` to a rendered string:

    1. Unsupported code      -> params substituted into the key (miss)
    2. Key not found         -> params substituted into the key (miss)
    3. LiteralEntry          -> params substituted into the text
    4. ConditionalEntry      -> branch picked by the stringified parameter,
                                then params substituted into the branch

Parameters are written as ``@{name}`` (always replaced) or the legacy bare
``@name`` (replaced only when followed by whitespace or the end of text).
All placeholders are replaced in a single scan, so substituted values are
never expanded again.

resolve() never raises. Misses are logged and reported to an optional
callback as MissingTranslation records.

Python 3.13+.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .codes import CodeLike, LanguageCode
from .diagnostics import Diagnostic, ErrorTemplate
from .entries import ConditionalEntry, LiteralEntry, stringify_param
from .enums import MissReason

if TYPE_CHECKING:
    from .dataset import Dataset

__all__ = [
    "MissingTranslation",
    "TranslationEngine",
    "substitute",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MissingTranslation:
    """A resolve() call that fell back to the raw key.

    Attributes:
        key: The requested translation key
        code: Target code (None when the requested code was unknown)
        reason: Why the fallback happened
        diagnostic: Structured message, as logged
    """

    key: str
    code: LanguageCode | None
    reason: MissReason
    diagnostic: Diagnostic = field(compare=False, repr=False)


def substitute(text: str, params: Mapping[str, Any] | None) -> str:
    """Replace ``@{name}`` and bare ``@name`` placeholders in one pass.

    Example:
        >>> substitute("@{x} and @x", {"x": "V"})
        'V and V'
        >>> substitute("@x-suffix", {"x": "V"})
        '@x-suffix'
    """
    rendered = {str(name): stringify_param(value) for name, value in (params or {}).items() if name}
    if not rendered:
        return text

    # Longest names first so "@name" is not consumed as "@n" + "ame".
    names = "|".join(re.escape(name) for name in sorted(rendered, key=len, reverse=True))
    pattern = re.compile(rf"@\{{({names})\}}|@({names})(?=\s|$)")

    def _replace(match: re.Match[str]) -> str:
        return rendered[match.group(1) or match.group(2)]

    return pattern.sub(_replace, text)


class TranslationEngine:
    """Resolve keys against a Dataset.

    Args:
        dataset: Tables and supported codes to resolve against
        on_missing: Called with a MissingTranslation for every miss
    """

    __slots__ = ("_dataset", "_on_missing")

    def __init__(
        self,
        dataset: Dataset,
        *,
        on_missing: Callable[[MissingTranslation], None] | None = None,
    ) -> None:
        self._dataset = dataset
        self._on_missing = on_missing

    def resolve(
        self,
        key: str,
        params: Mapping[str, Any] | None = None,
        code: CodeLike | None = None,
    ) -> str:
        """Render ``key`` in ``code``. Never raises."""
        target = LanguageCode.lookup(code) if code is not None else None
        if target is None or target not in self._dataset.codes_both:
            supported = tuple(c.code for c in self._dataset.codes_both)
            diagnostic = ErrorTemplate.unsupported_code(str(code), supported)
            return self._miss(key, params, target, MissReason.UNSUPPORTED_CODE, diagnostic)

        entry = self._dataset.lookup(target, key)
        match entry:
            case None:
                diagnostic = ErrorTemplate.missing_translation(key, target.code)
                return self._miss(key, params, target, MissReason.MISSING_TRANSLATION, diagnostic)
            case LiteralEntry(text=text):
                return substitute(text, params)
            case ConditionalEntry():
                return self._resolve_conditional(key, entry, params, target)

    def _resolve_conditional(
        self,
        key: str,
        entry: ConditionalEntry,
        params: Mapping[str, Any] | None,
        code: LanguageCode,
    ) -> str:
        if params is None or entry.param not in params:
            diagnostic = ErrorTemplate.condition_param_missing(key, entry.param)
            return self._miss(key, params, code, MissReason.CONDITION_PARAM_MISSING, diagnostic)

        value = stringify_param(params[entry.param])
        text = entry.select(value)
        if text is None:
            diagnostic = ErrorTemplate.conditional_branch_miss(key, entry.param, value)
            return self._miss(key, params, code, MissReason.CONDITIONAL_BRANCH_MISS, diagnostic)
        return substitute(text, params)

    def _miss(
        self,
        key: str,
        params: Mapping[str, Any] | None,
        code: LanguageCode | None,
        reason: MissReason,
        diagnostic: Diagnostic,
    ) -> str:
        logger.warning("[%s] %s", diagnostic.code.name, diagnostic.message)
        if self._on_missing is not None:
            record = MissingTranslation(key, code, reason, diagnostic)
            try:
                self._on_missing(record)
            except Exception:
                logger.exception("on_missing callback failed for %r", key)
        return substitute(key, params)
