"""Translation entry types and their JSON codec.

A translation table maps a key (the untranslated source text) to either a
literal replacement or a conditional entry that picks a branch based on the
value of one parameter:

    {
        "Hello": "Xin chào",
        "You have @{n} apples": {
            "param": "n",
            "conditions": {"0": "Không có táo", "1": "Một quả táo", "_": "@{n} quả táo"}
        }
    }

Raw values are decoded once at load time. Anything that is neither form is
rejected with SourceDecodeError.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from .constants import (
    CATCH_ALL_KEY,
    CONDITION_BRANCHES_FIELD,
    CONDITION_PARAM_FIELD,
    LEGACY_CATCH_ALL_KEY,
)
from .diagnostics import ErrorTemplate, SourceDecodeError

__all__ = [
    "ConditionalEntry",
    "LiteralEntry",
    "TranslationEntry",
    "TranslationTable",
    "decode_entry",
    "decode_table",
    "encode_entry",
    "encode_table",
    "stringify_param",
]


@dataclass(frozen=True, slots=True)
class LiteralEntry:
    """Plain replacement text."""

    text: str


@dataclass(frozen=True, slots=True)
class ConditionalEntry:
    """Branch selection on the stringified value of one parameter.

    Attributes:
        param: Name of the parameter the entry branches on
        branches: Read-only ordered mapping from parameter value to text.
            ``"_"`` (or the legacy ``"default"``) is the catch-all.
    """

    param: str
    branches: Mapping[str, str]

    def __post_init__(self) -> None:
        object.__setattr__(self, "branches", MappingProxyType(dict(self.branches)))

    def __hash__(self) -> int:
        return hash((self.param, tuple(self.branches.items())))

    @property
    def catch_all(self) -> str | None:
        """Catch-all branch text, preferring ``"_"`` over ``"default"``."""
        if CATCH_ALL_KEY in self.branches:
            return self.branches[CATCH_ALL_KEY]
        return self.branches.get(LEGACY_CATCH_ALL_KEY)

    def select(self, value: str) -> str | None:
        """Return the branch for ``value``, the catch-all, or None."""
        if value in self.branches:
            return self.branches[value]
        return self.catch_all


type TranslationEntry = LiteralEntry | ConditionalEntry
type TranslationTable = dict[str, TranslationEntry]


def stringify_param(value: object) -> str:
    """Render a parameter value the way branch keys are written.

    Booleans become ``"true"``/``"false"`` and None becomes ``"null"``;
    everything else uses str().
    """
    match value:
        case True:
            return "true"
        case False:
            return "false"
        case None:
            return "null"
        case _:
            return str(value)


def decode_entry(value: Any, *, key: str = "", location: str = "<inline>") -> TranslationEntry:
    """Decode one raw table value into a TranslationEntry.

    Args:
        value: str, an existing entry, or a ``{"param", "conditions"}`` mapping
        key: Translation key, used in error messages
        location: Where the value came from, used in error messages

    Raises:
        SourceDecodeError: If the value has neither shape
    """
    match value:
        case LiteralEntry() | ConditionalEntry():
            return value
        case str():
            return LiteralEntry(value)
        case Mapping():
            return _decode_conditional(value, key, location)
        case _:
            reason = f"value of '{key}' is {type(value).__name__}"
            raise SourceDecodeError(ErrorTemplate.source_decode_failed(location, reason))


def _decode_conditional(value: Mapping[Any, Any], key: str, location: str) -> ConditionalEntry:
    param = value.get(CONDITION_PARAM_FIELD)
    branches = value.get(CONDITION_BRANCHES_FIELD)
    if not isinstance(param, str) or not param:
        reason = f"'{key}' has no string '{CONDITION_PARAM_FIELD}' field"
        raise SourceDecodeError(ErrorTemplate.source_decode_failed(location, reason))
    if not isinstance(branches, Mapping):
        reason = f"'{key}' has no '{CONDITION_BRANCHES_FIELD}' object"
        raise SourceDecodeError(ErrorTemplate.source_decode_failed(location, reason))
    for branch_key, text in branches.items():
        if not isinstance(branch_key, str) or not isinstance(text, str):
            reason = f"branch {branch_key!r} of '{key}' is not a string pair"
            raise SourceDecodeError(ErrorTemplate.source_decode_failed(location, reason))
    return ConditionalEntry(param, branches)


def decode_table(raw: Any, *, location: str = "<inline>") -> TranslationTable:
    """Decode a raw ``key -> value`` mapping into a TranslationTable.

    Raises:
        SourceDecodeError: If ``raw`` is not a mapping or any value is invalid
    """
    if not isinstance(raw, Mapping):
        reason = f"expected an object, got {type(raw).__name__}"
        raise SourceDecodeError(ErrorTemplate.source_decode_failed(location, reason))

    table: TranslationTable = {}
    for key, value in raw.items():
        if not isinstance(key, str):
            reason = f"key {key!r} is not a string"
            raise SourceDecodeError(ErrorTemplate.source_decode_failed(location, reason))
        table[key] = decode_entry(value, key=key, location=location)
    return table


def encode_entry(entry: TranslationEntry) -> str | dict[str, Any]:
    """Encode an entry back into its JSON form."""
    match entry:
        case LiteralEntry(text=text):
            return text
        case ConditionalEntry(param=param, branches=branches):
            return {
                CONDITION_PARAM_FIELD: param,
                CONDITION_BRANCHES_FIELD: dict(branches),
            }


def encode_table(table: Mapping[str, TranslationEntry]) -> dict[str, Any]:
    """Encode a TranslationTable into a JSON-ready dict, preserving key order."""
    return {key: encode_entry(entry) for key, entry in table.items()}
