"""Enumerations for langhelper type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class SourceKind(StrEnum):
    """Kind of DataSource.

    StrEnum provides automatic string conversion: str(SourceKind.ASSET) == "asset"
    """

    INLINE = "inline"
    """Translation tables held in memory: InlineSource"""

    LAZY = "lazy"
    """Per-code loaders invoked on demand: LazySource"""

    ASSET = "asset"
    """JSON files on the local filesystem: AssetSource"""

    NETWORK = "network"
    """JSON documents over HTTP GET: NetworkSource"""

    EMPTY = "empty"
    """Placeholder that never yields data: EmptySource"""


class MissReason(StrEnum):
    """Why resolve() fell back to substituting into the raw key."""

    UNSUPPORTED_CODE = "unsupported_code"
    """Target code is not in codes_both"""

    MISSING_TRANSLATION = "missing_translation"
    """Key absent from both the override and base tables"""

    CONDITION_PARAM_MISSING = "condition_param_missing"
    """Conditional entry's parameter not supplied by the caller"""

    CONDITIONAL_BRANCH_MISS = "conditional_branch_miss"
    """No branch matched and no catch-all branch exists"""


class SelectionOrigin(StrEnum):
    """Where the SourceSelector obtained its result."""

    LIVE = "live"
    """A DataSource returned non-empty data"""

    CACHE = "cache"
    """All sources were empty; the persisted copy was used"""

    NONE = "none"
    """Neither a source nor the cache had data"""


__all__ = [
    "MissReason",
    "SelectionOrigin",
    "SourceKind",
]
