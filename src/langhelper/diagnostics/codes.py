"""Diagnostic codes and data structures.

Defines error codes and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Resolution misses (non-fatal, key substituted instead)
        2000-2999: Source failures (degraded to empty, cache fallback)
        3000-3999: Lifecycle and configuration errors
    """

    # Resolution misses (1000-1999)
    MISSING_TRANSLATION = 1001
    UNSUPPORTED_CODE = 1002
    CONDITION_PARAM_MISSING = 1003
    CONDITIONAL_BRANCH_MISS = 1004

    # Source failures (2000-2999)
    SOURCE_FETCH_FAILED = 2001
    SOURCE_DECODE_FAILED = 2002
    CACHE_DECODE_FAILED = 2003
    UNSAFE_CODE_PATH = 2004

    # Lifecycle and configuration errors (3000-3999)
    NOT_INITIALIZED = 3001
    UNKNOWN_LANGUAGE_CODE = 3002
    NO_DATA_SOURCES = 3003
    CHANGE_REFUSED = 3004


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        language_code: Language code involved (if any)
        key: Translation key involved (if any)
        location: Path or URL involved (if any)
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    language_code: str | None = None
    key: str | None = None
    location: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like a compiler message.

        Example output:
            warning[MISSING_TRANSLATION]: Key 'Hello' has no translation for 'vi'
              = code: vi
              = help: Add the key to the data source for this language

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
