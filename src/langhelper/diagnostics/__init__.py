"""Diagnostic system for langhelper.

Provides structured diagnostics with codes and hints, the exception
hierarchy, message templates, and output formatting.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    LanguageHelperError,
    NotInitializedError,
    SourceDecodeError,
    SourceFetchError,
    UnknownLanguageCodeError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorTemplate",
    "LanguageHelperError",
    "NotInitializedError",
    "OutputFormat",
    "SourceDecodeError",
    "SourceFetchError",
    "UnknownLanguageCodeError",
]
