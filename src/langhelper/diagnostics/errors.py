"""Exception hierarchy with structured diagnostics.

All exceptions optionally store a Diagnostic object for rich error information.
Resolution misses are never raised; they are reported as MissingTranslation
records (see langhelper.engine).

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic

__all__ = [
    "LanguageHelperError",
    "NotInitializedError",
    "SourceDecodeError",
    "SourceFetchError",
    "UnknownLanguageCodeError",
]


class LanguageHelperError(Exception):
    """Base exception for all langhelper errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize LanguageHelperError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class SourceFetchError(LanguageHelperError):
    """A DataSource could not produce codes or entries.

    Raised by transports and decoders; DataSource implementations catch it
    at their boundary and degrade to an empty result.
    """


class SourceDecodeError(SourceFetchError):
    """Source data did not decode into the entry union.

    Example:
        {"Hello": 42}  <- neither a string nor a {param, conditions} object
    """


class UnknownLanguageCodeError(LanguageHelperError, ValueError):
    """Language code is not part of the known universe.

    Only raised by LanguageCode.parse(); LanguageCode.lookup() returns None.
    """


class NotInitializedError(LanguageHelperError, RuntimeError):
    """LanguageHelper state accessed before initial() completed."""
