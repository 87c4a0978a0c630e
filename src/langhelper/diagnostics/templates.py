"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode

__all__ = ["ErrorTemplate"]


class ErrorTemplate:
    """Centralized error message templates.

    All diagnostic messages are created here. NO f-strings in exception constructors!
    Keeps log output and exception text consistent and testable.
    """

    @staticmethod
    def missing_translation(key: str, code: str) -> Diagnostic:
        """Key has no entry for the target code.

        Args:
            key: The translation key that was not found
            code: The target language code

        Returns:
            Diagnostic for MISSING_TRANSLATION
        """
        msg = f"Key '{key}' has no translation for '{code}'"
        return Diagnostic(
            code=DiagnosticCode.MISSING_TRANSLATION,
            message=msg,
            hint="Add the key to the data source for this language",
            language_code=code,
            key=key,
            severity="warning",
        )

    @staticmethod
    def unsupported_code(code: str, supported: tuple[str, ...]) -> Diagnostic:
        """Language code is not among the supported codes.

        Args:
            code: The requested language code
            supported: Codes currently supported (base + overrides)

        Returns:
            Diagnostic for UNSUPPORTED_CODE
        """
        msg = f"Language code '{code}' is not available in the loaded data"
        return Diagnostic(
            code=DiagnosticCode.UNSUPPORTED_CODE,
            message=msg,
            hint=f"Supported codes: {', '.join(supported) or '<none>'}",
            language_code=code,
            severity="warning",
        )

    @staticmethod
    def condition_param_missing(key: str, param: str) -> Diagnostic:
        """Conditional entry parameter was not supplied.

        Args:
            key: The translation key of the conditional entry
            param: The parameter the entry branches on

        Returns:
            Diagnostic for CONDITION_PARAM_MISSING
        """
        msg = f"Parameters for '{key}' do not contain the condition param '{param}'"
        return Diagnostic(
            code=DiagnosticCode.CONDITION_PARAM_MISSING,
            message=msg,
            hint=f"Pass '{param}' in params when translating this key",
            key=key,
            severity="warning",
        )

    @staticmethod
    def conditional_branch_miss(key: str, param: str, value: str) -> Diagnostic:
        """No branch matched and the entry has no catch-all.

        Args:
            key: The translation key of the conditional entry
            param: The parameter the entry branches on
            value: The stringified parameter value

        Returns:
            Diagnostic for CONDITIONAL_BRANCH_MISS
        """
        msg = f"No branch of '{key}' matches {param}={value!r} and there is no catch-all"
        return Diagnostic(
            code=DiagnosticCode.CONDITIONAL_BRANCH_MISS,
            message=msg,
            hint="Add a '_' branch to cover unmatched values",
            key=key,
            severity="warning",
        )

    @staticmethod
    def source_fetch_failed(location: str, reason: str) -> Diagnostic:
        """Transport failure while fetching source data.

        Args:
            location: Path or URL that was read
            reason: Underlying error text

        Returns:
            Diagnostic for SOURCE_FETCH_FAILED
        """
        msg = f"Failed to fetch '{location}': {reason}"
        return Diagnostic(
            code=DiagnosticCode.SOURCE_FETCH_FAILED,
            message=msg,
            location=location,
            severity="warning",
        )

    @staticmethod
    def source_decode_failed(location: str, reason: str) -> Diagnostic:
        """Source data could not be decoded.

        Args:
            location: Path, URL or description of the data
            reason: What was wrong with the data

        Returns:
            Diagnostic for SOURCE_DECODE_FAILED
        """
        msg = f"Invalid translation data in '{location}': {reason}"
        return Diagnostic(
            code=DiagnosticCode.SOURCE_DECODE_FAILED,
            message=msg,
            hint="Values must be strings or {\"param\": ..., \"conditions\": {...}} objects",
            location=location,
        )

    @staticmethod
    def cache_decode_failed(key: str, reason: str) -> Diagnostic:
        """Persisted cache value could not be decoded.

        Args:
            key: The cache key
            reason: What was wrong with the value

        Returns:
            Diagnostic for CACHE_DECODE_FAILED
        """
        msg = f"Ignoring unreadable cache value '{key}': {reason}"
        return Diagnostic(
            code=DiagnosticCode.CACHE_DECODE_FAILED,
            message=msg,
            key=key,
            severity="warning",
        )

    @staticmethod
    def unsafe_code_path(code: str) -> Diagnostic:
        """Language code cannot be used as a file or URL path segment.

        Args:
            code: The offending code

        Returns:
            Diagnostic for UNSAFE_CODE_PATH
        """
        msg = f"Path separators or traversal sequences not allowed in code: '{code}'"
        return Diagnostic(
            code=DiagnosticCode.UNSAFE_CODE_PATH,
            message=msg,
            language_code=code,
        )

    @staticmethod
    def not_initialized(prefix: str) -> Diagnostic:
        """Helper used before initial().

        Args:
            prefix: Instance prefix of the helper

        Returns:
            Diagnostic for NOT_INITIALIZED
        """
        msg = f"LanguageHelper '{prefix}' is not initialized"
        return Diagnostic(
            code=DiagnosticCode.NOT_INITIALIZED,
            message=msg,
            hint="Await initial() before reading the active code",
        )

    @staticmethod
    def unknown_language_code(code: str) -> Diagnostic:
        """Code not part of the CLDR language universe.

        Args:
            code: The unknown code

        Returns:
            Diagnostic for UNKNOWN_LANGUAGE_CODE
        """
        msg = f"Unknown language code: '{code}'"
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_LANGUAGE_CODE,
            message=msg,
            hint="Use a CLDR locale identifier such as 'en', 'vi' or 'zh_CN'",
            language_code=code,
        )

    @staticmethod
    def no_data_sources() -> Diagnostic:
        """initial() called without any base source.

        Returns:
            Diagnostic for NO_DATA_SOURCES
        """
        return Diagnostic(
            code=DiagnosticCode.NO_DATA_SOURCES,
            message="At least one data source is required",
            hint="Pass InlineSource/AssetSource/NetworkSource instances to initial()",
        )

    @staticmethod
    def change_refused(code: str) -> Diagnostic:
        """change() target unsupported and no usable fallback.

        Args:
            code: The requested code

        Returns:
            Diagnostic for CHANGE_REFUSED
        """
        msg = f"Cannot change language to '{code}'"
        return Diagnostic(
            code=DiagnosticCode.CHANGE_REFUSED,
            message=msg,
            hint="Enable use_initial_code_when_unavailable with a supported initial_code",
            language_code=code,
            severity="warning",
        )
