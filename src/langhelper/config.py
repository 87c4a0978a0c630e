"""Configuration for LanguageHelper.

Provides a single frozen dataclass that encapsulates every initial()
option, validated at construction time.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .codes import CodeLike, LanguageCode

if TYPE_CHECKING:
    from .engine import MissingTranslation

__all__ = ["LanguageConfig"]


@dataclass(frozen=True, slots=True)
class LanguageConfig:
    """Immutable configuration for LanguageHelper.initial().

    All fields have defaults; ``LanguageConfig()`` starts from the device
    language, remembers the user's choice, and follows device changes.

    Attributes:
        initial_code: Requested starting code. Accepts a string, which is
            parsed into a LanguageCode (unknown codes raise ValueError).
        use_initial_code_when_unavailable: change() to an unsupported code
            switches to ``initial_code`` instead of doing nothing.
        force_rebuild: Notify every subscriber, not only the outermost ones.
        auto_save: Persist the selected code and restore it on next start.
        sync_with_device: Switch to the device language when it changed
            since the previous start.
        optional_country_code: Retry "xx_YY" as "xx" when only the base
            language is supported.
        on_changed: Called with the committed code after every change().
        on_missing: Called with a MissingTranslation record for every miss.
        device_code: Returns the platform locale string. Defaults to
            get_system_locale().

    Example:
        >>> config = LanguageConfig(
        ...     initial_code="vi",
        ...     sync_with_device=False,
        ...     on_changed=lambda code: print("now", code),
        ... )
    """

    initial_code: CodeLike | None = None
    use_initial_code_when_unavailable: bool = False
    force_rebuild: bool = False
    auto_save: bool = True
    sync_with_device: bool = True
    optional_country_code: bool = True
    on_changed: Callable[[LanguageCode], None] | None = None
    on_missing: Callable[[MissingTranslation], None] | None = None
    device_code: Callable[[], str] | None = None

    def __post_init__(self) -> None:
        """Normalize initial_code and validate callbacks.

        Raises:
            UnknownLanguageCodeError: If initial_code is not a known code
            TypeError: If a callback field is not callable
        """
        if self.initial_code is not None:
            object.__setattr__(self, "initial_code", LanguageCode.parse(self.initial_code))
        for name in ("on_changed", "on_missing", "device_code"):
            value = getattr(self, name)
            if value is not None and not callable(value):
                msg = f"{name} must be callable, got {type(value).__name__}"
                raise TypeError(msg)

    @property
    def initial(self) -> LanguageCode | None:
        """``initial_code`` as a LanguageCode (always normalized)."""
        return self.initial_code if isinstance(self.initial_code, LanguageCode) else None
