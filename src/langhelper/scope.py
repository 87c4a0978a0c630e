"""Helper scoping and translation shortcuts.

Code that renders text usually should not carry a LanguageHelper around.
use_helper() makes a helper current for a block (per thread and per asyncio
task, via contextvars); the tr* shortcuts translate through the current
helper, or the process-wide default helper when no scope is active.

    with use_helper(shop_helper):
        title = tr("Cart")
        subtitle = tr_p("You have @{n} items", {"n": 3})

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Mapping
from contextvars import ContextVar, Token
from typing import TYPE_CHECKING, Any

from .helper import LanguageHelper, get_default_helper

if TYPE_CHECKING:
    from .codes import CodeLike

__all__ = [
    "HelperScope",
    "current_helper",
    "tr",
    "tr_c",
    "tr_f",
    "tr_p",
    "tr_t",
    "use_helper",
]

# Innermost scope last. A tuple, so nested scopes never mutate the outer value.
_helper_stack: ContextVar[tuple[LanguageHelper, ...]] = ContextVar(
    "langhelper_helper_stack", default=()
)


class HelperScope:
    """Context manager making a helper current for the enclosed block.

    Scopes nest; leaving one restores the previously current helper.
    """

    __slots__ = ("_helper", "_token")

    def __init__(self, helper: LanguageHelper) -> None:
        self._helper = helper
        self._token: Token[tuple[LanguageHelper, ...]] | None = None

    def __enter__(self) -> LanguageHelper:
        if self._token is not None:
            msg = "HelperScope is not reentrant"
            raise RuntimeError(msg)
        self._token = _helper_stack.set((*_helper_stack.get(), self._helper))
        return self._helper

    def __exit__(self, *exc_info: object) -> None:
        if self._token is not None:
            _helper_stack.reset(self._token)
            self._token = None


def use_helper(helper: LanguageHelper) -> HelperScope:
    """Return a scope that makes ``helper`` current inside ``with``."""
    return HelperScope(helper)


def current_helper() -> LanguageHelper:
    """Innermost scoped helper, else the default helper."""
    stack = _helper_stack.get()
    return stack[-1] if stack else get_default_helper()


def tr(text: str) -> str:
    """Translate ``text`` with the current helper."""
    return current_helper().translate(text)


def tr_p(text: str, params: Mapping[str, Any]) -> str:
    """Translate ``text`` with parameters."""
    return current_helper().translate(text, params)


def tr_t(text: str, code: CodeLike) -> str:
    """Translate ``text`` into ``code`` instead of the active code."""
    return current_helper().translate(text, code=code)


def tr_f(
    text: str,
    *,
    params: Mapping[str, Any] | None = None,
    code: CodeLike | None = None,
) -> str:
    """Translate ``text`` with optional parameters and target code."""
    return current_helper().translate(text, params, code)


def tr_c(
    text: str,
    helper: LanguageHelper,
    *,
    params: Mapping[str, Any] | None = None,
    code: CodeLike | None = None,
) -> str:
    """Translate ``text`` with an explicit helper, ignoring any scope."""
    return helper.translate(text, params, code)
