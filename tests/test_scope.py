"""Tests for helper scoping and the tr* shortcuts.

Python 3.13+.
"""

import asyncio

import pytest

from langhelper import (
    InlineSource,
    LanguageHelper,
    current_helper,
    get_default_helper,
    tr,
    tr_c,
    tr_f,
    tr_p,
    tr_t,
    use_helper,
)
from langhelper.scope import HelperScope
from tests.helpers.sources import BASE_DATA, fixed_config


class TestCurrentHelper:
    def test_default_without_scope(self) -> None:
        assert current_helper() is get_default_helper()

    def test_scope_sets_and_restores(self) -> None:
        helper = LanguageHelper("Scoped")
        with use_helper(helper) as scoped:
            assert scoped is helper
            assert current_helper() is helper
        assert current_helper() is get_default_helper()

    def test_nested_scopes(self) -> None:
        outer, inner = LanguageHelper("Outer"), LanguageHelper("Inner")
        with use_helper(outer):
            with use_helper(inner):
                assert current_helper() is inner
            assert current_helper() is outer

    def test_restored_after_exception(self) -> None:
        helper = LanguageHelper("Scoped")
        with pytest.raises(KeyError), use_helper(helper):
            raise KeyError("boom")
        assert current_helper() is get_default_helper()

    def test_not_reentrant(self) -> None:
        scope = HelperScope(LanguageHelper("Scoped"))
        with scope, pytest.raises(RuntimeError, match="not reentrant"), scope:
            pass

    @pytest.mark.asyncio
    async def test_tasks_isolated(self) -> None:
        first, second = LanguageHelper("First"), LanguageHelper("Second")

        async def observe(helper: LanguageHelper) -> LanguageHelper:
            with use_helper(helper):
                await asyncio.sleep(0)
                return current_helper()

        results = await asyncio.gather(observe(first), observe(second))
        assert results == [first, second]
        assert results[0] is first
        assert results[1] is second


class TestShortcuts:
    """tr* shortcuts translate through the current helper."""

    @pytest.mark.asyncio
    async def test_shortcuts(self) -> None:
        helper = LanguageHelper("Scoped")
        await helper.initial([InlineSource(BASE_DATA)], config=fixed_config(initial_code="vi"))
        with use_helper(helper):
            assert tr("Hello") == "Xin chào"
            assert tr_p("Hello @{name}", {"name": "An"}) == "Xin chào An"
            assert tr_t("Hello", "vi") == "Xin chào"
            assert tr_f("You have @{n} apples", params={"n": 0}) == "Bạn không có táo"
            assert tr_f("Hello", code="en") == "Hello"

    @pytest.mark.asyncio
    async def test_explicit_helper_ignores_scope(self) -> None:
        vi_helper = LanguageHelper("Vi")
        await vi_helper.initial([InlineSource(BASE_DATA)], config=fixed_config(initial_code="vi"))
        en_helper = LanguageHelper("En")
        await en_helper.initial([InlineSource(BASE_DATA)], config=fixed_config())
        with use_helper(en_helper):
            assert tr_c("Hello", vi_helper) == "Xin chào"
            assert tr("Hello") == "Hello"

    @pytest.mark.asyncio
    async def test_default_helper(self) -> None:
        await get_default_helper().initial(
            [InlineSource(BASE_DATA)], config=fixed_config(initial_code="vi")
        )
        assert tr("Hello") == "Xin chào"

    def test_uninitialized_default_returns_key(self) -> None:
        assert tr_p("Hello @{name}", {"name": "An"}) == "Hello An"
