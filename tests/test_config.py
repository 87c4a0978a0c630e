"""Tests for LanguageConfig validation.

Python 3.13+.
"""

import dataclasses

import pytest

from langhelper import LanguageCode, LanguageConfig, UnknownLanguageCodeError


class TestDefaults:
    def test_defaults(self) -> None:
        config = LanguageConfig()
        assert config.initial is None
        assert config.auto_save is True
        assert config.sync_with_device is True
        assert config.optional_country_code is True
        assert config.force_rebuild is False
        assert config.use_initial_code_when_unavailable is False

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            LanguageConfig().auto_save = False  # type: ignore[misc]


class TestInitialCode:
    def test_string_parsed(self) -> None:
        config = LanguageConfig(initial_code="vi-VN")
        assert config.initial == LanguageCode.parse("vi_VN")
        assert isinstance(config.initial_code, LanguageCode)

    def test_language_code_kept(self) -> None:
        vi = LanguageCode.parse("vi")
        assert LanguageConfig(initial_code=vi).initial is vi

    def test_unknown_code_rejected(self) -> None:
        with pytest.raises(UnknownLanguageCodeError):
            LanguageConfig(initial_code="xx")


class TestCallbacks:
    @pytest.mark.parametrize("name", ["on_changed", "on_missing", "device_code"])
    def test_non_callable_rejected(self, name: str) -> None:
        with pytest.raises(TypeError, match=f"{name} must be callable"):
            LanguageConfig(**{name: "nope"})  # type: ignore[arg-type]

    def test_callables_accepted(self) -> None:
        config = LanguageConfig(on_changed=print, device_code=lambda: "en")
        assert config.on_changed is print
