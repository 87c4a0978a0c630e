"""Shared test data and DataSource doubles.

Provides:
    BASE_DATA - Two-language table with literal and conditional entries
    EN, VI - LanguageCodes used throughout the suite
    fixed_config - LanguageConfig with a deterministic device code
    CountingSource - Wraps a source and counts fetch calls
    RaisingSource - Custom source that breaks the never-raise contract
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from langhelper import InlineSource, LanguageCode, LanguageConfig, SourceKind
from langhelper.entries import TranslationTable

EN = LanguageCode.parse("en")
VI = LanguageCode.parse("vi")
FR = LanguageCode.parse("fr")

BASE_DATA: dict[str, dict[str, Any]] = {
    "en": {
        "Hello": "Hello",
        "Hello @{name}": "Hello @{name}",
        "You have @{n} apples": {
            "param": "n",
            "conditions": {
                "0": "You have no apples",
                "1": "You have one apple",
                "_": "You have @{n} apples",
            },
        },
    },
    "vi": {
        "Hello": "Xin chào",
        "Hello @{name}": "Xin chào @{name}",
        "You have @{n} apples": {
            "param": "n",
            "conditions": {"0": "Bạn không có táo", "_": "Bạn có @{n} quả táo"},
        },
    },
}


def fixed_config(**overrides: Any) -> LanguageConfig:
    """LanguageConfig whose device code is always "en"."""
    options: dict[str, Any] = {"device_code": lambda: "en"}
    options.update(overrides)
    return LanguageConfig(**options)


@dataclass
class CountingSource:
    """Delegates to ``inner`` and records every call."""

    inner: Any
    overwrite: bool = False
    code_calls: int = 0
    entry_calls: list[LanguageCode] = field(default_factory=list)

    @property
    def kind(self) -> SourceKind:
        return self.inner.kind

    async def fetch_codes(self) -> tuple[LanguageCode, ...]:
        self.code_calls += 1
        return await self.inner.fetch_codes()

    async def fetch_entries(self, code: LanguageCode) -> TranslationTable:
        self.entry_calls.append(code)
        return await self.inner.fetch_entries(code)


def counting(data: dict[str, dict[str, Any]], *, overwrite: bool = False) -> CountingSource:
    return CountingSource(InlineSource(data), overwrite=overwrite)


class RaisingSource:
    """Misbehaving custom source: raises from both operations."""

    kind = SourceKind.NETWORK
    overwrite = False

    async def fetch_codes(self) -> tuple[LanguageCode, ...]:
        msg = "boom"
        raise RuntimeError(msg)

    async def fetch_entries(self, code: LanguageCode) -> TranslationTable:
        msg = "boom"
        raise RuntimeError(msg)
