"""In-memory translation tables of a LanguageHelper.

A Dataset holds two parallel sides, ``base`` and ``overrides``, each mapping
LanguageCode -> TranslationTable, plus the supported code list of each side.
Lookups consult overrides first.

Only the active code's tables are normally resident: replace() drops every
other code, mirroring how a helper reloads on change().

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING

from .codes import LanguageCode

if TYPE_CHECKING:
    from .entries import TranslationEntry, TranslationTable

__all__ = ["Dataset"]

logger = logging.getLogger(__name__)


class Dataset:
    """Base and override translation tables with their supported codes.

    Example:
        >>> dataset = Dataset()
        >>> en = LanguageCode.parse("en")
        >>> dataset.set_codes([en])
        >>> dataset.replace(en, {"Hello": LiteralEntry("Hi")})
        >>> dataset.lookup(en, "Hello")
        LiteralEntry(text='Hi')
    """

    __slots__ = ("_base", "_codes", "_codes_overrides", "_overrides")

    def __init__(self) -> None:
        self._base: dict[LanguageCode, TranslationTable] = {}
        self._overrides: dict[LanguageCode, TranslationTable] = {}
        self._codes: dict[LanguageCode, None] = {}
        self._codes_overrides: dict[LanguageCode, None] = {}

    def __repr__(self) -> str:
        return (
            f"Dataset(codes={len(self._codes)}, "
            f"codes_overrides={len(self._codes_overrides)}, "
            f"resident={[c.code for c in self.resident_codes]})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Dataset):
            return NotImplemented
        return (
            self.codes == other.codes
            and self.codes_overrides == other.codes_overrides
            and self._base == other._base
            and self._overrides == other._overrides
        )

    __hash__ = None  # type: ignore[assignment]

    # ------------------------------------------------------------------
    # Supported codes
    # ------------------------------------------------------------------

    @property
    def codes(self) -> tuple[LanguageCode, ...]:
        """Base codes, in source order."""
        return tuple(self._codes)

    @property
    def codes_overrides(self) -> tuple[LanguageCode, ...]:
        """Override codes, in source order."""
        return tuple(self._codes_overrides)

    @property
    def codes_both(self) -> tuple[LanguageCode, ...]:
        """Union of base and override codes, base first."""
        return tuple({**self._codes, **self._codes_overrides})

    def set_codes(self, codes: Iterable[LanguageCode], *, overrides: bool = False) -> None:
        """Replace the supported codes of one side."""
        target = self._codes_overrides if overrides else self._codes
        target.clear()
        target.update(dict.fromkeys(codes))

    def add_codes(
        self, codes: Iterable[LanguageCode], *, overrides: bool = False
    ) -> tuple[LanguageCode, ...]:
        """Union ``codes`` into one side; return the codes that were new."""
        target = self._codes_overrides if overrides else self._codes
        added = tuple(code for code in dict.fromkeys(codes) if code not in target)
        target.update(dict.fromkeys(added))
        return added

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    @property
    def base(self) -> Mapping[LanguageCode, TranslationTable]:
        return MappingProxyType(self._base)

    @property
    def overrides(self) -> Mapping[LanguageCode, TranslationTable]:
        return MappingProxyType(self._overrides)

    @property
    def resident_codes(self) -> tuple[LanguageCode, ...]:
        """Codes whose tables are loaded on either side."""
        return tuple({**self._base, **self._overrides})

    def is_resident(self, code: LanguageCode) -> bool:
        return code in self._base or code in self._overrides

    def table(self, code: LanguageCode, *, overrides: bool = False) -> TranslationTable:
        """The table of one side for ``code`` (empty if not resident)."""
        side = self._overrides if overrides else self._base
        return dict(side.get(code, {}))

    def replace(
        self,
        code: LanguageCode,
        base: Mapping[str, TranslationEntry],
        overrides: Mapping[str, TranslationEntry] | None = None,
    ) -> None:
        """Drop every resident table and install the tables of ``code``."""
        self._base.clear()
        self._overrides.clear()
        self._base[code] = dict(base)
        self._overrides[code] = dict(overrides or {})
        if not base and not overrides:
            logger.debug("No entries available for %s", code)

    def merge(
        self,
        code: LanguageCode,
        entries: Mapping[str, TranslationEntry],
        *,
        overwrite: bool,
        overrides: bool = False,
    ) -> int:
        """Merge ``entries`` into one side of ``code``.

        Absent keys are inserted. Present keys are replaced only when
        ``overwrite`` is true.

        Returns:
            Number of keys inserted or replaced
        """
        side = self._overrides if overrides else self._base
        table = side.setdefault(code, {})
        changed = 0
        for key, entry in entries.items():
            if key in table and not overwrite:
                continue
            table[key] = entry
            changed += 1
        return changed

    def lookup(self, code: LanguageCode, key: str) -> TranslationEntry | None:
        """Entry for ``key``, preferring overrides over base."""
        entry = self._overrides.get(code, {}).get(key)
        if entry is None:
            entry = self._base.get(code, {}).get(key)
        return entry

    def clear(self) -> None:
        """Drop all tables and supported codes."""
        self._base.clear()
        self._overrides.clear()
        self._codes.clear()
        self._codes_overrides.clear()

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def export_json(self, path: str | Path, *, overrides: bool = False) -> Path:
        """Write one side in the asset layout readable by AssetSource.

        codes.json lists the side's supported codes; data/{code}.json is
        written for every resident table.

        Returns:
            The resolved output directory
        """
        from .export import write_asset_layout  # noqa: PLC0415 - circular

        codes = self.codes_overrides if overrides else self.codes
        side = self._overrides if overrides else self._base
        return write_asset_layout(path, codes, side)
