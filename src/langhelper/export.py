"""Export translation data to the JSON asset layout.

Writes ``codes.json`` and ``data/{code}.json`` (UTF-8, 2-space indent,
non-ASCII kept as-is). The output is exactly what AssetSource reads, so
export followed by load reproduces the same tables.

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from typing import Any

from .codes import CodeLike, LanguageCode
from .constants import CODES_FILE, DATA_DIR, DATA_FILE_SUFFIX, EXPORT_INDENT
from .entries import TranslationEntry, decode_table, encode_table
from .sources.base import validate_path_code

__all__ = [
    "export_json",
    "write_asset_layout",
]

logger = logging.getLogger(__name__)


def _write_json(path: Path, value: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    text = json.dumps(value, ensure_ascii=False, indent=EXPORT_INDENT)
    path.write_text(text + "\n", encoding="utf-8")


def write_asset_layout(
    path: str | Path,
    codes: Iterable[LanguageCode],
    tables: Mapping[LanguageCode, Mapping[str, TranslationEntry]],
) -> Path:
    """Write ``codes`` and decoded ``tables`` under ``path``.

    Raises:
        SourceDecodeError: If a code is unsafe as a file name
        OSError: If the files cannot be written
    """
    root = Path(path)
    codes = tuple(codes)
    _write_json(root / CODES_FILE, [code.code for code in codes])
    for code, table in tables.items():
        segment = validate_path_code(code)
        _write_json(root / DATA_DIR / f"{segment}{DATA_FILE_SUFFIX}", encode_table(table))
    logger.info("Exported %d codes and %d tables to %s", len(codes), len(tables), root)
    return root.resolve()


def export_json(
    data: Mapping[CodeLike, Mapping[str, Any] | Callable[[], Mapping[str, Any]]],
    path: str | Path = "assets/languages",
) -> Path:
    """Export raw translation data to the asset layout.

    ``data`` has the shape InlineSource accepts; values may also be
    zero-argument callables returning the table, as with LazySource.
    codes.json lists the codes in mapping order.

    Raises:
        UnknownLanguageCodeError: If a code is unknown
        SourceDecodeError: If a table holds an invalid value
    """
    tables: dict[LanguageCode, Mapping[str, TranslationEntry]] = {}
    for raw_code, value in data.items():
        code = LanguageCode.parse(raw_code)
        raw = value() if callable(value) else value
        tables[code] = decode_table(raw, location=f"export:{code}")
    return write_asset_layout(path, tables.keys(), tables)
