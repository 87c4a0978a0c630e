"""Filesystem DataSource reading the JSON asset layout.

Layout under ``base_path``:

    codes.json          ["en", "vi", ...]
    data/en.json        {"Hello": "Hello", ...}
    data/vi.json        {"Hello": "Xin chào", ...}

This is the same layout export_json() writes.

Python 3.13+.
"""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, ClassVar

from ..codes import LanguageCode
from ..constants import CODES_FILE, DATA_DIR, DATA_FILE_SUFFIX
from ..diagnostics import ErrorTemplate, SourceDecodeError, SourceFetchError
from ..entries import TranslationTable, decode_table
from ..enums import SourceKind
from .base import decode_codes, log_fetch_failure, validate_path_code

__all__ = ["AssetSource", "read_json_file"]


def read_json_file(path: Path) -> Any:
    """Read and parse a UTF-8 JSON file.

    Raises:
        SourceFetchError: If the file cannot be read
        SourceDecodeError: If the content is not valid UTF-8 JSON
    """
    try:
        data = path.read_bytes()
    except OSError as e:
        raise SourceFetchError(ErrorTemplate.source_fetch_failed(str(path), str(e))) from e
    try:
        return json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise SourceDecodeError(ErrorTemplate.source_decode_failed(str(path), str(e))) from e


@dataclass(frozen=True, slots=True)
class AssetSource:
    """JSON files on the local filesystem.

    Files are read in a worker thread so the event loop is never blocked.

    Security:
        Codes containing path separators or ".." are rejected, and every
        resolved data path is verified to stay inside ``base_path``.

    Example:
        >>> source = AssetSource("assets/languages")
        >>> codes = await source.fetch_codes()

    Attributes:
        base_path: Directory holding codes.json and data/
        overwrite: Whether add_data() replaces existing keys
    """

    kind: ClassVar[SourceKind] = SourceKind.ASSET

    base_path: str | Path
    overwrite: bool = False
    _root: Path = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_root", Path(self.base_path).resolve())

    @property
    def codes_path(self) -> Path:
        """Path of the codes.json index."""
        return self._root / CODES_FILE

    def data_path(self, code: LanguageCode) -> Path:
        """Path of the data file for ``code``.

        Raises:
            SourceDecodeError: If ``code`` is unsafe as a path segment
        """
        segment = validate_path_code(code)
        path = (self._root / DATA_DIR / f"{segment}{DATA_FILE_SUFFIX}").resolve()
        try:
            path.relative_to(self._root)
        except ValueError as e:
            raise SourceDecodeError(ErrorTemplate.unsafe_code_path(segment)) from e
        return path

    async def fetch_codes(self) -> tuple[LanguageCode, ...]:
        path = self.codes_path
        try:
            raw = await asyncio.to_thread(read_json_file, path)
            return decode_codes(raw, location=str(path))
        except SourceFetchError as e:
            log_fetch_failure(e, self.kind)
            return ()

    async def fetch_entries(self, code: LanguageCode) -> TranslationTable:
        try:
            path = self.data_path(code)
            raw = await asyncio.to_thread(read_json_file, path)
            return decode_table(raw, location=str(path))
        except SourceFetchError as e:
            log_fetch_failure(e, self.kind)
            return {}
