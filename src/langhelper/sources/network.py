"""HTTP DataSource serving the JSON asset layout over GET.

    GET {base_url}/codes.json
    GET {base_url}/data/{code}.json

Transport errors, non-2xx statuses and malformed bodies all degrade to an
empty result.

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar

import httpx

from ..codes import LanguageCode
from ..constants import CODES_FILE, DATA_DIR, DATA_FILE_SUFFIX
from ..diagnostics import ErrorTemplate, SourceDecodeError, SourceFetchError
from ..entries import TranslationTable, decode_table
from ..enums import SourceKind
from .base import decode_codes, log_fetch_failure, validate_path_code

__all__ = ["NetworkSource"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class NetworkSource:
    """JSON documents fetched over HTTP GET with httpx.

    An injected ``client`` is used as-is and stays owned by the caller (it is
    never closed here). Without one, a short-lived AsyncClient is opened per
    request.

    Example:
        >>> source = NetworkSource(
        ...     "https://cdn.example.com/i18n/",
        ...     headers={"Authorization": "Bearer ..."},
        ... )

    Attributes:
        base_url: URL prefix of codes.json and data/; trailing "/" is ignored
        headers: Extra request headers
        client: Optional caller-owned httpx.AsyncClient
        overwrite: Whether add_data() replaces existing keys
    """

    kind: ClassVar[SourceKind] = SourceKind.NETWORK

    base_url: str
    headers: Mapping[str, str] | None = None
    client: httpx.AsyncClient | None = field(default=None, repr=False, compare=False)
    overwrite: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @property
    def codes_url(self) -> str:
        return f"{self.base_url}/{CODES_FILE}"

    def data_url(self, code: LanguageCode) -> str:
        """URL of the data document for ``code``.

        Raises:
            SourceDecodeError: If ``code`` is unsafe as a path segment
        """
        return f"{self.base_url}/{DATA_DIR}/{validate_path_code(code)}{DATA_FILE_SUFFIX}"

    async def _get_json(self, url: str) -> Any:
        headers = dict(self.headers or {})
        logger.debug("GET %s", url)
        try:
            if self.client is not None:
                response = await self.client.get(url, headers=headers)
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.get(url, headers=headers)
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise SourceFetchError(ErrorTemplate.source_fetch_failed(url, str(e))) from e
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise SourceDecodeError(ErrorTemplate.source_decode_failed(url, str(e))) from e

    async def fetch_codes(self) -> tuple[LanguageCode, ...]:
        url = self.codes_url
        try:
            return decode_codes(await self._get_json(url), location=url)
        except SourceFetchError as e:
            log_fetch_failure(e, self.kind)
            return ()

    async def fetch_entries(self, code: LanguageCode) -> TranslationTable:
        try:
            url = self.data_url(code)
            return decode_table(await self._get_json(url), location=url)
        except SourceFetchError as e:
            log_fetch_failure(e, self.kind)
            return {}
