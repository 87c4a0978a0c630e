"""Active language code resolution.

The resolver runs a chain of sequential overrides; each step may discard the
result of the previous one:

    1. Seed := requested initial code, else the device code
    2. auto_save:        Seed := persisted selection, if any
    3. sync_with_device: Seed := device code, if it changed since last run
    4. Validate Seed against the supported codes, relaxing "xx_YY" to "xx",
       else fall back to the first supported code
    5. auto_save:        persist the committed code

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from .codes import LanguageCode
from .constants import FALLBACK_CODE
from .locale_utils import get_system_locale

if TYPE_CHECKING:
    from .cache import CacheKeys, PersistentCache
    from .config import LanguageConfig

__all__ = ["LocaleResolver"]

logger = logging.getLogger(__name__)


class LocaleResolver:
    """Compute and persist the active LanguageCode for one helper.

    Args:
        cache: Store for the persisted selection and device observation
        keys: Key naming for the owning helper
        config: Helper configuration
    """

    __slots__ = ("_cache", "_config", "_keys")

    def __init__(self, cache: PersistentCache, keys: CacheKeys, config: LanguageConfig) -> None:
        self._cache = cache
        self._keys = keys
        self._config = config

    def device_code(self) -> LanguageCode:
        """Current platform language, or ``en`` when it is not a known code."""
        provider = self._config.device_code or get_system_locale
        raw = provider()
        code = LanguageCode.lookup(raw)
        if code is None:
            logger.warning("Device locale %r is unknown, using '%s'", raw, FALLBACK_CODE)
            return LanguageCode.parse(FALLBACK_CODE)
        return code

    async def resolve(self, supported: Sequence[LanguageCode]) -> LanguageCode:
        """Run the override chain and return the committed code."""
        config = self._config
        device = self.device_code()
        seed = config.initial or device
        logger.debug("Resolver seed: %s", seed)

        if config.auto_save:
            saved = await self.saved_code()
            if saved is not None:
                logger.debug("Using persisted selection %s", saved)
                seed = saved

        if config.sync_with_device:
            seed = await self._sync_device(seed, device)

        committed = self.validate(seed, supported)
        if committed is None:
            if supported:
                committed = supported[0]
                logger.info("%s is not supported, using first supported code %s", seed, committed)
            else:
                committed = seed
                logger.warning("No supported codes, committing %s unchanged", seed)

        if config.auto_save:
            await self.persist(committed)
        logger.info("Active language code: %s", committed)
        return committed

    def validate(
        self, code: LanguageCode, supported: Sequence[LanguageCode]
    ) -> LanguageCode | None:
        """Return ``code`` or its base language if supported, else None.

        The base-language retry only happens when ``optional_country_code``
        is enabled and ``code`` has a region subtag.
        """
        if code in supported:
            return code
        if self._config.optional_country_code and code.territory is not None:
            base = code.base
            if base is not None and base in supported:
                logger.info("%s is not supported, relaxing to %s", code, base)
                return base
        return None

    async def saved_code(self) -> LanguageCode | None:
        """The persisted selection, if any."""
        raw = await self._cache.get(self._keys.auto_save_code)
        if not raw:
            return None
        return LanguageCode.lookup(raw)

    async def persist(self, code: LanguageCode) -> None:
        """Store ``code`` as the persisted selection."""
        await self._cache.set(self._keys.auto_save_code, code.code)

    async def _sync_device(self, seed: LanguageCode, device: LanguageCode) -> LanguageCode:
        key = self._keys.device_code
        observed = await self._cache.get(key)
        if observed is None:
            # First run only records the device code; it never overrides the seed.
            await self._cache.set(key, device.code)
            logger.debug("Recorded device code %s", device)
            return seed
        if LanguageCode.lookup(observed) != device:
            await self._cache.set(key, device.code)
            logger.info("Device language changed from %s to %s", observed, device)
            return device
        return seed
