"""Tests for LocaleResolver's override chain.

Python 3.13+.
"""

import pytest

from langhelper import CacheKeys, InMemoryCache, LanguageCode, LocaleResolver
from tests.helpers.sources import EN, FR, VI, fixed_config

KEYS = CacheKeys("Test")
SUPPORTED = (EN, VI)


def _resolver(cache: InMemoryCache, **options: object) -> LocaleResolver:
    return LocaleResolver(cache, KEYS, fixed_config(**options))


class TestDeviceCode:
    """device_code() reads the injected provider."""

    def test_provider_used(self, cache: InMemoryCache) -> None:
        assert _resolver(cache, device_code=lambda: "vi-VN").device_code() == LanguageCode.parse(
            "vi_VN"
        )

    def test_unknown_device_falls_back_to_english(self, cache: InMemoryCache) -> None:
        assert _resolver(cache, device_code=lambda: "C").device_code() == EN


class TestResolve:
    """resolve() runs seed, persisted, device and validation steps in order."""

    @pytest.mark.asyncio
    async def test_initial_code_seed(self, cache: InMemoryCache) -> None:
        resolver = _resolver(cache, initial_code="vi", auto_save=False)
        assert await resolver.resolve(SUPPORTED) == VI

    @pytest.mark.asyncio
    async def test_device_seed(self, cache: InMemoryCache) -> None:
        resolver = _resolver(cache, device_code=lambda: "vi", auto_save=False)
        assert await resolver.resolve(SUPPORTED) == VI

    @pytest.mark.asyncio
    async def test_country_code_relaxed(self, cache: InMemoryCache) -> None:
        resolver = _resolver(cache, initial_code="vi_VN", auto_save=False)
        assert await resolver.resolve(SUPPORTED) == VI

    @pytest.mark.asyncio
    async def test_relaxation_disabled(self, cache: InMemoryCache) -> None:
        resolver = _resolver(
            cache, initial_code="vi_VN", auto_save=False, optional_country_code=False
        )
        assert await resolver.resolve(SUPPORTED) == EN

    @pytest.mark.asyncio
    async def test_unsupported_falls_back_to_first(self, cache: InMemoryCache) -> None:
        resolver = _resolver(cache, initial_code="fr", auto_save=False)
        assert await resolver.resolve((VI, EN)) == VI

    @pytest.mark.asyncio
    async def test_nothing_supported_keeps_seed(self, cache: InMemoryCache) -> None:
        resolver = _resolver(cache, initial_code="fr", auto_save=False)
        assert await resolver.resolve(()) == FR

    @pytest.mark.asyncio
    async def test_auto_save_persists(self, cache: InMemoryCache) -> None:
        await _resolver(cache, initial_code="vi").resolve(SUPPORTED)
        assert cache.snapshot()["Test.AutoSaveCode"] == "vi"

    @pytest.mark.asyncio
    async def test_persisted_selection_beats_initial_code(self, cache: InMemoryCache) -> None:
        await cache.set("Test.AutoSaveCode", "vi")
        assert await _resolver(cache, initial_code="en").resolve(SUPPORTED) == VI

    @pytest.mark.asyncio
    async def test_persisted_selection_ignored_without_auto_save(
        self, cache: InMemoryCache
    ) -> None:
        await cache.set("Test.AutoSaveCode", "vi")
        resolver = _resolver(cache, initial_code="en", auto_save=False)
        assert await resolver.resolve(SUPPORTED) == EN
        assert cache.snapshot()["Test.AutoSaveCode"] == "vi"

    @pytest.mark.asyncio
    async def test_unsupported_persisted_selection_validated(self, cache: InMemoryCache) -> None:
        await cache.set("Test.AutoSaveCode", "fr")
        assert await _resolver(cache).resolve(SUPPORTED) == EN


class TestDeviceSync:
    """sync_with_device overrides the seed only after a device change."""

    @pytest.mark.asyncio
    async def test_first_run_records_only(self, cache: InMemoryCache) -> None:
        resolver = _resolver(cache, initial_code="vi", device_code=lambda: "en")
        assert await resolver.resolve(SUPPORTED) == VI
        assert cache.snapshot()["Test.DeviceCode"] == "en"

    @pytest.mark.asyncio
    async def test_unchanged_device_keeps_seed(self, cache: InMemoryCache) -> None:
        await cache.set("Test.DeviceCode", "en")
        await cache.set("Test.AutoSaveCode", "vi")
        assert await _resolver(cache, device_code=lambda: "en").resolve(SUPPORTED) == VI

    @pytest.mark.asyncio
    async def test_changed_device_overrides_persisted(self, cache: InMemoryCache) -> None:
        await cache.set("Test.DeviceCode", "en")
        await cache.set("Test.AutoSaveCode", "en")
        resolver = _resolver(cache, device_code=lambda: "vi")
        assert await resolver.resolve(SUPPORTED) == VI
        assert cache.snapshot()["Test.DeviceCode"] == "vi"
        assert cache.snapshot()["Test.AutoSaveCode"] == "vi"

    @pytest.mark.asyncio
    async def test_sync_disabled(self, cache: InMemoryCache) -> None:
        await cache.set("Test.DeviceCode", "en")
        resolver = _resolver(
            cache, initial_code="en", device_code=lambda: "vi", sync_with_device=False,
            auto_save=False,
        )
        assert await resolver.resolve(SUPPORTED) == EN
        assert cache.snapshot()["Test.DeviceCode"] == "en"

    @pytest.mark.asyncio
    async def test_simulated_restart(self) -> None:
        cache = InMemoryCache()
        first = await _resolver(cache, device_code=lambda: "en").resolve(SUPPORTED)
        await _resolver(cache).persist(VI)
        second = await _resolver(cache, device_code=lambda: "en").resolve(SUPPORTED)
        assert (first, second) == (EN, VI)


class TestValidate:
    def test_supported(self, cache: InMemoryCache) -> None:
        assert _resolver(cache).validate(VI, SUPPORTED) == VI

    def test_base_code_without_territory_not_relaxed(self, cache: InMemoryCache) -> None:
        assert _resolver(cache).validate(FR, SUPPORTED) is None

    def test_regional_to_base(self, cache: InMemoryCache) -> None:
        assert _resolver(cache).validate(LanguageCode.parse("en_GB"), SUPPORTED) == EN
