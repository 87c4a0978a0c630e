"""LanguageHelper: the coordinator tying sources, resolver, dataset and views.

Lifecycle:

    helper = LanguageHelper("Shop")
    await helper.initial([InlineSource(...), AssetSource("assets/languages")])
    helper.translate("Hello @{name}", {"name": "An"})
    await helper.change("vi")

initial() picks the authoritative base and override sources, resolves the
active code and loads its tables. change() revalidates the requested code,
loads its tables when they are not resident, notifies subscribers, emits on
the change stream and persists the selection.

Concurrency:
    Lifecycle coroutines (initial, change, reload, add_data,
    add_data_overrides, remove_data) must be awaited one at a time per
    helper. Only concurrent initial() calls are coalesced; anything else
    overlapping is unguarded. is_busy reports an in-flight call.
    Readers in other tasks can await ensure_initialized() to wait for
    startup without triggering it.
    translate() is synchronous and safe to call at any time, including from
    a subscriber callback.

Python 3.13+.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .cache import CacheKeys, InMemoryCache, PersistentCache
from .codes import CodeLike, LanguageCode
from .config import LanguageConfig
from .constants import DEFAULT_PREFIX
from .dataset import Dataset
from .diagnostics import ErrorTemplate, NotInitializedError
from .engine import TranslationEngine
from .events import ChangeStream
from .resolver import LocaleResolver
from .selector import SourceSelector
from .sources.base import DataSource
from .subscribers import Subscriber, SubscriberRegistry

__all__ = [
    "LanguageHelper",
    "get_default_helper",
    "reset_default_helper",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class _AddedSource:
    """A source merged in by add_data() and replayed on every reload."""

    source: DataSource
    overwrite: bool
    overrides: bool


class LanguageHelper:
    """Coordinator for one independent localization namespace.

    Helpers with different prefixes keep separate datasets, subscribers,
    change streams and persisted state, even when they share a cache.
    Equality and hashing use the prefix.

    Args:
        prefix: Namespace of this helper's cache keys
        cache: PersistentCache for codes, tables and the selection.
            Defaults to a fresh InMemoryCache.

    Example:
        >>> helper = LanguageHelper()
        >>> await helper.initial(
        ...     [InlineSource({"en": {"Hello": "Hello"}, "vi": {"Hello": "Xin chào"}})],
        ...     config=LanguageConfig(initial_code="vi", sync_with_device=False),
        ... )
        >>> helper.translate("Hello")
        'Xin chào'
    """

    __slots__ = (
        "_added",
        "_base_selector",
        "_base_source",
        "_busy",
        "_code",
        "_config",
        "_engine",
        "_init_task",
        "_initialized",
        "_override_selector",
        "_override_source",
        "_ready",
        "_resolver",
        "cache",
        "dataset",
        "keys",
        "prefix",
        "registry",
        "stream",
    )

    def __init__(
        self, prefix: str = DEFAULT_PREFIX, *, cache: PersistentCache | None = None
    ) -> None:
        self.prefix = prefix
        self.keys = CacheKeys(prefix)
        self.cache: PersistentCache = cache if cache is not None else InMemoryCache()
        self.dataset = Dataset()
        self.registry = SubscriberRegistry()
        self.stream = ChangeStream()

        self._config = LanguageConfig()
        self._engine = TranslationEngine(self.dataset)
        self._resolver = LocaleResolver(self.cache, self.keys, self._config)
        self._base_selector = SourceSelector(self.cache, self.keys)
        self._override_selector = SourceSelector(self.cache, self.keys, overrides=True)
        self._base_source: DataSource | None = None
        self._override_source: DataSource | None = None
        self._added: list[_AddedSource] = []
        self._code: LanguageCode | None = None
        self._initialized = False
        self._init_task: asyncio.Task[None] | None = None
        self._ready = asyncio.Event()
        self._busy = 0

    def __repr__(self) -> str:
        return f"LanguageHelper(prefix={self.prefix!r}, code={self._code})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LanguageHelper):
            return NotImplemented
        return self.prefix == other.prefix

    def __hash__(self) -> int:
        return hash(self.prefix)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def config(self) -> LanguageConfig:
        return self._config

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def is_busy(self) -> bool:
        """True while a lifecycle call (initial, change, add_data...) is running."""
        return self._busy > 0

    @property
    def code(self) -> LanguageCode:
        """The active language code.

        Raises:
            NotInitializedError: Before initial() has completed
        """
        if self._code is None:
            raise NotInitializedError(ErrorTemplate.not_initialized(self.prefix))
        return self._code

    @property
    def codes(self) -> tuple[LanguageCode, ...]:
        return self.dataset.codes

    @property
    def codes_overrides(self) -> tuple[LanguageCode, ...]:
        return self.dataset.codes_overrides

    @property
    def codes_both(self) -> tuple[LanguageCode, ...]:
        return self.dataset.codes_both

    @property
    def sources(self) -> tuple[DataSource | None, DataSource | None]:
        """The authoritative (base, overrides) sources; None means cache-only."""
        return self._base_source, self._override_source

    @contextmanager
    def _busy_scope(self) -> Iterator[None]:
        self._busy += 1
        try:
            yield
        finally:
            self._busy -= 1

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def initial(
        self,
        data: Sequence[DataSource],
        data_overrides: Sequence[DataSource] = (),
        config: LanguageConfig | None = None,
    ) -> None:
        """Choose sources, resolve the active code and load its tables.

        Concurrent calls share the in-flight initialization; the arguments of
        the later calls are ignored. Calling again after completion
        re-initializes from scratch.

        Args:
            data: Base sources, highest priority first
            data_overrides: Override sources, highest priority first
            config: Options; defaults to LanguageConfig()

        Raises:
            ValueError: If ``data`` is empty
        """
        if not data:
            diagnostic = ErrorTemplate.no_data_sources()
            raise ValueError(diagnostic.format_error())

        if self._init_task is not None and not self._init_task.done():
            logger.debug("[%s] initial() already running, waiting for it", self.prefix)
        else:
            self._init_task = asyncio.create_task(
                self._run_initial(tuple(data), tuple(data_overrides), config or LanguageConfig())
            )
        await self._init_task

    async def ensure_initialized(self) -> None:
        """Wait until an initial() call, made anywhere, has completed.

        Does not start initialization. Returns immediately once the helper
        is initialized; a re-initialization in progress is waited for.

        Example:
            >>> async def render() -> str:
            ...     await get_default_helper().ensure_initialized()
            ...     return tr("Hello")
        """
        await self._ready.wait()

    async def _run_initial(
        self,
        data: tuple[DataSource, ...],
        data_overrides: tuple[DataSource, ...],
        config: LanguageConfig,
    ) -> None:
        with self._busy_scope():
            logger.debug("[%s] Initializing with %d base sources", self.prefix, len(data))
            self._initialized = False
            self._ready.clear()
            self._config = config
            self._engine = TranslationEngine(self.dataset, on_missing=config.on_missing)
            self._resolver = LocaleResolver(self.cache, self.keys, config)
            self._added.clear()
            self.dataset.clear()

            base = await self._base_selector.choose(data)
            overrides = await self._override_selector.choose(data_overrides)
            self._base_source = base.source
            self._override_source = overrides.source
            self.dataset.set_codes(base.codes)
            self.dataset.set_codes(overrides.codes, overrides=True)

            code = await self._resolver.resolve(self.dataset.codes_both)
            await self._load(code)
            self._code = code
            self._initialized = True
            self._ready.set()
            logger.info("[%s] Initialized with %s", self.prefix, code)

    async def _load(self, code: LanguageCode) -> None:
        base, base_origin = await self._base_selector.load_entries(self._base_source, code)
        overrides, _ = await self._override_selector.load_entries(self._override_source, code)
        self.dataset.replace(code, base, overrides)
        logger.debug(
            "[%s] Loaded %d base (%s) and %d override entries for %s",
            self.prefix, len(base), base_origin, len(overrides), code,
        )
        for added in self._added:
            selector = self._override_selector if added.overrides else self._base_selector
            table = await selector.fetch_entries(added.source, code)
            self.dataset.merge(code, table, overwrite=added.overwrite, overrides=added.overrides)

    def _require_initialized(self) -> LanguageCode:
        if not self._initialized:
            raise NotInitializedError(ErrorTemplate.not_initialized(self.prefix))
        return self.code

    async def change(self, code: CodeLike) -> bool:
        """Switch to ``code`` and notify subscribers.

        An unsupported code is relaxed to its base language when
        ``optional_country_code`` allows it. Otherwise, with
        ``use_initial_code_when_unavailable`` and a supported initial code,
        the initial code is used; failing that the call does nothing.

        Returns:
            True if a code was committed, False if the change was refused

        Raises:
            NotInitializedError: Before initial() has completed
        """
        self._require_initialized()
        with self._busy_scope():
            target = self._validate_target(code)
            if target is None:
                return False

            if not self.dataset.is_resident(target):
                await self._load(target)
            self._code = target

            self.registry.notify(target, force_rebuild=self._config.force_rebuild)
            self.stream.emit(target)
            try:
                if self._config.on_changed is not None:
                    self._config.on_changed(target)
            finally:
                if self._config.auto_save:
                    await self._resolver.persist(target)
            logger.info("[%s] Language changed to %s", self.prefix, target)
            return True

    def _validate_target(self, code: CodeLike) -> LanguageCode | None:
        supported = self.dataset.codes_both
        requested = LanguageCode.lookup(code)
        if requested is not None:
            valid = self._resolver.validate(requested, supported)
            if valid is not None:
                return valid

        diagnostic = ErrorTemplate.unsupported_code(str(code), tuple(c.code for c in supported))
        logger.warning("[%s] %s", diagnostic.code.name, diagnostic.message)

        initial = self._config.initial
        if self._config.use_initial_code_when_unavailable and initial in supported:
            logger.info("[%s] Using initial code %s instead of %s", self.prefix, initial, code)
            return initial

        refused = ErrorTemplate.change_refused(str(code))
        logger.warning("[%s] %s", refused.code.name, refused.message)
        return None

    async def reload(self) -> bool:
        """Re-run change() for the active code."""
        return await self.change(self._require_initialized())

    async def add_data(
        self,
        source: DataSource,
        *,
        overwrite: bool | None = None,
        activate: bool = True,
    ) -> int:
        """Merge ``source`` into the base tables.

        Keys already present are replaced only when ``overwrite`` is true
        (default: ``source.overwrite``). The source's codes are added to
        ``codes`` and persisted, and the source is replayed whenever another
        code is loaded.

        Calling this with ``activate=True`` from a subscriber callback
        re-enters change(); check is_busy first.

        Returns:
            Number of keys inserted or replaced for the active code
        """
        return await self._add(source, overwrite=overwrite, activate=activate, overrides=False)

    async def add_data_overrides(
        self,
        source: DataSource,
        *,
        overwrite: bool | None = None,
        activate: bool = True,
    ) -> int:
        """Merge ``source`` into the override tables. See add_data()."""
        return await self._add(source, overwrite=overwrite, activate=activate, overrides=True)

    async def _add(
        self,
        source: DataSource,
        *,
        overwrite: bool | None,
        activate: bool,
        overrides: bool,
    ) -> int:
        code = self._require_initialized()
        overwrite = source.overwrite if overwrite is None else overwrite
        selector = self._override_selector if overrides else self._base_selector
        with self._busy_scope():
            fetched = await selector.fetch_codes(source)
            new_codes = self.dataset.add_codes(fetched, overrides=overrides)
            side_codes = self.dataset.codes_overrides if overrides else self.dataset.codes
            await selector.save_codes(side_codes)

            table = await selector.fetch_entries(source, code)
            changed = self.dataset.merge(code, table, overwrite=overwrite, overrides=overrides)
            self._added.append(_AddedSource(source, overwrite, overrides))
            logger.info(
                "[%s] Added %s source to %s: %d new codes, %d keys changed (overwrite=%s)",
                self.prefix, getattr(source, "kind", "custom"), selector.label,
                len(new_codes), changed, overwrite,
            )
            if activate:
                await self.reload()
            return changed

    async def remove_data(self, source: DataSource, *, activate: bool = True) -> bool:
        """Stop replaying a source added with add_data()/add_data_overrides().

        The active code's tables are reloaded without it. Codes it
        contributed stay supported.

        Returns:
            False if ``source`` was never added
        """
        code = self._require_initialized()
        remaining = [added for added in self._added if added.source is not source]
        if len(remaining) == len(self._added):
            return False
        with self._busy_scope():
            self._added[:] = remaining
            await self._load(code)
            if activate:
                await self.reload()
        return True

    # ------------------------------------------------------------------
    # Translation
    # ------------------------------------------------------------------

    def translate(
        self,
        key: str,
        params: Mapping[str, Any] | None = None,
        code: CodeLike | None = None,
    ) -> str:
        """Render ``key`` in ``code`` (default: the active code). Never raises."""
        return self._engine.resolve(key, params, code if code is not None else self._code)

    resolve = translate

    # ------------------------------------------------------------------
    # Subscribers
    # ------------------------------------------------------------------

    def register(self, subscriber: Subscriber) -> bool:
        """Register ``subscriber`` for change notifications."""
        return self.registry.register(subscriber)

    def deregister(self, subscriber: Subscriber) -> bool:
        """Stop notifying ``subscriber``."""
        return self.registry.deregister(subscriber)

    # ------------------------------------------------------------------
    # Export / teardown
    # ------------------------------------------------------------------

    def export_json(self, path: str | Path, *, overrides: bool = False) -> Path:
        """Write the resident tables in the asset layout. See Dataset.export_json()."""
        return self.dataset.export_json(path, overrides=overrides)

    def dispose(self) -> None:
        """Close the change stream and drop every subscriber."""
        self.stream.close()
        self.registry.clear()
        logger.debug("[%s] Disposed", self.prefix)


_default_helper: LanguageHelper | None = None
_default_lock = threading.Lock()


def get_default_helper() -> LanguageHelper:
    """Process-wide default helper, created on first use."""
    global _default_helper  # noqa: PLW0603
    with _default_lock:
        if _default_helper is None:
            _default_helper = LanguageHelper(DEFAULT_PREFIX)
        return _default_helper


def reset_default_helper() -> None:
    """Dispose and forget the default helper (for tests and teardown)."""
    global _default_helper  # noqa: PLW0603
    with _default_lock:
        if _default_helper is not None:
            _default_helper.dispose()
        _default_helper = None
