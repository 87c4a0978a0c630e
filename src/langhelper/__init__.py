"""langhelper - localization runtime with ranked data sources.

Decides which language is active, composes translation data from a ranked
list of sources with persistent-cache fallback, renders text keys (plain
substitution or parameter-conditioned branches), and notifies subscribed
views without redundant re-renders of nested ones.

Public API:
    LanguageHelper - Coordinator: initial(), change(), translate()
    LanguageConfig - Options for initial()
    LanguageCode - Language identifier with display names
    InlineSource, LazySource, AssetSource, NetworkSource, EmptySource - Data sources
    Subscriber - Change notification handle
    use_helper, tr, tr_p, tr_t, tr_f, tr_c - Scoped translation shortcuts
    export_json - Write data in the asset layout

Exceptions:
    LanguageHelperError - Base exception class
    SourceFetchError - Source transport failure (handled internally)
    UnknownLanguageCodeError - LanguageCode.parse() of an unknown code
    NotInitializedError - Helper used before initial()

Submodules:
    langhelper.sources - DataSource protocol and implementations
    langhelper.cache - PersistentCache protocol and InMemoryCache
    langhelper.diagnostics - Diagnostic codes, templates and formatting
"""

from .cache import CacheKeys, InMemoryCache, PersistentCache
from .codes import LanguageCode
from .config import LanguageConfig
from .dataset import Dataset
from .diagnostics import (
    LanguageHelperError,
    NotInitializedError,
    SourceDecodeError,
    SourceFetchError,
    UnknownLanguageCodeError,
)
from .engine import MissingTranslation, TranslationEngine
from .entries import ConditionalEntry, LiteralEntry, TranslationEntry
from .enums import MissReason, SelectionOrigin, SourceKind
from .events import ChangeStream
from .export import export_json
from .helper import LanguageHelper, get_default_helper, reset_default_helper
from .resolver import LocaleResolver
from .scope import current_helper, tr, tr_c, tr_f, tr_p, tr_t, use_helper
from .selector import SourceSelector
from .sources import (
    AssetSource,
    DataSource,
    EmptySource,
    InlineSource,
    LazySource,
    NetworkSource,
)
from .subscribers import Subscriber, SubscriberRegistry

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("langhelper")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "AssetSource",
    "CacheKeys",
    "ChangeStream",
    "ConditionalEntry",
    "DataSource",
    "Dataset",
    "EmptySource",
    "InMemoryCache",
    "InlineSource",
    "LanguageCode",
    "LanguageConfig",
    "LanguageHelper",
    "LanguageHelperError",
    "LazySource",
    "LiteralEntry",
    "LocaleResolver",
    "MissReason",
    "MissingTranslation",
    "NetworkSource",
    "NotInitializedError",
    "PersistentCache",
    "SelectionOrigin",
    "SourceDecodeError",
    "SourceFetchError",
    "SourceKind",
    "SourceSelector",
    "Subscriber",
    "SubscriberRegistry",
    "TranslationEngine",
    "TranslationEntry",
    "UnknownLanguageCodeError",
    "__version__",
    "current_helper",
    "export_json",
    "get_default_helper",
    "reset_default_helper",
    "tr",
    "tr_c",
    "tr_f",
    "tr_p",
    "tr_t",
    "use_helper",
]
