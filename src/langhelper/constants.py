"""Shared constants for langhelper.

This module provides centralized configuration constants used across the
data-source, resolver and engine layers. Placing constants here avoids
circular imports and provides a single source of truth.

Constants are grouped by domain:
- Cache keys: Suffixes appended to an instance prefix
- Asset layout: File names shared by AssetSource, NetworkSource and export
- Conditional entries: Catch-all branch keys
- Defaults: Fallback codes and the default instance prefix

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Cache keys
    "DATA_KEY",
    "DATA_OVERRIDES_KEY",
    "AUTO_SAVE_CODE_KEY",
    "DEVICE_CODE_KEY",
    "CODES_SUFFIX",
    # Asset layout
    "CODES_FILE",
    "DATA_DIR",
    "DATA_FILE_SUFFIX",
    "EXPORT_INDENT",
    # Conditional entries
    "CATCH_ALL_KEY",
    "LEGACY_CATCH_ALL_KEY",
    "CONDITION_PARAM_FIELD",
    "CONDITION_BRANCHES_FIELD",
    # Defaults
    "DEFAULT_PREFIX",
    "FALLBACK_CODE",
    "MAX_LOCALE_CACHE_SIZE",
]

# ============================================================================
# CACHE KEYS
# ============================================================================
#
# Every LanguageHelper namespaces its persisted state under its own prefix:
#
#   {prefix}.Data.codes            -> JSON array of base codes
#   {prefix}.Data.{code}           -> JSON object of base entries for code
#   {prefix}.DataOverrides.codes   -> JSON array of override codes
#   {prefix}.DataOverrides.{code}  -> JSON object of override entries
#   {prefix}.AutoSaveCode          -> last committed code
#   {prefix}.DeviceCode            -> last observed device code
#
# ============================================================================

DATA_KEY: str = "Data"
DATA_OVERRIDES_KEY: str = "DataOverrides"
AUTO_SAVE_CODE_KEY: str = "AutoSaveCode"
DEVICE_CODE_KEY: str = "DeviceCode"
CODES_SUFFIX: str = "codes"

# ============================================================================
# ASSET LAYOUT
# ============================================================================

# {base}/codes.json and {base}/data/{code}.json
CODES_FILE: str = "codes.json"
DATA_DIR: str = "data"
DATA_FILE_SUFFIX: str = ".json"

# Indentation used when exporting the asset layout.
EXPORT_INDENT: int = 2

# ============================================================================
# CONDITIONAL ENTRIES
# ============================================================================

# Preferred catch-all branch key, consulted before the legacy key.
CATCH_ALL_KEY: str = "_"
LEGACY_CATCH_ALL_KEY: str = "default"

# Field names of the serialized conditional form: {"param": ..., "conditions": {...}}
CONDITION_PARAM_FIELD: str = "param"
CONDITION_BRANCHES_FIELD: str = "conditions"

# ============================================================================
# DEFAULTS
# ============================================================================

DEFAULT_PREFIX: str = "LanguageHelper"

# Used when the device locale cannot be mapped to a known language code.
FALLBACK_CODE: str = "en"

# Maximum cached Babel Locale / LanguageCode lookups.
MAX_LOCALE_CACHE_SIZE: int = 128
