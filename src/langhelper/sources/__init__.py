"""Pluggable suppliers of translation data.

Components:
    DataSource - Protocol (structural typing) every source satisfies
    InlineSource - Tables held in memory
    LazySource - Per-code loaders invoked on demand
    AssetSource - JSON asset layout on the local filesystem
    NetworkSource - JSON asset layout over HTTP (httpx)
    EmptySource - Placeholder that never yields data

Python 3.13+.
"""

from .asset import AssetSource
from .base import DataSource
from .memory import EmptySource, InlineSource, LazySource, TableLoader
from .network import NetworkSource

__all__ = [
    "AssetSource",
    "DataSource",
    "EmptySource",
    "InlineSource",
    "LazySource",
    "NetworkSource",
    "TableLoader",
]
