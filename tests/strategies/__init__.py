"""Hypothesis strategies for langhelper property-based testing.

Usage:
    from tests.strategies import translation_tables, param_names
"""

from .translation import (
    CODE_POOL,
    conditional_entries,
    language_code_strings,
    literal_entries,
    param_names,
    plain_text,
    translation_entries,
    translation_tables,
)

__all__ = [
    "CODE_POOL",
    "conditional_entries",
    "language_code_strings",
    "literal_entries",
    "param_names",
    "plain_text",
    "translation_entries",
    "translation_tables",
]
