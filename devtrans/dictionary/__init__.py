"""
Dictionary provider for devtrans.

Available components:
- TermSource implementations (static, JSON, CSV, SQLite)
- build_entries / translate_text: ordered, case-preserving substitution
- DictionaryCache: memoized, thread-safe build with explicit invalidation
"""

from devtrans.dictionary.sources import (
    TermRecord,
    TermSource,
    StaticTermSource,
    EmptyTermSource,
    JsonTermSource,
    CsvTermSource,
    SqliteTermSource,
    source_from_path,
)
from devtrans.dictionary.entries import (
    DEFAULT_TRANSLATIONS,
    DictionaryEntry,
    build_entries,
    build_matcher,
    preserve_case,
    translate_text,
    lookup,
)
from devtrans.dictionary.cache import DictionaryCache

__all__ = [
    "TermRecord",
    "TermSource",
    "StaticTermSource",
    "EmptyTermSource",
    "JsonTermSource",
    "CsvTermSource",
    "SqliteTermSource",
    "source_from_path",
    "DEFAULT_TRANSLATIONS",
    "DictionaryEntry",
    "build_entries",
    "build_matcher",
    "preserve_case",
    "translate_text",
    "lookup",
    "DictionaryCache",
]
