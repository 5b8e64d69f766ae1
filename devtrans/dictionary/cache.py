"""
Process-wide memoized dictionary build.

The cache reads its term source at most once per lifetime (or once after
``invalidate()``). Concurrent first callers block on the same lock and
reuse the entries the first caller built, so the source is never read
twice for one build.
"""

from __future__ import annotations

import logging
import threading
from typing import Mapping, Optional

from devtrans.dictionary.entries import DictionaryEntry, build_entries
from devtrans.dictionary.sources import TermSource

logger = logging.getLogger(__name__)


class DictionaryCache:
    """Memoized list of DictionaryEntry objects built from a TermSource.

    Usage:
        cache = DictionaryCache(JsonTermSource("terms.json"))
        entries = cache.get()   # builds on first use
        cache.invalidate()      # next get() rebuilds

    A failed build is not memoized: the DictionarySourceError propagates
    and the next ``get()`` tries again.
    """

    def __init__(self, source: TermSource, defaults: Optional[Mapping[str, str]] = None):
        self.source = source
        self.defaults = defaults
        self._entries: Optional[tuple[DictionaryEntry, ...]] = None
        self._lock = threading.Lock()

    @property
    def is_built(self) -> bool:
        return self._entries is not None

    def get(self) -> tuple[DictionaryEntry, ...]:
        entries = self._entries
        if entries is not None:
            return entries
        with self._lock:
            if self._entries is None:
                self._entries = self._build()
            return self._entries

    def invalidate(self) -> None:
        with self._lock:
            self._entries = None

    def _build(self) -> tuple[DictionaryEntry, ...]:
        records = self.source.fetch_terms()
        entries = tuple(build_entries(records, self.defaults))
        logger.info("Built dictionary from %s: %d entries", self.source.name, len(entries))
        return entries
