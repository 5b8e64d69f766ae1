"""
Term sources: where the dictionary comes from.

A term source reads the full term collection once per cache lifetime and
returns it as a list of TermRecord objects. There is no pagination or
streaming; collections are small enough to read in one go.

Supported sources:
- StaticTermSource: in-memory records (tests, embedding callers)
- JsonTermSource: JSON array of {term, translation, aliases}
- CsvTermSource: term,translation[,aliases] rows
- SqliteTermSource: a table with term/translation/aliases columns

Any failure to read the backing collection raises DictionarySourceError.
"""

from __future__ import annotations

import csv
import json
import sqlite3
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Union

from devtrans.errors import DictionarySourceError


@dataclass(frozen=True)
class TermRecord:
    """One record of the term collection.

    Attributes:
        term: Canonical term (e.g. "fetch")
        translation: Translation used for the term and all its aliases
        aliases: Alternative spellings that share the translation
    """
    term: str
    translation: str
    aliases: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, d: dict) -> TermRecord:
        aliases = d.get("aliases") or ()
        if not isinstance(aliases, (list, tuple)):
            aliases = ()
        return cls(
            term=d.get("term") or "",
            translation=d.get("translation") or "",
            aliases=tuple(a for a in aliases if isinstance(a, str)),
        )

    def to_dict(self) -> dict:
        return {"term": self.term, "translation": self.translation, "aliases": list(self.aliases)}


class TermSource(ABC):
    """Abstract base class for term collections."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable description of the source."""

    @abstractmethod
    def fetch_terms(self) -> list[TermRecord]:
        """Read the whole collection.

        Raises:
            DictionarySourceError: if the collection cannot be read
        """


class StaticTermSource(TermSource):
    """Records held in memory. Accepts TermRecord objects or plain dicts."""

    def __init__(self, records: Iterable[Union[TermRecord, dict]] = ()):
        self._records = [r if isinstance(r, TermRecord) else TermRecord.from_dict(r) for r in records]

    @property
    def name(self) -> str:
        return f"static ({len(self._records)} terms)"

    def fetch_terms(self) -> list[TermRecord]:
        return list(self._records)


class EmptyTermSource(StaticTermSource):
    """No records; only the built-in defaults will be used."""

    @property
    def name(self) -> str:
        return "built-in defaults"


class JsonTermSource(TermSource):
    """A JSON file holding an array of term objects."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    @property
    def name(self) -> str:
        return f"json:{self.path}"

    def fetch_terms(self) -> list[TermRecord]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                payload = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise DictionarySourceError(f"Cannot read term file {self.path}: {e}") from e

        if isinstance(payload, dict):
            payload = payload.get("terms", [])
        if not isinstance(payload, list):
            raise DictionarySourceError(f"Term file {self.path} must hold a JSON array")
        return [TermRecord.from_dict(item) for item in payload if isinstance(item, dict)]


class CsvTermSource(TermSource):
    """A CSV file with ``term,translation[,aliases]`` rows.

    Aliases share one cell, separated by ``alias_separator``.
    """

    def __init__(
        self,
        path: Union[str, Path],
        alias_separator: str = "|",
        has_header: bool = True,
    ):
        self.path = Path(path)
        self.alias_separator = alias_separator
        self.has_header = has_header

    @property
    def name(self) -> str:
        return f"csv:{self.path}"

    def fetch_terms(self) -> list[TermRecord]:
        records = []
        try:
            with open(self.path, "r", encoding="utf-8", newline="") as f:
                reader = csv.reader(f)
                if self.has_header:
                    next(reader, None)
                for row in reader:
                    if len(row) < 2:
                        continue
                    aliases: tuple[str, ...] = ()
                    if len(row) > 2 and row[2].strip():
                        aliases = tuple(a.strip() for a in row[2].split(self.alias_separator) if a.strip())
                    records.append(TermRecord(row[0].strip(), row[1].strip(), aliases))
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            raise DictionarySourceError(f"Cannot read term file {self.path}: {e}") from e
        return records


class SqliteTermSource(TermSource):
    """A SQLite table with ``term``, ``translation`` and ``aliases`` columns.

    ``aliases`` holds a JSON array string (NULL or empty means none).
    Rows are read in rowid order.
    """

    def __init__(self, path: Union[str, Path], table: str = "terms"):
        if not table.replace("_", "").isalnum():
            raise ValueError(f"Invalid table name: {table!r}")
        self.path = Path(path)
        self.table = table

    @property
    def name(self) -> str:
        return f"sqlite:{self.path}#{self.table}"

    def fetch_terms(self) -> list[TermRecord]:
        if not self.path.exists():
            raise DictionarySourceError(f"Term database not found: {self.path}")
        try:
            conn = sqlite3.connect(str(self.path))
            try:
                rows = conn.execute(
                    f"SELECT term, translation, aliases FROM {self.table} ORDER BY rowid"
                ).fetchall()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise DictionarySourceError(f"Cannot read term table {self.name}: {e}") from e

        records = []
        for term, translation, aliases_raw in rows:
            aliases: list = []
            if aliases_raw:
                try:
                    aliases = json.loads(aliases_raw)
                except json.JSONDecodeError:
                    aliases = []
            records.append(TermRecord.from_dict({
                "term": term,
                "translation": translation,
                "aliases": aliases,
            }))
        return records


def source_from_path(path: Union[str, Path]) -> TermSource:
    """Pick a term source from the file suffix (.json, .csv, .db/.sqlite)."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return CsvTermSource(path)
    if suffix in (".db", ".sqlite", ".sqlite3"):
        return SqliteTermSource(path)
    return JsonTermSource(path)
