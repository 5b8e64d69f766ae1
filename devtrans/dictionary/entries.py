"""
Dictionary entries and case-preserving substitution.

This module handles:
- Building the ordered entry list from term records plus built-in defaults
- Compiling the per-key matcher (word boundary or word lookaround)
- Case-preserving replacement of every match in a piece of text

Design Philosophy:
- Entries are immutable once built
- Longest keys first, so phrases win over the words they contain
- Matching is case-insensitive, substitution mirrors the matched casing
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Iterable, Mapping, Optional

from devtrans.dictionary.sources import TermRecord

# Built-in developer vocabulary (EN -> ES). Only fills keys the term
# source did not provide.
DEFAULT_TRANSLATIONS: dict[str, str] = {
    "function": "función",
    "component": "componente",
    "hook": "hook",
    "state": "estado",
    "request": "solicitud",
    "response": "respuesta",
    "error": "error",
    "success": "éxito",
    "loading": "cargando",
    "retry": "reintentar",
    "fetch": "obtener",
    "submit": "enviar",
    "cancel": "cancelar",
    "save": "guardar",
    "delete": "eliminar",
    "update": "actualizar",
    "create": "crear",
    "user": "usuario",
    "admin": "administrador",
    "password": "contraseña",
    "token": "token",
    "session": "sesión",
    "value": "valor",
    "terms": "términos",
    "description": "descripción",
    "example": "ejemplo",
    "retrying": "reintentando",
    "timeout": "tiempo de espera",
    "welcome": "bienvenido",
}

_WORD_KEY = re.compile(r"^\w+$")


@dataclass(frozen=True)
class DictionaryEntry:
    """A single lookup key with its translation.

    Attributes:
        key: Lowercased term or alias
        translation: Stored translation
        matcher: Compiled case-insensitive pattern for ``key``
    """
    key: str
    translation: str
    matcher: re.Pattern


def build_matcher(key: str) -> re.Pattern:
    """Compile the matching rule for a dictionary key.

    Word-only keys use ``\\b`` boundaries. Keys with punctuation or spaces
    use word lookarounds instead, since ``\\b`` next to a non-word
    character matches in the wrong places (``.env`` would match inside
    ``a.env``).
    """
    escaped = re.escape(key)
    if _WORD_KEY.match(key):
        return re.compile(rf"\b{escaped}\b", re.IGNORECASE)
    return re.compile(rf"(?<!\w){escaped}(?!\w)", re.IGNORECASE)


def build_entries(
    records: Iterable[TermRecord],
    defaults: Optional[Mapping[str, str]] = None,
) -> list[DictionaryEntry]:
    """Build the ordered entry list.

    Each record contributes its term, then its aliases. Keys are stripped
    and lowercased; the first occurrence of a key wins. ``defaults`` fill
    keys not already present.

    Args:
        records: Term records in collection order
        defaults: Fallback vocabulary (``DEFAULT_TRANSLATIONS`` if None,
            pass ``{}`` to disable)

    Returns:
        Entries sorted by key length, longest first (stable)
    """
    if defaults is None:
        defaults = DEFAULT_TRANSLATIONS

    mapping: dict[str, str] = {}

    def add(key: object, translation: object) -> None:
        if not isinstance(key, str) or not isinstance(translation, str):
            return
        if not key or not translation:
            return
        normalized = key.strip().lower()
        if normalized and normalized not in mapping:
            mapping[normalized] = translation

    for record in records:
        add(record.term, record.translation)
        for alias in record.aliases:
            add(alias, record.translation)

    for key, translation in defaults.items():
        add(key, translation)

    ordered = sorted(mapping.items(), key=lambda item: len(item[0]), reverse=True)
    return [
        DictionaryEntry(key=key, translation=translation, matcher=build_matcher(key))
        for key, translation in ordered
    ]


def preserve_case(translation: str, sample: str) -> str:
    """Mirror the casing of ``sample`` onto ``translation``.

    >>> preserve_case("obtener", "FETCH")
    'OBTENER'
    >>> preserve_case("obtener", "Fetch")
    'Obtener'
    """
    if not sample:
        return translation
    if sample == sample.upper():
        return translation.upper()
    if sample == sample.lower():
        return translation.lower()
    return translation[:1].upper() + translation[1:]


def translate_text(
    text: str,
    entries: Iterable[DictionaryEntry],
    escape: Optional[Callable[[str], str]] = None,
) -> str:
    """Replace every dictionary match in ``text``.

    Entries are applied in order over the running result. ``escape`` is
    applied to each inserted translation so it stays valid inside the
    enclosing literal; text that was already there is left alone.
    """
    result = text
    for entry in entries:
        def replace(match: re.Match, entry: DictionaryEntry = entry) -> str:
            replacement = preserve_case(entry.translation, match.group(0))
            return escape(replacement) if escape else replacement
        result = entry.matcher.sub(replace, result)
    return result


def lookup(entries: Iterable[DictionaryEntry], term: str) -> Optional[DictionaryEntry]:
    """Find the entry for ``term`` (case-insensitive)."""
    key = term.strip().lower()
    for entry in entries:
        if entry.key == key:
            return entry
    return None
