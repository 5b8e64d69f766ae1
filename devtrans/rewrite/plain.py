"""
Plain-text fallback: dictionary substitution over the whole input.

Used when the language has no rewriter or the structural parse failed.
Every matcher runs over everything, code tokens included.

The result deliberately reports a single aggregate "text" segment and
zero string/comment replacements; downstream consumers rely on that
shape to tell a fallback result from a structural one.
"""

from __future__ import annotations

from typing import Sequence

from devtrans.dictionary.entries import DictionaryEntry, translate_text
from devtrans.models import Segment, SegmentKind, TranslationResult


def translate_plain(source: str, entries: Sequence[DictionaryEntry], language: str) -> TranslationResult:
    translated = translate_text(source, entries)
    segments = []
    if translated != source:
        segments.append(Segment(SegmentKind.TEXT, source, translated, 0, len(source)))
    return TranslationResult(
        language=language,
        code=translated,
        used_fallback=True,
        segments=segments,
        string_replacements=0,
        comment_replacements=0,
    )
