"""
Shared rewriting machinery: the edit arena and literal escaping.

Rewriters never mutate the source in place. They record TextEdit objects
(a character range of the original plus its replacement) in whatever
order they discover them; ``apply_edits`` sorts them and splices the
result in one linear pass over the immutable original.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from devtrans.models import Segment, SegmentKind, TranslationResult


@dataclass(frozen=True)
class TextEdit:
    """Replace ``source[start:end]`` with ``replacement``."""
    start: int
    end: int
    replacement: str


def apply_edits(source: str, edits: Iterable[TextEdit]) -> str:
    """Splice edits into ``source``.

    Raises:
        ValueError: if two edits overlap or an edit is out of range
    """
    ordered = sorted(edits, key=lambda e: (e.start, e.end))
    if not ordered:
        return source

    parts = []
    cursor = 0
    for edit in ordered:
        if edit.start < cursor or edit.end < edit.start or edit.end > len(source):
            raise ValueError(f"Invalid or overlapping edit at {edit.start}:{edit.end}")
        parts.append(source[cursor:edit.start])
        parts.append(edit.replacement)
        cursor = edit.end
    parts.append(source[cursor:])
    return "".join(parts)


@dataclass
class RewriteOutcome:
    """Accumulates edits, segments and counters for one rewrite call."""
    source: str
    language: str
    edits: list[TextEdit] = field(default_factory=list)
    segments: list[Segment] = field(default_factory=list)
    string_replacements: int = 0
    comment_replacements: int = 0

    def replace(self, kind: SegmentKind, start: int, end: int, replacement: str) -> bool:
        """Record a rewrite of ``source[start:end]``. No-ops are dropped."""
        original = self.source[start:end]
        if original == replacement:
            return False
        self.edits.append(TextEdit(start, end, replacement))
        self.segments.append(Segment(kind, original, replacement, start, end))
        if kind is SegmentKind.COMMENT:
            self.comment_replacements += 1
        else:
            self.string_replacements += 1
        return True

    def to_result(self) -> TranslationResult:
        return TranslationResult(
            language=self.language,
            code=apply_edits(self.source, self.edits),
            used_fallback=False,
            segments=sorted(self.segments, key=lambda s: s.start),
            string_replacements=self.string_replacements,
            comment_replacements=self.comment_replacements,
        )


# ============================================================================
# Escaping
# ============================================================================

def escape_quoted(text: str, quote: str) -> str:
    """Escape text for a literal delimited by a single ``quote`` char."""
    escaped = text.replace("\\", "\\\\")
    return escaped.replace(quote, "\\" + quote)


def escape_triple_quoted(text: str, quote: str) -> str:
    """Escape text for a triple-quoted literal.

    Only the full delimiter sequence is dangerous; its last character is
    escaped so it cannot close the literal.
    """
    escaped = text.replace("\\", "\\\\")
    return escaped.replace(quote * 3, quote * 2 + "\\" + quote)


def escape_template(text: str) -> str:
    """Escape text for a template literal chunk (backticks and ``${``)."""
    return text.replace("`", "\\`").replace("${", "\\${")


_JSX_ENTITIES = {"'": "&apos;", '"': "&quot;"}


def escape_jsx_attribute(text: str, quote: str) -> str:
    """Escape text for a JSX attribute value.

    Attribute values have no backslash escapes; the active quote is
    written as an HTML entity instead.
    """
    return text.replace(quote, _JSX_ENTITIES[quote])
