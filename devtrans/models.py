"""
Core data models for devtrans.

These models describe what a translation call produced: which language
was used, the rewritten code, and one Segment per rewritten span.

Design Philosophy:
- Results are created fresh per call and never shared
- Serializable: all models convert to/from JSON for the CLI and HTTP callers
- Offsets are character offsets into the *original* source
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum


class SegmentKind(str, Enum):
    """What kind of text a Segment rewrote."""
    STRING = "string"    # string literals, template chunks, JSX text
    COMMENT = "comment"  # line and block comments
    TEXT = "text"        # aggregate plain-text fallback


@dataclass(frozen=True)
class Segment:
    """One contiguous rewritten span.

    Attributes:
        kind: SegmentKind of the span
        original: Source text of the span, delimiters included
        translated: Replacement text, delimiters included
        start: Start offset in the original source
        end: End offset (exclusive) in the original source
    """
    kind: SegmentKind
    original: str
    translated: str
    start: int
    end: int

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "original": self.original,
            "translated": self.translated,
            "start": self.start,
            "end": self.end,
        }

    @classmethod
    def from_dict(cls, d: dict) -> Segment:
        return cls(
            kind=SegmentKind(d["kind"]),
            original=d["original"],
            translated=d["translated"],
            start=d["start"],
            end=d["end"],
        )


@dataclass
class TranslationResult:
    """Result of translating one code snippet.

    Attributes:
        language: Resolved language tag (js, ts, jsx, python, plain)
        code: The rewritten code
        used_fallback: True when the plain-text fallback produced ``code``
        segments: Rewritten spans, in source order
        string_replacements: Changed literals, template chunks and JSX texts
        comment_replacements: Changed comments
    """
    language: str
    code: str
    used_fallback: bool = False
    segments: list[Segment] = field(default_factory=list)
    string_replacements: int = 0
    comment_replacements: int = 0

    @property
    def changed(self) -> bool:
        return bool(self.segments)

    def to_dict(self) -> dict:
        return {
            "language": self.language,
            "code": self.code,
            "used_fallback": self.used_fallback,
            "segments": [s.to_dict() for s in self.segments],
            "string_replacements": self.string_replacements,
            "comment_replacements": self.comment_replacements,
        }

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)

    @classmethod
    def from_dict(cls, d: dict) -> TranslationResult:
        return cls(
            language=d["language"],
            code=d["code"],
            used_fallback=d.get("used_fallback", False),
            segments=[Segment.from_dict(s) for s in d.get("segments", [])],
            string_replacements=d.get("string_replacements", 0),
            comment_replacements=d.get("comment_replacements", 0),
        )

    @classmethod
    def from_json(cls, s: str) -> TranslationResult:
        return cls.from_dict(json.loads(s))
