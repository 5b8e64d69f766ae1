"""
Lexical rewriter: a hand-rolled single-pass scanner for languages
without a structural parser (Python).

The scanner is a small finite-state machine with three states:

    DEFAULT     advance one char, watching for a comment marker or quote
    IN_COMMENT  consume to end of line
    IN_STRING   consume a (possibly prefixed, possibly triple-quoted)
                string literal up to its closing delimiter

It is not a tokenizer: only comment and string spans are classified, and
once a span is consumed scanning resumes strictly after it. Interpolated
f-string content is translated as plain text.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from functools import partial
from typing import Iterator, Sequence, Union

from devtrans.dictionary.entries import DictionaryEntry, translate_text
from devtrans.models import SegmentKind, TranslationResult
from devtrans.rewrite.base import RewriteOutcome, escape_quoted, escape_triple_quoted


class ScanState(Enum):
    DEFAULT = auto()
    IN_COMMENT = auto()
    IN_STRING = auto()


@dataclass(frozen=True)
class ScannerProfile:
    """Lexical conventions of one language.

    Attributes:
        comment_marker: Line comment opener
        quote_chars: Characters that open a string literal
        prefix_chars: Letters allowed as string prefixes
        raw_chars: Prefix letters that disable backslash escapes
    """
    comment_marker: str = "#"
    quote_chars: str = "'\""
    prefix_chars: str = "rRbBuUfF"
    raw_chars: str = "rR"


PROFILES: dict[str, ScannerProfile] = {
    "python": ScannerProfile(),
}


@dataclass(frozen=True)
class CommentSpan:
    start: int
    end: int


@dataclass(frozen=True)
class StringLiteral:
    """A string literal found by the scanner.

    ``start`` includes the prefix; ``content_start``/``content_end``
    exclude the delimiters. Unterminated literals run to end of input
    and have an empty content range.
    """
    start: int
    end: int
    content_start: int
    content_end: int
    prefix: str
    quote: str
    triple: bool
    terminated: bool = True

    @property
    def delimiter(self) -> str:
        return self.quote * 3 if self.triple else self.quote


def _is_identifier_char(char: str) -> bool:
    return char == "_" or char.isalnum()


class LexicalScanner:
    """Finds comment and string spans in one left-to-right pass."""

    def __init__(self, profile: ScannerProfile):
        self.profile = profile

    def scan(self, source: str) -> Iterator[Union[CommentSpan, StringLiteral]]:
        marker = self.profile.comment_marker
        length = len(source)
        state = ScanState.DEFAULT
        index = 0

        while index < length:
            if state is ScanState.DEFAULT:
                if source.startswith(marker, index):
                    state = ScanState.IN_COMMENT
                elif source[index] in self.profile.quote_chars:
                    state = ScanState.IN_STRING
                else:
                    index += 1
            elif state is ScanState.IN_COMMENT:
                end = source.find("\n", index)
                if end == -1:
                    end = length
                yield CommentSpan(index, end)
                index = end
                state = ScanState.DEFAULT
            else:
                literal = self.read_string(source, index)
                yield literal
                index = max(literal.end, index + 1)
                state = ScanState.DEFAULT

    def read_string(self, source: str, quote_index: int) -> StringLiteral:
        """Read the literal whose opening quote is at ``quote_index``."""
        profile = self.profile
        length = len(source)

        prefix_start = quote_index
        while prefix_start > 0 and source[prefix_start - 1] in profile.prefix_chars:
            prefix_start -= 1
        # "name'..." is not a prefixed literal
        if prefix_start > 0 and _is_identifier_char(source[prefix_start - 1]):
            prefix_start = quote_index

        quote = source[quote_index]
        prefix = source[prefix_start:quote_index]
        triple = source.startswith(quote * 3, quote_index)
        raw = any(c in profile.raw_chars for c in prefix)
        delimiter = quote * 3 if triple else quote

        cursor = quote_index + len(delimiter)
        content_start = cursor
        while cursor < length:
            char = source[cursor]
            if char == "\\" and not raw:
                cursor += 2
                continue
            if source.startswith(delimiter, cursor):
                return StringLiteral(
                    start=prefix_start,
                    end=cursor + len(delimiter),
                    content_start=content_start,
                    content_end=cursor,
                    prefix=prefix,
                    quote=quote,
                    triple=triple,
                )
            cursor += 1

        return StringLiteral(
            start=prefix_start,
            end=length,
            content_start=content_start,
            content_end=content_start,
            prefix=prefix,
            quote=quote,
            triple=triple,
            terminated=False,
        )


class LexicalRewriter:
    """Translates comments and string literals found by LexicalScanner."""

    def __init__(self, profiles: dict[str, ScannerProfile] | None = None):
        self.profiles = profiles if profiles is not None else PROFILES

    @property
    def languages(self) -> tuple[str, ...]:
        return tuple(self.profiles)

    def rewrite(
        self,
        source: str,
        entries: Sequence[DictionaryEntry],
        language: str,
    ) -> TranslationResult:
        profile = self.profiles[language]
        scanner = LexicalScanner(profile)
        outcome = RewriteOutcome(source=source, language=language)

        for span in scanner.scan(source):
            if isinstance(span, CommentSpan):
                self._rewrite_comment(outcome, span, profile.comment_marker, entries)
            elif span.terminated:
                self._rewrite_string(outcome, span, entries)

        return outcome.to_result()

    def _rewrite_comment(self, outcome: RewriteOutcome, span: CommentSpan, marker: str, entries) -> None:
        inner = outcome.source[span.start + len(marker):span.end]
        translated = translate_text(inner, entries)
        if translated != inner:
            outcome.replace(SegmentKind.COMMENT, span.start, span.end, marker + translated)

    def _rewrite_string(self, outcome: RewriteOutcome, literal: StringLiteral, entries) -> None:
        inner = outcome.source[literal.content_start:literal.content_end]
        escaper = escape_triple_quoted if literal.triple else escape_quoted
        escape = partial(escaper, quote=literal.quote)
        translated = translate_text(inner, entries, escape=escape)
        if translated == inner:
            return
        delimiter = literal.delimiter
        outcome.replace(
            SegmentKind.STRING,
            literal.start,
            literal.end,
            f"{literal.prefix}{delimiter}{translated}{delimiter}",
        )
