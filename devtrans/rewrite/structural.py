"""
Structural rewriter for the JavaScript family (js, ts, jsx).

The source is parsed with tree-sitter, which always produces a
best-effort tree: syntax errors become ERROR/MISSING nodes instead of
exceptions. Only when no tree can be recovered at all is ParseFailure
raised, and the pipeline downgrades that call to the plain fallback. A
grammar that cannot be loaded is an installation problem and raises
GrammarUnavailable instead.

Translatable spans:
- string literals ('...' and "..."), re-escaped for their own quote
- JSX attribute values, with the quote written as an HTML entity
- static chunks of template literals (never the ${...} substitutions)
- JSX text between tags
- line and block comments, delimiters preserved

Design:
- Traversal yields grammar-neutral TextSpan records; rewriting never
  touches tree-sitter nodes
- Edits go through the RewriteOutcome arena and are spliced once
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import partial
from typing import Callable, Iterator, Sequence

from tree_sitter_language_pack import get_parser

from devtrans.dictionary.entries import DictionaryEntry, translate_text
from devtrans.errors import GrammarUnavailable, ParseFailure
from devtrans.models import SegmentKind, TranslationResult
from devtrans.rewrite.base import RewriteOutcome, escape_jsx_attribute, escape_quoted, escape_template

logger = logging.getLogger(__name__)

# tsx is a superset of the js/ts/jsx syntax we need to read.
DEFAULT_GRAMMAR = "tsx"

STRING = "string"
JSX_ATTRIBUTE = "jsx_attribute"
TEMPLATE_CHUNK = "template_chunk"
JSX_TEXT = "jsx_text"
COMMENT = "comment"

_QUOTES = (b"'", b'"')


@dataclass(frozen=True)
class TextSpan:
    """A translatable span found by the traversal (byte offsets)."""
    kind: str
    start: int
    end: int


@dataclass
class ParsedSource:
    """Best-effort parse: translatable spans plus recoverable error ranges."""
    spans: list[TextSpan] = field(default_factory=list)
    errors: list[tuple[int, int]] = field(default_factory=list)


def parse_source(
    data: bytes,
    grammar: str = DEFAULT_GRAMMAR,
    skip_module_specifiers: bool = True,
) -> ParsedSource:
    """Parse ``data`` and collect its translatable spans.

    Raises:
        GrammarUnavailable: if the grammar cannot be loaded
        ParseFailure: if no syntax tree could be recovered
    """
    try:
        parser = get_parser(grammar)
    except Exception as e:
        raise GrammarUnavailable(f"Cannot load the {grammar} grammar: {e}") from e
    try:
        tree = parser.parse(data)
    except Exception as e:
        raise ParseFailure(f"{grammar} parser failed: {e}") from e

    if tree is None or tree.root_node is None:
        raise ParseFailure(f"{grammar} parser returned no tree")
    root = tree.root_node
    if root.type == "ERROR":
        raise ParseFailure(f"{grammar} parser could not recover a syntax tree")

    parsed = ParsedSource()
    for node in _walk(root):
        if node.type == "ERROR" or node.is_missing:
            parsed.errors.append((node.start_byte, node.end_byte))
    parsed.spans = list(collect_text_spans(root, data, skip_module_specifiers))
    return parsed


def _walk(root) -> Iterator:
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def collect_text_spans(root, data: bytes, skip_module_specifiers: bool = True) -> Iterator[TextSpan]:
    """Yield TextSpan records for the node kinds of interest.

    String, JSX text and comment nodes are leaves for our purposes; the
    walk only descends into template substitutions, never into the
    static parts of a template.
    """
    stack = [root]
    while stack:
        node = stack.pop()
        kind = node.type
        if node.end_byte <= node.start_byte:
            continue

        if kind == "string":
            if skip_module_specifiers and _is_module_specifier(node, data):
                continue
            raw = data[node.start_byte:node.end_byte]
            if len(raw) >= 2 and raw[:1] == raw[-1:] and raw[:1] in _QUOTES:
                in_attribute = node.parent is not None and node.parent.type == "jsx_attribute"
                yield TextSpan(JSX_ATTRIBUTE if in_attribute else STRING, node.start_byte, node.end_byte)
            continue

        if kind == "template_string":
            yield from _template_chunks(node, data)
            stack.extend(reversed([c for c in node.children if c.type == "template_substitution"]))
            continue

        if kind == "jsx_text":
            yield TextSpan(JSX_TEXT, node.start_byte, node.end_byte)
            continue

        if kind == "comment":
            yield TextSpan(COMMENT, node.start_byte, node.end_byte)
            continue

        stack.extend(reversed(node.children))


def _template_chunks(node, data: bytes) -> Iterator[TextSpan]:
    """Static chunks are the gaps between the backticks and substitutions."""
    if node.end_byte - node.start_byte < 2:
        return
    if data[node.start_byte:node.start_byte + 1] != b"`" or data[node.end_byte - 1:node.end_byte] != b"`":
        return
    position = node.start_byte + 1
    for child in node.children:
        if child.type != "template_substitution":
            continue
        if child.start_byte > position:
            yield TextSpan(TEMPLATE_CHUNK, position, child.start_byte)
        position = child.end_byte
    if node.end_byte - 1 > position:
        yield TextSpan(TEMPLATE_CHUNK, position, node.end_byte - 1)


def _is_module_specifier(node, data: bytes) -> bool:
    parent = node.parent
    if parent is None:
        return False
    if parent.type in ("import_statement", "export_statement"):
        source = parent.child_by_field_name("source")
        return source is not None and source.start_byte == node.start_byte
    if parent.type == "arguments" and parent.parent is not None and parent.parent.type == "call_expression":
        function = parent.parent.child_by_field_name("function")
        if function is None:
            return False
        if function.type == "import":
            return True
        return function.type == "identifier" and data[function.start_byte:function.end_byte] == b"require"
    return False


def _byte_to_char(source: str, data: bytes) -> Callable[[int], int]:
    """Map tree-sitter byte offsets to str indices."""
    if len(data) == len(source):
        return int
    table = [0] * (len(data) + 1)
    position = 0
    for index, char in enumerate(source):
        width = len(char.encode("utf-8", "surrogatepass"))
        for k in range(width):
            table[position + k] = index
        position += width
    table[position] = len(source)
    return table.__getitem__


class StructuralRewriter:
    """Rewrites text spans of a js/ts/jsx snippet through a syntax tree.

    Args:
        grammar: tree-sitter grammar name (tsx reads js, ts and jsx)
        skip_module_specifiers: leave import/require paths untouched
    """

    languages = ("js", "ts", "jsx")

    def __init__(self, grammar: str = DEFAULT_GRAMMAR, skip_module_specifiers: bool = True):
        self.grammar = grammar
        self.skip_module_specifiers = skip_module_specifiers

    def rewrite(
        self,
        source: str,
        entries: Sequence[DictionaryEntry],
        language: str,
    ) -> TranslationResult:
        """Translate the text spans of ``source``.

        Raises:
            GrammarUnavailable: if the grammar cannot be loaded
            ParseFailure: if the source cannot be parsed at all
        """
        data = source.encode("utf-8", "surrogatepass")
        parsed = parse_source(data, self.grammar, self.skip_module_specifiers)
        if parsed.errors:
            logger.debug("Recovered from %d syntax error(s) in %s snippet", len(parsed.errors), language)

        to_char = _byte_to_char(source, data)
        outcome = RewriteOutcome(source=source, language=language)

        # Text pass, then comment pass.
        for span in parsed.spans:
            if span.kind != COMMENT:
                self._rewrite_text(outcome, span.kind, to_char(span.start), to_char(span.end), entries)
        for span in parsed.spans:
            if span.kind == COMMENT:
                self._rewrite_comment(outcome, to_char(span.start), to_char(span.end), entries)

        return outcome.to_result()

    def _rewrite_text(self, outcome: RewriteOutcome, kind: str, start: int, end: int, entries) -> None:
        raw = outcome.source[start:end]
        if kind in (STRING, JSX_ATTRIBUTE):
            quote = raw[0]
            inner = raw[1:-1]
            escaper = escape_jsx_attribute if kind == JSX_ATTRIBUTE else escape_quoted
            translated = translate_text(inner, entries, escape=partial(escaper, quote=quote))
            if translated != inner:
                outcome.replace(SegmentKind.STRING, start, end, f"{quote}{translated}{quote}")
        elif kind == TEMPLATE_CHUNK:
            outcome.replace(SegmentKind.STRING, start, end, translate_text(raw, entries, escape=escape_template))
        else:
            outcome.replace(SegmentKind.STRING, start, end, translate_text(raw, entries))

    def _rewrite_comment(self, outcome: RewriteOutcome, start: int, end: int, entries) -> None:
        raw = outcome.source[start:end]
        if raw.startswith("//"):
            inner = raw[2:]
            translated = translate_text(inner, entries)
            if translated != inner:
                outcome.replace(SegmentKind.COMMENT, start, end, f"//{translated}")
        elif raw.startswith("/*") and raw.endswith("*/") and len(raw) >= 4:
            inner = raw[2:-2]
            translated = translate_text(inner, entries)
            if translated != inner:
                outcome.replace(SegmentKind.COMMENT, start, end, f"/*{translated}*/")
