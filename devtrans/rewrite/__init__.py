"""
Rewriters: structural (tree-sitter), lexical (hand-rolled scanner) and
the plain-text fallback. All three return a TranslationResult built from
the same edit arena.
"""

from devtrans.rewrite.base import TextEdit, RewriteOutcome, apply_edits
from devtrans.rewrite.lexical import LexicalRewriter, LexicalScanner, ScannerProfile
from devtrans.rewrite.plain import translate_plain
from devtrans.rewrite.structural import StructuralRewriter, ParsedSource, TextSpan, parse_source

__all__ = [
    "TextEdit",
    "RewriteOutcome",
    "apply_edits",
    "LexicalRewriter",
    "LexicalScanner",
    "ScannerProfile",
    "translate_plain",
    "StructuralRewriter",
    "ParsedSource",
    "TextSpan",
    "parse_source",
]
