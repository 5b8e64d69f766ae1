"""
Language detection and hint normalization.

Functions:
    normalize_language: Map a user-supplied hint to a canonical tag
    detect_language: Guess the tag from the source text
    resolve_language: Hint if given, detection otherwise

Canonical tags are the languages with a rewriter (js, ts, jsx, python)
plus "plain" for everything else.
"""

from __future__ import annotations

import re
from typing import Optional

SUPPORTED_LANGUAGES = ("js", "ts", "jsx", "python", "plain")

LANGUAGE_ALIASES: dict[str, str] = {
    "js": "js",
    "javascript": "js",
    "node": "js",
    "mjs": "js",
    "cjs": "js",
    "ts": "ts",
    "typescript": "ts",
    "jsx": "jsx",
    "tsx": "jsx",
    "react": "jsx",
    "python": "python",
    "py": "python",
    "python3": "python",
    "plain": "plain",
    "text": "plain",
    "txt": "plain",
}

_MARKUP_OPEN = re.compile(r"<\w[\w\d]*[^>]*>")
_MARKUP_CLOSE = re.compile(r"</\w")

_PY_DEF = re.compile(r"^\s*(def |class )", re.MULTILINE)
_PY_IMPORT = re.compile(r"^\s*import\s+\w+\s*$", re.MULTILINE)
_PY_BLOCK = re.compile(
    r":\s*\n[ \t]+pass\b"
    r"|^\s*(?:if|elif|else|for|while|with|try|except|finally)\b[^\n{;]*:[ \t]*\n[ \t]+\S",
    re.MULTILINE,
)

_TS_INTERFACE = re.compile(r"interface\s+\w+")
_TS_TYPE_ALIAS = re.compile(r"type\s+\w+\s*=")


def normalize_language(hint: str) -> str:
    """Map a hint to a canonical tag. Unknown languages become "plain".

    >>> normalize_language("TypeScript")
    'ts'
    >>> normalize_language("go")
    'plain'
    """
    return LANGUAGE_ALIASES.get((hint or "").strip().lower(), "plain")


def detect_language(source: str) -> str:
    """Classify source text with ordered syntactic heuristics.

    1. Balanced markup tags -> jsx
    2. Python markers (def/class lines, bare imports, colon blocks) -> python
    3. Type-system markers (interface, type aliases, ": string") -> ts
    4. Otherwise -> js
    """
    snippet = source.strip()
    if not snippet:
        return "plain"
    if _MARKUP_OPEN.search(snippet) and _MARKUP_CLOSE.search(snippet):
        return "jsx"
    if _PY_DEF.search(snippet) or _PY_IMPORT.search(snippet) or _PY_BLOCK.search(snippet):
        return "python"
    if _TS_INTERFACE.search(snippet) or _TS_TYPE_ALIAS.search(snippet) or ": string" in snippet:
        return "ts"
    return "js"


def resolve_language(source: str, hint: Optional[str] = None) -> str:
    if hint:
        return normalize_language(hint)
    return detect_language(source)
