"""
devtrans: structural translation of the human-readable text in code.

Translates string literals, template chunks, JSX text and comments with
a developer-term dictionary while leaving every executable token of the
snippet untouched.

Supported strategies:
1. Structural (tree-sitter) for js, ts and jsx
2. Lexical scanner for python
3. Plain-text fallback for everything else

License: MIT
"""

__version__ = "0.1.0"

from devtrans.models import Segment, SegmentKind, TranslationResult
from devtrans.pipeline import (
    PipelineConfig,
    TranslationPipeline,
    configure,
    translate,
    reset,
)

__all__ = [
    "Segment",
    "SegmentKind",
    "TranslationResult",
    "PipelineConfig",
    "TranslationPipeline",
    "configure",
    "translate",
    "reset",
]
