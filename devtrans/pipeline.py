"""
Main translation pipeline for devtrans.

This module orchestrates one translation call:
1. Short-circuit empty input
2. Resolve the language (hint or detection)
3. Load the dictionary (memoized)
4. Pick a rewriter: structural (js/ts/jsx), lexical (python) or plain
5. Downgrade to the plain fallback if the structural parse fails

Design Philosophy:
- The dictionary cache is injected, never a hidden global
- Each call is independent; only the read-only cache is shared
- Parse failures are recovered here; dictionary failures propagate
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from devtrans.config import dictionary_path
from devtrans.detect import resolve_language
from devtrans.dictionary import DictionaryCache, TermSource, source_from_path
from devtrans.errors import ParseFailure
from devtrans.models import TranslationResult
from devtrans.rewrite.lexical import LexicalRewriter
from devtrans.rewrite.plain import translate_plain
from devtrans.rewrite.structural import DEFAULT_GRAMMAR, StructuralRewriter

logger = logging.getLogger(__name__)


@dataclass
class PipelineConfig:
    """Configuration for the translation pipeline.

    Attributes:
        grammar: tree-sitter grammar used for js/ts/jsx
        use_defaults: Merge the built-in vocabulary into the dictionary
        skip_module_specifiers: Leave import/require paths untouched
    """
    grammar: str = DEFAULT_GRAMMAR
    use_defaults: bool = True
    skip_module_specifiers: bool = True

    def to_dict(self) -> dict:
        """Serialize config for logging/debugging."""
        return {
            "grammar": self.grammar,
            "use_defaults": self.use_defaults,
            "skip_module_specifiers": self.skip_module_specifiers,
        }


class TranslationPipeline:
    """Structural code translation.

    Usage:
        pipeline = TranslationPipeline(source=JsonTermSource("terms.json"))
        result = pipeline.translate('const msg = "fetch user";', "js")
        print(result.code)
    """

    def __init__(
        self,
        config: PipelineConfig | None = None,
        source: TermSource | None = None,
        cache: DictionaryCache | None = None,
    ):
        self.config = config or PipelineConfig()
        if cache is None:
            if source is None:
                source = source_from_path(dictionary_path())
            cache = DictionaryCache(source, defaults=None if self.config.use_defaults else {})
        self.cache = cache

        structural = StructuralRewriter(
            grammar=self.config.grammar,
            skip_module_specifiers=self.config.skip_module_specifiers,
        )
        lexical = LexicalRewriter()
        self._rewriters = {}
        for language in structural.languages:
            self._rewriters[language] = structural
        for language in lexical.languages:
            self._rewriters[language] = lexical

    def translate(self, code: str, language: Optional[str] = None) -> TranslationResult:
        """Translate the human-readable text embedded in ``code``.

        Args:
            code: Source snippet
            language: Optional hint (aliases accepted, unknown -> plain)

        Returns:
            TranslationResult

        Raises:
            DictionarySourceError: if the term source cannot be read
            GrammarUnavailable: if the js/ts/jsx grammar cannot be loaded
        """
        source = code or ""
        if not source.strip():
            return TranslationResult(language=language or "plain", code=source)

        resolved = resolve_language(source, language)
        entries = self.cache.get()

        rewriter = self._rewriters.get(resolved)
        if rewriter is None:
            result = translate_plain(source, entries, resolved)
        else:
            try:
                result = rewriter.rewrite(source, entries, resolved)
            except ParseFailure as e:
                logger.debug("Falling back to plain text for %s snippet: %s", resolved, e)
                result = translate_plain(source, entries, resolved)

        logger.debug(
            "Translated %s snippet: %d string(s), %d comment(s), fallback=%s",
            resolved,
            result.string_replacements,
            result.comment_replacements,
            result.used_fallback,
        )
        return result

    def reset(self) -> None:
        """Forget the built dictionary; the next call rebuilds it."""
        self.cache.invalidate()


# ============================================================================
# Module-level convenience API
# ============================================================================

_default_pipeline: Optional[TranslationPipeline] = None
_default_lock = threading.Lock()


def get_pipeline() -> TranslationPipeline:
    """Return the process-wide pipeline, creating it on first use."""
    global _default_pipeline
    with _default_lock:
        if _default_pipeline is None:
            _default_pipeline = TranslationPipeline()
        return _default_pipeline


def configure(
    source: Union[TermSource, str, Path, None] = None,
    config: PipelineConfig | None = None,
) -> TranslationPipeline:
    """Install a new process-wide pipeline backed by ``source``.

    ``source`` may be a TermSource or a path to a term file; None uses
    the configured default file.
    """
    global _default_pipeline
    if isinstance(source, (str, Path)):
        source = source_from_path(source)
    pipeline = TranslationPipeline(config=config, source=source)
    with _default_lock:
        _default_pipeline = pipeline
    return pipeline


def translate(code: str, language: Optional[str] = None) -> TranslationResult:
    """Translate ``code`` with the process-wide pipeline."""
    return get_pipeline().translate(code, language)


def reset() -> None:
    """Invalidate the process-wide dictionary cache."""
    with _default_lock:
        pipeline = _default_pipeline
    if pipeline is not None:
        pipeline.reset()
