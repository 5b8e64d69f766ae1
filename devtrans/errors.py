"""
Exception hierarchy for devtrans.

Dictionary source failures and an unloadable grammar reach callers of
``translate()``; parse failures are recovered inside the pipeline.
"""


class DevTransError(Exception):
    """Base class for all devtrans errors."""


class DictionarySourceError(DevTransError):
    """The backing term collection could not be read."""


class ParseFailure(DevTransError):
    """The structural parser could not recover any syntax tree."""


class GrammarUnavailable(DevTransError):
    """The tree-sitter grammar for the structural parser could not be loaded."""
