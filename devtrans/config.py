"""
Project-wide configuration and file locations.

Module Contents:
    APP_NAME: Application name for display purposes
    DATA_DIR: Directory holding bundled data files
    DEFAULT_TERMS_FILE: Bundled developer-term dictionary (JSON)
    DICTIONARY_ENV: Environment variable overriding the dictionary file
    LOG_LEVEL_ENV: Environment variable overriding the log level

Example:
    >>> from devtrans.config import dictionary_path
    >>> print(f"Dictionary at: {dictionary_path()}")
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

APP_NAME = "DevTrans"

DATA_DIR = Path(__file__).resolve().parent / "data"

DEFAULT_TERMS_FILE = DATA_DIR / "terms.json"

DICTIONARY_ENV = "DEVTRANS_DICTIONARY"
LOG_LEVEL_ENV = "DEVTRANS_LOG_LEVEL"

DEFAULT_LOG_LEVEL = "WARNING"


def dictionary_path(override: Optional[Path] = None) -> Path:
    """Return the term file to load.

    An explicit override wins, then ``DEVTRANS_DICTIONARY``, then the
    bundled ``terms.json``.
    """
    if override is not None:
        return Path(override)
    env_value = os.environ.get(DICTIONARY_ENV, "").strip()
    if env_value:
        return Path(env_value).expanduser()
    return DEFAULT_TERMS_FILE


def log_level(verbose: bool = False) -> str:
    if verbose:
        return "DEBUG"
    return os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).strip().upper() or DEFAULT_LOG_LEVEL
