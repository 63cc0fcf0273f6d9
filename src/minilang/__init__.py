"""
MiniLang - a small interpreted language.

Source text is tokenized, parsed into an abstract syntax tree, and evaluated
directly against a mutable table of variables and functions.
"""

from __future__ import annotations

import re
from importlib.metadata import version as _metadata_version
from pathlib import Path as _Path

from .core import ir
from .core.config import InterpreterSettings
from .core.errors import ConfigError, EvaluationError, MiniLangError, ParseError
from .core.host import execute
from .core.ir.values import DataKind, Value
from .core.lang import EvaluationContext, evaluate, parse, tokenize


def _get_version() -> str:
    """Get version from pyproject.toml (editable) or importlib.metadata (installed)."""
    # In editable mode, read directly from pyproject.toml for live updates
    pyproject = _Path(__file__).parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        content = pyproject.read_text()
        if match := re.search(r'^version\s*=\s*["\']([^"\']+)["\']', content, re.MULTILINE):
            return match.group(1)

    # Fall back to installed metadata
    try:
        return _metadata_version("minilang")
    except Exception:
        return "0.0.0"


__version__ = _get_version()

__all__ = [
    "__version__",
    "ir",
    "tokenize",
    "parse",
    "evaluate",
    "execute",
    "EvaluationContext",
    "InterpreterSettings",
    "DataKind",
    "Value",
    "MiniLangError",
    "ParseError",
    "EvaluationError",
    "ConfigError",
]
