"""Core MiniLang functionality: IR, tokenizer, parser, evaluator, settings, host driver."""

from . import ir
from .config import InterpreterSettings, find_settings, load_settings
from .errors import (
    ConfigError,
    ErrorContext,
    EvaluationError,
    MiniLangError,
    ParseError,
)
from .host import execute

__all__ = [
    "ir",
    "MiniLangError",
    "ParseError",
    "EvaluationError",
    "ConfigError",
    "ErrorContext",
    "InterpreterSettings",
    "load_settings",
    "find_settings",
    "execute",
]
