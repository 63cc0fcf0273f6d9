"""
Interpreter settings, read from the ``[interpreter]`` table of minilang.toml.

Example minilang.toml:

    [interpreter]
    char_literals = true
    decimal_precision = 28
    max_call_depth = 100
"""

import logging
import tomllib
from dataclasses import dataclass, fields
from pathlib import Path

from minilang.core.errors import ConfigError

logger = logging.getLogger(__name__)

SETTINGS_FILENAME = "minilang.toml"


@dataclass
class InterpreterSettings:
    """Knobs for tokenizing, parsing, and evaluating programs."""

    char_literals: bool = True  # 'c' literals and the `char` type keyword
    decimal_precision: int = 28  # significant digits for decimal arithmetic
    max_call_depth: int = 100  # nested function calls before evaluation fails

    def __post_init__(self) -> None:
        if not isinstance(self.char_literals, bool):
            raise ConfigError(f"char_literals must be a boolean, got {self.char_literals!r}")
        for name in ("decimal_precision", "max_call_depth"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ConfigError(f"{name} must be a positive integer, got {value!r}")


def load_settings(path: Path) -> InterpreterSettings:
    """Load interpreter settings from a TOML file.

    Raises:
        ConfigError: If the file is not valid TOML or holds unknown or
            ill-typed keys.
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    interpreter = data.get("interpreter", {})
    if not isinstance(interpreter, dict):
        raise ConfigError(f"[interpreter] in {path} must be a table")

    known = {f.name for f in fields(InterpreterSettings)}
    unknown = sorted(set(interpreter) - known)
    if unknown:
        raise ConfigError(f"Unknown interpreter settings in {path}: {', '.join(unknown)}")

    settings = InterpreterSettings(**interpreter)
    logger.debug("Loaded interpreter settings from %s: %s", path, settings)
    return settings


def find_settings(directory: Path) -> InterpreterSettings:
    """Load ``minilang.toml`` from ``directory``, or return the defaults."""
    path = directory / SETTINGS_FILENAME
    if not path.exists():
        logger.debug("No %s found in %s, using defaults", SETTINGS_FILENAME, directory)
        return InterpreterSettings()
    return load_settings(path)
