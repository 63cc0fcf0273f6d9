"""Tests for interpreter settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from minilang.core.config import (
    SETTINGS_FILENAME,
    InterpreterSettings,
    find_settings,
    load_settings,
)
from minilang.core.errors import ConfigError


class TestInterpreterSettings:
    def test_defaults(self) -> None:
        settings = InterpreterSettings()
        assert settings.char_literals is True
        assert settings.decimal_precision == 28
        assert settings.max_call_depth == 100

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"decimal_precision": 0},
            {"max_call_depth": -1},
            {"max_call_depth": True},
            {"decimal_precision": "28"},
            {"char_literals": "yes"},
        ],
    )
    def test_invalid_values(self, kwargs: dict) -> None:
        with pytest.raises(ConfigError):
            InterpreterSettings(**kwargs)


class TestLoadSettings:
    def test_load(self, tmp_path: Path) -> None:
        path = tmp_path / SETTINGS_FILENAME
        path.write_text(
            "[interpreter]\nchar_literals = false\nmax_call_depth = 12\n", encoding="utf-8"
        )
        settings = load_settings(path)
        assert settings == InterpreterSettings(char_literals=False, max_call_depth=12)

    def test_missing_table_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / SETTINGS_FILENAME
        path.write_text('[other]\nname = "x"\n', encoding="utf-8")
        assert load_settings(path) == InterpreterSettings()

    def test_unknown_key(self, tmp_path: Path) -> None:
        path = tmp_path / SETTINGS_FILENAME
        path.write_text("[interpreter]\nstrict = true\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="Unknown interpreter settings"):
            load_settings(path)

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / SETTINGS_FILENAME
        path.write_text("[interpreter\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_settings(path)

    def test_interpreter_not_a_table(self, tmp_path: Path) -> None:
        path = tmp_path / SETTINGS_FILENAME
        path.write_text('interpreter = "fast"\n', encoding="utf-8")
        with pytest.raises(ConfigError, match="must be a table"):
            load_settings(path)

    def test_bad_value(self, tmp_path: Path) -> None:
        path = tmp_path / SETTINGS_FILENAME
        path.write_text("[interpreter]\ndecimal_precision = 0\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="positive integer"):
            load_settings(path)


class TestFindSettings:
    def test_no_file(self, tmp_path: Path) -> None:
        assert find_settings(tmp_path) == InterpreterSettings()

    def test_file_found(self, tmp_path: Path) -> None:
        (tmp_path / SETTINGS_FILENAME).write_text(
            "[interpreter]\ndecimal_precision = 6\n", encoding="utf-8"
        )
        assert find_settings(tmp_path).decimal_precision == 6
