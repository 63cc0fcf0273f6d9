"""Shared pytest fixtures for MiniLang tests."""

from collections.abc import Callable
from pathlib import Path

import pytest

from minilang.core.ir.values import Value
from minilang.core.lang.context import EvaluationContext
from minilang.core.lang.evaluator import evaluate
from minilang.core.lang.parser import parse


@pytest.fixture
def context() -> EvaluationContext:
    """Return an empty evaluation context."""
    return EvaluationContext()


@pytest.fixture
def program_file(tmp_path: Path) -> Path:
    """Return path to a small program file."""
    path = tmp_path / "program.ml"
    path.write_text('var x : int = 20;\nset x = x + 1;\nx * 2\n', encoding="utf-8")
    return path


@pytest.fixture
def run() -> Callable[..., Value]:
    """Return a helper that parses and evaluates source against a variable table."""

    def _run(source: str, variables: dict[str, Value] | None = None) -> Value:
        ctx = EvaluationContext(variables=variables if variables is not None else {})
        return evaluate(parse(source), ctx)

    return _run
