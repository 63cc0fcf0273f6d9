"""
Host driver: run program text against a caller-supplied variable table.

    variables = {"n": Value.of(10)}
    result = execute("set n = n * 2; n + 1", variables)
    # result == Value.of(21), variables["n"] == Value.of(20)
"""

from __future__ import annotations

import logging
from pathlib import Path

from minilang.core.config import InterpreterSettings
from minilang.core.errors import ErrorContext, EvaluationError
from minilang.core.ir.values import Value
from minilang.core.lang.context import EvaluationContext
from minilang.core.lang.evaluator import evaluate
from minilang.core.lang.parser import parse

logger = logging.getLogger(__name__)


def execute(
    source: str,
    variables: dict[str, Value] | None = None,
    settings: InterpreterSettings | None = None,
    file: Path | None = None,
) -> Value:
    """Parse and evaluate ``source``.

    The evaluation context is seeded with copies of ``variables``; once the
    program finishes, every binding it ends with (including new
    declarations) is written back into ``variables``. Nothing is written back
    if parsing or evaluation fails.

    Raises:
        ParseError: If the program is invalid.
        EvaluationError: If evaluation fails. The error carries line and
            column context for the offending token.
    """
    settings = settings or InterpreterSettings()
    context = EvaluationContext(
        variables={name: value.model_copy() for name, value in (variables or {}).items()}
    )

    root = parse(source, settings)
    try:
        result = evaluate(root, context, settings)
    except EvaluationError as e:
        if e.pos is None or e.context is not None:
            raise
        raise EvaluationError(
            e.message, e.pos, ErrorContext.from_offset(source, e.pos, file)
        ) from e

    if variables is not None:
        variables.update(context.variables)
    logger.debug(
        "Executed program: %d variables, %d functions",
        len(context.variables),
        len(context.functions),
    )
    return result
