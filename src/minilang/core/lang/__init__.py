"""
MiniLang language pipeline.

Tokenizer, parser, and tree-walking evaluator.

Usage:
    from minilang.core.lang import EvaluationContext, evaluate, parse

    ctx = EvaluationContext()
    result = evaluate(parse("var x : int = 2; x * 21"), ctx)
    # result == Value.of(42), ctx.variables["x"] == Value.of(2)
"""

from minilang.core.lang.context import EvaluationContext
from minilang.core.lang.evaluator import evaluate
from minilang.core.lang.parser import build_operator_tree, parse
from minilang.core.lang.tokenizer import default_readers, tokenize

__all__ = [
    "EvaluationContext",
    "build_operator_tree",
    "default_readers",
    "evaluate",
    "parse",
    "tokenize",
]
