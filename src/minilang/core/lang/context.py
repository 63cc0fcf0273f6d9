"""
Evaluation context: the variable and function bindings of one call frame.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from minilang.core.ir.nodes import FunctionDeclaration
from minilang.core.ir.values import Value


@dataclass
class EvaluationContext:
    """Bindings visible to one evaluation frame.

    There is no parent link. A function call runs in a context made by
    spawn(), which sees the caller's functions but none of its variables.
    """

    variables: dict[str, Value] = field(default_factory=dict)
    functions: dict[str, FunctionDeclaration] = field(default_factory=dict)

    def spawn(self) -> EvaluationContext:
        """A fresh frame for a function call: no variables, same functions."""
        return EvaluationContext(functions=dict(self.functions))
