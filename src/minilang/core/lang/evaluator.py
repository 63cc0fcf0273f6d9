"""
Tree-walking evaluator for MiniLang.

Evaluates a parsed program against an EvaluationContext, which is mutated in
place: declared variables and functions stay registered after evaluation.
Values are type-checked operand by operand as evaluation proceeds; every
failure raises EvaluationError and ends the whole evaluation.
"""

from __future__ import annotations

import decimal
import logging
import operator
from collections.abc import Callable
from decimal import Decimal
from typing import Any

from minilang.core.config import InterpreterSettings
from minilang.core.errors import EvaluationError
from minilang.core.ir.nodes import (
    BinaryExpression,
    BinaryOperator,
    Comment,
    Constant,
    FunctionCall,
    FunctionDeclaration,
    If,
    Node,
    StatementList,
    Variable,
    VariableAssignment,
    VariableDeclaration,
    While,
)
from minilang.core.ir.values import DataKind, Value
from minilang.core.lang.context import EvaluationContext

logger = logging.getLogger(__name__)


def evaluate(
    node: Node,
    context: EvaluationContext | None = None,
    settings: InterpreterSettings | None = None,
) -> Value:
    """Evaluate a parsed program.

    Args:
        node: Root node from parse().
        context: Bindings to evaluate against; mutated in place. A fresh
            context is used when omitted.
        settings: Interpreter settings; defaults are used when omitted.

    Returns:
        The value of the program (the last non-comment statement).

    Raises:
        EvaluationError: If evaluation fails.
    """
    if context is None:
        context = EvaluationContext()
    interpreter = _Interpreter(settings or InterpreterSettings())
    try:
        return interpreter.interpret(node, context)
    except RecursionError as e:
        raise EvaluationError(
            "Program nests too deeply to evaluate (Python recursion limit reached)",
            interpreter.call_pos,
        ) from e


def _int_div(left: int, right: int) -> int:
    """Integer division truncating toward zero."""
    quotient = abs(left) // abs(right)
    return quotient if (left >= 0) == (right > 0) else -quotient


_ARITHMETIC: dict[BinaryOperator, Callable[[Any, Any], Any]] = {
    BinaryOperator.ADD: operator.add,
    BinaryOperator.SUB: operator.sub,
    BinaryOperator.MUL: operator.mul,
}

_ORDERING: dict[BinaryOperator, Callable[[Any, Any], bool]] = {
    BinaryOperator.LT: operator.lt,
    BinaryOperator.LE: operator.le,
    BinaryOperator.GT: operator.gt,
    BinaryOperator.GE: operator.ge,
}

_NUMERIC = {DataKind.INTEGER, DataKind.DECIMAL}

# Operand kinds each operator accepts (both sides share the kind)
_OPERAND_KINDS: dict[BinaryOperator, set[DataKind]] = {
    BinaryOperator.ADD: {DataKind.INTEGER, DataKind.DECIMAL, DataKind.STRING},
    BinaryOperator.SUB: _NUMERIC,
    BinaryOperator.MUL: _NUMERIC,
    BinaryOperator.DIV: _NUMERIC,
    BinaryOperator.LT: _NUMERIC,
    BinaryOperator.LE: _NUMERIC,
    BinaryOperator.GT: _NUMERIC,
    BinaryOperator.GE: _NUMERIC,
}


class _Interpreter:
    """Evaluation state for one evaluate() call."""

    def __init__(self, settings: InterpreterSettings) -> None:
        self.settings = settings
        self.depth = 0
        # Position of the innermost call being entered
        self.call_pos: int | None = None
        self.decimal_context = decimal.Context(prec=settings.decimal_precision)

    def interpret(self, node: Node, ctx: EvaluationContext) -> Value:
        """Dispatch evaluation to the appropriate handler."""
        if isinstance(node, Constant):
            return Value(kind=node.kind, payload=node.value)

        if isinstance(node, Variable):
            return self.interpret_variable(node, ctx)

        if isinstance(node, Comment):
            return Value.undefined()

        if isinstance(node, StatementList):
            return self.interpret_statement_list(node, ctx)

        if isinstance(node, VariableDeclaration):
            return self.interpret_variable_declaration(node, ctx)

        if isinstance(node, VariableAssignment):
            return self.interpret_variable_assignment(node, ctx)

        if isinstance(node, FunctionDeclaration):
            return self.interpret_function_declaration(node, ctx)

        if isinstance(node, FunctionCall):
            return self.interpret_function_call(node, ctx)

        if isinstance(node, If):
            return self.interpret_if(node, ctx)

        if isinstance(node, While):
            return self.interpret_while(node, ctx)

        if isinstance(node, BinaryExpression):
            return self.interpret_binary(node, ctx)

        raise TypeError(f"Unknown node type: {type(node).__name__}")

    # -- Bindings --

    def interpret_variable(self, node: Variable, ctx: EvaluationContext) -> Value:
        """Unbound names read as undefined."""
        value = ctx.variables.get(node.name)
        if value is None:
            return Value.undefined()
        return value.model_copy()

    def interpret_statement_list(self, node: StatementList, ctx: EvaluationContext) -> Value:
        result = Value.undefined()
        for statement in node.statements:
            if isinstance(statement, Comment):
                continue
            result = self.interpret(statement, ctx)
        return result

    def interpret_variable_declaration(
        self, node: VariableDeclaration, ctx: EvaluationContext
    ) -> Value:
        if node.name in ctx.variables:
            raise EvaluationError(f"Variable already declared: {node.name}", node.token.pos)
        value = self.interpret(node.initializer, ctx)
        if value.kind != node.kind:
            raise EvaluationError(
                f"Invalid variable type for {node.name}: expected {node.kind}, got {value.kind}",
                node.token.pos,
            )
        ctx.variables[node.name] = value
        return Value.undefined()

    def interpret_variable_assignment(
        self, node: VariableAssignment, ctx: EvaluationContext
    ) -> Value:
        variable = ctx.variables.get(node.name)
        if variable is None:
            raise EvaluationError(f"Variable not declared: {node.name}", node.token.pos)
        value = self.interpret(node.value, ctx)
        if value.kind != variable.kind:
            raise EvaluationError(
                f"Invalid variable type for {node.name}: expected {variable.kind}, got {value.kind}",
                node.token.pos,
            )
        variable.set(value.payload)
        return Value.undefined()

    # -- Functions --

    def interpret_function_declaration(
        self, node: FunctionDeclaration, ctx: EvaluationContext
    ) -> Value:
        if node.name in ctx.functions:
            raise EvaluationError(f"Function already declared: {node.name}", node.token.pos)
        ctx.functions[node.name] = node
        logger.debug("Declared function %s/%d", node.name, len(node.parameters))
        return Value.undefined()

    def interpret_function_call(self, node: FunctionCall, ctx: EvaluationContext) -> Value:
        """Call a declared function in a fresh frame.

        Arguments are evaluated in the caller's frame and checked one at a
        time. The callee sees its parameters and the caller's functions,
        never the caller's variables.
        """
        function = ctx.functions.get(node.name)
        if function is None:
            raise EvaluationError(f"Function not declared: {node.name}", node.token.pos)
        if len(function.parameters) != len(node.arguments):
            raise EvaluationError(
                f"Function parameter count incorrect for {node.name}: "
                f"expected {len(function.parameters)}, got {len(node.arguments)}",
                node.token.pos,
            )

        frame = ctx.spawn()
        for param, arg in zip(function.parameters, node.arguments, strict=True):
            value = self.interpret(arg, ctx)
            if value.kind != param.kind:
                raise EvaluationError(
                    f"Incorrect parameter type for {node.name}({param.name}): "
                    f"expected {param.kind}, got {value.kind}",
                    arg.token.pos,
                )
            frame.variables[param.name] = value

        if self.depth >= self.settings.max_call_depth:
            raise EvaluationError(
                f"Maximum call depth of {self.settings.max_call_depth} exceeded calling {node.name}",
                node.token.pos,
            )

        logger.debug("Calling %s at depth %d", node.name, self.depth + 1)
        self.call_pos = node.token.pos
        self.depth += 1
        try:
            result = self.interpret(function.body, frame)
        finally:
            self.depth -= 1

        if result.kind != function.return_kind:
            raise EvaluationError(
                f"Function {node.name} must return {function.return_kind}, got {result.kind}",
                node.token.pos,
            )
        return result

    # -- Control flow --

    def _condition(self, node: Node, ctx: EvaluationContext, statement: str) -> bool:
        value = self.interpret(node, ctx)
        if value.kind != DataKind.BOOLEAN:
            raise EvaluationError(
                f"Condition of {statement} statement must be a bool, got {value.kind}",
                node.token.pos,
            )
        return bool(value.payload)

    def interpret_if(self, node: If, ctx: EvaluationContext) -> Value:
        if self._condition(node.condition, ctx, "if"):
            return self.interpret(node.then_body, ctx)
        if node.else_body is not None:
            return self.interpret(node.else_body, ctx)
        return Value.undefined()

    def interpret_while(self, node: While, ctx: EvaluationContext) -> Value:
        result = Value.undefined()
        while self._condition(node.condition, ctx, "while"):
            result = self.interpret(node.body, ctx)
        return result

    # -- Operators --

    def interpret_binary(self, node: BinaryExpression, ctx: EvaluationContext) -> Value:
        """Evaluate a binary expression."""
        op = node.operator

        # Short-circuit for logical operators
        if op in (BinaryOperator.AND, BinaryOperator.OR):
            left = self._logical_operand(node, self.interpret(node.left, ctx))
            if left.payload == (op == BinaryOperator.OR):
                return left
            return self._logical_operand(node, self.interpret(node.right, ctx))

        left = self.interpret(node.left, ctx)
        right = self.interpret(node.right, ctx)

        if op == BinaryOperator.EQ:
            return Value.boolean(left == right)
        if op == BinaryOperator.NE:
            return Value.boolean(left != right)

        # Integer operands are promoted when paired with a decimal
        if {left.kind, right.kind} == _NUMERIC:
            left = _to_decimal(left)
            right = _to_decimal(right)

        if left.kind != right.kind:
            raise EvaluationError(
                f"Cannot perform operations on mixed types. "
                f"Left side is {left.kind}, right side is {right.kind}",
                node.token.pos,
            )
        kind = left.kind
        if kind not in _OPERAND_KINDS[op]:
            raise EvaluationError(
                f"Cannot perform operation {op.value} on type {kind}", node.token.pos
            )

        if kind == DataKind.DECIMAL:
            try:
                with decimal.localcontext(self.decimal_context):
                    return self._apply(node, left.payload, right.payload)
            except decimal.DecimalException as e:
                raise EvaluationError(
                    f"Decimal operation {op.value} failed: {type(e).__name__}", node.token.pos
                ) from e
        return self._apply(node, left.payload, right.payload)

    def _apply(self, node: BinaryExpression, left: Any, right: Any) -> Value:
        op = node.operator
        if op in _ORDERING:
            return Value.boolean(_ORDERING[op](left, right))
        if op == BinaryOperator.DIV:
            if right == 0:
                raise EvaluationError("Division by zero", node.token.pos)
            if isinstance(left, Decimal):
                return Value.of(left / right)
            return Value.of(_int_div(left, right))
        return Value.of(_ARITHMETIC[op](left, right))

    @staticmethod
    def _logical_operand(node: BinaryExpression, value: Value) -> Value:
        if value.kind != DataKind.BOOLEAN:
            raise EvaluationError(
                f"Cannot perform operation {node.operator.value} on type {value.kind}",
                node.token.pos,
            )
        return value


def _to_decimal(value: Value) -> Value:
    if value.kind == DataKind.INTEGER:
        return Value.of(Decimal(value.payload))  # type: ignore[arg-type]
    return value
