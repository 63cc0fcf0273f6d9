"""
AST node types for MiniLang.

A closed set of frozen node variants. Every node keeps the token it was
parsed from so evaluation errors can point back into the source.

Supports:
- Constants: 1, 1.5, "text", 'c', true, false, null, undefined
- Variable references and declarations: x, var x : int = 1, set x = 2
- Binary operators: * / + - < <= > >= == != && ||
- Functions: fun f(a : int) : int { a + 1 }, call f(1)
- Control flow: if (...) { } else if (...) { } else { }, while (...) { }
- Statement lists separated by ';' and comments: com "text"
"""

from __future__ import annotations

from decimal import Decimal
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_serializer, model_validator

from minilang.core.ir.values import DataKind, Payload, check_payload
from minilang.core.ir.tokens import Token

# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class BinaryOperator(StrEnum):
    """Binary operators for expressions."""

    # Arithmetic
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    # Logical
    AND = "&&"
    OR = "||"
    # Comparison
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="
    EQ = "=="
    NE = "!="


# ---------------------------------------------------------------------------
# AST node types
# ---------------------------------------------------------------------------


class _NodeBase(BaseModel):
    token: Token = Field(repr=False, description="Token the node was parsed from")

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def node(self) -> str:
        """Variant name, so dumped trees stay self-describing."""
        return type(self).__name__

    @field_serializer("token")
    def serialize_token(self, token: Token) -> dict[str, str | int]:
        return {"kind": token.kind.value, "text": token.text, "pos": token.pos}


class Constant(_NodeBase):
    """A literal value. Undefined and Null carry no payload."""

    kind: DataKind
    value: Payload = Field(default=None)

    @model_validator(mode="after")
    def value_matches_kind(self) -> Constant:
        check_payload(self.kind, self.value)
        return self

    @classmethod
    def undefined(cls, token: Token) -> Constant:
        return cls(token=token, kind=DataKind.UNDEFINED)

    @classmethod
    def null(cls, token: Token) -> Constant:
        return cls(token=token, kind=DataKind.NULL)

    @classmethod
    def boolean(cls, token: Token, value: bool) -> Constant:
        return cls(token=token, kind=DataKind.BOOLEAN, value=value)

    @classmethod
    def integer(cls, token: Token, value: int) -> Constant:
        return cls(token=token, kind=DataKind.INTEGER, value=value)

    @classmethod
    def decimal(cls, token: Token, value: Decimal) -> Constant:
        return cls(token=token, kind=DataKind.DECIMAL, value=value)

    @classmethod
    def string(cls, token: Token, value: str) -> Constant:
        return cls(token=token, kind=DataKind.STRING, value=value)

    @classmethod
    def char(cls, token: Token, value: str) -> Constant:
        return cls(token=token, kind=DataKind.CHAR, value=value)

    def __str__(self) -> str:
        if self.kind.is_sentinel:
            return self.kind.value
        if self.kind == DataKind.BOOLEAN:
            return "true" if self.value else "false"
        if self.kind == DataKind.STRING:
            return f'"{self.value}"'
        if self.kind == DataKind.CHAR:
            return f"'{self.value}'"
        return str(self.value)


class Variable(_NodeBase):
    """Reference to a named binding, resolved at evaluation time."""

    name: str

    def __str__(self) -> str:
        return self.name


class BinaryExpression(_NodeBase):
    """Binary operation: left op right."""

    operator: BinaryOperator
    left: Node
    right: Node

    def __str__(self) -> str:
        return f"({self.left} {self.operator.value} {self.right})"


class FunctionCall(_NodeBase):
    """Function call: call name(arg1, arg2, ...)."""

    name: str
    arguments: list[Node] = Field(default_factory=list)

    def __str__(self) -> str:
        args_str = ", ".join(str(a) for a in self.arguments)
        return f"call {self.name}({args_str})"


class Parameter(BaseModel):
    """A declared function parameter."""

    name: str
    kind: DataKind

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.name} : {self.kind.value}"


class FunctionDeclaration(_NodeBase):
    """
    Function declaration: fun name(a : int, b : str) : int { body }.

    The body is kept unevaluated and runs in a fresh context on every call.
    """

    name: str
    parameters: list[Parameter] = Field(default_factory=list)
    return_kind: DataKind
    body: Node

    def __str__(self) -> str:
        params_str = ", ".join(str(p) for p in self.parameters)
        return f"fun {self.name}({params_str}) : {self.return_kind.value} {{ {self.body} }}"


class VariableDeclaration(_NodeBase):
    """Variable declaration: var name : kind = initializer."""

    name: str
    kind: DataKind
    initializer: Node

    def __str__(self) -> str:
        return f"var {self.name} : {self.kind.value} = {self.initializer}"


class VariableAssignment(_NodeBase):
    """Assignment to an existing variable: set name = value."""

    name: str
    value: Node

    def __str__(self) -> str:
        return f"set {self.name} = {self.value}"


class If(_NodeBase):
    """Conditional: if (cond) { then } else { else }.

    ``else if`` chains are stored as a nested If in ``else_body``.
    """

    condition: Node
    then_body: Node
    else_body: Node | None = None

    def __str__(self) -> str:
        text = f"if ({self.condition}) {{ {self.then_body} }}"
        if isinstance(self.else_body, If):
            text += f" else {self.else_body}"
        elif self.else_body is not None:
            text += f" else {{ {self.else_body} }}"
        return text


class While(_NodeBase):
    """Loop: while (cond) { body }."""

    condition: Node
    body: Node

    def __str__(self) -> str:
        return f"while ({self.condition}) {{ {self.body} }}"


class StatementList(_NodeBase):
    """Two or more statements separated by ';'."""

    statements: list[Node]

    def __str__(self) -> str:
        return "; ".join(str(s) for s in self.statements)


class Comment(_NodeBase):
    """Comment statement: com "text". Evaluates to nothing."""

    text: str

    def __str__(self) -> str:
        return f'com "{self.text}"'


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Node = (
    Constant
    | Variable
    | BinaryExpression
    | FunctionCall
    | FunctionDeclaration
    | VariableDeclaration
    | VariableAssignment
    | If
    | While
    | StatementList
    | Comment
)

# Rebuild models for recursive forward references
BinaryExpression.model_rebuild()
FunctionCall.model_rebuild()
FunctionDeclaration.model_rebuild()
VariableDeclaration.model_rebuild()
VariableAssignment.model_rebuild()
If.model_rebuild()
While.model_rebuild()
StatementList.model_rebuild()
