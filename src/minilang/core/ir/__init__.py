"""
MiniLang intermediate representation: tokens, AST nodes, and runtime values.
"""

from .nodes import (
    BinaryExpression,
    BinaryOperator,
    Comment,
    Constant,
    FunctionCall,
    FunctionDeclaration,
    If,
    Node,
    Parameter,
    StatementList,
    Variable,
    VariableAssignment,
    VariableDeclaration,
    While,
)
from .tokens import Token, TokenKind
from .values import DataKind, Payload, Value

__all__ = [
    # Tokens
    "Token",
    "TokenKind",
    # Values
    "DataKind",
    "Payload",
    "Value",
    # Nodes
    "BinaryExpression",
    "BinaryOperator",
    "Comment",
    "Constant",
    "FunctionCall",
    "FunctionDeclaration",
    "If",
    "Node",
    "Parameter",
    "StatementList",
    "Variable",
    "VariableAssignment",
    "VariableDeclaration",
    "While",
]
