"""
Recursive descent parser for MiniLang.

Grammar:
    program       → statementList END
    statementList → statement (";" statement)*
    statement     → funDecl | varDecl | while | if | comment | assignment
                  | expression | empty
    funDecl       → "fun" NAME "(" params? ")" ":" type "{" statementList "}"
    params        → NAME ":" type ("," NAME ":" type)*
    varDecl       → "var" NAME ":" type "=" expression
    while         → "while" "(" expression ")" "{" statementList "}"
    if            → "if" "(" expression ")" "{" statementList "}"
                    ("else" (if | "{" statementList "}"))?
    comment       → "com" STRING
    assignment    → "set" NAME "=" expression
    empty         → (nothing; current token is ";", "}" or END)
    expression    → value (operator value)*
    value         → "call" NAME "(" (expression ("," expression)*)? ")"
                  | "(" expression ")"
                  | NUMBER | STRING | CHAR | "true" | "false" | "null"
                  | "undefined" | NAME
    type          → "bool" | "int" | "dec" | "str" | "char"

Operator chains are collected flat and then nested by precedence in
build_operator_tree().
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from decimal import Decimal, InvalidOperation
from typing import cast

from minilang.core.config import InterpreterSettings
from minilang.core.errors import ErrorContext, ParseError
from minilang.core.ir.nodes import (
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
from minilang.core.ir.tokens import Token, TokenKind
from minilang.core.ir.values import DataKind
from minilang.core.lang.tokenizer import default_readers, tokenize

logger = logging.getLogger(__name__)

# Higher binds tighter
PRECEDENCE: dict[BinaryOperator, int] = {
    BinaryOperator.MUL: 5,
    BinaryOperator.DIV: 5,
    BinaryOperator.ADD: 4,
    BinaryOperator.SUB: 4,
    BinaryOperator.LT: 3,
    BinaryOperator.LE: 3,
    BinaryOperator.GT: 3,
    BinaryOperator.GE: 3,
    BinaryOperator.EQ: 2,
    BinaryOperator.NE: 2,
    BinaryOperator.AND: 1,
    BinaryOperator.OR: 0,
}

_TYPE_KEYWORDS: dict[str, DataKind] = {
    "bool": DataKind.BOOLEAN,
    "int": DataKind.INTEGER,
    "dec": DataKind.DECIMAL,
    "str": DataKind.STRING,
}

# An operator chain: (operator or None for the first entry, operand)
Chain = list[tuple[BinaryOperator | None, Node]]


class _Parser:
    """Recursive descent parser over a forward-only token cursor."""

    def __init__(self, tokens: Iterable[Token], type_keywords: dict[str, DataKind]) -> None:
        self._tokens = iter(tokens)
        self.type_keywords = type_keywords
        self.current = Token(TokenKind.INVALID, "No input", 0)
        self.advance()

    def advance(self) -> Token:
        """Move to the next token and return the one just consumed."""
        tok = self.current
        if tok.kind == TokenKind.END:
            return tok
        nxt = next(self._tokens, None)
        if nxt is None:
            raise ParseError("Unexpected end of token stream", tok.pos)
        if nxt.kind == TokenKind.INVALID:
            raise ParseError(nxt.text, nxt.pos)
        self.current = nxt
        return tok

    def at(self, kind: TokenKind, text: str | None = None) -> bool:
        return self.current.is_(kind, text)

    def expect(self, kind: TokenKind, text: str | None = None) -> Token:
        tok = self.current
        if not tok.is_(kind, text):
            wanted = f"{kind} {text!r}" if text is not None else str(kind)
            raise ParseError(
                f"Expected {wanted}, got {tok.kind} ({tok.text!r})",
                tok.pos,
            )
        return self.advance()

    # -- Statements --

    def parse_program(self) -> Node:
        root = self.parse_statement_list()
        if not self.at(TokenKind.END):
            raise ParseError(
                f"Unexpected token after program: {self.current.kind} ({self.current.text!r})",
                self.current.pos,
            )
        return root

    def parse_statement_list(self) -> Node:
        """statement (';' statement)*; a single statement is returned as is."""
        tok = self.current
        statements = [self.parse_statement()]
        while self.at(TokenKind.SYMBOL, ";"):
            self.advance()
            statements.append(self.parse_statement())

        if len(statements) == 1:
            return statements[0]
        return StatementList(token=tok, statements=statements)

    def parse_statement(self) -> Node:
        tok = self.current

        # Empty statement: consumes nothing
        if tok.is_(TokenKind.SYMBOL, ";") or tok.is_(TokenKind.SYMBOL, "}") or tok.is_(TokenKind.END):
            return Constant.undefined(tok)

        if tok.kind == TokenKind.NAME:
            if tok.text == "fun":
                return self.parse_function_declaration()
            if tok.text == "var":
                return self.parse_variable_declaration()
            if tok.text == "while":
                return self.parse_while()
            if tok.text == "if":
                return self.parse_if()
            if tok.text == "com":
                return self.parse_comment()
            if tok.text == "set":
                return self.parse_assignment()
        return self.parse_expression()

    def parse_function_declaration(self) -> FunctionDeclaration:
        """fun name(a : int, b : str) : int { body }"""
        tok = self.expect(TokenKind.NAME, "fun")
        name = self.expect(TokenKind.NAME).text
        self.expect(TokenKind.SYMBOL, "(")

        parameters: list[Parameter] = []
        while not self.at(TokenKind.SYMBOL, ")"):
            if parameters:
                self.expect(TokenKind.SYMBOL, ",")
            param_name = self.expect(TokenKind.NAME).text
            self.expect(TokenKind.SYMBOL, ":")
            parameters.append(Parameter(name=param_name, kind=self.parse_type()))
        self.expect(TokenKind.SYMBOL, ")")

        self.expect(TokenKind.SYMBOL, ":")
        return_kind = self.parse_type()
        body = self.parse_block()
        return FunctionDeclaration(
            token=tok,
            name=name,
            parameters=parameters,
            return_kind=return_kind,
            body=body,
        )

    def parse_variable_declaration(self) -> VariableDeclaration:
        """var name : type = expression"""
        tok = self.expect(TokenKind.NAME, "var")
        name = self.expect(TokenKind.NAME).text
        self.expect(TokenKind.SYMBOL, ":")
        kind = self.parse_type()
        self.expect(TokenKind.SYMBOL, "=")
        initializer = self.parse_expression()
        return VariableDeclaration(token=tok, name=name, kind=kind, initializer=initializer)

    def parse_while(self) -> While:
        """while (condition) { body }"""
        tok = self.expect(TokenKind.NAME, "while")
        condition = self.parse_parentheses()
        body = self.parse_block()
        return While(token=tok, condition=condition, body=body)

    def parse_if(self) -> If:
        """if (condition) { body } [else if ... | else { body }]"""
        tok = self.expect(TokenKind.NAME, "if")
        condition = self.parse_parentheses()
        then_body = self.parse_block()

        else_body: Node | None = None
        if self.at(TokenKind.NAME, "else"):
            self.advance()
            if self.at(TokenKind.NAME, "if"):
                else_body = self.parse_if()
            else:
                else_body = self.parse_block()

        return If(token=tok, condition=condition, then_body=then_body, else_body=else_body)

    def parse_comment(self) -> Comment:
        """com "text" """
        tok = self.expect(TokenKind.NAME, "com")
        text = self.expect(TokenKind.STRING).text
        return Comment(token=tok, text=text)

    def parse_assignment(self) -> VariableAssignment:
        """set name = expression"""
        tok = self.expect(TokenKind.NAME, "set")
        name = self.expect(TokenKind.NAME).text
        self.expect(TokenKind.SYMBOL, "=")
        value = self.parse_expression()
        return VariableAssignment(token=tok, name=name, value=value)

    def parse_block(self) -> Node:
        """'{' statementList '}'"""
        self.expect(TokenKind.SYMBOL, "{")
        body = self.parse_statement_list()
        self.expect(TokenKind.SYMBOL, "}")
        return body

    def parse_type(self) -> DataKind:
        tok = self.current
        kind = self.type_keywords.get(tok.text) if tok.kind == TokenKind.NAME else None
        if kind is None:
            raise ParseError(f"Unknown type: {tok.text!r}", tok.pos)
        self.advance()
        return kind

    # -- Expressions --

    def parse_parentheses(self) -> Node:
        """'(' expression ')'"""
        self.expect(TokenKind.SYMBOL, "(")
        expr = self.parse_expression()
        self.expect(TokenKind.SYMBOL, ")")
        return expr

    def parse_expression(self) -> Node:
        """value (operator value)*, nested by precedence."""
        chain: Chain = [(None, self.parse_value())]
        while self.current.kind == TokenKind.SYMBOL:
            op = self.try_parse_operator()
            if op is None:
                break
            chain.append((op, self.parse_value()))

        if len(chain) == 1:
            return chain[0][1]
        return build_operator_tree(chain)

    def try_parse_operator(self) -> BinaryOperator | None:
        """Consume a binary operator if the cursor is on one.

        Only advances when an operator is found. Two-symbol operators are
        read one symbol at a time.
        """
        text = self.current.text
        if text in ("+", "-", "*", "/"):
            self.advance()
            return BinaryOperator(text)
        if text in ("&", "|"):
            self.advance()
            self.expect(TokenKind.SYMBOL, text)
            return BinaryOperator(text * 2)
        if text in ("!", "="):
            self.advance()
            self.expect(TokenKind.SYMBOL, "=")
            return BinaryOperator.NE if text == "!" else BinaryOperator.EQ
        if text in ("<", ">"):
            self.advance()
            if self.at(TokenKind.SYMBOL, "="):
                self.advance()
                return BinaryOperator.LE if text == "<" else BinaryOperator.GE
            return BinaryOperator.LT if text == "<" else BinaryOperator.GT
        return None

    def parse_value(self) -> Node:
        """function call | '(' expression ')' | literal | variable"""
        tok = self.current

        if tok.is_(TokenKind.NAME, "call"):
            return self.parse_function_call()
        if tok.is_(TokenKind.SYMBOL, "("):
            return self.parse_parentheses()

        if tok.kind == TokenKind.NUMBER:
            self.advance()
            return _parse_number(tok)
        if tok.kind == TokenKind.STRING:
            self.advance()
            return Constant.string(tok, tok.text)
        if tok.kind == TokenKind.CHAR:
            self.advance()
            return Constant.char(tok, tok.text)
        if tok.kind == TokenKind.NAME:
            self.advance()
            if tok.text == "true":
                return Constant.boolean(tok, True)
            if tok.text == "false":
                return Constant.boolean(tok, False)
            if tok.text == "null":
                return Constant.null(tok)
            if tok.text == "undefined":
                return Constant.undefined(tok)
            return Variable(token=tok, name=tok.text)

        raise ParseError(f"Unexpected value token: {tok.kind} ({tok.text!r})", tok.pos)

    def parse_function_call(self) -> FunctionCall:
        """call name(arg1, arg2, ...)"""
        tok = self.expect(TokenKind.NAME, "call")
        name = self.expect(TokenKind.NAME).text
        self.expect(TokenKind.SYMBOL, "(")

        arguments: list[Node] = []
        while not self.at(TokenKind.SYMBOL, ")"):
            if arguments:
                self.expect(TokenKind.SYMBOL, ",")
            arguments.append(self.parse_expression())
        self.expect(TokenKind.SYMBOL, ")")
        return FunctionCall(token=tok, name=name, arguments=arguments)


def _parse_number(tok: Token) -> Constant:
    """Decimal if the literal contains a point, otherwise integer."""
    if "." in tok.text:
        try:
            return Constant.decimal(tok, Decimal(tok.text))
        except InvalidOperation as e:
            raise ParseError(f"Invalid decimal literal: {tok.text!r}", tok.pos) from e
    try:
        return Constant.integer(tok, int(tok.text))
    except ValueError as e:
        # CPython caps int() at sys.get_int_max_str_digits() digits
        raise ParseError(f"Invalid integer literal: {e}", tok.pos) from e


def build_operator_tree(chain: Chain) -> Node:
    """Nest a flat operator chain into a binary tree by precedence.

    ``chain`` holds ``(operator, operand)`` pairs; the first operator must be
    None. For ``1 + x * 7 / 2 > 7`` the chain is
    ``(None, 1), (+, x), (*, 7), (/, 2), (>, 7)`` and the result is
    ``(1 + ((x * 7) / 2)) > 7``.

    The chain is split at the last occurrence of its lowest-precedence
    operator: everything before the split becomes the left subtree and the
    rest (minus that operator) the right one. Splitting at the last
    occurrence makes equal-precedence operators left-associative.
    """
    if not chain or chain[0][0] is not None:
        raise ParseError("Malformed operator chain: first operand must have no operator")

    if len(chain) == 1:
        return chain[0][1]

    lowest = min(PRECEDENCE[op] for op, _ in chain if op is not None)
    index = max(i for i, (op, _) in enumerate(chain) if op is not None and PRECEDENCE[op] == lowest)

    op, right_first = chain[index]
    left = build_operator_tree(chain[:index])
    right = build_operator_tree([(None, right_first), *chain[index + 1 :]])
    return BinaryExpression(
        token=chain[0][1].token, operator=cast(BinaryOperator, op), left=left, right=right
    )


def parse(source: str, settings: InterpreterSettings | None = None) -> Node:
    """Parse program text into a single root node.

    Args:
        source: Program text (e.g., "var x : int = 1; x + 2")
        settings: Interpreter settings; defaults are used when omitted.

    Returns:
        The root node. A program with one statement returns that statement's
        node; otherwise a StatementList.

    Raises:
        ParseError: If the program is invalid.
    """
    settings = settings or InterpreterSettings()
    type_keywords = dict(_TYPE_KEYWORDS)
    if settings.char_literals:
        type_keywords["char"] = DataKind.CHAR

    tokens = tokenize(source, default_readers(char_literals=settings.char_literals))
    try:
        parser = _Parser(tokens, type_keywords)
        try:
            root = parser.parse_program()
        except RecursionError as e:
            raise ParseError(
                "Program nests too deeply to parse (Python recursion limit reached)",
                parser.current.pos,
            ) from e
    except ParseError as e:
        if e.pos is None or e.context is not None:
            raise
        raise ParseError(e.message, e.pos, ErrorContext.from_offset(source, e.pos)) from e

    logger.debug("Parsed %d characters into %s", len(source), type(root).__name__)
    return root
