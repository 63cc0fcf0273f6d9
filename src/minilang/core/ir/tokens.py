"""
Token model for the MiniLang tokenizer.
"""

from __future__ import annotations

from enum import StrEnum, auto


class TokenKind(StrEnum):
    """Token categories produced by the tokenizer."""

    INVALID = auto()
    SYMBOL = auto()
    NAME = auto()
    STRING = auto()
    CHAR = auto()
    NUMBER = auto()
    WHITESPACE = auto()
    COMMENT = auto()
    CUSTOM = auto()

    # End of input
    END = auto()


class Token:
    """A single classified lexical unit.

    ``text`` is the literal text (string contents without quotes). For
    INVALID tokens it holds the tokenizer's diagnostic message instead.
    """

    __slots__ = ("kind", "text", "pos")

    def __init__(self, kind: TokenKind, text: str, pos: int = 0) -> None:
        self.kind = kind
        self.text = text
        self.pos = pos

    def is_(self, kind: TokenKind, text: str | None = None) -> bool:
        return self.kind == kind and (text is None or self.text == text)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return (self.kind, self.text, self.pos) == (other.kind, other.text, other.pos)

    def __hash__(self) -> int:
        return hash((self.kind, self.text, self.pos))

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.text!r}, pos={self.pos})"
