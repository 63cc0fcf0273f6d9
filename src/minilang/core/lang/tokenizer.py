"""
Tokenizer for MiniLang.

Converts source text into a lazy sequence of typed tokens. At every position
whitespace is skipped, then an ordered list of readers is tried; the first
reader that recognizes the current character produces the next token.

A reader is any callable ``(source, start) -> (end, Token) | None``.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence

from minilang.core.ir.tokens import Token, TokenKind

TokenReader = Callable[[str, int], tuple[int, Token] | None]

# Single characters used by the grammar
SYMBOLS = frozenset('"-+*/<>=!|&{}():,;')
DIGITS = frozenset("0123456789")


def string_reader(quote: str = '"') -> TokenReader:
    """Read a quoted string literal. No escape sequences are processed."""

    def read(source: str, start: int) -> tuple[int, Token] | None:
        if source[start] != quote:
            return None
        end = source.find(quote, start + 1)
        if end == -1:
            return len(source), Token(
                TokenKind.INVALID,
                f"Unexpected end of input while reading string starting at {start}",
                start,
            )
        return end + 1, Token(TokenKind.STRING, source[start + 1 : end], start)

    return read


def char_reader(quote: str = "'") -> TokenReader:
    """Read a character literal: quote, exactly one character, quote."""

    def read(source: str, start: int) -> tuple[int, Token] | None:
        if source[start] != quote:
            return None
        if start + 1 >= len(source):
            return len(source), Token(
                TokenKind.INVALID,
                "Unexpected end of input while reading character value",
                start,
            )
        if start + 2 >= len(source) or source[start + 2] != quote:
            return len(source), Token(
                TokenKind.INVALID,
                f"Expected {quote} to close character literal at {start}",
                start,
            )
        return start + 3, Token(TokenKind.CHAR, source[start + 1], start)

    return read


def number_reader() -> TokenReader:
    """Read an unsigned number: digits with at most one decimal point."""

    def read(source: str, start: int) -> tuple[int, Token] | None:
        if source[start] not in DIGITS:
            return None
        i = start
        seen_point = False
        while i < len(source):
            c = source[i]
            if c == "." and not seen_point:
                seen_point = True
            elif c not in DIGITS:
                break
            i += 1
        return i, Token(TokenKind.NUMBER, source[start:i], start)

    return read


def symbol_reader(symbols: frozenset[str] = SYMBOLS) -> TokenReader:
    """Read one whitelisted symbol character."""

    def read(source: str, start: int) -> tuple[int, Token] | None:
        c = source[start]
        if c not in symbols:
            return None
        return start + 1, Token(TokenKind.SYMBOL, c, start)

    return read


def name_reader() -> TokenReader:
    """Read an identifier-shaped run. Keywords are names too."""

    def read(source: str, start: int) -> tuple[int, Token] | None:
        c = source[start]
        if not (c.isalpha() or c == "_"):
            return None
        i = start + 1
        while i < len(source) and (source[i].isalnum() or source[i] == "_"):
            i += 1
        return i, Token(TokenKind.NAME, source[start:i], start)

    return read


def default_readers(char_literals: bool = True) -> list[TokenReader]:
    """The reader list used by the parser, in priority order."""
    readers = [string_reader('"')]
    if char_literals:
        readers.append(char_reader("'"))
    readers.extend([number_reader(), symbol_reader(SYMBOLS), name_reader()])
    return readers


def tokenize(source: str, readers: Sequence[TokenReader] | None = None) -> Iterator[Token]:
    """Lazily tokenize ``source``.

    Yields tokens ending in exactly one END token. If no reader recognizes a
    character (or a reader reports malformed input), a single INVALID token
    carrying a diagnostic message is yielded and the sequence stops.
    """
    active = list(readers) if readers is not None else default_readers()
    i = 0
    n = len(source)

    while True:
        while i < n and source[i].isspace():
            i += 1
        if i >= n:
            break

        for read in active:
            result = read(source, i)
            if result is not None:
                i, tok = result
                yield tok
                if tok.kind == TokenKind.INVALID:
                    return
                break
        else:
            yield Token(TokenKind.INVALID, f"Unexpected character: {source[i]!r}", i)
            return

    yield Token(TokenKind.END, "", n)
