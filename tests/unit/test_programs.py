"""End-to-end tests running complete MiniLang programs through the host driver."""

from __future__ import annotations

from decimal import Decimal

import pytest

from minilang.core.errors import ParseError
from minilang.core.host import execute
from minilang.core.ir.values import Value

HELLO_WORLD = """
    com "this program will return the string `Hello, World!`";
    var x : str = "Hello, ";
    var y : str = "World!";
    x + y
"""

ALL_FEATURES = """
    com "this is a comment";

    com "declaring variables & types:";
    var s : str = "string";
    var i : int = 1;
    var d : dec = 2.5;
    var b : bool = false;

    com "setting variables and binary operations:";
    set s = s + " test";         com "`s` is now `string test`";
    set i = 1 + 2;               com "`i` is now 3";
    set d = d * 3.0;             com "`d` is now 7.5";
    set b = d > 5.0;             com "`b` is now `true`";

    com "declaring a function:";
    fun add_one(x : int) : int {
        x + 1
    };

    com "calling a function:";
    set i = call add_one(i);     com "`i` is now 4";

    com "if/while:";
    if (b) {
        set d = d / 3;           com "`d` is now 2.5"
    };
    while (i > 0) {
        set i = i - 1
    }
"""

FIBONACCI = """
    fun fib(n : int) : int {
        if (n <= 1) {
            n
        } else {
            call fib(n-1) + call fib(n-2)
        }
    };
    call fib(x)
"""


class TestCompletePrograms:
    def test_hello_world(self) -> None:
        assert execute(HELLO_WORLD) == Value.of("Hello, World!")

    def test_all_features(self) -> None:
        variables: dict[str, Value] = {}
        assert execute(ALL_FEATURES, variables) == Value.undefined()
        assert variables["s"] == Value.of("string test")
        assert variables["i"] == Value.of(0)
        assert variables["d"] == Value.of(Decimal("2.5"))
        assert variables["b"] == Value.of(True)

    @pytest.mark.parametrize(
        ("n", "expected"),
        [
            (0, 0),
            (1, 1),
            (2, 1),
            (3, 2),
            (4, 3),
            (5, 5),
            (6, 8),
            (7, 13),
            (8, 21),
            (9, 34),
            (10, 55),
            (11, 89),
            (12, 144),
        ],
    )
    def test_fibonacci(self, n: int, expected: int) -> None:
        assert execute(FIBONACCI, {"x": Value.of(n)}) == Value.of(expected)

    def test_missing_separator_is_rejected(self) -> None:
        with pytest.raises(ParseError, match="after program"):
            execute('set i = 1 com "note"', {"i": Value.of(0)})
