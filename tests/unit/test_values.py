"""Tests for MiniLang runtime values."""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from minilang.core.ir.values import DataKind, Value


class TestConstruction:
    def test_of_infers_kind(self) -> None:
        assert Value.of(True).kind == DataKind.BOOLEAN
        assert Value.of(1).kind == DataKind.INTEGER
        assert Value.of(Decimal("1.5")).kind == DataKind.DECIMAL
        assert Value.of("s").kind == DataKind.STRING

    def test_of_rejects_other_types(self) -> None:
        with pytest.raises(ValueError, match="Unsupported"):
            Value.of(1.5)  # type: ignore[arg-type]

    def test_sentinels_have_no_payload(self) -> None:
        assert Value.undefined().payload is None
        assert Value.null().payload is None

    def test_kind_mismatch(self) -> None:
        with pytest.raises(ValidationError):
            Value(kind=DataKind.INTEGER, payload="1")

    def test_payload_not_coerced(self) -> None:
        with pytest.raises(ValidationError):
            Value(kind=DataKind.DECIMAL, payload=1.5)
        with pytest.raises(ValidationError):
            Value(kind=DataKind.STRING, payload=b"s")

    def test_bool_is_not_an_integer(self) -> None:
        with pytest.raises(ValidationError):
            Value(kind=DataKind.INTEGER, payload=True)

    def test_sentinel_with_payload(self) -> None:
        with pytest.raises(ValidationError):
            Value(kind=DataKind.NULL, payload=0)

    def test_char_is_one_character(self) -> None:
        assert Value.char("a").payload == "a"
        with pytest.raises(ValidationError):
            Value.char("ab")


class TestSet:
    def test_set_keeps_kind(self) -> None:
        value = Value.of(1)
        value.set(5)
        assert value == Value.of(5)

    def test_set_wrong_kind(self) -> None:
        value = Value.of(1)
        with pytest.raises(ValueError):
            value.set("five")
        assert value.payload == 1

    @pytest.mark.parametrize("factory", [Value.undefined, Value.null])
    def test_set_sentinel(self, factory) -> None:
        with pytest.raises(ValueError, match="Cannot set"):
            factory().set(None)


class TestEquality:
    def test_same_kind_and_payload(self) -> None:
        assert Value.of("a") == Value.of("a")
        assert Value.of(1) != Value.of(2)

    def test_kinds_must_match(self) -> None:
        assert Value.of(1) != Value.of(Decimal(1))
        assert Value.of("a") != Value.char("a")
        assert Value.null() != Value.undefined()

    def test_sentinels_equal_themselves(self) -> None:
        assert Value.null() == Value.null()
        assert Value.undefined() == Value.undefined()

    def test_decimal_native_equality(self) -> None:
        assert Value.of(Decimal("2.0")) == Value.of(Decimal("2"))


class TestDisplay:
    @pytest.mark.parametrize(
        ("value", "text"),
        [
            (Value.of(True), "true"),
            (Value.of(False), "false"),
            (Value.of(42), "42"),
            (Value.of(Decimal("1.5")), "1.5"),
            (Value.of("text"), '"text"'),
            (Value.char("c"), "'c'"),
            (Value.null(), "null"),
            (Value.undefined(), "undefined"),
        ],
    )
    def test_str(self, value: Value, text: str) -> None:
        assert str(value) == text

    def test_repr(self) -> None:
        assert repr(Value.of(3)) == "Value(INTEGER, 3)"
