"""
Runtime values for MiniLang.

A Value is a tagged payload: its DataKind fixes which native Python type the
payload may hold. Undefined and Null are tag-only kinds with no payload, so
"is this really null" is a kind check and no other literal can produce one.

    Value.of(3)                 # int
    Value.of(Decimal("1.5"))    # dec
    Value.char("a")             # char
    Value.null()                # null
"""

from __future__ import annotations

from decimal import Decimal
from enum import StrEnum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, Strict, model_validator

# Strict members: payloads are never coerced between native types
Payload = (
    Annotated[bool, Strict()]
    | Annotated[int, Strict()]
    | Annotated[Decimal, Strict()]
    | Annotated[str, Strict()]
    | None
)


class DataKind(StrEnum):
    """Kinds a runtime value can have."""

    UNDEFINED = "undefined"
    NULL = "null"
    BOOLEAN = "bool"
    INTEGER = "int"
    DECIMAL = "dec"
    STRING = "str"
    CHAR = "char"

    @property
    def is_sentinel(self) -> bool:
        return self in (DataKind.UNDEFINED, DataKind.NULL)

    @property
    def is_numeric(self) -> bool:
        return self in (DataKind.INTEGER, DataKind.DECIMAL)


def check_payload(kind: DataKind, payload: Payload) -> None:
    """Raise ValueError unless ``payload`` is a valid native value for ``kind``."""
    if kind.is_sentinel:
        valid = payload is None
    elif kind == DataKind.BOOLEAN:
        valid = type(payload) is bool
    elif kind == DataKind.INTEGER:
        # bool is an int subclass; it must not pass as one
        valid = type(payload) is int
    elif kind == DataKind.DECIMAL:
        valid = isinstance(payload, Decimal)
    elif kind == DataKind.STRING:
        valid = isinstance(payload, str)
    elif kind == DataKind.CHAR:
        valid = isinstance(payload, str) and len(payload) == 1
    else:
        valid = False
    if not valid:
        raise ValueError(
            f"Payload type mismatch. Expected {kind.name.lower()}, "
            f"got {type(payload).__name__} ({payload!r})"
        )


class Value(BaseModel):
    """A runtime value: a data kind plus its native payload."""

    kind: DataKind
    payload: Payload = Field(default=None)

    model_config = ConfigDict(validate_assignment=True)

    @model_validator(mode="after")
    def payload_matches_kind(self) -> Value:
        check_payload(self.kind, self.payload)
        return self

    # -- Constructors --

    @classmethod
    def undefined(cls) -> Value:
        return cls(kind=DataKind.UNDEFINED)

    @classmethod
    def null(cls) -> Value:
        return cls(kind=DataKind.NULL)

    @classmethod
    def boolean(cls, payload: bool) -> Value:
        return cls(kind=DataKind.BOOLEAN, payload=payload)

    @classmethod
    def char(cls, payload: str) -> Value:
        return cls(kind=DataKind.CHAR, payload=payload)

    @classmethod
    def of(cls, payload: bool | int | Decimal | str) -> Value:
        """Build a value, inferring the kind from the payload's native type."""
        if isinstance(payload, bool):
            return cls(kind=DataKind.BOOLEAN, payload=payload)
        if isinstance(payload, int):
            return cls(kind=DataKind.INTEGER, payload=payload)
        if isinstance(payload, Decimal):
            return cls(kind=DataKind.DECIMAL, payload=payload)
        if isinstance(payload, str):
            return cls(kind=DataKind.STRING, payload=payload)
        raise ValueError(f"Unsupported value data type: {type(payload).__name__}")

    # -- Mutation --

    def set(self, payload: Payload) -> None:
        """Replace the payload in place; the kind can never change."""
        if self.kind.is_sentinel:
            raise ValueError(f"Cannot set a {self.kind.value} value")
        check_payload(self.kind, payload)
        self.payload = payload

    # -- Comparison and display --

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        if self.kind != other.kind:
            return False
        if self.kind.is_sentinel:
            return True
        return bool(self.payload == other.payload)

    def __str__(self) -> str:
        if self.kind.is_sentinel:
            return self.kind.value
        if self.kind == DataKind.BOOLEAN:
            return "true" if self.payload else "false"
        if self.kind == DataKind.STRING:
            return f'"{self.payload}"'
        if self.kind == DataKind.CHAR:
            return f"'{self.payload}'"
        return str(self.payload)

    def __repr__(self) -> str:
        return f"Value({self.kind.name}, {self.payload!r})"
