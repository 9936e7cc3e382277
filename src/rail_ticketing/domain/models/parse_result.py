"""Tagged outcome of parse-or-degrade response validation."""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ParseKind(str, Enum):
    """Which schema accepted a payload."""

    STRICT = "strict"
    LENIENT = "lenient"
    INVALID = "invalid"


@dataclass(frozen=True)
class ParseResult(Generic[T]):
    """Result of validating a payload first strictly, then leniently."""

    kind: ParseKind
    value: T | None = None
    error: str | None = None

    @classmethod
    def strict(cls, value: T) -> "ParseResult[T]":
        return cls(kind=ParseKind.STRICT, value=value)

    @classmethod
    def lenient(cls, value: T, error: str) -> "ParseResult[T]":
        return cls(kind=ParseKind.LENIENT, value=value, error=error)

    @classmethod
    def invalid(cls, error: str) -> "ParseResult[T]":
        return cls(kind=ParseKind.INVALID, error=error)

    @property
    def is_valid(self) -> bool:
        return self.kind is not ParseKind.INVALID
