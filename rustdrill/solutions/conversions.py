"""Reference solutions of the conversions exercises."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum, auto

_USIZE_MAX = 2**64 - 1
_U32_MAX = 2**32 - 1
_UNSIGNED = re.compile(r"\+?[0-9]+", re.ASCII)


def _parse_usize(text: str) -> int:
    """Parse an unsigned machine-size integer the strict way, without whitespace or separators."""
    if not text:
        raise ValueError("cannot parse integer from empty string")
    if not _UNSIGNED.fullmatch(text):
        raise ValueError("invalid digit found in string")
    value = int(text)
    if value > _USIZE_MAX:
        raise ValueError("number too large to fit in target type")
    return value


@dataclass(frozen=True)
class Person:
    """A person with a name and an age."""

    name: str
    age: int

    @classmethod
    def default(cls) -> Person:
        """Return the fallback person, John aged 30."""
        return cls(name="John", age=30)

    @classmethod
    def from_text(cls, text: str) -> Person:
        """Build a person from "name,age", falling back to the default on any problem."""
        if not text or "," not in text:
            return cls.default()
        name, age_text = text.split(",")[:2]
        if not name:
            return cls.default()
        try:
            age = _parse_usize(age_text)
        except ValueError:
            return cls.default()
        return cls(name=name, age=age)


class ParsePersonErrorKind(Enum):
    """Why a person could not be parsed."""

    EMPTY = auto()
    BAD_LEN = auto()
    NO_NAME = auto()
    PARSE_INT = auto()


class ParsePersonError(ValueError):
    """A person could not be parsed; ``kind`` tells why."""

    def __init__(self, kind: ParsePersonErrorKind, message: str | None = None) -> None:
        super().__init__(message or kind.name.lower())
        self.kind = kind


def parse_person(text: str) -> Person:
    """Parse exactly "name,age", raising ParsePersonError on any problem."""
    if not text:
        raise ParsePersonError(ParsePersonErrorKind.EMPTY)
    fields = text.split(",")
    if len(fields) != 2:
        raise ParsePersonError(ParsePersonErrorKind.BAD_LEN)
    name, age_text = fields
    if not name:
        raise ParsePersonError(ParsePersonErrorKind.NO_NAME)
    try:
        age = _parse_usize(age_text)
    except ValueError as exc:
        raise ParsePersonError(ParsePersonErrorKind.PARSE_INT, str(exc)) from exc
    return Person(name=name, age=age)


class IntoColorErrorKind(Enum):
    """Why values could not be turned into a colour."""

    BAD_LEN = auto()
    INT_CONVERSION = auto()


class IntoColorError(ValueError):
    """Values could not be turned into a colour; ``kind`` tells why."""

    def __init__(self, kind: IntoColorErrorKind) -> None:
        super().__init__(kind.name.lower())
        self.kind = kind


def _channel(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"colour channel must be an integer, not {type(value).__name__}")
    if not 0 <= value <= 255:
        raise IntoColorError(IntoColorErrorKind.INT_CONVERSION)
    return value


@dataclass(frozen=True)
class Color:
    """An RGB colour with channels in 0..=255."""

    red: int
    green: int
    blue: int

    @classmethod
    def from_tuple(cls, values: tuple[int, int, int]) -> Color:
        """Build a colour from exactly three integers."""
        if len(values) != 3:
            raise TypeError(f"expected exactly three values, got {len(values)}")
        red, green, blue = values
        return cls(red=_channel(red), green=_channel(green), blue=_channel(blue))

    @classmethod
    def from_sequence(cls, values: Sequence[int]) -> Color:
        """Build a colour from a sequence, which must hold exactly three integers."""
        if len(values) != 3:
            raise IntoColorError(IntoColorErrorKind.BAD_LEN)
        red, green, blue = values
        return cls(red=_channel(red), green=_channel(green), blue=_channel(blue))


def byte_counter(text: str) -> int:
    """Return the number of UTF-8 bytes in the text."""
    return len(text.encode("utf-8"))


def char_counter(text: str) -> int:
    """Return the number of characters in the text."""
    return len(text)


def num_sq(value: int) -> int:
    """Return the square of an unsigned 32-bit number."""
    if not 0 <= value <= _U32_MAX:
        raise ValueError("value must fit in an unsigned 32-bit integer")
    result = value * value
    if result > _U32_MAX:
        raise OverflowError("attempt to multiply with overflow")
    return result