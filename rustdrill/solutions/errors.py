"""Reference solutions of the error handling exercises."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

_SIGNED = re.compile(r"[+-]?[0-9]+", re.ASCII)
_I32 = (-(2**31), 2**31 - 1)
_I64 = (-(2**63), 2**63 - 1)

PROCESSING_FEE = 1
COST_PER_ITEM = 5


def _parse_int(text: str, bounds: tuple[int, int]) -> int:
    """Parse a signed integer strictly: no whitespace, no separators, within bounds."""
    if not text:
        raise ValueError("cannot parse integer from empty string")
    if not _SIGNED.fullmatch(text):
        raise ValueError("invalid digit found in string")
    value = int(text)
    low, high = bounds
    if value > high:
        raise ValueError("number too large to fit in target type")
    if value < low:
        raise ValueError("number too small to fit in target type")
    return value


def generate_nametag_text(name: str) -> str:
    """Return the nametag text, raising ValueError for an empty name."""
    if not name:
        raise ValueError("`name` was empty; it must be nonempty.")
    return f"Hi! My name is {name}"


def total_cost(item_quantity: str) -> int:
    """Return the cost of the typed quantity, raising ValueError if it is not a number."""
    quantity = _parse_int(item_quantity, _I32)
    cost = quantity * COST_PER_ITEM + PROCESSING_FEE
    if not _I32[0] <= cost <= _I32[1]:
        raise OverflowError("attempt to compute total cost with overflow")
    return cost


class CreationKind(Enum):
    """Why a positive non-zero integer could not be created."""

    NEGATIVE = "number is negative"
    ZERO = "number is zero"


class CreationError(ValueError):
    """The value is not positive; ``kind`` tells why."""

    def __init__(self, kind: CreationKind) -> None:
        super().__init__(kind.value)
        self.kind = kind


@dataclass(frozen=True)
class PositiveNonzeroInteger:
    """An integer that is strictly greater than zero."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise CreationError(CreationKind.NEGATIVE)
        if self.value == 0:
            raise CreationError(CreationKind.ZERO)


class ParsePosNonzeroError(ValueError):
    """Text could not be turned into a positive integer.

    ``error`` is either the CreationError or the ValueError from parsing.
    """

    def __init__(self, error: ValueError) -> None:
        super().__init__(str(error))
        self.error = error

    @property
    def is_creation(self) -> bool:
        """True when the text was a number but not a positive one."""
        return isinstance(self.error, CreationError)


def parse_pos_nonzero(text: str) -> PositiveNonzeroInteger:
    """Parse text into a positive non-zero integer, raising ParsePosNonzeroError."""
    try:
        value = _parse_int(text, _I64)
    except ValueError as exc:
        raise ParsePosNonzeroError(exc) from exc
    try:
        return PositiveNonzeroInteger(value)
    except CreationError as exc:
        raise ParsePosNonzeroError(exc) from exc