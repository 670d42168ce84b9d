"""Reference solutions of the iterators exercises."""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from enum import Enum, auto

_U64_MAX = 2**64 - 1
_NUMBERS = (27, 297, 38502, 81)
_DIVISOR = 27


def capitalize_first(text: str) -> str:
    """Upper-case the first character if it is an ASCII letter."""
    if not text:
        return ""
    first = text[0]
    if "a" <= first <= "z":
        first = first.upper()
    return first + text[1:]


def capitalize_words_vector(words: Iterable[str]) -> list[str]:
    """Capitalize each word."""
    return [capitalize_first(word) for word in words]


def capitalize_words_string(words: Iterable[str]) -> str:
    """Capitalize each word and join them without a separator."""
    return "".join(capitalize_first(word) for word in words)


class DivisionError(ArithmeticError):
    """A division that does not give a whole quotient."""


class NotDivisibleError(DivisionError):
    """The dividend is not a multiple of the divisor."""

    def __init__(self, dividend: int, divisor: int) -> None:
        super().__init__(f"{dividend} is not divisible by {divisor}")
        self.dividend = dividend
        self.divisor = divisor


class DivideByZeroError(DivisionError):
    """The divisor is zero."""

    def __init__(self) -> None:
        super().__init__("division by zero")


def divide(a: int, b: int) -> int:
    """Return a / b when b divides a exactly, else raise a DivisionError."""
    if b == 0:
        raise DivideByZeroError()
    if a % b != 0:
        raise NotDivisibleError(a, b)
    return a // b


def result_with_list() -> list[int]:
    """Divide the sample numbers by 27, raising at the first failure."""
    return [divide(number, _DIVISOR) for number in _NUMBERS]


def list_of_results() -> list[int | DivisionError]:
    """Divide the sample numbers by 27, keeping each quotient or error in place."""

    def attempt(number: int) -> int | DivisionError:
        try:
            return divide(number, _DIVISOR)
        except DivisionError as exc:
            return exc

    return [attempt(number) for number in _NUMBERS]


def factorial(num: int) -> int:
    """Return num! for an unsigned 64-bit num, raising OverflowError past 64 bits."""
    if num < 0:
        raise ValueError("num must not be negative")
    result = math.prod(range(1, num + 1))
    if result > _U64_MAX:
        raise OverflowError("attempt to multiply with overflow")
    return result


class Progress(Enum):
    """How far an exercise has come."""

    NONE = auto()
    SOME = auto()
    COMPLETE = auto()


def count_for(progress_map: Mapping[str, Progress], value: Progress) -> int:
    """Count entries with the given progress using an explicit loop."""
    count = 0
    for progress in progress_map.values():
        if progress is value:
            count += 1
    return count


def count_iterator(progress_map: Mapping[str, Progress], value: Progress) -> int:
    """Count entries with the given progress."""
    return sum(1 for progress in progress_map.values() if progress is value)


def count_collection_for(
    collection: Iterable[Mapping[str, Progress]], value: Progress
) -> int:
    """Count entries with the given progress across maps using explicit loops."""
    count = 0
    for progress_map in collection:
        for progress in progress_map.values():
            if progress is value:
                count += 1
    return count


def count_collection_iterator(
    collection: Iterable[Mapping[str, Progress]], value: Progress
) -> int:
    """Count entries with the given progress across maps."""
    return sum(count_iterator(progress_map, value) for progress_map in collection)