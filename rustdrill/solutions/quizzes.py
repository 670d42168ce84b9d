"""Reference solutions of the three quizzes."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum, auto
from typing import Generic, TypeVar

G = TypeVar("G")


def calculate_price_of_apples(num: int) -> int:
    """Two per apple, or one per apple when more than 40 are bought."""
    return num if num > 40 else num * 2


class CommandKind(Enum):
    """What to do with a string."""

    UPPERCASE = auto()
    TRIM = auto()
    APPEND = auto()


@dataclass(frozen=True)
class Command:
    """A transformation; ``times`` counts the "bar" suffixes for APPEND."""

    kind: CommandKind
    times: int = 0

    def __post_init__(self) -> None:
        if self.times < 0:
            raise ValueError("times must not be negative")


def _ascii_upper(text: str) -> str:
    return "".join(char.upper() if "a" <= char <= "z" else char for char in text)


def transformer(commands: Iterable[tuple[str, Command]]) -> list[str]:
    """Apply each command to its string and return the results in order."""

    def apply(text: str, command: Command) -> str:
        if command.kind is CommandKind.UPPERCASE:
            return _ascii_upper(text)
        if command.kind is CommandKind.TRIM:
            return text.strip()
        return text + "bar" * command.times

    return [apply(text, command) for text, command in commands]


@dataclass
class ReportCard(Generic[G]):
    """A student's report card with a numeric or alphabetic grade."""

    grade: G
    student_name: str
    student_age: int

    def print(self) -> str:
        """Return the report card as one line of text."""
        grade = self.grade
        if isinstance(grade, float) and grade.is_integer():
            grade = int(grade)
        return f"{self.student_name} ({self.student_age}) - achieved a grade of {grade}"