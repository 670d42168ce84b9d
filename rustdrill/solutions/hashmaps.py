"""Reference solutions of the hash map exercises."""

from __future__ import annotations

import re
from collections.abc import MutableMapping
from dataclasses import dataclass
from enum import Enum, auto

_U8_MAX = 255
_UNSIGNED = re.compile(r"\+?[0-9]+", re.ASCII)
_NEW_FRUIT_AMOUNT = 4


class Fruit(Enum):
    """Kinds of fruit that go into the cake basket."""

    APPLE = auto()
    BANANA = auto()
    MANGO = auto()
    LYCHEE = auto()
    PINEAPPLE = auto()


def fruit_basket() -> dict[str, int]:
    """Return a basket with at least three kinds and five pieces of fruit."""
    return {"banana": 2, "apple": 2, "mango": 2}


def fill_basket(basket: MutableMapping[Fruit, int]) -> None:
    """Add every missing kind of fruit to the basket, leaving present kinds alone."""
    for fruit in Fruit:
        basket.setdefault(fruit, _NEW_FRUIT_AMOUNT)


@dataclass
class Team:
    """Goals a team scored and conceded."""

    goals_scored: int = 0
    goals_conceded: int = 0


def _parse_goals(text: str) -> int:
    if not text:
        raise ValueError("cannot parse integer from empty string")
    if not _UNSIGNED.fullmatch(text):
        raise ValueError("invalid digit found in string")
    value = int(text)
    if value > _U8_MAX:
        raise ValueError("number too large to fit in target type")
    return value


def _result_lines(results: str) -> list[str]:
    lines = results.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line.removesuffix("\r") for line in lines]


def _record(scores: dict[str, Team], name: str, scored: int, conceded: int) -> None:
    team = scores.setdefault(name, Team())
    team.goals_scored += scored
    team.goals_conceded += conceded
    if team.goals_scored > _U8_MAX or team.goals_conceded > _U8_MAX:
        raise OverflowError("attempt to add with overflow")


def build_scores_table(results: str) -> dict[str, Team]:
    """Build the scores table from lines of "team1,team2,goals1,goals2"."""
    scores: dict[str, Team] = {}
    for line in _result_lines(results):
        fields = line.split(",")
        if len(fields) < 4:
            raise ValueError(f"malformed result line: {line!r}")
        team_1, team_2 = fields[0], fields[1]
        goals_1 = _parse_goals(fields[2])
        goals_2 = _parse_goals(fields[3])
        _record(scores, team_1, goals_1, goals_2)
        _record(scores, team_2, goals_2, goals_1)
    return scores