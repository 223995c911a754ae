"""Collections: fruit baskets, score tables and simple list handling."""

from __future__ import annotations

import enum
from dataclasses import dataclass

_U8_MAX = 255


class Fruit(enum.Enum):
    """Kinds of fruit that can go into a basket."""

    APPLE = "apple"
    BANANA = "banana"
    MANGO = "mango"
    LYCHEE = "lychee"
    PINEAPPLE = "pineapple"


@dataclass
class Team:
    """A team's name and its goal totals."""

    name: str
    goals_scored: int = 0
    goals_conceded: int = 0


def default_fruit_basket() -> dict[str, int]:
    """A basket of at least three kinds of fruit and at least five pieces."""
    basket = {"banana": 2}
    basket["apple"] = 3
    basket["mango"] = 1
    return basket


def top_up_basket(basket: dict[Fruit, int]) -> None:
    """Add every kind of fruit that is missing; kinds already there are left alone."""
    for fruit in Fruit:
        basket.setdefault(fruit, 1)


def _parse_goals(text: str) -> int:
    if not text.isdigit() or not text.isascii():
        raise ValueError(f"invalid goal count {text!r}")
    goals = int(text)
    if goals > _U8_MAX:
        raise ValueError(f"goal count {goals} does not fit in 0..={_U8_MAX}")
    return goals


def _add_goals(current: int, extra: int) -> int:
    total = current + extra
    if total > _U8_MAX:
        raise OverflowError(f"goal total {total} does not fit in 0..={_U8_MAX}")
    return total


def build_scores_table(results: str) -> dict[str, Team]:
    """Build a table of teams from lines of "team1,team2,goals1,goals2".

    Raises ValueError for a line with too few fields or a bad goal count.
    """
    scores: dict[str, Team] = {}
    for line in results.splitlines():
        fields = line.split(",")
        if len(fields) < 4:
            raise ValueError(f"expected four comma separated fields in {line!r}")
        first_name, second_name = fields[0], fields[1]
        first_goals = _parse_goals(fields[2])
        second_goals = _parse_goals(fields[3])
        for name, scored, conceded in (
            (first_name, first_goals, second_goals),
            (second_name, second_goals, first_goals),
        ):
            team = scores.setdefault(name, Team(name))
            team.goals_scored = _add_goals(team.goals_scored, scored)
            team.goals_conceded = _add_goals(team.goals_conceded, conceded)
    return scores


def array_and_vec() -> tuple[tuple[int, ...], list[int]]:
    """A fixed tuple and a list holding the same elements."""
    fixed = (10, 20, 30, 40)
    return fixed, list(fixed)


def vec_loop(values: list[int]) -> list[int]:
    """Every value multiplied by two."""
    return [value * 2 for value in values]