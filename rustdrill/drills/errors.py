"""Error handling: name tags, token purchases and validated positive integers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import IO

_INTEGER = re.compile(r"[+-]?[0-9]+")
_I32 = (-(2**31), 2**31 - 1)
_I64 = (-(2**63), 2**63 - 1)

PROCESSING_FEE = 1
COST_PER_ITEM = 5


class ParseIntError(ValueError):
    """Text could not be read as an integer of the expected width."""


def _parse_int(text: str, bounds: tuple[int, int]) -> int:
    if not text:
        raise ParseIntError("cannot parse integer from empty string")
    if not _INTEGER.fullmatch(text):
        raise ParseIntError("invalid digit found in string")
    value = int(text)
    low, high = bounds
    if value > high:
        raise ParseIntError("number too large to fit in target type")
    if value < low:
        raise ParseIntError("number too small to fit in target type")
    return value


class CreationError(ValueError):
    """A value cannot become a positive nonzero integer."""

    NEGATIVE = "negative"
    ZERO = "zero"

    _MESSAGES = {NEGATIVE: "Number is negative", ZERO: "Number is zero"}

    def __init__(self, reason: str) -> None:
        super().__init__(self._MESSAGES[reason])
        self.reason = reason


@dataclass(frozen=True)
class PositiveNonzeroInteger:
    """An integer greater than zero."""

    value: int

    def __post_init__(self) -> None:
        if self.value == 0:
            raise CreationError(CreationError.ZERO)
        if self.value < 0:
            raise CreationError(CreationError.NEGATIVE)

    @classmethod
    def new(cls, value: int) -> PositiveNonzeroInteger:
        """Wrap value; raise CreationError when it is zero or negative."""
        return cls(value)


def generate_nametag_text(name: str) -> str:
    """Text for a name tag; raise ValueError for an empty name."""
    if not name:
        raise ValueError("`name` was empty; it must be nonempty.")
    return f"Hi! My name is {name}"


def total_cost(item_quantity: str) -> int:
    """Tokens needed for the typed quantity; raise ParseIntError for bad input."""
    quantity = _parse_int(item_quantity, _I32)
    cost = quantity * COST_PER_ITEM + PROCESSING_FEE
    if not _I32[0] <= cost <= _I32[1]:
        raise OverflowError("total cost does not fit in a 32-bit integer")
    return cost


def purchase(tokens: int, item_quantity: str) -> int:
    """Spend tokens on the typed quantity and return what is left.

    Raises ParseIntError for bad input and ValueError when the tokens do not suffice.
    """
    cost = total_cost(item_quantity)
    if cost > tokens:
        raise ValueError("You can't afford that many!")
    return tokens - cost


def read_and_validate(stream: IO) -> PositiveNonzeroInteger:
    """Read one line and turn it into a positive nonzero integer.

    Errors from reading, ParseIntError and CreationError propagate.
    """
    line = stream.readline()
    if isinstance(line, bytes):
        line = line.decode("utf-8")
    number = _parse_int(line.strip(), _I64)
    return PositiveNonzeroInteger.new(number)