"""Data types: wrappers, report cards, orders, packages, messages and appending."""

from __future__ import annotations

import functools
from dataclasses import dataclass, field
from typing import Generic, NamedTuple, TypeVar

T = TypeVar("T")
G = TypeVar("G")


@dataclass(frozen=True)
class Wrapper(Generic[T]):
    """Holds a single value of any type."""

    value: T


@dataclass
class ReportCard(Generic[G]):
    """A student's report card; the grade may be a number or a letter grade."""

    grade: G
    student_name: str
    student_age: int

    def print(self) -> str:
        """The report card as one line of text."""
        return (
            f"{self.student_name} ({self.student_age}) - achieved a grade of {self.grade}"
        )


@dataclass(frozen=True)
class ColorClassicStruct:
    """A colour with named fields."""

    name: str
    hex: str


class ColorTupleStruct(NamedTuple):
    """A colour as a tuple of name and hex code."""

    name: str
    hex: str


class UnitStruct:
    """A type without fields."""

    def __repr__(self) -> str:
        return "UnitStruct"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, UnitStruct)

    def __hash__(self) -> int:
        return hash(UnitStruct)


@dataclass(frozen=True)
class Order:
    """A customer order."""

    name: str
    year: int
    made_by_phone: bool
    made_by_mobile: bool
    made_by_email: bool
    item_number: int
    count: int


def create_order_template() -> Order:
    """The template new orders are derived from."""
    return Order(
        name="Bob",
        year=2019,
        made_by_phone=False,
        made_by_mobile=False,
        made_by_email=True,
        item_number=123,
        count=0,
    )


class Package:
    """A package sent from one country to another."""

    def __init__(self, sender_country: str, recipient_country: str, weight_in_grams: int) -> None:
        if weight_in_grams <= 0:
            raise ValueError(f"a package must weigh more than 0 grams, got {weight_in_grams}")
        self.sender_country = sender_country
        self.recipient_country = recipient_country
        self.weight_in_grams = weight_in_grams

    def is_international(self) -> bool:
        """Whether the package crosses a border."""
        return self.sender_country != self.recipient_country

    def get_fees(self, cents_per_gram: int) -> int:
        """Transport fees in cents."""
        return self.weight_in_grams * cents_per_gram

    def __repr__(self) -> str:
        return (
            f"Package(sender_country={self.sender_country!r}, "
            f"recipient_country={self.recipient_country!r}, "
            f"weight_in_grams={self.weight_in_grams!r})"
        )


@dataclass(frozen=True)
class Point:
    """A position on a byte-sized grid."""

    x: int
    y: int


@dataclass(frozen=True)
class ChangeColor:
    """Message: switch to a new colour."""

    color: tuple[int, int, int]


@dataclass(frozen=True)
class Echo:
    """Message: print some text."""

    text: str


@dataclass(frozen=True)
class Move:
    """Message: move to a point."""

    point: Point


@dataclass(frozen=True)
class Quit:
    """Message: stop."""


Message = ChangeColor | Echo | Move | Quit


@dataclass
class GameState:
    """State changed by processing messages."""

    color: tuple[int, int, int] = (0, 0, 0)
    position: Point = field(default_factory=lambda: Point(0, 0))
    has_quit: bool = False

    def change_color(self, color: tuple[int, int, int]) -> None:
        self.color = color

    def quit(self) -> None:
        self.has_quit = True

    def echo(self, text: str) -> None:
        print(text)

    def move_position(self, point: Point) -> None:
        self.position = point

    def process(self, message: Message) -> None:
        """Apply one message; raise TypeError for anything that is not a message."""
        match message:
            case ChangeColor(color=color):
                self.change_color(color)
            case Echo(text=text):
                self.echo(text)
            case Move(point=point):
                self.move_position(point)
            case Quit():
                self.quit()
            case _:
                raise TypeError(f"not a message: {message!r}")


@functools.singledispatch
def append_bar(value):
    """Append "Bar" to a string, or a "Bar" element to a list."""
    raise TypeError(f"cannot append Bar to {type(value).__name__}")


@append_bar.register
def _(value: str) -> str:
    return value + "Bar"


@append_bar.register
def _(value: list) -> list:
    return [*value, "Bar"]