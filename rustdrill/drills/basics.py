"""Small everyday functions: prices, comparisons, strings and list filling."""

from __future__ import annotations

from collections.abc import Iterable

APPLE_PRICE = 2
BULK_APPLE_PRICE = 1
BULK_THRESHOLD = 40

_COLOR_WORDS = frozenset({"green", "blue", "red"})
_FILL_VALUES = (22, 44, 66)


def calculate_apple_price(quantity: int) -> int:
    """Price of an apple order: 2 each, or 1 each above 40 apples."""
    if quantity > BULK_THRESHOLD:
        return quantity * BULK_APPLE_PRICE
    return quantity * APPLE_PRICE


def times_two(num: int) -> int:
    """num doubled."""
    return num * 2


def my_macro(text: str) -> str:
    """A greeting: "Hello " followed by text."""
    return f"Hello {text}"


def bigger(a: int, b: int) -> int:
    """The larger of a and b."""
    return a if a > b else b


def fizz_if_foo(fizzish: str) -> str:
    """"foo" for "fizz", "bar" for "fuzz", "baz" for anything else."""
    if fizzish == "fizz":
        return "foo"
    if fizzish == "fuzz":
        return "bar"
    return "baz"


def is_even(num: int) -> bool:
    """Whether num is even."""
    return num % 2 == 0


def sale_price(price: int) -> int:
    """Sale price: 10 off an even price, 3 off an odd one."""
    return price - 10 if is_even(price) else price - 3


def square(num: int) -> int:
    """num multiplied by itself."""
    return num * num


def current_favorite_color() -> str:
    """The favourite colour of the moment."""
    return "blue"


def is_a_color_word(attempt: str) -> bool:
    """Whether attempt is one of the known colour words."""
    return attempt in _COLOR_WORDS


def fill_vec(values: Iterable[int] | None = None) -> list[int]:
    """A new list of the given values followed by 22, 44 and 66."""
    filled = list(values) if values is not None else []
    filled.extend(_FILL_VALUES)
    return filled