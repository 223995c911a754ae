"""Conversions between values: byte and character counts, people and colours."""

from __future__ import annotations

import math
import re
from collections.abc import Sequence
from dataclasses import dataclass

_UNSIGNED = re.compile(r"\+?[0-9]+")
_USIZE_MAX = 2**64 - 1


def byte_counter(arg: str) -> int:
    """Number of bytes in the UTF-8 encoding of arg."""
    return len(arg.encode("utf-8"))


def char_counter(arg: str) -> int:
    """Number of characters in arg."""
    return len(arg)


def _parse_usize(text: str) -> int:
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
        """The fallback person: John, aged 30."""
        return cls(name="John", age=30)

    @classmethod
    def parse(cls, text: str) -> Person:
        """Parse "name,age"; raise ValueError when the text is not of that form."""
        if not text:
            raise ValueError("cannot build a person from an empty string")
        parts = text.split(",")
        if len(parts) != 2:
            raise ValueError(f"expected exactly two comma separated fields in {text!r}")
        name, age = parts
        if not name:
            raise ValueError("the name is empty")
        return cls(name=name, age=_parse_usize(age))

    @classmethod
    def from_text(cls, text: str) -> Person:
        """Parse "name,age", falling back to the default person on any problem."""
        try:
            return cls.parse(text)
        except ValueError:
            return cls.default()


class ColorError(ValueError):
    """The values do not make up an RGB colour."""


@dataclass(frozen=True)
class Color:
    """An RGB colour with components in 0..=255."""

    red: int
    green: int
    blue: int

    @classmethod
    def try_from(cls, value: Sequence[int]) -> Color:
        """Build a colour from three integers; raise ColorError otherwise."""
        components = tuple(value)
        if len(components) != 3:
            raise ColorError(f"expected 3 components, got {len(components)}")
        for component in components:
            if isinstance(component, bool) or not isinstance(component, int):
                raise ColorError(f"component {component!r} is not an integer")
            if not 0 <= component <= 255:
                raise ColorError(f"component {component} is outside 0..=255")
        red, green, blue = components
        return cls(red=red, green=green, blue=blue)


def average(values: Sequence[float]) -> float:
    """Arithmetic mean of values; NaN for an empty sequence."""
    if not values:
        return math.nan
    return sum(values, 0.0) / len(values)