"""Command-line argument validation for the dining philosophers simulation."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

_INT_MAX = 2147483647
_DIGITS = frozenset("0123456789")

_USAGE = (
    "Error: wrong input!\n"
    "[1] number_of_philosophers\n"
    "[2] time_to_die\n"
    "[3] time_to_eat\n"
    "[4] time_to_sleep\n"
    "[optional] number_of_times_each_philosopher_must_eat\n"
)


class InputError(ValueError):
    """Raised when the command-line arguments do not describe a valid run."""


@dataclass(frozen=True)
class Settings:
    """Parameters of one simulation run; times are in milliseconds."""

    philosophers: int
    time_to_die: int
    time_to_eat: int
    time_to_sleep: int
    meals: int | None = None


def _is_digits(text: str) -> bool:
    return all(char in _DIGITS for char in text)


def _to_int(text: str) -> int:
    value = int(text) if text else 0
    return 0 if value > _INT_MAX else value


def parse_args(argv: Sequence[str]) -> Settings:
    """Build settings from the arguments that follow the program name.

    Every argument must be a plain string of decimal digits; there must be
    four or five of them, none may be zero, and values above the largest
    32-bit signed integer count as zero.
    """
    args = list(argv)
    if not all(_is_digits(arg) for arg in args):
        raise InputError("arguments must be non-negative integers")
    if len(args) not in (4, 5):
        raise InputError("expected four or five arguments")
    count, die, eat, sleep, *rest = (_to_int(arg) for arg in args)
    meals = rest[0] if rest else None
    if 0 in (count, die, eat, sleep) or meals == 0:
        raise InputError("arguments must be positive and within range")
    return Settings(count, die, eat, sleep, meals)


def usage_text() -> str:
    """Return the message shown when the input is rejected."""
    return _USAGE