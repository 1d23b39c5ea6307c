#!/usr/bin/env python3
"""Fixed European roulette wheel layout.

The pocket order and colours are set by the game, not by this program, so the
layout is built once and the same tuple is handed out on every call.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache


class SegmentColor(str, Enum):
    RED = "red"
    BLACK = "black"
    GREEN = "green"


@dataclass(frozen=True)
class Segment:
    number: int
    color: SegmentColor


# Clockwise pocket order starting at the zero.
WHEEL_ORDER: tuple[int, ...] = (
    0, 32, 15, 19, 4, 21, 2, 25, 17, 34, 6, 27, 13, 36, 11, 30, 8, 23, 10,
    5, 24, 16, 33, 1, 20, 14, 31, 9, 22, 18, 29, 7, 28, 12, 35, 3, 26,
)

RED_NUMBERS = frozenset({1, 3, 5, 7, 9, 12, 14, 16, 18, 19, 21, 23, 25, 27, 30, 32, 34, 36})


def color_for_number(number: int) -> SegmentColor:
    if not 0 <= number <= 36:
        raise ValueError(f"Roulette number out of range: {number}")
    if number == 0:
        return SegmentColor.GREEN
    if number in RED_NUMBERS:
        return SegmentColor.RED
    return SegmentColor.BLACK


@lru_cache(maxsize=None)
def generate_layout() -> tuple[Segment, ...]:
    """Return the 37 segments in wheel order (index 0 is the zero pocket)."""
    return tuple(Segment(number=number, color=color_for_number(number)) for number in WHEEL_ORDER)


def segment_for_number(number: int) -> tuple[int, Segment]:
    """Find the wheel index and segment carrying ``number``."""
    for index, segment in enumerate(generate_layout()):
        if segment.number == number:
            return index, segment
    raise ValueError(f"Roulette number out of range: {number}")
