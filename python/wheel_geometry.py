#!/usr/bin/env python3
"""Angle and path helpers shared by the spin engine and the renderers."""

from __future__ import annotations

import math
from dataclasses import dataclass

SEGMENT_COUNT = 37
_SPAN = 2 * math.pi / SEGMENT_COUNT


@dataclass(frozen=True)
class ArcPath:
    """Pie slice of one segment, centred on the wheel origin."""

    index: int
    radius: float
    start_angle: float
    end_angle: float
    start: tuple[float, float]
    end: tuple[float, float]
    large_arc: bool

    def to_svg(self) -> str:
        sx, sy = self.start
        ex, ey = self.end
        flag = 1 if self.large_arc else 0
        return " ".join(
            [
                "M 0 0",
                f"L {sx} {sy}",
                f"A {self.radius} {self.radius} 0 {flag} 1 {ex} {ey}",
                "Z",
            ]
        )


@dataclass(frozen=True)
class LabelPlacement:
    x: float
    y: float
    rotation_degrees: float


def _check_index(index: int) -> None:
    if not 0 <= index < SEGMENT_COUNT:
        raise ValueError(f"Segment index out of range: {index}")


def segment_angle_span() -> float:
    return _SPAN


def segment_start_angle(index: int) -> float:
    _check_index(index)
    return index * _SPAN


def segment_center_angle(index: int) -> float:
    _check_index(index)
    return index * _SPAN + _SPAN / 2


def polar_to_cartesian(angle: float, radius: float) -> tuple[float, float]:
    # Screen frame: y grows downward, so positive angles run clockwise.
    return radius * math.cos(angle), radius * math.sin(angle)


def segment_arc_path(index: int, radius: float, rotation: float = 0.0) -> ArcPath:
    start_angle = segment_start_angle(index) + rotation
    end_angle = start_angle + _SPAN
    return ArcPath(
        index=index,
        radius=radius,
        start_angle=start_angle,
        end_angle=end_angle,
        start=polar_to_cartesian(start_angle, radius),
        end=polar_to_cartesian(end_angle, radius),
        large_arc=_SPAN > math.pi,
    )


def label_position(index: int, radius: float, rotation: float = 0.0) -> LabelPlacement:
    """Anchor for a segment number, turned so the text reads along the rim."""
    angle = segment_center_angle(index) + rotation
    x, y = polar_to_cartesian(angle, radius)
    return LabelPlacement(x=x, y=y, rotation_degrees=math.degrees(angle) + 90)


def segment_index_at(angle: float, rotation: float = 0.0) -> int:
    """Index of the segment under ``angle`` once the wheel is turned by ``rotation``."""
    local = (angle - rotation) % (2 * math.pi)
    return min(int(local // _SPAN), SEGMENT_COUNT - 1)
