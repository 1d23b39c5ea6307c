#!/usr/bin/env python3
"""Spin state machine and time-based motion model for the roulette ball.

The engine never owns a timer. It asks the host for one frame at a time
through a ``FrameScheduler`` and computes every position from the elapsed
wall-clock time, so a slow or irregular host only drops frames and never
stretches the spin.
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Protocol, Sequence

from wheel_geometry import SEGMENT_COUNT, polar_to_cartesian, segment_center_angle
from wheel_layout import Segment, SegmentColor, generate_layout

logger = logging.getLogger(__name__)

TickCallback = Callable[[float], None]


class FrameScheduler(Protocol):
    def request_tick(self, callback: TickCallback) -> Any: ...

    def cancel_tick(self, handle: Any) -> None: ...


class SpinPhase(str, Enum):
    IDLE = "idle"
    SPINNING = "spinning"


class SpinMode(str, Enum):
    BALL = "ball"
    WHEEL = "wheel"


@dataclass(frozen=True)
class SpinSettings:
    duration_ms: float = 5000.0
    spin_turns: float = 10.0
    outer_radius: float = 160.0
    inner_radius: float = 140.0
    drop_threshold: float = 0.9
    mode: SpinMode = SpinMode.BALL
    pointer_angle: float = -math.pi / 2

    def __post_init__(self) -> None:
        if self.duration_ms <= 0:
            raise ValueError(f"duration_ms must be positive: {self.duration_ms}")
        if self.spin_turns < 0:
            raise ValueError(f"spin_turns must not be negative: {self.spin_turns}")
        if self.inner_radius < 0 or self.outer_radius < self.inner_radius:
            raise ValueError(
                f"Expected 0 <= inner_radius <= outer_radius, got {self.inner_radius} / {self.outer_radius}"
            )
        if not 0 <= self.drop_threshold < 1:
            raise ValueError(f"drop_threshold must be in [0, 1): {self.drop_threshold}")

    @property
    def spin_multiplier(self) -> float:
        return self.spin_turns * 2 * math.pi


@dataclass(frozen=True)
class MotionFrame:
    angle: float
    radius: float
    position: tuple[float, float]
    wheel_rotation: float = 0.0


@dataclass
class SpinState:
    phase: SpinPhase = SpinPhase.IDLE
    outcome_index: int | None = None
    element_angle: float = -math.pi / 2
    element_radius: float = 0.0
    element_position: tuple[float, float] = (0.0, 0.0)
    wheel_rotation: float = 0.0
    start_timestamp: float | None = None


@dataclass(frozen=True)
class SpinOutcome:
    index: int
    segment: Segment

    @property
    def number(self) -> int:
        return self.segment.number

    @property
    def color(self) -> SegmentColor:
        return self.segment.color


def ease_out_cubic(progress: float) -> float:
    return 1 - (1 - progress) ** 3


def final_wheel_rotation(outcome_index: int, settings: SpinSettings) -> float:
    """Rotation that brings the outcome's centre under the pointer after the extra turns."""
    offset = (settings.pointer_angle - segment_center_angle(outcome_index)) % (2 * math.pi)
    return offset + settings.spin_multiplier


def resting_frame(outcome_index: int, settings: SpinSettings) -> MotionFrame:
    if settings.mode is SpinMode.WHEEL:
        angle = settings.pointer_angle
        rotation = final_wheel_rotation(outcome_index, settings)
    else:
        angle = segment_center_angle(outcome_index)
        rotation = 0.0
    return MotionFrame(
        angle=angle,
        radius=settings.inner_radius,
        position=polar_to_cartesian(angle, settings.inner_radius),
        wheel_rotation=rotation,
    )


def motion_frame(progress: float, outcome_index: int, settings: SpinSettings) -> MotionFrame:
    progress = min(max(progress, 0.0), 1.0)
    if progress >= 1:
        return resting_frame(outcome_index, settings)
    eased = ease_out_cubic(progress)

    if eased < settings.drop_threshold:
        radius = settings.outer_radius
    else:
        # The ball drops from the outer track to the pockets over the last stretch.
        drop = (eased - settings.drop_threshold) / (1 - settings.drop_threshold)
        radius = settings.outer_radius - drop * (settings.outer_radius - settings.inner_radius)

    if settings.mode is SpinMode.WHEEL:
        angle = settings.pointer_angle
        rotation = eased * final_wheel_rotation(outcome_index, settings)
    else:
        target = segment_center_angle(outcome_index)
        angle = (1 - eased) * settings.spin_multiplier + eased * target
        rotation = 0.0
    return MotionFrame(
        angle=angle,
        radius=radius,
        position=polar_to_cartesian(angle, radius),
        wheel_rotation=rotation,
    )


@dataclass
class _Listeners:
    frame: list[Callable[[SpinState], None]] = field(default_factory=list)
    outcome: list[Callable[[SpinOutcome], None]] = field(default_factory=list)


class SpinEngine:
    """Owns the spin state and drives it from host frame callbacks."""

    def __init__(
        self,
        scheduler: FrameScheduler,
        settings: SpinSettings | None = None,
        random_source: Callable[[], float] = random.random,
        layout: Sequence[Segment] | None = None,
    ) -> None:
        self.scheduler = scheduler
        self.settings = settings or SpinSettings()
        self.random_source = random_source
        self.layout = tuple(layout) if layout is not None else generate_layout()
        if len(self.layout) != SEGMENT_COUNT:
            raise ValueError(f"Wheel layout must have {SEGMENT_COUNT} segments, got {len(self.layout)}")

        self._state = SpinState()
        self._listeners = _Listeners()
        self._pending_handle: Any = None
        self._generation = 0
        self._torn_down = False
        self.last_outcome: SpinOutcome | None = None
        self._apply_frame(self._start_frame())

    # --- read side for renderers and controls ---
    @property
    def state(self) -> SpinState:
        return replace(self._state)

    @property
    def phase(self) -> SpinPhase:
        return self._state.phase

    @property
    def is_spinning(self) -> bool:
        return self._state.phase is SpinPhase.SPINNING

    @property
    def outcome_index(self) -> int | None:
        return self._state.outcome_index

    @property
    def element_position(self) -> tuple[float, float]:
        return self._state.element_position

    @property
    def wheel_rotation(self) -> float:
        return self._state.wheel_rotation

    def on_frame(self, listener: Callable[[SpinState], None]) -> Callable[[], None]:
        self._listeners.frame.append(listener)
        return lambda: self._listeners.frame.remove(listener)

    def on_outcome(self, listener: Callable[[SpinOutcome], None]) -> Callable[[], None]:
        self._listeners.outcome.append(listener)
        return lambda: self._listeners.outcome.remove(listener)

    # --- control ---
    def spin(self) -> bool:
        """Start a spin. Returns False (and changes nothing) if one is running."""
        if self._torn_down or self.is_spinning:
            return False
        self._generation += 1
        self._state.outcome_index = min(int(self.random_source() * SEGMENT_COUNT), SEGMENT_COUNT - 1)
        self._state.start_timestamp = None
        self._state.phase = SpinPhase.SPINNING
        logger.debug("Spin started, outcome index %s", self._state.outcome_index)
        self._schedule_next()
        self._publish(self._start_frame())
        return True

    def teardown(self) -> None:
        """Release the pending frame request and stop for good."""
        if self._torn_down:
            return
        self._torn_down = True
        self._generation += 1
        if self._pending_handle is not None:
            handle = self._pending_handle
            self._pending_handle = None
            self.scheduler.cancel_tick(handle)
        if self.is_spinning:
            logger.debug("Engine torn down mid-spin")
        self._state.phase = SpinPhase.IDLE
        self._state.start_timestamp = None

    # --- frame loop ---
    def _schedule_next(self) -> None:
        generation = self._generation
        self._pending_handle = self.scheduler.request_tick(lambda timestamp: self._tick(generation, timestamp))

    def _tick(self, generation: int, timestamp: float) -> None:
        if generation != self._generation or not self.is_spinning:
            return
        self._pending_handle = None
        state = self._state
        if state.start_timestamp is None:
            state.start_timestamp = timestamp
        elapsed = max(0.0, timestamp - state.start_timestamp)
        progress = min(elapsed / self.settings.duration_ms, 1.0)

        if progress < 1:
            self._schedule_next()
            self._publish(motion_frame(progress, state.outcome_index, self.settings))
            return

        self._apply_frame(resting_frame(state.outcome_index, self.settings))
        state.phase = SpinPhase.IDLE
        self._publish_state()
        self._finish(state.outcome_index)

    def _finish(self, outcome_index: int) -> None:
        outcome = SpinOutcome(index=outcome_index, segment=self.layout[outcome_index])
        self.last_outcome = outcome
        logger.info("Ball landed on: %s (%s)", outcome.number, outcome.color.value)
        for listener in list(self._listeners.outcome):
            self._notify(listener, outcome)

    def _start_frame(self) -> MotionFrame:
        if self.settings.mode is SpinMode.WHEEL:
            angle = self.settings.pointer_angle
        else:
            angle = -math.pi / 2
        radius = self.settings.outer_radius
        return MotionFrame(angle=angle, radius=radius, position=polar_to_cartesian(angle, radius))

    def _apply_frame(self, frame: MotionFrame) -> None:
        self._state.element_angle = frame.angle
        self._state.element_radius = frame.radius
        self._state.element_position = frame.position
        self._state.wheel_rotation = frame.wheel_rotation

    def _publish(self, frame: MotionFrame) -> None:
        self._apply_frame(frame)
        self._publish_state()

    def _publish_state(self) -> None:
        snapshot = self.state
        for listener in list(self._listeners.frame):
            self._notify(listener, snapshot)

    @staticmethod
    def _notify(listener: Callable[[Any], None], payload: Any) -> None:
        # Listener errors are logged; the frame loop and the other listeners keep going.
        try:
            listener(payload)
        except Exception:
            logger.exception("Spin listener %r failed", listener)
