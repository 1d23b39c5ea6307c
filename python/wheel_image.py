#!/usr/bin/env python3
"""Pillow rendering of the wheel: still snapshots and animated GIFs of a spin."""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Sequence

from PIL import Image, ImageDraw, ImageFont

from frame_scheduler import FixedStepScheduler
from settings import WindowConfig
from spin_engine import SpinEngine, SpinMode, SpinOutcome, SpinPhase, SpinSettings, SpinState, resting_frame
from wheel_geometry import SEGMENT_COUNT, label_position, polar_to_cartesian, segment_arc_path
from wheel_layout import Segment, SegmentColor, generate_layout

logger = logging.getLogger(__name__)

SEGMENT_FILL = {
    SegmentColor.RED: "#c62828",
    SegmentColor.BLACK: "#1b1b1b",
    SegmentColor.GREEN: "#1e8c45",
}

WHEEL_COLORS = {
    "background": "#f3f4f6",
    "wood": "#8b4513",
    "wheel": "#3a3a3a",
    "divider": "#5d3a1a",
    "gold": "#ffd700",
    "ball": "#ffffff",
    "pointer": "#ffe66d",
    "text": "#ffffff",
}


class WheelImageRenderer:
    def __init__(self, window: WindowConfig | None = None, layout: Sequence[Segment] | None = None) -> None:
        self.window = window or WindowConfig()
        self.layout = tuple(layout) if layout is not None else generate_layout()
        self.margin = 10
        self.center = self.window.wheel_radius + self.window.outer_wall_width + self.margin
        self.size = int(math.ceil(self.center * 2))
        self.font = ImageFont.load_default()

    def _to_screen(self, x: float, y: float) -> tuple[float, float]:
        return self.center + x, self.center + y

    def _circle(self, draw: ImageDraw.ImageDraw, radius: float, fill: str) -> None:
        c = self.center
        draw.ellipse((c - radius, c - radius, c + radius, c + radius), fill=fill)

    def render(self, state: SpinState, pointer_angle: float | None = None) -> Image.Image:
        """Draw one frame from an engine state."""
        wheel_radius = self.window.wheel_radius
        wall = self.window.outer_wall_width
        rotation = state.wheel_rotation
        image = Image.new("RGB", (self.size, self.size), WHEEL_COLORS["background"])
        draw = ImageDraw.Draw(image)
        c = self.center

        self._circle(draw, wheel_radius + wall, WHEEL_COLORS["wood"])
        self._circle(draw, wheel_radius, WHEEL_COLORS["wheel"])

        bbox = (c - wheel_radius, c - wheel_radius, c + wheel_radius, c + wheel_radius)
        for index, segment in enumerate(self.layout):
            arc = segment_arc_path(index, wheel_radius, rotation)
            # PIL measures degrees clockwise from 3 o'clock, same as the screen frame.
            draw.pieslice(
                bbox,
                start=math.degrees(arc.start_angle),
                end=math.degrees(arc.end_angle),
                fill=SEGMENT_FILL[segment.color],
                outline="white",
            )
            label = label_position(index, wheel_radius - 20, rotation)
            draw.text(
                self._to_screen(label.x, label.y),
                str(segment.number),
                fill=WHEEL_COLORS["text"],
                font=self.font,
                anchor="mm",
            )

        ball_r = self.window.ball_radius
        bx, by = self._to_screen(*state.element_position)
        draw.ellipse((bx - ball_r, by - ball_r, bx + ball_r, by + ball_r), fill=WHEEL_COLORS["ball"])

        self._circle(draw, wheel_radius - 30, WHEEL_COLORS["wood"])
        self._circle(draw, wheel_radius - 100, WHEEL_COLORS["gold"])

        for index in range(SEGMENT_COUNT):
            angle = segment_arc_path(index, wheel_radius, rotation).start_angle
            inner = self._to_screen(*polar_to_cartesian(angle, wheel_radius))
            outer = self._to_screen(*polar_to_cartesian(angle, wheel_radius + wall))
            draw.line((inner, outer), fill=WHEEL_COLORS["divider"], width=2)

        if pointer_angle is not None:
            self._draw_pointer(draw, pointer_angle)
        return image

    def _draw_pointer(self, draw: ImageDraw.ImageDraw, angle: float) -> None:
        tip_r = self.window.wheel_radius + self.window.outer_wall_width
        base_r = tip_r + self.margin
        half = math.radians(3)
        tip = self._to_screen(*polar_to_cartesian(angle, tip_r - 4))
        left = self._to_screen(*polar_to_cartesian(angle - half, base_r))
        right = self._to_screen(*polar_to_cartesian(angle + half, base_r))
        draw.polygon([tip, left, right], fill=WHEEL_COLORS["pointer"])

    def save_snapshot(self, path: Path, outcome_index: int, settings: SpinSettings) -> Path:
        """Save the resting picture for ``outcome_index``."""
        frame = resting_frame(outcome_index, settings)
        state = SpinState(
            outcome_index=outcome_index,
            element_angle=frame.angle,
            element_radius=frame.radius,
            element_position=frame.position,
            wheel_rotation=frame.wheel_rotation,
        )
        path.parent.mkdir(parents=True, exist_ok=True)
        self.render(state, self._pointer_for(settings)).save(path)
        logger.info("Snapshot written to %s", path)
        return path

    def record_gif(
        self,
        path: Path,
        engine: SpinEngine,
        scheduler: FixedStepScheduler,
        frame_stride: int = 3,
        hold_frames: int = 20,
    ) -> SpinOutcome | None:
        """Run one full spin on ``scheduler`` and write it out as a looping GIF."""
        if frame_stride < 1:
            raise ValueError(f"frame_stride must be at least 1: {frame_stride}")
        pointer = self._pointer_for(engine.settings)
        frames: list[Image.Image] = []
        counter = {"seen": 0}

        def _capture(state: SpinState) -> None:
            if counter["seen"] % frame_stride == 0 or state.phase is not SpinPhase.SPINNING:
                frames.append(self.render(state, pointer))
            counter["seen"] += 1

        unsubscribe = engine.on_frame(_capture)
        try:
            if not engine.spin():
                return None
            scheduler.run_until_idle()
        finally:
            unsubscribe()

        frames.extend([frames[-1]] * hold_frames)
        path.parent.mkdir(parents=True, exist_ok=True)
        frames[0].save(
            path,
            save_all=True,
            append_images=frames[1:],
            duration=max(1, int(round(scheduler.frame_ms * frame_stride))),
            loop=0,
        )
        logger.info("Recorded %d frames to %s", len(frames), path)
        return engine.last_outcome

    @staticmethod
    def _pointer_for(settings: SpinSettings) -> float | None:
        return settings.pointer_angle if settings.mode is SpinMode.WHEEL else None
