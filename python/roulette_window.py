#!/usr/bin/env python3
"""Tkinter window that draws the wheel and animates the ball."""

from __future__ import annotations

import math
import tkinter as tk
from tkinter import ttk
from typing import Callable

from announcer import Announcer
from frame_scheduler import TkFrameScheduler
from settings import RouletteConfig
from spin_engine import SpinEngine, SpinMode, SpinOutcome, SpinState
from wheel_audio import SpinSounds
from wheel_geometry import SEGMENT_COUNT, label_position, polar_to_cartesian, segment_arc_path
from wheel_image import SEGMENT_FILL, WHEEL_COLORS
from wheel_layout import generate_layout


class RouletteWindow(tk.Toplevel):
    """Roulette wheel with a spin button and the last result."""

    def __init__(
        self,
        root: tk.Tk,
        config: RouletteConfig,
        on_close: Callable[[], None] | None = None,
        sounds: SpinSounds | None = None,
        announcer: Announcer | None = None,
    ) -> None:
        super().__init__(root)
        self.root = root
        self.config_data = config
        self.on_close = on_close
        self.layout = generate_layout()
        self.sounds = sounds or SpinSounds(config.sounds.spin, config.sounds.land)
        self.announcer = announcer or Announcer(enabled=config.announce)

        window = config.window
        self.wheel_radius = window.wheel_radius
        self.wall_width = window.outer_wall_width
        self.ball_radius = window.ball_radius
        self.center = self.wheel_radius + self.wall_width + 20

        self.title(window.title)
        self.protocol("WM_DELETE_WINDOW", self._handle_close)
        self.result_var = tk.StringVar(value="Press spin to play")
        self.arc_ids: list[int] = []
        self.label_ids: list[int] = []
        self.divider_ids: list[int] = []
        self.ball_id: int | None = None
        self.last_rotation: float | None = None

        self.scheduler = TkFrameScheduler(self, interval_ms=window.frame_interval_ms)
        self.engine = SpinEngine(self.scheduler, config.spin)
        self.engine.on_frame(self._handle_frame)
        self.engine.on_outcome(self._handle_outcome)

        self._build_ui()
        self._draw_wheel()
        self._handle_frame(self.engine.state)

    def _build_ui(self) -> None:
        container = ttk.Frame(self, padding=10)
        container.pack(fill=tk.BOTH, expand=True)

        size = int(math.ceil(self.center * 2))
        self.canvas = tk.Canvas(container, width=size, height=size, bg=WHEEL_COLORS["background"], highlightthickness=0)
        self.canvas.pack(pady=(0, 10))

        ttk.Label(container, textvariable=self.result_var, font=("Helvetica", 14, "bold")).pack(pady=(0, 8))
        self.spin_btn = tk.Button(
            container,
            text="Spin the Wheel",
            command=self._start_spin,
            bg="#8b5cf6",
            fg="white",
            font=("Helvetica", 14, "bold"),
            relief="flat",
            padx=24,
            pady=10,
        )
        self.spin_btn.pack()
        self.bind("<space>", lambda event: self._start_spin())

    def _to_screen(self, x: float, y: float) -> tuple[float, float]:
        return self.center + x, self.center + y

    def _circle(self, radius: float, fill: str, tags: str) -> int:
        c = self.center
        return self.canvas.create_oval(c - radius, c - radius, c + radius, c + radius, fill=fill, outline="", tags=tags)

    def _draw_wheel(self) -> None:
        """Create the canvas items once; frames only move them."""
        self.canvas.delete("wheel")
        r = self.wheel_radius
        c = self.center
        self._circle(r + self.wall_width, WHEEL_COLORS["wood"], "wheel")
        self._circle(r, WHEEL_COLORS["wheel"], "wheel")

        self.arc_ids = []
        self.label_ids = []
        for index, segment in enumerate(self.layout):
            self.arc_ids.append(
                self.canvas.create_arc(
                    c - r, c - r, c + r, c + r,
                    fill=SEGMENT_FILL[segment.color],
                    outline="white",
                    style=tk.PIESLICE,
                    tags="wheel",
                )
            )
            self.label_ids.append(
                self.canvas.create_text(
                    0, 0,
                    text=str(segment.number),
                    fill=WHEEL_COLORS["text"],
                    font=("Helvetica", 9, "bold"),
                    tags="wheel",
                )
            )

        self.ball_id = self.canvas.create_oval(0, 0, 0, 0, fill=WHEEL_COLORS["ball"], outline="", tags="ball")
        self._circle(r - 30, WHEEL_COLORS["wood"], "wheel")
        self._circle(r - 100, WHEEL_COLORS["gold"], "wheel")

        self.divider_ids = [
            self.canvas.create_line(0, 0, 0, 0, fill=WHEEL_COLORS["divider"], width=2, tags="wheel")
            for _ in range(SEGMENT_COUNT)
        ]

        if self.engine.settings.mode is SpinMode.WHEEL:
            angle = self.engine.settings.pointer_angle
            tip_r = r + self.wall_width - 4
            base_r = r + self.wall_width + 16
            half = math.radians(3)
            points = [
                *self._to_screen(*polar_to_cartesian(angle, tip_r)),
                *self._to_screen(*polar_to_cartesian(angle - half, base_r)),
                *self._to_screen(*polar_to_cartesian(angle + half, base_r)),
            ]
            self.canvas.create_polygon(*points, fill=WHEEL_COLORS["pointer"], outline="", tags="wheel")
        self.last_rotation = None

    def _place_segments(self, rotation: float) -> None:
        r = self.wheel_radius
        for index in range(SEGMENT_COUNT):
            arc = segment_arc_path(index, r, rotation)
            # Tk counts degrees counter-clockwise with y up; the screen frame runs clockwise.
            self.canvas.itemconfigure(
                self.arc_ids[index],
                start=-math.degrees(arc.end_angle),
                extent=math.degrees(arc.end_angle - arc.start_angle),
            )
            label = label_position(index, r - 20, rotation)
            self.canvas.coords(self.label_ids[index], *self._to_screen(label.x, label.y))
            self.canvas.itemconfigure(self.label_ids[index], angle=-label.rotation_degrees)
            self.canvas.coords(
                self.divider_ids[index],
                *self._to_screen(*polar_to_cartesian(arc.start_angle, r)),
                *self._to_screen(*polar_to_cartesian(arc.start_angle, r + self.wall_width)),
            )
        self.last_rotation = rotation

    def _handle_frame(self, state: SpinState) -> None:
        if self.last_rotation is None or state.wheel_rotation != self.last_rotation:
            self._place_segments(state.wheel_rotation)
        bx, by = self._to_screen(*state.element_position)
        br = self.ball_radius
        self.canvas.coords(self.ball_id, bx - br, by - br, bx + br, by + br)
        self._update_btn_state()

    def _handle_outcome(self, outcome: SpinOutcome) -> None:
        self.result_var.set(f"Ball landed on: {outcome.number} ({outcome.color.value})")
        self.sounds.land()
        self.announcer.announce(outcome)
        self._update_btn_state()

    def _start_spin(self) -> None:
        if not self.engine.spin():
            return
        self.result_var.set("Spinning...")
        self.sounds.start_rolling()

    def _update_btn_state(self) -> None:
        if self.engine.is_spinning:
            self.spin_btn.config(text="Spinning...", state="disabled")
        else:
            self.spin_btn.config(text="Spin the Wheel", state="normal")

    def _handle_close(self) -> None:
        self.engine.teardown()
        self.sounds.stop()
        self.destroy()
        if self.on_close:
            self.on_close()
