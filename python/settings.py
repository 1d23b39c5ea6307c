#!/usr/bin/env python3
"""Load the roulette configuration from config.json."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from spin_engine import SpinMode, SpinSettings

DEFAULT_CONFIG_PATH = Path("python/config.json")


@dataclass
class WindowConfig:
    title: str = "Roulette"
    wheel_radius: float = 150.0
    outer_wall_width: float = 20.0
    ball_radius: float = 5.0
    frame_interval_ms: int = 16


@dataclass
class SoundConfig:
    spin: Optional[Path] = None
    land: Optional[Path] = None


@dataclass
class RouletteConfig:
    spin: SpinSettings
    window: WindowConfig = field(default_factory=WindowConfig)
    sounds: SoundConfig = field(default_factory=SoundConfig)
    announce: bool = False
    output_dir: Path = Path("output")


def read_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def resolve_path(base_dir: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if candidate.is_absolute():
        return candidate
    return base_dir / raw_path


def _section(raw: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = raw.get(key, {})
    if not isinstance(value, dict):
        raise ValueError(f"Config section '{key}' must be an object.")
    return value


def _number(section: Dict[str, Any], key: str, default: float, prefix: str) -> float:
    value = section.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Config value '{prefix}.{key}' must be a number, got {value!r}")
    return float(value)


def parse_window(raw: Dict[str, Any]) -> WindowConfig:
    section = _section(raw, "window")
    defaults = WindowConfig()
    window = WindowConfig(
        title=str(section.get("title", defaults.title)),
        wheel_radius=_number(section, "wheel_radius", defaults.wheel_radius, "window"),
        outer_wall_width=_number(section, "outer_wall_width", defaults.outer_wall_width, "window"),
        ball_radius=_number(section, "ball_radius", defaults.ball_radius, "window"),
        frame_interval_ms=int(_number(section, "frame_interval_ms", defaults.frame_interval_ms, "window")),
    )
    if window.wheel_radius <= 10:
        raise ValueError(f"Config value 'window.wheel_radius' too small: {window.wheel_radius}")
    if window.frame_interval_ms <= 0:
        raise ValueError(f"Config value 'window.frame_interval_ms' must be positive: {window.frame_interval_ms}")
    return window


def parse_spin(raw: Dict[str, Any], window: WindowConfig) -> SpinSettings:
    section = _section(raw, "spin")
    # The ball runs on the middle of the wooden rim and settles just inside the pockets.
    outer = window.wheel_radius + window.outer_wall_width / 2
    inner = window.wheel_radius - 10
    mode_name = str(section.get("mode", SpinMode.BALL.value)).strip().lower()
    try:
        mode = SpinMode(mode_name)
    except ValueError:
        raise ValueError(f"Config value 'spin.mode' must be 'ball' or 'wheel', got {mode_name!r}") from None
    pointer_degrees = _number(section, "pointer_angle_degrees", -90.0, "spin")
    return SpinSettings(
        duration_ms=_number(section, "duration_ms", 5000.0, "spin"),
        spin_turns=_number(section, "spin_turns", 10.0, "spin"),
        outer_radius=_number(section, "outer_radius", outer, "spin"),
        inner_radius=_number(section, "inner_radius", inner, "spin"),
        drop_threshold=_number(section, "drop_threshold", 0.9, "spin"),
        mode=mode,
        pointer_angle=math.radians(pointer_degrees),
    )


def parse_config(raw: Dict[str, Any], base_dir: Path) -> RouletteConfig:
    if not isinstance(raw, dict):
        raise ValueError("Config data must be an object.")
    window = parse_window(raw)
    sounds_raw = _section(raw, "sounds")
    sounds = SoundConfig(
        spin=resolve_path(base_dir, sounds_raw["spin"]) if sounds_raw.get("spin") else None,
        land=resolve_path(base_dir, sounds_raw["land"]) if sounds_raw.get("land") else None,
    )
    return RouletteConfig(
        spin=parse_spin(raw, window),
        window=window,
        sounds=sounds,
        announce=bool(raw.get("announce", False)),
        output_dir=resolve_path(base_dir, str(raw.get("output_dir", "output"))),
    )


def load_settings(config_path: Path) -> RouletteConfig:
    """Read ``config_path``; a missing file yields the defaults."""
    base_dir = config_path.parent
    if not config_path.exists():
        return parse_config({}, base_dir)
    try:
        raw = read_json(config_path)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {config_path}: {exc}") from exc
    return parse_config(raw, base_dir)
