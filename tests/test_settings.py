import json
import math
from pathlib import Path

import pytest

from settings import load_settings, parse_config, resolve_path
from spin_engine import SpinMode


def write_config(tmp_path, payload):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_missing_file_gives_defaults(tmp_path):
    config = load_settings(tmp_path / "missing.json")
    assert config.window.wheel_radius == 150
    assert config.spin.duration_ms == 5000
    assert config.spin.mode is SpinMode.BALL
    assert config.spin.spin_multiplier == pytest.approx(20 * math.pi)
    assert config.sounds.spin is None
    assert config.announce is False
    assert config.output_dir == tmp_path / "output"


def test_ball_radii_follow_the_wheel(tmp_path):
    path = write_config(tmp_path, {"window": {"wheel_radius": 200, "outer_wall_width": 30}})
    config = load_settings(path)
    assert config.spin.outer_radius == 215
    assert config.spin.inner_radius == 190


def test_explicit_spin_values(tmp_path):
    path = write_config(
        tmp_path,
        {
            "spin": {
                "mode": "Wheel",
                "duration_ms": 3000,
                "spin_turns": 4,
                "drop_threshold": 0.8,
                "pointer_angle_degrees": 0,
                "inner_radius": 100,
                "outer_radius": 120,
            },
            "announce": True,
        },
    )
    config = load_settings(path)
    assert config.spin.mode is SpinMode.WHEEL
    assert config.spin.duration_ms == 3000
    assert config.spin.spin_turns == 4
    assert config.spin.drop_threshold == 0.8
    assert config.spin.pointer_angle == 0.0
    assert (config.spin.inner_radius, config.spin.outer_radius) == (100, 120)
    assert config.announce is True


def test_sound_paths_resolve_against_config_dir(tmp_path):
    path = write_config(tmp_path, {"sounds": {"spin": "audio/roll.wav", "land": "/abs/land.wav"}})
    config = load_settings(path)
    assert config.sounds.spin == tmp_path / "audio" / "roll.wav"
    assert config.sounds.land == Path("/abs/land.wav")


@pytest.mark.parametrize(
    "payload,key",
    [
        ({"spin": {"mode": "pointer"}}, "spin.mode"),
        ({"spin": {"duration_ms": "fast"}}, "spin.duration_ms"),
        ({"window": {"wheel_radius": True}}, "window.wheel_radius"),
        ({"window": []}, "window"),
    ],
)
def test_invalid_values_name_the_key(tmp_path, payload, key):
    path = write_config(tmp_path, payload)
    with pytest.raises(ValueError, match=key):
        load_settings(path)


def test_invalid_spin_settings_are_rejected(tmp_path):
    path = write_config(tmp_path, {"spin": {"duration_ms": -5}})
    with pytest.raises(ValueError):
        load_settings(path)


def test_bad_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError, match="Invalid JSON"):
        load_settings(path)


def test_top_level_must_be_object(tmp_path):
    with pytest.raises(ValueError):
        parse_config([], tmp_path)


def test_resolve_path(tmp_path):
    assert resolve_path(tmp_path, "a/b.wav") == tmp_path / "a" / "b.wav"
    assert resolve_path(tmp_path, str(tmp_path / "x")) == tmp_path / "x"


def test_shipped_config_loads():
    config = load_settings(Path(__file__).resolve().parent.parent / "python" / "config.json")
    assert config.spin.mode is SpinMode.BALL
    assert config.sounds.spin is None
