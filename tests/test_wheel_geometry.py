import math

import pytest

from wheel_geometry import (
    SEGMENT_COUNT,
    label_position,
    polar_to_cartesian,
    segment_angle_span,
    segment_arc_path,
    segment_center_angle,
    segment_index_at,
    segment_start_angle,
)

SPAN = 2 * math.pi / 37


def test_span_is_a_37th_of_a_turn():
    assert segment_angle_span() == pytest.approx(SPAN)
    assert SEGMENT_COUNT == 37


@pytest.mark.parametrize("index", range(37))
def test_center_lies_inside_its_segment(index):
    center = segment_center_angle(index)
    assert index * SPAN <= center < (index + 1) * SPAN
    assert center == pytest.approx(segment_start_angle(index) + SPAN / 2)


def test_polar_to_cartesian():
    assert polar_to_cartesian(0.0, 10.0) == (10.0, 0.0)
    x, y = polar_to_cartesian(math.pi / 2, 10.0)
    assert x == pytest.approx(0.0, abs=1e-12)
    assert y == pytest.approx(10.0)


def test_arc_path_endpoints_and_flag():
    arc = segment_arc_path(3, 150.0)
    assert arc.start_angle == pytest.approx(3 * SPAN)
    assert arc.end_angle == pytest.approx(4 * SPAN)
    assert arc.start == polar_to_cartesian(arc.start_angle, 150.0)
    assert arc.end == polar_to_cartesian(arc.end_angle, 150.0)
    assert arc.large_arc is False


def test_arc_path_svg():
    arc = segment_arc_path(0, 150.0)
    svg = arc.to_svg()
    assert svg.startswith("M 0 0 L 150.0 0.0 A 150.0 150.0 0 0 1 ")
    assert svg.endswith(" Z")


def test_arc_path_rotation_shifts_angles():
    plain = segment_arc_path(5, 100.0)
    turned = segment_arc_path(5, 100.0, rotation=0.25)
    assert turned.start_angle == pytest.approx(plain.start_angle + 0.25)
    assert turned.end_angle == pytest.approx(plain.end_angle + 0.25)


def test_label_position_reads_along_rim():
    label = label_position(0, 130.0)
    assert (label.x, label.y) == polar_to_cartesian(SPAN / 2, 130.0)
    assert label.rotation_degrees == pytest.approx(math.degrees(SPAN / 2) + 90)


@pytest.mark.parametrize("index", [0, 1, 18, 36])
def test_segment_index_at_inverts_center(index):
    assert segment_index_at(segment_center_angle(index)) == index
    rotation = 7.3
    assert segment_index_at(segment_center_angle(index) + rotation, rotation) == index


@pytest.mark.parametrize("index", [-1, 37])
def test_index_out_of_range(index):
    with pytest.raises(ValueError):
        segment_center_angle(index)
    with pytest.raises(ValueError):
        segment_arc_path(index, 10.0)
