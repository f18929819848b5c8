"""Tests for nodes.tween.core.pivot -- moving the rotation pivot in place."""

import os
import sys
from dataclasses import replace

sys.path.insert(
    0,
    os.path.dirname(
        os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    ),
)

import pytest

from nodes.tween.core.pivot import (
    anchor_canvas_position,
    anchor_from_point,
    set_pivot,
)
from nodes.tween.core.scene import RotationHandle, bounding_box, corners, visual_center


def box_tuple(obj):
    box = bounding_box(obj)
    return (box.left, box.top, box.width, box.height)


class TestSetPivot:

    def test_top_left_pivot_position(self, rect):
        obj = set_pivot(rect, 0.0, 0.0)
        assert (obj.x, obj.y) == pytest.approx((50.0, 50.0))
        assert obj.anchor == (0.0, 0.0)
        assert obj.centered_rotation is False

    def test_center_preserved(self, rect):
        obj = set_pivot(rect, 0.25, 0.8)
        assert visual_center(obj) == pytest.approx(visual_center(rect))

    @pytest.mark.parametrize("anchor", [(0.0, 0.0), (1.0, 1.0), (0.3, 0.7), (1.0, 0.0)])
    def test_bounding_box_unchanged(self, rect, anchor):
        obj = set_pivot(rect, *anchor)
        assert box_tuple(obj) == pytest.approx(box_tuple(rect))

    @pytest.mark.parametrize("anchor", [(0.0, 0.0), (0.75, 0.1)])
    def test_rotated_and_scaled_object_stays_put(self, rect, anchor):
        source = replace(rect, rotation=37.0, scale_x=1.5, scale_y=0.5)
        obj = set_pivot(source, *anchor)
        assert visual_center(obj) == pytest.approx(visual_center(source))
        assert box_tuple(obj) == pytest.approx(box_tuple(source))

    def test_rotation_turns_about_pivot(self, rect):
        obj = set_pivot(rect, 0.0, 0.0)
        pivot_before = corners(obj)[0]
        turned = replace(obj, rotation=90.0)
        assert corners(turned)[0] == pytest.approx(pivot_before)
        assert visual_center(turned) != pytest.approx(visual_center(obj))

    def test_handle_moves_to_anchor(self, rect):
        obj = set_pivot(rect, 0.2, 0.9)
        assert obj.rotation_handle.x == pytest.approx(-0.3)
        assert obj.rotation_handle.y == pytest.approx(0.4)
        assert obj.rotation_handle.offset_y == 0.0

    def test_handle_is_per_object(self, rect):
        other = replace(rect, id="rect_2")
        moved = set_pivot(rect, 0.0, 1.0)
        assert other.rotation_handle == RotationHandle()
        assert moved.rotation_handle != other.rotation_handle

    def test_center_resets_defaults(self, rect):
        moved = set_pivot(rect, 0.0, 0.0)
        back = set_pivot(moved, 0.5, 0.5)
        assert back.anchor == (0.5, 0.5)
        assert back.centered_rotation is True
        assert back.rotation_handle == RotationHandle()
        assert (back.x, back.y) == pytest.approx((rect.x, rect.y))

    def test_near_center_snaps_to_center(self, rect):
        obj = set_pivot(set_pivot(rect, 1.0, 1.0), 0.505, 0.495)
        assert obj.anchor == (0.5, 0.5)
        assert obj.centered_rotation is True

    def test_original_not_modified(self, rect):
        set_pivot(rect, 0.0, 0.0)
        assert rect.anchor == (0.5, 0.5)
        assert (rect.x, rect.y) == (100.0, 100.0)


class TestAnchorHelpers:

    def test_canvas_position(self, rect):
        obj = set_pivot(rect, 0.0, 0.0)
        assert anchor_canvas_position(obj) == pytest.approx((50.0, 50.0))
        assert anchor_canvas_position(rect) == pytest.approx((100.0, 100.0))

    def test_anchor_from_point(self, rect):
        assert anchor_from_point(rect, 75.0, 100.0) == pytest.approx((0.25, 0.5))

    def test_anchor_from_point_clamped(self, rect):
        assert anchor_from_point(rect, -500.0, 500.0) == pytest.approx((0.0, 1.0))

    def test_anchor_from_point_degenerate(self, rect):
        flat = replace(rect, width=0.0)
        assert anchor_from_point(flat, 10.0, 10.0) == (0.5, 0.5)
