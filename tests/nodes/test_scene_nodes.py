"""Tests for nodes.tween.scene_nodes -- pivot and render-tick nodes."""

import json
import os
import sys

sys.path.insert(
    0,
    os.path.dirname(
        os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    ),
)

import pytest

from nodes.tween.core import attach_fill, flood_fill, keyframes_from_data, to_json_string
from nodes.tween.scene_nodes import TweenRenderTick, TweenSetPivot


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def scene_json(simple_scene):
    return to_json_string(simple_scene)


@pytest.fixture
def tracks_json():
    return json.dumps({
        "big": [
            {"time": 0, "properties": {"x": 150, "y": 150, "zIndex": 0}},
            {"time": 2, "properties": {"x": 150, "y": 150, "zIndex": 5}},
        ],
        "small": [
            {"time": 0, "properties": {"x": 100, "y": 100, "zIndex": 1}},
            {"time": 2, "properties": {"x": 300, "y": 100, "zIndex": 1}},
        ],
    })


def objects_by_id(text):
    return {o["id"]: o for o in json.loads(text)["objects"]}


# ===================================================================
# 1. TweenSetPivot
# ===================================================================

class TestSetPivotNode:

    def test_top_left_pivot(self, scene_json):
        text, canvas_x, canvas_y = TweenSetPivot().set_pivot(scene_json, "small", 0.0, 0.0)
        small = objects_by_id(text)["small"]
        assert (small["left"], small["top"]) == pytest.approx((50.0, 50.0))
        assert (small["anchorX"], small["anchorY"]) == (0.0, 0.0)
        assert small["centeredRotation"] is False
        assert (canvas_x, canvas_y) == pytest.approx((50.0, 50.0))

    def test_other_objects_untouched(self, scene_json):
        text, _, _ = TweenSetPivot().set_pivot(scene_json, "small", 1.0, 1.0)
        assert objects_by_id(text)["big"] == objects_by_id(scene_json)["big"]

    def test_anchor_clamped(self, scene_json):
        text, canvas_x, canvas_y = TweenSetPivot().set_pivot(scene_json, "small", 1.7, -0.2)
        small = objects_by_id(text)["small"]
        assert (small["anchorX"], small["anchorY"]) == (1.0, 0.0)
        assert (canvas_x, canvas_y) == pytest.approx((150.0, 50.0))

    def test_unknown_object_passes_through(self, scene_json):
        text, canvas_x, canvas_y = TweenSetPivot().set_pivot(scene_json, "ghost", 0.0, 0.0)
        assert json.loads(text) == json.loads(scene_json)
        assert (canvas_x, canvas_y) == (0.0, 0.0)

    def test_invalid_json_raises(self):
        with pytest.raises(ValueError, match="scene"):
            TweenSetPivot().set_pivot("{broken", "a", 0.0, 0.0)


# ===================================================================
# 2. TweenRenderTick
# ===================================================================

class TestRenderTickNode:

    def test_transforms_json(self, scene_json, tracks_json):
        _, text = TweenRenderTick().tick(scene_json, tracks_json, 1.0)
        transforms = json.loads(text)
        assert set(transforms) == {"big", "small"}
        assert transforms["small"]["x"] == pytest.approx(200.0)

    def test_scene_updated(self, scene_json, tracks_json):
        text, _ = TweenRenderTick().tick(scene_json, tracks_json, 1.0)
        assert objects_by_id(text)["small"]["left"] == pytest.approx(200.0)

    def test_stacking_follows_z_index(self, scene_json, tracks_json):
        early, _ = TweenRenderTick().tick(scene_json, tracks_json, 0.5)
        late, _ = TweenRenderTick().tick(scene_json, tracks_json, 1.5)
        assert json.loads(early)["order"] == ["label", "big", "small"]
        assert json.loads(late)["order"] == ["label", "small", "big"]

    def test_attached_fill_follows_parent(self, simple_scene, enclosed_square, tracks_json):
        region = flood_fill(enclosed_square, 15, 15, "#ff0000").moved_to(95.0, 95.0)
        scene = attach_fill(simple_scene, region).scene

        text, _ = TweenRenderTick().tick(to_json_string(scene), tracks_json, 2.0)

        fill = json.loads(text)["fills"][0]
        assert (fill["left"], fill["top"]) == pytest.approx((295.0, 95.0))
        assert fill["sourceShapeId"] == "small"

    def test_wired_track_overrides_json(self, scene_json, tracks_json):
        track = {
            "object_id": "small",
            "keyframes": keyframes_from_data([{"time": 0, "properties": {"x": 0, "y": 0}}]),
        }
        _, text = TweenRenderTick().tick(scene_json, tracks_json, 1.0, track=track)
        assert json.loads(text)["small"]["x"] == 0.0

    def test_empty_inputs(self):
        text, transforms = TweenRenderTick().tick("", "", 0.0)
        assert json.loads(text) == {"objects": [], "order": [], "fills": []}
        assert json.loads(transforms) == {}
