"""Tween Scene nodes - pivot editing and per-tick scene evaluation."""

import logging
from typing import Dict

from .core import (
    anchor_canvas_position,
    apply_tick,
    parse_json,
    scene_from_data,
    set_pivot,
    to_json_string,
    tracks_from_data,
    transforms_to_data,
)

logger = logging.getLogger(__name__)


class TweenSetPivot:
    """Move an object's rotation pivot without moving the object."""
    COLOR = "#1a1a1a"
    BGCOLOR = "#2d2d2d"

    CATEGORY = "Tween/Scene"
    FUNCTION = "set_pivot"
    RETURN_TYPES = ("STRING", "FLOAT", "FLOAT")
    RETURN_NAMES = ("scene_json", "anchor_canvas_x", "anchor_canvas_y")

    @classmethod
    def INPUT_TYPES(cls):
        return {
            "required": {
                "scene_json": ("STRING", {"multiline": True, "default": "{}"}),
                "object_id": ("STRING", {"default": "object_1"}),
                "anchor_x": ("FLOAT", {"default": 0.5, "min": 0.0, "max": 1.0, "step": 0.01}),
                "anchor_y": ("FLOAT", {"default": 0.5, "min": 0.0, "max": 1.0, "step": 0.01}),
            }
        }

    def set_pivot(self, scene_json: str, object_id: str, anchor_x: float, anchor_y: float):
        """Re-anchor one object; unknown ids pass the scene through unchanged."""
        scene = scene_from_data(parse_json(scene_json, "scene"))

        obj = scene.get(object_id)
        if obj is None:
            logger.warning("[Tween] Object %r not in scene, pivot unchanged", object_id)
            return (to_json_string(scene), 0.0, 0.0)

        anchor_x = max(0.0, min(1.0, float(anchor_x)))
        anchor_y = max(0.0, min(1.0, float(anchor_y)))

        updated = set_pivot(obj, anchor_x, anchor_y)
        scene = scene.replace_object(updated)
        canvas_x, canvas_y = anchor_canvas_position(updated)

        return (to_json_string(scene), canvas_x, canvas_y)


class TweenRenderTick:
    """Evaluate every animated object of a scene at one time."""
    COLOR = "#1a1a1a"
    BGCOLOR = "#2d2d2d"

    CATEGORY = "Tween/Scene"
    FUNCTION = "tick"
    RETURN_TYPES = ("STRING", "STRING")
    RETURN_NAMES = ("scene_json", "transforms_json")

    @classmethod
    def INPUT_TYPES(cls):
        return {
            "required": {
                "scene_json": ("STRING", {"multiline": True, "default": "{}"}),
                "tracks_json": ("STRING", {"multiline": True, "default": "{}"}),
                "time": ("FLOAT", {"default": 0.0, "min": 0.0, "max": 3600.0, "step": 0.01}),
            },
            "optional": {
                "track": ("TWEEN_TRACK",),
            }
        }

    def tick(self, scene_json: str, tracks_json: str, time: float, track: Dict = None):
        """
        Apply interpolated transforms, restack by zIndex, then move attached fills.

        A wired TWEEN_TRACK overrides the JSON track for the same object.
        """
        scene = scene_from_data(parse_json(scene_json, "scene"))
        tracks = tracks_from_data(parse_json(tracks_json, "tracks"))
        if track is not None and track.get("object_id"):
            tracks[track["object_id"]] = track.get("keyframes", [])

        scene, transforms = apply_tick(scene, time, tracks)

        return (to_json_string(scene), to_json_string(transforms_to_data(transforms)))


NODE_CLASS_MAPPINGS = {
    "Tween_SetPivot": TweenSetPivot,
    "Tween_RenderTick": TweenRenderTick,
}

NODE_DISPLAY_NAME_MAPPINGS = {
    "Tween_SetPivot": "◊ Tween Set Pivot",
    "Tween_RenderTick": "◊ Tween Render Tick",
}
