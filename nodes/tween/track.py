"""Tween Keyframe Track - keyframe tracks and per-frame sampling."""

from typing import Any, Dict, List

from .core import (
    export_ease_name,
    interpolate_at,
    keyframes_from_data,
    normalize_keyframe_rotations,
    parse_json,
    to_json_string,
)

SAMPLE_TRACK = """[
  {"time": 0, "easing": "linear", "properties": {"x": 100, "y": 100, "rotation": 350, "zIndex": 0}},
  {"time": 2, "easing": "easeInOutQuad", "properties": {"x": 500, "y": 100, "rotation": 10, "zIndex": 1}}
]"""


class TweenKeyframeTrack:
    """Parse a keyframe list into a sorted, de-duplicated track."""
    COLOR = "#1a1a1a"
    BGCOLOR = "#2d2d2d"

    CATEGORY = "Tween/Timeline"
    FUNCTION = "build"
    RETURN_TYPES = ("TWEEN_TRACK", "STRING")
    RETURN_NAMES = ("track", "keyframes_json")

    @classmethod
    def INPUT_TYPES(cls):
        return {
            "required": {
                "keyframes_json": ("STRING", {
                    "multiline": True,
                    "default": SAMPLE_TRACK
                }),
            },
            "optional": {
                "object_id": ("STRING", {"default": "object_1"}),
            }
        }

    def build(self, keyframes_json: str, object_id: str = "object_1"):
        """Parse keyframes; entries within 0.05s of each other collapse to the later one."""
        keyframes = keyframes_from_data(parse_json(keyframes_json, "keyframes"))

        track = {
            "object_id": object_id,
            "keyframes": keyframes,
        }

        return (track, to_json_string([kf.to_dict() for kf in keyframes]))


class TweenSampleTrack:
    """Sample a keyframe track at every frame of a clip."""
    COLOR = "#1a1a1a"
    BGCOLOR = "#2d2d2d"

    CATEGORY = "Tween/Timeline"
    FUNCTION = "sample"
    RETURN_TYPES = ("TWEEN_TRANSFORMS", "STRING")
    RETURN_NAMES = ("transforms", "transforms_json")

    @classmethod
    def INPUT_TYPES(cls):
        return {
            "required": {
                "track": ("TWEEN_TRACK",),
                "max_frames": ("INT", {"default": 60, "min": 1, "max": 10000}),
                "fps": ("FLOAT", {"default": 30.0, "min": 1.0, "max": 120.0, "step": 1.0}),
            }
        }

    def sample(self, track: Dict, max_frames: int, fps: float):
        """Interpolate the track at frame / fps for each frame."""
        keyframes = track.get("keyframes", [])

        frames: List[Dict[str, Any]] = []
        for i in range(max_frames):
            props = interpolate_at(keyframes, i / fps)
            frames.append(props.to_dict() if props is not None else None)

        transforms = {
            "object_id": track.get("object_id"),
            "frames": max_frames,
            "fps": fps,
            "values": frames,
        }

        return (transforms, to_json_string(transforms))


class TweenExportTrack:
    """Export-ready segments that replay exactly like the in-tool preview."""
    COLOR = "#1a1a1a"
    BGCOLOR = "#2d2d2d"

    CATEGORY = "Tween/Timeline"
    FUNCTION = "export"
    RETURN_TYPES = ("STRING",)
    RETURN_NAMES = ("segments_json",)

    @classmethod
    def INPUT_TYPES(cls):
        return {
            "required": {
                "track": ("TWEEN_TRACK",),
            }
        }

    def export(self, track: Dict):
        """
        One tween per consecutive keyframe pair.

        Rotations are unwrapped so a plain lerp takes the short way round,
        and each segment carries the closing keyframe's ease name.

        zIndex is never tweened: each segment switches it in one step at
        its raw midpoint, independent of the ease.
        """
        keyframes = normalize_keyframe_rotations(track.get("keyframes", []))

        segments = []
        for prev_kf, curr_kf in zip(keyframes, keyframes[1:]):
            props = curr_kf.properties.to_dict()
            z_index = props.pop("zIndex", 0)
            segments.append({
                "start": round(prev_kf.time, 2),
                "duration": round(curr_kf.time - prev_kf.time, 2),
                "to": props,
                "ease": export_ease_name(curr_kf.easing),
                "zStep": {
                    "at": round((prev_kf.time + curr_kf.time) / 2, 3),
                    "zIndex": z_index,
                },
            })

        initial = None
        if keyframes:
            initial = keyframes[0].properties.to_dict()
            initial.setdefault("zIndex", 0)
        return (to_json_string({
            "object_id": track.get("object_id"),
            "initial": initial,
            "segments": segments,
        }),)


NODE_CLASS_MAPPINGS = {
    "Tween_KeyframeTrack": TweenKeyframeTrack,
    "Tween_SampleTrack": TweenSampleTrack,
    "Tween_ExportTrack": TweenExportTrack,
}

NODE_DISPLAY_NAME_MAPPINGS = {
    "Tween_KeyframeTrack": "◊ Tween Keyframe Track",
    "Tween_SampleTrack": "◊ Tween Sample Track",
    "Tween_ExportTrack": "◊ Tween Export Track",
}
