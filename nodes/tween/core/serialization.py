"""JSON conversion for keyframe tracks, scenes and fill regions."""

import json
from typing import Any, Dict, List

import numpy as np

from .flood_fill import FillRegion
from .keyframes import Keyframe, TransformProps, build_track
from .scene import Scene, SceneObject


def parse_json(text: str, what: str = "input") -> Any:
    """json.loads with a readable error for node inputs."""
    if not text or not text.strip():
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid {what} JSON: {e}") from e


def _serialize_value(value: Any) -> Any:
    """Convert value to JSON-serializable format."""
    if isinstance(value, np.ndarray):
        return {"type": "ndarray", "shape": list(value.shape), "dtype": str(value.dtype)}
    elif isinstance(value, np.generic):
        return value.item()
    elif isinstance(value, (list, tuple)):
        return [_serialize_value(v) for v in value]
    elif isinstance(value, dict):
        return {k: _serialize_value(v) for k, v in value.items()}
    elif hasattr(value, "to_dict"):
        return _serialize_value(value.to_dict())
    return value


def to_json_string(data: Any) -> str:
    """Serialize core objects (dataclasses with to_dict, arrays, dicts) to JSON."""
    return json.dumps(_serialize_value(data), indent=2)


def keyframes_from_data(data: Any) -> List[Keyframe]:
    """
    Build a sorted track from a list of keyframe dicts.

    Accepts either a bare list or {"keyframes": [...]}.
    """
    if data is None:
        return []
    if isinstance(data, dict):
        data = data.get("keyframes", [])
    if not isinstance(data, list):
        raise ValueError("Keyframes must be a list of objects")
    return build_track(Keyframe.from_dict(item) for item in data)


def tracks_from_data(data: Any) -> Dict[str, List[Keyframe]]:
    """Build {object_id: track} from {object_id: [keyframe dicts]}."""
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError("Tracks must be an object keyed by object id")
    return {str(object_id): keyframes_from_data(items) for object_id, items in data.items()}


def scene_from_data(data: Any) -> Scene:
    """Build a Scene from {"objects": [...], "order": [...], "fills": [...]}."""
    if data is None:
        return Scene()
    if not isinstance(data, dict):
        raise ValueError("Scene must be an object")

    objects = {}
    for item in data.get("objects", []):
        obj = SceneObject.from_dict(item)
        objects[obj.id] = obj

    order = [str(i) for i in data.get("order", []) if str(i) in objects]
    order += [i for i in objects if i not in order]

    fills = tuple(FillRegion.from_dict(item) for item in data.get("fills", []))
    return Scene(objects=objects, order=tuple(order), fills=fills)


def transforms_to_data(transforms: Dict[str, TransformProps]) -> Dict[str, Dict[str, Any]]:
    return {object_id: props.to_dict() for object_id, props in transforms.items()}


__all__ = [
    "parse_json",
    "to_json_string",
    "keyframes_from_data",
    "tracks_from_data",
    "scene_from_data",
    "transforms_to_data",
]
