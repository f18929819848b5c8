"""Keyframe data model and track editing."""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Optional

logger = logging.getLogger(__name__)

# Keyframes closer than this (seconds) to an existing one replace it.
KEYFRAME_MERGE_EPSILON = 0.05

# Default parameter values
DEFAULTS = {
    "x": 0.0,
    "y": 0.0,
    "scaleX": 1.0,
    "scaleY": 1.0,
    "rotation": 0.0,
    "opacity": 1.0,
}


@dataclass(frozen=True)
class TransformProps:
    """Animatable transform of one object at one instant."""
    x: float = 0.0
    y: float = 0.0
    scale_x: float = 1.0
    scale_y: float = 1.0
    rotation: float = 0.0
    opacity: float = 1.0
    z_index: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the editor's camelCase property dict."""
        data = {
            "x": self.x,
            "y": self.y,
            "scaleX": self.scale_x,
            "scaleY": self.scale_y,
            "rotation": self.rotation,
            "opacity": self.opacity,
        }
        if self.z_index is not None:
            data["zIndex"] = self.z_index
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TransformProps":
        """
        Build from an editor property dict.

        Missing keys take DEFAULTS. anchorX/anchorY are ignored: the anchor
        belongs to the object, not to keyframes.
        """
        z_index = data.get("zIndex")
        return cls(
            x=float(data.get("x", DEFAULTS["x"])),
            y=float(data.get("y", DEFAULTS["y"])),
            scale_x=float(data.get("scaleX", DEFAULTS["scaleX"])),
            scale_y=float(data.get("scaleY", DEFAULTS["scaleY"])),
            rotation=float(data.get("rotation", DEFAULTS["rotation"])),
            opacity=float(data.get("opacity", DEFAULTS["opacity"])),
            z_index=int(z_index) if z_index is not None else None,
        )


@dataclass(frozen=True)
class Keyframe:
    """Timestamped transform plus the easing used when approaching it."""
    time: float
    properties: TransformProps = field(default_factory=TransformProps)
    easing: str = "linear"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "time": self.time,
            "properties": self.properties.to_dict(),
            "easing": self.easing,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Keyframe":
        return cls(
            time=max(0.0, float(data.get("time", 0.0))),
            properties=TransformProps.from_dict(data.get("properties", {})),
            easing=str(data.get("easing", "linear")),
        )


def add_keyframe(
    keyframes: List[Keyframe],
    keyframe: Keyframe,
    epsilon: float = KEYFRAME_MERGE_EPSILON
) -> List[Keyframe]:
    """
    Insert a keyframe, keeping the track sorted by time.

    A keyframe within epsilon of an existing one replaces it instead of
    adding a near-duplicate. The replacement keeps its own time, so the
    track is re-sorted afterwards.

    Returns:
        New list; the input list is not modified
    """
    for i, existing in enumerate(keyframes):
        if abs(existing.time - keyframe.time) < epsilon:
            logger.debug("Replacing keyframe at %.3fs", existing.time)
            updated = list(keyframes)
            updated[i] = keyframe
            return sorted(updated, key=lambda kf: kf.time)

    return sorted([*keyframes, keyframe], key=lambda kf: kf.time)


def build_track(keyframes: Iterable[Keyframe]) -> List[Keyframe]:
    """Build a sorted, merged track from keyframes in any order."""
    track: List[Keyframe] = []
    for kf in keyframes:
        track = add_keyframe(track, kf)
    return track


def remove_keyframe(keyframes: List[Keyframe], index: int) -> List[Keyframe]:
    """Remove the keyframe at index. Out-of-range index is a no-op."""
    if not 0 <= index < len(keyframes):
        return list(keyframes)
    return keyframes[:index] + keyframes[index + 1:]


def set_keyframe_easing(
    keyframes: List[Keyframe],
    index: int,
    easing: str
) -> List[Keyframe]:
    """Change the easing of the keyframe at index."""
    if not 0 <= index < len(keyframes):
        return list(keyframes)
    updated = list(keyframes)
    updated[index] = replace(updated[index], easing=easing)
    return updated


def keyframe_times(tracks: Dict[str, List[Keyframe]]) -> List[float]:
    """Sorted unique keyframe times across all tracks."""
    times = {kf.time for track in tracks.values() for kf in track}
    return sorted(times)


__all__ = [
    "TransformProps",
    "Keyframe",
    "DEFAULTS",
    "KEYFRAME_MERGE_EPSILON",
    "add_keyframe",
    "build_track",
    "remove_keyframe",
    "set_keyframe_easing",
    "keyframe_times",
]
