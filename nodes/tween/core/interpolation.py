"""Interpolation functions for keyframe animation."""

from dataclasses import replace
from typing import List, Optional, Tuple

from .easing import apply_easing
from .keyframes import Keyframe, TransformProps


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation between two values."""
    return a + (b - a) * t


def shortest_rotation_delta(from_angle: float, to_angle: float) -> float:
    """Signed angular difference folded into [-180, 180] degrees."""
    delta = to_angle - from_angle
    while delta > 180:
        delta -= 360
    while delta < -180:
        delta += 360
    return delta


def find_surrounding(
    keyframes: List[Keyframe],
    time: float
) -> Tuple[Optional[Keyframe], Optional[Keyframe]]:
    """
    Find the keyframes bracketing a time.

    before is the last keyframe with time <= query, after the first with
    time >= query. Outside the track both clamp to the nearest end.
    """
    if len(keyframes) == 0:
        return None, None

    before = None
    after = None
    for kf in keyframes:
        if kf.time <= time:
            before = kf
        if kf.time >= time and after is None:
            after = kf

    if before is None:
        before = after
    if after is None:
        after = before

    return before, after


def interpolate(
    before: Optional[Keyframe],
    after: Optional[Keyframe],
    time: float,
    easing: str = "linear"
) -> Optional[TransformProps]:
    """
    Interpolate transform properties between two keyframes.

    Position, scale and opacity blend with the eased progress. Rotation
    follows the shortest angular path. zIndex is a step on the raw
    (un-eased) progress: the before value until the midpoint, then after.

    Returns:
        TransformProps, or None if either keyframe is missing
    """
    if before is None or after is None:
        return None

    if before.time == after.time:
        return before.properties

    raw_t = (time - before.time) / (after.time - before.time)
    t = apply_easing(raw_t, easing)

    a = before.properties
    b = after.properties
    delta = shortest_rotation_delta(a.rotation, b.rotation)

    return TransformProps(
        x=lerp(a.x, b.x, t),
        y=lerp(a.y, b.y, t),
        scale_x=lerp(a.scale_x, b.scale_x, t),
        scale_y=lerp(a.scale_y, b.scale_y, t),
        rotation=lerp(a.rotation, a.rotation + delta, t),
        opacity=lerp(a.opacity, b.opacity, t),
        z_index=a.z_index if raw_t < 0.5 else b.z_index,
    )


def interpolate_at(keyframes: List[Keyframe], time: float) -> Optional[TransformProps]:
    """
    Transform of one object's track at a time.

    The segment eases with the easing stored on its closing keyframe.
    A single keyframe freezes the object at that keyframe.
    """
    if len(keyframes) == 0:
        return None
    if len(keyframes) == 1:
        return keyframes[0].properties

    before, after = find_surrounding(keyframes, time)
    return interpolate(before, after, time, after.easing)


def normalize_keyframe_rotations(keyframes: List[Keyframe]) -> List[Keyframe]:
    """
    Unwrap stored rotations so consecutive keyframes differ by <= 180 degrees.

    A target that plain-lerps rotation between the returned keyframes plays
    the same shortest-path motion as interpolate().
    """
    if len(keyframes) < 2:
        return list(keyframes)

    result = [keyframes[0]]
    for kf in keyframes[1:]:
        prev_rotation = result[-1].properties.rotation
        rotation = prev_rotation + shortest_rotation_delta(prev_rotation, kf.properties.rotation)
        result.append(replace(kf, properties=replace(kf.properties, rotation=rotation)))
    return result


def snap_to_nearest_keyframe(
    time: float,
    keyframes: List[Keyframe],
    threshold: float = 0.1
) -> float:
    """Snap time to the closest keyframe within threshold seconds."""
    nearest = time
    min_distance = threshold
    for kf in keyframes:
        distance = abs(kf.time - time)
        if distance < min_distance:
            min_distance = distance
            nearest = kf.time
    return nearest


__all__ = [
    "lerp",
    "shortest_rotation_delta",
    "find_surrounding",
    "interpolate",
    "interpolate_at",
    "normalize_keyframe_rotations",
    "snap_to_nearest_keyframe",
]
