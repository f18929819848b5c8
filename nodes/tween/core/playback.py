"""Per-tick scene evaluation and the playback clock."""

from dataclasses import dataclass, replace
from typing import Callable, Dict, List, Optional, Tuple

from .attachment import sync_fill_positions
from .interpolation import interpolate_at
from .keyframes import Keyframe, TransformProps, keyframe_times
from .scene import Scene
from .zorder import resolve_z_order


def render_tick(
    time: float,
    objects: Dict[str, object],
    tracks: Dict[str, List[Keyframe]]
) -> Dict[str, TransformProps]:
    """
    Transforms for every animated object at a time.

    Objects without keyframes are left out; they keep whatever state
    they already have. Each object reads only its own track.
    """
    transforms = {}
    for object_id in objects:
        props = interpolate_at(tracks.get(object_id, []), time)
        if props is not None:
            transforms[object_id] = props
    return transforms


def apply_tick(
    scene: Scene,
    time: float,
    tracks: Dict[str, List[Keyframe]],
    sync_fills: Optional[Callable[[Scene], Scene]] = sync_fill_positions
) -> Tuple[Scene, Dict[str, TransformProps]]:
    """
    Evaluate one tick.

    All transforms are computed and applied first, then stacking is
    resolved from the interpolated zIndex values, then attached fills
    follow their parents. Pass sync_fills=None to skip the fill pass.

    Returns:
        (updated scene, transforms applied this tick)
    """
    transforms = render_tick(time, scene.objects, tracks)

    for object_id, props in transforms.items():
        scene = scene.set_transform(object_id, props)

    z_values = {object_id: props.z_index for object_id, props in transforms.items()}
    scene = replace(scene, order=tuple(resolve_z_order(scene.order, z_values)))

    if sync_fills is not None:
        scene = sync_fills(scene)
    return scene, transforms


@dataclass(frozen=True)
class PlaybackState:
    """Timeline transport state."""
    current_time: float = 0.0
    duration: float = 10.0
    is_playing: bool = False
    loop: bool = False


def play(state: PlaybackState) -> PlaybackState:
    return replace(state, is_playing=True)


def pause(state: PlaybackState) -> PlaybackState:
    return replace(state, is_playing=False)


def stop(state: PlaybackState) -> PlaybackState:
    return replace(state, is_playing=False, current_time=0.0)


def advance(state: PlaybackState, dt: float) -> PlaybackState:
    """
    Move the playhead forward by dt seconds.

    At the end of the timeline a looping clock wraps to 0, otherwise it
    parks on duration and stops.
    """
    if not state.is_playing:
        return state

    elapsed = state.current_time + dt
    if elapsed >= state.duration:
        if state.loop:
            return replace(state, current_time=0.0)
        return replace(state, current_time=state.duration, is_playing=False)
    return replace(state, current_time=elapsed)


def step_previous_keyframe(time: float, tracks: Dict[str, List[Keyframe]]) -> float:
    """Latest keyframe time before time, or 0 if there is none."""
    previous = [t for t in keyframe_times(tracks) if t < time]
    return previous[-1] if previous else 0.0


def step_next_keyframe(time: float, tracks: Dict[str, List[Keyframe]]) -> float:
    """Earliest keyframe time after time, or time itself if there is none."""
    following = [t for t in keyframe_times(tracks) if t > time]
    return following[0] if following else time


__all__ = [
    "render_tick",
    "apply_tick",
    "PlaybackState",
    "play",
    "pause",
    "stop",
    "advance",
    "step_previous_keyframe",
    "step_next_keyframe",
]
