"""Core timeline and fill utilities for Tween nodes."""

from .easing import (
    apply_easing,
    apply_easing_to_range,
    export_ease_name,
    list_easings,
    EASING_FUNCTIONS,
    EASING_LABELS,
)
from .keyframes import (
    TransformProps,
    Keyframe,
    DEFAULTS,
    add_keyframe,
    build_track,
    remove_keyframe,
    set_keyframe_easing,
    keyframe_times,
)
from .interpolation import (
    lerp,
    shortest_rotation_delta,
    find_surrounding,
    interpolate,
    interpolate_at,
    normalize_keyframe_rotations,
    snap_to_nearest_keyframe,
)
from .scene import (
    BoundingBox,
    RotationHandle,
    SceneObject,
    Scene,
    create_object,
    create_path_from_points,
    create_group,
    visual_center,
    bounding_box,
    apply_transform,
    extract_properties,
)
from .pivot import (
    set_pivot,
    anchor_canvas_position,
    anchor_from_point,
)
from .zorder import resolve_z_order
from .playback import (
    render_tick,
    apply_tick,
    PlaybackState,
    advance,
    step_previous_keyframe,
    step_next_keyframe,
)
from .flood_fill import (
    FillRegion,
    DEFAULT_TOLERANCE,
    hex_to_rgb,
    flood_fill,
)
from .attachment import (
    AttachResult,
    find_parent_shape,
    attach_fill,
    sync_fill_positions,
    clear_fills,
)
from .serialization import (
    parse_json,
    to_json_string,
    keyframes_from_data,
    tracks_from_data,
    scene_from_data,
    transforms_to_data,
)
from .tensor_ops import (
    image_to_raster,
    raster_to_image,
    mask_to_tensor,
)

__all__ = [
    # Easing
    "apply_easing",
    "apply_easing_to_range",
    "export_ease_name",
    "list_easings",
    "EASING_FUNCTIONS",
    "EASING_LABELS",
    # Keyframes
    "TransformProps",
    "Keyframe",
    "DEFAULTS",
    "add_keyframe",
    "build_track",
    "remove_keyframe",
    "set_keyframe_easing",
    "keyframe_times",
    # Interpolation
    "lerp",
    "shortest_rotation_delta",
    "find_surrounding",
    "interpolate",
    "interpolate_at",
    "normalize_keyframe_rotations",
    "snap_to_nearest_keyframe",
    # Scene
    "BoundingBox",
    "RotationHandle",
    "SceneObject",
    "Scene",
    "create_object",
    "create_path_from_points",
    "create_group",
    "visual_center",
    "bounding_box",
    "apply_transform",
    "extract_properties",
    # Pivot
    "set_pivot",
    "anchor_canvas_position",
    "anchor_from_point",
    # Z-order
    "resolve_z_order",
    # Playback
    "render_tick",
    "apply_tick",
    "PlaybackState",
    "advance",
    "step_previous_keyframe",
    "step_next_keyframe",
    # Flood fill
    "FillRegion",
    "DEFAULT_TOLERANCE",
    "hex_to_rgb",
    "flood_fill",
    # Attachment
    "AttachResult",
    "find_parent_shape",
    "attach_fill",
    "sync_fill_positions",
    "clear_fills",
    # Serialization
    "parse_json",
    "to_json_string",
    "keyframes_from_data",
    "tracks_from_data",
    "scene_from_data",
    "transforms_to_data",
    # Tensors
    "image_to_raster",
    "raster_to_image",
    "mask_to_tensor",
]
