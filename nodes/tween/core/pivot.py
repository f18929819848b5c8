"""Anchor point (rotation pivot) transform."""

import logging
from dataclasses import replace
from typing import Tuple

from .scene import RotationHandle, SceneObject, bounding_box, position_for_center, visual_center

logger = logging.getLogger(__name__)

# Anchors this close to (0.5, 0.5) reset to plain centre rotation.
PIVOT_CENTER_EPSILON = 0.01


def set_pivot(obj: SceneObject, anchor_x: float, anchor_y: float) -> SceneObject:
    """
    Move an object's rotation pivot without moving the object.

    The origin moves to (anchor_x, anchor_y) as fractions of the box and
    the stored position is recomputed so the visual centre stays put.
    Anchoring at the centre restores default centre rotation and the
    default rotation handle.

    Args:
        obj: Object to re-anchor
        anchor_x: Horizontal pivot fraction, already clamped to [0, 1]
        anchor_y: Vertical pivot fraction, already clamped to [0, 1]

    Returns:
        New SceneObject with the same on-screen box
    """
    center = visual_center(obj)

    is_center = (abs(anchor_x - 0.5) < PIVOT_CENTER_EPSILON
                 and abs(anchor_y - 0.5) < PIVOT_CENTER_EPSILON)

    if is_center:
        updated = replace(
            obj,
            origin_x=0.5,
            origin_y=0.5,
            centered_rotation=True,
            rotation_handle=RotationHandle(),
        )
    else:
        updated = replace(
            obj,
            origin_x=anchor_x,
            origin_y=anchor_y,
            centered_rotation=False,
            rotation_handle=RotationHandle(x=anchor_x - 0.5, y=anchor_y - 0.5, offset_y=0.0),
        )

    x, y = position_for_center(updated, center)
    logger.debug("Pivot of %s -> (%.3f, %.3f)", obj.id, updated.origin_x, updated.origin_y)
    return replace(updated, x=x, y=y)


def anchor_canvas_position(obj: SceneObject) -> Tuple[float, float]:
    """Scene coordinates where the anchor marker is drawn."""
    box = bounding_box(obj)
    return (box.left + box.width * obj.origin_x, box.top + box.height * obj.origin_y)


def anchor_from_point(obj: SceneObject, x: float, y: float) -> Tuple[float, float]:
    """Anchor fractions for a drag point, clamped to the bounding rectangle."""
    box = bounding_box(obj)
    if box.width <= 0 or box.height <= 0:
        return (0.5, 0.5)
    anchor_x = max(0.0, min(1.0, (x - box.left) / box.width))
    anchor_y = max(0.0, min(1.0, (y - box.top) / box.height))
    return (anchor_x, anchor_y)


__all__ = [
    "PIVOT_CENTER_EPSILON",
    "set_pivot",
    "anchor_canvas_position",
    "anchor_from_point",
]
