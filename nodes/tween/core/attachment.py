"""Attach fill regions to the shapes that contain them and keep them in place."""

import logging
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .flood_fill import FillRegion
from .scene import Scene, SceneObject, visual_center

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class AttachResult:
    """Outcome of attaching a fill: the new scene plus the region or a warning."""
    scene: Scene
    region: Optional[FillRegion] = None
    warning: Optional[str] = None


def find_parent_shape(scene: Scene, point: Tuple[float, float]) -> Optional[SceneObject]:
    """Smallest object whose bounding box contains point, or None."""
    candidates = scene.objects_containing(point[0], point[1])
    return candidates[0] if candidates else None


def attach_fill(scene: Scene, region: FillRegion) -> AttachResult:
    """
    Store a fill as a child of the shape that most tightly contains it.

    The fill keeps its offset from the parent's visual centre so it can
    follow the parent through drags and playback. A fill with no
    containing shape is refused with a warning instead of being added
    as an orphan.
    """
    center = region.bounding_box.center
    parent = find_parent_shape(scene, center)
    if parent is None:
        warning = (
            f"No shape contains the filled area at ({center[0]:.0f}, {center[1]:.0f}); "
            "draw a closed shape around it first"
        )
        logger.debug(warning)
        return AttachResult(scene=scene, warning=warning)

    parent_x, parent_y = visual_center(parent)
    attached = replace(
        region,
        source_shape_id=parent.id,
        relative_offset=(region.left - parent_x, region.top - parent_y),
    )
    return AttachResult(scene=replace(scene, fills=scene.fills + (attached,)), region=attached)


def sync_fill_positions(scene: Scene) -> Scene:
    """
    Move every attached fill to its parent's position plus its offset.

    Runs as a single pass over all fills. Fills whose parent no longer
    exists are dropped with it.
    """
    fills = []
    for region in scene.fills:
        parent = scene.get(region.source_shape_id) if region.source_shape_id else None
        if parent is None or region.relative_offset is None:
            continue
        parent_x, parent_y = visual_center(parent)
        fills.append(region.moved_to(parent_x + region.relative_offset[0],
                                     parent_y + region.relative_offset[1]))
    return replace(scene, fills=tuple(fills))


def clear_fills(scene: Scene, parent_id: Optional[str] = None) -> Scene:
    """Remove all fills, or only those attached to parent_id."""
    if parent_id is None:
        return replace(scene, fills=())
    return replace(scene, fills=tuple(f for f in scene.fills if f.source_shape_id != parent_id))


__all__ = [
    "AttachResult",
    "find_parent_shape",
    "attach_fill",
    "sync_fill_positions",
    "clear_fills",
]
