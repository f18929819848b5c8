"""Tween Nodes - keyframe timeline, pivots, z-order and region fill."""

import logging

logger = logging.getLogger("tween.nodes")

NODE_CLASS_MAPPINGS = {}
NODE_DISPLAY_NAME_MAPPINGS = {}

try:
    from .track import NODE_CLASS_MAPPINGS as track_nodes
    from .track import NODE_DISPLAY_NAME_MAPPINGS as track_names
    NODE_CLASS_MAPPINGS.update(track_nodes)
    NODE_DISPLAY_NAME_MAPPINGS.update(track_names)
except ImportError as e:
    logger.debug(f"Failed to load track nodes: {e}")

try:
    from .scene_nodes import NODE_CLASS_MAPPINGS as scene_nodes
    from .scene_nodes import NODE_DISPLAY_NAME_MAPPINGS as scene_names
    NODE_CLASS_MAPPINGS.update(scene_nodes)
    NODE_DISPLAY_NAME_MAPPINGS.update(scene_names)
except ImportError as e:
    logger.debug(f"Failed to load scene nodes: {e}")

try:
    from .fill import NODE_CLASS_MAPPINGS as fill_nodes
    from .fill import NODE_DISPLAY_NAME_MAPPINGS as fill_names
    NODE_CLASS_MAPPINGS.update(fill_nodes)
    NODE_DISPLAY_NAME_MAPPINGS.update(fill_names)
except ImportError as e:
    logger.debug(f"Failed to load fill nodes: {e}")

__all__ = ["NODE_CLASS_MAPPINGS", "NODE_DISPLAY_NAME_MAPPINGS"]
