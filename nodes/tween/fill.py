"""Tween Flood Fill - paint-bucket fill over a rendered frame."""

import logging

import numpy as np
import torch

from .core import (
    DEFAULT_TOLERANCE,
    attach_fill,
    flood_fill,
    hex_to_rgb,
    image_to_raster,
    mask_to_tensor,
    parse_json,
    raster_to_image,
    scene_from_data,
    to_json_string,
)

logger = logging.getLogger(__name__)


class TweenFloodFill:
    """Fill the enclosed region under a point and return it as a trimmed layer."""
    COLOR = "#1a1a1a"
    BGCOLOR = "#2d2d2d"

    CATEGORY = "Tween/Fill"
    FUNCTION = "fill"
    RETURN_TYPES = ("IMAGE", "MASK", "STRING", "STRING")
    RETURN_NAMES = ("fill_image", "fill_mask", "region_json", "scene_json")

    @classmethod
    def INPUT_TYPES(cls):
        return {
            "required": {
                "image": ("IMAGE",),
                "x": ("INT", {"default": 0, "min": 0, "max": 16384}),
                "y": ("INT", {"default": 0, "min": 0, "max": 16384}),
                "fill_color": ("STRING", {"default": "#ff0000"}),
                "tolerance": ("INT", {"default": DEFAULT_TOLERANCE, "min": 0, "max": 765}),
            },
            "optional": {
                "scene_json": ("STRING", {"multiline": True, "default": ""}),
            }
        }

    def _checked_color(self, fill_color: str) -> str:
        try:
            hex_to_rgb(fill_color)
            return "#" + fill_color.lstrip("#").lower()
        except ValueError as e:
            logger.warning("[Tween] Invalid hex color '%s', using black. Error: %s", fill_color, e)
            return "#000000"

    def fill(self, image, x, y, fill_color, tolerance, scene_json=""):
        """
        Flood fill the first image of the batch.

        With a scene, the region is attached to the smallest shape that
        contains it; without a containing shape it is refused with a warning.
        """
        if image is None or not isinstance(image, torch.Tensor):
            raise ValueError("image must be a valid torch.Tensor")

        if len(image.shape) != 4:
            raise ValueError(f"image must be 4D tensor (batch, height, width, channels), got shape {image.shape}")

        if image.shape[0] == 0:
            raise ValueError("image batch cannot be empty")

        tolerance = max(0, min(765, int(tolerance)))
        fill_color = self._checked_color(fill_color)

        raster = image_to_raster(image)
        region = flood_fill(raster, x, y, fill_color, tolerance)

        scene = None
        if scene_json and scene_json.strip():
            scene = scene_from_data(parse_json(scene_json, "scene"))

        if region is not None and scene is not None:
            result = attach_fill(scene, region)
            if result.region is None:
                logger.warning("[Tween] %s", result.warning)
            region = result.region
            scene = result.scene

        if region is None:
            logger.debug("[Tween] Fill at (%s, %s) was a no-op", x, y)
            empty = torch.zeros(1, 1, 1, 3, dtype=torch.float32)
            return (empty, torch.zeros(1, 1, 1), "null", to_json_string(scene) if scene is not None else "")

        fill_image = raster_to_image(np.ascontiguousarray(region.image[..., :3]))
        fill_mask = mask_to_tensor(region.mask)

        return (
            fill_image,
            fill_mask,
            to_json_string(region),
            to_json_string(scene) if scene is not None else "",
        )


NODE_CLASS_MAPPINGS = {
    "Tween_FloodFill": TweenFloodFill,
}

NODE_DISPLAY_NAME_MAPPINGS = {
    "Tween_FloodFill": "◊ Tween Flood Fill",
}
