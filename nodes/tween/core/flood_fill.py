"""
Paint-bucket region fill over a rendered raster.

Scanline (span) flood fill: each popped seed fills one contiguous
vertical run and seeds the neighbouring columns once per span, so the
stack grows with the number of spans rather than the number of pixels.
"""

import base64
import io
import logging
import math
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Tuple

import numpy as np
from PIL import Image

from .scene import BoundingBox

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE = 40
MAX_TOLERANCE = 765

# Regions smaller than this are treated as a stray click.
MIN_FILL_PIXELS = 10

# Target pixel counts as "already this colour" below this per-channel difference.
SAME_COLOR_THRESHOLD = 5
OPAQUE_ALPHA = 240


@dataclass(frozen=True, eq=False)
class FillMask:
    """Result of the scanline pass over the full raster."""
    mask: np.ndarray
    min_x: int
    min_y: int
    max_x: int
    max_y: int
    pixel_count: int


@dataclass(frozen=True, eq=False)
class FillRegion:
    """
    A colour-filled, trimmed sub-image.

    left/top are raster coordinates of the crop. Once attached to a shape,
    source_shape_id names the parent and relative_offset is the crop's
    top-left relative to the parent's visual centre.
    """
    left: float
    top: float
    width: int
    height: int
    fill_color: str
    rgb: Tuple[int, int, int]
    pixel_count: int
    image: np.ndarray
    mask: np.ndarray
    data_url: str
    source_shape_id: Optional[str] = None
    relative_offset: Optional[Tuple[float, float]] = None

    @property
    def bounding_box(self) -> BoundingBox:
        return BoundingBox(left=self.left, top=self.top, width=self.width, height=self.height)

    def moved_to(self, left: float, top: float) -> "FillRegion":
        return replace(self, left=left, top=top)

    def to_dict(self) -> Dict[str, Any]:
        offset = None
        if self.relative_offset is not None:
            offset = {"x": self.relative_offset[0], "y": self.relative_offset[1]}
        return {
            "left": self.left,
            "top": self.top,
            "width": self.width,
            "height": self.height,
            "fillColor": self.fill_color,
            "pixelCount": self.pixel_count,
            "dataURL": self.data_url,
            "sourceShapeId": self.source_shape_id,
            "relativeOffset": offset,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FillRegion":
        """Rebuild a region, decoding its pixels from the PNG payload."""
        image = decode_png_data_url(data["dataURL"])
        offset = data.get("relativeOffset")
        return cls(
            left=float(data["left"]),
            top=float(data["top"]),
            width=int(data["width"]),
            height=int(data["height"]),
            fill_color=data["fillColor"],
            rgb=hex_to_rgb(data["fillColor"]),
            pixel_count=int(data.get("pixelCount", int((image[..., 3] > 0).sum()))),
            image=image,
            mask=image[..., 3] > 0,
            data_url=data["dataURL"],
            source_shape_id=data.get("sourceShapeId"),
            relative_offset=(float(offset["x"]), float(offset["y"])) if offset else None,
        )


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Convert '#rrggbb' to an (r, g, b) tuple of 0-255 ints."""
    clean = hex_color.lstrip("#")
    if len(clean) != 6:
        raise ValueError(f"Invalid hex color length: {len(clean)}")
    return (int(clean[0:2], 16), int(clean[2:4], 16), int(clean[4:6], 16))


def rgb_to_hex(rgb: Tuple[int, int, int]) -> str:
    return "#{:02x}{:02x}{:02x}".format(*rgb)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def ensure_rgba(raster: np.ndarray) -> np.ndarray:
    """Return raster as (H, W, 4) uint8, adding an opaque alpha channel if needed."""
    if raster.ndim != 3 or raster.shape[2] not in (3, 4):
        raise ValueError(f"raster must be (H, W, 3) or (H, W, 4), got shape {raster.shape}")
    if raster.shape[2] == 4:
        return raster.astype(np.uint8, copy=False)
    alpha = np.full(raster.shape[:2] + (1,), 255, dtype=np.uint8)
    return np.concatenate([raster.astype(np.uint8, copy=False), alpha], axis=2)


def scanline_fill(
    raster: np.ndarray,
    start_x: float,
    start_y: float,
    fill_rgb: Tuple[int, int, int],
    tolerance: int = DEFAULT_TOLERANCE
) -> Optional[FillMask]:
    """
    Find the 4-connected region around a point.

    A pixel matches when the summed absolute RGBA difference from the
    clicked pixel is <= tolerance.

    Args:
        raster: (H, W, 4) uint8 RGBA bitmap
        start_x: Click x, clamped and rounded into the raster
        start_y: Click y, clamped and rounded into the raster
        fill_rgb: Colour that will be painted
        tolerance: Colour distance threshold (0-765)

    Returns:
        FillMask, or None when the clicked pixel is already the fill colour
        or the region is smaller than MIN_FILL_PIXELS
    """
    height, width = raster.shape[:2]

    start_x = max(0, min(width - 1, _round_half_up(start_x)))
    start_y = max(0, min(height - 1, _round_half_up(start_y)))

    target = raster[start_y, start_x].astype(np.int32)
    target_r, target_g, target_b, target_a = (int(v) for v in target)

    if (abs(target_r - fill_rgb[0]) < SAME_COLOR_THRESHOLD
            and abs(target_g - fill_rgb[1]) < SAME_COLOR_THRESHOLD
            and abs(target_b - fill_rgb[2]) < SAME_COLOR_THRESHOLD
            and target_a > OPAQUE_ALPHA):
        logger.debug("Fill skipped: target pixel already matches fill colour")
        return None

    diff = np.abs(raster.astype(np.int32) - target).sum(axis=2)
    matching = (diff <= tolerance).tolist()
    filled = [bytearray(width) for _ in range(height)]

    def is_open(x: int, y: int) -> bool:
        return matching[y][x] and not filled[y][x]

    pixel_count = 0
    min_x, max_x, min_y, max_y = width, 0, height, 0

    stack = [(start_x, start_y)]

    while stack:
        x, y = stack.pop()

        while y >= 0 and is_open(x, y):
            y -= 1
        y += 1

        span_left = False
        span_right = False

        while y < height and is_open(x, y):
            filled[y][x] = 1
            pixel_count += 1

            if x < min_x:
                min_x = x
            if x > max_x:
                max_x = x
            if y < min_y:
                min_y = y
            if y > max_y:
                max_y = y

            left_open = x > 0 and is_open(x - 1, y)
            if not span_left and left_open:
                stack.append((x - 1, y))
                span_left = True
            elif span_left and not left_open:
                span_left = False

            right_open = x < width - 1 and is_open(x + 1, y)
            if not span_right and right_open:
                stack.append((x + 1, y))
                span_right = True
            elif span_right and not right_open:
                span_right = False

            y += 1

    if pixel_count < MIN_FILL_PIXELS:
        logger.debug("Fill skipped: region of %d pixels is below threshold", pixel_count)
        return None

    mask = np.frombuffer(b"".join(filled), dtype=np.uint8).reshape(height, width).astype(bool)
    return FillMask(mask=mask, min_x=min_x, min_y=min_y, max_x=max_x, max_y=max_y,
                    pixel_count=pixel_count)


def create_fill_image(fill: FillMask, fill_rgb: Tuple[int, int, int]) -> np.ndarray:
    """Crop the fill to its bounding box: fill colour where filled, transparent elsewhere."""
    crop = fill.mask[fill.min_y:fill.max_y + 1, fill.min_x:fill.max_x + 1]
    image = np.zeros(crop.shape + (4,), dtype=np.uint8)
    image[crop] = (fill_rgb[0], fill_rgb[1], fill_rgb[2], 255)
    return image


def encode_png_data_url(image: np.ndarray) -> str:
    """Encode an RGBA array as a 'data:image/png;base64,...' URL."""
    buffer = io.BytesIO()
    Image.fromarray(image).save(buffer, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buffer.getvalue()).decode("ascii")


def decode_png_data_url(data_url: str) -> np.ndarray:
    """Decode a PNG data URL back to an (H, W, 4) uint8 array."""
    payload = data_url.split(",", 1)[-1]
    with Image.open(io.BytesIO(base64.b64decode(payload))) as img:
        return np.array(img.convert("RGBA"))


def flood_fill(
    raster: np.ndarray,
    click_x: float,
    click_y: float,
    fill_color: str,
    tolerance: int = DEFAULT_TOLERANCE
) -> Optional[FillRegion]:
    """
    Paint-bucket fill from a click point.

    Args:
        raster: (H, W, 3|4) uint8 bitmap of the scene without selection chrome
        click_x: Click x in scene coordinates
        click_y: Click y in scene coordinates
        fill_color: Hex colour, e.g. '#ff0000'
        tolerance: Colour distance threshold (0-765)

    Returns:
        FillRegion cropped to the filled pixels, or None for a no-op fill
    """
    fill_rgb = hex_to_rgb(fill_color)
    rgba = ensure_rgba(raster)

    result = scanline_fill(rgba, click_x, click_y, fill_rgb, tolerance)
    if result is None:
        return None

    image = create_fill_image(result, fill_rgb)
    return FillRegion(
        left=float(result.min_x),
        top=float(result.min_y),
        width=result.max_x - result.min_x + 1,
        height=result.max_y - result.min_y + 1,
        fill_color=fill_color,
        rgb=fill_rgb,
        pixel_count=result.pixel_count,
        image=image,
        mask=image[..., 3] > 0,
        data_url=encode_png_data_url(image),
    )


__all__ = [
    "DEFAULT_TOLERANCE",
    "MAX_TOLERANCE",
    "MIN_FILL_PIXELS",
    "FillMask",
    "FillRegion",
    "hex_to_rgb",
    "rgb_to_hex",
    "ensure_rgba",
    "scanline_fill",
    "create_fill_image",
    "encode_png_data_url",
    "decode_png_data_url",
    "flood_fill",
]
