"""Shared fixtures for ComfyUI-Tween-Nodes test suite."""

import sys
import os
import pytest
import torch
import numpy as np
from dataclasses import replace

# Ensure the package root is importable
PACKAGE_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PACKAGE_ROOT not in sys.path:
    sys.path.insert(0, PACKAGE_ROOT)

from nodes.tween.core.keyframes import Keyframe, TransformProps
from nodes.tween.core.scene import Scene, create_object


WHITE = (255, 255, 255, 255)
BLACK = (0, 0, 0, 255)


# ---------------------------------------------------------------------------
# Raster fixtures (H, W, 4) uint8 RGBA
# ---------------------------------------------------------------------------

def make_enclosed_square(size=40, left=10, top=10, inner=10):
    """
    White canvas with a 1px black square outline.

    The outline encloses an inner x inner white area whose top-left pixel
    is (left, top).
    """
    raster = np.zeros((size, size, 4), dtype=np.uint8)
    raster[:] = WHITE
    x0, y0 = left - 1, top - 1
    x1, y1 = left + inner, top + inner
    raster[y0, x0:x1 + 1] = BLACK
    raster[y1, x0:x1 + 1] = BLACK
    raster[y0:y1 + 1, x0] = BLACK
    raster[y0:y1 + 1, x1] = BLACK
    return raster


@pytest.fixture
def enclosed_square():
    """40x40 white canvas, black outline around a 10x10 area at (10, 10)."""
    return make_enclosed_square()


@pytest.fixture
def stray_pixel_raster():
    """Black 20x20 canvas with an isolated 3-pixel white speck at (5, 5)."""
    raster = np.zeros((20, 20, 4), dtype=np.uint8)
    raster[:] = BLACK
    raster[5, 5] = WHITE
    raster[5, 6] = WHITE
    raster[6, 5] = WHITE
    return raster


@pytest.fixture
def enclosed_square_image(enclosed_square):
    """Enclosed square as a ComfyUI IMAGE [1, 40, 40, 3]."""
    rgb = enclosed_square[..., :3].astype(np.float32) / 255.0
    return torch.from_numpy(rgb).unsqueeze(0)


# ---------------------------------------------------------------------------
# Timeline fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def wraparound_track():
    """Two keyframes whose rotation crosses 360 (350 -> 10)."""
    return [
        Keyframe(time=0.0, properties=TransformProps(x=0.0, rotation=350.0, z_index=0)),
        Keyframe(time=2.0, properties=TransformProps(x=100.0, rotation=10.0, z_index=1)),
    ]


@pytest.fixture
def rect():
    """100x100 rectangle centred at (100, 100)."""
    return create_object("rectangle", "rect_1", name="Rectangle 1")


@pytest.fixture
def simple_scene():
    """Big rectangle, a small circle inside it, and a far-away text object."""
    big = create_object("rectangle", "big")
    big = replace(big, width=300.0, height=300.0, x=150.0, y=150.0)
    small = create_object("circle", "small")
    text = create_object("text", "label", text="Hello")
    text = replace(text, x=800.0, y=600.0)
    scene = Scene()
    for obj in (big, small, text):
        scene = scene.add_object(obj)
    return scene
