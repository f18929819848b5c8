"""Tests for nodes.tween.core.tensor_ops -- ComfyUI tensor <-> raster conversion."""

import sys
import os
import numpy as np
import pytest
import torch

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from nodes.tween.core.tensor_ops import ensure_4d, image_to_raster, mask_to_tensor, raster_to_image


# ---------------------------------------------------------------------------
# ensure_4d
# ---------------------------------------------------------------------------

class TestEnsure4D:

    def test_3d_gets_batch_dim(self):
        assert ensure_4d(torch.zeros(8, 8, 3)).shape == (1, 8, 8, 3)

    def test_4d_unchanged(self):
        src = torch.zeros(2, 8, 8, 3)
        assert ensure_4d(src) is src


# ---------------------------------------------------------------------------
# image_to_raster / raster_to_image
# ---------------------------------------------------------------------------

class TestImageToRaster:
    """IMAGE [B, H, W, C] float -> (H, W, C) uint8."""

    def test_shape_and_dtype(self):
        raster = image_to_raster(torch.rand(2, 6, 9, 3))
        assert raster.shape == (6, 9, 3)
        assert raster.dtype == np.uint8

    def test_picks_batch_index(self):
        image = torch.zeros(2, 4, 4, 3)
        image[1] = 1.0
        assert image_to_raster(image, index=1).min() == 255
        assert image_to_raster(image, index=0).max() == 0

    def test_clamps_out_of_range(self):
        image = torch.tensor([[[[-0.5, 2.0, 0.5]]]])
        assert image_to_raster(image).tolist() == [[[0, 255, 128]]]

    def test_rounds_to_nearest(self):
        image = torch.full((1, 1, 1, 3), 100.4 / 255.0)
        assert image_to_raster(image)[0, 0, 0] == 100

    def test_accepts_unbatched(self):
        assert image_to_raster(torch.zeros(5, 7, 3)).shape == (5, 7, 3)


class TestRasterToImage:

    def test_shape_and_range(self):
        raster = np.full((4, 5, 3), 255, dtype=np.uint8)
        image = raster_to_image(raster)
        assert image.shape == (1, 4, 5, 3)
        assert image.dtype == torch.float32
        assert image.max().item() == pytest.approx(1.0)

    def test_inverse_of_image_to_raster(self):
        raster = np.arange(48, dtype=np.uint8).reshape(4, 4, 3)
        np.testing.assert_array_equal(image_to_raster(raster_to_image(raster)), raster)


class TestMaskToTensor:

    def test_bool_mask(self):
        mask = np.array([[True, False], [False, True]])
        tensor = mask_to_tensor(mask)
        assert tensor.shape == (1, 2, 2)
        assert tensor.dtype == torch.float32
        assert tensor.sum().item() == 2.0
