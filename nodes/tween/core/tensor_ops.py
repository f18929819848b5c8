"""Conversion between ComfyUI tensors and uint8 rasters."""
import numpy as np
import torch


def ensure_4d(tensor: torch.Tensor) -> torch.Tensor:
    """Ensure tensor is 4D for batch operations."""
    while tensor.dim() < 4:
        tensor = tensor.unsqueeze(0)
    return tensor


def image_to_raster(image: torch.Tensor, index: int = 0) -> np.ndarray:
    """ComfyUI IMAGE (B, H, W, C) [0-1] -> (H, W, C) uint8 for one batch item."""
    image = ensure_4d(image)
    img_np = image[index].detach().cpu().numpy()
    return (np.clip(img_np, 0, 1) * 255).round().astype(np.uint8)


def raster_to_image(raster: np.ndarray) -> torch.Tensor:
    """(H, W, C) uint8 -> ComfyUI IMAGE (1, H, W, C) float32 [0-1]."""
    return torch.from_numpy(raster.astype(np.float32) / 255.0).unsqueeze(0)


def mask_to_tensor(mask: np.ndarray) -> torch.Tensor:
    """(H, W) bool -> ComfyUI MASK (1, H, W) float32."""
    return torch.from_numpy(mask.astype(np.float32)).unsqueeze(0)


__all__ = [
    "ensure_4d",
    "image_to_raster",
    "raster_to_image",
    "mask_to_tensor",
]
