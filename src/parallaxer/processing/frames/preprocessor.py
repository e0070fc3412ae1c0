"""
Frame to depth-network tensor conversion.

Resamples a frame to the fixed network resolution and standardizes each
RGB channel with the ImageNet statistics the MiDaS models were trained on.
"""

from __future__ import annotations

import cv2
import numpy as np

from ...core.constants import NET_HEIGHT, NET_WIDTH, NORMALIZATION_MEAN, NORMALIZATION_STD
from ...core.types import Frame

_MEAN = np.asarray(NORMALIZATION_MEAN, dtype=np.float32)
_STD = np.asarray(NORMALIZATION_STD, dtype=np.float32)


def resize_to_network(rgb: np.ndarray, net_width: int = NET_WIDTH, net_height: int = NET_HEIGHT) -> np.ndarray:
    """
    Resample an (H, W, C) image to exactly (net_height, net_width).

    Area interpolation is used when shrinking, bilinear when enlarging.
    """
    h, w = rgb.shape[:2]
    if h <= 0 or w <= 0:
        raise ValueError(f"Frame dimensions must be positive, got {w}x{h}")
    if (w, h) == (net_width, net_height):
        return rgb

    if net_width < w or net_height < h:
        interpolation = cv2.INTER_AREA
    else:
        interpolation = cv2.INTER_LINEAR
    return cv2.resize(rgb, (net_width, net_height), interpolation=interpolation)


def standardize(rgb: np.ndarray) -> np.ndarray:
    """
    Convert uint8 RGB samples to standardized, channel-major float32.

    Args:
        rgb: uint8 array of shape (H, W, 3)

    Returns:
        float32 array of shape (3, H, W) holding (sample/255 - mean_c) / std_c
    """
    scaled = rgb.astype(np.float32) / 255.0
    standardized = (scaled - _MEAN) / _STD
    return np.ascontiguousarray(standardized.transpose(2, 0, 1), dtype=np.float32)


def frame_to_tensor(
    frame: Frame, net_width: int = NET_WIDTH, net_height: int = NET_HEIGHT
) -> np.ndarray:
    """
    Build the depth-network input tensor for a frame.

    Args:
        frame: Decoded RGBA frame
        net_width: Network input width
        net_height: Network input height

    Returns:
        float32 tensor of shape (3, net_height, net_width); R plane first,
        then G, then B, each row-major
    """
    if frame.width <= 0 or frame.height <= 0:
        raise ValueError(f"Frame dimensions must be positive, got {frame.width}x{frame.height}")

    rgb = np.ascontiguousarray(frame.pixels[..., :3])
    resized = resize_to_network(rgb, net_width, net_height)
    return standardize(resized)
