"""
Depth map post-processing: normalization and smoothing.

Both operations are pure and work on numpy arrays so the orchestrator can
chain them directly on the raw inference output.
"""

from __future__ import annotations

import numpy as np


def normalize_depth(depth: np.ndarray) -> np.ndarray:
    """
    Rescale a raw depth buffer to the 0-1 range.

    A constant buffer has no range; it is treated as range 1 so every
    value maps to 0.

    Args:
        depth: Raw depth values of any shape

    Returns:
        float32 array of the same shape with values in [0, 1]
    """
    values = np.asarray(depth, dtype=np.float32)
    if values.size == 0:
        raise ValueError("Cannot normalize an empty depth buffer")

    d_min = float(values.min())
    d_max = float(values.max())
    d_range = (d_max - d_min) or 1.0

    normalized = (values - d_min) / d_range
    return np.clip(normalized, 0.0, 1.0).astype(np.float32)


def smooth_depth(depth: np.ndarray) -> np.ndarray:
    """
    Apply one 3x3 box mean to a normalized depth map.

    The window is clipped at the borders: each cell averages only the
    neighbours that exist (4 at a corner, 6 along an edge, 9 inside).

    Args:
        depth: 2D float array (height, width)

    Returns:
        float32 array of the same shape
    """
    values = np.asarray(depth, dtype=np.float64)
    if values.ndim != 2:
        raise ValueError(f"Depth map must be 2D, got shape {values.shape}")

    h, w = values.shape
    padded = np.pad(values, 1, mode="constant", constant_values=0.0)
    valid = np.pad(np.ones_like(values), 1, mode="constant", constant_values=0.0)

    total = np.zeros_like(values)
    count = np.zeros_like(values)
    for dy in range(3):
        for dx in range(3):
            total += padded[dy : dy + h, dx : dx + w]
            count += valid[dy : dy + h, dx : dx + w]

    return (total / count).astype(np.float32)


def process_depth(raw_depth: np.ndarray, net_width: int, net_height: int) -> np.ndarray:
    """
    Normalize then smooth a flat inference buffer into a (net_height, net_width) map.
    """
    depth = normalize_depth(np.asarray(raw_depth).reshape(net_height, net_width))
    return smooth_depth(depth)
