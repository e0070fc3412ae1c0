"""
Right-eye synthesis by depth-driven horizontal displacement.

For every output pixel the warper looks up the (network resolution) depth
map with a nearest-neighbour index mapping, turns depth into a horizontal
shift and copies the displaced source pixel. There is no hole filling:
stretched regions repeat source pixels and compressed regions drop them.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np

from ...core.types import Frame


def map_to_depth_coordinates(
    length: int, depth_length: int
) -> np.ndarray:
    """
    Map pixel indices along one axis to depth-map indices.

    Pixel i maps to floor(i / (length - 1) * (depth_length - 1)), so the
    first and last pixels land on the first and last depth cells. An axis
    of length 1 maps to index 0.

    Args:
        length: Number of pixels along the axis of the frame
        depth_length: Number of cells along the same axis of the depth map

    Returns:
        int array of shape (length,)

    Examples:
        >>> map_to_depth_coordinates(5, 3).tolist()
        [0, 0, 1, 1, 2]
    """
    if length <= 0 or depth_length <= 0:
        raise ValueError(f"Axis lengths must be positive, got {length} and {depth_length}")
    if length == 1:
        return np.zeros(1, dtype=np.intp)

    positions = np.arange(length, dtype=np.float64) / (length - 1)
    indices = np.floor(positions * (depth_length - 1)).astype(np.intp)
    return np.clip(indices, 0, depth_length - 1)


def map_frame_to_depth(
    width: int, height: int, depth_width: int, depth_height: int
) -> Tuple[np.ndarray, np.ndarray]:
    """Return (column_indices, row_indices) into the depth map for a frame."""
    return (
        map_to_depth_coordinates(width, depth_width),
        map_to_depth_coordinates(height, depth_height),
    )


def compute_disparity(depth: np.ndarray, strength_px: float) -> np.ndarray:
    """
    Convert normalized depth into horizontal displacement in pixels.

    Larger depth values are treated as nearer content and shift less:
    disp = (1 - d) * strength_px, so d = 1 gives no shift at all.
    """
    return (1.0 - np.asarray(depth, dtype=np.float64)) * float(strength_px)


def source_columns(disparity: np.ndarray, width: int) -> np.ndarray:
    """
    Source column for every destination pixel.

    Adds the displacement to the destination column, clamps into the frame
    and rounds half up.

    Args:
        disparity: float array (height, width) of shifts
        width: Frame width

    Returns:
        int array (height, width) of source columns
    """
    columns = np.arange(width, dtype=np.float64)[np.newaxis, :]
    shifted = np.clip(columns + disparity, 0, width - 1)
    return np.floor(shifted + 0.5).astype(np.intp)


def synthesize_right_eye(left: Frame, depth: np.ndarray, strength_px: float) -> Frame:
    """
    Synthesize the right-eye frame for a left-eye frame.

    Args:
        left: Left-eye frame at native resolution
        depth: Smoothed, normalized depth map (depth_height, depth_width)
        strength_px: Maximum displacement in pixels

    Returns:
        Right-eye frame with the same size, index and name, fully opaque
    """
    depth = np.asarray(depth)
    if depth.ndim != 2:
        raise ValueError(f"Depth map must be 2D, got shape {depth.shape}")

    w, h = left.width, left.height
    depth_h, depth_w = depth.shape

    dx, dy = map_frame_to_depth(w, h, depth_w, depth_h)
    sampled_depth = depth[dy[:, np.newaxis], dx[np.newaxis, :]]

    disparity = compute_disparity(sampled_depth, strength_px)
    sx = source_columns(disparity, w)
    rows = np.arange(h, dtype=np.intp)[:, np.newaxis]

    right = np.empty_like(left.pixels)
    right[..., :3] = left.pixels[rows, sx, :3]
    right[..., 3] = 255

    return Frame(right, index=left.index, name=left.name)
