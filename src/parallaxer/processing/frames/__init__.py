"""Frame processing modules.

Per-frame operations: tensor preparation, depth post-processing and
right-eye synthesis.
"""

from .depth_processor import normalize_depth, process_depth, smooth_depth
from .preprocessor import frame_to_tensor
from .stereo_warper import (
    compute_disparity,
    map_to_depth_coordinates,
    synthesize_right_eye,
)

__all__ = [
    "frame_to_tensor",
    "normalize_depth",
    "smooth_depth",
    "process_depth",
    "map_to_depth_coordinates",
    "compute_disparity",
    "synthesize_right_eye",
]
