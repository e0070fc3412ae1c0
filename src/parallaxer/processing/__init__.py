"""Video processing modules for Parallaxer.

Re-exports the processing entry points.
"""

# Orchestration modules
from .orchestration import ProcessingOrchestrator, VideoProcessor

# Frame processing modules
from .frames import (
    compute_disparity,
    frame_to_tensor,
    map_to_depth_coordinates,
    normalize_depth,
    smooth_depth,
    synthesize_right_eye,
)

# Video processing modules
from .video import FFmpegVideoCodec

__all__ = [
    # Orchestration
    "ProcessingOrchestrator",
    "VideoProcessor",
    # Frame processing
    "frame_to_tensor",
    "normalize_depth",
    "smooth_depth",
    "map_to_depth_coordinates",
    "compute_disparity",
    "synthesize_right_eye",
    # Video processing
    "FFmpegVideoCodec",
]
