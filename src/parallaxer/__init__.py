"""
Parallaxer - Convert 2D videos to side-by-side 3D using monocular depth estimation.

Each frame's depth is estimated with MiDaS, smoothed, and used to shift
pixels horizontally into a synthesized right-eye view. The left and right
sequences are then stacked into a single SBS video.
"""

__version__ = "1.0.0"
__author__ = "Parallaxer Team"
__description__ = "Convert 2D videos to side-by-side stereo using depth-based parallax"

from .core.config import PipelineConfig
from .core.constants import DEFAULT_SETTINGS, NET_HEIGHT, NET_WIDTH
from .core.types import Frame, PipelineState

__all__ = [
    "PipelineConfig",
    "PipelineState",
    "Frame",
    "DEFAULT_SETTINGS",
    "NET_WIDTH",
    "NET_HEIGHT",
]
