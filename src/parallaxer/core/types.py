"""
Data types shared across the pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np


class PipelineState(Enum):
    """Lifecycle of a single conversion run."""

    IDLE = "idle"
    LOADING_ENGINES = "loading_engines"
    EXTRACTING_FRAMES = "extracting_frames"
    PROCESSING_FRAMES = "processing_frames"
    ENCODING_OUTPUT = "encoding_output"
    COMPLETE = "complete"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (PipelineState.COMPLETE, PipelineState.FAILED)

    @property
    def is_active(self) -> bool:
        return not self.is_terminal and self is not PipelineState.IDLE


@dataclass
class Frame:
    """
    RGBA frame with its position in the source sequence.

    Attributes:
        pixels: uint8 array of shape (height, width, 4)
        index: Zero-based position in the extracted sequence
        name: Sequence file name, shared by the left and right variants
    """

    pixels: np.ndarray
    index: int = 0
    name: str = ""

    def __post_init__(self):
        if self.pixels.ndim != 3 or self.pixels.shape[2] != 4:
            raise ValueError(f"Frame pixels must be (H, W, 4), got {self.pixels.shape}")
        if self.pixels.dtype != np.uint8:
            raise ValueError(f"Frame pixels must be uint8, got {self.pixels.dtype}")

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @classmethod
    def from_rgb(cls, rgb: np.ndarray, index: int = 0, name: str = "") -> Frame:
        """Build an opaque frame from an (H, W, 3) RGB array."""
        h, w = rgb.shape[:2]
        pixels = np.empty((h, w, 4), dtype=np.uint8)
        pixels[..., :3] = rgb
        pixels[..., 3] = 255
        return cls(pixels, index, name)
