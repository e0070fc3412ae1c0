"""
Per-run pipeline configuration.

Values are coerced and clamped, never rejected: a non-numeric value falls
back to its default and anything out of range snaps to the nearest bound.
"""

from __future__ import annotations

import numbers
import re
from dataclasses import asdict, dataclass
from typing import Any, Dict

from .constants import (
    DEFAULT_SETTINGS,
    FPS_RANGE,
    MAX_FRAMES_RANGE,
    MAX_WIDTH_RANGE,
    STRENGTH_RANGE,
)

_LEADING_INT = re.compile(r"\s*[+-]?\d+")

_FIELD_RANGES = {
    "target_fps": FPS_RANGE,
    "max_frame_width": MAX_WIDTH_RANGE,
    "disparity_strength_px": STRENGTH_RANGE,
    "max_frames": MAX_FRAMES_RANGE,
}


def clamp(value, lo, hi):
    """Clamp value into [lo, hi]."""
    return max(lo, min(hi, value))


def coerce_int(value: Any, default: int) -> int:
    """
    Parse an integer the lenient way.

    Accepts any real number, numpy scalars included, and numeric strings
    (a leading integer is enough, so "12px" gives 12). Anything else, and
    zero, returns the default.

    Examples:
        >>> coerce_int("24", 8)
        24
        >>> coerce_int("abc", 8)
        8
    """
    if isinstance(value, bool):
        return default
    if isinstance(value, numbers.Real):
        if value != value or value in (float("inf"), float("-inf")):  # NaN / inf
            return default
        parsed = int(value)
    elif isinstance(value, str):
        match = _LEADING_INT.match(value)
        if not match:
            return default
        parsed = int(match.group())
    else:
        return default

    return parsed or default


@dataclass(frozen=True)
class PipelineConfig:
    """
    Immutable parameters for one conversion run.

    Every field is coerced and clamped on construction, so an instance is
    always valid no matter what it was built from.
    """

    target_fps: int = DEFAULT_SETTINGS["target_fps"]
    max_frame_width: int = DEFAULT_SETTINGS["max_frame_width"]
    disparity_strength_px: int = DEFAULT_SETTINGS["disparity_strength_px"]
    max_frames: int = DEFAULT_SETTINGS["max_frames"]

    def __post_init__(self):
        for name, (lo, hi) in _FIELD_RANGES.items():
            value = coerce_int(getattr(self, name), DEFAULT_SETTINGS[name])
            object.__setattr__(self, name, clamp(value, lo, hi))

    @classmethod
    def from_values(
        cls,
        target_fps: Any = None,
        max_frame_width: Any = None,
        disparity_strength_px: Any = None,
        max_frames: Any = None,
    ) -> PipelineConfig:
        """
        Build a config from raw user input.

        Args:
            target_fps: Extraction/encode frame rate, clamped to [1, 30]
            max_frame_width: Maximum extracted frame width, clamped to [240, 1920]
            disparity_strength_px: Maximum horizontal shift, clamped to [1, 40]
            max_frames: Frame budget, clamped to [1, 9999]

        Returns:
            Validated PipelineConfig
        """
        return cls(
            target_fps=target_fps,
            max_frame_width=max_frame_width,
            disparity_strength_px=disparity_strength_px,
            max_frames=max_frames,
        )

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)

    def describe(self) -> str:
        return (
            f"fps={self.target_fps}, maxW={self.max_frame_width}, "
            f"strength={self.disparity_strength_px}px, maxFrames={self.max_frames}"
        )
