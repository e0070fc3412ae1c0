"""
FFmpeg-backed frame extraction and side-by-side encoding.

The codec only deals in paths and exit codes; interpreting a non-zero
code is up to the caller.
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable, List, Optional

from ...core.constants import (
    ERROR_MESSAGES,
    VIDEO_CODEC,
    VIDEO_CRF,
    VIDEO_PIXEL_FORMAT,
    VIDEO_PRESET,
)
from ...utils.file_operations import verify_ffmpeg_installation


def build_extract_command(
    source: Path, frames_pattern: Path, fps: int, max_width: int
) -> List[str]:
    """
    ffmpeg arguments to sample frames at fps, scaled to max_width.

    Height follows the aspect ratio, rounded to an even number (-2).
    """
    return [
        "ffmpeg", "-y",
        "-i", str(source),
        "-vf", f"fps={fps},scale={max_width}:-2",
        "-vcodec", "png",
        str(frames_pattern),
    ]


def build_stack_command(
    left_pattern: Path, right_pattern: Path, fps: int, output_path: Path
) -> List[str]:
    """ffmpeg arguments to hstack the left and right sequences into one video."""
    return [
        "ffmpeg", "-y",
        "-framerate", str(fps),
        "-i", str(left_pattern),
        "-framerate", str(fps),
        "-i", str(right_pattern),
        "-filter_complex", "[0:v][1:v]hstack=inputs=2",
        "-c:v", VIDEO_CODEC,
        "-pix_fmt", VIDEO_PIXEL_FORMAT,
        "-crf", str(VIDEO_CRF),
        "-preset", VIDEO_PRESET,
        str(output_path),
    ]


class FFmpegVideoCodec:
    """Runs the ffmpeg CLI for frame extraction and SBS encoding."""

    def __init__(self, log: Optional[Callable[[str], None]] = None, verbose: bool = False):
        self.log = log
        self.verbose = verbose
        self.loaded = False
        self.last_stderr = ""

    def load(self) -> bool:
        """Check that the ffmpeg binary is usable."""
        self.loaded = verify_ffmpeg_installation()
        if self.loaded:
            self._log("FFmpeg loaded.")
        else:
            print(ERROR_MESSAGES["ffmpeg_missing"])
        return self.loaded

    def extract_frames(
        self, source: Path, frames_pattern: Path, fps: int, max_width: int
    ) -> int:
        """
        Extract frames from a video.

        Args:
            source: Input video path
            frames_pattern: Output pattern, e.g. work/frames/%05d.png
            fps: Sampling rate
            max_width: Output width; height scaled to an even value

        Returns:
            ffmpeg exit code
        """
        return self._run(build_extract_command(source, frames_pattern, fps, max_width))

    def encode_stacked(
        self, left_pattern: Path, right_pattern: Path, fps: int, output_path: Path
    ) -> int:
        """
        Encode left and right sequences side by side.

        Returns:
            ffmpeg exit code
        """
        return self._run(build_stack_command(left_pattern, right_pattern, fps, output_path))

    def _run(self, cmd: List[str]) -> int:
        if self.verbose:
            self._log(f"[ffmpeg] {' '.join(cmd)}")
        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
        except (FileNotFoundError, OSError) as e:
            self.last_stderr = str(e)
            self._log(f"[ffmpeg] {e}")
            return 127

        self.last_stderr = result.stderr or ""
        if result.returncode != 0:
            for line in self.last_stderr.strip().splitlines()[-5:]:
                self._log(f"[ffmpeg] {line}")
        return result.returncode

    def _log(self, line: str):
        if self.log:
            self.log(line)
        else:
            print(line)
