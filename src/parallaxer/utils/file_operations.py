"""
File operations utilities for video and frame handling.

This module contains the filesystem side of the pipeline: validation,
frame listing, intermediate cleanup and the run settings file.
"""

import json
import os
import shutil
import subprocess
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

import cv2

from ..core.constants import (
    FFMPEG_TIMEOUT,
    INTERMEDIATE_DIRS,
    SETTINGS_FILENAME,
    SUPPORTED_IMAGE_FORMATS,
    SUPPORTED_VIDEO_FORMATS,
)


def validate_video_file(video_path: str) -> bool:
    """
    Validate if file is a supported video format.

    Args:
        video_path: Path to video file

    Returns:
        True if valid video file
    """
    if not os.path.exists(video_path):
        return False

    file_ext = Path(video_path).suffix.lower()
    return file_ext in SUPPORTED_VIDEO_FORMATS


def get_video_properties(video_path: str) -> Dict[str, Any]:
    """
    Get video properties using OpenCV.

    Args:
        video_path: Path to video file

    Returns:
        Dictionary with video properties (empty if the file cannot be opened)
    """
    properties = {}

    cap = cv2.VideoCapture(str(video_path))
    try:
        if not cap.isOpened():
            return properties

        fps = float(cap.get(cv2.CAP_PROP_FPS))
        frame_count = int(cap.get(cv2.CAP_PROP_FRAME_COUNT))
        properties.update({
            "width": int(cap.get(cv2.CAP_PROP_FRAME_WIDTH)),
            "height": int(cap.get(cv2.CAP_PROP_FRAME_HEIGHT)),
            "fps": fps,
            "frame_count": frame_count,
            "duration": frame_count / fps if fps > 0 else 0.0,
        })
    finally:
        cap.release()

    return properties


def get_frame_files(frames_dir: Path) -> List[Path]:
    """
    Get sorted list of frame files from directory.

    Args:
        frames_dir: Directory containing frame files

    Returns:
        Frame file paths in sequence order
    """
    if not frames_dir.exists():
        return []

    frame_files = [
        path for path in frames_dir.iterdir()
        if path.is_file() and path.suffix.lower() in SUPPORTED_IMAGE_FORMATS
    ]

    # Zero-padded names sort lexically; the numeric key keeps unpadded names in order too
    def sort_key(path):
        digits = ''.join(filter(str.isdigit, path.stem))
        return (int(digits) if digits else -1, path.name)

    return sorted(frame_files, key=sort_key)


def cleanup_intermediate_files(base_path: Path) -> int:
    """
    Remove intermediate frame directories left by a previous run.

    Best effort: missing directories and files that cannot be removed are
    skipped.

    Args:
        base_path: Work directory containing the intermediate directories

    Returns:
        Number of files removed
    """
    removed_count = 0

    for intermediate_dir in INTERMEDIATE_DIRS.values():
        full_dir = Path(base_path) / intermediate_dir
        if not full_dir.is_dir():
            continue

        for file_path in full_dir.rglob('*'):
            if file_path.is_file():
                try:
                    file_path.unlink()
                    removed_count += 1
                except OSError:
                    pass

        shutil.rmtree(full_dir, ignore_errors=True)

    return removed_count


def verify_ffmpeg_installation() -> bool:
    """
    Verify that FFmpeg is installed and accessible.

    Returns:
        True if FFmpeg is available
    """
    try:
        result = subprocess.run(
            ['ffmpeg', '-version'],
            capture_output=True,
            text=True,
            timeout=FFMPEG_TIMEOUT
        )
        return result.returncode == 0
    except (subprocess.SubprocessError, FileNotFoundError, OSError):
        return False


def save_processing_settings(
    work_dir: Path,
    source: str,
    settings: Dict[str, Any],
    extra: Optional[Dict[str, Any]] = None,
) -> Path:
    """
    Write the settings file for a run.

    Args:
        work_dir: Run work directory
        source: Source video path (or a label for in-memory input)
        settings: Pipeline settings
        extra: Additional metadata (e.g. depth backend)

    Returns:
        Path to the settings file
    """
    work_dir = Path(work_dir)
    work_dir.mkdir(parents=True, exist_ok=True)
    settings_file = work_dir / SETTINGS_FILENAME

    data = {
        "source": str(source),
        "settings": dict(settings),
        "status": "processing",
        "started_at": time.strftime("%Y-%m-%dT%H:%M:%S"),
    }
    if extra:
        data.update(extra)

    with open(settings_file, 'w') as f:
        json.dump(data, f, indent=2)

    return settings_file


def update_processing_status(
    settings_file: Path, status: str, details: Optional[Dict[str, Any]] = None
) -> bool:
    """
    Update the status recorded in a settings file.

    Args:
        settings_file: Path written by save_processing_settings
        status: New status ('processing', 'completed', 'failed')
        details: Extra fields to merge in

    Returns:
        True if the file was updated
    """
    try:
        with open(settings_file) as f:
            data = json.load(f)
    except (OSError, ValueError):
        return False

    data["status"] = status
    data["updated_at"] = time.strftime("%Y-%m-%dT%H:%M:%S")
    if details:
        data.update(details)

    try:
        with open(settings_file, 'w') as f:
            json.dump(data, f, indent=2)
    except OSError:
        return False

    return True
