"""
Pure utility functions for path and string manipulation.

This module contains ONLY pure functions with no side effects:
- No filesystem I/O
- No subprocess calls
- No external state mutation
- Deterministic output for given inputs
"""

from __future__ import annotations

import os
from pathlib import Path

from ..core.constants import OUTPUT_VIDEO_FORMAT


def generate_output_filename(base_name: str | None, strength_px: int | None = None) -> str:
    """
    Generate the output SBS video filename for a source file.

    Args:
        base_name: Source file name or path
        strength_px: Disparity strength to record in the name

    Returns:
        Output filename string

    Examples:
        >>> generate_output_filename("clips/beach.mov", 12)
        'beach_SBS_12px.mp4'
        >>> generate_output_filename(None)
        'Parallaxer_SBS.mp4'
    """
    if base_name:
        safe_base = sanitize_filename(Path(base_name).stem) or "output"
    else:
        safe_base = "Parallaxer"

    parts = [safe_base, "SBS"]
    if strength_px is not None:
        parts.append(f"{strength_px}px")

    return "_".join(parts) + OUTPUT_VIDEO_FORMAT


def sanitize_filename(filename: str) -> str:
    """
    Sanitize filename for cross-platform compatibility.

    Args:
        filename: Original filename

    Returns:
        Sanitized filename

    Examples:
        >>> sanitize_filename('my<video>.mp4')
        'my_video_.mp4'
        >>> sanitize_filename('___test___.txt')
        'test_.txt'
    """
    invalid_chars = '<>:"/\\|?*'
    for char in invalid_chars:
        filename = filename.replace(char, "_")

    while "__" in filename:
        filename = filename.replace("__", "_")

    filename = filename.strip("_")
    if len(filename) > 200:
        name, ext = os.path.splitext(filename)
        filename = name[: 200 - len(ext)] + ext

    return filename


def format_file_size(size_bytes: int) -> str:
    """
    Format file size in human-readable format.

    Examples:
        >>> format_file_size(0)
        '0 B'
        >>> format_file_size(1536)
        '1.5 KB'
    """
    if size_bytes == 0:
        return "0 B"

    units = ["B", "KB", "MB", "GB", "TB"]
    unit_index = 0
    size = float(size_bytes)

    while size >= 1024 and unit_index < len(units) - 1:
        size /= 1024
        unit_index += 1

    if unit_index == 0:
        return f"{int(size)} {units[unit_index]}"
    else:
        return f"{size:.1f} {units[unit_index]}"


def format_time_duration(seconds: float) -> str:
    """
    Format a duration compactly.

    Examples:
        >>> format_time_duration(45)
        '45s'
        >>> format_time_duration(125)
        '2m 5s'
        >>> format_time_duration(3600)
        '1h'
    """
    total = int(seconds)
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)

    parts = []
    if hours:
        parts.append(f"{hours}h")
    if minutes:
        parts.append(f"{minutes}m")
    if secs or not parts:
        parts.append(f"{secs}s")
    return " ".join(parts)
