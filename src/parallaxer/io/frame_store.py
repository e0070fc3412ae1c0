"""
Sequence-ordered intermediate storage for a conversion run.

The store owns a work directory with three namespaces: ``frames`` (frames
extracted from the source), ``L`` (left-eye frames) and ``R`` (synthesized
right-eye frames). Frames are addressed by their sequence name, so the
codec only ever sees directories and a file-name pattern.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Union

import cv2
import numpy as np

from ..core.constants import (
    FRAME_NAME_PATTERN,
    FRAMES_NAMESPACE,
    INPUT_VIDEO_NAME,
    INTERMEDIATE_DIRS,
    LEFT_NAMESPACE,
    OUTPUT_IMAGE_FORMAT,
    OUTPUT_VIDEO_NAME,
    RIGHT_NAMESPACE,
)
from ..core.exceptions import FrameStoreError
from ..core.types import Frame
from ..utils.file_operations import cleanup_intermediate_files, get_frame_files


class FrameStore:
    """Keyed, name-ordered frame storage rooted in a work directory."""

    NAMESPACES = (FRAMES_NAMESPACE, LEFT_NAMESPACE, RIGHT_NAMESPACE)

    def __init__(self, work_dir: Union[str, Path]):
        self.work_dir = Path(work_dir)

    @property
    def input_path(self) -> Path:
        return self.work_dir / INPUT_VIDEO_NAME

    @property
    def output_path(self) -> Path:
        return self.work_dir / OUTPUT_VIDEO_NAME

    def namespace_dir(self, namespace: str) -> Path:
        if namespace not in self.NAMESPACES:
            raise KeyError(f"Unknown namespace: {namespace}")
        return self.work_dir / namespace

    def pattern_for(self, namespace: str) -> Path:
        """ffmpeg image-sequence pattern for a namespace (e.g. L/%05d.png)."""
        return self.namespace_dir(namespace) / FRAME_NAME_PATTERN

    def directories(self) -> Dict[str, Path]:
        return {key: self.work_dir / name for key, name in INTERMEDIATE_DIRS.items()}

    def reset(self, keep_output: bool = False) -> int:
        """
        Remove everything a previous run left behind.

        Best effort: paths that do not exist or cannot be removed are
        skipped silently.

        Args:
            keep_output: Leave the encoded output video in place

        Returns:
            Number of files removed
        """
        removed = cleanup_intermediate_files(self.work_dir)
        paths = [self.input_path] if keep_output else [self.input_path, self.output_path]
        for path in paths:
            try:
                path.unlink()
                removed += 1
            except OSError:
                pass
        return removed

    def prepare(self) -> Dict[str, Path]:
        """Create the work directory and all namespaces."""
        try:
            for namespace in self.NAMESPACES:
                self.namespace_dir(namespace).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FrameStoreError(f"Could not create intermediate storage: {e}") from e
        return self.directories()

    def names(self, namespace: str) -> List[str]:
        """Frame names in a namespace, in sequence order."""
        return [path.name for path in get_frame_files(self.namespace_dir(namespace))]

    def read_frame(self, namespace: str, name: str, index: int = 0) -> Frame:
        """
        Load a frame as RGBA.

        Raises:
            FrameStoreError: If the file is missing or cannot be decoded
        """
        path = self.namespace_dir(namespace) / name
        image = cv2.imread(str(path), cv2.IMREAD_COLOR)
        if image is None:
            raise FrameStoreError(f"Could not read frame: {path}")

        rgb = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
        return Frame.from_rgb(rgb, index=index, name=name)

    def write_frame(self, namespace: str, name: str, frame: Frame) -> Path:
        """
        Persist an RGBA frame as PNG under its sequence name.

        Raises:
            FrameStoreError: If encoding or writing fails
        """
        if not name.endswith(OUTPUT_IMAGE_FORMAT):
            name = f"{Path(name).stem}{OUTPUT_IMAGE_FORMAT}"
        path = self.namespace_dir(namespace) / name

        bgra = cv2.cvtColor(np.ascontiguousarray(frame.pixels), cv2.COLOR_RGBA2BGRA)
        try:
            written = cv2.imwrite(str(path), bgra)
        except cv2.error as e:
            raise FrameStoreError(f"Could not write frame {path}: {e}") from e
        if not written:
            raise FrameStoreError(f"Could not write frame: {path}")
        return path

    def write_input(self, source: Union[str, Path, bytes]) -> Path:
        """Place the source video into the work directory."""
        try:
            self.work_dir.mkdir(parents=True, exist_ok=True)
            data = source if isinstance(source, bytes) else Path(source).read_bytes()
            self.input_path.write_bytes(data)
        except OSError as e:
            raise FrameStoreError(f"Could not write input video: {e}") from e
        return self.input_path

    def read_output(self) -> bytes:
        """Encoded SBS video bytes."""
        try:
            return self.output_path.read_bytes()
        except OSError as e:
            raise FrameStoreError(f"Could not read encoded output: {e}") from e
