"""Intermediate storage."""

from .frame_store import FrameStore

__all__ = ["FrameStore"]
