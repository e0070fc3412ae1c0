"""Pipeline orchestration modules."""

from .pipeline_orchestrator import ProcessingOrchestrator, frame_progress
from .video_processor import VideoProcessor

__all__ = ["ProcessingOrchestrator", "VideoProcessor", "frame_progress"]
