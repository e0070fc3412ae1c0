"""
Pipeline orchestrator.

Drives one conversion run through its states:

    IDLE -> LOADING_ENGINES -> EXTRACTING_FRAMES -> PROCESSING_FRAMES
         -> ENCODING_OUTPUT -> COMPLETE

Any error moves the run to FAILED. Frames are processed strictly in
sequence order; each left/right pair is persisted before the next frame
is read, so memory stays bounded to one frame's worth of buffers.
"""

from __future__ import annotations

import threading
import time
from pathlib import Path
from typing import List, Optional, Union

import numpy as np

from ...core.config import PipelineConfig
from ...core.constants import (
    ERROR_MESSAGES,
    FRAMES_NAMESPACE,
    LEFT_NAMESPACE,
    NET_HEIGHT,
    NET_WIDTH,
    PROGRESS_COMPLETE,
    PROGRESS_ENCODING,
    PROGRESS_EXTRACTION,
    PROGRESS_FRAMES_SPAN,
    PROGRESS_FRAMES_START,
    PROGRESS_START,
    RIGHT_NAMESPACE,
)
from ...core.exceptions import (
    DecodeError,
    EncodeError,
    EngineLoadError,
    InferenceShapeError,
    PipelineBusyError,
)
from ...core.types import Frame, PipelineState
from ...io.frame_store import FrameStore
from ...utils.file_operations import save_processing_settings, update_processing_status
from ...utils.path_utils import format_file_size, format_time_duration
from ...utils.progress import ProgressSink
from ..frames.depth_processor import process_depth
from ..frames.preprocessor import frame_to_tensor
from ..frames.stereo_warper import synthesize_right_eye


def frame_progress(completed: int, total: int) -> float:
    """
    Overall progress after `completed` of `total` frames.

    Frame processing spans 10% to 80% of the run.
    """
    if total <= 0:
        return PROGRESS_FRAMES_START
    return PROGRESS_FRAMES_START + PROGRESS_FRAMES_SPAN * (completed / total)


class ProcessingOrchestrator:
    """
    Runs the depth-to-stereo pipeline against injected collaborators.

    Args:
        depth_estimator: Engine with load_model(), run_inference(), backend,
            input_names and output_names
        video_codec: Engine with load(), extract_frames() and encode_stacked()
        frame_store: Intermediate storage for the run
        progress_sink: Receives progress, status and log reports
        net_width: Depth network input width
        net_height: Depth network input height
    """

    def __init__(
        self,
        depth_estimator,
        video_codec,
        frame_store: FrameStore,
        progress_sink: Optional[ProgressSink] = None,
        net_width: int = NET_WIDTH,
        net_height: int = NET_HEIGHT,
        verbose: bool = False,
    ):
        self.depth_estimator = depth_estimator
        self.video_codec = video_codec
        self.frame_store = frame_store
        self.progress_sink = progress_sink or ProgressSink()
        self.net_width = net_width
        self.net_height = net_height
        self.verbose = verbose

        self.state = PipelineState.IDLE
        self.state_history: List[PipelineState] = []
        self.last_error: Optional[Exception] = None
        self.frames_processed = 0
        self._run_lock = threading.Lock()
        self._settings_file: Optional[Path] = None
        self._start_time = 0.0

    @property
    def is_running(self) -> bool:
        return self.state.is_active

    # Reporting helpers

    def _set_state(self, state: PipelineState) -> None:
        self.state = state
        self.state_history.append(state)
        if self.verbose:
            self._log(f"[state] {state.value}")

    def _log(self, line: str) -> None:
        self.progress_sink.report_log_line(line)

    def _status(self, text: str) -> None:
        self.progress_sink.report_status(text)

    def _progress(self, fraction: float) -> None:
        self.progress_sink.report_progress(fraction)

    def _handle_failure(self, error: Exception) -> None:
        """Record a failed run on the sink and in the settings file."""
        self.last_error = error
        self._set_state(PipelineState.FAILED)
        self._status(f"Error: {error}")
        self._log(f"[error] {type(error).__name__}: {error}")
        if self._settings_file:
            update_processing_status(
                self._settings_file,
                "failed",
                {"error": str(error), "error_type": type(error).__name__},
            )

    # Steps

    @staticmethod
    def _load_engine(load, message: str) -> None:
        """Call an engine loader; a False return or any exception is an EngineLoadError."""
        try:
            loaded = load()
        except Exception as e:
            raise EngineLoadError(f"{message} ({type(e).__name__}: {e})") from e
        if not loaded:
            raise EngineLoadError(message)

    def _step_load_engines(self) -> None:
        self._set_state(PipelineState.LOADING_ENGINES)
        self._status("Loading engines…")

        self._log("Loading FFmpeg…")
        self._load_engine(self.video_codec.load, ERROR_MESSAGES["ffmpeg_missing"])

        self._log("Loading depth model…")
        self._load_engine(self.depth_estimator.load_model, ERROR_MESSAGES["model_load_failed"])

        self._log(f"Depth backend: {self.depth_estimator.backend}")
        self._log(f"Model inputs: {', '.join(self.depth_estimator.input_names)}")
        self._log(f"Model outputs: {', '.join(self.depth_estimator.output_names)}")

    def _step_extract_frames(
        self, source: Union[str, Path, bytes], config: PipelineConfig
    ) -> List[str]:
        """Reset storage, extract frames and select the ones to process."""
        self._set_state(PipelineState.EXTRACTING_FRAMES)
        self._status("Writing input…")

        self.frame_store.reset()
        self.frame_store.prepare()
        input_path = self.frame_store.write_input(source)

        source_label = "<bytes>" if isinstance(source, bytes) else str(source)
        self._settings_file = save_processing_settings(
            self.frame_store.work_dir,
            source_label,
            config.to_dict(),
            {"depth_backend": str(self.depth_estimator.backend)},
        )

        self._status("Extracting frames…")
        self._progress(PROGRESS_EXTRACTION)

        return_code = self.video_codec.extract_frames(
            input_path,
            self.frame_store.pattern_for(FRAMES_NAMESPACE),
            config.target_fps,
            config.max_frame_width,
        )
        if return_code != 0:
            raise DecodeError(f"{ERROR_MESSAGES['extraction_failed']} (exit code {return_code})")

        frame_names = self.frame_store.names(FRAMES_NAMESPACE)
        if not frame_names:
            raise DecodeError(ERROR_MESSAGES["no_frames"])

        selected = frame_names[: config.max_frames]
        self._log(f"Frames extracted: {len(frame_names)}. Processing: {len(selected)}.")
        return selected

    def _process_frame(self, name: str, index: int, strength_px: int) -> Frame:
        """Depth + right-eye synthesis for one frame; persists both eyes."""
        left = self.frame_store.read_frame(FRAMES_NAMESPACE, name, index)

        tensor = frame_to_tensor(left, self.net_width, self.net_height)
        raw_depth = np.asarray(self.depth_estimator.run_inference(tensor), dtype=np.float32).reshape(-1)

        expected = self.net_width * self.net_height
        if raw_depth.size != expected:
            raise InferenceShapeError(raw_depth.size, expected)

        depth = process_depth(raw_depth, self.net_width, self.net_height)
        right = synthesize_right_eye(left, depth, strength_px)

        self.frame_store.write_frame(LEFT_NAMESPACE, name, left)
        self.frame_store.write_frame(RIGHT_NAMESPACE, name, right)
        return right

    def _step_process_frames(self, frame_names: List[str], config: PipelineConfig) -> None:
        self._set_state(PipelineState.PROCESSING_FRAMES)
        self._status("Depth + right-eye synthesis…")

        total = len(frame_names)
        for i, name in enumerate(frame_names):
            self._process_frame(name, i, config.disparity_strength_px)
            self.frames_processed = i + 1

            self._progress(frame_progress(i + 1, total))
            self._status(f"Frame {i + 1}/{total}")

    def _step_encode_output(self, config: PipelineConfig) -> None:
        self._set_state(PipelineState.ENCODING_OUTPUT)
        self._status("Encoding SBS video…")
        self._progress(PROGRESS_ENCODING)

        return_code = self.video_codec.encode_stacked(
            self.frame_store.pattern_for(LEFT_NAMESPACE),
            self.frame_store.pattern_for(RIGHT_NAMESPACE),
            config.target_fps,
            self.frame_store.output_path,
        )
        if return_code != 0:
            raise EncodeError(f"{ERROR_MESSAGES['encode_failed']} (exit code {return_code})")

    def _finalize(self) -> bytes:
        output = self.frame_store.read_output()
        elapsed = time.time() - self._start_time

        self._set_state(PipelineState.COMPLETE)
        self._progress(PROGRESS_COMPLETE)
        self._status("Complete.")
        self._log(
            f"Done. {self.frames_processed} frames, {format_file_size(len(output))} "
            f"in {format_time_duration(elapsed)}."
        )
        if self._settings_file:
            update_processing_status(
                self._settings_file,
                "completed",
                {
                    "final_output": str(self.frame_store.output_path),
                    "frames_processed": self.frames_processed,
                    "output_bytes": len(output),
                },
            )
        return output

    # Entry point

    def run(self, source: Union[str, Path, bytes], config: PipelineConfig) -> Optional[bytes]:
        """
        Convert a video to side-by-side stereo.

        Args:
            source: Source video path or its raw bytes
            config: Run parameters

        Returns:
            Encoded SBS video bytes, or None if the run failed (see
            ``last_error`` and ``state``)

        Raises:
            PipelineBusyError: If another run is in progress
        """
        if not self._run_lock.acquire(blocking=False):
            raise PipelineBusyError(ERROR_MESSAGES["busy"])

        try:
            self._start_time = time.time()
            self.state_history = []
            self.last_error = None
            self.frames_processed = 0
            self._settings_file = None
            self._set_state(PipelineState.IDLE)

            self._progress(PROGRESS_START)
            self._log(f"Parallaxer settings: {config.describe()}")

            self._step_load_engines()
            frame_names = self._step_extract_frames(source, config)
            self._step_process_frames(frame_names, config)
            self._step_encode_output(config)
            return self._finalize()

        except Exception as e:
            self._handle_failure(e)
            return None

        finally:
            self._run_lock.release()
