"""
Thin entry point wiring the default collaborators into the orchestrator.
"""

from pathlib import Path
from typing import Optional, Union

from ...core.config import PipelineConfig
from ...core.constants import DEFAULT_WORK_DIR
from ...io.frame_store import FrameStore
from ...utils.progress import ProgressSink
from ..video.video_codec import FFmpegVideoCodec
from .pipeline_orchestrator import ProcessingOrchestrator


class VideoProcessor:
    """
    Converts a video file to an SBS video file.

    Owns the FFmpeg codec and the frame store; the depth estimator is
    created by the caller so it can be reused across runs.
    """

    def __init__(
        self,
        depth_estimator,
        work_dir: Union[str, Path] = DEFAULT_WORK_DIR,
        progress_sink: Optional[ProgressSink] = None,
        verbose: bool = False,
    ):
        self.progress_sink = progress_sink or ProgressSink()
        self.video_codec = FFmpegVideoCodec(log=self.progress_sink.report_log_line, verbose=verbose)
        self.frame_store = FrameStore(work_dir)
        self.orchestrator = ProcessingOrchestrator(
            depth_estimator,
            self.video_codec,
            self.frame_store,
            self.progress_sink,
            verbose=verbose,
        )

    def process(
        self,
        video_path: Union[str, Path],
        output_path: Union[str, Path],
        config: PipelineConfig,
        keep_intermediates: bool = False,
    ) -> bool:
        """
        Run the pipeline and write the SBS video to output_path.

        Returns:
            True if processing completed successfully
        """
        output = self.orchestrator.run(video_path, config)
        if output is None:
            return False

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(output)

        if not keep_intermediates:
            # -o may point at the store's own output file
            same_file = output_path.resolve() == self.frame_store.output_path.resolve()
            self.frame_store.reset(keep_output=same_file)
        return True
