"""Unit tests for the VideoProcessor entry point."""

from unittest.mock import Mock, patch

from src.parallaxer.core.config import PipelineConfig
from src.parallaxer.processing.orchestration.video_processor import VideoProcessor
from src.parallaxer.processing.video.video_codec import FFmpegVideoCodec
from src.parallaxer.utils.progress import RecordingProgressSink


class TestVideoProcessorInit:
    """Test collaborator wiring."""

    def test_wires_collaborators(self, tmp_path):
        estimator = Mock()
        sink = RecordingProgressSink()
        processor = VideoProcessor(estimator, tmp_path, sink)

        assert isinstance(processor.video_codec, FFmpegVideoCodec)
        assert processor.frame_store.work_dir == tmp_path
        assert processor.orchestrator.depth_estimator is estimator
        assert processor.orchestrator.progress_sink is sink

    def test_codec_logs_to_sink(self, tmp_path):
        sink = RecordingProgressSink()
        processor = VideoProcessor(Mock(), tmp_path, sink)
        processor.video_codec.log("hello")
        assert sink.log_lines == ["hello"]


class TestVideoProcessorProcess:
    """Test writing the result."""

    def test_success_writes_output(self, tmp_path):
        processor = VideoProcessor(Mock(), tmp_path / "work")
        output_path = tmp_path / "out" / "clip_SBS_12px.mp4"

        with patch.object(processor.orchestrator, "run", return_value=b"SBS") as mock_run, \
             patch.object(processor.frame_store, "reset") as mock_reset:
            assert processor.process("clip.mp4", output_path, PipelineConfig()) is True

        mock_run.assert_called_once_with("clip.mp4", PipelineConfig())
        assert output_path.read_bytes() == b"SBS"
        mock_reset.assert_called_once()

    def test_keep_intermediates(self, tmp_path):
        processor = VideoProcessor(Mock(), tmp_path / "work")

        with patch.object(processor.orchestrator, "run", return_value=b"SBS"), \
             patch.object(processor.frame_store, "reset") as mock_reset:
            processor.process("clip.mp4", tmp_path / "o.mp4", PipelineConfig(), keep_intermediates=True)

        mock_reset.assert_not_called()

    def test_output_inside_work_dir_survives_cleanup(self, tmp_path):
        """Test -o pointing at the store's own output file is not deleted."""
        processor = VideoProcessor(Mock(), tmp_path / "work")
        output_path = processor.frame_store.output_path

        with patch.object(processor.orchestrator, "run", return_value=b"SBS"):
            assert processor.process("clip.mp4", output_path, PipelineConfig()) is True

        assert output_path.read_bytes() == b"SBS"

    def test_cleanup_after_success(self, tmp_path):
        """Test intermediates are removed once the result is written elsewhere."""
        processor = VideoProcessor(Mock(), tmp_path / "work")
        processor.frame_store.prepare()
        processor.frame_store.output_path.write_bytes(b"SBS")

        with patch.object(processor.orchestrator, "run", return_value=b"SBS"):
            processor.process("clip.mp4", tmp_path / "out.mp4", PipelineConfig())

        assert not processor.frame_store.output_path.exists()
        assert not processor.frame_store.namespace_dir("L").exists()
        assert (tmp_path / "out.mp4").read_bytes() == b"SBS"

    def test_failure(self, tmp_path):
        processor = VideoProcessor(Mock(), tmp_path / "work")
        output_path = tmp_path / "o.mp4"

        with patch.object(processor.orchestrator, "run", return_value=None):
            assert processor.process("clip.mp4", output_path, PipelineConfig()) is False

        assert not output_path.exists()
