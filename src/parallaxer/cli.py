"""
Command line interface: convert a 2D video into a side-by-side 3D video.
"""

import argparse
import os
import sys
from pathlib import Path

from .core.config import PipelineConfig
from .core.constants import (
    DEFAULT_DEPTH_BACKEND,
    DEFAULT_ONNX_MODEL_PATH,
    DEFAULT_SETTINGS,
    DEFAULT_WORK_DIR,
    DEPTH_BACKENDS,
)
from .models.depth_estimator import create_depth_estimator
from .processing.orchestration.video_processor import VideoProcessor
from .utils.console import error, saved_to, step_complete, success, title_bar, warning
from .utils.file_operations import get_video_properties, validate_video_file
from .utils.path_utils import format_file_size, generate_output_filename
from .utils.progress import ConsoleProgressSink


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Convert 2D video to side-by-side 3D using depth-based parallax'
    )
    parser.add_argument('input_video', help='Input video file path')
    parser.add_argument('-o', '--output',
                       help='Output video path (default: <input>_SBS_<strength>px.mp4 next to ./output)')
    parser.add_argument('--fps', default=DEFAULT_SETTINGS['target_fps'],
                       help='Frames per second to extract and encode (1-30, default: 8)')
    parser.add_argument('--max-width', default=DEFAULT_SETTINGS['max_frame_width'],
                       help='Maximum frame width, height follows aspect ratio (240-1920, default: 512)')
    parser.add_argument('-s', '--strength', default=DEFAULT_SETTINGS['disparity_strength_px'],
                       help='Maximum parallax shift in pixels (1-40, default: 12)')
    parser.add_argument('--max-frames', default=DEFAULT_SETTINGS['max_frames'],
                       help='Maximum number of frames to process (1-9999, default: 120)')
    parser.add_argument('--backend', choices=DEPTH_BACKENDS, default=DEFAULT_DEPTH_BACKEND,
                       help='Depth engine: onnx (exported MiDaS small) or torch (torch hub) (default: onnx)')
    parser.add_argument('-m', '--model', default=DEFAULT_ONNX_MODEL_PATH,
                       help='Path to the MiDaS small ONNX model (onnx backend only)')
    parser.add_argument('--device', choices=['auto', 'cpu', 'cuda', 'mps'], default='auto',
                       help='Device to use for inference (default: auto)')
    parser.add_argument('--work-dir', default=str(DEFAULT_WORK_DIR),
                       help='Directory for intermediate frames (default: ./parallaxer_work)')
    parser.add_argument('--keep-intermediates', action='store_true',
                       help='Keep extracted, left and right frames after encoding')
    parser.add_argument('-v', '--verbose', action='store_true',
                       help='Print ffmpeg commands and state transitions')
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    if not os.path.exists(args.input_video):
        print(error(f"Input video not found: {args.input_video}"))
        return 1
    if not validate_video_file(args.input_video):
        print(warning(f"Unrecognized video extension: {Path(args.input_video).suffix}"))

    config = PipelineConfig.from_values(args.fps, args.max_width, args.strength, args.max_frames)
    output_path = Path(args.output) if args.output else (
        Path('./output') / generate_output_filename(args.input_video, config.disparity_strength_px)
    )

    print(title_bar("=== Parallaxer: 2D to SBS 3D ==="))
    print(f"Input: {args.input_video}")
    properties = get_video_properties(args.input_video)
    if properties:
        print(f"Source: {properties['width']}x{properties['height']} @ {properties['fps']:.2f}fps")
    print(f"Settings: {config.describe()}")
    print(step_complete(f"Output: {output_path}"))

    try:
        estimator = create_depth_estimator(args.backend, args.model, args.device)
    except ValueError as e:
        print(error(str(e)))
        return 1

    sink = ConsoleProgressSink()
    processor = VideoProcessor(estimator, args.work_dir, sink, verbose=args.verbose)
    try:
        ok = processor.process(args.input_video, output_path, config, args.keep_intermediates)
    finally:
        estimator.unload_model()

    if not ok:
        print()
        print(error(str(processor.orchestrator.last_error)))
        return 1

    sink.finish()
    print(success("Processing complete!"))
    print(saved_to(f"Saved to: {output_path} ({format_file_size(output_path.stat().st_size)})"))
    return 0


if __name__ == "__main__":
    sys.exit(main())
