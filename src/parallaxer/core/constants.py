"""
Constants and default settings for Parallaxer.
"""

from pathlib import Path

# Depth network input resolution (MiDaS small)
NET_WIDTH = 256
NET_HEIGHT = 256

# ImageNet normalization, channel order R, G, B
NORMALIZATION_MEAN = (0.485, 0.456, 0.406)
NORMALIZATION_STD = (0.229, 0.224, 0.225)

# Pipeline parameter ranges (inclusive)
FPS_RANGE = (1, 30)
MAX_WIDTH_RANGE = (240, 1920)
STRENGTH_RANGE = (1, 40)
MAX_FRAMES_RANGE = (1, 9999)

DEFAULT_SETTINGS = {
    "target_fps": 8,
    "max_frame_width": 512,
    "disparity_strength_px": 12,
    "max_frames": 120,
}

# Progress milestones reported to the sink
PROGRESS_START = 0.0
PROGRESS_EXTRACTION = 0.02
PROGRESS_FRAMES_START = 0.10
PROGRESS_FRAMES_SPAN = 0.70
PROGRESS_ENCODING = 0.82
PROGRESS_COMPLETE = 1.0

# Intermediate storage namespaces (relative to the work directory)
FRAMES_NAMESPACE = "frames"
LEFT_NAMESPACE = "L"
RIGHT_NAMESPACE = "R"
INTERMEDIATE_DIRS = {
    "frames": FRAMES_NAMESPACE,
    "left_frames": LEFT_NAMESPACE,
    "right_frames": RIGHT_NAMESPACE,
}

INPUT_VIDEO_NAME = "input.mp4"
OUTPUT_VIDEO_NAME = "Parallaxer_SBS.mp4"
SETTINGS_FILENAME = "processing_settings.json"

# Frames are written by ffmpeg as 00001.png, 00002.png, ...
FRAME_NAME_DIGITS = 5
FRAME_NAME_PATTERN = f"%0{FRAME_NAME_DIGITS}d.png"
OUTPUT_IMAGE_FORMAT = ".png"
OUTPUT_VIDEO_FORMAT = ".mp4"

SUPPORTED_VIDEO_FORMATS = [".mp4", ".avi", ".mov", ".mkv", ".wmv", ".flv", ".webm", ".m4v"]
SUPPORTED_IMAGE_FORMATS = [".png", ".jpg", ".jpeg"]

# Stacked SBS encode settings
VIDEO_CODEC = "libx264"
VIDEO_PIXEL_FORMAT = "yuv420p"
VIDEO_CRF = 18
VIDEO_PRESET = "veryfast"

FFMPEG_TIMEOUT = 10

# Depth models
DEFAULT_WORK_DIR = Path("./parallaxer_work")
DEFAULT_ONNX_MODEL_PATH = "./models/midas-small.onnx"
MIDAS_HUB_REPO = "intel-isl/MiDaS"
MIDAS_HUB_MODEL = "MiDaS_small"
DEPTH_BACKENDS = ["onnx", "torch"]
DEFAULT_DEPTH_BACKEND = "onnx"

# Execution backends reported by the depth estimators
BACKEND_ACCELERATED = "accelerated"
BACKEND_FALLBACK = "fallback"

ONNX_ACCELERATED_PROVIDERS = ["CUDAExecutionProvider", "CoreMLExecutionProvider"]
ONNX_FALLBACK_PROVIDER = "CPUExecutionProvider"

ERROR_MESSAGES = {
    "ffmpeg_missing": "FFmpeg not found. Install ffmpeg and make sure it is on PATH.",
    "model_load_failed": "Failed to load depth model",
    "extraction_failed": "FFmpeg frame extraction failed.",
    "encode_failed": "FFmpeg encode failed.",
    "no_frames": "No frames extracted from video",
    "busy": "A conversion is already running",
}
