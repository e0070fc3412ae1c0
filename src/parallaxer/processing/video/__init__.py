"""Video decode/encode modules."""

from .video_codec import FFmpegVideoCodec

__all__ = ["FFmpegVideoCodec"]
