"""Depth inference engines."""

from .depth_estimator import (
    DepthEstimator,
    OnnxDepthEstimator,
    TorchHubDepthEstimator,
    create_depth_estimator,
)

__all__ = [
    "DepthEstimator",
    "OnnxDepthEstimator",
    "TorchHubDepthEstimator",
    "create_depth_estimator",
]
