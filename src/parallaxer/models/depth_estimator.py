"""
Depth estimation model management and loading.

This module wraps the MiDaS-small depth network behind one small
interface: ``load_model()`` prepares the engine, ``run_inference()`` takes
a standardized (3, H, W) tensor and returns the raw relative depth for
every network pixel. Two engines are provided, an ONNX Runtime session
over an exported model and the PyTorch Hub checkpoint.
"""

import os
from typing import Any, Dict, List, Optional

import numpy as np
import torch

from ..core.constants import (
    BACKEND_ACCELERATED,
    BACKEND_FALLBACK,
    DEFAULT_DEPTH_BACKEND,
    DEFAULT_ONNX_MODEL_PATH,
    DEPTH_BACKENDS,
    MIDAS_HUB_MODEL,
    MIDAS_HUB_REPO,
    NET_HEIGHT,
    NET_WIDTH,
    ONNX_ACCELERATED_PROVIDERS,
    ONNX_FALLBACK_PROVIDER,
)


class DepthEstimator:
    """Common lifecycle for depth engines."""

    name = "base"

    def __init__(self, net_width: int = NET_WIDTH, net_height: int = NET_HEIGHT):
        self.net_width = net_width
        self.net_height = net_height
        self.backend = BACKEND_FALLBACK
        self.input_names: List[str] = []
        self.output_names: List[str] = []

    @property
    def is_loaded(self) -> bool:
        raise NotImplementedError

    def load_model(self) -> bool:
        """
        Load the depth model.

        Returns:
            True if model loaded successfully
        """
        raise NotImplementedError

    def run_inference(self, tensor: np.ndarray) -> np.ndarray:
        """
        Estimate depth for one standardized tensor.

        Args:
            tensor: float32 array of shape (3, net_height, net_width)

        Returns:
            Flat float32 array of raw relative depth
        """
        raise NotImplementedError

    def unload_model(self) -> None:
        """Free model memory."""

    def _check_loaded(self):
        if not self.is_loaded:
            raise RuntimeError("Model not loaded. Call load_model() first.")

    def get_model_info(self) -> Dict[str, Any]:
        """Get information about the engine."""
        return {
            "engine": self.name,
            "backend": self.backend,
            "input_names": list(self.input_names),
            "output_names": list(self.output_names),
            "input_size": (self.net_width, self.net_height),
            "loaded": self.is_loaded,
        }


class OnnxDepthEstimator(DepthEstimator):
    """MiDaS-small exported to ONNX, run with ONNX Runtime."""

    name = "onnx"

    def __init__(self, model_path: str, device: str = 'auto', **kwargs):
        super().__init__(**kwargs)
        self.model_path = model_path
        self.device = device
        self.session = None
        self.providers: List[str] = []

    @property
    def is_loaded(self) -> bool:
        return self.session is not None

    def _select_providers(self, available: List[str]) -> List[str]:
        """Accelerated providers first (unless forced to CPU), CPU always last."""
        providers = []
        if self.device != 'cpu':
            providers = [p for p in ONNX_ACCELERATED_PROVIDERS if p in available]
        providers.append(ONNX_FALLBACK_PROVIDER)
        return providers

    def load_model(self) -> bool:
        if self.session is not None:
            return True
        if not os.path.exists(self.model_path):
            print(f"Model not found at {self.model_path}")
            print("Export MiDaS small to ONNX or use --backend torch")
            return False

        try:
            import onnxruntime as ort

            providers = self._select_providers(ort.get_available_providers())
            options = ort.SessionOptions()
            options.graph_optimization_level = ort.GraphOptimizationLevel.ORT_ENABLE_ALL

            self.session = ort.InferenceSession(
                self.model_path, sess_options=options, providers=providers
            )
            self.providers = self.session.get_providers()
            self.input_names = [i.name for i in self.session.get_inputs()]
            self.output_names = [o.name for o in self.session.get_outputs()]
            self.backend = (
                BACKEND_FALLBACK if self.providers[:1] == [ONNX_FALLBACK_PROVIDER]
                else BACKEND_ACCELERATED
            )

            print(f"Loaded MiDaS (onnx) with {self.providers[0]} [{self.backend}]")
            return True

        except Exception as e:
            print(f"Error loading ONNX model: {e}")
            self.session = None
            return False

    def run_inference(self, tensor: np.ndarray) -> np.ndarray:
        self._check_loaded()

        batch = np.ascontiguousarray(tensor, dtype=np.float32)[np.newaxis, ...]
        outputs = self.session.run([self.output_names[0]], {self.input_names[0]: batch})
        return np.asarray(outputs[0], dtype=np.float32).reshape(-1)

    def unload_model(self) -> None:
        self.session = None


class TorchHubDepthEstimator(DepthEstimator):
    """MiDaS-small loaded from PyTorch Hub."""

    name = "torch"

    def __init__(
        self,
        device: str = 'auto',
        repo: str = MIDAS_HUB_REPO,
        model_type: str = MIDAS_HUB_MODEL,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.device = self._determine_device(device)
        self.repo = repo
        self.model_type = model_type
        self.model = None
        self.input_names = ["input"]
        self.output_names = ["depth"]

    def _determine_device(self, device: str) -> str:
        """Determine the best device to use for inference."""
        if device == 'auto':
            if torch.cuda.is_available():
                return 'cuda'
            elif hasattr(torch.backends, 'mps') and torch.backends.mps.is_available():
                return 'mps'
            else:
                return 'cpu'
        return device

    @property
    def is_loaded(self) -> bool:
        return self.model is not None

    def load_model(self) -> bool:
        if self.model is not None:
            return True

        try:
            self.model = torch.hub.load(self.repo, self.model_type, trust_repo=True)
            self.model.to(self.device)
            self.model.eval()
            self.backend = BACKEND_FALLBACK if self.device == 'cpu' else BACKEND_ACCELERATED

            print(f"Loaded MiDaS ({self.model_type}) on {self.device} [{self.backend}]")
            return True

        except Exception as e:
            print(f"Error loading model: {e}")
            print(f"Check network access to torch hub ({self.repo}) or use --backend onnx")
            self.model = None
            return False

    def run_inference(self, tensor: np.ndarray) -> np.ndarray:
        self._check_loaded()

        batch = torch.from_numpy(np.ascontiguousarray(tensor, dtype=np.float32)).unsqueeze(0)
        with torch.no_grad():
            prediction = self.model(batch.to(self.device))
        return prediction.detach().cpu().numpy().astype(np.float32).reshape(-1)

    def unload_model(self) -> None:
        if self.model is not None:
            del self.model
            self.model = None

            if self.device == 'cuda' and torch.cuda.is_available():
                torch.cuda.empty_cache()


def create_depth_estimator(
    backend: str = DEFAULT_DEPTH_BACKEND,
    model_path: Optional[str] = None,
    device: str = 'auto',
) -> DepthEstimator:
    """
    Factory function to create a depth estimator.

    Args:
        backend: 'onnx' or 'torch'
        model_path: ONNX model file (uses default if None; ignored for torch)
        device: Device to use for inference ('auto', 'cpu', 'cuda', 'mps')

    Returns:
        Configured, not yet loaded, DepthEstimator

    Raises:
        ValueError: If backend is unknown
    """
    if backend == "onnx":
        return OnnxDepthEstimator(model_path or DEFAULT_ONNX_MODEL_PATH, device)
    if backend == "torch":
        return TorchHubDepthEstimator(device)

    raise ValueError(f"Unknown depth backend: {backend} (choose from {', '.join(DEPTH_BACKENDS)})")
