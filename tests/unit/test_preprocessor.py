"""Unit tests for frame to tensor conversion."""

import numpy as np
import pytest

from src.parallaxer.core.constants import NORMALIZATION_MEAN, NORMALIZATION_STD
from src.parallaxer.core.types import Frame
from src.parallaxer.processing.frames.preprocessor import (
    frame_to_tensor,
    resize_to_network,
    standardize,
)


def solid_frame(width, height, rgb):
    pixels = np.empty((height, width, 4), dtype=np.uint8)
    pixels[..., :3] = rgb
    pixels[..., 3] = 255
    return Frame(pixels)


class TestFrameToTensor:
    """Test tensor layout and standardization."""

    def test_tensor_length(self):
        """Test the tensor holds 3 * 256 * 256 values."""
        tensor = frame_to_tensor(solid_frame(320, 180, (10, 20, 30)))
        assert tensor.shape == (3, 256, 256)
        assert tensor.size == 196608
        assert tensor.dtype == np.float32

    def test_black_frame_values(self):
        """Test a black frame gives -mean/std in each channel plane."""
        tensor = frame_to_tensor(solid_frame(64, 48, (0, 0, 0)), 16, 16)
        for c in range(3):
            expected = -NORMALIZATION_MEAN[c] / NORMALIZATION_STD[c]
            np.testing.assert_allclose(tensor[c], expected, rtol=1e-5)

    def test_white_frame_values(self):
        """Test a white frame gives (1 - mean)/std in each channel plane."""
        tensor = frame_to_tensor(solid_frame(64, 48, (255, 255, 255)), 16, 16)
        for c in range(3):
            expected = (1.0 - NORMALIZATION_MEAN[c]) / NORMALIZATION_STD[c]
            np.testing.assert_allclose(tensor[c], expected, rtol=1e-5)

    def test_channel_major_order(self):
        """Test the R plane comes first, then G, then B."""
        tensor = frame_to_tensor(solid_frame(8, 8, (255, 0, 0)), 8, 8)
        assert tensor[0, 0, 0] > 0
        assert tensor[1, 0, 0] < 0
        assert tensor[2, 0, 0] < 0

    def test_alpha_ignored(self):
        """Test alpha does not leak into the tensor."""
        frame = solid_frame(8, 8, (100, 100, 100))
        transparent = Frame(frame.pixels.copy())
        transparent.pixels[..., 3] = 0
        np.testing.assert_array_equal(frame_to_tensor(frame, 8, 8), frame_to_tensor(transparent, 8, 8))

    def test_upscales_small_frame(self):
        """Test frames smaller than the network size are enlarged."""
        tensor = frame_to_tensor(solid_frame(4, 3, (50, 50, 50)), 32, 32)
        assert tensor.shape == (3, 32, 32)


class TestResizeToNetwork:
    """Test network resampling."""

    def test_same_size_passthrough(self):
        """Test no resampling happens at the exact network size."""
        rgb = np.zeros((16, 16, 3), dtype=np.uint8)
        assert resize_to_network(rgb, 16, 16) is rgb

    def test_output_size(self):
        """Test output is (net_height, net_width)."""
        rgb = np.zeros((90, 160, 3), dtype=np.uint8)
        assert resize_to_network(rgb, 32, 24).shape == (24, 32, 3)

    def test_empty_image_rejected(self):
        """Test zero-sized images raise ValueError."""
        with pytest.raises(ValueError):
            resize_to_network(np.zeros((0, 10, 3), dtype=np.uint8), 8, 8)


class TestStandardize:
    """Test channel standardization."""

    def test_layout(self):
        """Test (H, W, 3) becomes (3, H, W)."""
        result = standardize(np.zeros((2, 5, 3), dtype=np.uint8))
        assert result.shape == (3, 2, 5)
        assert result.flags["C_CONTIGUOUS"]
