"""Unit tests for depth normalization and smoothing."""

import numpy as np
import pytest

from src.parallaxer.processing.frames.depth_processor import (
    normalize_depth,
    process_depth,
    smooth_depth,
)


class TestNormalizeDepth:
    """Test min-max normalization."""

    def test_range_maps_to_unit_interval(self):
        """Test min maps to 0 and max maps to 1."""
        result = normalize_depth(np.array([2.0, 4.0, 6.0]))
        np.testing.assert_allclose(result, [0.0, 0.5, 1.0])

    def test_output_is_float32(self):
        """Test output dtype and shape are preserved."""
        raw = np.arange(12, dtype=np.float64).reshape(3, 4)
        result = normalize_depth(raw)
        assert result.dtype == np.float32
        assert result.shape == (3, 4)

    def test_constant_buffer_maps_to_zero(self):
        """Test a zero range is treated as 1 so every value becomes 0."""
        result = normalize_depth(np.full(16, 7.5))
        assert np.all(result == 0.0)

    def test_negative_values(self):
        """Test negative inputs still land in [0, 1]."""
        result = normalize_depth(np.array([-10.0, 0.0, 10.0]))
        np.testing.assert_allclose(result, [0.0, 0.5, 1.0])

    def test_empty_buffer_rejected(self):
        """Test empty input raises ValueError."""
        with pytest.raises(ValueError):
            normalize_depth(np.array([]))


class TestSmoothDepth:
    """Test the clipped 3x3 box mean."""

    def test_constant_map_unchanged(self):
        """Test a constant map stays constant, borders included."""
        depth = np.full((5, 6), 0.25, dtype=np.float32)
        np.testing.assert_allclose(smooth_depth(depth), depth)

    def test_corner_averages_four_cells(self):
        """Test a corner averages only its in-bounds neighbours."""
        depth = np.zeros((3, 3), dtype=np.float32)
        depth[0, 0] = 1.0
        result = smooth_depth(depth)

        assert result[0, 0] == pytest.approx(1.0 / 4)
        assert result[0, 1] == pytest.approx(1.0 / 6)
        assert result[1, 1] == pytest.approx(1.0 / 9)
        assert result[2, 2] == 0.0

    def test_interior_averages_nine_cells(self):
        """Test an interior cell uses the full window."""
        depth = np.arange(25, dtype=np.float32).reshape(5, 5)
        result = smooth_depth(depth)
        assert result[2, 2] == pytest.approx(depth[1:4, 1:4].mean())

    def test_values_stay_in_range(self):
        """Test smoothing a [0, 1] map never leaves [0, 1]."""
        rng = np.random.default_rng(0)
        result = smooth_depth(rng.random((16, 16)).astype(np.float32))
        assert result.min() >= 0.0
        assert result.max() <= 1.0

    def test_single_cell(self):
        """Test a 1x1 map is its own mean."""
        result = smooth_depth(np.array([[0.3]], dtype=np.float32))
        assert result[0, 0] == pytest.approx(0.3)

    def test_rejects_non_2d(self):
        """Test a flat buffer is rejected."""
        with pytest.raises(ValueError):
            smooth_depth(np.zeros(9))


class TestProcessDepth:
    """Test reshape, normalize and smooth chained together."""

    def test_shape_and_range(self):
        """Test a flat buffer becomes a normalized (h, w) map."""
        raw = np.linspace(100.0, 500.0, 8 * 4)
        result = process_depth(raw, net_width=8, net_height=4)

        assert result.shape == (4, 8)
        assert result.dtype == np.float32
        assert result.min() >= 0.0
        assert result.max() <= 1.0

    def test_wrong_length_rejected(self):
        """Test a buffer of the wrong size cannot be reshaped."""
        with pytest.raises(ValueError):
            process_depth(np.zeros(10), net_width=4, net_height=4)


class TestNormalizeDepthUnitRange:
    """Test buffers already spanning [0, 1]."""

    def test_unchanged(self):
        raw = np.array([0.0, 0.25, 0.75, 1.0], dtype=np.float32)
        np.testing.assert_array_equal(normalize_depth(raw), raw)
