"""Tests for the larvtx.math.histogram module."""

import numpy as np
import pytest

from larvtx.math import AngularHistogram
from larvtx.math.histogram import fill, sum_squares


class TestAngularHistogram:
    """Test the fixed-binning angular histogram."""

    def test_default_binning(self):
        """Test the default binning of the histogram."""
        histogram = AngularHistogram()

        assert histogram.n_bins == 200
        assert histogram.phi_min == pytest.approx(-1.1 * np.pi)
        assert histogram.phi_max == pytest.approx(1.1 * np.pi)
        assert histogram.bin_width == pytest.approx(2.2 * np.pi / 200)
        assert np.all(histogram.contents == 0.0)

    def test_fill_bin_index(self):
        """Test that entries land in floor((phi - phi_min) / width)."""
        histogram = AngularHistogram(4, 0.0, 4.0)
        histogram.fill(0.0, 1.0)
        histogram.fill(0.5, 2.0)
        histogram.fill(2.0, 3.0)
        histogram.fill(3.999, 4.0)

        np.testing.assert_allclose(histogram.contents, [3.0, 0.0, 3.0, 4.0])
        assert histogram.bin_content(0) == 3.0

    def test_fill_out_of_range(self):
        """Test that underflow, overflow and NaN entries are discarded."""
        histogram = AngularHistogram(4, 0.0, 4.0)
        histogram.fill(-0.001, 1.0)
        histogram.fill(4.0, 1.0)
        histogram.fill(10.0, 1.0)
        histogram.fill(np.nan, 1.0)

        assert np.all(histogram.contents == 0.0)
        assert histogram.sum_squares() == 0.0

    def test_fill_many(self):
        """Test filling the histogram with several entries at once."""
        histogram = AngularHistogram(10, -np.pi, np.pi)
        angles = np.array([0.1, 0.2, -3.0, 5.0])
        weights = np.array([1.0, 2.0, 0.5, 100.0])
        histogram.fill_many(angles, weights)

        assert histogram.contents.sum() == pytest.approx(3.5)
        assert histogram.contents.max() == pytest.approx(3.0)

    def test_fill_many_empty(self):
        """Test that filling with no entries leaves the histogram empty."""
        histogram = AngularHistogram()
        histogram.fill_many(np.empty(0), np.empty(0))

        assert histogram.sum_squares() == 0.0

    def test_sum_squares(self):
        """Test the sum of squared bin contents."""
        histogram = AngularHistogram(4, 0.0, 4.0)
        histogram.fill_many(np.array([0.5, 0.6, 2.5]), np.array([1.0, 2.0, 2.0]))

        # Bin 0 holds 3, bin 2 holds 2
        assert histogram.sum_squares() == pytest.approx(13.0)

    @pytest.mark.parametrize(
        "n_bins, phi_min, phi_max", [(0, -1.0, 1.0), (10, 1.0, 1.0), (10, 1.0, -1.0)]
    )
    def test_invalid_binning(self, n_bins, phi_min, phi_max):
        """Test that an invalid binning is rejected."""
        with pytest.raises(ValueError):
            AngularHistogram(n_bins, phi_min, phi_max)

    def test_kernels(self):
        """Test the compiled kernels directly."""
        contents = np.zeros(2, dtype=np.float64)
        fill(contents, 0.0, 2.0, np.array([0.5, 1.5, 1.7]), np.array([1.0, 1.0, 2.0]))

        np.testing.assert_allclose(contents, [1.0, 3.0])
        assert sum_squares(contents) == pytest.approx(10.0)
