"""Tests for the larvtx.math.distance module."""

import numpy as np
import pytest

from larvtx.math.distance import euclidean, point_cdist


class TestMathDistance:
    """Test distance computation functions."""

    def test_euclidean_distance(self):
        """Test Euclidean distance calculation."""
        p1 = np.array([0.0, 0.0, 0.0])
        p2 = np.array([3.0, 4.0, 0.0])

        assert euclidean(p1, p2) == pytest.approx(5.0)
        assert euclidean(p2, p1) == pytest.approx(5.0)
        assert euclidean(p1, p1) == 0.0

    def test_point_cdist(self):
        """Test the distance between one point and a set of points."""
        point = np.array([1.0, 1.0, 1.0])
        points = np.array([[1.0, 1.0, 1.0], [1.0, 1.0, 3.0], [4.0, 5.0, 1.0]])

        dists = point_cdist(point, points)

        assert dists.shape == (3,)
        np.testing.assert_allclose(dists, [0.0, 2.0, 5.0])

    def test_point_cdist_empty(self):
        """Test the distance to an empty set of points."""
        dists = point_cdist(np.zeros(3), np.empty((0, 3)))

        assert len(dists) == 0
