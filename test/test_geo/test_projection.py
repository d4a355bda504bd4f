"""Tests for the larvtx.geo module."""

import numpy as np
import pytest

from larvtx.geo import WirePlaneProjector, geo_factory
from larvtx.utils.enums import HitTypeEnum


class TestWirePlaneProjector:
    """Test the projection of 3D positions onto the wire planes."""

    def test_origin(self):
        """Test that the origin projects onto the origin of every view."""
        projector = WirePlaneProjector()
        for hit_type in HitTypeEnum:
            proj = projector.project_position(np.zeros(3), hit_type)
            assert proj.shape == (2,)
            assert np.all(proj == 0.0)

    def test_drift_coordinate(self):
        """Test that the drift coordinate is shared between views."""
        projector = WirePlaneProjector()
        position = np.array([12.5, 3.0, -7.0])
        for hit_type in HitTypeEnum:
            assert projector.project_position(position, hit_type)[0] == 12.5

    def test_wire_coordinate(self):
        """Test the wire coordinate of each view."""
        projector = WirePlaneProjector()

        position = np.array([1.0, 2.0, 0.0])
        u = projector.project_position(position, HitTypeEnum.U)
        v = projector.project_position(position, HitTypeEnum.V)
        w = projector.project_position(position, HitTypeEnum.W)
        assert u[1] == pytest.approx(-np.sqrt(3))
        assert v[1] == pytest.approx(np.sqrt(3))
        assert w[1] == pytest.approx(0.0)

        position = np.array([0.0, 0.0, 4.0])
        assert projector.project_position(position, "U")[1] == pytest.approx(2.0)
        assert projector.project_position(position, "v")[1] == pytest.approx(2.0)
        assert projector.project_position(position, 2)[1] == pytest.approx(4.0)

    def test_invalid_view(self):
        """Test that an unknown view is rejected."""
        projector = WirePlaneProjector()
        with pytest.raises(ValueError):
            projector.project_position(np.zeros(3), "X")

    def test_factory(self):
        """Test building projectors from their configuration."""
        assert geo_factory() == WirePlaneProjector()
        assert geo_factory("wire_plane") == WirePlaneProjector()

        projector = geo_factory({"wire_angle_u": 0.0, "wire_angle_v": 0.0})
        position = np.array([0.0, 1.0, 3.0])
        for hit_type in HitTypeEnum:
            assert projector.project_position(position, hit_type)[1] == pytest.approx(3.0)

    def test_factory_unknown(self):
        """Test that an unknown projector name is rejected."""
        with pytest.raises(ValueError):
            geo_factory({"name": "pixel"})
