"""Module with the geometry projectors which map 3D positions onto views."""

from dataclasses import dataclass

import numpy as np

from larvtx.utils.enums import enum_factory

__all__ = ["WirePlaneProjector"]


@dataclass(frozen=True)
class WirePlaneProjector:
    """Rotational projection of 3D positions onto the readout wire planes.

    The drift coordinate (x) is shared between all views. The second
    coordinate of a view is the position along the axis orthogonal to its
    wires, in the (y, z) plane:

    .. math::

        w = z \\cos(\\theta) - y \\sin(\\theta)

    where :math:`\\theta` is the wire angle of the view w.r.t. the vertical.

    Attributes
    ----------
    wire_angle_u : float
        Angle of the U wires w.r.t. the vertical, in radians
    wire_angle_v : float
        Angle of the V wires w.r.t. the vertical, in radians
    wire_angle_w : float
        Angle of the W wires w.r.t. the vertical, in radians
    """

    name = "wire_plane"

    wire_angle_u: float = np.pi / 3
    wire_angle_v: float = -np.pi / 3
    wire_angle_w: float = 0.0

    @property
    def wire_angles(self):
        """Wire angles of the U, V and W views.

        Returns
        -------
        np.ndarray
            (3) Wire angles, in radians
        """
        return np.array([self.wire_angle_u, self.wire_angle_v, self.wire_angle_w])

    def project_position(self, position, hit_type):
        """Project a 3D position onto one view.

        Parameters
        ----------
        position : np.ndarray
            (3) Position in detector coordinates
        hit_type : Union[int, str]
            View to project onto

        Returns
        -------
        np.ndarray
            (2) Position in the view, as (drift, wire) coordinates
        """
        theta = self.wire_angles[enum_factory("hit_type", hit_type)]
        x, y, z = position

        return np.array([x, z * np.cos(theta) - y * np.sin(theta)])
