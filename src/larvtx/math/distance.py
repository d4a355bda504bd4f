"""Numba JIT compiled implementation of distance computation routines.

The routines in this module apply to 3D points, which is the representation
of vertex candidates in detector coordinates.
"""

import numba as nb
import numpy as np

__all__ = ["euclidean", "point_cdist"]


@nb.njit(cache=True)
def euclidean(x: nb.float64[:], y: nb.float64[:]) -> nb.float64:
    """Compute the Euclidean distance (L2) between two 3D points.

    Parameters
    ----------
    x : np.ndarray
        (3) Coorinates of the first point
    y : np.ndarray
        (3) Coorinates of the second point

    Returns
    -------
    float
        Euclidean distance
    """
    return np.sqrt((y[0] - x[0]) ** 2 + (y[1] - x[1]) ** 2 + (y[2] - x[2]) ** 2)


@nb.njit(cache=True)
def point_cdist(x: nb.float64[:], points: nb.float64[:, :]) -> nb.float64[:]:
    """Compute the Euclidean distance between one 3D point and a set of
    3D points.

    Parameters
    ----------
    x : np.ndarray
        (3) Coordinates of the reference point
    points : np.ndarray
        (N, 3) Coordinates of the set of points

    Returns
    -------
    np.ndarray
        (N) Distance from the reference point to each point of the set
    """
    dists = np.empty(len(points), dtype=points.dtype)
    for i in range(len(points)):
        dists[i] = euclidean(x, points[i])

    return dists
