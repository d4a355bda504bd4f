"""Module with fast, Numba-accelerated, compiled math routines.

This includes multiple submodules:
- `distance.py` includes distance functions between 3D points
- `histogram.py` includes the angular histogram and its filling kernels
"""

from . import distance, histogram
from .histogram import AngularHistogram
