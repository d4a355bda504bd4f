"""Detector geometry: projection of 3D positions onto the readout views."""

from .factories import geo_factory
from .projection import WirePlaneProjector
