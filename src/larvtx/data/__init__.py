"""Data structures handled by the reconstruction algorithms.

- `Vertex`: 3D vertex candidate
- `VertexScore`: figure of merit attached to a vertex candidate
- `CaloHit`: 2D hit in one readout view
- `Cluster`: group of hits in one readout view
- `ObjectList`: typed list of any of the above
"""

from .cluster import CaloHit, Cluster
from .list import ObjectList
from .vertex import Vertex, VertexScore
