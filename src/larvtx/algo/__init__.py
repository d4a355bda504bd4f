"""Reconstruction algorithms run on the named object lists of an event.

- `AlgorithmManager`: instantiates the configured algorithms and runs them
- `VertexSelectionAlgorithm`: selects the best vertex among candidates
"""

from .manager import AlgorithmManager
from .vertex import VertexSelectionAlgorithm
