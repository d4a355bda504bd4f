"""Top-level module of the larvtx source code."""

# Import main workflow entry point
from .driver import Driver
from .version import __version__

# Import commonly used data structures
from .data import Cluster, Vertex
from .event import EventContext
