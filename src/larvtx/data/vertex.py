"""Module with data structures describing 3D vertex candidates."""

from dataclasses import dataclass

import numpy as np

from .base import DataBase

__all__ = ["Vertex", "VertexScore"]


@dataclass(eq=False)
class Vertex(DataBase):
    """Candidate interaction vertex in 3D.

    Vertices are owned by the event which lists them. Algorithms only read
    their position and derive quantities from it: the position array is
    flagged as read-only upon construction.

    Attributes
    ----------
    id : int
        Index of the vertex in the list it was created in
    position : np.ndarray
        (3) Position of the vertex in detector coordinates
    """

    id: int = -1
    position: np.ndarray = None

    # Fixed-length attributes
    _fixed_length_attrs = (("position", (3, np.float64)),)

    # Attributes specifying coordinates
    _pos_attrs = ("position",)

    def __post_init__(self):
        """Cast the position and lock it."""
        super().__post_init__()
        self.position = self.position.copy()
        self.position.setflags(write=False)

    def __str__(self):
        """Human-readable string representation of the vertex object.

        Returns
        -------
        str
            Basic information about the vertex properties
        """
        x, y, z = self.position
        return f"Vertex(id: {self.id}, position: ({x:.2f}, {y:.2f}, {z:.2f}))"


@dataclass(frozen=True)
class VertexScore:
    """Figure of merit associated with one vertex candidate.

    Scores are kept in a table local to one selection pass rather than being
    attached to the vertex itself.

    Attributes
    ----------
    vertex : Vertex
        Scored vertex candidate
    score : float
        Figure of merit of the candidate
    """

    vertex: Vertex
    score: float
