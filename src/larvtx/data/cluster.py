"""Module with data structures describing 2D hits and hit clusters."""

from dataclasses import dataclass

import numpy as np

from larvtx.utils.enums import enum_factory

from .base import DataBase

__all__ = ["CaloHit", "Cluster"]


@dataclass(eq=False)
class CaloHit(DataBase):
    """Energy deposition recorded in one readout view.

    Attributes
    ----------
    position : np.ndarray
        (2) Position of the hit in the view, as (drift, wire) coordinates
    hit_type : int
        View in which the hit was recorded (see :class:`HitTypeEnum`)
    layer : int
        Pseudo-layer (depth) of the hit
    energy : float
        Calibrated energy of the hit
    """

    position: np.ndarray = None
    hit_type: int = None
    layer: int = 0
    energy: float = 0.0

    # Fixed-length attributes
    _fixed_length_attrs = (("position", (2, np.float64)),)

    def __post_init__(self):
        """Cast the position and parse the view."""
        super().__post_init__()
        assert self.hit_type is not None, "A hit must be assigned a view."
        self.hit_type = enum_factory("hit_type", self.hit_type)


@dataclass(eq=False)
class Cluster(DataBase):
    """Group of hits from a single view, ordered by pseudo-layer.

    The hits are stored as aligned arrays. Upon construction they are sorted
    by increasing pseudo-layer (stable, so hits which share a layer keep the
    order in which they were provided).

    Attributes
    ----------
    id : int
        Index of the cluster in the list it belongs to
    hit_type : int
        View shared by all the hits in the cluster (see :class:`HitTypeEnum`)
    points : np.ndarray
        (N, 2) Hit positions in the view, as (drift, wire) coordinates
    layers : np.ndarray
        (N) Pseudo-layer of each hit
    energies : np.ndarray
        (N) Energy of each hit
    """

    id: int = -1
    hit_type: int = None
    points: np.ndarray = None
    layers: np.ndarray = None
    energies: np.ndarray = None

    # Variable-length attributes
    _var_length_attrs = (
        ("points", (2, np.float64)),
        ("layers", np.int64),
        ("energies", np.float32),
    )

    def __post_init__(self):
        """Cast the hit arrays, parse the view and order the hits."""
        super().__post_init__()
        assert self.hit_type is not None, "A cluster must be assigned a view."
        self.hit_type = enum_factory("hit_type", self.hit_type)

        # Missing per-hit attributes default to zeros
        num_hits = len(self.points)
        if len(self.layers) == 0 and num_hits > 0:
            self.layers = np.zeros(num_hits, dtype=np.int64)
        if len(self.energies) == 0 and num_hits > 0:
            self.energies = np.zeros(num_hits, dtype=np.float32)

        assert len(self.layers) == num_hits and len(self.energies) == num_hits, (
            "The `layers` and `energies` of a cluster must be aligned with "
            "its `points`."
        )

        # Order the hits by pseudo-layer
        order = np.argsort(self.layers, kind="stable")
        self.points = self.points[order]
        self.layers = self.layers[order]
        self.energies = self.energies[order]

    def __len__(self):
        """Number of hits in the cluster."""
        return len(self.points)

    @classmethod
    def from_hits(cls, hits, id=-1, hit_type=None):
        """Builds a cluster from a list of individual hits.

        Parameters
        ----------
        hits : List[CaloHit]
            Hits which make up the cluster
        id : int, default -1
            Index of the cluster
        hit_type : int, optional
            View of the cluster. If not specified, it is inferred from the hits

        Returns
        -------
        Cluster
            Cluster object
        """
        hit_types = {hit.hit_type for hit in hits}
        if hit_type is None:
            assert len(hit_types) == 1, (
                "Cannot infer the view of a cluster with no hits or with hits "
                f"from more than one view: {hit_types}."
            )
            hit_type = hit_types.pop()
        else:
            hit_type = enum_factory("hit_type", hit_type)
            assert not hit_types or hit_types == {hit_type}, (
                f"The hits of a `{hit_type.name}` cluster must all belong to "
                f"that view, got {hit_types}."
            )

        return cls(
            id=id,
            hit_type=hit_type,
            points=np.array([hit.position for hit in hits]).reshape(-1, 2),
            layers=np.array([hit.layer for hit in hits], dtype=np.int64),
            energies=np.array([hit.energy for hit in hits], dtype=np.float32),
        )
