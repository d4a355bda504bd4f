"""Sets up fixtures general to the entire test suite of this package.

This file is read during the collection phase of pytest when running anything
inside this directory.
"""

import numpy as np
import pytest

from larvtx.data import Cluster, Vertex
from larvtx.event import EventContext
from larvtx.geo import WirePlaneProjector
from larvtx.utils.enums import VIEWS

# Name of the cluster list of each view used throughout the tests
CLUSTER_LIST_NAMES = {"U": "clusters_u", "V": "clusters_v", "W": "clusters_w"}


@pytest.fixture(name="selection_cfg")
def fixture_selection_cfg():
    """Minimal vertex selection configuration."""
    return {
        "input_cluster_list_name_u": CLUSTER_LIST_NAMES["U"],
        "input_cluster_list_name_v": CLUSTER_LIST_NAMES["V"],
        "input_cluster_list_name_w": CLUSTER_LIST_NAMES["W"],
        "output_vertex_list_name": "selected",
    }


@pytest.fixture(name="burst")
def fixture_burst():
    """Hit offsets (in view coordinates) of a single track radiating from a
    vertex along the drift axis."""
    distances = np.array([0.5, 1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0, 8.0, 9.0])
    return np.column_stack([distances, np.zeros(len(distances))])


@pytest.fixture(name="scatter")
def fixture_scatter():
    """Hit offsets (in view coordinates) at the same distances as the burst,
    but spread over all directions."""
    distances = np.array([0.5, 1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0, 8.0, 9.0])
    angles = -np.pi + 0.1 + 2 * np.pi * np.arange(len(distances)) / len(distances)
    return np.column_stack([distances * np.cos(angles), distances * np.sin(angles)])


@pytest.fixture(name="make_event")
def fixture_make_event():
    """Returns a function which builds an event with one cluster per vertex
    and per view, made of hits placed around the vertex projections."""

    def make_event(positions, offsets, skip=(), geometry=None):
        """Build an event context.

        Parameters
        ----------
        positions : List[List[float]]
            3D positions of the candidate vertices
        offsets : List[np.ndarray]
            (M, 2) Offsets of the hits w.r.t. the projection of each vertex
        skip : List[Tuple[int, str]], optional
            (vertex index, view) pairs for which no hits are produced
        geometry : WirePlaneProjector, optional
            Geometry used to project the vertices

        Returns
        -------
        EventContext
            Event with a `candidates` vertex list and three cluster lists
        """
        geometry = geometry if geometry is not None else WirePlaneProjector()
        vertices = [Vertex(id=i, position=pos) for i, pos in enumerate(positions)]

        cluster_lists = {}
        for view in VIEWS:
            clusters = []
            for i, vertex in enumerate(vertices):
                if (i, view.name) in skip:
                    continue

                proj = geometry.project_position(vertex.position, view)
                clusters.append(
                    Cluster(id=len(clusters), hit_type=view, points=proj + offsets[i])
                )

            cluster_lists[CLUSTER_LIST_NAMES[view.name]] = clusters

        return EventContext(
            {"candidates": vertices}, cluster_lists, "candidates", geometry
        )

    return make_event
