"""In-memory store of the named object lists of one event.

This plays the role of the host reconstruction framework for the algorithms
of this package: it owns the vertex and cluster lists, keeps track of which
vertex list is the current one, and exposes the detector geometry.
"""

from larvtx.data import Cluster, ObjectList, Vertex
from larvtx.errors import ListAlreadyPresentError, ListNotFoundError
from larvtx.geo import WirePlaneProjector

__all__ = ["EventContext"]


class EventContext:
    """Named vertex and cluster lists of one event.

    Attributes
    ----------
    vertex_lists : Dict[str, ObjectList]
        Vertex lists, keyed by name
    cluster_lists : Dict[str, ObjectList]
        Cluster lists, keyed by name
    current_vertex_list_name : str
        Name of the current vertex list
    geometry : object
        Geometry projector used to map 3D positions onto the views
    """

    def __init__(
        self,
        vertex_lists=None,
        cluster_lists=None,
        current_vertex_list=None,
        geometry=None,
        index=None,
    ):
        """Initialize the event content.

        Parameters
        ----------
        vertex_lists : Dict[str, List[Vertex]], optional
            Vertex lists, keyed by name
        cluster_lists : Dict[str, List[Cluster]], optional
            Cluster lists, keyed by name
        current_vertex_list : str, optional
            Name of the vertex list to make current. If there is a single
            vertex list, it is made current by default.
        geometry : object, optional
            Geometry projector. Defaults to a :class:`WirePlaneProjector`.
        index : int, optional
            Index of the event in its source
        """
        self.index = index
        self.geometry = geometry if geometry is not None else WirePlaneProjector()

        self.vertex_lists = {}
        for name, vertices in (vertex_lists or {}).items():
            self.vertex_lists[name] = ObjectList(vertices, Vertex)

        self.cluster_lists = {}
        for name, clusters in (cluster_lists or {}).items():
            self.cluster_lists[name] = ObjectList(clusters, Cluster)

        if current_vertex_list is None and len(self.vertex_lists) == 1:
            current_vertex_list = next(iter(self.vertex_lists))
        if current_vertex_list is not None and current_vertex_list not in self.vertex_lists:
            raise ListNotFoundError("vertex", current_vertex_list)
        self.current_vertex_list_name = current_vertex_list

    def get_current_vertex_list(self):
        """Fetch the current vertex list.

        Returns
        -------
        ObjectList
            Current list of vertices
        """
        if self.current_vertex_list_name is None:
            raise ListNotFoundError("vertex", "<current>")

        return self.vertex_lists[self.current_vertex_list_name]

    def get_vertex_list(self, name):
        """Fetch a vertex list by name.

        Parameters
        ----------
        name : str
            Name of the vertex list

        Returns
        -------
        ObjectList
            List of vertices
        """
        if name not in self.vertex_lists:
            raise ListNotFoundError("vertex", name)

        return self.vertex_lists[name]

    def get_cluster_list(self, name):
        """Fetch a cluster list by name.

        Parameters
        ----------
        name : str
            Name of the cluster list

        Returns
        -------
        ObjectList
            List of clusters
        """
        if name not in self.cluster_lists:
            raise ListNotFoundError("cluster", name)

        return self.cluster_lists[name]

    def project_position(self, position, hit_type):
        """Project a 3D position onto one view.

        Parameters
        ----------
        position : np.ndarray
            (3) Position in detector coordinates
        hit_type : int
            View to project onto

        Returns
        -------
        np.ndarray
            (2) Position in the view
        """
        return self.geometry.project_position(position, hit_type)

    def save_list(self, name, vertices):
        """Save a new vertex list under a given name.

        Parameters
        ----------
        name : str
            Name of the new vertex list
        vertices : List[Vertex]
            Vertices to store in the list
        """
        if name in self.vertex_lists:
            raise ListAlreadyPresentError(
                f"A vertex list is already registered under the name `{name}`."
            )

        self.vertex_lists[name] = ObjectList(vertices, Vertex)

    def replace_current_list(self, name):
        """Make a saved vertex list the current one.

        Parameters
        ----------
        name : str
            Name of the vertex list to make current
        """
        if name not in self.vertex_lists:
            raise ListNotFoundError("vertex", name)

        self.current_vertex_list_name = name
