"""Driver which runs the configured reconstruction on a set of events.

The configuration is made of the following blocks:

.. code-block:: yaml

    base:
      verbosity: info
    geo:
      name: wire_plane
    io:
      reader:
        name: hdf5
        file_keys: events.h5
        cluster_list_names: [clusters_u, clusters_v, clusters_w]
      writer:
        name: csv
        file_name: selected.csv
    algo:
      vertex_selection:
        input_cluster_list_name_u: clusters_u
        input_cluster_list_name_v: clusters_v
        input_cluster_list_name_w: clusters_w
        output_vertex_list_name: selected_vertices
"""

from copy import deepcopy

from larvtx.algo import AlgorithmManager
from larvtx.config.errors import ConfigValidationError
from larvtx.event import EventContext
from larvtx.geo import geo_factory
from larvtx.io import reader_factory, writer_factory
from larvtx.utils.logger import logger

__all__ = ["Driver"]


class Driver:
    """Central class which loads the events, runs the algorithms on each of
    them and stores the output.

    Attributes
    ----------
    geo : object
        Geometry projector shared by all events
    reader : object
        Event reader, if configured
    writer : object
        Output writer, if configured
    manager : AlgorithmManager
        Manager of the reconstruction algorithms
    """

    def __init__(self, cfg):
        """Initialize the driver.

        Parameters
        ----------
        cfg : dict
            Full configuration dictionary
        """
        cfg = deepcopy(cfg)
        base = cfg.get("base") or {}

        # Set the verbosity of the package logger
        logger.setLevel(str(base.get("verbosity", "info")).upper())

        # Initialize the geometry
        self.geo = geo_factory(cfg.get("geo"))

        # Initialize the IO tools
        io_cfg = cfg.get("io") or {}
        self.reader = None
        if io_cfg.get("reader") is not None:
            self.reader = reader_factory(io_cfg["reader"])

        self.writer = None
        if io_cfg.get("writer") is not None:
            self.writer = writer_factory(io_cfg["writer"])

        # Initialize the algorithms
        if not cfg.get("algo"):
            raise ConfigValidationError(
                "The configuration must contain a non-empty `algo` block."
            )
        self.manager = AlgorithmManager(cfg["algo"])

    def __len__(self):
        """Number of events the driver can process.

        Returns
        -------
        int
            Number of entries in the reader
        """
        return len(self.reader) if self.reader is not None else 0

    def process(self, entry):
        """Process one entry of the reader.

        Parameters
        ----------
        entry : int
            Index of the entry in the reader

        Returns
        -------
        dict
            Output of :meth:`process_event`
        """
        assert self.reader is not None, "No reader configured, cannot process entries."

        return self.process_event(
            **self.reader[entry], current_vertex_list=self.reader.vertex_list_name
        )

    def process_event(self, vertex_lists, cluster_lists, index=None, current_vertex_list=None):
        """Run the algorithms on one event.

        Parameters
        ----------
        vertex_lists : Dict[str, List[Vertex]]
            Vertex lists of the event, keyed by name
        cluster_lists : Dict[str, List[Cluster]]
            Cluster lists of the event, keyed by name
        index : int, optional
            Index of the event
        current_vertex_list : str, optional
            Name of the current vertex list

        Returns
        -------
        dict
            Event `index`, input vertex `candidates`, `selected` vertices
            (value returned by the last algorithm) and the event `context`
        """
        context = EventContext(
            vertex_lists, cluster_lists, current_vertex_list, self.geo, index
        )
        candidates = context.get_current_vertex_list()

        results = self.manager(context)
        selected = list(results.values())[-1] if results else []

        return {
            "index": index,
            "candidates": candidates,
            "selected": selected,
            "context": context,
        }

    def run(self):
        """Loop over all the entries of the reader.

        Returns
        -------
        int
            Number of events with a selected vertex
        """
        num_selected = 0
        for entry in range(len(self)):
            result = self.process(entry)
            num_selected += int(len(result["selected"]) > 0)
            if self.writer is not None:
                self.writer.append(result["index"], result["candidates"], result["selected"])

        logger.info(
            "Processed %d event(s), selected a vertex in %d of them.",
            len(self),
            num_selected,
        )

        return num_selected
