"""Contains a reader class dedicated to loading events from HDF5 files."""

import glob
import os

import h5py
import numpy as np

from larvtx.data import Cluster, ObjectList, Vertex
from larvtx.utils.logger import logger

__all__ = ["HDF5Reader"]


class HDF5Reader:
    """Class which reads vertex candidates and hit clusters from HDF5 files.

    The files must be structured as follows:

    .. code-block:: text

        events/
            0/
                vertices        (N, 3) candidate vertex positions
                vertex_ids      (N) optional vertex identifiers
                <cluster list>/
                    0/          one group per cluster, with a `hit_type`
                                attribute ('U', 'V' or 'W')
                        points      (M, 2) hit positions in the view
                        layers      (M) optional hit pseudo-layers
                        energies    (M) optional hit energies
                    1/
                    ...
            1/
            ...

    Typical configuration should look like:

    .. code-block:: yaml

        io:
          reader:
            name: hdf5
            file_keys: events.h5
            cluster_list_names: [clusters_u, clusters_v, clusters_w]
    """

    name = "hdf5"

    def __init__(
        self,
        file_keys,
        cluster_list_names,
        vertex_list_name="candidates",
        n_entry=None,
        n_skip=None,
        entry_list=None,
        max_print_files=10,
    ):
        """Initalize the HDF5 file reader.

        Parameters
        ----------
        file_keys : Union[str, List[str]]
            Path or list of paths (or glob patterns) to the HDF5 files to read
        cluster_list_names : List[str]
            Names of the cluster lists to load for each event
        vertex_list_name : str, default 'candidates'
            Name given to the list of candidate vertices of each event
        n_entry : int, optional
            Maximum number of entries to load
        n_skip : int, optional
            Number of entries to skip at the beginning
        entry_list : List[int], optional
            List of integer entry IDs to add to the index
        max_print_files : int, default 10
            Maximum number of loaded file names to be printed
        """
        # Process the list of files
        self.process_file_paths(file_keys, max_print_files)

        # Store the names of the lists to load
        self.cluster_list_names = list(cluster_list_names)
        self.vertex_list_name = vertex_list_name

        # Loop over the input files, build a map from index to file ID
        self.num_entries = 0
        file_index, file_entries = [], []
        for i, path in enumerate(self.file_paths):
            with h5py.File(path, "r") as in_file:
                assert "events" in in_file, f"File {path} does not contain an `events` group"
                entries = sorted(int(key) for key in in_file["events"].keys())
                file_index.append(np.full(len(entries), i, dtype=np.int64))
                file_entries.append(np.array(entries, dtype=np.int64))
                self.num_entries += len(entries)

        self.file_index = np.concatenate(file_index) if file_index else np.empty(0, dtype=np.int64)
        self.file_entries = np.concatenate(file_entries) if file_entries else np.empty(0, dtype=np.int64)

        # Dump the number of entries to load
        logger.info("Total number of entries in the file(s): %d", self.num_entries)

        # Build the list of entries to load
        self.entry_index = self.process_entry_list(n_entry, n_skip, entry_list)
        if len(self.entry_index) != self.num_entries:
            logger.info("Total number of entries selected: %d", len(self.entry_index))

    def __len__(self):
        """Returns the number of entries in the file(s).

        Returns
        -------
        int
            Number of entries in the file
        """
        return len(self.entry_index)

    def __getitem__(self, idx):
        """Returns a specific entry in the file.

        Parameters
        ----------
        idx : int
            Integer entry ID to access

        Returns
        -------
        dict
            One vertex list and one list per cluster list name
        """
        return self.get(self.entry_index[idx])

    def __iter__(self):
        """Loops over all the selected entries."""
        for idx in range(len(self)):
            yield self[idx]

    def process_file_paths(self, file_keys, max_print_files=10):
        """Process list of files.

        Parameters
        ----------
        file_keys : Union[str, List[str]]
            Path or list of paths (or glob patterns) to the files to read
        max_print_files : int, default 10
            Maximum number of loaded file names to be printed
        """
        assert file_keys is not None, "No input `file_keys` provided, abort."

        # If the file_keys points to a text file, it contains a list of paths
        if isinstance(file_keys, str) and os.path.splitext(file_keys)[-1] == ".txt":
            assert os.path.isfile(file_keys), (
                "If the `file_keys` are specified as a text file, the file "
                "must exist."
            )
            with open(file_keys, "r", encoding="utf-8") as f:
                file_keys = f.read().splitlines()

        # Convert the file keys to a list of file paths with glob
        self.file_paths = []
        if isinstance(file_keys, str):
            file_keys = [file_keys]
        for file_key in file_keys:
            file_paths = glob.glob(file_key)
            if not file_paths:
                raise FileNotFoundError(f"File key {file_key} yielded no compatible path.")
            self.file_paths.extend(file_paths)

        self.file_paths = sorted(self.file_paths)

        # Print out the list of loaded files
        num_files = len(self.file_paths)
        file_list = " - " + "\n - ".join(self.file_paths[:max_print_files])
        file_list += "\n ... \n" if num_files > max_print_files else "\n"
        logger.info("Will load %d file(s):\n%s", num_files, file_list)

    def process_entry_list(self, n_entry=None, n_skip=None, entry_list=None):
        """Create a list of entries that can be accessed by :meth:`__getitem__`.

        Parameters
        ----------
        n_entry : int, optional
            Maximum number of entries to load
        n_skip : int, optional
            Number of entries to skip at the beginning
        entry_list : List[int], optional
            List of integer entry IDs to add to the index

        Returns
        -------
        np.ndarray
            List of integer entry IDs in the index
        """
        assert (n_entry is None and n_skip is None) or entry_list is None, (
            "Cannot specify `n_entry` or `n_skip` at the same time as `entry_list`."
        )

        if entry_list is not None:
            entry_list = np.asarray(entry_list, dtype=np.int64)
            invalid = (entry_list < 0) | (entry_list >= self.num_entries)
            assert not np.any(invalid), (
                f"Entries {entry_list[invalid]} are out of range "
                f"(number of entries: {self.num_entries})."
            )
            return entry_list

        n_skip = n_skip if n_skip else 0
        n_entry = n_entry if n_entry else self.num_entries - n_skip
        assert n_skip + n_entry <= self.num_entries, (
            f"Mismatch between `n_entry` ({n_entry}), `n_skip` ({n_skip}) "
            f"and the number of entries in the files ({self.num_entries})."
        )

        return np.arange(n_skip, n_skip + n_entry, dtype=np.int64)

    def get(self, entry):
        """Load one entry, given its global index across all files.

        Parameters
        ----------
        entry : int
            Global entry index

        Returns
        -------
        dict
            Dictionary with the `index` of the entry, its `vertex_lists` and
            its `cluster_lists`
        """
        path = self.file_paths[self.file_index[entry]]
        with h5py.File(path, "r") as in_file:
            event = in_file["events"][str(self.file_entries[entry])]

            # Load the candidate vertices
            positions = event["vertices"][()].reshape(-1, 3)
            if "vertex_ids" in event:
                ids = event["vertex_ids"][()]
            else:
                ids = np.arange(len(positions))
            vertices = [Vertex(id=int(i), position=pos) for i, pos in zip(ids, positions)]

            # Load the requested cluster lists
            cluster_lists = {}
            for name in self.cluster_list_names:
                if name not in event:
                    # Missing lists are reported when an algorithm asks for them
                    continue
                cluster_lists[name] = self.load_clusters(event[name])

        return {
            "index": int(entry),
            "vertex_lists": {self.vertex_list_name: ObjectList(vertices, Vertex)},
            "cluster_lists": cluster_lists,
        }

    @staticmethod
    def load_clusters(group):
        """Load a list of clusters from an HDF5 group.

        Parameters
        ----------
        group : h5py.Group
            Group with one subgroup per cluster

        Returns
        -------
        ObjectList
            List of clusters
        """
        clusters = []
        for key in sorted(group.keys(), key=int):
            cluster = group[key]
            clusters.append(
                Cluster(
                    id=int(key),
                    hit_type=cluster.attrs["hit_type"],
                    points=cluster["points"][()],
                    layers=cluster["layers"][()] if "layers" in cluster else None,
                    energies=cluster["energies"][()] if "energies" in cluster else None,
                )
            )

        return ObjectList(clusters, Cluster)
