"""Module to write the vertex selection output to CSV."""

import os

import numpy as np

__all__ = ["CSVWriter"]


class CSVWriter:
    """Writes the selected vertex of each event to a CSV file.

    One row is written per event. Events without a selected vertex are
    written with an `id` of -1 and `nan` coordinates.

    Typical configuration should look like:

    .. code-block:: yaml

        io:
          ...
          writer:
            name: csv
            file_name: output.csv
    """

    name = "csv"

    # Columns of the output file
    keys = (
        "index",
        "num_candidates",
        "num_selected",
        "id",
        "position_x",
        "position_y",
        "position_z",
    )

    def __init__(self, file_name="output.csv", overwrite=False):
        """Initialize the basics of the output file.

        Parameters
        ----------
        file_name : str, default 'output.csv'
            Name of the output CSV file
        overwrite : bool, default False
            If True, overwrite the output file if it already exists
        """
        # Check that output file does not already exist, if requested
        if not overwrite and os.path.isfile(file_name):
            raise FileExistsError(f"File with name {file_name} already exists.")

        self.file_name = file_name
        self.created = False

    def create(self):
        """Initialize the header of the CSV file."""
        with open(self.file_name, "w", encoding="utf-8") as out_file:
            out_file.write(",".join(self.keys) + "\n")

        self.created = True

    def append(self, index, candidates, selected):
        """Append the selection output of one event to the CSV file.

        Parameters
        ----------
        index : int
            Index of the event
        candidates : List[Vertex]
            Candidate vertices of the event
        selected : List[Vertex]
            Selected vertices of the event
        """
        # If this function has never been called, initialize the CSV file
        if not self.created:
            self.create()

        row = {"index": index, "num_candidates": len(candidates), "num_selected": len(selected)}
        if len(selected):
            row.update(selected[0].scalar_dict())
        else:
            row["id"] = -1
            for axis in ("x", "y", "z"):
                row[f"position_{axis}"] = np.nan

        with open(self.file_name, "a", encoding="utf-8") as out_file:
            out_file.write(",".join([str(row[k]) for k in self.keys]) + "\n")
