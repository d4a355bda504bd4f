"""Writers of the reconstruction outputs."""

from .csv import CSVWriter
