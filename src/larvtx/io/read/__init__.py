"""Readers of the event inputs."""

from .hdf5 import HDF5Reader
