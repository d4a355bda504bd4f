"""Typed exceptions raised while running reconstruction algorithms.

Configuration problems are reported separately, through the exceptions
defined in :mod:`larvtx.config.errors`.
"""

__all__ = [
    "ReconstructionError",
    "ListNotFoundError",
    "ListAlreadyPresentError",
    "InvalidParameterError",
]


class ReconstructionError(Exception):
    """Base exception for all failures of a reconstruction pass."""


class ListNotFoundError(ReconstructionError, KeyError):
    """Raised when a named object list is not registered in the event."""

    def __init__(self, kind, name):
        """Initialize with the kind and name of the missing list.

        Parameters
        ----------
        kind : str
            Kind of list that was requested (e.g. 'vertex', 'cluster')
        name : str
            Name of the missing list
        """
        self.kind = kind
        self.name = name
        super().__init__(f"No {kind} list registered under the name `{name}`.")

    def __str__(self):
        # KeyError would otherwise wrap the message in quotes
        return self.args[0]


class ListAlreadyPresentError(ReconstructionError):
    """Raised when saving a list under a name which is already in use."""


class InvalidParameterError(ReconstructionError, ValueError):
    """Raised when an algorithm is handed inconsistent inputs, e.g. a cluster
    list which belongs to another view than the one being scanned."""
