"""Contains base class of all reconstruction algorithms."""

from abc import ABC, abstractmethod

__all__ = ["AlgorithmBase"]


class AlgorithmBase(ABC):
    """Base class of all reconstruction algorithms.

    An algorithm is configured once, upon construction, and then run on any
    number of events. It must not keep any event-dependent state between two
    calls to :meth:`run`.

    Attributes
    ----------
    name : str
        Name of the algorithm as defined in the configuration file
    aliases : Tuple[str]
        Alternative acceptable names for an algorithm
    """

    # Name of the algorithm (as specified in the configuration)
    name = None

    # Alternative allowed names of the algorithm
    aliases = ()

    def __call__(self, context):
        """Calls the algorithm on one event.

        Parameters
        ----------
        context : EventContext
            Named object lists of the event
        """
        return self.run(context)

    @abstractmethod
    def run(self, context):
        """Run the algorithm on one event.

        Parameters
        ----------
        context : EventContext
            Named object lists of the event
        """
        raise NotImplementedError("Must define the `run` function.")
