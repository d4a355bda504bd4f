"""Manages the operation of reconstruction algorithms."""

from collections import OrderedDict
from copy import deepcopy

import numpy as np

from larvtx.utils.logger import logger

from .factories import algorithm_factory

__all__ = ["AlgorithmManager"]


class AlgorithmManager:
    """Manager in charge of handling reconstruction algorithms.

    It loads all the algorithm objects once and runs them on each event, in
    decreasing order of priority. Algorithms with the same priority run in
    the order in which they are configured.
    """

    def __init__(self, cfg):
        """Initialize the algorithm manager.

        Parameters
        ----------
        cfg : dict
            Algorithm configurations, keyed by algorithm name. Each block may
            specify a `priority` (default -1).
        """
        # Loop over the algorithms and get their priorities
        cfg = deepcopy(cfg)
        keys = np.array(list(cfg.keys()))
        priorities = -np.ones(len(keys), dtype=np.int32)
        for i, key in enumerate(keys):
            if cfg[key] is None:
                cfg[key] = {}
            if "priority" in cfg[key]:
                priorities[i] = cfg[key].pop("priority")

        # Add the algorithms to the list in decreasing order of priority
        self.modules = OrderedDict()
        keys = keys[np.argsort(-priorities, kind="stable")]
        for key in keys:
            self.modules[str(key)] = algorithm_factory(str(key), cfg[key])

    def __len__(self):
        """Number of configured algorithms."""
        return len(self.modules)

    def __call__(self, context):
        """Run every algorithm on one event.

        Parameters
        ----------
        context : EventContext
            Named object lists of the event

        Returns
        -------
        Dict[str, object]
            Value returned by each algorithm, keyed by algorithm name
        """
        results = {}
        for key, module in self.modules.items():
            logger.debug("Running algorithm `%s`", key)
            results[key] = module(context)

        return results
