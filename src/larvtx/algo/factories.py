"""Construct a reconstruction algorithm class from its name."""

from larvtx.utils.factory import instantiate, module_dict

from . import vertex

# Build a dictionary of available algorithms
ALGORITHM_DICT = {}
for module in [vertex]:
    ALGORITHM_DICT.update(**module_dict(module, pattern="Algorithm"))


def algorithm_factory(name, cfg):
    """Instantiates a reconstruction algorithm from a configuration dictionary.

    Parameters
    ----------
    name : str
        Name of the algorithm
    cfg : dict
        Algorithm configuration

    Returns
    -------
    object
         Initialized algorithm object
    """
    # Provide the name to the configuration, unless it is already set
    cfg = dict(cfg)
    cfg.setdefault("name", name)

    return instantiate(ALGORITHM_DICT, cfg)
