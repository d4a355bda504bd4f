"""Construct a geometry projector from its configuration."""

from larvtx.utils.factory import instantiate, module_dict

from . import projection

__all__ = ["geo_factory"]

# Build a dictionary of available projectors
GEO_DICT = module_dict(projection)


def geo_factory(cfg=None):
    """Instantiates a geometry projector from a configuration dictionary.

    Parameters
    ----------
    cfg : Union[str, dict], optional
        Projector configuration. If not specified, the default wire-plane
        projector is built.

    Returns
    -------
    object
         Initialized projector object
    """
    if cfg is None:
        cfg = {}
    if isinstance(cfg, dict) and "name" not in cfg:
        cfg = dict(cfg, name=projection.WirePlaneProjector.name)

    return instantiate(GEO_DICT, cfg)
