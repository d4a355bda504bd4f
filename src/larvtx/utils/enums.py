"""Module which contains enumerated variables shared across the project."""

from enum import IntEnum
from numbers import Integral

__all__ = ["HitTypeEnum", "enum_factory"]


class HitTypeEnum(IntEnum):
    """Enumerates the three readout views of a wire-plane TPC."""

    U = 0
    V = 1
    W = 2


# Views, in the order in which they are scanned
VIEWS = (HitTypeEnum.U, HitTypeEnum.V, HitTypeEnum.W)


def enum_factory(enum, value):
    """Parses an enumerated object from string name(s) to value(s).

    Parameters
    ----------
    enum : str
        Name of the enumerated type
    value : Union[str, int, List[Union[str, int]]]
        Name or names of the enumerated objects (from config)

    Returns
    -------
    Union[IntEnum, List[IntEnum]]
        Enumerated object or objects
    """
    # Get the enumerated type
    ENUM_DICT = {"hit_type": HitTypeEnum}
    assert enum in ENUM_DICT, (
        f"Enumerated type not recognized: {enum}. Must be one of "
        f"{list(ENUM_DICT.keys())}."
    )
    enum = ENUM_DICT[enum]

    # Translate enumerated strings (or raw values) into enumerated objects
    if isinstance(value, (str, bytes, Integral)):
        return _parse(enum, value)

    return [_parse(enum, v) for v in value]


def _parse(enum, value):
    """Parses a single enumerated object.

    Parameters
    ----------
    enum : IntEnum
        Enumerated type
    value : Union[str, int, bytes]
        Name or value of the enumerated object

    Returns
    -------
    IntEnum
        Enumerated object
    """
    if isinstance(value, bytes):
        value = value.decode()

    if isinstance(value, str):
        if value.upper() not in enum.__members__:
            raise ValueError(
                f"Enumerated object not recognized: {value}. Must be one "
                f"of {[e.name for e in enum]}."
            )

        return enum[value.upper()]

    return enum(int(value))
