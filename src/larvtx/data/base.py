"""Module with a parent class of all data structures."""

from dataclasses import asdict, dataclass

import numpy as np


@dataclass(eq=False)
class DataBase:
    """Base class of all data structures.

    Defines basic methods shared by all data structures.
    """

    # Fixed-length attributes as (key, size) or (key, (size, dtype)) pairs
    _fixed_length_attrs = ()

    # Variable-length attributes as (key, dtype) or (key, (width, dtype)) pairs
    _var_length_attrs = ()

    # Attributes specifying coordinates
    _pos_attrs = ()

    # Attributes that must never be stored to file
    _skip_attrs = ()

    # Euclidean axis labels
    _axes = ("x", "y", "z")

    def __post_init__(self):
        """Immediately called after building the class attributes.

        Gives default values to array-like attributes and casts the provided
        ones to their expected type. If a default value was provided in the
        attribute definition, all instances of this class would point to the
        same memory location.
        """
        # Provide default values to the variable-length array attributes
        for attr, dtype in self._var_length_attrs:
            width = None
            if isinstance(dtype, tuple):
                width, dtype = dtype

            value = getattr(self, attr)
            if value is None:
                shape = 0 if width is None else (0, width)
                setattr(self, attr, np.empty(shape, dtype=dtype))
            else:
                value = np.asarray(value, dtype=dtype)
                if width is not None:
                    value = value.reshape(-1, width)
                setattr(self, attr, value)

        # Provide default values to the fixed-length array attributes
        for attr, size in self._fixed_length_attrs:
            dtype = np.float32
            if isinstance(size, tuple):
                size, dtype = size

            value = getattr(self, attr)
            if value is None:
                setattr(self, attr, np.full(size, -np.inf, dtype=dtype))
            else:
                value = np.asarray(value, dtype=dtype)
                assert value.shape == (size,), (
                    f"The `{attr}` attribute of `{self.__class__.__name__}` "
                    f"must have {size} components, got shape {value.shape}."
                )
                setattr(self, attr, value)

    def __eq__(self, other):
        """Checks that all attributes of two class instances are the same.

        This overloads the default dataclass `__eq__` method to include an
        appopriate check for vector (numpy) attributes.

        Parameters
        ----------
        other : obj
            Other instance of the same object class

        Returns
        -------
        bool
            `True` if all attributes of both objects are identical
        """
        if self.__class__ != other.__class__:
            return False

        for k, v in self.__dict__.items():
            if np.isscalar(v):
                if getattr(other, k) != v:
                    return False

            else:
                v_other = getattr(other, k)
                if v.shape != v_other.shape or (v_other != v).any():
                    return False

        return True

    def as_dict(self):
        """Returns the data class as dictionary of (key, value) pairs.

        Returns
        -------
        dict
            Dictionary of attribute names and their values
        """
        return {k: v for k, v in asdict(self).items() if not k in self._skip_attrs}

    def scalar_dict(self, attrs=None):
        """Returns the data class attributes as a dictionary of scalars.

        This is useful when storing data classes in CSV files, which expect
        a single scalar per column in the table. Variable-length attributes
        are not expanded.

        Parameters
        ----------
        attrs : List[str], optional
            List of attribute names to include in the dictionary. If not
            specified, all the storable keys are included.

        Returns
        -------
        dict
            Dictionary of scalar attribute values
        """
        var_attrs = [attr for attr, _ in self._var_length_attrs]
        scalar_dict = {}
        for attr, value in self.as_dict().items():
            # If the attribute is not requested, skip
            if attrs is not None and attr not in attrs:
                continue

            # Dispatch
            if np.isscalar(value):
                scalar_dict[attr] = value

            elif attr in self._pos_attrs:
                for i, v in enumerate(value):
                    scalar_dict[f"{attr}_{self._axes[i]}"] = v

            elif attr not in var_attrs:
                for i, v in enumerate(value):
                    scalar_dict[f"{attr}_{i}"] = v

        return scalar_dict
