"""Fixed-binning angular histogram and its Numba-accelerated kernels."""

import numba as nb
import numpy as np

__all__ = ["AngularHistogram", "fill", "sum_squares"]


@nb.njit(cache=True)
def fill(
    contents: nb.float64[:],
    low: nb.float64,
    high: nb.float64,
    values: nb.float64[:],
    weights: nb.float64[:],
) -> None:
    """Accumulate weighted entries into uniform bins, in place.

    Entries outside of `[low, high)` are discarded, as are non-finite values.
    The bin index is computed as `floor((value - low) / width)`, which can
    land on the number of bins for values which are a rounding error away
    from `high`: those entries are discarded too.

    Parameters
    ----------
    contents : np.ndarray
        (B) Bin contents, updated in place
    low : float
        Lower edge of the first bin
    high : float
        Upper edge of the last bin
    values : np.ndarray
        (N) Values to bin
    weights : np.ndarray
        (N) Weight of each value
    """
    num_bins = len(contents)
    width = (high - low) / num_bins
    for i in range(len(values)):
        value = values[i]
        if not (value >= low and value < high):
            continue

        index = int((value - low) / width)
        if index < num_bins:
            contents[index] += weights[i]


@nb.njit(cache=True)
def sum_squares(contents: nb.float64[:]) -> nb.float64:
    """Sum of the squared bin contents.

    Parameters
    ----------
    contents : np.ndarray
        (B) Bin contents

    Returns
    -------
    float
        Sum of squares
    """
    total = 0.0
    for i in range(len(contents)):
        total += contents[i] * contents[i]

    return total


class AngularHistogram:
    """One-dimensional histogram with uniform bins over a fixed angular range.

    The histogram is filled once and read once. It does not keep track of
    underflow or overflow entries.

    Attributes
    ----------
    n_bins : int
        Number of bins
    phi_min : float
        Lower edge of the first bin
    phi_max : float
        Upper edge of the last bin
    contents : np.ndarray
        (B) Accumulated weight in each bin
    """

    def __init__(self, n_bins=200, phi_min=-1.1 * np.pi, phi_max=1.1 * np.pi):
        """Initialize an empty histogram.

        Parameters
        ----------
        n_bins : int, default 200
            Number of bins
        phi_min : float, default -1.1 pi
            Lower edge of the first bin
        phi_max : float, default 1.1 pi
            Upper edge of the last bin
        """
        if n_bins < 1:
            raise ValueError(f"A histogram needs at least one bin, got {n_bins}.")
        if not phi_max > phi_min:
            raise ValueError(
                f"The upper edge of the histogram ({phi_max}) must be larger "
                f"than its lower edge ({phi_min})."
            )

        self.n_bins = int(n_bins)
        self.phi_min = float(phi_min)
        self.phi_max = float(phi_max)
        self.contents = np.zeros(self.n_bins, dtype=np.float64)

    @property
    def bin_width(self):
        """Width of each bin.

        Returns
        -------
        float
            Bin width
        """
        return (self.phi_max - self.phi_min) / self.n_bins

    def fill(self, angle, weight=1.0):
        """Add a single weighted entry to the histogram.

        Parameters
        ----------
        angle : float
            Angle of the entry
        weight : float, default 1.
            Weight of the entry
        """
        self.fill_many(np.array([angle]), np.array([weight]))

    def fill_many(self, angles, weights):
        """Add a set of weighted entries to the histogram.

        Parameters
        ----------
        angles : np.ndarray
            (N) Angles of the entries
        weights : np.ndarray
            (N) Weights of the entries
        """
        angles = np.ascontiguousarray(angles, dtype=np.float64)
        weights = np.ascontiguousarray(weights, dtype=np.float64)
        assert len(angles) == len(weights), "Must provide one weight per angle."
        fill(self.contents, self.phi_min, self.phi_max, angles, weights)

    def bin_content(self, index):
        """Accumulated weight of one bin.

        Parameters
        ----------
        index : int
            Bin index

        Returns
        -------
        float
            Bin content
        """
        return self.contents[index]

    def sum_squares(self):
        """Sum of the squared bin contents.

        Returns
        -------
        float
            Sum of squares
        """
        return sum_squares(self.contents)
