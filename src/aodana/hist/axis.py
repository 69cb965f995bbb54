"""Module with the histogram axis definition."""

import numpy as np

__all__ = ["Axis"]


class Axis:
    """Binning of one histogram dimension.

    Bins follow the ROOT convention: bin 0 is the underflow bin (values
    below the lower edge), bins 1 to `nbins` are the regular bins (lower
    edge included, upper edge excluded) and bin `nbins + 1` is the overflow
    bin (values at or above the upper edge, and NaN).

    Bins can also be named, in which case each new name takes the next
    regular bin which does not have a name yet.

    Attributes
    ----------
    edges : np.ndarray
        Bin edges, `nbins + 1` values in increasing order
    label : str
        Axis title
    bin_labels : List[str]
        Names given to the first regular bins
    """

    def __init__(self, nbins, low, high, label=""):
        """Initialize a uniform binning.

        Parameters
        ----------
        nbins : int
            Number of regular bins
        low : float
            Lower edge of the first bin
        high : float
            Upper edge of the last bin
        label : str, optional
            Axis title
        """
        if int(nbins) < 1:
            raise ValueError(f"An axis must have at least one bin, got {nbins}.")
        if not high > low:
            raise ValueError(
                f"The upper edge of an axis ({high}) must be above its lower "
                f"edge ({low})."
            )

        self.edges = np.linspace(low, high, int(nbins) + 1)
        self.label = label
        self.bin_labels = []

    @classmethod
    def from_edges(cls, edges, label=""):
        """Initialize a variable binning.

        Parameters
        ----------
        edges : List[float]
            Bin edges, in increasing order
        label : str, optional
            Axis title

        Returns
        -------
        Axis
            Axis with the requested edges
        """
        edges = np.asarray(edges, dtype=np.float64)
        if edges.ndim != 1 or len(edges) < 2:
            raise ValueError("Must provide at least two bin edges.")
        if np.any(np.diff(edges) <= 0):
            raise ValueError("Bin edges must be strictly increasing.")

        axis = cls(1, edges[0], edges[-1], label)
        axis.edges = edges

        return axis

    @classmethod
    def parse(cls, spec):
        """Builds an axis from a configuration-style specification.

        Accepted specifications are:
        - an :class:`Axis`, returned as is
        - `(nbins, low, high)` or `(nbins, low, high, label)`
        - `(edges,)` or `(edges, label)`, with `edges` a list of bin edges

        Parameters
        ----------
        spec : Union[Axis, tuple, list]
            Axis specification

        Returns
        -------
        Axis
            Axis object
        """
        if isinstance(spec, Axis):
            return spec

        spec = tuple(spec)
        if len(spec) and np.ndim(spec[0]) == 1:
            return cls.from_edges(*spec)

        if len(spec) not in (3, 4):
            raise ValueError(
                "An axis is specified as (nbins, low, high[, label]) or "
                f"(edges[, label]), got {spec}."
            )

        return cls(*spec)

    def __repr__(self):
        return (
            f"Axis(nbins={self.nbins}, low={self.low}, high={self.high}, "
            f"label={self.label!r})"
        )

    def __eq__(self, other):
        if not isinstance(other, Axis):
            return False

        return (
            np.array_equal(self.edges, other.edges)
            and self.label == other.label
            and self.bin_labels == other.bin_labels
        )

    @property
    def nbins(self):
        """Number of regular bins."""
        return len(self.edges) - 1

    @property
    def low(self):
        """Lower edge of the first bin."""
        return float(self.edges[0])

    @property
    def high(self):
        """Upper edge of the last bin."""
        return float(self.edges[-1])

    @property
    def centers(self):
        """Centers of the regular bins."""
        return 0.5 * (self.edges[1:] + self.edges[:-1])

    def find_bin(self, values):
        """Finds the bin of each value, including under/overflow bins.

        Parameters
        ----------
        values : Union[float, np.ndarray]
            Values to bin

        Returns
        -------
        Union[int, np.ndarray]
            Bin index of each value, in [0, nbins + 1]
        """
        return np.searchsorted(self.edges, values, side="right")

    def label_bin(self, label):
        """Finds the bin of a bin name, assigns it a bin if it is new.

        Parameters
        ----------
        label : str
            Bin name

        Returns
        -------
        int
            Bin index of the name (overflow if all bins are already named)
        """
        if label in self.bin_labels:
            return self.bin_labels.index(label) + 1

        if len(self.bin_labels) < self.nbins:
            self.bin_labels.append(label)
            return len(self.bin_labels)

        return self.nbins + 1
