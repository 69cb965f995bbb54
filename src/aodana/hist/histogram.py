"""Module with the binned histogram class."""

from enum import Enum

import numpy as np

from .axis import Axis

__all__ = ["HistType", "Histogram"]


class HistType(Enum):
    """Enumerates the histogram types as (dimension, bin content type)."""

    TH1F = (1, np.float32)
    TH1D = (1, np.float64)
    TH2F = (2, np.float32)
    TH2D = (2, np.float64)

    @property
    def ndim(self):
        """Number of dimensions of the histogram."""
        return self.value[0]

    @property
    def dtype(self):
        """Type of the bin contents."""
        return self.value[1]


class Histogram:
    """Binned 1-D or 2-D counter.

    Attributes
    ----------
    name : str
        Name of the histogram, unique within its registry
    title : str
        Title of the histogram
    kind : HistType
        Histogram type
    axes : List[Axis]
        One axis per dimension
    counts : np.ndarray
        Sum of weights in each bin, including under/overflow bins
    sumw2 : np.ndarray
        Sum of squared weights in each bin, including under/overflow bins
    entries : int
        Number of fill calls (one per value filled)
    """

    def __init__(self, name, title="", kind=HistType.TH1F, axes=()):
        """Initialize an empty histogram.

        The title can also carry the axis titles, separated by semicolons:
        `"title;x axis title;y axis title"`. Axis titles given this way only
        apply to axes which do not already have a title.

        Parameters
        ----------
        name : str
            Name of the histogram
        title : str, optional
            Title of the histogram (and of its axes)
        kind : Union[HistType, str], default HistType.TH1F
            Histogram type
        axes : List[Union[Axis, tuple]]
            One axis (or axis specification) per dimension
        """
        self.name = name
        self.kind = HistType[kind] if isinstance(kind, str) else HistType(kind)
        self.axes = [Axis.parse(a) for a in axes]
        if len(self.axes) != self.kind.ndim:
            raise ValueError(
                f"A {self.kind.name} histogram needs {self.kind.ndim} axis "
                f"definition(s), got {len(self.axes)}."
            )

        # Split the histogram title from the axis titles
        parts = title.split(";")
        self.title = parts[0]
        for axis, label in zip(self.axes, parts[1:]):
            if not axis.label:
                axis.label = label.strip()

        shape = tuple(axis.nbins + 2 for axis in self.axes)
        self.counts = np.zeros(shape, dtype=self.kind.dtype)
        self.sumw2 = np.zeros(shape, dtype=np.float64)
        self.entries = 0

    def __repr__(self):
        return (
            f"Histogram(name={self.name!r}, kind={self.kind.name}, "
            f"entries={self.entries})"
        )

    @property
    def ndim(self):
        """Number of dimensions of the histogram."""
        return self.kind.ndim

    def fill(self, *values, weight=1.0):
        """Fills the histogram with one value (or array of values) per axis.

        Parameters
        ----------
        *values : Union[float, np.ndarray]
            Coordinates along each axis
        weight : Union[float, np.ndarray], default 1.0
            Weight of each fill
        """
        if len(values) != self.ndim:
            raise ValueError(
                f"Histogram `{self.name}` has {self.ndim} dimension(s), "
                f"got {len(values)} value(s) to fill."
            )

        coords = np.broadcast_arrays(
            *[np.atleast_1d(np.asarray(v, dtype=np.float64)) for v in values]
        )
        weights = np.broadcast_to(np.asarray(weight, dtype=np.float64), coords[0].shape)
        index = tuple(axis.find_bin(c) for axis, c in zip(self.axes, coords))

        np.add.at(self.counts, index, weights.astype(self.counts.dtype))
        np.add.at(self.sumw2, index, weights**2)
        self.entries += coords[0].size

    def fill_label(self, label, weight=1.0):
        """Fills the bin which carries a given name (1-D histograms only).

        Parameters
        ----------
        label : str
            Name of the bin
        weight : float, default 1.0
            Weight of the fill
        """
        if self.ndim != 1:
            raise ValueError("Can only fill named bins of 1-D histograms.")

        index = self.axes[0].label_bin(label)
        self.counts[index] += weight
        self.sumw2[index] += weight**2
        self.entries += 1

    def values(self, flow=False):
        """Sum of weights in each bin.

        Parameters
        ----------
        flow : bool, default False
            If `True`, include the under/overflow bins

        Returns
        -------
        np.ndarray
            Bin contents
        """
        if flow:
            return self.counts.copy()

        return self.counts[(slice(1, -1),) * self.ndim].copy()

    def errors(self):
        """Statistical uncertainty on the content of each regular bin.

        Returns
        -------
        np.ndarray
            Square root of the sum of squared weights in each bin
        """
        return np.sqrt(self.sumw2[(slice(1, -1),) * self.ndim])

    def integral(self, flow=False):
        """Sum of the bin contents.

        Parameters
        ----------
        flow : bool, default False
            If `True`, include the under/overflow bins

        Returns
        -------
        float
            Integral of the histogram
        """
        return float(self.values(flow).sum())

    def reset(self):
        """Sets all bin contents back to zero."""
        self.counts[...] = 0
        self.sumw2[...] = 0
        self.entries = 0
