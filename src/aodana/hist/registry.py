"""Module with the registry which holds the histograms of one task."""

from collections import OrderedDict

from .histogram import Histogram, HistType

__all__ = ["HistogramRegistry"]


class HistogramRegistry:
    """Named collection of histograms.

    Histograms are booked while the owning task initializes. Once the
    registry is locked, the set of histograms and their binning is fixed:
    only their content can change.

    Attributes
    ----------
    name : str
        Name of the registry
    """

    def __init__(self, name):
        """Initialize an empty, unlocked registry.

        Parameters
        ----------
        name : str
            Name of the registry
        """
        self.name = name
        self._hists = OrderedDict()
        self._locked = False

    def __repr__(self):
        return f"HistogramRegistry(name={self.name!r}, histograms={len(self)})"

    def __len__(self):
        return len(self._hists)

    def __contains__(self, name):
        return name in self._hists

    def __iter__(self):
        """Iterates over the histograms, in booking order."""
        return iter(self._hists.values())

    def __getitem__(self, name):
        return self.get(name)

    def names(self):
        """Names of the histograms, in booking order."""
        return list(self._hists.keys())

    def items(self):
        """(name, histogram) pairs, in booking order."""
        return self._hists.items()

    @property
    def locked(self):
        """Whether histograms can still be booked."""
        return self._locked

    def lock(self):
        """Forbids booking any more histograms."""
        self._locked = True

    def add(self, name, title, kind=HistType.TH1F, axes=()):
        """Books a new histogram.

        Parameters
        ----------
        name : str
            Name of the histogram. Slashes can be used to sort histograms
            into folders (e.g. `pt/Pi`).
        title : str
            Title of the histogram, optionally followed by axis titles
            (`"title;x axis title;y axis title"`)
        kind : Union[HistType, str], default HistType.TH1F
            Histogram type
        axes : List[Union[Axis, tuple]]
            One axis (or axis specification) per dimension

        Returns
        -------
        Histogram
            Booked histogram
        """
        if self._locked:
            raise RuntimeError(
                f"Cannot book `{name}`: the histograms of `{self.name}` are "
                "fixed once the task is initialized."
            )
        if name in self._hists:
            raise ValueError(f"A histogram named `{name}` already exists in `{self.name}`.")

        hist = Histogram(name, title, kind, axes)
        self._hists[name] = hist

        return hist

    def get(self, name):
        """Fetches one histogram by name.

        Parameters
        ----------
        name : str
            Name of the histogram

        Returns
        -------
        Histogram
            Histogram
        """
        if name not in self._hists:
            raise KeyError(
                f"No histogram named `{name}` in `{self.name}`. "
                f"Available: {self.names()}."
            )

        return self._hists[name]

    def fill(self, name, *values, weight=1.0):
        """Fills one histogram.

        Parameters
        ----------
        name : str
            Name of the histogram
        *values : Union[float, np.ndarray]
            Coordinates along each axis
        weight : Union[float, np.ndarray], default 1.0
            Weight of each fill
        """
        self.get(name).fill(*values, weight=weight)

    def fill_label(self, name, label, weight=1.0):
        """Fills the named bin of one 1-D histogram.

        Parameters
        ----------
        name : str
            Name of the histogram
        label : str
            Name of the bin
        weight : float, default 1.0
            Weight of the fill
        """
        self.get(name).fill_label(label, weight)
