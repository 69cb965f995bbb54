"""Wall and CPU time measurements of the individual processing steps."""

import time
from dataclasses import dataclass


@dataclass
class Time:
    """Simple dataclass to hold time information.

    Attributes
    ----------
    wall : float, optional
         Wall time
    cpu : float, optional
         CPU time
    """

    wall: float = None
    cpu: float = None

    def __add__(self, other):
        return Time(wall=self.wall + other.wall, cpu=self.cpu + other.cpu)

    def __sub__(self, other):
        return Time(wall=self.wall - other.wall, cpu=self.cpu - other.cpu)

    @property
    def valid(self):
        """Whether the time has been recorded."""
        return self.wall is not None and self.cpu is not None

    @classmethod
    def current(cls):
        """Returns the current time (wall and CPU).

        Returns
        -------
        Time
           Current time
        """
        return cls(time.time(), time.process_time())


class Stopwatch:
    """Holds timing information for a specific process."""

    def __init__(self):
        """Give default values to the underlying class attributes."""
        self._start = Time()
        self._time = Time()
        self._total = Time(0.0, 0.0)
        self.count = 0

    @property
    def running(self):
        """Whether the stopwatch is currently running."""
        return self._start.valid

    def start(self, start=None):
        """Start the watch.

        Parameters
        ----------
        start : Time, optional
            Start time. If not specified, use the current time
        """
        if self.running:
            raise ValueError("Cannot restart a watch that has not been stopped.")

        self._start = start or Time.current()

    def stop(self, stop=None):
        """Stop the watch, accumulate the time since the last start.

        Parameters
        ----------
        stop : Time, optional
            Stop time. If not specified, use the current time
        """
        if not self.running:
            raise ValueError("Cannot stop a watch that has not been started.")

        self._time = (stop or Time.current()) - self._start
        self._total += self._time
        self._start = Time()
        self.count += 1

    @property
    def time(self):
        """Time between the last start and the last stop."""
        if not self._time.valid:
            raise ValueError("Cannot get time of watch that has never been stopped.")

        return self._time

    @property
    def time_sum(self):
        """Sum of times between all watch starts and stops."""
        return self._total


class StopwatchManager:
    """Organizes the time measurements of several processes."""

    def __init__(self):
        """Initalize the basic private stopwatch attributes."""
        self._watch = {}

    def __contains__(self, key):
        return key in self._watch

    def keys(self):
        """List of all initialized stopwatch tags."""
        return self._watch.keys()

    def items(self):
        """List of (tag, stopwatch) pairs."""
        return self._watch.items()

    def initialize(self, key):
        """Initialize one or more stopwatches. If a stopwatch has already
        been initialized, it is reset.

        Parameters
        ----------
        key : Union[str, List[str]]
            Key or list of keys to initialize a `Stopwatch` for
        """
        keys = [key] if isinstance(key, str) else key
        for k in keys:
            self._watch[k] = Stopwatch()

    def _get(self, key):
        """Fetch one stopwatch, throw if it does not exist."""
        if key not in self._watch:
            raise KeyError(f"No stopwatch initialized under the name: {key}")

        return self._watch[key]

    def start(self, key):
        """Starts the stopwatch of one key.

        Parameters
        ----------
        key : str
            Key for which to start the clock
        """
        self._get(key).start()

    def stop(self, key):
        """Stops the stopwatch of one key.

        Parameters
        ----------
        key : str
            Key for which to stop the clock
        """
        self._get(key).stop()

    def time(self, key):
        """Time recorded between the last start/stop pair of one key.

        Parameters
        ----------
        key : str
            Key for which to return the time

        Returns
        -------
        Time
            Execution time of one iteration of a process
        """
        return self._get(key).time

    def time_sum(self, key):
        """Sum of the times recorded between each start/stop pair of one key.

        Parameters
        ----------
        key : str
            Key for which to return the time

        Returns
        -------
        Time
            Execution time of all iterations of a process so far
        """
        return self._get(key).time_sum

    def update(self, other, prefix=None):
        """Updates this manager with the watches of another manager.

        Parameters
        ----------
        other : StopwatchManager
             Manager of another process
        prefix : str, optional
             String to prefix the timer keys with
        """
        for key, value in other.items():
            if prefix is None:
                self._watch[key] = value
            else:
                self._watch[f"{prefix}_{key}"] = value
