"""
Input data types: a time interval and a multi-channel spike-times input.
Spike times are in ms. Inputs are treated as read-only values; the
generators in `tempotrons.utils` always return new objects.
"""
from dataclasses import dataclass

import numpy as np

from tempotrons.errors import InvalidInputError


@dataclass(frozen=True)
class TimeInterval:
    start: float
    end: float

    def __post_init__(self):
        if not self.start <= self.end:
            raise InvalidInputError("Time interval must satisfy start <= end, got ["
                                    + str(self.start) + ", " + str(self.end) + "]")

    @property
    def length(self):
        return self.end - self.start

    def __contains__(self, t):
        return self.start <= t <= self.end

    def shift(self, dt):
        return TimeInterval(self.start + dt, self.end + dt)


def as_interval(T):
    """
    Accept a `TimeInterval` or a plain duration `T` (meaning [0, T])
    :param T: interval or non-negative length (ms)
    :return: TimeInterval
    """
    if isinstance(T, TimeInterval):
        return T
    return TimeInterval(0.0, float(T))


def get_duration(channels):
    """
    Smallest interval holding every spike of `channels`; [0, 0] if there are no spikes
    """
    non_empty = [c for c in channels if len(c) > 0]
    if not non_empty:
        return TimeInterval(0.0, 0.0)
    return TimeInterval(float(min(np.min(c) for c in non_empty)),
                        float(max(np.max(c) for c in non_empty)))


class SpikesInput:
    """
    Spike times of N input channels presented over `duration`.
    Each channel is stored as a sorted float array. A channel may be empty,
    but there must be at least one channel and every spike must lie in `duration`.
    """

    def __init__(self, channels, duration=None):
        channels = [np.sort(np.asarray(c, dtype=float).ravel()) for c in channels]
        if len(channels) < 1:
            raise InvalidInputError("A spikes input needs at least one channel")
        for c in channels:
            if not np.all(np.isfinite(c)):
                raise InvalidInputError("Spike times must be finite")
        if duration is None:
            duration = get_duration(channels)
        duration = as_interval(duration)
        for i, c in enumerate(channels):
            if len(c) > 0 and (c[0] < duration.start or c[-1] > duration.end):
                raise InvalidInputError("Channel " + str(i) + " has spikes outside of ["
                                        + str(duration.start) + ", " + str(duration.end) + "]")
        for c in channels:
            c.setflags(write=False)
        self._channels = tuple(channels)
        self.duration = duration

    def __len__(self):
        return len(self._channels)

    def __getitem__(self, i):
        return self._channels[i]

    def __iter__(self):
        return iter(self._channels)

    def __repr__(self):
        return ("SpikesInput(N=" + str(len(self)) + ", spikes=" + str(self.n_spikes)
                + ", duration=[" + str(self.duration.start) + ", " + str(self.duration.end) + "])")

    @property
    def n_spikes(self):
        return int(sum(len(c) for c in self._channels))

    def counts(self, start=-np.inf, end=np.inf):
        """
        Number of spikes per channel with start < time < end
        :return: np.array of length N
        """
        return np.array([np.count_nonzero((c > start) & (c < end)) for c in self._channels],
                        dtype=float)

    def events(self):
        """
        All spikes merged in time order
        :return: (times, channel indices) as two np.arrays
        """
        times = np.concatenate(self._channels)
        channels = np.concatenate([np.full(len(c), i, dtype=int) for i, c in enumerate(self._channels)])
        order = np.argsort(times, kind="stable")
        return times[order], channels[order]
