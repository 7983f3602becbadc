import dataclasses

import numpy as np
import pytest

from tempotrons import TimeInterval, SpikesInput, InvalidInputError
from tempotrons.inputs import as_interval


def test_time_interval():
    tau = TimeInterval(10.0, 30.0)
    assert tau.length == 20.0
    assert 10.0 in tau and 30.0 in tau and 31.0 not in tau
    assert tau.shift(5.0) == TimeInterval(15.0, 35.0)
    assert TimeInterval(3.0, 3.0).length == 0.0
    with pytest.raises(InvalidInputError):
        TimeInterval(2.0, 1.0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        tau.start = 0.0


def test_as_interval():
    assert as_interval(500) == TimeInterval(0.0, 500.0)
    tau = TimeInterval(1.0, 2.0)
    assert as_interval(tau) is tau


def test_spikes_input_sorts_and_validates():
    inp = SpikesInput([[3.0, 1.0, 2.0], []], duration=10.0)
    assert len(inp) == 2
    np.testing.assert_array_equal(inp[0], [1.0, 2.0, 3.0])
    assert len(inp[1]) == 0
    assert inp.n_spikes == 3
    assert inp.duration == TimeInterval(0.0, 10.0)
    with pytest.raises(ValueError):
        inp[0][0] = 5.0


def test_spikes_input_infers_duration():
    inp = SpikesInput([[5.0, 8.0], [2.0]])
    assert inp.duration == TimeInterval(2.0, 8.0)


def test_spikes_input_rejects_invalid():
    with pytest.raises(InvalidInputError):
        SpikesInput([])
    with pytest.raises(InvalidInputError):
        SpikesInput([[1.0, 12.0]], duration=10.0)
    with pytest.raises(InvalidInputError):
        SpikesInput([[-1.0]], duration=TimeInterval(0.0, 10.0))
    with pytest.raises(InvalidInputError):
        SpikesInput([[np.nan]], duration=10.0)


def test_counts_and_events():
    inp = SpikesInput([[1.0, 4.0, 9.0], [2.0], []], duration=10.0)
    np.testing.assert_array_equal(inp.counts(), [3, 1, 0])
    np.testing.assert_array_equal(inp.counts(end=4.0), [1, 1, 0])
    np.testing.assert_array_equal(inp.counts(start=1.0, end=9.5), [2, 1, 0])
    times, channels = inp.events()
    np.testing.assert_array_equal(times, [1.0, 2.0, 4.0, 9.0])
    np.testing.assert_array_equal(channels, [0, 1, 0, 0])
