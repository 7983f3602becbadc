import matplotlib
matplotlib.use("Agg")

import numpy as np
import pytest

from tempotrons import SpikesInput


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def sequence_input():
    """ 10 channels, one spike each every 3 ms from 10 ms on, plus a late spike """
    return SpikesInput([[10.0 + 3 * i, 150.0 + 20 * i] for i in range(10)], duration=400.0)


@pytest.fixture
def separable_inputs():
    """ Two inputs with opposite clustered/sparse channel halves """
    cluster = [20.0 + 2 * i for i in range(5)]
    sparse = [60.0 + 40 * i for i in range(5)]
    a = SpikesInput([[t] for t in cluster] + [[t] for t in sparse], duration=300.0)
    b = SpikesInput([[t] for t in sparse] + [[t] for t in cluster], duration=300.0)
    return a, b


@pytest.fixture
def three_spikes_input():
    """ A single channel with well separated spikes """
    return SpikesInput([[10.0, 40.0, 70.0]], duration=120.0)
