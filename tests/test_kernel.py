import numpy as np
import pytest

from tempotrons import SpikesInput, ConfigurationError, NumericalDegeneracy
from tempotrons.models.synapses.kernel import Kernel, peak_time


@pytest.mark.parametrize("tau_m, tau_s", [(15.0, 3.75), (15.0, 5.0), (20.0, 1.0), (10.0, 9.0), (2.0, 0.1)])
def test_kernel_peak_is_one(tau_m, tau_s):
    kernel = Kernel(tau_m, tau_s)
    assert kernel.t_peak == pytest.approx(peak_time(tau_m, tau_s))
    assert kernel(kernel.t_peak) == pytest.approx(1.0, abs=1e-12)
    t = np.linspace(0, 10 * tau_m, 5001)
    assert np.max(kernel(t)) <= 1.0 + 1e-12


def test_kernel_is_causal():
    kernel = Kernel(15.0, 3.75)
    np.testing.assert_array_equal(kernel(np.array([-100.0, -1.0, 0.0])), 0.0)
    assert np.all(kernel(np.array([0.1, 1.0, 50.0])) > 0)


def test_kernel_rejects_bad_time_constants():
    with pytest.raises(NumericalDegeneracy):
        Kernel(10.0, 10.0)
    with pytest.raises(ConfigurationError):
        Kernel(5.0, 10.0)
    with pytest.raises(ConfigurationError):
        Kernel(-5.0, 1.0)
    assert issubclass(NumericalDegeneracy, ConfigurationError)


@pytest.mark.parametrize("a, b, length", [(2.0, 3.0, 30.0), (1.0, 1.0, 5.0), (-1.0, -0.5, 20.0), (0.5, 2.0, 1.0)])
def test_segment_peak_matches_dense_sampling(a, b, length):
    kernel = Kernel(15.0, 3.75)
    s, v = kernel.segment_peak(a, b, length)
    grid = np.linspace(0.0, length, 200001)
    values = kernel.segment_value(a, b, grid)
    assert 0.0 <= s <= length
    assert v == pytest.approx(np.max(values), abs=1e-6)
    assert v == pytest.approx(kernel.segment_value(a, b, s))


def test_traces_sum_kernels_per_channel():
    kernel = Kernel(15.0, 3.75)
    inp = SpikesInput([[5.0, 20.0], [], [12.0]], duration=50.0)
    t = np.array([0.0, 10.0, 25.0])
    traces = kernel.traces(inp, t)
    assert traces.shape == (3, 3)
    np.testing.assert_allclose(traces[:, 0], kernel(t - 5.0) + kernel(t - 20.0))
    np.testing.assert_array_equal(traces[:, 1], 0.0)
    np.testing.assert_allclose(traces[:, 2], kernel(t - 12.0))


def test_traces_respect_reset_window():
    kernel = Kernel(15.0, 3.75)
    inp = SpikesInput([[5.0, 20.0]], duration=50.0)
    assert kernel.traces(inp, 25.0, after=5.0)[0] == pytest.approx(kernel(5.0))
    assert kernel.traces(inp, 25.0, until=10.0)[0] == pytest.approx(kernel(20.0))


def test_segments_follow_events():
    kernel = Kernel(15.0, 3.75)
    segments = list(kernel.segments([10.0, 10.0, 30.0], [1.0, 0.5, 1.0], 0.0, 100.0))
    assert [(t0, t1) for t0, t1, _, _ in segments] == [(0.0, 10.0), (10.0, 30.0), (30.0, 100.0)]
    _, _, a, b = segments[1]
    assert a == pytest.approx(1.5 * kernel.V0)
    assert b == pytest.approx(1.5 * kernel.V0)
    t0, _, a, b = segments[2]
    assert kernel.segment_value(a, b, 0.0) == pytest.approx(1.5 * kernel(20.0))
