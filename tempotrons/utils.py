import numpy as np

from tempotrons.errors import DimensionError, RetryExhausted
from tempotrons.inputs import SpikesInput, TimeInterval, as_interval
from tempotrons.parameters import INPUT_PARAMS


def _rng(rng):
    return np.random.default_rng() if rng is None else rng


def is_valid_input(channels):
    """
    An input is usable if it has at least one channel and at least one spike
    """
    return len(channels) > 0 and any(len(c) > 0 for c in channels)


def _sample_valid(draw, max_attempts):
    for _ in range(max_attempts):
        channels = draw()
        if is_valid_input(channels):
            return channels
    raise RetryExhausted("No valid spikes input after " + str(max_attempts) + " attempts")


def poisson_process(rate, T, rng=None):
    """
    Create a Poisson spike train for 1 channel
    :param rate: spiking frequency (Hz)
    :param T: time interval or length of the interval starting at 0 (ms)
    :param rng: numpy Generator
    :return: sorted spike times in ms (np.array) within T
    """
    rng = _rng(rng)
    tau = as_interval(T)
    n = rng.poisson(0.001 * rate * tau.length)
    return np.sort(rng.uniform(tau.start, tau.end, n))


def poisson_spikes_input(N, rate, T, max_attempts=INPUT_PARAMS["max_attempts"], rng=None):
    """
    Create `N` Poisson spike trains, resampling until at least one spike exists
    :param N: number of channels
    :param rate: spiking frequency (Hz)
    :param T: time interval or length (ms)
    :param max_attempts: resampling budget, RetryExhausted is raised when it runs out
    :return: SpikesInput over T
    """
    rng = _rng(rng)
    tau = as_interval(T)
    channels = _sample_valid(lambda: [poisson_process(rate, tau, rng) for _ in range(N)], max_attempts)
    return SpikesInput(channels, duration=tau)


def spikes_jitter(inp, sigma=1.0, T=None, max_attempts=INPUT_PARAMS["max_attempts"], rng=None):
    """
    Add Gaussian jitter to the spike times of an input. The input is left untouched.
    :param inp: SpikesInput
    :param sigma: s.t.d. of the jitter (ms)
    :param T: spikes jittered out of this interval are dropped (default: the input's duration)
    :return: new SpikesInput over T
    """
    rng = _rng(rng)
    tau = inp.duration if T is None else as_interval(T)

    def draw():
        out = []
        for x in inp:
            xi = x + rng.normal(0.0, sigma, len(x))
            out.append(xi[(xi >= tau.start) & (xi <= tau.end)])
        return out

    return SpikesInput(_sample_valid(draw, max_attempts), duration=tau)


def get_features(n_features, T, N, rate, rng=None):
    """
    Get `n_features` distinct events, each composed of `N` Poisson spike trains
    :param T: length of every feature, or one length per feature (ms)
    :param rate: spiking frequency (Hz)
    :return: list of SpikesInput
    """
    rng = _rng(rng)
    lengths = np.broadcast_to(np.asarray(T, dtype=float), (n_features,))
    return [poisson_spikes_input(N, rate, float(lengths[k]), rng=rng) for k in range(n_features)]


def get_embedded_events_sample(features, rate, T, feature_rate, test=False, rng=None):
    """
    Poisson background noise with features embedded in it.
    Features occur as a Poisson process of frequency `feature_rate` (Hz) per
    feature type; each inserted feature delays everything after it by its own length.
    The mean length of the result is T * (1 + n_features * feature_rate * feature length / 1000).
    :param features: list of SpikesInput, all with the same number of channels
    :param rate: background spiking frequency (Hz)
    :param T: base time interval or length (ms)
    :param test: additionally embed one occurrence of every feature at a single random time
    :return: (SpikesInput, list of (time, feature index) ordered by time)
    """
    rng = _rng(rng)
    tau = as_interval(T)
    N = len(features[0])
    if any(len(f) != N for f in features):
        raise DimensionError("All features must have the same number of channels")

    n_events = rng.poisson(0.001 * feature_rate * len(features) * tau.length)
    times = list(rng.uniform(tau.start, tau.end, n_events))
    kinds = list(rng.integers(0, len(features), n_events))
    if test:
        t_test = rng.uniform(tau.start, tau.end)
        times += [t_test] * len(features)
        kinds += list(range(len(features)))
    order = sorted(range(len(times)), key=lambda k: times[k])

    channels = list(poisson_spikes_input(N, rate, tau, rng=rng))
    events = []
    delay = 0.0
    for k in order:
        feat = features[kinds[k]]
        t0 = times[k] + delay
        length = feat.duration.length
        channels = [np.concatenate((np.where(c >= t0, c + length, c), f - feat.duration.start + t0))
                    for c, f in zip(channels, feat)]
        events.append((t0, int(kinds[k])))
        delay += length

    return SpikesInput(channels, duration=TimeInterval(tau.start, tau.end + delay)), events


def get_mean_square_error(counts, targets):
    """
    Calculate the error for the learning curve
    :param counts: output spike counts (or 0/1 decisions) of a set of samples
    :param targets: target counts (or labels) of the same samples
    :return: mean square error
    """
    counts = np.asarray(counts, dtype=float)
    targets = np.asarray(targets, dtype=float)
    return float(np.mean((counts - targets) ** 2))
