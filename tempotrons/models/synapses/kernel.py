"""
Post-synaptic potential kernel of the tempotron:
K(t) = V0 * (exp(-t / tau_m) - exp(-t / tau_s)) for t > 0, and 0 otherwise.
V0 normalizes the kernel so that its peak, reached at
t_peak = tau_m * tau_s / (tau_m - tau_s) * log(tau_m / tau_s), equals 1.

Between two consecutive input spikes the (rest-relative) voltage has the form
a * exp(-s / tau_m) - b * exp(-s / tau_s), with s measured from the start of
the interval. The `segment_*` methods work on that form, so the voltage can be
scanned event by event without sampling.
"""
import numpy as np

from tempotrons.errors import ConfigurationError, NumericalDegeneracy


def peak_time(tau_m, tau_s):
    return ((tau_m * tau_s) / (tau_m - tau_s)) * np.log(tau_m / tau_s)


def kernel_norm(tau_m, tau_s):
    t_peak = peak_time(tau_m, tau_s)
    return 1.0 / (np.exp(-t_peak / tau_m) - np.exp(-t_peak / tau_s))


class Kernel:

    def __init__(self, tau_m, tau_s):
        if not (np.isfinite(tau_m) and np.isfinite(tau_s)) or tau_m <= 0 or tau_s <= 0:
            raise ConfigurationError("Time constants must be positive, got tau_m = "
                                     + str(tau_m) + ", tau_s = " + str(tau_s))
        if tau_m == tau_s:
            raise NumericalDegeneracy("The kernel peak is undefined for tau_m == tau_s (" + str(tau_m) + ")")
        if tau_s > tau_m:
            raise ConfigurationError("tau_s must be smaller than tau_m, got tau_m = "
                                     + str(tau_m) + ", tau_s = " + str(tau_s))
        self.tau_m = float(tau_m)
        self.tau_s = float(tau_s)
        self.t_peak = peak_time(self.tau_m, self.tau_s)
        self.V0 = kernel_norm(self.tau_m, self.tau_s)

    def __call__(self, t):
        t = np.asarray(t, dtype=float)
        # clip before exponentiating so negative times cannot overflow
        s = np.maximum(t, 0.0)
        k = self.V0 * (np.exp(-s / self.tau_m) - np.exp(-s / self.tau_s))
        return np.where(t > 0, k, 0.0)

    def traces(self, inp, t, after=-np.inf, until=np.inf):
        """
        Per-synapse kernel sums K_i(t) = sum of K(t - x) over the spikes x of
        channel i with after < x < t and x <= until.
        :param inp: SpikesInput
        :param t: sample times (scalar or 1d array)
        :param after: spikes at or before this time are ignored (scalar or array like `t`)
        :param until: spikes after this time are ignored (scalar or array like `t`)
        :return: array of shape (len(t), N), or (N,) for scalar `t`
        """
        scalar = np.ndim(t) == 0
        t = np.atleast_1d(np.asarray(t, dtype=float))
        after = np.broadcast_to(np.asarray(after, dtype=float), t.shape)[:, None]
        until = np.broadcast_to(np.asarray(until, dtype=float), t.shape)[:, None]
        out = np.zeros((len(t), len(inp)))
        for i, x in enumerate(inp):
            if len(x) == 0:
                continue
            x = x[None, :]
            mask = (x > after) & (x <= until) & (x < t[:, None])
            out[:, i] = np.sum(np.where(mask, self(t[:, None] - x), 0.0), axis=1)
        return out[0] if scalar else out

    def segments(self, times, amplitudes, start, end):
        """
        Walk through the sorted input events and yield every inter-event
        interval as (t0, t1, a, b), the voltage on [t0, t1] being
        a * exp(-(t - t0) / tau_m) - b * exp(-(t - t0) / tau_s).
        Events must lie in [start, end]. The last interval always ends at `end`.
        """
        a = b = 0.0
        t0 = start
        for x, w in zip(times, amplitudes):
            if x > t0:
                yield t0, x, a, b
                a *= np.exp(-(x - t0) / self.tau_m)
                b *= np.exp(-(x - t0) / self.tau_s)
                t0 = x
            a += self.V0 * w
            b += self.V0 * w
        yield t0, max(t0, end), a, b

    def segment_value(self, a, b, s):
        return a * np.exp(-s / self.tau_m) - b * np.exp(-s / self.tau_s)

    def segment_peak(self, a, b, length):
        """
        Maximum of the segment voltage for s in [0, length]
        :return: (s, value)
        """
        candidates = [0.0, length]
        if a > 0 and b > 0:
            s = np.log((b * self.tau_m) / (a * self.tau_s)) \
                * (self.tau_m * self.tau_s) / (self.tau_m - self.tau_s)
            if 0.0 < s < length:
                candidates.append(s)
        values = [self.segment_value(a, b, s) for s in candidates]
        k = int(np.argmax(values))
        return candidates[k], values[k]
