"""
Binary tempotron
A leaky integrate-and-fire neuron without reset whose voltage is the weighted
sum of post-synaptic potential kernels of its input spikes:
V(t) = V_rest + sum_i w_i * sum_{x < t} K(t - x), x running over the spikes of channel i.
It fires at most once per presentation, at the first time V(t) reaches theta,
and is trained to fire (target True) or to stay silent (target False).

Parameters: N -> Number of synapses (input channels)
            tau_m -> Membrane time constant
            tau_s -> Synaptic time constant
            theta -> Firing threshold
            V_rest -> Resting membrane potential
            w -> Initial synaptic weights (random if not given)

Neuron model from:
R. Gütig and H. Sompolinsky,
"The tempotron: a neuron that learns spike timing-based decisions,"
in Nature Neuroscience, vol. 9, no. 3, pp. 420-428, 2006,
doi: 10.1038/nn1643
"""
from dataclasses import dataclass
from typing import Callable, Optional, Union

import numpy as np
from scipy.optimize import brentq

from tempotrons.errors import ConfigurationError, DimensionError
from tempotrons.models.synapses.kernel import Kernel
from tempotrons.models.synapses.learning_rules import Method, BINARY_RULES
from tempotrons.parameters import TEMPOTRON_PARAMS


@dataclass
class SimulationResult:
    spikes: np.ndarray
    V: Union[np.ndarray, Callable]
    t: Optional[np.ndarray] = None


class Tempotron:

    def __init__(self, N, tau_m=TEMPOTRON_PARAMS["tau_m"], tau_s=None, theta=TEMPOTRON_PARAMS["theta"],
                 V_rest=TEMPOTRON_PARAMS["V_rest"], w=None, rng=None):
        if int(N) != N or N < 1:
            raise ConfigurationError("Number of synapses must be a positive integer, got " + str(N))
        self.N = int(N)
        if tau_s is None:
            tau_s = tau_m / 4
        self.kernel = Kernel(tau_m, tau_s)
        if not (np.isfinite(theta) and np.isfinite(V_rest)):
            raise ConfigurationError("theta and V_rest must be finite")
        self.theta = float(theta)
        self.V_rest = float(V_rest)
        if w is None:
            rng = np.random.default_rng() if rng is None else rng
            w = (1.2 * rng.random(self.N) - 0.3) * (self.theta - self.V_rest) / self.N
        w = np.array(w, dtype=float)
        if w.shape != (self.N,):
            raise DimensionError("Expected " + str(self.N) + " weights, got shape " + str(w.shape))
        self.w = w

    @property
    def tau_m(self):
        return self.kernel.tau_m

    @property
    def tau_s(self):
        return self.kernel.tau_s

    @property
    def V0(self):
        return self.kernel.V0

    def __repr__(self):
        return (type(self).__name__ + "(N=" + str(self.N) + ", tau_m=" + str(self.tau_m)
                + ", tau_s=" + str(self.tau_s) + ", theta=" + str(self.theta) + ")")

    def __call__(self, inp, t=None, **kwargs):
        return self.simulate(inp, t=t, **kwargs)

    def check_input(self, inp):
        if len(inp) != self.N:
            raise DimensionError("Input has " + str(len(inp)) + " channels but the tempotron has "
                                 + str(self.N) + " synapses")

    # event-driven voltage scan

    def _events(self, inp, after=-np.inf, weights=None):
        times, channels = inp.events()
        keep = times > after
        w = self.w if weights is None else weights
        return times[keep], w[channels[keep]]

    def _first_crossing(self, times, amplitudes, start, end):
        """
        Earliest t in [start, end] where the voltage driven by the given events reaches theta
        :return: crossing time, or None if the voltage stays below threshold
        """
        for t0, t1, a, b in self.kernel.segments(times, amplitudes, start, end):
            s_peak, v_peak = self.kernel.segment_peak(a, b, t1 - t0)
            if self.V_rest + v_peak < self.theta:
                continue
            if self.V_rest + a - b >= self.theta:
                return t0
            # the voltage rises monotonically from s = 0 up to the segment peak
            return t0 + brentq(lambda s: self.V_rest + self.kernel.segment_value(a, b, s) - self.theta,
                               0.0, s_peak)
        return None

    def _max_voltage(self, times, amplitudes, start, end):
        t_max, v_max = start, -np.inf
        for t0, t1, a, b in self.kernel.segments(times, amplitudes, start, end):
            s_peak, v_peak = self.kernel.segment_peak(a, b, t1 - t0)
            if v_peak > v_max:
                t_max, v_max = t0 + s_peak, v_peak
        return t_max, self.V_rest + v_max

    def critical_time(self, inp, spikes=()):
        """
        Time and value of the voltage maximum after the last output spike in
        `spikes` (over the whole presentation if there are none).
        If the voltage never rises above V_rest there (e.g. all relevant weights
        are zero or negative), the peak time of the unweighted voltage is used instead.
        :return: (t_max, V_max)
        """
        start = spikes[-1] if len(spikes) > 0 else inp.duration.start
        times, amplitudes = self._events(inp, after=start if len(spikes) > 0 else -np.inf)
        t_max, v_max = self._max_voltage(times, amplitudes, start, inp.duration.end)
        if v_max <= self.V_rest:
            t_max, _ = self._max_voltage(times, np.ones_like(amplitudes), start, inp.duration.end)
        return t_max, v_max

    def output_spikes(self, inp):
        times, amplitudes = self._events(inp)
        t_s = self._first_crossing(times, amplitudes, inp.duration.start, inp.duration.end)
        return np.array([] if t_s is None else [t_s])

    # simulation

    def voltage(self, inp, t, after=-np.inf, until=np.inf):
        """
        Sample the voltage
        :param t: sample times (ms)
        :param after: inputs at or before this time are ignored (scalar or per sample)
        :param until: inputs after this time are ignored (scalar or per sample)
        """
        return self.V_rest + self.kernel.traces(inp, t, after=after, until=until) @ self.w

    def _sampled_voltage(self, inp, t, spikes, shunting=False):
        t = np.asarray(t, dtype=float)
        if shunting and len(spikes) > 0:
            return self.voltage(inp, t, until=np.where(t > spikes[0], spikes[0], np.inf))
        return self.voltage(inp, t)

    def simulate(self, inp, t=None, shunting=False):
        """
        Run the tempotron on an input
        :param inp: SpikesInput with N channels
        :param t: optional sample times; without them V is returned as a function of time
        :param shunting: ignore inputs arriving after the output spike
        :return: SimulationResult with the output spike times and the voltage
        """
        self.check_input(inp)
        spikes = self.output_spikes(inp)
        if t is None:
            return SimulationResult(spikes=spikes,
                                    V=lambda s: self._sampled_voltage(inp, s, spikes, shunting))
        t = np.asarray(t, dtype=float)
        return SimulationResult(spikes=spikes, V=self._sampled_voltage(inp, t, spikes, shunting), t=t)

    def classify(self, inp):
        self.check_input(inp)
        return len(self.output_spikes(inp)) > 0

    # training

    def _apply(self, grad, optimizer):
        self.w += optimizer(grad)

    def train(self, inp, target, optimizer, method=Method.GRADIENT):
        """
        Present one labelled input and update the weights in place if the
        tempotron misclassified it.
        :param target: True if the tempotron should fire, False otherwise
        :param optimizer: Optimizer instance owned by this training run
        :param method: Method or tag ("gradient" / "∇", "correlation" / "corr")
        :return: the weights
        """
        rule = BINARY_RULES[Method.parse(method)]
        self.check_input(inp)
        spikes = self.output_spikes(inp)
        if (len(spikes) > 0) == bool(target):
            return self.w
        self._apply(rule(self, inp, bool(target), spikes), optimizer)
        return self.w


def simulate(model, inp, t=None, **kwargs):
    return model.simulate(inp, t=t, **kwargs)


def train(model, inp, target, method, optimizer, **kwargs):
    return model.train(inp, target, optimizer=optimizer, method=method, **kwargs)
