"""
Multi-spike tempotron
Same voltage as the binary tempotron, but every threshold crossing emits an
output spike and resets the neuron: input spikes at or before the output spike
stop contributing, so the voltage restarts from V_rest and each following
output spike is driven by new input only.
The neuron is trained to emit a target number of spikes.
"""
import numpy as np

from tempotrons.errors import ConfigurationError
from tempotrons.models.neurons.tempotron import Tempotron, SimulationResult
from tempotrons.models.synapses.learning_rules import Method, MULTI_SPIKE_RULES


class MultiSpikeTempotron(Tempotron):

    def output_spikes(self, inp):
        times, channels = inp.events()
        amplitudes = self.w[channels]
        start, end = inp.duration.start, inp.duration.end
        if self.theta <= self.V_rest:
            # degenerate: fires at the start and never drops below threshold
            return np.array([start])
        spikes = []
        while True:
            keep = times > start if spikes else np.ones(len(times), dtype=bool)
            t_s = self._first_crossing(times[keep], amplitudes[keep], start, end)
            if t_s is None:
                break
            spikes.append(t_s)
            start = t_s
        return np.array(spikes)

    def _sampled_voltage(self, inp, t, spikes, shunting=False):
        t = np.asarray(t, dtype=float)
        if len(spikes) == 0:
            return self.voltage(inp, t)
        # last output spike strictly before each sample time
        k = np.searchsorted(spikes, t, side="left")
        after = np.where(k > 0, spikes[np.maximum(k - 1, 0)], -np.inf)
        return self.voltage(inp, t, after=after)

    def simulate(self, inp, t=None):
        """
        Run the tempotron on an input
        :param inp: SpikesInput with N channels
        :param t: optional sample times; without them V is returned as a function of time
        :return: SimulationResult with all output spike times and the reset voltage trace
        """
        self.check_input(inp)
        spikes = self.output_spikes(inp)
        if t is None:
            return SimulationResult(spikes=spikes, V=lambda s: self._sampled_voltage(inp, s, spikes))
        t = np.asarray(t, dtype=float)
        return SimulationResult(spikes=spikes, V=self._sampled_voltage(inp, t, spikes), t=t)

    def count(self, inp):
        self.check_input(inp)
        return len(self.output_spikes(inp))

    def train(self, inp, target, optimizer, method=Method.GRADIENT, post_reset=True):
        """
        Present one input with a target spike count and update the weights in
        place if the output count differs. Corrections for all missing or
        excess spikes are summed into a single optimizer step.
        :param target: desired number of output spikes (non-negative integer)
        :param post_reset: credit only inputs after the preceding output spike
        :return: the weights
        """
        rule = MULTI_SPIKE_RULES[Method.parse(method)]
        target = int(target)
        if target < 0:
            raise ConfigurationError("Target spike count must be non-negative, got " + str(target))
        self.check_input(inp)
        spikes = self.output_spikes(inp)
        if len(spikes) == target:
            return self.w
        self._apply(rule(self, inp, target, spikes, post_reset=post_reset), optimizer)
        return self.w
