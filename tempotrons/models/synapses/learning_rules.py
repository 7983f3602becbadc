"""
Credit-assignment rules of the tempotron.

Each rule is called only for a presentation whose outcome disagrees with the
target, and returns the raw weight gradient (length N). The sign convention is
"move towards the correction": the optimizer step is added to the weights as is.

Binary rules, after:
R. Gütig and H. Sompolinsky,
"The tempotron: a neuron that learns spike timing-based decisions,"
in Nature Neuroscience, vol. 9, no. 3, pp. 420-428, 2006,
doi: 10.1038/nn1643

Multi-spike rules count-match the output using the reset dynamics of
`MultiSpikeTempotron`, see:
R. Gütig,
"Spiking neurons can discover predictive features by aggregate-label learning,"
in Science, vol. 351, no. 6277, 2016,
doi: 10.1126/science.aab4113
"""
from enum import Enum

import numpy as np

from tempotrons.errors import ConfigurationError


class Method(Enum):
    GRADIENT = "gradient"
    CORRELATION = "correlation"

    @classmethod
    def parse(cls, method):
        """
        Accept a `Method` or one of its tags ("gradient", "∇", "grad", "correlation", "corr")
        """
        if isinstance(method, cls):
            return method
        try:
            return METHOD_TAGS[str(method).strip().lower()]
        except KeyError:
            raise ConfigurationError("Unknown training method: " + repr(method)) from None


METHOD_TAGS = {"gradient": Method.GRADIENT,
               "grad": Method.GRADIENT,
               "∇": Method.GRADIENT,
               "correlation": Method.CORRELATION,
               "corr": Method.CORRELATION}


""" Binary rules: target is True (should spike) or False (should stay silent) """


def binary_gradient(model, inp, target, spikes):
    if target:
        # push the voltage maximum up
        t_max, _ = model.critical_time(inp)
        return model.kernel.traces(inp, t_max)
    # push the voltage at the (first) output spike down
    return -model.kernel.traces(inp, spikes[0])


def binary_correlation(model, inp, target, spikes):
    if target:
        return inp.counts()
    return -inp.counts(end=spikes[0])


""" Multi-spike rules: target is the desired number of output spikes """


def _reset_time(spikes, j, post_reset):
    if post_reset and j > 0:
        return spikes[j - 1]
    return -np.inf


def _missing_reset(inp, spikes):
    """
    Output spikes to reset on when crediting missing spikes: all of them if new
    input follows the last one, none otherwise (the whole presentation is credited)
    """
    if len(spikes) > 0 and np.any(inp.counts(start=spikes[-1])):
        return spikes
    return ()


def multi_spike_gradient(model, inp, target, spikes, post_reset=True):
    grad = np.zeros(model.N)
    for j in range(target, len(spikes)):
        grad -= model.kernel.traces(inp, spikes[j], after=_reset_time(spikes, j, post_reset))
    missing = target - len(spikes)
    if missing > 0:
        reset = _missing_reset(inp, spikes)
        t_max, _ = model.critical_time(inp, spikes=reset)
        after = reset[-1] if (post_reset and len(reset) > 0) else -np.inf
        grad += missing * model.kernel.traces(inp, t_max, after=after)
    return grad


def multi_spike_correlation(model, inp, target, spikes, post_reset=True):
    grad = np.zeros(model.N)
    for j in range(target, len(spikes)):
        grad -= inp.counts(start=_reset_time(spikes, j, post_reset), end=spikes[j])
    missing = target - len(spikes)
    if missing > 0:
        reset = _missing_reset(inp, spikes)
        after = reset[-1] if (post_reset and len(reset) > 0) else -np.inf
        grad += missing * inp.counts(start=after)
    return grad


BINARY_RULES = {Method.GRADIENT: binary_gradient,
                Method.CORRELATION: binary_correlation}

MULTI_SPIKE_RULES = {Method.GRADIENT: multi_spike_gradient,
                     Method.CORRELATION: multi_spike_correlation}
