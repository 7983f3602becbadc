"""
Exceptions raised by the tempotron simulation and learning code.
Nothing here is retried internally: every error means the caller passed
invalid configuration or mismatched data.
"""


class TempotronError(Exception):
    pass


class ConfigurationError(TempotronError, ValueError):
    """Invalid model or optimizer parameters, or an unknown training method."""


class NumericalDegeneracy(ConfigurationError):
    """Kernel time constants for which the peak time is undefined (tau_m == tau_s)."""


class DimensionError(TempotronError, ValueError):
    """Input channel count (or gradient length) does not match the synapse count."""


class InvalidInputError(TempotronError, ValueError):
    """A spikes input or time interval violates its invariants."""


class RetryExhausted(TempotronError, RuntimeError):
    """A bounded resampling loop gave up before producing a valid sample."""
