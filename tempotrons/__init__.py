from tempotrons.errors import (TempotronError, ConfigurationError, NumericalDegeneracy,
                               DimensionError, InvalidInputError, RetryExhausted)
from tempotrons.inputs import TimeInterval, SpikesInput
from tempotrons.models.neurons.tempotron import Tempotron, SimulationResult, simulate, train
from tempotrons.models.neurons.multi_spike import MultiSpikeTempotron
from tempotrons.models.synapses.learning_rules import Method
from tempotrons.optimizers import Optimizer, SGD, RMSprop, Adam
