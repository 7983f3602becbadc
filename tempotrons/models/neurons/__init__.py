from tempotrons.models.neurons.tempotron import Tempotron, SimulationResult
from tempotrons.models.neurons.multi_spike import MultiSpikeTempotron
