from tempotrons.models.synapses.kernel import Kernel
from tempotrons.models.synapses.learning_rules import Method
