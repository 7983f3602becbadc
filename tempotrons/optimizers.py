"""
First-order optimizers for the tempotron learning rules.
An optimizer is called with the raw gradient of a training rule and returns
the step to add to the weights. It never flips the sign of the gradient.
Each instance keeps its own state (velocity, running averages) sized to the
first gradient it sees; create one instance per training run, or call
`reset()` before reusing it on an unrelated model.
"""
import numpy as np

from tempotrons.errors import ConfigurationError, DimensionError
from tempotrons.parameters import RMSPROP_PARAMS, ADAM_PARAMS


def _check_rate(name, value):
    if not (np.isfinite(value) and value > 0):
        raise ConfigurationError(name + " must be a positive number, got " + str(value))


def _check_decay(name, value):
    if not 0 <= value < 1:
        raise ConfigurationError(name + " must be in [0, 1), got " + str(value))


class Optimizer:

    def __init__(self, lr):
        _check_rate("Learning rate", lr)
        self.lr = float(lr)
        self._shape = None

    def __call__(self, grad):
        grad = np.asarray(grad, dtype=float)
        if self._shape is None:
            self._shape = grad.shape
            self._init_state(grad.shape)
        elif grad.shape != self._shape:
            raise DimensionError("Optimizer state has shape " + str(self._shape)
                                 + " but the gradient has shape " + str(grad.shape))
        return self._step(grad)

    def reset(self):
        self._shape = None

    def _init_state(self, shape):
        pass

    def _step(self, grad):
        raise NotImplementedError


class SGD(Optimizer):
    """
    Gradient descent with optional momentum:
    velocity <- momentum * velocity + lr * grad, step = velocity
    """

    def __init__(self, lr, momentum=0.0):
        super().__init__(lr)
        _check_decay("Momentum", momentum)
        self.momentum = float(momentum)
        self.velocity = None

    def reset(self):
        super().reset()
        self.velocity = None

    def _init_state(self, shape):
        self.velocity = np.zeros(shape)

    def _step(self, grad):
        if self.momentum == 0:
            return self.lr * grad
        self.velocity = self.momentum * self.velocity + self.lr * grad
        return self.velocity.copy()


class RMSprop(Optimizer):

    def __init__(self, lr=RMSPROP_PARAMS["lr"], rho=RMSPROP_PARAMS["rho"], eps=RMSPROP_PARAMS["eps"]):
        super().__init__(lr)
        _check_decay("rho", rho)
        _check_rate("eps", eps)
        self.rho = float(rho)
        self.eps = float(eps)
        self.mean_square = None

    def reset(self):
        super().reset()
        self.mean_square = None

    def _init_state(self, shape):
        self.mean_square = np.zeros(shape)

    def _step(self, grad):
        self.mean_square = self.rho * self.mean_square + (1 - self.rho) * grad ** 2
        return self.lr * grad / (np.sqrt(self.mean_square) + self.eps)


class Adam(Optimizer):

    def __init__(self, lr=ADAM_PARAMS["lr"], beta1=ADAM_PARAMS["beta1"], beta2=ADAM_PARAMS["beta2"],
                 eps=ADAM_PARAMS["eps"]):
        super().__init__(lr)
        _check_decay("beta1", beta1)
        _check_decay("beta2", beta2)
        _check_rate("eps", eps)
        self.beta1 = float(beta1)
        self.beta2 = float(beta2)
        self.eps = float(eps)
        self.m = self.v = None
        self.t = 0

    def reset(self):
        super().reset()
        self.m = self.v = None
        self.t = 0

    def _init_state(self, shape):
        self.m = np.zeros(shape)
        self.v = np.zeros(shape)
        self.t = 0

    def _step(self, grad):
        self.t += 1
        self.m = self.beta1 * self.m + (1 - self.beta1) * grad
        self.v = self.beta2 * self.v + (1 - self.beta2) * grad ** 2
        m_hat = self.m / (1 - self.beta1 ** self.t)
        v_hat = self.v / (1 - self.beta2 ** self.t)
        return self.lr * m_hat / (np.sqrt(v_hat) + self.eps)
