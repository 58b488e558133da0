"""Dense (fully connected) neural network layer."""

import math

import numpy as np

from tinynn import random as rng
from tinynn.activation import Activation, d_relu, d_sigmoid


class Dense:
    """A feed-forward layer of ``units`` cells followed by an activation.

    The layer must be given its input size and batch size with
    initialize() before it can be used. The input dimension includes
    the bias dimension, if any.
    """

    def __init__(self, units, activation="none"):
        if units < 1:
            raise ValueError("units must be at least 1")
        self.units = units
        self.activation = Activation.from_name(activation)
        self.input_dim = 0
        self.batch_size = 0
        self.weights = None
        self.h = None

    def initialize(self, input_dim, batch_size):
        """Allocate the hidden state and draw Glorot-normal weights."""
        if input_dim < 1:
            raise ValueError("input_dim must be at least 1")
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self.input_dim = input_dim
        self.batch_size = batch_size
        self.h = np.zeros((batch_size, self.units))
        scale = math.sqrt(2.0 / (input_dim + self.units))
        self.weights = np.array(
            [
                [rng.normal(0.0, scale) for _ in range(self.units)]
                for _ in range(input_dim)
            ]
        )

    def set_batch_size(self, batch_size):
        """Resize and clear the hidden state; does nothing before initialize()."""
        if self.batch_size == 0:
            return
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self.batch_size = batch_size
        self.h = np.zeros((batch_size, self.units))

    def reset(self):
        """Reset the hidden state between sequences; a dense layer keeps none."""

    def _require_initialized(self):
        if self.weights is None:
            raise RuntimeError("layer must be initialized before use")

    def _check_input(self, x):
        a = np.asarray(x, dtype=float)
        if a.shape != (self.batch_size, self.input_dim):
            raise ValueError(
                f"input must have shape ({self.batch_size}, {self.input_dim}), "
                f"got {a.shape}"
            )
        return a

    def forward(self, x):
        """Return the activated output x @ weights for a batch of inputs."""
        self._require_initialized()
        a = self._check_input(x)
        self.h = self.activation.apply(a @ self.weights)
        return self.h

    def backward(self, dy, x, compute_dx=True):
        """Return (weight gradient, input gradient) for output gradient dy.

        The weight gradient is x.T @ dy. The input gradient, returned only
        when compute_dx is true and None otherwise, is dy @ weights.T
        multiplied by the activation derivative taken at x, the activated
        output of the layer below.
        """
        self._require_initialized()
        a = self._check_input(x)
        grad_y = np.asarray(dy, dtype=float)
        if grad_y.shape != (self.batch_size, self.units):
            raise ValueError(
                f"gradient must have shape ({self.batch_size}, {self.units}), "
                f"got {grad_y.shape}"
            )
        g_weights = a.T @ grad_y
        if not compute_dx:
            return g_weights, None
        dx = grad_y @ self.weights.T
        if self.activation is Activation.SIGMOID:
            dx = d_sigmoid(dx, a)
        elif self.activation is Activation.RELU:
            dx = d_relu(dx, a)
        return g_weights, dx