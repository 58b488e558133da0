"""Activation functions and their derivatives."""

import enum

import numpy as np


def sigmoid(m):
    """Return the logistic sigmoid of each element."""
    a = np.asarray(m, dtype=float)
    return 1.0 / (1.0 + np.exp(-a))


def relu(m):
    """Return each element with negative values replaced by zero."""
    a = np.asarray(m, dtype=float)
    return np.where(a < 0.0, 0.0, a)


def softmax(a):
    """Return the softmax of each row (the last axis).

    The row maximum, floored at zero, is subtracted before exponentiation.
    """
    x = np.asarray(a, dtype=float)
    peak = np.maximum(np.max(x, axis=-1, keepdims=True), 0.0)
    e = np.exp(x - peak)
    return e / np.sum(e, axis=-1, keepdims=True)


def d_sigmoid(x, z):
    """Return x multiplied by the sigmoid derivative, given z = sigmoid(input)."""
    zz = np.asarray(z, dtype=float)
    return np.asarray(x, dtype=float) * (zz * (1.0 - zz))


def d_relu(x, z):
    """Return x multiplied by the ReLU derivative, given z = relu(input)."""
    zz = np.asarray(z, dtype=float)
    return np.asarray(x, dtype=float) * np.where(zz > 0.0, 1.0, 0.0)


def d_softmax(x, z, yt):
    """Return x multiplied by z * (yt - z), z being the softmax output."""
    zz = np.asarray(z, dtype=float)
    return np.asarray(x, dtype=float) * zz * (np.asarray(yt, dtype=float) - zz)


def d_tanh(x):
    """Return the derivative of tanh at x."""
    return 1.0 - np.tanh(np.asarray(x, dtype=float)) ** 2


def d_tanh_x(z):
    """Return the derivative of tanh given its output z = tanh(input)."""
    return 1.0 - np.asarray(z, dtype=float) ** 2


class Activation(enum.Enum):
    """Activation applied to a layer's output."""

    NONE = "none"
    SIGMOID = "sigmoid"
    RELU = "relu"
    SOFTMAX = "softmax"

    @classmethod
    def from_name(cls, name):
        """Return the activation named, ignoring case."""
        try:
            return cls(name.lower())
        except (ValueError, AttributeError):
            raise ValueError(f"invalid activation '{name}'") from None

    def apply(self, m):
        """Return the activated array."""
        if self is Activation.SIGMOID:
            return sigmoid(m)
        if self is Activation.RELU:
            return relu(m)
        if self is Activation.SOFTMAX:
            return softmax(m)
        return np.array(m, dtype=float)

    def derivative(self, z):
        """Return the element-wise derivative given the activated output z.

        Sigmoid and ReLU give their true derivatives; for none and softmax
        the output itself is returned, as the recurrent gates expect.
        """
        zz = np.asarray(z, dtype=float)
        if self is Activation.SIGMOID:
            return zz * (1.0 - zz)
        if self is Activation.RELU:
            return np.where(zz > 0.0, 1.0, 0.0)
        return zz.copy()