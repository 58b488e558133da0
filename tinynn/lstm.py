"""Long short-term memory (recurrent) neural network layer."""

import math

import numpy as np

from tinynn import random as rng
from tinynn.activation import Activation, d_tanh, d_tanh_x

GATE_NAMES = ("forget", "input", "candidate", "output")


class LSTM:
    """An LSTM layer of ``units`` cells.

    The rows of an input batch are consecutive time steps. The gates
    (forget, input, output) use the given activation; the cell candidate
    uses tanh. When ``stateful`` is true, the last hidden and cell state
    of one batch is carried into the next.

    After initialize(), ``weights`` holds eight matrices in the order
    Wf, Wi, Wc, Wo (input_dim by units) and Uf, Ui, Uc, Uo (units by
    units); backward() returns gradients in the same order.
    """

    def __init__(self, units, activation="none", stateful=False):
        if units < 1:
            raise ValueError("units must be at least 1")
        self.units = units
        self.activation = Activation.from_name(activation)
        self.stateful = bool(stateful)
        self.input_dim = 0
        self.batch_size = 0
        self.weights = None
        self.ph = np.zeros(units)
        self.pc = np.zeros(units)
        self._clear_state()

    def _clear_state(self):
        shape = (self.batch_size, self.units)
        self.f = np.zeros(shape)
        self.i = np.zeros(shape)
        self.o = np.zeros(shape)
        self.cc = np.zeros(shape)
        self.c = np.zeros(shape)
        self.h = np.zeros(shape)
        self._h0 = np.zeros(self.units)
        self._c0 = np.zeros(self.units)
        self._has_state = False

    def initialize(self, input_dim, batch_size):
        """Draw the weights and allocate the state.

        Kernel weights are Glorot normal; recurrent weights are drawn
        uniformly and then made orthogonal.
        """
        if input_dim < 1:
            raise ValueError("input_dim must be at least 1")
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self.input_dim = input_dim
        self.batch_size = batch_size
        units = self.units

        scale = math.sqrt(2.0 / (input_dim + units))
        kernels = [
            np.array(
                [[rng.normal(0.0, scale) for _ in range(units)]
                 for _ in range(input_dim)]
            )
            for _ in GATE_NAMES
        ]
        scale = math.sqrt(6.0 / (units * 2))
        recurrent = [
            np.array(
                [[rng.uniform(-scale, scale) for _ in range(units)]
                 for _ in range(units)]
            )
            for _ in GATE_NAMES
        ]
        recurrent = [np.linalg.svd(u)[0] for u in recurrent]
        self.weights = kernels + recurrent
        self.ph = np.zeros(units)
        self.pc = np.zeros(units)
        self._clear_state()

    def set_batch_size(self, batch_size):
        """Resize and clear the state; does nothing before initialize()."""
        if self.batch_size == 0:
            return
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self.batch_size = batch_size
        self._clear_state()

    def reset(self):
        """Clear the hidden and cell state carried between batches."""
        self.ph = np.zeros(self.units)
        self.pc = np.zeros(self.units)

    def _check_input(self, x):
        if self.weights is None:
            raise RuntimeError("layer must be initialized before use")
        a = np.asarray(x, dtype=float)
        if a.shape != (self.batch_size, self.input_dim):
            raise ValueError(
                f"input must have shape ({self.batch_size}, {self.input_dim}), "
                f"got {a.shape}"
            )
        return a

    def forward(self, x):
        """Return the hidden state at every time step of the batch x."""
        a = self._check_input(x)
        wf, wi, wc, wo, uf, ui, uc, uo = self.weights
        act = self.activation
        self._clear_state()

        if self.stateful:
            h_prev, c_prev = self.ph.copy(), self.pc.copy()
        else:
            h_prev, c_prev = np.zeros(self.units), np.zeros(self.units)
        self._h0, self._c0 = h_prev, c_prev

        for t, xt in enumerate(a):
            self.f[t] = act.apply(xt @ wf + h_prev @ uf)
            self.i[t] = act.apply(xt @ wi + h_prev @ ui)
            self.o[t] = act.apply(xt @ wo + h_prev @ uo)
            self.cc[t] = np.tanh(xt @ wc + h_prev @ uc)
            self.c[t] = self.f[t] * c_prev + self.i[t] * self.cc[t]
            self.h[t] = self.o[t] * np.tanh(self.c[t])
            h_prev, c_prev = self.h[t], self.c[t]

        self.ph = self.h[-1].copy()
        self.pc = self.c[-1].copy()
        self._has_state = True
        return self.h

    def backward(self, dy, x, compute_dx=True):
        """Return (weight gradients, input gradient) by backpropagation in time.

        Uses the state left by the last forward() on the same x. The
        gradients come in the order of ``weights``. The input gradient is
        returned only when compute_dx is true, and None otherwise.
        """
        a = self._check_input(x)
        if not self._has_state:
            raise RuntimeError("forward() must run before backward()")
        grad_y = np.asarray(dy, dtype=float)
        if grad_y.shape != (self.batch_size, self.units):
            raise ValueError(
                f"gradient must have shape ({self.batch_size}, {self.units}), "
                f"got {grad_y.shape}"
            )
        wf, wi, wc, wo, uf, ui, uc, uo = self.weights
        act = self.activation
        grads = [np.zeros_like(w) for w in self.weights]
        dx = np.zeros_like(a) if compute_dx else None
        dh_next = np.zeros(self.units)
        dc_next = np.zeros(self.units)

        for t in reversed(range(self.batch_size)):
            h_prev = self.h[t - 1] if t > 0 else self._h0
            c_prev = self.c[t - 1] if t > 0 else self._c0
            xt = a[t]
            dh = grad_y[t] + dh_next
            d_o = dh * np.tanh(self.c[t]) * act.derivative(self.o[t])
            dc = dh * self.o[t] * d_tanh(self.c[t]) + dc_next
            dcc = dc * self.i[t] * d_tanh_x(self.cc[t])
            di = dc * self.cc[t] * act.derivative(self.i[t])
            df = dc * c_prev * act.derivative(self.f[t])

            for k, delta in enumerate((df, di, dcc, d_o)):
                grads[k] += np.outer(xt, delta)
                grads[k + 4] += np.outer(h_prev, delta)

            dh_next = df @ uf.T + di @ ui.T + dcc @ uc.T + d_o @ uo.T
            dc_next = self.f[t] * dc
            if dx is not None:
                dx[t] = df @ wf.T + di @ wi.T + dcc @ wc.T + d_o @ wo.T

        self.ph = self.h[-1].copy()
        self.pc = self.c[-1].copy()
        return grads, dx