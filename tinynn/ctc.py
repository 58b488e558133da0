"""Connectionist Temporal Classification loss and its gradient."""

import math
from itertools import groupby

import numpy as np

from tinynn.arrays import onehot_decode


def logsumexp(a, b):
    """Return log(exp(a) + exp(b)) without overflow; -inf acts as log(0)."""
    if a == -math.inf:
        return b
    if b == -math.inf:
        return a
    if a >= b:
        return a + math.log1p(math.exp(b - a))
    return b + math.log1p(math.exp(a - b))


def _collapse(labels, blank):
    """Merge runs of identical labels, then drop blanks."""
    return [int(label) for label, _ in groupby(labels) if label != blank]


class CTC:
    """CTC loss calculator for up to time_steps steps over num_labels classes.

    After loss() has run, the collapsed predicted and target label
    sequences are kept in ``predicted`` and ``target``, the blank-padded
    target in ``label`` and the per-step log probabilities in ``prob``.
    """

    def __init__(self, time_steps, num_labels, blank=0):
        if time_steps < 1:
            raise ValueError("time_steps must be at least 1")
        if num_labels < 1:
            raise ValueError("num_labels must be at least 1")
        if not 0 <= blank < num_labels:
            raise ValueError(f"blank must be between 0 and {num_labels - 1}")
        self.time_steps = time_steps
        self.num_labels = num_labels
        self.blank = blank
        self.predicted = []
        self.target = []
        self.label = []
        self.prob = None
        self._log_yp = None
        self._alpha = None
        self._beta = None

    def _check(self, yp, yt):
        p = np.asarray(yp, dtype=float)
        y = np.asarray(yt, dtype=float)
        if p.ndim != 2 or p.shape[1] != self.num_labels:
            raise ValueError(
                f"predictions must be rows of {self.num_labels} probabilities"
            )
        if y.shape != p.shape:
            raise ValueError("predictions and targets must have the same shape")
        if p.shape[0] > self.time_steps:
            raise ValueError(
                f"at most {self.time_steps} time steps, got {p.shape[0]}"
            )
        return p, y

    def loss(self, yp, yt):
        """Return the CTC loss of probability rows yp against one-hot rows yt.

        Consecutive identical target labels are merged and blanks removed,
        so targets may be padded with blanks or with repeated labels.
        The result is the negated sum of per-step log probabilities
        divided by the number of steps; with no steps it is infinity.
        """
        p, y = self._check(yp, yt)
        steps = p.shape[0]
        if steps == 0:
            self._alpha = self._beta = self._log_yp = self.prob = None
            return math.inf

        blank = self.blank
        with np.errstate(divide="ignore", invalid="ignore"):
            log_yp = np.log(p)

        self.predicted = _collapse(onehot_decode(p), blank)
        self.target = _collapse(onehot_decode(y), blank)

        label = [blank]
        for lab in self.target:
            label.extend((lab, blank))
        self.label = label
        size = len(label)
        labels = np.array(label, dtype=int)

        # A transition that skips the blank at s-1 is allowed into s
        # only when label[s] is not blank and differs from label[s-2].
        skip = np.zeros(size, dtype=bool)
        if size > 2:
            skip[2:] = (labels[2:] != blank) & (labels[2:] != labels[:-2])

        alpha = np.full((steps, size), -np.inf)
        beta = np.full((steps, size), -np.inf)

        with np.errstate(invalid="ignore"):
            alpha[0, 0] = log_yp[0, blank]
            if size > 1:
                alpha[0, 1] = log_yp[0, labels[1]]
            for t in range(1, steps):
                start = max(0, size - 2 * (steps - t))
                end = min(size, 2 * (t + 1))
                prev = alpha[t - 1]
                acc = prev.copy()
                acc[1:] = np.logaddexp(acc[1:], prev[:-1])
                if size > 2:
                    acc[2:] = np.where(
                        skip[2:], np.logaddexp(acc[2:], prev[:-2]), acc[2:]
                    )
                alpha[t, start:end] = acc[start:end] + log_yp[t, labels[start:end]]

            beta[steps - 1, size - 1] = 0.0
            if size > 1:
                beta[steps - 1, size - 2] = 0.0
            for t in range(steps - 2, -1, -1):
                start = max(0, size - 2 * (steps - t))
                end = min(size, 2 * (t + 1))
                emit = beta[t + 1] + log_yp[t + 1, labels]
                acc = emit.copy()
                acc[:-1] = np.logaddexp(acc[:-1], emit[1:])
                if size > 2:
                    acc[:-2] = np.where(
                        skip[2:], np.logaddexp(acc[:-2], emit[2:]), acc[:-2]
                    )
                beta[t, start:end] = acc[start:end]

            prob = np.logaddexp.reduce(alpha + beta, axis=1)

        self._log_yp = log_yp
        self._alpha = alpha
        self._beta = beta
        self.prob = prob
        return float(-prob.sum() / steps)

    def gradient(self):
        """Return dL/dy for the predictions given to the last loss() call."""
        if self._alpha is None:
            raise RuntimeError("loss() must be computed before the gradient")
        steps = self._alpha.shape[0]
        labels = np.array(self.label, dtype=int)
        path = self._alpha + self._beta
        dy = np.empty((steps, self.num_labels))
        with np.errstate(invalid="ignore", over="ignore"):
            for lab in range(self.num_labels):
                cols = path[:, labels == lab]
                if cols.shape[1]:
                    total = np.logaddexp.reduce(cols, axis=1)
                else:
                    total = np.full(steps, -np.inf)
                dy[:, lab] = np.exp(self._log_yp[:, lab]) - np.exp(total - self.prob)
        return dy