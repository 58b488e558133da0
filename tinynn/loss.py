"""Loss functions and their gradients with respect to the predictions."""

import numpy as np

_EPSILON = 1e-8


def _class_indices(yt):
    """Return target class indices as a flat integer array."""
    return np.asarray(yt, dtype=float).reshape(-1).astype(int)


def cross_entropy_loss(yp, yt):
    """Return the summed cross-entropy of predicted rows against one-hot rows."""
    p = np.asarray(yp, dtype=float)
    y = np.asarray(yt, dtype=float)
    return float(np.sum(-y * np.log(p + _EPSILON)))


def sparse_cross_entropy_loss(yp, yt):
    """Return the summed cross-entropy of predicted rows against class indices.

    yt holds one class index per row, shaped (T,) or (T, 1).
    """
    p = np.asarray(yp, dtype=float)
    idx = _class_indices(yt)
    picked = p[np.arange(idx.shape[0]), idx]
    return float(np.sum(-np.log(picked + _EPSILON)))


def mean_square_error(yp, yt):
    """Return the square root of the summed squared differences."""
    diff = np.asarray(yp, dtype=float) - np.asarray(yt, dtype=float)
    return float(np.sqrt(np.sum(diff * diff)))


def d_cross_entropy_loss(yp, yt):
    """Return the cross-entropy gradient (yp - yt) / K for K classes."""
    p = np.asarray(yp, dtype=float)
    y = np.asarray(yt, dtype=float)
    return (p - y) / p.shape[-1]


def d_sparse_cross_entropy_loss(yp, yt):
    """Return the cross-entropy gradient for targets given as class indices."""
    p = np.asarray(yp, dtype=float)
    idx = _class_indices(yt)
    target = np.zeros_like(p)
    target[np.arange(idx.shape[0]), idx] = 1.0
    return (p - target) / p.shape[-1]


def d_mean_square_error(yp, yt):
    """Return the gradient 2 * (yp - yt) / (M * N) for an M by N batch."""
    p = np.asarray(yp, dtype=float)
    y = np.asarray(yt, dtype=float)
    rows, cols = p.shape
    return 2.0 * (p - y) / cols / rows