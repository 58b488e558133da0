"""Array helpers: norms, gradient clipping, cosine similarity and one-hot coding."""

import numpy as np


def vector_norm(x):
    """Return the Euclidean norm of a vector."""
    v = np.asarray(x, dtype=float)
    return float(np.sqrt(np.sum(v * v)))


def matrix_norm(m):
    """Return the Frobenius norm of a matrix."""
    a = np.asarray(m, dtype=float)
    return float(np.sqrt(np.sum(a * a)))


def clip_gradients(g, gmin, gmax):
    """Return g with every magnitude held between gmin and gmax.

    Values larger than gmax become +/-gmax and values smaller than gmin
    become +/-gmin, keeping their sign; zero becomes -gmin.
    """
    a = np.asarray(g, dtype=float)
    sign = np.where(a > 0, 1.0, -1.0)
    mag = np.abs(a)
    return np.where(mag > gmax, sign * gmax, np.where(mag < gmin, sign * gmin, a))


def cosine_similarity(v1, v2):
    """Return the cosine of the angle between two vectors.

    Returns 0 when either vector is None or has zero norm.
    """
    if v1 is None or v2 is None:
        return 0.0
    a = np.asarray(v1, dtype=float)
    norm_a = vector_norm(a)
    if norm_a == 0:
        return 0.0
    b = np.asarray(v2, dtype=float)
    norm_b = vector_norm(b)
    if norm_b == 0:
        return 0.0
    return float(np.dot(a, b) / (norm_a * norm_b))


def onehot_encode(labels, num_classes):
    """Return a matrix of one-hot rows for the given class labels."""
    idx = np.asarray(labels, dtype=int)
    out = np.zeros((idx.shape[0], num_classes), dtype=float)
    out[np.arange(idx.shape[0]), idx] = 1.0
    return out


def onehot_decode(vectors):
    """Return, for each row, the index of its largest value (first on ties)."""
    a = np.asarray(vectors, dtype=float)
    return np.argmax(a, axis=-1).astype(int)