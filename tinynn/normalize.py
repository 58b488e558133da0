"""Per-feature mean and standard deviation, and feature normalization."""

import numpy as np


def _feature_count(x, exclude_last):
    return x.shape[1] - (1 if exclude_last else 0)


def mean_sdev(x, exclude_last=False):
    """Return (mean, sdev) of each column of x.

    The standard deviation is the population one. When exclude_last is
    true the last column (the bias) is left out of both results.
    """
    a = np.asarray(x, dtype=float)
    if a.ndim != 2 or a.shape[0] == 0:
        raise ValueError("mean_sdev needs a non-empty two-dimensional array")
    cols = a[:, : _feature_count(a, exclude_last)]
    mean = cols.sum(axis=0) / a.shape[0]
    diff = cols - mean
    sdev = np.sqrt((diff * diff).sum(axis=0) / a.shape[0])
    return mean, sdev


def normalize(x, mean, sdev, exclude_last=False):
    """Return a copy of x with each feature shifted by mean and scaled by sdev.

    Features whose sdev is not positive become zero. When exclude_last is
    true the last column is copied unchanged.
    """
    a = np.array(x, dtype=float)
    n = _feature_count(a, exclude_last)
    mu = np.asarray(mean, dtype=float)
    sd = np.asarray(sdev, dtype=float)
    if mu.shape != (n,) or sd.shape != (n,):
        raise ValueError(f"mean and sdev must have {n} elements")
    positive = sd > 0.0
    safe = np.where(positive, sd, 1.0)
    a[:, :n] = np.where(positive, (a[:, :n] - mu) / safe, 0.0)
    return a