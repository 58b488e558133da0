"""AdamW optimizer step: Adam with decoupled weight decay."""

import numpy as np

from tinynn.arrays import clip_gradients

BETA1 = 0.9
BETA2 = 0.999
EPSILON = 1.0e-7
GRADIENT_MIN = 1.0e-13
GRADIENT_MAX = 10.0


class GradientExplosionError(ArithmeticError):
    """Raised when the second moment estimate has become negative."""


def adamw_update(w, g, m, v, learning_rate, weight_decay, update_step):
    """Return updated (weights, first moments, second moments).

    The gradient magnitudes are first clipped to lie between 1e-13 and 10.
    update_step is the 1-based count of updates, used for bias correction.
    The inputs are left unchanged.
    """
    if update_step < 1:
        raise ValueError("update_step must be at least 1")
    weights = np.asarray(w, dtype=float)
    grads = np.asarray(g, dtype=float)
    moment1 = np.asarray(m, dtype=float)
    moment2 = np.asarray(v, dtype=float)
    if not weights.shape == grads.shape == moment1.shape == moment2.shape:
        raise ValueError("weights, gradients and moments must have the same shape")
    if np.any(moment2 < 0):
        raise GradientExplosionError("weight or gradient explosion")

    grads = clip_gradients(grads, GRADIENT_MIN, GRADIENT_MAX)
    moment1 = BETA1 * moment1 + (1.0 - BETA1) * grads
    moment2 = BETA2 * moment2 + (1.0 - BETA2) * grads * grads

    m_hat = moment1 / (1.0 - BETA1**update_step)
    v_hat = moment2 / (1.0 - BETA2**update_step)
    step = m_hat / (np.sqrt(v_hat) + EPSILON)
    weights = weights - learning_rate * (step + weight_decay * weights)
    return weights, moment1, moment2