"""Beam search decoding over per-step class probabilities."""

import numpy as np


def beam_search(probabilities, beam_width):
    """Return the best label sequences for a T by C probability matrix.

    The result is a list of (sequence, score) pairs ordered from the
    lowest score, where score is the negative log probability of the
    sequence. At most beam_width hypotheses are kept at every step.
    """
    if beam_width < 1:
        raise ValueError("beam_width must be at least 1")
    probs = np.asarray(probabilities, dtype=float)
    if probs.ndim != 2:
        raise ValueError("probabilities must be a two-dimensional array")

    with np.errstate(divide="ignore"):
        costs = -np.log(probs)

    beams = [((), 0.0)]
    for step in costs:
        candidates = [
            (seq + (label,), score + float(cost))
            for seq, score in beams
            for label, cost in enumerate(step)
        ]
        candidates.sort(key=lambda item: item[1])
        beams = candidates[:beam_width]
    return beams