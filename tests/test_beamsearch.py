import itertools
import math

import numpy as np
import pytest

from tinynn.beamsearch import beam_search

PROBS = np.array(
    [
        [0.1, 0.6, 0.3],
        [0.5, 0.2, 0.3],
        [0.25, 0.25, 0.5],
        [0.7, 0.2, 0.1],
    ]
)


def test_best_sequence_is_stepwise_argmax():
    best_seq, _ = beam_search(PROBS, 3)[0]
    assert list(best_seq) == list(np.argmax(PROBS, axis=1))


def test_width_one_is_greedy():
    result = beam_search(PROBS, 1)
    assert len(result) == 1
    assert list(result[0][0]) == list(np.argmax(PROBS, axis=1))


def test_scores_are_sorted_and_match_sequences():
    result = beam_search(PROBS, 4)
    scores = [score for _, score in result]
    assert scores == sorted(scores)
    for seq, score in result:
        expected = -sum(math.log(PROBS[t][c]) for t, c in enumerate(seq))
        assert score == pytest.approx(expected)


def test_full_width_enumerates_every_sequence():
    probs = PROBS[:3]
    result = beam_search(probs, 27)
    sequences = {tuple(seq) for seq, _ in result}
    assert sequences == set(itertools.product(range(3), repeat=3))


def test_result_count_limited_by_width():
    assert len(beam_search(PROBS, 5)) == 5


def test_empty_input_yields_empty_sequence():
    result = beam_search(np.zeros((0, 3)), 2)
    assert result == [((), 0.0)]


def test_invalid_width_rejected():
    with pytest.raises(ValueError):
        beam_search(PROBS, 0)