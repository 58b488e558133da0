import random

import pytest

from tinynn.alignseq import Alignment, align_sequences

BLANK = -1


def test_identical_sequences_align_without_edits():
    seq = [4, 2, 7, 7, 1]
    result = align_sequences(seq, seq, BLANK)
    assert result == Alignment(seq, seq, 0)


def test_deletion_is_filled_with_blank():
    result = align_sequences([1, 2, 3], [1, 3], BLANK)
    assert result.p == [1, 2, 3]
    assert result.t == [1, BLANK, 3]
    assert result.distance == 1


def test_substitution_keeps_length():
    result = align_sequences([1, 2, 3], [1, 5, 3], BLANK)
    assert result.p == [1, 2, 3]
    assert result.t == [1, 5, 3]
    assert result.distance == 1


def test_empty_sequence_gives_empty_alignment():
    result = align_sequences([], [1, 2], BLANK)
    assert result == Alignment([], [], 0)


def test_unmatched_leading_element_is_dropped():
    result = align_sequences([5, 1], [1], BLANK)
    assert result.p == [1]
    assert result.t == [1]
    assert result.distance == 0


@pytest.mark.parametrize("trial", range(30))
def test_alignment_invariants(trial):
    rng = random.Random(trial)
    p = [rng.randrange(4) for _ in range(rng.randrange(1, 12))]
    t = [rng.randrange(4) for _ in range(rng.randrange(1, 12))]
    result = align_sequences(p, t, BLANK)
    assert len(result.p) == len(result.t)
    assert result.distance == sum(a != b for a, b in zip(result.p, result.t))
    assert all(not (a == BLANK and b == BLANK) for a, b in zip(result.p, result.t))
    assert result.distance <= max(len(p), len(t)) + min(len(p), len(t))