"""Needleman-Wunsch alignment of two sequences with edit distance."""

from dataclasses import dataclass

_DIAGONAL = "D"
_UP = "U"
_LEFT = "L"


@dataclass(frozen=True)
class Alignment:
    """Two aligned sequences of equal length and their edit distance."""

    p: list
    t: list
    distance: int


def align_sequences(p, t, blank):
    """Align p and t so they have equal length and the smallest edit distance.

    Gaps are filled with blank, which should not occur in either sequence.
    The traceback stops as soon as either sequence is exhausted, so any
    elements left at the start of the other are not part of the result.
    """
    p = list(p)
    t = list(t)
    plen, tlen = len(p), len(t)

    score = [[0] * (tlen + 1) for _ in range(plen + 1)]
    move = [[_LEFT] * (tlen + 1) for _ in range(plen + 1)]
    for i in range(1, plen + 1):
        score[i][0] = -i
        move[i][0] = _UP
    for j in range(tlen + 1):
        score[0][j] = -j

    for i, pi in enumerate(p):
        row, below = score[i], score[i + 1]
        for j, tj in enumerate(t):
            match = row[j] + (1 if pi == tj else -1)
            pgap = row[j + 1] - 1
            tgap = below[j] - 1
            if match >= pgap and match >= tgap:
                below[j + 1] = match
                move[i + 1][j + 1] = _DIAGONAL
            elif pgap > match and pgap >= tgap:
                below[j + 1] = pgap
                move[i + 1][j + 1] = _UP
            else:
                below[j + 1] = tgap
                move[i + 1][j + 1] = _LEFT

    aligned_p = []
    aligned_t = []
    distance = 0
    i, j = plen, tlen
    while i > 0 and j > 0:
        step = move[i][j]
        if step == _DIAGONAL:
            aligned_p.append(p[i - 1])
            aligned_t.append(t[j - 1])
            if p[i - 1] != t[j - 1]:
                distance += 1
            i -= 1
            j -= 1
        elif step == _UP:
            aligned_p.append(p[i - 1])
            aligned_t.append(blank)
            distance += 1
            i -= 1
        else:
            aligned_p.append(blank)
            aligned_t.append(t[j - 1])
            distance += 1
            j -= 1

    aligned_p.reverse()
    aligned_t.reverse()
    return Alignment(aligned_p, aligned_t, distance)