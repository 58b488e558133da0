import numpy as np
import pytest

from tinynn.loss import (
    cross_entropy_loss,
    d_cross_entropy_loss,
    d_mean_square_error,
    d_sparse_cross_entropy_loss,
    mean_square_error,
    sparse_cross_entropy_loss,
)

YP = np.array([[0.2, 0.5, 0.3], [0.6, 0.1, 0.3], [0.1, 0.1, 0.8]])
LABELS = np.array([1, 0, 2])
YT = np.eye(3)[LABELS]


def test_mean_square_error_is_root_of_summed_squares():
    assert mean_square_error([[3.0, 4.0]], [[0.0, 0.0]]) == pytest.approx(5.0)


def test_mean_square_error_zero_for_equal():
    assert mean_square_error(YP, YP) == 0.0


def test_cross_entropy_near_zero_for_perfect_prediction():
    assert cross_entropy_loss(YT, YT) == pytest.approx(0.0, abs=1e-6)


def test_cross_entropy_decreases_with_confidence():
    worse = np.array([[0.5, 0.5]])
    better = np.array([[0.1, 0.9]])
    target = np.array([[0.0, 1.0]])
    assert cross_entropy_loss(better, target) < cross_entropy_loss(worse, target)


def test_sparse_matches_dense_cross_entropy():
    assert sparse_cross_entropy_loss(YP, LABELS) == pytest.approx(cross_entropy_loss(YP, YT))


def test_sparse_accepts_column_targets():
    column = LABELS.reshape(-1, 1).astype(float)
    assert sparse_cross_entropy_loss(YP, column) == pytest.approx(
        sparse_cross_entropy_loss(YP, LABELS)
    )


def test_sparse_gradient_matches_dense_gradient():
    np.testing.assert_allclose(
        d_sparse_cross_entropy_loss(YP, LABELS), d_cross_entropy_loss(YP, YT)
    )


def test_cross_entropy_gradient_rows_sum_to_zero_for_distributions():
    grad = d_cross_entropy_loss(YP, YT)
    np.testing.assert_allclose(grad.sum(axis=1), np.zeros(3), atol=1e-12)


def test_gradients_vanish_at_target():
    np.testing.assert_array_equal(d_cross_entropy_loss(YT, YT), np.zeros((3, 3)))
    np.testing.assert_array_equal(d_mean_square_error(YP, YP), np.zeros((3, 3)))


def test_mean_square_gradient_matches_finite_difference():
    yp = np.array([[0.3, -1.2], [2.0, 0.5], [0.1, 0.7]])
    yt = np.array([[0.0, 1.0], [1.5, 0.5], [-0.4, 0.2]])
    rows, cols = yp.shape

    def mean_sq(p):
        return mean_square_error(p, yt) ** 2 / (rows * cols)

    grad = d_mean_square_error(yp, yt)
    h = 1e-6
    for i in range(rows):
        for j in range(cols):
            up = yp.copy()
            down = yp.copy()
            up[i, j] += h
            down[i, j] -= h
            numeric = (mean_sq(up) - mean_sq(down)) / (2 * h)
            assert grad[i, j] == pytest.approx(numeric, rel=1e-5, abs=1e-8)