import numpy as np
import pytest

from tinynn.normalize import mean_sdev, normalize

DATA = np.array(
    [
        [1.0, 10.0, 7.0, 1.0],
        [2.0, 20.0, 7.0, 1.0],
        [3.0, 35.0, 7.0, 1.0],
        [6.0, 15.0, 7.0, 1.0],
    ]
)


def test_mean_and_sdev_match_population_statistics():
    mean, sdev = mean_sdev(DATA)
    np.testing.assert_allclose(mean, DATA.mean(axis=0))
    np.testing.assert_allclose(sdev, DATA.std(axis=0))


def test_exclude_last_drops_bias_column():
    mean, sdev = mean_sdev(DATA, exclude_last=True)
    assert mean.shape == (3,)
    assert sdev.shape == (3,)
    np.testing.assert_allclose(mean, DATA[:, :3].mean(axis=0))


def test_normalized_features_have_zero_mean_unit_sdev():
    mean, sdev = mean_sdev(DATA, exclude_last=True)
    out = normalize(DATA, mean, sdev, exclude_last=True)
    np.testing.assert_allclose(out[:, :2].mean(axis=0), 0.0, atol=1e-12)
    np.testing.assert_allclose(out[:, :2].std(axis=0), 1.0)


def test_constant_feature_becomes_zero():
    mean, sdev = mean_sdev(DATA, exclude_last=True)
    out = normalize(DATA, mean, sdev, exclude_last=True)
    np.testing.assert_array_equal(out[:, 2], np.zeros(4))


def test_excluded_column_is_unchanged_and_input_untouched():
    original = DATA.copy()
    mean, sdev = mean_sdev(DATA, exclude_last=True)
    out = normalize(DATA, mean, sdev, exclude_last=True)
    np.testing.assert_array_equal(out[:, 3], DATA[:, 3])
    np.testing.assert_array_equal(DATA, original)


def test_mismatched_statistics_rejected():
    mean, sdev = mean_sdev(DATA)
    with pytest.raises(ValueError):
        normalize(DATA, mean, sdev, exclude_last=True)


def test_empty_data_rejected():
    with pytest.raises(ValueError):
        mean_sdev(np.zeros((0, 3)))