import numpy as np
import pytest

from GreedyGM.errors import ConfigurationError, InfeasibleScalingError
from GreedyGM.scaling import (ConditionalScaling, NoScaling, UnconditionalScaling, compute_scale_factors,
                              get_scaling, scale_grid)
from GreedyGM.selection import CandidatePool, SelectionParameters, TargetStatistics


def test_scale_grid_respects_both_limits():
    scales = scale_grid(4)

    assert scales[0] == pytest.approx(0.3)
    assert scales[-1] == pytest.approx(4.0)
    assert len(scales) == 38
    np.testing.assert_allclose(scale_grid(1), [1.0])
    with pytest.raises(InfeasibleScalingError):
        scale_grid(0.5)


def test_scale_factors_complete_the_selected_set():
    sample_big = np.log(np.array([[0.5], [1.0], [0.25]]))
    sample_small = np.array([[0.0]])

    scale_factors = compute_scale_factors(sample_big, sample_small, [0.0], [0.0], [1, 2, 0.3], 3)

    # the last record would need a scale factor of 4
    np.testing.assert_allclose(scale_factors, [2.0, 1.0, 3.0])


def test_scale_factors_with_empty_selected_set():
    sample_big = np.log(np.array([[0.5, 0.5], [2.0, 2.0]]))
    scale_factors = compute_scale_factors(sample_big, np.zeros((0, 2)), [0.0, 0.0], [0.0, 0.0], [1, 2, 0.3], 4)

    np.testing.assert_allclose(scale_factors, [2.0, 0.5])


def test_admissible_scale_factors():
    sample_big = np.log(np.array([[0.1, 1.0], [1.0, 1.0], [3.0, 1.0]]))
    scaling = ConditionalScaling(sample_big, 0, 0.0, max_scale_factor=2)

    # only the upper limit applies, records scaled down below 1 / max_scale_factor are kept
    np.testing.assert_allclose(scaling.scale_factors(None), [10.0, 1.0, 1 / 3])
    np.testing.assert_array_equal(scaling.admissible(scaling.scale_factors(None)), [False, True, True])
    np.testing.assert_array_equal(scaling.admissible(np.array([2.0, 0.2])), [True, True])
    np.testing.assert_array_equal(NoScaling(3).admissible(np.array([10.0, 1.0, 0.01])), [True, True, True])


def test_scaling_is_chosen_by_parameters():
    target = TargetStatistics(mean_ln=[np.log(2.0), 0.0], sigma_ln=[0.0, 0.5])
    pool = CandidatePool(np.log(np.array([[1.0, 1.0], [4.0, 1.0], [0.5, 2.0]])))

    scaling = get_scaling(SelectionParameters(is_scaled=0), target, pool)
    assert isinstance(scaling, NoScaling)
    np.testing.assert_array_equal(scaling.scale_factors(None), np.ones(3))

    scaling = get_scaling(SelectionParameters(is_scaled=1, is_conditioned=1, conditioning_index=0), target, pool)
    assert isinstance(scaling, ConditionalScaling)
    np.testing.assert_allclose(scaling.scale_factors(None), [2.0, 0.5, 4.0])

    scaling = get_scaling(SelectionParameters(is_scaled=1, is_conditioned=1, conditioning_index=0,
                                              ln_sa_conditioning=0.0), target, pool)
    np.testing.assert_allclose(scaling.scale_factors(None), [1.0, 0.25, 2.0])

    scaling = get_scaling(SelectionParameters(is_scaled=1, is_conditioned=0, max_scale_factor=4), target, pool)
    assert isinstance(scaling, UnconditionalScaling)
    assert not scaling.is_constant

    with pytest.raises(ConfigurationError):
        get_scaling(SelectionParameters(is_scaled=1, is_conditioned=1), target, pool)
