import matplotlib

matplotlib.use('Agg')

import numpy as np
import pytest

from GreedyGM.selection import CandidatePool, SelectedSet, TargetStatistics
from GreedyGM.utility import random_multivariate_normal


@pytest.fixture
def scenario():
    """Four single-period candidates, two of them selected."""
    pool = CandidatePool([[0.0], [1.0], [2.0], [3.0]])
    target = TargetStatistics(mean_ln=[1.5], sigma_ln=[0.5])
    initial = SelectedSet.from_indices(pool, [0, 2])
    return target, pool, initial


@pytest.fixture
def periods():
    return np.array([0.1, 0.2, 0.5, 1.0, 2.0])


@pytest.fixture
def target(periods):
    mu_ln = np.log(0.5 * np.exp(-0.5 * periods))
    sigma_ln = np.full(len(periods), 0.5)
    rho = np.exp(-np.abs(np.log(periods.reshape(-1, 1) / periods.reshape(1, -1))))
    return TargetStatistics(mean_ln=mu_ln, cov=rho * np.outer(sigma_ln, sigma_ln), periods=periods)


@pytest.fixture
def pool(target):
    sample_big = random_multivariate_normal(target.mean_ln, 1.5 * target.cov, 40, 'MCS', seed=7)
    return CandidatePool(sample_big, record_ids=[f'RSN{i}' for i in range(40)])
