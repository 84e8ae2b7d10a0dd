"""
Miscellaneous routines used by the greedy selection toolbox
"""

# Import python libraries
import os
import shutil
from time import time
import numpy as np
from numba import njit
from scipy.stats import norm, qmc


def make_dir(dir_path):
    """
    Details
    -------
    Makes a clean directory by deleting it if it exists.

    Parameters
    ----------
    dir_path : str
        name of directory to make.

    Returns
    -------
    None.
    """

    if os.path.exists(dir_path):
        shutil.rmtree(dir_path)
    os.makedirs(dir_path)


def run_time(start_time):
    """
    Details
    -------
    Prints the time passed between start_time and finish_time (now)
    in hours, minutes, seconds.

    Parameters
    ----------
    start_time : float
        The initial time obtained via time().

    Returns
    -------
    None.
    """

    finish_time = time()
    # Procedure to obtained elapsed time in Hr, Min, and Sec
    time_seconds = finish_time - start_time
    time_minutes = int(time_seconds / 60)
    time_hours = int(time_seconds / 3600)
    time_minutes = int(time_minutes - time_hours * 60)
    time_seconds = time_seconds - time_minutes * 60 - time_hours * 3600
    print(f"Run time: {time_hours:.0f} hours: {time_minutes:.0f} minutes: {time_seconds:.2f} seconds")


def period_mask(num_periods, excluded_index=None):
    """
    Boolean mask over the period axis which is False only at excluded_index (if given).
    """

    mask = np.ones(num_periods, dtype=bool)
    if excluded_index is not None:
        mask[excluded_index] = False

    return mask


@njit
def mean_numba(arr):
    """
    Computes the mean of a 2-D array along axis=0.
    Required for computations since njit is used as wrapper.
    """

    res = np.zeros(arr.shape[1])
    for i in range(arr.shape[1]):
        res[i] = arr[:, i].mean()

    return res


@njit
def std_numba(arr):
    """
    Computes the (population) standard deviation of a 2-D array along axis=0.
    Required for computations since njit is used as wrapper.
    """

    res = np.zeros(arr.shape[1])
    for i in range(arr.shape[1]):
        res[i] = arr[:, i].std()

    return res


@njit
def skew_numba(arr):
    """
    Computes the biased sample skewness of a 2-D array along axis=0,
    same as scipy.stats.skew with bias=True. Columns with zero variance have zero skewness.
    """

    res = np.zeros(arr.shape[1])
    for i in range(arr.shape[1]):
        dev = arr[:, i] - arr[:, i].mean()
        m2 = np.mean(dev ** 2)
        if m2 > 0:
            res[i] = np.mean(dev ** 3) / m2 ** 1.5

    return res


@njit
def count_exceedance(sample, mu_ln, sigma_ln):
    """
    Counts the spectral ordinates of the sample lying beyond 3 sigma of the target at any period.
    Periods without target dispersion, such as the conditioning period, are not counted.
    """

    upper = mu_ln + 3.0 * sigma_ln
    lower = mu_ln - 3.0 * sigma_ln
    count = 0
    for m in range(sample.shape[0]):
        for k in range(sample.shape[1]):
            if sigma_ln[k] <= 0:
                continue
            if sample[m, k] > upper[k] or sample[m, k] < lower[k]:
                count += 1

    return count


def random_uniform(num_dimensions, num_samples, sampling_type, seed=None):
    """
    Details
    -------
    Used to perform sampling based on Monte Carlo Simulation or Latin Hypercube Sampling

    References
    ----------
    https://docs.scipy.org/doc/scipy/reference/generated/scipy.stats.qmc.LatinHypercube.html#scipy.stats.qmc.LatinHypercube

    Parameters
    ----------
    num_dimensions : int
        number of dimensions
    num_samples : int
        number of samples
    sampling_type : str
        type of sampling.
        Monte Carlo Sampling: 'MCS'
        Latin Hypercube Sampling: 'LHS'
    seed : int or numpy.random.Generator, optional
        Seed for repeatable sampling.
        The default is None.

    Returns
    -------
    sample : numpy.ndarray (num_samples x num_dimensions)
        Array which contains randomly generated numbers between 0 and 1
    """

    if sampling_type == 'MCS':
        # Do Monte Carlo Sampling without any grid
        rng = np.random.default_rng(seed)
        sample = rng.uniform(size=[num_dimensions, num_samples]).T
    elif sampling_type == 'LHS':
        # A Latin hypercube sample generates n points in [0, 1)^d.
        # Each univariate marginal distribution is stratified, placing exactly one point in each possible grid.
        sampler = qmc.LatinHypercube(d=num_dimensions, rng=seed)
        sample = sampler.random(n=num_samples)
    else:
        raise ValueError(f'{sampling_type} is not a valid sampling type, use MCS or LHS')

    return sample


def random_multivariate_normal(mu, cov, num_samples, sampling_option, seed=None):
    """
    Details
    -------
    Used to generate multivariate correlated normal samples

    References
    ----------
    Yang, T. Y., Moehle, J., Stojadinovic, B., & Der Kiureghian, A. (2009).
    Seismic Performance Evaluation of Facilities: Methodology and Implementation.
    In Journal of Structural Engineering (Vol. 135, Issue 10, pp. 1146–1154).
    American Society of Civil Engineers (ASCE). https://doi.org/10.1061/(asce)0733-9445(2009)135:10(1146)

    Parameters
    ----------
    mu : numpy.ndarray (1-D)
        Mean value vector
    cov : numpy.ndarray (2-D)
        Covariance matrix
    num_samples : int
        number of samples
    sampling_option : str
        Monte Carlo Sampling: 'MCS'
        Latin Hypercube Sampling: 'LHS'
    seed : int or numpy.random.Generator, optional
        Seed for repeatable sampling.
        The default is None.

    Returns
    -------
    z : numpy.ndarray (num_samples x num_dimensions)
        Array which contains correlated normal realizations
    """

    mu = np.asarray(mu, dtype=float)
    num_dimensions = len(mu)
    my = mu.reshape(-1, 1) @ np.ones([1, num_samples])
    eigen_values, eigen_vectors = np.linalg.eigh(cov)
    # Round-off can produce tiny negative eigenvalues for singular covariance matrices
    eigen_values = np.clip(eigen_values, 0, None)
    ly = eigen_vectors
    # Standard deviations
    dy = np.diag(eigen_values ** 0.5)
    # Generate uniformly distributed between 0 and 1
    u = random_uniform(num_dimensions, num_samples, sampling_option, seed)
    # Compute standard random numbers
    u = norm(loc=0, scale=1).ppf(u)
    # Create realization matrix (Eqn. 4) - @ is the matrix multiplication
    z = (ly @ dy @ u.T + my).T

    return z
