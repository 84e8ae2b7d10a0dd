"""
Amplitude scaling of candidate records
"""

# Import python libraries
import abc
import numpy as np
from numba import njit
from .errors import ConfigurationError, InfeasibleScalingError
from .utility import mean_numba, std_numba


@njit
def _grid_scale_factors(sample_big, sample_small, mu_ln, sigma_ln, error_weights, scales):
    """
    Details
    -------
    For each record in sample_big, finds the scale factor in scales which minimizes the weighted
    squared error in mean and standard deviation of sample_small extended by the scaled record.
    The method is defined separately so that njit can be used as wrapper and the routine can be run faster

    Returns
    -------
    scale_factors : numpy.ndarray (1-D)
        Best scale factor of each record
    """

    num_small = sample_small.shape[0]
    scale_factors = np.ones(sample_big.shape[0])
    sample_trial = np.zeros((num_small + 1, sample_big.shape[1]))
    sample_trial[:num_small, :] = sample_small
    for j in range(sample_big.shape[0]):
        min_dev = np.inf
        for s in range(scales.shape[0]):
            sample_trial[num_small, :] = sample_big[j, :] + np.log(scales[s])
            dev_mean = mean_numba(sample_trial) - mu_ln
            dev_sig = std_numba(sample_trial) - sigma_ln
            dev_total = error_weights[0] * np.sum(dev_mean * dev_mean) + error_weights[1] * np.sum(dev_sig * dev_sig)
            if dev_total < min_dev:
                min_dev = dev_total
                scale_factors[j] = scales[s]

    return scale_factors


def scale_grid(max_scale_factor, step=0.1):
    """
    Details
    -------
    Trial scale factors k * step lying within [1 / max_scale_factor, max_scale_factor].

    Parameters
    ----------
    max_scale_factor : float
        The maximum allowable scale factor
    step : float, optional
        Increment between trial scale factors.
        The default is 0.1.

    Returns
    -------
    scales : numpy.ndarray (1-D)
    """

    num_steps = int(np.floor(max_scale_factor / step + 1e-9))
    scales = np.arange(1, num_steps + 1) * step
    scales = scales[scales >= 1 / max_scale_factor - 1e-12]
    if scales.size == 0:
        raise InfeasibleScalingError(f'No scale factor in steps of {step} satisfies the '
                                     f'maximum allowable scale factor of {max_scale_factor}')

    return scales


def compute_scale_factors(sample_big, sample_small, mu_ln, sigma_ln, error_weights, max_scale_factor):
    """
    Details
    -------
    Computes scale factors of all candidate records given the currently selected records,
    by grid search between 1 / max_scale_factor and max_scale_factor.

    Parameters
    ----------
    sample_big : numpy.ndarray (2-D)
        Log spectra of the candidate records
    sample_small : numpy.ndarray (2-D)
        Log spectra of the currently selected records
    mu_ln : numpy.ndarray (1-D)
        Logarithmic mean of the target spectrum
    sigma_ln : numpy.ndarray (1-D)
        Logarithmic standard deviation of the target spectrum
    error_weights : numpy.ndarray (1-D) or list
        Weights for error in mean, standard deviation and skewness
    max_scale_factor : float
        The maximum allowable scale factor

    Returns
    -------
    scale_factors : numpy.ndarray (1-D)
        Scale factor of each candidate record
    """

    sample_small = np.asarray(sample_small, dtype=float).reshape(-1, sample_big.shape[1])
    return _grid_scale_factors(np.asarray(sample_big, dtype=float), sample_small,
                               np.asarray(mu_ln, dtype=float), np.asarray(sigma_ln, dtype=float),
                               np.asarray(error_weights, dtype=float), scale_grid(max_scale_factor))


class ScalingStrategy(abc.ABC):
    """
    Provides the scale factors of all candidate records for a slot.
    """

    # True if the scale factors do not depend on the currently selected records
    is_constant = True

    def __init__(self, num_big, max_scale_factor=None):
        self.num_big = num_big
        self.max_scale_factor = max_scale_factor

    @abc.abstractmethod
    def scale_factors(self, sample_small):
        """
        Returns the scale factors of all candidate records, given the selected records left after removing one.
        """

    def admissible(self, scale_factors):
        """
        Mask of scale factors not exceeding max_scale_factor.
        """

        if self.max_scale_factor is None:
            return np.ones(len(scale_factors), dtype=bool)
        return np.asarray(scale_factors) <= self.max_scale_factor


class NoScaling(ScalingStrategy):
    """
    Records are used as they are.
    """

    def __init__(self, num_big):
        super().__init__(num_big)
        self._scale_factors = np.ones(num_big)

    def scale_factors(self, sample_small):
        return self._scale_factors


class ConditionalScaling(ScalingStrategy):
    """
    Records are scaled to the target amplitude at the conditioning period.
    Scale factors are computed once and kept for the whole selection.
    """

    def __init__(self, sample_big, conditioning_index, ln_sa_conditioning, max_scale_factor):
        super().__init__(sample_big.shape[0], max_scale_factor)
        self._scale_factors = np.exp(ln_sa_conditioning) / np.exp(sample_big[:, conditioning_index])

    def scale_factors(self, sample_small):
        return self._scale_factors


class UnconditionalScaling(ScalingStrategy):
    """
    Records are scaled to minimize the error of the set they would complete.
    Scale factors are recomputed for every slot.
    """

    is_constant = False

    def __init__(self, sample_big, mu_ln, sigma_ln, error_weights, max_scale_factor):
        super().__init__(sample_big.shape[0], max_scale_factor)
        self.sample_big = sample_big
        self.mu_ln = mu_ln
        self.sigma_ln = sigma_ln
        self.error_weights = error_weights
        # fail early if no scale factor can be admissible
        scale_grid(max_scale_factor)

    def scale_factors(self, sample_small):
        return compute_scale_factors(self.sample_big, sample_small, self.mu_ln, self.sigma_ln,
                                     self.error_weights, self.max_scale_factor)


def get_scaling(params, target, pool):
    """
    Details
    -------
    Creates the scaling strategy selected by the selection parameters.

    Parameters
    ----------
    params : SelectionParameters
        Selection settings; is_scaled, is_conditioned, max_scale_factor,
        conditioning_index, ln_sa_conditioning and error_weights are used.
    target : TargetStatistics
        Target distribution of the log spectra.
    pool : CandidatePool
        Candidate records.

    Returns
    -------
    scaling : ScalingStrategy
    """

    if not params.is_scaled:
        return NoScaling(pool.size)

    if params.is_conditioned:
        if params.conditioning_index is None:
            raise ConfigurationError('Conditional scaling requires the index of the conditioning period')
        ln_sa_conditioning = params.ln_sa_conditioning
        if ln_sa_conditioning is None:
            ln_sa_conditioning = target.mean_ln[params.conditioning_index]
        return ConditionalScaling(pool.sample_big, params.conditioning_index, ln_sa_conditioning,
                                  params.max_scale_factor)

    return UnconditionalScaling(pool.sample_big, target.mean_ln, target.sigma_ln, np.asarray(params.error_weights, dtype=float),
                                params.max_scale_factor)
