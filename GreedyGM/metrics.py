"""
Error metrics measuring how far a set of log response spectra is from the target distribution
"""

# Import python libraries
import abc
import numpy as np
from numba import njit
from scipy.stats import norm
from .errors import ConfigurationError, NumericDegeneracyError
from .utility import mean_numba, std_numba, skew_numba, count_exceedance, period_mask

METRICS = ('SSE', 'KS')


@njit
def _sse_deviation(sample, mu_ln, sigma_ln, error_weights, penalty):
    """
    Details
    -------
    Weighted sum of squared errors in mean, standard deviation and skewness.
    The method is defined separately so that njit can be used as wrapper and the routine can be run faster

    Parameters
    ----------
    sample : numpy.ndarray (2-D)
        Log spectra of the trial set
    mu_ln : numpy.ndarray (1-D)
        Logarithmic mean of the target spectrum
    sigma_ln : numpy.ndarray (1-D)
        Logarithmic standard deviation of the target spectrum
    error_weights : numpy.ndarray (1-D)
        Weights for error in mean, standard deviation and skewness
    penalty : float
        > 0 to penalize spectra more than 3 sigma from the target at any period, 0 otherwise.

    Returns
    -------
    dev_total : float
        Total deviation of the trial set
    """

    dev_mean = mean_numba(sample) - mu_ln  # Compute deviations from target
    dev_sig = std_numba(sample) - sigma_ln
    dev_skew = skew_numba(sample)  # target skewness is zero
    dev_total = error_weights[0] * np.sum(dev_mean * dev_mean) + error_weights[1] * np.sum(dev_sig * dev_sig) + \
        0.1 * error_weights[2] * np.sum(dev_skew * dev_skew)

    # Penalize bad spectra
    if penalty > 0:
        dev_total = dev_total + count_exceedance(sample, mu_ln, sigma_ln) * penalty

    return dev_total


class SpectrumMetric(abc.ABC):
    """
    Scores a set of log spectra against the target distribution, lower is better.
    """

    name = None

    def __init__(self, mu_ln, sigma_ln, penalty=0):
        self.mu_ln = np.asarray(mu_ln, dtype=float)
        self.sigma_ln = np.asarray(sigma_ln, dtype=float)
        self.penalty = float(penalty)

    @abc.abstractmethod
    def score(self, sample):
        """
        Returns the non-negative deviation of the sample (num_spectra x num_periods) from the target.
        """

    def _check_shape(self, sample):
        sample = np.asarray(sample, dtype=float)
        if sample.ndim != 2 or sample.shape[1] != self.mu_ln.shape[0] or sample.shape[0] == 0:
            raise ConfigurationError(f'Expected a non-empty (n x {self.mu_ln.shape[0]}) array of log spectra, '
                                     f'got shape {sample.shape}')
        return sample


class SSEMetric(SpectrumMetric):
    """
    Sum of squared errors between the sample and the target mean, standard deviation and (zero) skewness.
    """

    name = 'SSE'

    def __init__(self, mu_ln, sigma_ln, error_weights=(1, 2, 0.3), penalty=0):
        super().__init__(mu_ln, sigma_ln, penalty)
        self.error_weights = np.asarray(error_weights, dtype=float)

    def score(self, sample):
        sample = self._check_shape(sample)
        return float(_sse_deviation(sample, self.mu_ln, self.sigma_ln, self.error_weights, self.penalty))


class KSMetric(SpectrumMetric):
    """
    Sum over periods of the Kolmogorov-Smirnov D statistic between the sample and
    a normal distribution with the target logarithmic mean and standard deviation.
    The conditioning period, where the target has no dispersion, is left out.
    """

    name = 'KS'

    def __init__(self, mu_ln, sigma_ln, penalty=0, conditioning_index=None):
        super().__init__(mu_ln, sigma_ln, penalty)
        self.periods_used = period_mask(len(self.mu_ln), conditioning_index)
        sigma_used = self.sigma_ln[self.periods_used]
        if np.any(~np.isfinite(sigma_used)) or np.any(sigma_used <= 0):
            raise NumericDegeneracyError('KS statistic requires positive target standard deviations '
                                         'at every period except the conditioning period')

    def score(self, sample):
        sample = self._check_shape(sample)
        num_spectra = sample.shape[0]
        sorted_ln_sa = np.sort(sample[:, self.periods_used], axis=0)
        norm_cdf = norm.cdf(sorted_ln_sa, loc=self.mu_ln[self.periods_used], scale=self.sigma_ln[self.periods_used])
        steps = np.arange(1, num_spectra + 1).reshape(-1, 1) / num_spectra
        d_plus = np.max(steps - norm_cdf, axis=0)
        d_minus = np.max(norm_cdf - (steps - 1.0 / num_spectra), axis=0)
        dev_total = np.sum(np.maximum(d_plus, d_minus))

        if self.penalty > 0:
            dev_total = dev_total + count_exceedance(sample, self.mu_ln, self.sigma_ln) * self.penalty

        return float(dev_total)


def get_metric(params, target):
    """
    Details
    -------
    Creates the error metric selected by the selection parameters.

    Parameters
    ----------
    params : SelectionParameters
        Selection settings; metric, error_weights, penalty and conditioning_index are used.
    target : TargetStatistics
        Target distribution of the log spectra.

    Returns
    -------
    metric : SpectrumMetric
    """

    if params.metric == 'SSE':
        return SSEMetric(target.mean_ln, target.sigma_ln, params.error_weights, params.penalty)
    elif params.metric == 'KS':
        return KSMetric(target.mean_ln, target.sigma_ln, params.penalty, params.conditioning_index)
    raise ConfigurationError(f'{params.metric} is not a valid metric, use one of {METRICS}')


def compute_spectrum_error(params, target, sample):
    """
    Returns the deviation of the log spectra in sample from the target, using the metric in params.
    """

    return get_metric(params, target).score(sample)
