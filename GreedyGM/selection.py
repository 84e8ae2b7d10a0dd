"""
Greedy ground motion record selection toolbox
"""

# Import python libraries
import copy
import logging
import os
import pickle
import numpy as np
from matplotlib.ticker import ScalarFormatter, NullFormatter
import matplotlib.pyplot as plt
from .errors import ConfigurationError, InfeasibleScalingError, NumericDegeneracyError
from .metrics import METRICS, SSEMetric, get_metric
from .progress import ProgressReporter, TqdmProgress
from .scaling import get_scaling
from .utility import make_dir, period_mask, random_multivariate_normal

logger = logging.getLogger(__name__)

SMALL_SIZE = 15
MEDIUM_SIZE = 16
BIG_SIZE = 18
BIGGER_SIZE = 20

plt.rc('font', size=SMALL_SIZE)  # controls default text sizes
plt.rc('axes', titlesize=SMALL_SIZE)  # fontsize of the axes title
plt.rc('axes', labelsize=BIG_SIZE)  # fontsize of the x and y labels
plt.rc('xtick', labelsize=SMALL_SIZE)  # fontsize of the tick labels
plt.rc('ytick', labelsize=SMALL_SIZE)  # fontsize of the tick labels
plt.rc('legend', fontsize=MEDIUM_SIZE)  # legend fontsize
plt.rc('figure', titlesize=BIGGER_SIZE)  # fontsize of the figure title

# Added to the error of records whose scale factor is not admissible
SCALE_LIMIT_SURCHARGE = 1000000


class SelectionParameters:
    """
    Settings of the greedy subset modification procedure.
    """

    def __init__(self, num_records=30, is_scaled=1, is_conditioned=0, max_scale_factor=4, tolerance=10,
                 metric='SSE', penalty=0, error_weights=[1, 2, 0.3], num_greedy_loops=2,
                 conditioning_index=None, ln_sa_conditioning=None, strict_scaling=False, pool_size=None):
        """
        Parameters
        ----------
        num_records : int, optional
            Number of ground motions to be selected.
            The default is 30.
        is_scaled : int, optional
            If 1 use of amplitude scaling for spectral matching is allowed.
            If 0 use of amplitude scaling for spectral matching is not allowed.
            The default is 1.
        is_conditioned : int, optional
            If 1 records are scaled to the target amplitude at the conditioning period.
            If 0 scale factors minimize the error of the selected set.
            The default is 0.
        max_scale_factor : float, optional
            The maximum allowable scale factor.
            The default is 4.
        tolerance : float, optional
            Tolerable percent error to stop the optimization (used for SSE metric only).
            The default is 10.
        metric : str, optional
            'SSE' for the sum of squared errors in mean, standard deviation and skewness,
            'KS' for the Kolmogorov-Smirnov test D statistic.
            The default is 'SSE'.
        penalty : float, optional
            > 0 to penalize selected spectra more than 3 sigma from the target at any period,
            0 otherwise.
            The default is 0.
        error_weights : numpy.ndarray or list, optional
            Weights for error in mean, standard deviation and skewness
            The default is [1, 2, 0.3].
        num_greedy_loops : int, optional
            Number of loops of optimization to perform.
            The default is 2.
        conditioning_index : int, optional
            Index of the conditioning period in the period array, None if there is no conditioning period.
            The default is None.
        ln_sa_conditioning : float, optional
            Logarithmic target amplitude at the conditioning period. If None the target mean at
            the conditioning period is used.
            The default is None.
        strict_scaling : bool, optional
            If True an InfeasibleScalingError is raised when no record with an admissible
            scale factor is left for a slot. If False such records are only penalized.
            The default is False.
        pool_size : int, optional
            Number of candidate records, checked against the candidate pool if given.
            The default is None.
        """

        self.num_records = num_records
        self.is_scaled = is_scaled
        self.is_conditioned = is_conditioned
        self.max_scale_factor = max_scale_factor
        self.tolerance = tolerance
        self.metric = metric
        self.penalty = penalty
        self.error_weights = list(error_weights)
        self.num_greedy_loops = num_greedy_loops
        self.conditioning_index = conditioning_index
        self.ln_sa_conditioning = ln_sa_conditioning
        self.strict_scaling = strict_scaling
        self.pool_size = pool_size

    def validate(self, pool_size=None, num_periods=None):
        """
        Details
        -------
        Checks the settings, optionally against the size of the candidate pool and the number of periods.

        Raises
        ------
        ConfigurationError
        """

        if pool_size is not None and self.pool_size is not None and pool_size != self.pool_size:
            raise ConfigurationError(f'pool_size is {self.pool_size} but the candidate pool has {pool_size} records')
        pool_size = self.pool_size if pool_size is None else pool_size

        if int(self.num_records) != self.num_records or self.num_records < 1:
            raise ConfigurationError('num_records must be a positive integer')
        if pool_size is not None:
            if pool_size == 0:
                raise ConfigurationError('The candidate pool is empty')
            if self.num_records >= pool_size:
                raise ConfigurationError(f'Cannot find replacements for {self.num_records} records '
                                         f'in a candidate pool of {pool_size} records')
        if int(self.num_greedy_loops) != self.num_greedy_loops or self.num_greedy_loops < 1:
            raise ConfigurationError('num_greedy_loops must be a positive integer')
        if self.metric not in METRICS:
            raise ConfigurationError(f'{self.metric} is not a valid metric, use one of {METRICS}')
        weights = np.asarray(self.error_weights, dtype=float)
        if weights.shape != (3,) or np.any(~np.isfinite(weights)) or np.any(weights < 0):
            raise ConfigurationError('error_weights must be three non-negative weights for mean, '
                                     'standard deviation and skewness')
        if not self.penalty >= 0:
            raise ConfigurationError('penalty must be non-negative')
        if not self.tolerance >= 0:
            raise ConfigurationError('tolerance must be non-negative')
        if self.is_scaled and not self.max_scale_factor > 0:
            raise ConfigurationError('max_scale_factor must be positive')
        if self.conditioning_index is not None and num_periods is not None:
            if not 0 <= self.conditioning_index < num_periods:
                raise ConfigurationError(f'conditioning_index {self.conditioning_index} is out of range '
                                         f'for {num_periods} periods')
        if self.is_scaled and self.is_conditioned and self.conditioning_index is None:
            raise ConfigurationError('Conditional scaling requires the index of the conditioning period')

    def to_dict(self):
        return dict(vars(self))

    @classmethod
    def from_dict(cls, settings):
        unknown = set(settings) - set(vars(cls()))
        if unknown:
            raise ConfigurationError(f'Unknown selection parameters: {sorted(unknown)}')
        return cls(**settings)


class TargetStatistics:
    """
    Target distribution of the log response spectra.
    """

    def __init__(self, mean_ln, cov=None, sigma_ln=None, periods=None):
        """
        Parameters
        ----------
        mean_ln : numpy.ndarray (1-D)
            Logarithmic mean of the target spectrum
        cov : numpy.ndarray (2-D), optional
            Covariance matrix of the logarithmic target spectrum.
            The default is None.
        sigma_ln : numpy.ndarray (1-D), optional
            Logarithmic standard deviation of the target spectrum. If None it is
            obtained from the diagonal of cov.
            The default is None.
        periods : numpy.ndarray (1-D), optional
            Periods of the spectral ordinates, only used for plotting.
            The default is None.
        """

        self.mean_ln = np.atleast_1d(np.asarray(mean_ln, dtype=float))
        num_periods = self.mean_ln.shape[0]
        if self.mean_ln.ndim != 1:
            raise ConfigurationError('mean_ln must be a 1-D array')

        if cov is not None:
            cov = np.atleast_2d(np.asarray(cov, dtype=float))
            if cov.shape != (num_periods, num_periods):
                raise ConfigurationError(f'cov must be a ({num_periods} x {num_periods}) matrix')
        self.cov = cov

        if sigma_ln is None:
            if cov is None:
                raise ConfigurationError('Either cov or sigma_ln must be given')
            sigma_ln = np.sqrt(np.clip(np.diag(cov), 0, None))
        self.sigma_ln = np.atleast_1d(np.asarray(sigma_ln, dtype=float))
        if self.sigma_ln.shape != self.mean_ln.shape:
            raise ConfigurationError('mean_ln and sigma_ln must have the same length')

        if np.any(~np.isfinite(self.mean_ln)) or np.any(~np.isfinite(self.sigma_ln)):
            raise NumericDegeneracyError('Target statistics contain non-finite values')

        if periods is None:
            periods = np.arange(1, num_periods + 1, dtype=float)
        self.periods = np.asarray(periods, dtype=float)

    @property
    def num_periods(self):
        return self.mean_ln.shape[0]


class CandidatePool:
    """
    Log response spectra of the candidate records, read-only.
    """

    def __init__(self, sample_big, record_ids=None):
        sample_big = np.array(sample_big, dtype=float)
        if sample_big.ndim == 1:
            sample_big = sample_big.reshape(-1, 1)
        if sample_big.ndim != 2 or sample_big.shape[0] == 0:
            raise ConfigurationError('The candidate pool is empty')
        if np.any(~np.isfinite(sample_big)):
            raise NumericDegeneracyError('NaNs or infinite values found in candidate spectra')
        sample_big.setflags(write=False)
        self.sample_big = sample_big

        if record_ids is not None:
            record_ids = np.asarray(record_ids)
            if record_ids.shape[0] != sample_big.shape[0]:
                raise ConfigurationError('There must be one record id for each candidate spectrum')
        self.record_ids = record_ids

    @property
    def size(self):
        return self.sample_big.shape[0]

    @property
    def num_periods(self):
        return self.sample_big.shape[1]


class SelectedSet:
    """
    Selected log spectra with their positions in the candidate pool and scale factors, aligned by slot.
    """

    def __init__(self, sample_small, rec_id, scale_factors=None):
        self.rec_id = np.asarray(rec_id, dtype=int).ravel()
        self.sample_small = np.atleast_2d(np.array(sample_small, dtype=float))
        if scale_factors is None:
            scale_factors = np.ones(self.rec_id.shape[0])
        self.scale_factors = np.array(scale_factors, dtype=float).ravel()

    @classmethod
    def from_indices(cls, pool, rec_id, scale_factors=None):
        """
        Builds the selected set from the candidate pool, by scaling the records at rec_id.
        """

        rec_id = np.asarray(rec_id, dtype=int).ravel()
        if scale_factors is None:
            scale_factors = np.ones(rec_id.shape[0])
        scale_factors = np.asarray(scale_factors, dtype=float).ravel()
        if np.any(rec_id < 0) or np.any(rec_id >= pool.size):
            raise ConfigurationError('Record indices must point to the candidate pool')
        if scale_factors.shape != rec_id.shape or np.any(scale_factors <= 0):
            raise ConfigurationError('There must be one positive scale factor for each selected record')
        sample_small = pool.sample_big[rec_id, :] + np.log(scale_factors).reshape(-1, 1)
        return cls(sample_small, rec_id, scale_factors)

    @property
    def num_records(self):
        return self.rec_id.shape[0]

    def copy(self):
        return SelectedSet(self.sample_small.copy(), self.rec_id.copy(), self.scale_factors.copy())

    def check(self, pool, num_records=None):
        """
        Details
        -------
        Checks that the selected set is consistent with the candidate pool.

        Parameters
        ----------
        pool : CandidatePool
            Candidate records.
        num_records : int, optional
            Expected number of selected records.
            The default is None.

        Raises
        ------
        ConfigurationError
        """

        if num_records is not None and self.num_records != num_records:
            raise ConfigurationError(f'The selected set has {self.num_records} records, expected {num_records}')
        if self.scale_factors.shape != self.rec_id.shape:
            raise ConfigurationError('There must be one scale factor for each selected record')
        if self.sample_small.shape != (self.num_records, pool.num_periods):
            raise ConfigurationError(f'Selected spectra must be a ({self.num_records} x {pool.num_periods}) array')
        if np.any(self.rec_id < 0) or np.any(self.rec_id >= pool.size):
            raise ConfigurationError('Record indices must point to the candidate pool')
        if np.unique(self.rec_id).shape[0] != self.num_records:
            raise ConfigurationError('A record is selected more than once')
        if np.any(~(self.scale_factors > 0)):
            raise ConfigurationError('Scale factors must be positive')
        expected = pool.sample_big[self.rec_id, :] + np.log(self.scale_factors).reshape(-1, 1)
        if not np.allclose(self.sample_small, expected):
            raise ConfigurationError('Selected spectra do not match the scaled candidate spectra')


def compute_errors(sample_small, target, conditioning_index=None):
    """
    Details
    -------
    Maximum (across periods) percent errors between the selected and target
    median and logarithmic standard deviation. The sample standard deviation
    (normalised by n - 1) is used. The conditioning period is left out of the
    standard deviation error only.

    Parameters
    ----------
    sample_small : numpy.ndarray (2-D)
        Log spectra of the selected records
    target : TargetStatistics
        Target distribution of the log spectra.
    conditioning_index : int, optional
        Index of the conditioning period.
        The default is None.

    Returns
    -------
    median_error : float
        Max error in median, percent
    std_error : float
        Max error in standard deviation, percent
    """

    sample_small = np.asarray(sample_small, dtype=float)
    median_error = np.max(np.abs(np.exp(np.mean(sample_small, axis=0)) - np.exp(target.mean_ln)) /
                          np.exp(target.mean_ln)) * 100

    mask = period_mask(target.num_periods, conditioning_index)
    if not np.any(mask):
        return float(median_error), 0.0
    sigma_ln = target.sigma_ln[mask]
    if np.any(sigma_ln <= 0):
        raise NumericDegeneracyError('Target standard deviation is zero at a period other than the conditioning period')
    # sample standard deviation, a single record is normalised by 1
    ddof = 1 if sample_small.shape[0] > 1 else 0
    std_error = np.max(np.abs(np.std(sample_small[:, mask], axis=0, ddof=ddof) - sigma_ln) / sigma_ln) * 100

    return float(median_error), float(std_error)


class GreedyOptimizer:
    """
    Greedy subset modification procedure. Each selected record is removed in turn
    and replaced by the candidate record which best completes the remaining set.

    References
    ----------
    Jayaram, N., Lin, T., and Baker, J. W. (2011).
    A computationally efficient ground-motion selection algorithm for
    matching a target response spectrum mean and variance.
    Earthquake Spectra, 27(3), 797-815.
    """

    def __init__(self, params, target, pool, metric=None, scaling=None, progress=None):
        """
        Parameters
        ----------
        params : SelectionParameters
            Selection settings.
        target : TargetStatistics
            Target distribution of the log spectra.
        pool : CandidatePool
            Candidate records.
        metric : SpectrumMetric, optional
            Error metric, if None it is created from params.
            The default is None.
        scaling : ScalingStrategy, optional
            Scaling strategy, if None it is created from params.
            The default is None.
        progress : ProgressReporter, optional
            Receives progress signals, if None nothing is reported.
            The default is None.
        """

        if pool.num_periods != target.num_periods:
            raise ConfigurationError(f'Candidate spectra have {pool.num_periods} periods, '
                                     f'target has {target.num_periods}')
        params.validate(pool.size, target.num_periods)

        self.params = params
        self.target = target
        self.pool = pool
        self.metric = metric if metric is not None else get_metric(params, target)
        self.scaling = scaling if scaling is not None else get_scaling(params, target, pool)
        self.progress = progress if progress is not None else ProgressReporter()

        if self.metric.name == 'SSE':
            sigma_ln = target.sigma_ln[period_mask(target.num_periods, params.conditioning_index)]
            if np.any(sigma_ln <= 0):
                raise NumericDegeneracyError('Target standard deviation is zero at a period '
                                             'other than the conditioning period')

        self.num_passes_run = 0
        self.median_error = None
        self.std_error = None

    def _find_rec_greedy(self, sample_small, rec_id, scaling_factors):
        """
        Details
        -------
        Scores every candidate record not in rec_id as the completion of sample_small.

        Returns
        -------
        min_id : int
            Index of the best candidate, the lowest index wins ties
        min_dev : float
            Its error
        """

        sample_big = self.pool.sample_big
        present = np.zeros(self.pool.size, dtype=bool)
        present[rec_id] = True
        if np.all(present):
            raise ConfigurationError('No candidate record is left to replace the removed record')

        admissible = self.scaling.admissible(scaling_factors)
        dev_total = np.full(self.pool.size, np.inf)
        sample_trial = np.zeros((sample_small.shape[0] + 1, sample_big.shape[1]))
        sample_trial[:-1, :] = sample_small
        for j in range(self.pool.size):
            if present[j]:
                continue
            if not admissible[j] and self.params.strict_scaling:
                continue
            # Add to the sample the scaled spectrum
            sample_trial[-1, :] = sample_big[j, :] + np.log(scaling_factors[j])
            dev_total[j] = self.metric.score(sample_trial)
            # Check if we exceed the scaling limit
            if not admissible[j]:
                dev_total[j] += SCALE_LIMIT_SURCHARGE

        min_id = int(np.argmin(dev_total))
        if not np.isfinite(dev_total[min_id]):
            raise InfeasibleScalingError(f'No record with a scale factor within the maximum allowable scale '
                                         f'factor of {self.params.max_scale_factor} is left')
        if not admissible[min_id]:
            logger.warning('Record %d is selected with the inadmissible scale factor %.3f',
                           min_id, scaling_factors[min_id])

        return min_id, dev_total[min_id]

    def optimize(self, initial_selection):
        """
        Details
        -------
        Performs the greedy subset modification on a copy of the initial selection.

        Parameters
        ----------
        initial_selection : SelectedSet
            Initially selected records.

        Returns
        -------
        selected : SelectedSet
            Optimized selection
        """

        initial_selection.check(self.pool, self.params.num_records)
        num_records = self.params.num_records
        num_loops = self.params.num_greedy_loops
        sample_big = self.pool.sample_big
        selected = initial_selection.copy()
        sample_small = selected.sample_small
        rec_id = selected.rec_id
        final_scale_factors = selected.scale_factors

        self.num_passes_run = 0
        self.median_error = None
        self.std_error = None

        # scale factors which do not depend on the selected records are computed once
        scaling_factors = self.scaling.scale_factors(None) if self.scaling.is_constant else None

        try:
            for k in range(num_loops):  # Number of passes
                for i in range(num_records):  # consider replacing each ground motion in the selected set
                    replaced_id = rec_id[i]
                    sample_small = np.delete(sample_small, i, 0)
                    rec_id = np.delete(rec_id, i)
                    final_scale_factors = np.delete(final_scale_factors, i)

                    # Try to add a new spectrum to the subset list
                    if not self.scaling.is_constant:
                        scaling_factors = self.scaling.scale_factors(sample_small)
                    min_id, min_dev = self._find_rec_greedy(sample_small, rec_id, scaling_factors)

                    # Add new element in the right slot
                    sample_small = np.concatenate((sample_small[:i, :],
                                                   sample_big[min_id, :].reshape(1, -1) + np.log(scaling_factors[min_id]),
                                                   sample_small[i:, :]), axis=0)
                    rec_id = np.concatenate((rec_id[:i], np.array([min_id]), rec_id[i:]))
                    final_scale_factors = np.concatenate((final_scale_factors[:i], np.array([scaling_factors[min_id]]),
                                                          final_scale_factors[i:]))
                    SelectedSet(sample_small, rec_id, final_scale_factors).check(self.pool, num_records)
                    logger.debug('Pass %d, slot %d: record %d replaced by record %d (error %.6g)',
                                 k + 1, i, replaced_id, min_id, min_dev)
                    self.progress.slot_done(k + 1, i, num_loops, num_records)

                self.num_passes_run = k + 1

                # Can the optimization be stopped after this loop based on the user specified tolerance?
                if self.metric.name == 'SSE':
                    self.median_error, self.std_error = compute_errors(sample_small, self.target,
                                                                       self.params.conditioning_index)
                    logger.info('Max (across periods) error in median = %3.1f percent', self.median_error)
                    logger.info('Max (across periods) error in standard deviation = %3.1f percent', self.std_error)
                    self.progress.pass_done(k + 1, self.median_error, self.std_error)

                    if self.median_error < self.params.tolerance and self.std_error < self.params.tolerance:
                        logger.info('The percent errors between chosen and target spectra are now '
                                    'within the required tolerances.')
                        break
        finally:
            self.progress.close()

        return SelectedSet(sample_small, rec_id, final_scale_factors)


def optimize_selection(params, target, pool, initial_selection, progress=None):
    """
    Details
    -------
    Improves the initially selected records with the greedy subset modification procedure.

    Parameters
    ----------
    params : SelectionParameters
        Selection settings.
    target : TargetStatistics
        Target distribution of the log spectra.
    pool : CandidatePool
        Candidate records.
    initial_selection : SelectedSet
        Initially selected records, left unchanged.
    progress : ProgressReporter, optional
        Receives progress signals.
        The default is None.

    Returns
    -------
    selected : SelectedSet
        Optimized selection
    """

    return GreedyOptimizer(params, target, pool, progress=progress).optimize(initial_selection)


def simulate_spectra(target, num_records, num_simulations=20, error_weights=[1, 2, 0.3], seed_value=None,
                     sampling_option='LHS'):
    """
    Details
    -------
    Generates simulated response spectra with best matches to the target values.

    Parameters
    ----------
    target : TargetStatistics
        Target distribution of the log spectra, cov is required.
    num_records : int
        Number of spectra in each simulated set.
    num_simulations : int, optional
        num_simulations sets of response spectra are simulated and the best set (in terms of
        matching means, variances and skewness) is chosen.
        The default is 20.
    error_weights : numpy.ndarray or list, optional
        Weights for error in mean, standard deviation and skewness
        The default is [1, 2, 0.3].
    seed_value : int, optional
        For repeatability. If None, a different set is generated each time.
        The default is None.
    sampling_option : str, optional
        Monte Carlo Sampling: 'MCS'
        Latin Hypercube Sampling: 'LHS'
        The default is 'LHS'.

    Returns
    -------
    sim_spec : numpy.ndarray (num_records x num_periods)
        Best set of simulated log spectra
    """

    if target.cov is None:
        raise ConfigurationError('Simulation of spectra requires the target covariance matrix')

    rng = np.random.default_rng(seed_value)
    metric = SSEMetric(target.mean_ln, target.sigma_ln, error_weights)
    dev_total_sim = np.zeros(num_simulations)
    spectra = {}
    for j in range(num_simulations):
        spectra[j] = random_multivariate_normal(target.mean_ln, target.cov, num_records, sampling_option, rng)
        # combine the three error metrics to compute a total error
        dev_total_sim[j] = metric.score(spectra[j])

    rec_use = int(np.argmin(dev_total_sim))  # find the simulated spectra that best match the targets
    return spectra[rec_use]


def initial_selection(params, target, pool, sim_spec):
    """
    Details
    -------
    Finds the candidate record closest to each simulated spectrum, the initial subset.

    Parameters
    ----------
    params : SelectionParameters
        Selection settings.
    target : TargetStatistics
        Target distribution of the log spectra.
    pool : CandidatePool
        Candidate records.
    sim_spec : numpy.ndarray (2-D)
        Simulated log spectra, one row per record to select.

    Returns
    -------
    selected : SelectedSet
        Initially selected records
    """

    params.validate(pool.size, target.num_periods)
    sim_spec = np.asarray(sim_spec, dtype=float).reshape(-1, pool.num_periods)
    if sim_spec.shape[0] != params.num_records:
        raise ConfigurationError(f'Expected {params.num_records} simulated spectra, got {sim_spec.shape[0]}')

    sample_big = pool.sample_big
    scaling = get_scaling(params, target, pool)
    rec_id = np.ones(params.num_records, dtype=int) * (-1)
    final_scale_factors = np.ones(params.num_records)

    for i in range(params.num_records):
        # Calculate the scaling factor
        if params.is_scaled and not params.is_conditioned:
            # using least squares fit to the simulated spectrum
            scaling_factors = np.sum(np.exp(sample_big) * np.exp(sim_spec[i, :]), axis=1) / np.sum(np.exp(sample_big) ** 2, axis=1)
        else:
            scaling_factors = scaling.scale_factors(None)

        # check if enough records are found
        mask = scaling.admissible(scaling_factors)
        mask[rec_id[:i]] = False
        error = np.full(pool.size, np.inf)
        error[mask] = np.sum((sample_big[mask, :] + np.log(scaling_factors[mask]).reshape(-1, 1) - sim_spec[i, :]) ** 2, axis=1)
        rec_id[i] = int(np.argmin(error))
        if not np.isfinite(error[rec_id[i]]):
            raise InfeasibleScalingError('Possible problem with simulated spectrum. No good matches found')
        final_scale_factors[i] = scaling_factors[rec_id[i]]

    return SelectedSet.from_indices(pool, rec_id, final_scale_factors)


class GreedySelection:
    """
    This class is used to
        1) Simulate spectra matching the target distribution
        2) Select an initial set of records closest to the simulated spectra
        3) Improve the set with the greedy subset modification procedure
        4) Write and plot the selected records
    """

    def __init__(self, target, pool, output_directory='Outputs'):
        """
        Parameters
        ----------
        target : TargetStatistics
            Target distribution of the log spectra.
        pool : CandidatePool
            Candidate records.
        output_directory : str, optional.
            output directory to create.
            The default is 'Outputs'
        """

        self.target = target
        self.pool = pool
        self.output_directory_path = os.path.join(os.getcwd(), output_directory)

    def select(self, num_records=30, is_scaled=1, is_conditioned=0, conditioning_index=None, ln_sa_conditioning=None,
               max_scale_factor=4, num_simulations=20, seed_value=None, error_weights=[1, 2, 0.3], num_greedy_loops=2, penalty=0,
               tolerance=10, metric='SSE', strict_scaling=False, show_progress=1):
        """
        Details
        -------
        Perform the ground motion selection. See SelectionParameters for the selection settings.

        Parameters
        ----------
        num_simulations : int, optional
            Number of simulated sets of spectra, the best one is the seed of the initial selection.
            The default is 20.
        seed_value : int, optional
            For repeatability. If None different sets may be selected each time.
            The default is None.
        show_progress : int, optional
            1 to show a progress bar, 0 otherwise.
            The default is 1.

        Returns
        -------
        None.
        """

        self.params = SelectionParameters(num_records=num_records, is_scaled=is_scaled, is_conditioned=is_conditioned,
                                          max_scale_factor=max_scale_factor, tolerance=tolerance, metric=metric,
                                          penalty=penalty, error_weights=error_weights,
                                          num_greedy_loops=num_greedy_loops, conditioning_index=conditioning_index,
                                          ln_sa_conditioning=ln_sa_conditioning, strict_scaling=strict_scaling)
        self.params.validate(self.pool.size, self.target.num_periods)
        self.num_simulations = num_simulations
        self.seed_value = seed_value

        # Simulate response spectra
        self.sim_spec = simulate_spectra(self.target, num_records, num_simulations, error_weights, seed_value)

        # Find best matches to the simulated spectra from the candidate records
        self.initial_selection = initial_selection(self.params, self.target, self.pool, self.sim_spec)

        # Apply greedy subset modification procedure
        if is_scaled and not is_conditioned:
            print('The algorithm is slower when scaling is used')
        if metric == 'KS':
            print('The algorithm is slower when optimizing with the KS-test Dn statistic')
        progress = TqdmProgress() if show_progress == 1 else None
        optimizer = GreedyOptimizer(self.params, self.target, self.pool, progress=progress)
        selected = optimizer.optimize(self.initial_selection)

        self.rec_id = selected.rec_id
        self.rec_scale_factors = selected.scale_factors
        self.rec_sa_ln = selected.sample_small
        if self.pool.record_ids is not None:
            self.rec_record_ids = self.pool.record_ids[selected.rec_id]
        self.num_passes_run = optimizer.num_passes_run
        self.median_error, self.std_error = compute_errors(self.rec_sa_ln, self.target, conditioning_index)

        print('Ground motion selection is finished.')
        print(f'For T ∈ [{self.target.periods[0]:.2f} - {self.target.periods[-1]:.2f}]')
        print(f'Max error in median = {self.median_error:.2f} %')
        print(f'Max error in standard deviation = {self.std_error:.2f} %')
        if self.median_error < tolerance and self.std_error < tolerance:
            print(f'The errors are within the target {tolerance} percent %')

    def write(self, obj=0, records=1):
        """
        Details
        -------
        Writes the object as pickle, selected record indices and scale factors as .txt files.

        Parameters
        ----------
        obj : int, optional
            flag to write the object into the pickle file.
            The default is 0.
        records : int, optional
            flag to write the indices, record ids and scale factors of the selected records.
            The default is 1.

        Notes
        -----
        0: no, 1: yes

        Returns
        -------
        None.
        """

        make_dir(self.output_directory_path)

        if records == 1:
            # Indices in the candidate pool
            np.savetxt(os.path.join(self.output_directory_path, 'GMR_rec_id.txt'), self.rec_id.reshape(-1, 1), fmt='%d')
            # Scale factors
            np.savetxt(os.path.join(self.output_directory_path, 'GMR_sf_used.txt'), self.rec_scale_factors.reshape(-1, 1), fmt='%1.5f')
            if self.pool.record_ids is not None:
                with open(os.path.join(self.output_directory_path, 'GMR_names.txt'), 'w') as names:
                    for record_id in self.rec_record_ids:
                        names.write(f'{record_id}\n')

        if obj == 1:
            # save some info as pickle obj
            obj = vars(copy.deepcopy(self))  # use copy.deepcopy to create independent obj
            obj['params'] = self.params.to_dict()
            del obj['output_directory_path']

            with open(os.path.join(self.output_directory_path, 'obj.pkl'), 'wb') as file:
                pickle.dump(obj, file)

        print(f"Finished writing process, the files are located in\n{self.output_directory_path}")

    def plot(self, simulations=0, records=1, save=0, show=1):
        """
        Details
        -------
        Plots the target spectrum with the simulated and/or selected spectra.

        Parameters
        ----------
        simulations : int, optional
            Flag to plot simulated response spectra vs. target spectrum.
            The default is 0.
        records : int, optional
            Flag to plot selected response spectra of selected records vs. target spectrum.
            The default is 1.
        save : int, optional
            Flag to save plotted figures in pdf format.
            The default is 0.
        show : int, optional
            Flag to show figures.
            The default is 1.

        Notes
        -----
        0: no, 1: yes

        Returns
        -------
        None.
        """

        if save == 1:
            os.makedirs(self.output_directory_path, exist_ok=True)

        periods = self.target.periods
        mu_ln = self.target.mean_ln
        sigma_ln = self.target.sigma_ln

        to_plot = []
        if simulations == 1:
            to_plot.append(('Simulated', self.sim_spec, 'Target Spectrum vs. Simulated Spectra'))
        if records == 1:
            to_plot.append(('Selected', self.rec_sa_ln, 'Target Spectrum vs. Spectra of Selected Records'))

        for label, sample, title in to_plot:
            fig, ax = plt.subplots(1, 2, figsize=(16, 8))
            plt.suptitle(title, y=0.95)

            for i in range(sample.shape[0]):
                ax[0].loglog(periods, np.exp(sample[i, :]), color='gray', lw=1, label=label)

            ax[0].loglog(periods, np.exp(mu_ln), color='red', lw=2, label=r'Target - $e^{\mu_{ln}}$')
            ax[0].loglog(periods, np.exp(mu_ln + 2 * sigma_ln), color='red', linestyle='--', lw=2,
                         label=r'Target - $e^{\mu_{ln}\mp 2\sigma_{ln}}$')
            ax[0].loglog(periods, np.exp(mu_ln - 2 * sigma_ln), color='red', linestyle='--', lw=2,
                         label=r'Target - $e^{\mu_{ln}\mp 2\sigma_{ln}}$')
            ax[0].loglog(periods, np.exp(np.mean(sample, axis=0)), color='blue', lw=2,
                         label=label + r' - $e^{\mu_{ln}}$')
            ax[0].loglog(periods, np.exp(np.mean(sample, axis=0) + 2 * np.std(sample, axis=0)),
                         color='blue', linestyle='--', lw=2, label=label + r' - $e^{\mu_{ln}\mp 2\sigma_{ln}}$')
            ax[0].loglog(periods, np.exp(np.mean(sample, axis=0) - 2 * np.std(sample, axis=0)),
                         color='blue', linestyle='--', lw=2, label=label + r' - $e^{\mu_{ln}\mp 2\sigma_{ln}}$')

            ax[0].set_xlim([periods[0], periods[-1]])
            ax[0].get_xaxis().set_major_formatter(ScalarFormatter())
            ax[0].get_xaxis().set_minor_formatter(NullFormatter())
            ax[0].set_xlabel('Period [sec]')
            ax[0].set_ylabel('Spectral Acceleration [g]')
            ax[0].grid(True)
            handles, labels = ax[0].get_legend_handles_labels()
            by_label = dict(zip(labels, handles))
            ax[0].legend(by_label.values(), by_label.keys(), frameon=False)

            # Sample and target standard deviations
            ax[1].semilogx(periods, sigma_ln, color='red', linestyle='--', lw=2, label=r'Target - $\sigma_{ln}$')
            ax[1].semilogx(periods, np.std(sample, axis=0), color='black', linestyle='--', lw=2,
                           label=label + r' - $\sigma_{ln}$')
            ax[1].set_xlabel('Period [sec]')
            ax[1].set_ylabel('Dispersion')
            ax[1].grid(True)
            ax[1].legend(frameon=False)
            ax[1].set_xlim([periods[0], periods[-1]])
            ax[1].get_xaxis().set_major_formatter(ScalarFormatter())
            ax[1].get_xaxis().set_minor_formatter(NullFormatter())
            ax[1].set_ylim(bottom=0)

            if self.params.conditioning_index is not None:
                for axis in ax:
                    axis.axvline(periods[self.params.conditioning_index], color='red', alpha=0.3, lw=4)

            if save == 1:
                plt.savefig(os.path.join(self.output_directory_path, f'{label}.pdf'))

        # Show the figure
        if show == 1:
            plt.show()

        plt.close('all')
