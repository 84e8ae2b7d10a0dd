################################################
# Greedy Record Selection on Synthetic Spectra #
################################################

from time import time
import numpy as np
from GreedyGM.selection import TargetStatistics, CandidatePool, GreedySelection
from GreedyGM.utility import run_time, random_multivariate_normal

start_time = time()

# 1.) Define the target distribution of log spectral accelerations
periods = np.array([0.1, 0.2, 0.3, 0.5, 0.75, 1.0, 1.5, 2.0, 3.0])
mu_ln = np.log(0.8 * np.exp(-0.6 * periods))
sigma_ln = np.full(len(periods), 0.6)
rho = np.exp(-np.abs(np.log(periods.reshape(-1, 1) / periods.reshape(1, -1))))  # simple correlation model
cov = rho * np.outer(sigma_ln, sigma_ln)
target = TargetStatistics(mean_ln=mu_ln, cov=cov, periods=periods)

# 2.) Candidate records, here generated from a wider distribution in place of a ground motion database
sample_big = random_multivariate_normal(mu_ln, 2.0 * cov, 500, 'MCS', seed=1)
pool = CandidatePool(sample_big, record_ids=[f'RSN{i + 1}' for i in range(500)])

# 3.) Select the ground motions
gs = GreedySelection(target, pool, output_directory='Outputs')
gs.select(num_records=20, is_scaled=1, is_conditioned=0, max_scale_factor=4, num_simulations=20,
          seed_value=0, error_weights=[1, 2, 0.3], num_greedy_loops=2, penalty=1, tolerance=10, metric='SSE')

# The simulated spectra and spectra of selected records can be plotted at this stage
gs.plot(simulations=1, records=1, save=1, show=1)

# 4.) Write the selected record ids and scale factors, and the object itself
gs.write(obj=1, records=1)

# Calculate the total time passed
run_time(start_time)
