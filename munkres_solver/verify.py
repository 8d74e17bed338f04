import numpy as np
from scipy.optimize import linear_sum_assignment
from tqdm import tqdm

from munkres_solver.config import load_config
from munkres_solver.munkres import linear_assignment
from munkres_solver.utils import random_array


def linear_assignment_scipy(cost_matrix):
    x, y = linear_sum_assignment(cost_matrix)
    return np.array(list(zip(x, y)))


def verify_against_scipy(num_trials=200, rows=3, cols=6, dtype=np.float64, seed=0,
                         backend="munkres", verbose=False):
    """
    Solve random cost matrices and compare the total cost with
    scipy's linear_sum_assignment.

    return:
        mismatches (list):
            (cost_matrix, cost_scipy, cost_my) of every disagreeing trial.
    """
    rng = np.random.default_rng(seed)
    mismatches = []
    for _ in tqdm(range(num_trials), disable=not verbose):
        cost_matrix = random_array(rows, cols, dtype=dtype, rng=rng)

        matching_scipy = linear_assignment_scipy(cost_matrix)
        cost_scipy = cost_matrix[matching_scipy[:, 0], matching_scipy[:, 1]].sum()
        matching_my = linear_assignment(cost_matrix, backend=backend)
        cost_my = cost_matrix[matching_my[:, 0], matching_my[:, 1]].sum()

        if not np.isclose(cost_my, cost_scipy):
            if verbose:
                print("negative")
                print(cost_scipy, matching_scipy)
                print(cost_my, matching_my)
                print(cost_matrix)
            mismatches.append((cost_matrix, cost_scipy, cost_my))
    return mismatches


if __name__ == "__main__":
    config = load_config()
    params = config.verify
    mismatches = verify_against_scipy(num_trials=params.num_trials, rows=params.rows, cols=params.cols,
                                      dtype=np.dtype(params.dtype).type, seed=params.seed,
                                      backend=config.munkres.backend, verbose=True)
    if mismatches:
        raise ValueError(f"something wrong: {len(mismatches)} of {params.num_trials} trials disagree with scipy")
    print(f"positive: all {params.num_trials} trials agree with scipy")
