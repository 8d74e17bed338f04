from itertools import permutations

import numpy as np


def assignment_cost(cost_matrix, pairs):
    """sum of cost_matrix[row, col] over the (row, col) pairs"""
    cost_matrix = np.asarray(cost_matrix)
    return sum(cost_matrix[r, c] for r, c in pairs)


def brute_force_min_cost(cost_matrix):
    """
    Exhaustive minimum over every one-to-one matching of the smaller side,
    only meant for small matrices (min side <= 8).
    """
    cost_matrix = np.asarray(cost_matrix)
    rows, cols = cost_matrix.shape
    if rows > cols:
        cost_matrix = cost_matrix.T
        rows, cols = cols, rows

    best = None
    for perm in permutations(range(cols), rows):
        total = cost_matrix[np.arange(rows), list(perm)].sum()
        if best is None or total < best:
            best = total
    return best


def is_valid_matching(pairs, rows, cols):
    seen_rows = set()
    seen_cols = set()
    for r, c in pairs:
        if not (0 <= r < rows and 0 <= c < cols):
            return False
        if r in seen_rows or c in seen_cols:
            return False
        seen_rows.add(r)
        seen_cols.add(c)
    return True


def random_array(h: int, w: int, dtype=np.int64, rng=None) -> np.ndarray:
    rng = np.random.default_rng() if rng is None else rng
    if dtype == np.int64:
        return rng.integers(0, 100, size=(h, w), dtype=np.int64)
    elif dtype == np.float64:
        return rng.random((h, w)) * 100
    else:
        raise ValueError("Only np.int64 and np.float64 are supported.")
