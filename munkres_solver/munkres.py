from enum import Enum

import numpy as np
from scipy.optimize import linear_sum_assignment

from munkres_solver.cover_state import CoverState
from munkres_solver.mark_grid import MarkGrid
from munkres_solver.working_matrix import WorkingMatrix


class Step(Enum):
    STEP1 = 1
    STEP2 = 2
    STEP3 = 3
    STEP4 = 4
    STEP5 = 5
    STEP6 = 6
    DONE = 7


class _MunkresRun():
    """
    Scratch state of one 'Munkres.compute' call: working matrix, marks,
    covers and the Z0 seed of the next augmenting path.
    """
    def __init__(self, cost_matrix, pad_value=0, verbose=False, debug_mode=False):
        self.C = WorkingMatrix(cost_matrix, pad_value)
        self.n = self.C.n
        self.marked = MarkGrid(self.n)
        self.covered = CoverState(self.n)
        self.Z0 = None
        self.verbose = verbose
        self.debug_mode = debug_mode

        self.step_handlers = {
            Step.STEP1: self.step1,
            Step.STEP2: self.step2,
            Step.STEP3: self.step3,
            Step.STEP4: self.step4,
            Step.STEP5: self.step5,
            Step.STEP6: self.step6,
        }
        self.debug_info = {
            "steps": [],
            "augmentations": 0,
            "adjustments": 0,
        }

    def run(self):
        step = Step.STEP1
        while step is not Step.DONE:
            handler = self.step_handlers.get(step)
            if handler is None:
                raise RuntimeError(f"undefined solver state: {step}!")
            if self.verbose:
                print(f"step {step.value}")
            next_step = handler()
            if self.debug_mode:
                self.debug_info["steps"].append(step.name)
                self.marked.check_star_uniqueness()
            step = next_step

        return self.marked.starred_cells(self.C.original_rows, self.C.original_cols)

    def step1(self):
        """
        For each row of the matrix, find the smallest element and
        subtract it from every element in its row. Go to Step 2.
        """
        self.C.reduce_rows()
        return Step.STEP2

    def step2(self):
        """
        Find a zero (Z) in the resulting matrix. If there is no starred
        zero in its row or column, star Z. Repeat for each element in the
        matrix. Go to Step 3.
        """
        for i in range(self.n):
            for j in range(self.n):
                if (self.C.is_zero(i, j)
                        and not self.covered.is_row_covered(i)
                        and not self.covered.is_col_covered(j)):
                    self.marked.set_star(i, j)
                    self.covered.cover_row(i)
                    self.covered.cover_col(j)
                    break  # row i is covered now
        self.covered.clear_all()
        return Step.STEP3

    def step3(self):
        """
        Cover each column containing a starred zero. If n columns are
        covered, the starred zeros describe a complete set of unique
        assignments, go to DONE. Otherwise go to Step 4.
        """
        for col in self.marked.starred_cols():
            self.covered.cover_col(col)

        if self.covered.count_covered_cols() >= self.n:
            return Step.DONE
        return Step.STEP4

    def step4(self):
        """
        Find a noncovered zero and prime it. If there is no starred zero
        in the row containing this primed zero, go to Step 5. Otherwise,
        cover this row and uncover the column containing the starred
        zero. Continue in this manner until there are no uncovered zeros
        left, then go to Step 6.
        """
        while True:
            zero = self.C.find_uncovered_zero(self.covered)
            if zero is None:
                return Step.STEP6

            row, col = zero
            self.marked.set_prime(row, col)
            star_col = self.marked.find_star_in_row(row)
            if star_col is None:
                self.Z0 = (row, col)
                return Step.STEP5
            self.covered.cover_row(row)
            self.covered.uncover_col(star_col)

    def step5(self):
        """
        Construct a series of alternating primed and starred zeros:
        Z0 is the uncovered primed zero found in Step 4, Z1 the starred
        zero in the column of Z0 (if any), Z2 the primed zero in the row
        of Z1 (there is always one). Continue until the series ends at a
        primed zero with no starred zero in its column. Unstar each
        starred zero of the series, star each primed zero, erase all
        primes and uncover every line. Return to Step 3.
        """
        if self.Z0 is None:
            raise RuntimeError("step 5 reached without a primed zero from step 4!")
        path = [self.Z0]
        self.Z0 = None

        while True:
            row = self.marked.find_star_in_col(path[-1][1])
            if row is None:
                break
            path.append((row, path[-1][1]))

            col = self.marked.find_prime_in_row(row)
            if col is None:
                raise RuntimeError(f"no primed zero in row {row} of a starred zero on the augmenting path!")
            path.append((row, col))

        for row, col in path:
            self.marked.toggle_star_prime(row, col)
        self.covered.clear_all()
        self.marked.erase_all_primes()
        self.debug_info["augmentations"] += 1
        return Step.STEP3

    def step6(self):
        """
        Add the smallest uncovered value to every element of each covered
        row, and subtract it from every element of each uncovered column.
        Return to Step 4 without altering any stars, primes, or covered
        lines.
        """
        minval = self.C.smallest_uncovered(self.covered)
        self.C.adjust_by_uncovered_minimum(self.covered, minval)
        self.debug_info["adjustments"] += 1
        return Step.STEP4


class Munkres(object):
    """
    Munkres (Hungarian) solver for the rectangular linear assignment problem.

    A rectangular cost matrix is padded to n x n, n = max(#rows, #cols),
    so the padded rows or columns act as free dummy partners. Pairs that
    land in the padded region are dropped from the result. Each call to
    'compute' builds its own working state, so an instance can be reused
    and independent instances can run concurrently.

    Args:
        pad_value (int or float):
            value of the dummy cells of a rectangular input. Default: 0.
        verbose (bool):
            print every step transition. Default: False.
    """
    def __init__(self, pad_value=0, verbose=False):
        self.pad_value = pad_value
        self.verbose = verbose

    @classmethod
    def from_config(cls, config):
        """config: 'MunkresConfig', see config.py"""
        return cls(pad_value=config.pad_value, verbose=config.verbose)

    def compute(self, cost_matrix, debug_mode=False):
        """
        Compute the lowest-cost pairings between rows and columns.

        Args:
            cost_matrix (array-like):
                shape (#rows, #cols), integer or real costs. It is not modified.
            debug_mode (bool):
                check star uniqueness after every step and also return
                debug info.

        return:
            pairs (List[Tuple[int, int]]):
                (row, col) of every matched cell inside the original
                matrix, in row-major order.
            debug_info (dict):
                only if 'debug_mode', with keys "steps" (visited step
                names), "augmentations" and "adjustments" (counts).
        """
        run = _MunkresRun(cost_matrix, self.pad_value, self.verbose, debug_mode)
        pairs = run.run()
        if debug_mode:
            run.debug_info["stars"] = run.marked.count_stars()
            run.debug_info["n"] = run.n
            return pairs, run.debug_info
        return pairs


def hungarian_rect(cost_matrix, pad_value=0):
    """
    return:
        total_cost: sum of the original costs of the matched cells.
        matching (numpy.ndarray): shape (#pairs, 2), int64, row and col.
    """
    pairs = Munkres(pad_value=pad_value).compute(cost_matrix)
    cost_matrix = np.asarray(cost_matrix)

    matching = np.array(pairs, dtype=np.int64).reshape(-1, 2)
    total_cost = cost_matrix[matching[:, 0], matching[:, 1]].sum()
    return total_cost, matching


def linear_assignment(cost_matrix, backend="munkres"):
    if backend == "munkres":
        total_cost, matching = hungarian_rect(cost_matrix)
    elif backend == "scipy":
        x, y = linear_sum_assignment(cost_matrix)
        matching = np.array(list(zip(x, y)), dtype=np.int64).reshape(-1, 2)
    else:
        raise ValueError(f"unknown assignment backend: {backend}, need 'munkres' or 'scipy'!")
    return matching

