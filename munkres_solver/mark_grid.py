from enum import IntEnum

import numpy as np


class Mark(IntEnum):
    NONE = 0
    STAR = 1
    PRIME = 2


def _first(indices):
    # indices come from np.flatnonzero, i.e. increasing order
    if len(indices) == 0:
        return None
    return int(indices[0])


class MarkGrid():
    """
    n x n grid of marks. Starred zeros form the current candidate matching,
    primed zeros only live during one step 4 / step 5 pass.

    Every find_* method scans in increasing index order and returns the
    first hit, which is the tie-break rule of the solver.
    """
    def __init__(self, n):
        self.n = n
        self.marks = np.full((n, n), Mark.NONE, dtype=np.int8)

    def set_star(self, row, col):
        self.marks[row, col] = Mark.STAR

    def set_prime(self, row, col):
        self.marks[row, col] = Mark.PRIME

    def clear(self, row, col):
        self.marks[row, col] = Mark.NONE

    def get(self, row, col):
        return Mark(int(self.marks[row, col]))

    def is_star(self, row, col):
        return self.marks[row, col] == Mark.STAR

    def toggle_star_prime(self, row, col):
        """star -> none, prime -> star, used when converting an augmenting path"""
        if self.marks[row, col] == Mark.STAR:
            self.marks[row, col] = Mark.NONE
        elif self.marks[row, col] == Mark.PRIME:
            self.marks[row, col] = Mark.STAR

    def find_star_in_row(self, row):
        return _first(np.flatnonzero(self.marks[row] == Mark.STAR))

    def find_star_in_col(self, col):
        return _first(np.flatnonzero(self.marks[:, col] == Mark.STAR))

    def find_prime_in_row(self, row):
        return _first(np.flatnonzero(self.marks[row] == Mark.PRIME))

    def erase_all_primes(self):
        self.marks[self.marks == Mark.PRIME] = Mark.NONE

    def starred_cols(self):
        # columns holding at least one star
        return np.flatnonzero((self.marks == Mark.STAR).any(axis=0))

    def count_stars(self):
        return int((self.marks == Mark.STAR).sum())

    def starred_cells(self, max_row=None, max_col=None):
        """
        Starred cells inside the top-left (max_row, max_col) block, row-major.

        return:
            list of (row, col) tuples.
        """
        stars = self.marks[:max_row, :max_col] == Mark.STAR
        rows, cols = np.nonzero(stars)
        return [(int(r), int(c)) for r, c in zip(rows, cols)]

    def check_star_uniqueness(self):
        stars = self.marks == Mark.STAR
        per_row = stars.sum(axis=1)
        per_col = stars.sum(axis=0)
        if np.any(per_row > 1):
            raise RuntimeError(f"more than one star in row(s): {np.flatnonzero(per_row > 1).tolist()}!")
        if np.any(per_col > 1):
            raise RuntimeError(f"more than one star in column(s): {np.flatnonzero(per_col > 1).tolist()}!")
