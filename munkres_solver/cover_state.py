import numpy as np


class CoverState():
    """covered rows and covered columns of an n x n working matrix"""
    def __init__(self, n):
        self.rows = np.zeros(n, dtype=bool)
        self.cols = np.zeros(n, dtype=bool)

    def cover_row(self, row):
        self.rows[row] = True

    def cover_col(self, col):
        self.cols[col] = True

    def uncover_col(self, col):
        self.cols[col] = False

    def is_row_covered(self, row):
        return bool(self.rows[row])

    def is_col_covered(self, col):
        return bool(self.cols[col])

    def clear_all(self):
        self.rows[:] = False
        self.cols[:] = False

    def count_covered_cols(self):
        return int(self.cols.sum())

    def uncovered_mask(self):
        # shape (n, n), True where neither the row nor the column is covered
        return np.logical_not(self.rows)[:, None] & np.logical_not(self.cols)[None, :]
