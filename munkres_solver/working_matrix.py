import warnings

import numpy as np


def as_cost_array(cost_matrix):
    """
    Convert a 2d array-like of costs into a numpy array, int64 for integer
    (and bool) inputs, float64 for real inputs.
    """
    try:
        cost = np.asarray(cost_matrix)
    except ValueError as e:  # ragged nested lists
        raise ValueError(f"invalid input dimensions: {e}") from e

    if cost.ndim != 2 or cost.shape[0] == 0 or cost.shape[1] == 0:
        raise ValueError(f"invalid input dimensions: need a non-empty 2d matrix, got shape {cost.shape}!")

    if cost.dtype.kind in "biu":
        cost = cost.astype(np.int64)
    elif cost.dtype.kind == "f":
        cost = cost.astype(np.float64)
        if not np.all(np.isfinite(cost)):
            raise ValueError("cost matrix has non-finite elements (nan or inf)!")
    else:
        raise ValueError(f"cost matrix must be numeric, got dtype: {cost.dtype}!")
    return cost


def pad_matrix(matrix, pad_value=0):
    """
    Pad a possibly non-square matrix to make it square.

    Args:
        matrix (numpy.ndarray):
            shape (#rows, #cols), matrix to pad.
        pad_value (int or float):
            value of the padded (dummy) cells. Default: 0.

    return:
        padded (numpy.ndarray):
            shape (n, n), n = max(#rows, #cols), a new array with 'matrix'
            in its top-left block. The caller's matrix is never modified.
    """
    rows, cols = matrix.shape
    if rows == cols:
        return matrix.copy()

    n = max(rows, cols)
    padded = np.full((n, n), pad_value, dtype=matrix.dtype)
    padded[:rows, :cols] = matrix
    return padded


class WorkingMatrix():
    """
    Square working copy of the cost matrix that the Munkres steps reduce
    in place.

    Args:
        cost_matrix (array-like):
            shape (#rows, #cols), integer or real costs.
        pad_value (int or float):
            value used for the dummy cells of a rectangular input. Default: 0.

    Attributes:
        cells (numpy.ndarray):
            shape (n, n), the working values.
        n (int):
            max(#rows, #cols).
        original_rows (int), original_cols (int):
            shape of the caller's matrix.
    """
    def __init__(self, cost_matrix, pad_value=0):
        cost = as_cost_array(cost_matrix)
        if not np.isfinite(pad_value):
            raise ValueError(f"pad_value must be finite, got: {pad_value}!")
        if cost.dtype == np.int64 and not float(pad_value).is_integer():
            cost = cost.astype(np.float64)  # keep a real pad value exact
        if np.any(cost < 0):
            warnings.warn("cost matrix has negative elements, result is only valid if costs are comparable!")

        self.original_rows, self.original_cols = cost.shape
        self.cells = pad_matrix(cost, pad_value)
        self.n = self.cells.shape[0]

    def reduce_rows(self):
        # subtract the smallest element of each row from that row
        self.cells -= self.cells.min(axis=1, keepdims=True)

    def is_zero(self, row, col):
        return self.cells[row, col] == 0

    def find_uncovered_zero(self, cover):
        """
        Find the first uncovered zero in row-major order.

        return:
            (row, col) or None if every zero is covered.
        """
        mask = (self.cells == 0) & cover.uncovered_mask()
        rows, cols = np.nonzero(mask)  # nonzero() is row-major
        if len(rows) == 0:
            return None
        return int(rows[0]), int(cols[0])

    def smallest_uncovered(self, cover):
        uncovered = cover.uncovered_mask()
        if not uncovered.any():
            raise RuntimeError("every row or every column is covered, no uncovered value left!")
        return self.cells[uncovered].min()

    def adjust_by_uncovered_minimum(self, cover, value):
        """
        Add 'value' to every covered row and subtract it from every
        uncovered column. A cell in a covered row and an uncovered column
        gets value - value, exactly 0.
        """
        row_delta = np.where(cover.rows, value, 0).astype(self.cells.dtype)
        col_delta = np.where(cover.cols, 0, value).astype(self.cells.dtype)
        self.cells += row_delta[:, None] - col_delta[None, :]
