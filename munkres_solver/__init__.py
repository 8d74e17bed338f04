from munkres_solver.cover_state import CoverState
from munkres_solver.mark_grid import Mark, MarkGrid
from munkres_solver.munkres import Munkres, Step, hungarian_rect, linear_assignment
from munkres_solver.working_matrix import WorkingMatrix, pad_matrix
