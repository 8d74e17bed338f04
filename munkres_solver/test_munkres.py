from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from munkres_solver.munkres import Munkres, Step, hungarian_rect, linear_assignment
from munkres_solver.utils import assignment_cost, brute_force_min_cost, is_valid_matching, random_array


def test_prefers_cheaper_diagonal():
    assert Munkres().compute([[1, 2], [2, 1]]) == [(0, 0), (1, 1)]


def test_all_zero_matrix():
    cost = [[0, 0], [0, 0]]
    pairs = Munkres().compute(cost)
    assert len(pairs) == 2
    assert is_valid_matching(pairs, 2, 2)
    assert assignment_cost(cost, pairs) == 0


def test_square_3x3_matches_brute_force():
    cost = np.array([[400, 150, 400],
                     [400, 450, 600],
                     [300, 225, 300]])
    pairs = Munkres().compute(cost)
    assert len(pairs) == 3
    assert is_valid_matching(pairs, 3, 3)
    assert assignment_cost(cost, pairs) == brute_force_min_cost(cost) == 850


def test_rectangular_3x4_uses_cheap_column():
    cost = np.array([[400, 150, 400, 1],
                     [400, 450, 600, 2],
                     [300, 225, 300, 3]])
    pairs = Munkres().compute(cost)
    assert len(pairs) == 3
    assert [r for r, _ in pairs] == [0, 1, 2]
    assert all(0 <= c < 4 for _, c in pairs)
    assert is_valid_matching(pairs, 3, 4)
    assert assignment_cost(cost, pairs) == brute_force_min_cost(cost) == 452


def test_single_cell():
    assert Munkres().compute([[5]]) == [(0, 0)]
    total_cost, matching = hungarian_rect([[5]])
    assert total_cost == 5
    np.testing.assert_array_equal(matching, [[0, 0]])


def test_tall_matrix_drops_dummy_columns():
    cost = np.array([[9, 1],
                     [1, 9],
                     [0, 0],
                     [5, 5]])
    pairs = Munkres().compute(cost)
    assert len(pairs) == 2
    assert is_valid_matching(pairs, 4, 2)
    assert assignment_cost(cost, pairs) == brute_force_min_cost(cost) == 1


@pytest.mark.parametrize("seed", range(20))
def test_optimal_against_brute_force(seed):
    rng = np.random.default_rng(seed)
    rows, cols = rng.integers(1, 7, size=2)
    dtype = np.int64 if seed % 2 == 0 else np.float64
    cost = random_array(rows, cols, dtype=dtype, rng=rng)
    pairs = Munkres().compute(cost)
    assert len(pairs) == min(rows, cols)
    assert is_valid_matching(pairs, rows, cols)
    assert np.isclose(assignment_cost(cost, pairs), brute_force_min_cost(cost))


def test_ties_are_broken_row_major():
    cost = np.ones((4, 4), dtype=np.int64)
    assert Munkres().compute(cost) == [(0, 0), (1, 1), (2, 2), (3, 3)]


def test_deterministic_output():
    rng = np.random.default_rng(7)
    cost = rng.integers(0, 5, size=(6, 8))  # many ties
    m = Munkres()
    first = m.compute(cost)
    for _ in range(5):
        assert m.compute(cost) == first
    assert Munkres().compute(cost.tolist()) == first


def test_caller_matrix_is_not_modified():
    cost = np.array([[4, 1, 3], [2, 0, 5], [3, 2, 2]])
    before = cost.copy()
    Munkres().compute(cost)
    np.testing.assert_array_equal(cost, before)


def test_debug_mode_reports_complete_matching():
    rng = np.random.default_rng(3)
    for _ in range(10):
        cost = random_array(5, 7, rng=rng)
        pairs, debug_info = Munkres().compute(cost, debug_mode=True)
        assert debug_info["stars"] == debug_info["n"] == 7
        assert debug_info["steps"][:3] == ["STEP1", "STEP2", "STEP3"]
        assert debug_info["steps"][-1] == "STEP3"
        assert len(pairs) == 5


def test_debug_mode_counts_augmentations():
    # row reduction leaves every zero in column 0, one star from step 2
    cost = [[1, 2, 3], [2, 4, 6], [3, 6, 9]]
    pairs, debug_info = Munkres().compute(cost, debug_mode=True)
    assert debug_info["augmentations"] == 2
    assert debug_info["adjustments"] > 0
    assert "STEP5" in debug_info["steps"] and "STEP6" in debug_info["steps"]
    assert assignment_cost(cost, pairs) == brute_force_min_cost(cost) == 10


def test_verbose_prints_steps(capsys):
    Munkres(verbose=True).compute([[1, 2], [2, 1]])
    out = capsys.readouterr().out
    assert out.splitlines() == ["step 1", "step 2", "step 3"]


def test_pad_value_option():
    cost = np.array([[400, 150, 400, 1],
                     [400, 450, 600, 2],
                     [300, 225, 300, 3]])
    pairs = Munkres(pad_value=1000).compute(cost)
    assert len(pairs) == 3
    assert assignment_cost(cost, pairs) == 452


def test_invalid_input_rejected():
    with pytest.raises(ValueError, match="invalid input dimensions"):
        Munkres().compute([])
    with pytest.raises(ValueError, match="invalid input dimensions"):
        Munkres().compute(np.zeros((3, 0)))


def test_undefined_state_raises():
    from munkres_solver.munkres import _MunkresRun

    run = _MunkresRun([[1, 2], [2, 1]])
    del run.step_handlers[Step.STEP3]
    with pytest.raises(RuntimeError, match="undefined solver state"):
        run.run()


def test_concurrent_calls_are_independent():
    rng = np.random.default_rng(11)
    costs = [random_array(6, 6, rng=rng) for _ in range(16)]
    m = Munkres()
    expected = [m.compute(c) for c in costs]
    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(m.compute, costs))
    assert results == expected


def test_hungarian_rect_reports_original_cost():
    cost = np.array([[15, 6, 12, 8],
                     [10, 16, 8, 12],
                     [30, 25, 11, 9],
                     [13, 7, 20, 17]])
    total_cost, matching = hungarian_rect(cost)
    assert matching.shape == (4, 2)
    assert matching.dtype == np.int64
    assert total_cost == brute_force_min_cost(cost)


@pytest.mark.parametrize("shape", [(3, 6), (6, 3), (5, 5)])
def test_linear_assignment_backends_agree(shape):
    rng = np.random.default_rng(5)
    cost = random_array(*shape, dtype=np.float64, rng=rng)
    ours = linear_assignment(cost)
    theirs = linear_assignment(cost, backend="scipy")
    assert ours.shape == theirs.shape == (min(shape), 2)
    assert np.isclose(cost[ours[:, 0], ours[:, 1]].sum(), cost[theirs[:, 0], theirs[:, 1]].sum())


def test_linear_assignment_unknown_backend():
    with pytest.raises(ValueError, match="unknown assignment backend"):
        linear_assignment([[1]], backend="lap")
