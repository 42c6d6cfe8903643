import numpy as np

from mandelbrot_explorer.calculator import DEFAULT_RADIUS_SQUARED, MAX_ITERATION_CAP, compute_iterations, sample_axes


def test_default_radius_is_two_squared():
    assert DEFAULT_RADIUS_SQUARED == 4.0


def test_grid_is_indexed_by_row_then_column():
    grid = compute_iterations(5, 3, -2.0, 1.0, -1.5, 1.5, 20)
    assert grid.shape == (3, 5)
    assert grid.dtype == np.int64


def test_initial_view_corner_escapes_and_center_stays_bounded():
    grid = compute_iterations(4, 4, -2.0, 1.0, -1.5, 1.5, 100)
    # (0, 0) samples -2 - 1.5i, (2, 2) samples -0.5 + 0i.
    assert grid[0, 0] == 1
    assert grid[2, 2] == 100


def test_counts_stay_within_iteration_cap():
    grid = compute_iterations(16, 12, -2.0, 1.0, -1.5, 1.5, 30)
    assert grid.min() >= 0
    assert grid.max() <= 30


def test_repeated_calls_are_identical():
    args = (32, 24, -0.8, -0.7, 0.05, 0.15, 150)
    first = compute_iterations(*args)
    second = compute_iterations(*args)
    np.testing.assert_array_equal(first, second)


def test_point_on_bailout_circle_keeps_iterating():
    # c = 1: z goes 1, 2, 5; |2|^2 == 4 is not past the radius yet.
    grid = compute_iterations(1, 1, 1.0, 2.0, 0.0, 1.0, 50)
    assert grid[0, 0] == 3


def test_radius_squared_changes_escape_count():
    grid = compute_iterations(1, 1, 1.0, 2.0, 0.0, 1.0, 50, 1.0)
    assert grid[0, 0] == 2


def test_origin_never_escapes():
    grid = compute_iterations(1, 1, 0.0, 1.0, 0.0, 1.0, 75)
    assert grid[0, 0] == 75


def test_sample_axes_use_left_and_top_edges():
    xs, ys = sample_axes(4, 2, -2.0, 1.0, -1.5, 1.5)
    np.testing.assert_allclose(xs, [-2.0, -1.25, -0.5, 0.25])
    np.testing.assert_allclose(ys, [-1.5, 0.0])


def test_caps_beyond_32_bits_are_not_truncated():
    # Every sample escapes, so the loop stops long before the cap.
    grid = compute_iterations(1, 1, 1.0, 2.0, 0.0, 1.0, 2 ** 31)
    assert grid[0, 0] == 3

    grid = compute_iterations(4, 4, 2.0, 3.0, 2.0, 3.0, 2 ** 31 + 5)
    assert grid.min() >= 1
    assert grid.max() < 5


def test_cap_limit_is_int64_max():
    assert MAX_ITERATION_CAP == 2 ** 63 - 1
