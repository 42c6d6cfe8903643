import pytest

from mandelbrot_explorer.calculator import compute_iterations
from mandelbrot_explorer.coordinates import REFERENCE_FRAME, pixel_to_complex, zoom_line, zoom_rectangle
from mandelbrot_explorer.state import PlaneBounds

INITIAL = PlaneBounds(-2.0, 1.0, -1.5, 1.5)


def _assert_bounds(actual, expected):
    assert actual.min_real == pytest.approx(expected[0])
    assert actual.max_real == pytest.approx(expected[1])
    assert actual.min_imag == pytest.approx(expected[2])
    assert actual.max_imag == pytest.approx(expected[3])


def test_full_frame_rectangle_is_identity():
    bounds = zoom_rectangle(INITIAL, 0, REFERENCE_FRAME, 0, REFERENCE_FRAME)
    _assert_bounds(bounds, (-2.0, 1.0, -1.5, 1.5))


def test_full_frame_identity_on_a_zoomed_window():
    window = PlaneBounds(-0.7512, -0.7418, 0.1003, 0.1121)
    bounds = zoom_rectangle(window, 0, 850, 0, 850)
    _assert_bounds(bounds, (-0.7512, -0.7418, 0.1003, 0.1121))


def test_quadrant_selection():
    bounds = zoom_rectangle(INITIAL, 0, 425, 0, 425)
    _assert_bounds(bounds, (-2.0, -0.5, -1.5, 0.0))


def test_pixel_y_drives_real_axis_and_pixel_x_drives_imaginary_axis():
    bounds = zoom_rectangle(INITIAL, 0, 850, 425, 850)
    _assert_bounds(bounds, (-0.5, 1.0, -1.5, 1.5))
    bounds = zoom_rectangle(INITIAL, 425, 850, 0, 850)
    _assert_bounds(bounds, (-2.0, 1.0, 0.0, 1.5))


def test_custom_frame_size():
    bounds = zoom_rectangle(INITIAL, 25, 75, 50, 100, frame_size=100)
    _assert_bounds(bounds, (-0.5, 1.0, -0.75, 0.75))


def test_line_shift_scales_with_range_and_iterations():
    bounds = zoom_line(INITIAL, 0, 10, 0, 20, 100)
    _assert_bounds(bounds, (-2.3, 0.7, -1.65, 1.35))


def test_line_step_gets_finer_with_more_iterations():
    coarse = zoom_line(INITIAL, 0, 10, 0, 10, 100)
    fine = zoom_line(INITIAL, 0, 10, 0, 10, 1000)
    assert abs(fine.min_real - INITIAL.min_real) == pytest.approx(abs(coarse.min_real - INITIAL.min_real) / 10)


def test_line_keeps_window_size():
    bounds = zoom_line(INITIAL, 100, 40, 300, 320, 50)
    assert bounds.real_range == pytest.approx(INITIAL.real_range)
    assert bounds.imag_range == pytest.approx(INITIAL.imag_range)


def test_zero_length_line_is_identity():
    bounds = zoom_line(INITIAL, 12, 12, 40, 40, 100)
    _assert_bounds(bounds, (-2.0, 1.0, -1.5, 1.5))


def test_pixel_to_complex_matches_engine_sampling():
    assert pixel_to_complex(INITIAL, 4, 4, 0, 0) == pytest.approx((-2.0, -1.5))
    assert pixel_to_complex(INITIAL, 4, 4, 2, 2) == pytest.approx((-0.5, 0.0))

    real, imag = pixel_to_complex(INITIAL, 4, 4, 2, 2)
    grid = compute_iterations(1, 1, real, real + 1e-9, imag, imag + 1e-9, 100)
    assert grid[0, 0] == compute_iterations(4, 4, -2.0, 1.0, -1.5, 1.5, 100)[2, 2]
