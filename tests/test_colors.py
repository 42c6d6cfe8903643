import numpy as np
import pytest

from mandelbrot_explorer.colors import INSIDE_COLOR, PURE_COLOR, color_of, colorize
from mandelbrot_explorer.state import PALETTES


@pytest.mark.parametrize("palette", PALETTES + ("Violet", ""))
def test_points_inside_the_set_are_black(palette):
    assert color_of(80, 80, palette) == (0, 0, 0, 255)


def test_pure_palette_is_white_outside():
    assert color_of(3, 100, "Pure") == PURE_COLOR
    assert color_of(99, 100, "Pure") == PURE_COLOR


def test_unknown_palette_falls_back_to_pure():
    assert color_of(10, 100, "Magenta") == PURE_COLOR


def test_red_uses_brightness_fraction():
    assert color_of(50, 100, "Red") == (128, 0, 0, 255)


def test_green_is_mostly_green():
    r, g, b, a = color_of(50, 100, "Green")
    assert g == 128
    assert b == 0
    assert r <= 1
    assert a == 255


def test_blue_hue():
    r, g, b, _ = color_of(50, 100, "Blue")
    assert r == 0
    assert b == 128
    assert 0 < g < b


def test_brown_wraps_onto_red_orange():
    r, g, b, _ = color_of(50, 100, "Brown")
    assert r == 128
    assert b == 0
    assert 0 < g < r


def test_zero_count_is_dark():
    assert color_of(0, 100, "Blue") == (0, 0, 0, 255)


def test_colorize_matches_color_of():
    iterations = np.array([[0, 10, 25], [50, 75, 100]])
    rgba = colorize(iterations, 100, "Blue")
    assert rgba.shape == (2, 3, 4)
    assert rgba.dtype == np.uint8
    for (row, col), count in np.ndenumerate(iterations):
        assert tuple(rgba[row, col]) == color_of(int(count), 100, "Blue")


def test_colorize_is_fully_opaque():
    iterations = np.arange(12).reshape(3, 4)
    for palette in PALETTES:
        assert np.all(colorize(iterations, 11, palette)[..., 3] == 255)


def test_inside_color_constant():
    assert INSIDE_COLOR == (0, 0, 0, 255)
