"""Mapping from iteration counts to RGBA pixels."""

from __future__ import annotations

import numpy as np
from matplotlib.colors import hsv_to_rgb

# Hue of each tinted palette as a fraction of a full turn. Brown goes past
# one turn and wraps onto a red-orange hue.
PALETTE_HUES = {
    "Red": 1.0,
    "Green": 0.333,
    "Blue": 0.55,
    "Brown": 1.1,
}

INSIDE_COLOR = (0, 0, 0, 255)
PURE_COLOR = (255, 255, 255, 255)


def colorize(iterations: np.ndarray, max_iterations: int, palette: str) -> np.ndarray:
    """Color a grid of iteration counts with ``palette``.

    Points that reached ``max_iterations`` are opaque black. Escaped points are
    white for ``"Pure"`` (and for any unrecognised palette); the tinted palettes
    use a fixed hue at full saturation with ``count / max_iterations`` as the
    brightness.
    """

    iterations = np.asarray(iterations)
    inside = iterations == max_iterations
    rgba = np.empty(iterations.shape + (4,), dtype=np.uint8)

    hue = PALETTE_HUES.get(palette)
    if hue is None:
        rgba[...] = PURE_COLOR
    else:
        brightness = np.mod(iterations.astype(np.float64) / float(max_iterations), 1.0)
        hsv = np.stack(
            (
                np.full(iterations.shape, hue % 1.0, dtype=np.float64),
                np.ones(iterations.shape, dtype=np.float64),
                brightness,
            ),
            axis=-1,
        )
        rgb = hsv_to_rgb(hsv)
        rgba[..., :3] = np.floor(rgb * 255.0 + 0.5).astype(np.uint8)
        rgba[..., 3] = 255

    rgba[inside] = INSIDE_COLOR
    return rgba


def color_of(iteration_count: int, max_iterations: int, palette: str) -> tuple[int, int, int, int]:
    """Return the RGBA color of a single pixel."""

    pixel = colorize(np.array([iteration_count]), max_iterations, palette)[0]
    return tuple(int(channel) for channel in pixel)
