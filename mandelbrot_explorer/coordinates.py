"""Translate pixel-space gestures into windows of the complex plane."""

from __future__ import annotations

import numpy as np

from .state import PlaneBounds

REFERENCE_FRAME = 850.0


def zoom_rectangle(
    bounds: PlaneBounds,
    px_min_x: float,
    px_max_x: float,
    px_min_y: float,
    px_max_y: float,
    frame_size: float = REFERENCE_FRAME,
) -> PlaneBounds:
    """Rescale a selection rectangle into new plane bounds.

    The selection is expressed in a square reference frame of ``frame_size``
    units. Pixel Y interpolates the real range and pixel X the imaginary range.
    """

    frame = np.float64(frame_size)
    real_range = np.float64(bounds.real_range)
    imag_range = np.float64(bounds.imag_range)
    return PlaneBounds(
        min_real=float(np.float64(px_min_y) / frame * real_range + np.float64(bounds.min_real)),
        max_real=float(np.float64(px_max_y) / frame * real_range + np.float64(bounds.min_real)),
        min_imag=float(np.float64(px_min_x) / frame * imag_range + np.float64(bounds.min_imag)),
        max_imag=float(np.float64(px_max_x) / frame * imag_range + np.float64(bounds.min_imag)),
    )


def zoom_line(bounds: PlaneBounds, x1: float, x2: float, y1: float, y2: float, max_iterations: int) -> PlaneBounds:
    """Shift the window along a dragged line.

    The step is ``delta * range / max_iterations * 0.5`` on each axis, so deeper
    iteration caps move the view in finer steps. As with rectangles, the
    vertical delta moves the real axis and the horizontal delta the imaginary one.
    """

    real_shift = (np.float64(y2) - np.float64(y1)) * np.float64(bounds.real_range) / np.float64(max_iterations) * 0.5
    imag_shift = (np.float64(x2) - np.float64(x1)) * np.float64(bounds.imag_range) / np.float64(max_iterations) * 0.5
    return PlaneBounds(
        min_real=float(np.float64(bounds.min_real) - real_shift),
        max_real=float(np.float64(bounds.max_real) - real_shift),
        min_imag=float(np.float64(bounds.min_imag) - imag_shift),
        max_imag=float(np.float64(bounds.max_imag) - imag_shift),
    )


def pixel_to_complex(bounds: PlaneBounds, width: int, height: int, x: int, y: int) -> tuple[np.float64, np.float64]:
    """Return the plane coordinate sampled by pixel ``(x, y)`` of a rendered grid."""

    real = np.float64(bounds.min_real) + np.float64(x) * np.float64(bounds.real_range) / np.float64(width)
    imag = np.float64(bounds.min_imag) + np.float64(y) * np.float64(bounds.imag_range) / np.float64(height)
    return np.float64(real), np.float64(imag)
