"""Turn a view state into a finished RGBA image."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from .calculator import DEFAULT_RADIUS_SQUARED, compute_iterations
from .colors import colorize
from .state import ViewState


@dataclass(frozen=True)
class RenderResult:
    """A rendered view: the iteration grid and the read-only pixel buffer built from it."""

    view: ViewState
    iterations: np.ndarray
    pixels: np.ndarray

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])


def render_view(
    view: ViewState,
    width: int,
    height: int,
    *,
    radius_squared: float = DEFAULT_RADIUS_SQUARED,
    device: Optional[str] = None,
) -> RenderResult:
    """Render every pixel of ``view`` into a fresh ``(height, width, 4)`` buffer."""

    iterations = compute_iterations(
        width,
        height,
        view.min_real,
        view.max_real,
        view.min_imag,
        view.max_imag,
        view.max_iterations,
        radius_squared,
        device=device,
    )
    pixels = colorize(iterations, view.max_iterations, view.palette)
    iterations.flags.writeable = False
    pixels.flags.writeable = False
    return RenderResult(view=view, iterations=iterations, pixels=pixels)
