"""View parameters shared by every stage of the explorer."""

from __future__ import annotations

from dataclasses import dataclass, replace

INITIAL_MIN_REAL = -2.0
INITIAL_MAX_REAL = 1.0
INITIAL_MIN_IMAGINARY = -1.5
INITIAL_MAX_IMAGINARY = 1.5
INITIAL_MAX_ITERATIONS = 100
INITIAL_PALETTE = "Pure"

PALETTES = ("Pure", "Red", "Green", "Blue", "Brown")


def next_palette(palette: str) -> str:
    """Return the palette that follows ``palette`` in the display cycle.

    Unknown names restart the cycle at ``"Pure"``.
    """

    try:
        index = PALETTES.index(palette)
    except ValueError:
        return INITIAL_PALETTE
    return PALETTES[(index + 1) % len(PALETTES)]


@dataclass(frozen=True)
class PlaneBounds:
    """Axis-aligned window of the complex plane."""

    min_real: float
    max_real: float
    min_imag: float
    max_imag: float

    @property
    def real_range(self) -> float:
        return self.max_real - self.min_real

    @property
    def imag_range(self) -> float:
        return self.max_imag - self.min_imag


@dataclass(frozen=True)
class ViewState:
    """Immutable snapshot of everything needed to render one image.

    Callers are expected to keep ``min_real < max_real``,
    ``min_imag < max_imag`` and ``max_iterations > 0``.
    """

    min_real: float
    max_real: float
    min_imag: float
    max_imag: float
    palette: str
    max_iterations: int

    @classmethod
    def initial(cls) -> ViewState:
        return cls(
            min_real=INITIAL_MIN_REAL,
            max_real=INITIAL_MAX_REAL,
            min_imag=INITIAL_MIN_IMAGINARY,
            max_imag=INITIAL_MAX_IMAGINARY,
            palette=INITIAL_PALETTE,
            max_iterations=INITIAL_MAX_ITERATIONS,
        )

    @property
    def bounds(self) -> PlaneBounds:
        return PlaneBounds(self.min_real, self.max_real, self.min_imag, self.max_imag)

    def with_bounds(self, bounds: PlaneBounds) -> ViewState:
        return replace(
            self,
            min_real=float(bounds.min_real),
            max_real=float(bounds.max_real),
            min_imag=float(bounds.min_imag),
            max_imag=float(bounds.max_imag),
        )

    def with_next_palette(self) -> ViewState:
        return replace(self, palette=next_palette(self.palette))

    def with_max_iterations(self, max_iterations: int) -> ViewState:
        return replace(self, max_iterations=int(max_iterations))
