"""Public API for the Mandelbrot explorer."""

from .calculator import DEFAULT_RADIUS_SQUARED, compute_iterations
from .colors import color_of, colorize
from .coordinates import REFERENCE_FRAME, pixel_to_complex, zoom_line, zoom_rectangle
from .errors import DeserializationFailure, ExplorerError, IOFailure
from .export import export_history_gif, export_image
from .history import (
    AdvanceIterations,
    AdvancePalette,
    AdvanceRegion,
    AdvanceRegionFromLine,
    AdvanceRegionFromRectangle,
    AdvanceToView,
    HistoryLog,
    NavigationRequest,
)
from .renderer import RenderResult, render_view
from .session import ExplorerSession
from .snapshot import dumps_view, load_view, loads_view, save_view
from .state import PALETTES, PlaneBounds, ViewState, next_palette

__all__ = [
    "AdvanceIterations",
    "AdvancePalette",
    "AdvanceRegion",
    "AdvanceRegionFromLine",
    "AdvanceRegionFromRectangle",
    "AdvanceToView",
    "DEFAULT_RADIUS_SQUARED",
    "DeserializationFailure",
    "ExplorerError",
    "ExplorerSession",
    "HistoryLog",
    "IOFailure",
    "NavigationRequest",
    "PALETTES",
    "PlaneBounds",
    "REFERENCE_FRAME",
    "RenderResult",
    "ViewState",
    "color_of",
    "colorize",
    "compute_iterations",
    "dumps_view",
    "export_history_gif",
    "export_image",
    "load_view",
    "loads_view",
    "next_palette",
    "pixel_to_complex",
    "render_view",
    "save_view",
    "zoom_line",
    "zoom_rectangle",
]
