"""Undo/redo log of view states."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from .coordinates import REFERENCE_FRAME, zoom_line, zoom_rectangle
from .state import PlaneBounds, ViewState


@dataclass(frozen=True)
class AdvancePalette:
    """Move on to the next palette in the cycle."""


@dataclass(frozen=True)
class AdvanceRegion:
    bounds: PlaneBounds


@dataclass(frozen=True)
class AdvanceIterations:
    max_iterations: int


@dataclass(frozen=True)
class AdvanceRegionFromRectangle:
    """Zoom into a rectangle selected in reference-frame pixels."""

    px_min_x: float
    px_max_x: float
    px_min_y: float
    px_max_y: float


@dataclass(frozen=True)
class AdvanceRegionFromLine:
    """Pan along a line dragged in reference-frame pixels."""

    x1: float
    x2: float
    y1: float
    y2: float


@dataclass(frozen=True)
class AdvanceToView:
    """Append an externally supplied state, e.g. a loaded snapshot."""

    view: ViewState


NavigationRequest = Union[
    AdvancePalette,
    AdvanceRegion,
    AdvanceIterations,
    AdvanceRegionFromRectangle,
    AdvanceRegionFromLine,
    AdvanceToView,
]


class HistoryLog:
    """Ordered view states with a cursor marking the live one.

    The log is never empty. Every append first discards the entries after the
    cursor, so taking a new step after an undo drops the redo branch.
    Moving the cursor never discards anything.
    """

    def __init__(self, initial: Optional[ViewState] = None) -> None:
        self._entries: list[ViewState] = [initial if initial is not None else ViewState.initial()]
        self._cursor = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> ViewState:
        return self._entries[index]

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def current(self) -> ViewState:
        return self._entries[self._cursor]

    @property
    def entries(self) -> tuple[ViewState, ...]:
        return tuple(self._entries)

    @property
    def can_undo(self) -> bool:
        return self._cursor > 0

    @property
    def can_redo(self) -> bool:
        return self._cursor < len(self._entries) - 1

    def truncate_forward(self) -> None:
        del self._entries[self._cursor + 1:]

    def advance_to(self, view: ViewState) -> ViewState:
        self.truncate_forward()
        self._entries.append(view)
        self._cursor += 1
        return view

    def advance_palette(self) -> ViewState:
        return self.advance_to(self.current.with_next_palette())

    def advance_region(self, bounds: PlaneBounds) -> ViewState:
        return self.advance_to(self.current.with_bounds(bounds))

    def advance_iterations(self, max_iterations: int) -> ViewState:
        return self.advance_to(self.current.with_max_iterations(max_iterations))

    def advance_region_from_rectangle(
        self,
        px_min_x: float,
        px_max_x: float,
        px_min_y: float,
        px_max_y: float,
        frame_size: float = REFERENCE_FRAME,
    ) -> ViewState:
        bounds = zoom_rectangle(self.current.bounds, px_min_x, px_max_x, px_min_y, px_max_y, frame_size)
        return self.advance_region(bounds)

    def advance_region_from_line(self, x1: float, x2: float, y1: float, y2: float) -> ViewState:
        current = self.current
        return self.advance_region(zoom_line(current.bounds, x1, x2, y1, y2, current.max_iterations))

    def undo(self) -> bool:
        """Step back one state. Returns ``False`` when already at the oldest state."""

        if not self.can_undo:
            return False
        self._cursor -= 1
        return True

    def redo(self) -> bool:
        """Step forward one state. Returns ``False`` when already at the newest state."""

        if not self.can_redo:
            return False
        self._cursor += 1
        return True

    def apply_navigation(self, request: NavigationRequest, frame_size: float = REFERENCE_FRAME) -> ViewState:
        """Apply one navigation request and return the new current state."""

        if isinstance(request, AdvancePalette):
            return self.advance_palette()
        if isinstance(request, AdvanceRegion):
            return self.advance_region(request.bounds)
        if isinstance(request, AdvanceIterations):
            return self.advance_iterations(request.max_iterations)
        if isinstance(request, AdvanceRegionFromRectangle):
            return self.advance_region_from_rectangle(
                request.px_min_x,
                request.px_max_x,
                request.px_min_y,
                request.px_max_y,
                frame_size,
            )
        if isinstance(request, AdvanceRegionFromLine):
            return self.advance_region_from_line(request.x1, request.x2, request.y1, request.y2)
        if isinstance(request, AdvanceToView):
            return self.advance_to(request.view)
        raise TypeError(f"Unsupported navigation request: {request!r}")
