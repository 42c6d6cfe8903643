"""A navigation session: history, fixed image size and the displayed render."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Optional

from .calculator import DEFAULT_RADIUS_SQUARED
from .coordinates import REFERENCE_FRAME
from .export import export_history_gif, export_image
from .history import AdvanceToView, HistoryLog, NavigationRequest
from .renderer import RenderResult, render_view
from .snapshot import load_view, save_view
from .state import ViewState


class ExplorerSession:
    """Drive a :class:`HistoryLog` and keep the displayed image in sync with it.

    History changes are serialized by a lock. Renders run outside the lock and
    only the render belonging to the most recent transition is published, so a
    slow render of an older state can never replace a newer image.
    """

    def __init__(
        self,
        width: int,
        height: int,
        *,
        initial: Optional[ViewState] = None,
        frame_size: float = REFERENCE_FRAME,
        radius_squared: float = DEFAULT_RADIUS_SQUARED,
        device: Optional[str] = None,
    ) -> None:
        self.width = int(width)
        self.height = int(height)
        self.frame_size = float(frame_size)
        self.radius_squared = float(radius_squared)
        self.device = device
        self.history = HistoryLog(initial)
        self._lock = threading.Lock()
        self._generation = 0
        self._result: Optional[RenderResult] = None

    @property
    def current(self) -> ViewState:
        return self.history.current

    @property
    def result(self) -> Optional[RenderResult]:
        """The displayed render, or ``None`` before the first one.

        Methods that render return the image of the state they rendered, which
        may already be superseded; this property is what should be shown.
        """

        return self._result

    def _transition(self, change) -> tuple[bool, int, ViewState]:
        with self._lock:
            changed = bool(change())
            if changed:
                self._generation += 1
            return changed, self._generation, self.history.current

    def _render(self, generation: int, view: ViewState) -> RenderResult:
        result = render_view(
            view,
            self.width,
            self.height,
            radius_squared=self.radius_squared,
            device=self.device,
        )
        with self._lock:
            if generation == self._generation:
                self._result = result
        return result

    def refresh(self) -> RenderResult:
        """Render the state under the cursor."""

        with self._lock:
            generation = self._generation
            view = self.history.current
        return self._render(generation, view)

    def navigate(self, request: NavigationRequest) -> RenderResult:
        """Apply ``request`` to the history and render the resulting state."""

        def apply() -> bool:
            self.history.apply_navigation(request, self.frame_size)
            return True

        _, generation, view = self._transition(apply)
        return self._render(generation, view)

    def undo(self) -> RenderResult:
        changed, generation, view = self._transition(self.history.undo)
        if not changed and self._result is not None:
            return self._result
        return self._render(generation, view)

    def redo(self) -> RenderResult:
        changed, generation, view = self._transition(self.history.redo)
        if not changed and self._result is not None:
            return self._result
        return self._render(generation, view)

    def save_snapshot(self, path: Path) -> Path:
        """Write the current state to ``path``."""

        return save_view(self.current, path)

    def load_snapshot(self, path: Path) -> RenderResult:
        """Read a state from ``path`` and append it as the next history entry."""

        view = load_view(path)
        return self.navigate(AdvanceToView(view))

    def export_image(self, path: Path, image_format: str = "png") -> Path:
        result = self._result if self._result is not None else self.refresh()
        return export_image(result.pixels, path, image_format)

    def export_history_gif(self, path: Path, *, duration: float = 0.5) -> Path:
        """Replay every state from the first entry up to the cursor as a GIF."""

        with self._lock:
            views = self.history.entries[: self.history.cursor + 1]
        frames = (
            render_view(
                view,
                self.width,
                self.height,
                radius_squared=self.radius_squared,
                device=self.device,
            ).pixels
            for view in views
        )
        return export_history_gif(frames, path, duration=duration)
