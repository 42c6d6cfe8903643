"""Save and load a single view state."""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any

from .calculator import MAX_ITERATION_CAP
from .errors import DeserializationFailure, IOFailure
from .state import ViewState

SNAPSHOT_FORMAT = "mandelbrot-explorer/view-state"
SNAPSHOT_VERSION = 1

_FLOAT_FIELDS = ("min_real", "max_real", "min_imag", "max_imag")


def dumps_view(view: ViewState) -> str:
    payload = {
        "format": SNAPSHOT_FORMAT,
        "version": SNAPSHOT_VERSION,
        "min_real": view.min_real,
        "max_real": view.max_real,
        "min_imag": view.min_imag,
        "max_imag": view.max_imag,
        "palette": view.palette,
        "max_iterations": view.max_iterations,
    }
    return json.dumps(payload, indent=2)


def _require(payload: dict[str, Any], key: str) -> Any:
    if key not in payload:
        raise DeserializationFailure(f"Snapshot is missing '{key}'.")
    return payload[key]


def loads_view(text: str) -> ViewState:
    """Parse a snapshot document, rejecting anything that is not a valid view state."""

    try:
        payload = json.loads(text)
    except ValueError as exc:
        raise DeserializationFailure(f"Snapshot is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise DeserializationFailure("Snapshot must be a JSON object.")

    if _require(payload, "format") != SNAPSHOT_FORMAT:
        raise DeserializationFailure(f"Unsupported snapshot format {payload['format']!r}.")
    if _require(payload, "version") != SNAPSHOT_VERSION:
        raise DeserializationFailure(f"Unsupported snapshot version {payload['version']!r}.")

    values: dict[str, float] = {}
    for key in _FLOAT_FIELDS:
        value = _require(payload, key)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise DeserializationFailure(f"Snapshot field '{key}' must be a finite number.")
        try:
            value = float(value)
        except OverflowError as exc:
            raise DeserializationFailure(f"Snapshot field '{key}' is out of range.") from exc
        if not math.isfinite(value):
            raise DeserializationFailure(f"Snapshot field '{key}' must be a finite number.")
        values[key] = value

    palette = _require(payload, "palette")
    if not isinstance(palette, str):
        raise DeserializationFailure("Snapshot field 'palette' must be a string.")

    max_iterations = _require(payload, "max_iterations")
    if isinstance(max_iterations, bool) or not isinstance(max_iterations, int) or max_iterations <= 0:
        raise DeserializationFailure("Snapshot field 'max_iterations' must be a positive integer.")
    if max_iterations > MAX_ITERATION_CAP:
        raise DeserializationFailure(f"Snapshot field 'max_iterations' exceeds {MAX_ITERATION_CAP}.")

    if not values["min_real"] < values["max_real"]:
        raise DeserializationFailure("Snapshot real bounds are empty or inverted.")
    if not values["min_imag"] < values["max_imag"]:
        raise DeserializationFailure("Snapshot imaginary bounds are empty or inverted.")

    return ViewState(palette=palette, max_iterations=max_iterations, **values)


def save_view(view: ViewState, path: Path) -> Path:
    """Write ``view`` to ``path``, creating parent directories as needed."""

    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(dumps_view(view), encoding="utf-8")
    except OSError as exc:
        raise IOFailure(f"Could not write snapshot {path}: {exc}") from exc
    return path


def load_view(path: Path) -> ViewState:
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise DeserializationFailure(f"Snapshot {path} is not UTF-8 text.") from exc
    except OSError as exc:
        raise IOFailure(f"Could not read snapshot {path}: {exc}") from exc
    return loads_view(text)
