"""Encode rendered pixel buffers to image files."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

import imageio
import numpy as np
import PIL.Image

from .errors import IOFailure


def _pil_format_name(ext: str) -> str:
    upper = ext.upper()
    if upper == "JPG":
        return "JPEG"
    if upper == "TIF":
        return "TIFF"
    return upper


def export_image(pixels: np.ndarray, output_path: Path, image_format: str = "png") -> Path:
    """Write an RGBA pixel buffer to ``output_path`` using ``image_format``."""

    output_path = Path(output_path)
    pil_format = _pil_format_name(image_format.lstrip(".") or "png")
    image = PIL.Image.fromarray(np.ascontiguousarray(pixels))
    if pil_format == "JPEG":
        image = image.convert("RGB")
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        image.save(str(output_path), format=pil_format)
    except (OSError, KeyError, ValueError) as exc:
        raise IOFailure(f"Could not write image {output_path}: {exc}") from exc
    return output_path


def export_history_gif(frames: Iterable[np.ndarray], output_path: Path, *, duration: float = 0.5) -> Path:
    """Append every frame to an animated GIF at ``output_path``."""

    output_path = Path(output_path)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        writer = imageio.get_writer(str(output_path), mode='I', duration=duration, loop=0)
    except (OSError, ValueError) as exc:
        raise IOFailure(f"Could not open GIF {output_path}: {exc}") from exc
    try:
        for frame in frames:
            writer.append_data(np.ascontiguousarray(frame))
    except OSError as exc:
        raise IOFailure(f"Could not write GIF {output_path}: {exc}") from exc
    finally:
        writer.close()
    return output_path
