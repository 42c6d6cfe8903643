"""Escape-time iteration counts for the quadratic Mandelbrot map."""

from __future__ import annotations

from typing import Optional

import numpy as np
import tensorflow as tf

DEFAULT_RADIUS_SQUARED = 4.0
MAX_ITERATION_CAP = int(np.iinfo(np.int64).max)


@tf.function
def _escape_step(zs: tf.Tensor, cs: tf.Tensor, ns: tf.Tensor, active: tf.Tensor, radius_squared: tf.Tensor) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor]:
    """Advance every point that is still inside the bailout radius by one iteration."""

    zs_new = zs * zs + cs
    zs = tf.where(active, zs_new, zs)
    ns = ns + tf.cast(active, tf.int64)
    magnitude_squared = tf.math.square(tf.math.real(zs)) + tf.math.square(tf.math.imag(zs))
    new_active = tf.logical_and(active, magnitude_squared <= radius_squared)
    return zs, ns, new_active


@tf.function
def _escape_run(cs: tf.Tensor, max_iterations: tf.Tensor, radius_squared: tf.Tensor) -> tf.Tensor:
    """Iterate ``z <- z**2 + c`` from ``z = 0`` until every point escapes or the cap is hit."""

    max_iterations = tf.cast(max_iterations, tf.int64)
    i = tf.constant(0, dtype=tf.int64)
    zs = tf.zeros_like(cs)
    ns = tf.zeros(tf.shape(cs), dtype=tf.int64)
    # z0 = 0 is always inside the radius, so every point starts active.
    active = tf.ones(tf.shape(cs), dtype=tf.bool)

    def cond(i: tf.Tensor, zs: tf.Tensor, ns: tf.Tensor, active: tf.Tensor) -> tf.Tensor:
        return tf.logical_and(tf.less(i, max_iterations), tf.reduce_any(active))

    def body(i: tf.Tensor, zs: tf.Tensor, ns: tf.Tensor, active: tf.Tensor) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor, tf.Tensor]:
        zs, ns, active = _escape_step(zs, cs, ns, active, radius_squared)
        return i + 1, zs, ns, active

    _, _, ns, _ = tf.while_loop(cond, body, (i, zs, ns, active))
    return ns


def sample_axes(width: int, height: int, min_real: float, max_real: float, min_imag: float, max_imag: float) -> tuple[np.ndarray, np.ndarray]:
    """Return the real coordinate of every column and the imaginary coordinate of every row."""

    real_range = np.float64(max_real) - np.float64(min_real)
    imag_range = np.float64(max_imag) - np.float64(min_imag)
    xs = np.float64(min_real) + np.arange(width, dtype=np.float64) * real_range / np.float64(width)
    ys = np.float64(min_imag) + np.arange(height, dtype=np.float64) * imag_range / np.float64(height)
    return xs, ys


def compute_iterations(
    width: int,
    height: int,
    min_real: float,
    max_real: float,
    min_imag: float,
    max_imag: float,
    max_iterations: int,
    radius_squared: float = DEFAULT_RADIUS_SQUARED,
    *,
    device: Optional[str] = None,
) -> np.ndarray:
    """Compute the iteration grid for a ``width`` x ``height`` window of the plane.

    Column ``x`` samples ``min_real + x * (max_real - min_real) / width`` and
    row ``y`` samples ``min_imag + y * (max_imag - min_imag) / height``. The
    result is indexed ``[y, x]`` and every entry lies in ``[0, max_iterations]``;
    ``max_iterations`` marks points that never left the bailout radius.
    """

    xs, ys = sample_axes(width, height, min_real, max_real, min_imag, max_imag)

    with tf.device(device if device is not None else "/CPU:0"):
        x_tf = tf.convert_to_tensor(xs, dtype=tf.float64)
        y_tf = tf.convert_to_tensor(ys, dtype=tf.float64)
        X, Y = tf.meshgrid(x_tf, y_tf)
        cs = tf.complex(X, Y)
        ns = _escape_run(
            cs,
            tf.constant(int(max_iterations), dtype=tf.int64),
            tf.constant(float(radius_squared), dtype=tf.float64),
        )

    return ns.numpy().astype(np.int64, copy=False)
