# terrain_chunks/normals.py

"""
Finite-difference surface normals.

Height is sampled at (x +/- step, z) and (x, z +/- step). With the tangents
tX = (2*step, dX, 0) and tZ = (0, dZ, 2*step), the normal is
normalize(cross(tZ, tX)) = normalize((-2*step*dX, 4*step^2, -2*step*dZ)).
Degenerate cross products fall back to (0, 1, 0).
"""

import math
from typing import Callable, Tuple

import numpy as np

from . import config as DEFAULTS

UP = (0.0, 1.0, 0.0)


def estimate_normal(height_fn: Callable[[float, float], float],
                    x: float, z: float, step: float) -> Tuple[float, float, float]:
    """Unit normal at a single point, using four extra height samples."""
    d_x = height_fn(x + step, z) - height_fn(x - step, z)
    d_z = height_fn(x, z + step) - height_fn(x, z - step)

    nx = -2.0 * step * d_x
    ny = 4.0 * step * step
    nz = -2.0 * step * d_z

    length = math.sqrt(nx * nx + ny * ny + nz * nz)
    if not length > DEFAULTS.NORMAL_DEGENERATE_EPSILON:
        return UP
    return nx / length, ny / length, nz / length


def estimate_normals_grid(height_grid_fn: Callable[[np.ndarray, np.ndarray], np.ndarray],
                          xs: np.ndarray, zs: np.ndarray, step: float) -> np.ndarray:
    """
    Grid version of estimate_normal.

    Returns:
        np.ndarray: Shape xs.shape + (3,), one unit normal per sample.
    """
    d_x = height_grid_fn(xs + step, zs) - height_grid_fn(xs - step, zs)
    d_z = height_grid_fn(xs, zs + step) - height_grid_fn(xs, zs - step)

    nx = -2.0 * step * d_x
    ny = np.full_like(nx, 4.0 * step * step)
    nz = -2.0 * step * d_z

    length = np.sqrt(nx * nx + ny * ny + nz * nz)
    degenerate = ~(length > DEFAULTS.NORMAL_DEGENERATE_EPSILON)
    safe_length = np.where(degenerate, 1.0, length)

    normals = np.stack([nx / safe_length, ny / safe_length, nz / safe_length], axis=-1)
    normals[degenerate] = UP
    return normals
