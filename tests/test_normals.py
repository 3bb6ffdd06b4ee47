"""Tests for finite-difference normal estimation."""
from __future__ import annotations

import math

import numpy as np
import pytest

from terrain_chunks.heightfield import FractalHeightField
from terrain_chunks.normals import estimate_normal, estimate_normals_grid
from terrain_chunks.params import NoiseParameters


def test_flat_terrain_points_straight_up() -> None:
    assert estimate_normal(lambda x, z: 3.0, 1.0, 2.0, 0.5) == (0.0, 1.0, 0.0)


def test_inclined_plane_normal() -> None:
    slope = 0.5
    normal = estimate_normal(lambda x, z: slope * x, 4.0, -2.0, 0.25)
    norm = math.sqrt(1.0 + slope * slope)
    assert normal == pytest.approx((-slope / norm, 1.0 / norm, 0.0))


def test_plane_sloping_along_z() -> None:
    normal = estimate_normal(lambda x, z: -2.0 * z, 0.0, 0.0, 1.0)
    norm = math.sqrt(5.0)
    assert normal == pytest.approx((0.0, 1.0 / norm, 2.0 / norm))


def test_zero_step_falls_back_to_up() -> None:
    assert estimate_normal(lambda x, z: x * x, 1.0, 1.0, 0.0) == (0.0, 1.0, 0.0)


def test_noise_terrain_normals_are_unit_and_upward() -> None:
    height_field = FractalHeightField(NoiseParameters(seed=12345, amplitude=6.0))
    for x, z in [(0.0, 0.0), (5.5, -3.25), (-100.0, 42.0)]:
        nx, ny, nz = estimate_normal(height_field.height, x, z, 16.0 / 31.0)
        assert math.isclose(nx * nx + ny * ny + nz * nz, 1.0, rel_tol=1e-12)
        assert ny > 0.0


def test_grid_normals_match_scalar_normals() -> None:
    height_field = FractalHeightField(NoiseParameters(seed=77, amplitude=3.0))
    xs, zs = np.meshgrid(np.linspace(0.0, 4.0, 4), np.linspace(-2.0, 2.0, 3))
    normals = estimate_normals_grid(height_field.height_grid, xs, zs, 0.5)
    assert normals.shape == (3, 4, 3)
    for i in range(3):
        for j in range(4):
            expected = estimate_normal(height_field.height, xs[i, j], zs[i, j], 0.5)
            assert tuple(normals[i, j]) == pytest.approx(expected, rel=1e-9, abs=1e-12)


def test_grid_zero_step_falls_back_to_up() -> None:
    xs, zs = np.meshgrid(np.arange(3.0), np.arange(2.0))
    normals = estimate_normals_grid(lambda x, z: x * z, xs, zs, 0.0)
    assert np.array_equal(normals, np.broadcast_to([0.0, 1.0, 0.0], (2, 3, 3)))
