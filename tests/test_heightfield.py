"""Tests for the fractal height field."""
from __future__ import annotations

import numpy as np
import pytest

from terrain_chunks.heightfield import FractalHeightField, get_terrain_height
from terrain_chunks.noise import GradientNoiseField
from terrain_chunks.params import NoiseParameters


def test_terrain_height_scales_octave_noise() -> None:
    field = GradientNoiseField(12345)
    expected = field.octave_noise_2d(3.0 * 0.1, -7.5 * 0.1, 4, 0.5, 2.0) * 2.0
    assert get_terrain_height(field, 3.0, -7.5, 2.0, 0.1, 4, 0.5, 2.0) == expected


def test_height_adds_base_height() -> None:
    params = NoiseParameters(seed=3, amplitude=4.0, frequency=0.2, base_height=-10.0)
    height_field = FractalHeightField(params)
    assert height_field.height(1.5, 2.5) == height_field.fractal_height(1.5, 2.5) - 10.0


def test_height_is_deterministic_across_instances() -> None:
    params = NoiseParameters(seed=12345)
    field_a = FractalHeightField(params)
    field_b = FractalHeightField(params)
    for x, z in [(0.0, 0.0), (-31.75, 18.5), (4096.25, -2048.125)]:
        assert field_a.height(x, z) == field_b.height(x, z)


def test_height_stays_within_amplitude_of_base() -> None:
    params = NoiseParameters(seed=9, amplitude=2.0, base_height=-10.0)
    height_field = FractalHeightField(params)
    rng = np.random.default_rng(9)
    for x, z in rng.uniform(-1000.0, 1000.0, size=(300, 2)):
        assert abs(height_field.height(x, z) - (-10.0)) <= 2.0 * 1.1


def test_height_grid_matches_scalar_height() -> None:
    height_field = FractalHeightField(NoiseParameters(seed=21))
    xs, zs = np.meshgrid(np.linspace(-8.0, 8.0, 5), np.linspace(0.0, 16.0, 3))
    grid = height_field.height_grid(xs, zs)
    assert grid.shape == (3, 5)
    for i in range(3):
        for j in range(5):
            assert grid[i, j] == pytest.approx(height_field.height(xs[i, j], zs[i, j]), rel=1e-12, abs=1e-12)


def test_shared_noise_field_is_used() -> None:
    noise_field = GradientNoiseField(555)
    height_field = FractalHeightField(NoiseParameters(seed=1), noise_field)
    assert height_field.noise_field is noise_field
