# terrain_chunks/heightfield.py

"""
================================================================================
FRACTAL HEIGHT FIELD
================================================================================
Turns the gradient noise field into terrain elevation. Height is a pure
function of world (x, z), never of chunk-relative coordinates, which is what
keeps vertices on shared chunk edges identical.

Data Contract:
---------------
- Inputs:
    - NoiseParameters (seed, amplitude, frequency, octaves, persistence,
      lacunarity, base_height).
    - World x, z as floats or NumPy arrays.
- Outputs:
    - World-space Y values (base_height included by height()/height_grid()).
- Side Effects: None.
- Invariants: Given the same parameters and coordinates, the output is
  deterministic.
================================================================================
"""

import numpy as np

from .noise import GradientNoiseField
from .params import NoiseParameters


def get_terrain_height(noise_field: GradientNoiseField, x: float, z: float,
                       amplitude: float, frequency: float, octaves: int = 4,
                       persistence: float = 0.5, lacunarity: float = 2.0) -> float:
    """
    Fractal noise at (x, z) scaled by amplitude. base_height is NOT included;
    callers add it to obtain world Y.
    """
    noise = noise_field.octave_noise_2d(x * frequency, z * frequency, octaves, persistence, lacunarity)
    return noise * amplitude


class FractalHeightField:
    """World-space terrain height for one set of noise parameters."""

    def __init__(self, params: NoiseParameters, noise_field: GradientNoiseField = None):
        """
        Args:
            params (NoiseParameters): Validated noise parameters.
            noise_field (GradientNoiseField, optional): An existing field to
                sample. If None, one is seeded from params.seed.
        """
        self.params = params
        self.noise_field = noise_field if noise_field is not None else GradientNoiseField(params.seed)

    def fractal_height(self, x: float, z: float) -> float:
        p = self.params
        return get_terrain_height(
            self.noise_field, float(x), float(z),
            p.amplitude, p.frequency, p.octaves, p.persistence, p.lacunarity
        )

    def height(self, x: float, z: float) -> float:
        """Final world Y at (x, z)."""
        return self.fractal_height(x, z) + self.params.base_height

    def height_grid(self, xs: np.ndarray, zs: np.ndarray) -> np.ndarray:
        """Vectorised height() over coordinate arrays; same per-point arithmetic."""
        p = self.params
        xs = np.asarray(xs, dtype=np.float64)
        zs = np.asarray(zs, dtype=np.float64)
        noise = self.noise_field.octave_noise_2d_grid(
            xs * p.frequency, zs * p.frequency, p.octaves, p.persistence, p.lacunarity
        )
        return noise * p.amplitude + p.base_height
