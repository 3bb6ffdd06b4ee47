# terrain_chunks/noise.py

"""
================================================================================
GRADIENT NOISE FIELD
================================================================================
This module provides seeded 3D gradient noise (improved Perlin noise) and its
fractal, multi-octave combination sampled on the y=0 plane for terrain.

The numeric work happens in Numba-compiled kernels that take the permutation
table as their first argument. The GradientNoiseField class owns one table and
validates caller input before any kernel runs.

Data Contract:
---------------
- Inputs:
    - seed: Any integer. Reduced to the unsigned 32-bit range before seeding.
    - p: A 512-entry permutation table (a shuffled 0..255 stored twice).
    - x, y, z: Finite coordinates (scalars or NumPy arrays for the grid kernel).
    - octaves (>= 1), persistence, lacunarity: Standard fractal parameters.
- Outputs:
    - Noise values in approximately [-1, 1].
- Side Effects: None. Tables are read-only once built.
- Invariants: Given the same table and inputs, every kernel returns the same
  value, whether a point is sampled alone or as part of a grid.
================================================================================
"""

import numbers

import numpy as np
from numba import njit

from . import config as DEFAULTS


def create_permutation_table(seed: int) -> np.ndarray:
    """
    Builds the duplicated permutation table for a seed.

    The identity sequence 0..255 is shuffled by a generator seeded only for
    this call, then stored twice so corner hashing never wraps. The same seed
    always yields the same table.
    """
    p = np.arange(DEFAULTS.PERMUTATION_SIZE, dtype=np.int64)
    rng = np.random.default_rng(int(seed) & DEFAULTS.SEED_MASK)
    rng.shuffle(p)
    table = np.stack([p, p]).flatten()
    table.setflags(write=False)
    return table


def validate_permutation_table(table) -> np.ndarray:
    """Checks an injected table and returns a read-only int64 copy of it."""
    size = DEFAULTS.PERMUTATION_SIZE
    p = np.array(table, dtype=np.int64)
    if p.shape != (2 * size,):
        raise ValueError(f"Permutation table must have {2 * size} entries, got shape {p.shape}.")
    if not np.array_equal(np.sort(p[:size]), np.arange(size)):
        raise ValueError(f"First half of the permutation table must be a permutation of 0..{size - 1}.")
    if not np.array_equal(p[:size], p[size:]):
        raise ValueError("Second half of the permutation table must duplicate the first half.")
    p.setflags(write=False)
    return p


def validate_octaves(octaves) -> int:
    """Octave counts must be integers >= 1; zero would divide by a zero amplitude sum."""
    if isinstance(octaves, bool) or not isinstance(octaves, numbers.Integral):
        raise ValueError(f"octaves must be an integer, got {octaves!r}.")
    if octaves < DEFAULTS.MIN_OCTAVES:
        raise ValueError(f"octaves must be >= {DEFAULTS.MIN_OCTAVES}, got {octaves}.")
    return int(octaves)


# --- Numba kernels ---

@njit
def _fade(t):
    "6t^5 - 15t^4 + 10t^3"
    return t * t * t * (t * (t * 6 - 15) + 10)


@njit
def _lerp(t, a, b):
    "Linear interpolation."
    return a + t * (b - a)


@njit
def _grad(hash_value, x, y, z):
    """
    Dot product of the offset vector with one of 12 gradient directions,
    selected by the low four bits of the corner hash.
    """
    h = hash_value & 15
    u = x if h < 8 else y
    if h < 4:
        v = y
    elif h == 12 or h == 14:
        v = x
    else:
        v = z
    return (-u if (h & 1) != 0 else u) + (-v if (h & 2) != 0 else v)


@njit
def noise_3d(p, x, y, z):
    """Classic gradient noise at a single point."""
    # Unit cube containing the point. floor() keeps negative coordinates in
    # the right cell.
    fx = np.floor(x)
    fy = np.floor(y)
    fz = np.floor(z)
    xi = int(fx) & 255
    yi = int(fy) & 255
    zi = int(fz) & 255

    # Position inside the cube.
    xf = x - fx
    yf = y - fy
    zf = z - fz

    u = _fade(xf)
    v = _fade(yf)
    w = _fade(zf)

    # Hash the 8 cube corners.
    a = p[xi] + yi
    aa = p[a] + zi
    ab = p[a + 1] + zi
    b = p[xi + 1] + yi
    ba = p[b] + zi
    bb = p[b + 1] + zi

    return _lerp(
        w,
        _lerp(
            v,
            _lerp(u, _grad(p[aa], xf, yf, zf), _grad(p[ba], xf - 1, yf, zf)),
            _lerp(u, _grad(p[ab], xf, yf - 1, zf), _grad(p[bb], xf - 1, yf - 1, zf)),
        ),
        _lerp(
            v,
            _lerp(u, _grad(p[aa + 1], xf, yf, zf - 1), _grad(p[ba + 1], xf - 1, yf, zf - 1)),
            _lerp(u, _grad(p[ab + 1], xf, yf - 1, zf - 1), _grad(p[bb + 1], xf - 1, yf - 1, zf - 1)),
        ),
    )


@njit
def noise_2d(p, x, z):
    """Terrain noise: the 3D field sampled on the y=0 plane."""
    return noise_3d(p, x, 0.0, z)


@njit
def octave_noise_2d(p, x, z, octaves, persistence, lacunarity):
    """
    Sums `octaves` layers of noise_2d, each at `lacunarity` times the previous
    frequency and `persistence` times the previous amplitude, then divides by
    the summed amplitude so the range does not depend on the octave count.
    """
    total = 0.0
    frequency = 1.0
    amplitude = 1.0
    max_value = 0.0

    for _ in range(octaves):
        total += noise_2d(p, x * frequency, z * frequency) * amplitude
        max_value += amplitude
        amplitude *= persistence
        frequency *= lacunarity

    return total / max_value


@njit
def octave_noise_2d_grid(p, xs, zs, octaves, persistence, lacunarity):
    """
    Evaluates octave_noise_2d over two equally shaped 2D coordinate arrays.
    Each element goes through the scalar kernel, so grid samples match
    single-point samples.
    """
    rows, cols = xs.shape
    out = np.empty((rows, cols))

    for i in range(rows):
        for j in range(cols):
            out[i, j] = octave_noise_2d(p, xs[i, j], zs[i, j], octaves, persistence, lacunarity)

    return out


class GradientNoiseField:
    """
    A seeded, reproducible gradient noise field.

    The permutation table is derived from the seed alone; no random generator
    is kept between calls.
    """

    def __init__(self, seed: int = DEFAULTS.DEFAULT_SEED, permutation_table: np.ndarray = None):
        """
        Args:
            seed (int): Seed for the permutation shuffle.
            permutation_table (np.ndarray, optional): A pre-computed 512-entry
                table. When given it is validated and used instead of
                shuffling from the seed.
        """
        self.seed = int(seed)
        if permutation_table is not None:
            self._p = validate_permutation_table(permutation_table)
        else:
            self._p = create_permutation_table(self.seed)

    @property
    def permutation_table(self) -> np.ndarray:
        return self._p

    def set_seed(self, seed: int):
        """Rebuilds the permutation table for a new seed."""
        self.seed = int(seed)
        self._p = create_permutation_table(self.seed)

    def noise_3d(self, x: float, y: float, z: float) -> float:
        return noise_3d(self._p, float(x), float(y), float(z))

    def noise_2d(self, x: float, z: float) -> float:
        return noise_2d(self._p, float(x), float(z))

    def octave_noise_2d(self, x: float, z: float, octaves: int,
                        persistence: float, lacunarity: float) -> float:
        octaves = validate_octaves(octaves)
        return octave_noise_2d(self._p, float(x), float(z), octaves, float(persistence), float(lacunarity))

    def octave_noise_2d_grid(self, xs: np.ndarray, zs: np.ndarray, octaves: int,
                             persistence: float, lacunarity: float) -> np.ndarray:
        """
        Grid version of octave_noise_2d. Accepts any pair of broadcastable
        coordinate arrays and returns an array of their broadcast shape.
        """
        octaves = validate_octaves(octaves)
        xs, zs = np.broadcast_arrays(np.asarray(xs, dtype=np.float64), np.asarray(zs, dtype=np.float64))
        shape = xs.shape
        xs_2d = np.ascontiguousarray(xs).reshape(1, -1) if xs.ndim != 2 else np.ascontiguousarray(xs)
        zs_2d = np.ascontiguousarray(zs).reshape(1, -1) if zs.ndim != 2 else np.ascontiguousarray(zs)
        values = octave_noise_2d_grid(self._p, xs_2d, zs_2d, octaves, float(persistence), float(lacunarity))
        return values.reshape(shape)
