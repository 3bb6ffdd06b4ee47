# terrain_chunks/params.py

"""
================================================================================
TERRAIN PARAMETERS
================================================================================
Immutable parameter records for the noise field and chunk grid, and the
conversion from a flat user configuration dictionary.

Data Contract:
---------------
- Inputs:
    - config (dict): Optional overrides for any of the keys listed in
      CONFIG_KEYS. Missing keys fall back to terrain_chunks.config.
- Outputs:
    - NoiseParameters, ChunkParams and TerrainParams instances.
- Side Effects: None.
- Invariants: Every instance that exists has passed validation. Invalid
  values raise ValueError at construction, never later inside a kernel.
================================================================================
"""

import math
import numbers
from dataclasses import asdict, dataclass, field
from typing import Optional

from . import config as DEFAULTS
from .noise import validate_octaves

CONFIG_KEYS = (
    'seed', 'amplitude', 'frequency', 'octaves', 'persistence', 'lacunarity',
    'base_height', 'chunk_size', 'chunk_resolution', 'normal_step',
)


def _require_finite(name: str, value) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real) or not math.isfinite(value):
        raise ValueError(f"{name} must be a finite number, got {value!r}.")
    return float(value)


@dataclass(frozen=True)
class NoiseParameters:
    seed: int = DEFAULTS.DEFAULT_SEED
    amplitude: float = DEFAULTS.DEFAULT_AMPLITUDE
    frequency: float = DEFAULTS.DEFAULT_FREQUENCY
    octaves: int = DEFAULTS.DEFAULT_OCTAVES
    persistence: float = DEFAULTS.DEFAULT_PERSISTENCE
    lacunarity: float = DEFAULTS.DEFAULT_LACUNARITY
    base_height: float = DEFAULTS.DEFAULT_BASE_HEIGHT

    def __post_init__(self):
        if isinstance(self.seed, bool) or not isinstance(self.seed, numbers.Integral):
            raise ValueError(f"seed must be an integer, got {self.seed!r}.")
        # Frozen dataclass: normalise field types through object.__setattr__.
        object.__setattr__(self, 'seed', int(self.seed))
        object.__setattr__(self, 'octaves', validate_octaves(self.octaves))
        for name in ('amplitude', 'frequency', 'persistence', 'lacunarity', 'base_height'):
            object.__setattr__(self, name, _require_finite(name, getattr(self, name)))


@dataclass(frozen=True)
class ChunkParams:
    chunk_size: float = DEFAULTS.DEFAULT_CHUNK_SIZE
    chunk_resolution: int = DEFAULTS.DEFAULT_CHUNK_RESOLUTION
    normal_step: Optional[float] = DEFAULTS.DEFAULT_NORMAL_STEP

    def __post_init__(self):
        size = _require_finite('chunk_size', self.chunk_size)
        if size <= 0:
            raise ValueError(f"chunk_size must be positive, got {size}.")
        object.__setattr__(self, 'chunk_size', size)

        resolution = self.chunk_resolution
        if isinstance(resolution, bool) or not isinstance(resolution, numbers.Integral):
            raise ValueError(f"chunk_resolution must be an integer, got {resolution!r}.")
        if resolution < DEFAULTS.MIN_CHUNK_RESOLUTION:
            raise ValueError(
                f"chunk_resolution must be >= {DEFAULTS.MIN_CHUNK_RESOLUTION}, got {resolution}."
            )
        object.__setattr__(self, 'chunk_resolution', int(resolution))

        if self.normal_step is not None:
            step = _require_finite('normal_step', self.normal_step)
            if step <= 0:
                raise ValueError(f"normal_step must be positive, got {step}.")
            object.__setattr__(self, 'normal_step', step)

    @property
    def vertex_spacing(self) -> float:
        """World distance between neighbouring vertices of a chunk."""
        return self.chunk_size / (self.chunk_resolution - 1)

    @property
    def effective_normal_step(self) -> float:
        return self.normal_step if self.normal_step is not None else self.vertex_spacing


@dataclass(frozen=True)
class TerrainParams:
    """Everything that determines the generated terrain."""
    noise: NoiseParameters = field(default_factory=NoiseParameters)
    chunk: ChunkParams = field(default_factory=ChunkParams)

    @classmethod
    def from_config(cls, config: dict = None) -> 'TerrainParams':
        """
        Builds parameters from a flat dictionary of overrides.

        Raises:
            ValueError: On unknown keys or invalid values.
        """
        config = dict(config or {})
        unknown = sorted(set(config) - set(CONFIG_KEYS))
        if unknown:
            raise ValueError(f"Unknown terrain parameter(s): {', '.join(unknown)}")

        noise = NoiseParameters(
            seed=config.get('seed', DEFAULTS.DEFAULT_SEED),
            amplitude=config.get('amplitude', DEFAULTS.DEFAULT_AMPLITUDE),
            frequency=config.get('frequency', DEFAULTS.DEFAULT_FREQUENCY),
            octaves=config.get('octaves', DEFAULTS.DEFAULT_OCTAVES),
            persistence=config.get('persistence', DEFAULTS.DEFAULT_PERSISTENCE),
            lacunarity=config.get('lacunarity', DEFAULTS.DEFAULT_LACUNARITY),
            base_height=config.get('base_height', DEFAULTS.DEFAULT_BASE_HEIGHT),
        )
        chunk = ChunkParams(
            chunk_size=config.get('chunk_size', DEFAULTS.DEFAULT_CHUNK_SIZE),
            chunk_resolution=config.get('chunk_resolution', DEFAULTS.DEFAULT_CHUNK_RESOLUTION),
            normal_step=config.get('normal_step', DEFAULTS.DEFAULT_NORMAL_STEP),
        )
        return cls(noise=noise, chunk=chunk)

    def to_config(self) -> dict:
        """The flat dictionary form accepted by from_config()."""
        return {**asdict(self.noise), **asdict(self.chunk)}
