"""Pytest configuration for the terrain chunk tests."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure the repository root is importable so the root scripts can be tested.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from terrain_chunks.params import ChunkParams, NoiseParameters, TerrainParams  # noqa: E402


@pytest.fixture
def reference_params() -> TerrainParams:
    """The reference terrain: seed 12345, 16-unit chunks, 32 vertices per side."""
    return TerrainParams(
        noise=NoiseParameters(
            seed=12345, amplitude=2.0, frequency=0.1, octaves=4,
            persistence=0.5, lacunarity=2.0, base_height=-10.0,
        ),
        chunk=ChunkParams(chunk_size=16.0, chunk_resolution=32),
    )


@pytest.fixture
def small_params() -> TerrainParams:
    """Coarse chunks keep the store tests quick."""
    return TerrainParams(
        noise=NoiseParameters(seed=7, amplitude=5.0, frequency=0.05, octaves=3),
        chunk=ChunkParams(chunk_size=8.0, chunk_resolution=5),
    )
