"""Tests for parameter validation and config loading."""
from __future__ import annotations

import math

import pytest

from terrain_chunks.params import CONFIG_KEYS, ChunkParams, NoiseParameters, TerrainParams


def test_defaults_match_reference_terrain() -> None:
    params = TerrainParams()
    assert params.noise == NoiseParameters(12345, 2.0, 0.1, 4, 0.5, 2.0, -10.0)
    assert params.chunk.chunk_size == 16.0
    assert params.chunk.chunk_resolution == 32
    assert params.chunk.normal_step is None


def test_from_config_overrides_and_defaults() -> None:
    params = TerrainParams.from_config({'seed': 99, 'octaves': 6, 'chunk_resolution': 9})
    assert params.noise.seed == 99
    assert params.noise.octaves == 6
    assert params.noise.amplitude == 2.0
    assert params.chunk.chunk_resolution == 9
    assert params.chunk.chunk_size == 16.0


def test_from_config_accepts_none_and_empty() -> None:
    assert TerrainParams.from_config(None) == TerrainParams()
    assert TerrainParams.from_config({}) == TerrainParams()


def test_from_config_rejects_unknown_keys() -> None:
    with pytest.raises(ValueError, match="octave_count"):
        TerrainParams.from_config({'octave_count': 3})


def test_to_config_round_trips() -> None:
    params = TerrainParams.from_config({'seed': -4, 'frequency': 0.25, 'normal_step': 0.1})
    config = params.to_config()
    assert set(config) == set(CONFIG_KEYS)
    assert TerrainParams.from_config(config) == params


def test_integer_values_are_normalized() -> None:
    params = NoiseParameters(amplitude=3, frequency=1)
    assert isinstance(params.amplitude, float)
    assert isinstance(ChunkParams(chunk_size=8).chunk_size, float)


@pytest.mark.parametrize("overrides", [
    {'octaves': 0},
    {'octaves': -1},
    {'octaves': 1.5},
    {'seed': 1.5},
    {'seed': True},
    {'amplitude': math.nan},
    {'frequency': math.inf},
    {'persistence': "0.5"},
    {'chunk_size': 0.0},
    {'chunk_size': -16.0},
    {'chunk_resolution': 1},
    {'chunk_resolution': 32.0},
    {'normal_step': 0.0},
])
def test_invalid_values_are_rejected(overrides) -> None:
    with pytest.raises(ValueError):
        TerrainParams.from_config(overrides)


def test_vertex_spacing_and_normal_step() -> None:
    chunk = ChunkParams(chunk_size=16.0, chunk_resolution=33)
    assert chunk.vertex_spacing == 0.5
    assert chunk.effective_normal_step == 0.5
    assert ChunkParams(16.0, 33, normal_step=0.125).effective_normal_step == 0.125


def test_params_are_frozen() -> None:
    params = TerrainParams()
    with pytest.raises(AttributeError):
        params.noise.seed = 1
