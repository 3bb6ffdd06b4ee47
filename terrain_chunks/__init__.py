# terrain_chunks/__init__.py

# This file makes the 'terrain_chunks' directory a Python package.
# It also defines the public API of the package.

from .chunk_store import ChunkCoordinate, ChunkStore, chunks_in_radius, world_to_chunk_coord
from .heightfield import FractalHeightField, get_terrain_height
from .mesh_builder import ChunkMeshData, build_chunk, build_indices, build_vertices
from .noise import GradientNoiseField, create_permutation_table
from .normals import estimate_normal, estimate_normals_grid
from .params import ChunkParams, NoiseParameters, TerrainParams

__all__ = [
    "ChunkCoordinate", "ChunkStore", "chunks_in_radius", "world_to_chunk_coord",
    "FractalHeightField", "get_terrain_height",
    "ChunkMeshData", "build_chunk", "build_indices", "build_vertices",
    "GradientNoiseField", "create_permutation_table",
    "estimate_normal", "estimate_normals_grid",
    "ChunkParams", "NoiseParameters", "TerrainParams",
]
