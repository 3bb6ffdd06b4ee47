# terrain_chunks/chunk_store.py

"""
================================================================================
CHUNK STORE
================================================================================
The in-memory cache of chunk meshes, keyed by chunk coordinate. It owns the
noise field and height field for the current parameters and is the only
component allowed to discard chunks.

Data Contract:
---------------
- Inputs (on initialization):
    - params (TerrainParams): Noise and chunk parameters. Defaults are used
      when omitted.
    - logger: An optional Python logging object for runtime messages.
- Per-coordinate lifecycle:
    Absent -> Placeholder (is_generated=False) on first get_or_create()
    Placeholder -> Generated (is_generated=True) on generate_chunk_mesh()
    Any -> Absent only through clear_all() or set_params(), which drop
    every entry at once.
- Outputs:
    - ChunkMeshData references. They stay valid until the next clear_all()
      or set_params(); after that callers must treat them as stale.
- Side Effects: Logs messages using the provided logger.
- Invariants: Height queries never depend on cache state. Generating a chunk
  twice leaves its buffers untouched.
================================================================================
"""

import logging
import math
import threading
from types import MappingProxyType
from typing import Iterator, Mapping, NamedTuple

from .heightfield import FractalHeightField
from .mesh_builder import ChunkMeshData, fill_chunk
from .noise import GradientNoiseField
from .params import TerrainParams


class ChunkCoordinate(NamedTuple):
    chunk_x: int
    chunk_z: int


def world_to_chunk_coord(world_x: float, world_z: float, chunk_size: float) -> ChunkCoordinate:
    """
    Chunk containing a world position.

    Math:
        chunk = floor(world / chunk_size)

    Example:
        world (-1, 17) with chunk_size=16:
        chunk = (-1, 1)
    """
    return ChunkCoordinate(
        math.floor(world_x / chunk_size),
        math.floor(world_z / chunk_size),
    )


def chunks_in_radius(center: ChunkCoordinate, radius: int) -> Iterator[ChunkCoordinate]:
    """The (2*radius+1)^2 square of coordinates around a chunk, z outer."""
    cx, cz = center
    for z in range(cz - radius, cz + radius + 1):
        for x in range(cx - radius, cx + radius + 1):
            yield ChunkCoordinate(x, z)


class ChunkStore:
    """
    Lazily populated cache of chunk meshes. Single-threaded use needs no
    coordination; the insertion path is guarded so chunks built concurrently
    can be adopted safely.
    """

    def __init__(self, params: TerrainParams = None, logger: logging.Logger = None):
        self.logger = logger or logging.getLogger(__name__)
        self._chunks = {}
        self._insert_lock = threading.Lock()
        self._apply_params(params if params is not None else TerrainParams())
        self.logger.info(
            f"ChunkStore initialized with seed {self._params.noise.seed}, "
            f"chunk size {self.chunk_size}, resolution {self.chunk_resolution}"
        )

    def _apply_params(self, params: TerrainParams):
        self._params = params
        self.noise_field = GradientNoiseField(params.noise.seed)
        self.height_field = FractalHeightField(params.noise, self.noise_field)

    # --- Parameters ---
    @property
    def params(self) -> TerrainParams:
        return self._params

    @property
    def chunk_size(self) -> float:
        return self._params.chunk.chunk_size

    @property
    def chunk_resolution(self) -> int:
        return self._params.chunk.chunk_resolution

    def set_params(self, new_params: TerrainParams):
        """
        Replaces all parameters, reseeds the noise field and drops the whole
        cache. There is no partial invalidation.
        """
        self._apply_params(new_params)
        dropped = self.clear_all()
        self.logger.info(
            f"Terrain parameters changed (seed {new_params.noise.seed}); discarded {dropped} chunks."
        )

    def clear_all(self) -> int:
        """Drops every cached chunk without changing parameters. Returns how many were dropped."""
        with self._insert_lock:
            dropped = len(self._chunks)
            self._chunks = {}
        self.logger.debug(f"Cleared {dropped} chunks from the store.")
        return dropped

    # --- Cache access ---
    @property
    def chunks(self) -> Mapping[ChunkCoordinate, ChunkMeshData]:
        """Read-only view of every cached chunk, generated or not."""
        return MappingProxyType(self._chunks)

    def __len__(self) -> int:
        return len(self._chunks)

    def __contains__(self, coord) -> bool:
        return ChunkCoordinate(*coord) in self._chunks

    def get_or_create(self, chunk_x: int, chunk_z: int) -> ChunkMeshData:
        """Returns the cached chunk, inserting an ungenerated placeholder on a miss."""
        key = ChunkCoordinate(int(chunk_x), int(chunk_z))
        chunk = self._chunks.get(key)
        if chunk is not None:
            return chunk

        with self._insert_lock:
            # setdefault keeps whichever placeholder won a concurrent insert.
            return self._chunks.setdefault(key, ChunkMeshData(key.chunk_x, key.chunk_z))

    def get_chunk(self, chunk_x: int, chunk_z: int) -> ChunkMeshData:
        """Same as get_or_create(): a miss materialises a placeholder."""
        return self.get_or_create(chunk_x, chunk_z)

    def generate_chunk_mesh(self, chunk_x: int, chunk_z: int) -> ChunkMeshData:
        """Builds the chunk's buffers if it has not been generated yet."""
        chunk = self.get_or_create(chunk_x, chunk_z)
        return fill_chunk(self.height_field, chunk, self._params.chunk, self.logger)

    def insert_generated(self, mesh: ChunkMeshData) -> ChunkMeshData:
        """
        Adopts a chunk generated outside the store (e.g. in a worker process).
        An entry that is already generated is kept and returned instead.
        """
        if not mesh.is_generated:
            raise ValueError(f"Chunk ({mesh.chunk_x}, {mesh.chunk_z}) is not generated.")

        key = ChunkCoordinate(mesh.chunk_x, mesh.chunk_z)
        with self._insert_lock:
            existing = self._chunks.get(key)
            if existing is not None and existing.is_generated:
                return existing
            if existing is not None:
                # Fill the placeholder so references handed out earlier see the data.
                existing.vertices = mesh.vertices
                existing.indices = mesh.indices
                existing.is_generated = True
                return existing
            self._chunks[key] = mesh
            return mesh

    # --- World-space queries ---
    def world_to_chunk_coord(self, world_x: float, world_z: float) -> ChunkCoordinate:
        return world_to_chunk_coord(world_x, world_z, self.chunk_size)

    def get_chunk_at_world_pos(self, world_x: float, world_z: float) -> ChunkMeshData:
        coord = self.world_to_chunk_coord(world_x, world_z)
        return self.get_or_create(*coord)

    def get_height_at_world_pos(self, world_x: float, world_z: float) -> float:
        """Terrain Y at a world position. Does not touch the cache."""
        return self.height_field.height(world_x, world_z)
