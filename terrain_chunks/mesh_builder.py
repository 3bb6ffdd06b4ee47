# terrain_chunks/mesh_builder.py

"""
================================================================================
CHUNK MESH BUILDER
================================================================================
Samples a regular grid of (height, normal) pairs over one chunk's world-space
footprint and assembles renderer-ready vertex and index buffers.

Data Contract:
---------------
- Inputs:
    - A FractalHeightField, chunk coordinates (chunk_x, chunk_z) and
      ChunkParams (chunk_size, chunk_resolution R, optional normal_step).
- Outputs:
    - vertices: flat float32 array, R*R*6 values, interleaved
      [x, y, z, nx, ny, nz], rows ordered by z then x (z outer).
    - indices: flat uint32 array, (R-1)*(R-1)*6 values, two triangles per
      grid cell.
- Winding: for the cell whose corners are
      top_left     = z*R + x        top_right    = top_left + 1
      bottom_left  = (z+1)*R + x    bottom_right = bottom_left + 1
  the triangles are (top_left, bottom_left, top_right) and
  (top_right, bottom_left, bottom_right). With +x right and +z "down" the
  grid, both are counter-clockwise when viewed from +y (above), so renderers
  should cull back faces with counter-clockwise front faces.
- Side Effects: fill_chunk() mutates only the chunk it is given.
- Invariants: Vertex positions come from world coordinates. The last column
  of chunk (x, z) and the first column of chunk (x+1, z) are computed from
  the same expression, so shared-edge vertices are bit-identical.
================================================================================
"""

import logging
from dataclasses import dataclass, field

import numpy as np

from . import config as DEFAULTS
from .heightfield import FractalHeightField
from .normals import estimate_normals_grid
from .params import ChunkParams

VERTEX_DTYPE = np.float32
INDEX_DTYPE = np.uint32


@dataclass(eq=False)
class ChunkMeshData:
    """Vertex/index buffers for one chunk, or an empty placeholder."""
    chunk_x: int
    chunk_z: int
    vertices: np.ndarray = field(default_factory=lambda: np.empty(0, dtype=VERTEX_DTYPE))
    indices: np.ndarray = field(default_factory=lambda: np.empty(0, dtype=INDEX_DTYPE))
    is_generated: bool = False

    @property
    def coord(self) -> tuple:
        return (self.chunk_x, self.chunk_z)

    @property
    def vertex_count(self) -> int:
        return len(self.vertices) // DEFAULTS.VERTEX_STRIDE

    @property
    def triangle_count(self) -> int:
        return len(self.indices) // 3

    def positions(self) -> np.ndarray:
        """(N, 3) view of the vertex positions."""
        return self.vertices.reshape(-1, DEFAULTS.VERTEX_STRIDE)[:, 0:3]

    def normals(self) -> np.ndarray:
        """(N, 3) view of the vertex normals."""
        return self.vertices.reshape(-1, DEFAULTS.VERTEX_STRIDE)[:, 3:6]


def chunk_bounds(chunk_x: int, chunk_z: int, chunk_size: float) -> tuple:
    """World-space (start_x, start_z, end_x, end_z) of a chunk."""
    start_x = chunk_x * chunk_size
    start_z = chunk_z * chunk_size
    # The end is written as the neighbour's start so both chunks agree exactly.
    end_x = (chunk_x + 1) * chunk_size
    end_z = (chunk_z + 1) * chunk_size
    return start_x, start_z, end_x, end_z


def vertex_coordinates(chunk_x: int, chunk_z: int, chunk_params: ChunkParams) -> tuple:
    """
    World (x, z) grids for a chunk's vertices, each of shape (R, R) with rows
    indexed by z and columns by x.
    """
    resolution = chunk_params.chunk_resolution
    start_x, start_z, end_x, end_z = chunk_bounds(chunk_x, chunk_z, chunk_params.chunk_size)

    # linspace pins both endpoints, so edges land exactly on the bounds.
    x_coords = np.linspace(start_x, end_x, resolution)
    z_coords = np.linspace(start_z, end_z, resolution)
    return np.meshgrid(x_coords, z_coords)


def build_vertices(height_field: FractalHeightField, chunk_x: int, chunk_z: int,
                   chunk_params: ChunkParams) -> np.ndarray:
    """Interleaved position/normal buffer for one chunk."""
    wx_grid, wz_grid = vertex_coordinates(chunk_x, chunk_z, chunk_params)

    heights = height_field.height_grid(wx_grid, wz_grid)
    normals = estimate_normals_grid(
        height_field.height_grid, wx_grid, wz_grid, chunk_params.effective_normal_step
    )

    interleaved = np.concatenate(
        [wx_grid[..., np.newaxis], heights[..., np.newaxis], wz_grid[..., np.newaxis], normals],
        axis=-1,
    )
    return interleaved.astype(VERTEX_DTYPE).ravel()


def build_indices(resolution: int) -> np.ndarray:
    """Triangle list for an R x R vertex grid, in the winding documented above."""
    if resolution < DEFAULTS.MIN_CHUNK_RESOLUTION:
        raise ValueError(f"resolution must be >= {DEFAULTS.MIN_CHUNK_RESOLUTION}, got {resolution}.")

    cells = np.arange(resolution - 1)
    z_idx, x_idx = np.meshgrid(cells, cells, indexing='ij')

    top_left = z_idx * resolution + x_idx
    top_right = top_left + 1
    bottom_left = (z_idx + 1) * resolution + x_idx
    bottom_right = bottom_left + 1

    triangles = np.stack(
        [top_left, bottom_left, top_right, top_right, bottom_left, bottom_right],
        axis=-1,
    )
    return triangles.astype(INDEX_DTYPE).ravel()


def fill_chunk(height_field: FractalHeightField, chunk: ChunkMeshData,
               chunk_params: ChunkParams, logger: logging.Logger = None) -> ChunkMeshData:
    """
    Generates a placeholder's buffers in place. A chunk that is already
    generated is returned untouched.
    """
    if chunk.is_generated:
        return chunk

    chunk.vertices = build_vertices(height_field, chunk.chunk_x, chunk.chunk_z, chunk_params)
    chunk.indices = build_indices(chunk_params.chunk_resolution)
    chunk.is_generated = True

    (logger or logging.getLogger(__name__)).debug(
        f"Generated chunk ({chunk.chunk_x}, {chunk.chunk_z}) with "
        f"{chunk.vertex_count} vertices and {len(chunk.indices)} indices"
    )
    return chunk


def build_chunk(height_field: FractalHeightField, chunk_x: int, chunk_z: int,
                chunk_params: ChunkParams, logger: logging.Logger = None) -> ChunkMeshData:
    """Builds a new, generated chunk."""
    return fill_chunk(height_field, ChunkMeshData(int(chunk_x), int(chunk_z)), chunk_params, logger)
