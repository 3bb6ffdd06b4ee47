# terrain_chunks/preview.py

"""
================================================================================
HEIGHT PREVIEW UTILITIES
================================================================================
Converts sampled terrain heights into a grayscale image for quick visual
inspection of a generated region. This is a debugging aid, not a chunk
storage format: nothing written here is ever read back.

It has no dependency on any renderer, only NumPy and Pillow.
================================================================================
"""
import os

import numpy as np
from PIL import Image

from . import config as DEFAULTS
from .heightfield import FractalHeightField
from .mesh_builder import chunk_bounds


def get_height_grayscale_array(heights: np.ndarray) -> np.ndarray:
    """
    Maps a (rows, cols) height array to uint8 grayscale, lowest point black
    and highest white. A perfectly flat input maps to mid-gray.
    """
    heights = np.asarray(heights, dtype=np.float64)
    low = heights.min()
    span = heights.max() - low
    if span > 0:
        normalized = (heights - low) / span
    else:
        normalized = np.full_like(heights, 0.5)
    return (normalized * 255).astype(np.uint8)


def sample_region_heights(height_field: FractalHeightField, min_chunk: tuple, max_chunk: tuple,
                          chunk_size: float,
                          pixels_per_chunk: int = DEFAULTS.PREVIEW_PIXELS_PER_CHUNK) -> np.ndarray:
    """
    Samples the height field over the inclusive chunk range
    [min_chunk, max_chunk]. Rows follow world z, columns world x.
    """
    start_x, start_z, _, _ = chunk_bounds(min_chunk[0], min_chunk[1], chunk_size)
    _, _, end_x, end_z = chunk_bounds(max_chunk[0], max_chunk[1], chunk_size)

    width = (max_chunk[0] - min_chunk[0] + 1) * pixels_per_chunk
    height = (max_chunk[1] - min_chunk[1] + 1) * pixels_per_chunk

    x_coords = np.linspace(start_x, end_x, width)
    z_coords = np.linspace(start_z, end_z, height)
    wx_grid, wz_grid = np.meshgrid(x_coords, z_coords)
    return height_field.height_grid(wx_grid, wz_grid)


def save_height_preview(heights: np.ndarray, file_path: str) -> str:
    """Writes a height array as an 8-bit grayscale PNG and returns the path."""
    directory = os.path.dirname(file_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    img = Image.fromarray(get_height_grayscale_array(heights))
    img.save(file_path, 'PNG')
    return file_path
