"""Tests for the grayscale height preview."""
from __future__ import annotations

import numpy as np
from PIL import Image

from terrain_chunks.heightfield import FractalHeightField
from terrain_chunks.preview import (
    get_height_grayscale_array,
    sample_region_heights,
    save_height_preview,
)


def test_grayscale_spans_full_range() -> None:
    gray = get_height_grayscale_array(np.array([[-3.0, 0.0], [1.0, 5.0]]))
    assert gray.dtype == np.uint8
    assert gray[0, 0] == 0
    assert gray[1, 1] == 255


def test_flat_heights_map_to_mid_gray() -> None:
    gray = get_height_grayscale_array(np.full((4, 4), -10.0))
    assert np.all(gray == 127)


def test_sample_region_shape_and_corners(small_params) -> None:
    height_field = FractalHeightField(small_params.noise)
    heights = sample_region_heights(height_field, (-1, 0), (1, 0), 8.0, pixels_per_chunk=4)
    assert heights.shape == (4, 12)
    assert heights[0, 0] == height_field.height_grid(np.array([[-8.0]]), np.array([[0.0]]))[0, 0]
    assert heights[-1, -1] == height_field.height_grid(np.array([[16.0]]), np.array([[8.0]]))[0, 0]


def test_save_height_preview_writes_png(tmp_path, small_params) -> None:
    height_field = FractalHeightField(small_params.noise)
    heights = sample_region_heights(height_field, (0, 0), (1, 1), 8.0, pixels_per_chunk=8)
    target = tmp_path / "nested" / "preview.png"
    assert save_height_preview(heights, str(target)) == str(target)
    with Image.open(target) as img:
        assert img.mode == "L"
        assert img.size == (16, 16)
