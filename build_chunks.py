# build_chunks.py

"""
================================================================================
REGION CHUNK BUILDER SCRIPT
================================================================================
This script is a command-line tool for generating every chunk mesh in a
rectangular range of chunk coordinates, optionally across several worker
processes, and reporting what was built. It is useful for profiling
generation and for eyeballing a region through a grayscale height preview.

Generated meshes live in memory only; nothing but the optional preview image
is written to disk.

Usage:
    python build_chunks.py --min -2 -2 --max 2 2 --config terrain_config.json
    python build_chunks.py --min 0 0 --max 7 7 --workers 4 --preview region.png
================================================================================
"""
import os
import sys
import json
import logging
import argparse
import time
import multiprocessing

import numpy as np
from tqdm import tqdm

# Add project root to Python path to allow importing from terrain_chunks
sys.path.append(os.path.abspath(os.path.dirname(__file__)))

from terrain_chunks.chunk_store import ChunkStore
from terrain_chunks.heightfield import FractalHeightField
from terrain_chunks.mesh_builder import build_chunk
from terrain_chunks.params import TerrainParams
from terrain_chunks import preview
from terrain_chunks import config as DEFAULTS

# --- Global variables for worker processes ---
worker_height_field = None
worker_chunk_params = None


def init_worker(terrain_config: dict):
    """Rebuilds the height field once per worker process."""
    global worker_height_field, worker_chunk_params

    params = TerrainParams.from_config(terrain_config)
    worker_height_field = FractalHeightField(params.noise)
    worker_chunk_params = params.chunk


def process_chunk(coords):
    """Builds a single chunk inside a worker and ships the buffers back."""
    cx, cz = coords
    return build_chunk(worker_height_field, cx, cz, worker_chunk_params)


def load_terrain_config(config_path: str) -> dict:
    """Reads the flat terrain parameter dictionary from a JSON config file."""
    with open(config_path, 'r') as f:
        config = json.load(f)
    return config.get(DEFAULTS.CONFIG_SECTION_KEY, {})


def region_coords(min_chunk: tuple, max_chunk: tuple) -> list:
    """Every chunk coordinate in the inclusive range, z outer."""
    return [
        (cx, cz)
        for cz in range(min_chunk[1], max_chunk[1] + 1)
        for cx in range(min_chunk[0], max_chunk[0] + 1)
    ]


def build_region(store: ChunkStore, min_chunk: tuple, max_chunk: tuple,
                 workers: int = 1, show_progress: bool = False) -> dict:
    """
    Generates every chunk in [min_chunk, max_chunk] into the store.

    With workers > 1 the chunks are built in a process pool and adopted into
    the store as they arrive. Chunks that are already generated are left as
    they are either way.

    Returns:
        dict: Totals for the region (chunks, vertices, indices, height range).
    """
    tasks = region_coords(min_chunk, max_chunk)

    if workers <= 1:
        for cx, cz in tqdm(tasks, desc="Building Chunks", disable=not show_progress):
            store.generate_chunk_mesh(cx, cz)
    else:
        init_args = (store.params.to_config(),)
        with multiprocessing.Pool(processes=workers, initializer=init_worker, initargs=init_args) as pool:
            results_iterator = pool.imap_unordered(process_chunk, tasks)
            for mesh in tqdm(results_iterator, total=len(tasks), desc="Building Chunks", disable=not show_progress):
                store.insert_generated(mesh)

    meshes = [store.get_chunk(cx, cz) for cx, cz in tasks]
    heights = np.concatenate([mesh.positions()[:, 1] for mesh in meshes])
    return {
        'chunks': len(meshes),
        'vertices': sum(mesh.vertex_count for mesh in meshes),
        'indices': sum(len(mesh.indices) for mesh in meshes),
        'min_height': float(heights.min()),
        'max_height': float(heights.max()),
    }


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Build every terrain chunk mesh in a chunk range.")
    parser.add_argument("--config", type=str, default=None,
                        help="Path to a JSON config file with a 'terrain_parameters' section.")
    parser.add_argument("--min", type=int, nargs=2, default=[-1, -1], metavar=("CX", "CZ"),
                        help="Lowest chunk coordinate of the region (inclusive).")
    parser.add_argument("--max", type=int, nargs=2, default=[1, 1], metavar=("CX", "CZ"),
                        help="Highest chunk coordinate of the region (inclusive).")
    parser.add_argument("--workers", type=int, default=max(1, multiprocessing.cpu_count() - 1),
                        help="Worker processes to build with. 1 builds in-process.")
    parser.add_argument("--seed", type=int, default=None, help="Override the configured seed.")
    parser.add_argument("--preview", type=str, default=None,
                        help="Write a grayscale PNG of the region's heights to this path.")
    args = parser.parse_args(argv)

    # 1. --- Setup Logging ---
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        stream=sys.stdout
    )
    logger = logging.getLogger("ChunkBuilder")

    # 2. --- Load Configuration ---
    terrain_config = {}
    if args.config:
        logger.info(f"Loading configuration from: {args.config}")
        try:
            terrain_config = load_terrain_config(args.config)
        except (FileNotFoundError, json.JSONDecodeError) as e:
            logger.critical(f"Failed to load or parse config file: {e}")
            return 1
    if args.seed is not None:
        terrain_config['seed'] = args.seed

    try:
        params = TerrainParams.from_config(terrain_config)
    except ValueError as e:
        logger.critical(f"Invalid terrain parameters: {e}")
        return 1

    min_chunk, max_chunk = tuple(args.min), tuple(args.max)
    if min_chunk[0] > max_chunk[0] or min_chunk[1] > max_chunk[1]:
        logger.critical(f"--min {min_chunk} must not exceed --max {max_chunk} on either axis.")
        return 1

    # 3. --- Build ---
    store = ChunkStore(params, logger=logger)
    total_chunks = len(region_coords(min_chunk, max_chunk))
    logger.info(f"Building {total_chunks} chunks from {min_chunk} to {max_chunk} with {args.workers} worker(s)...")

    start_time = time.perf_counter()
    stats = build_region(store, min_chunk, max_chunk, workers=args.workers, show_progress=True)
    end_time = time.perf_counter()

    # 4. --- Report ---
    logger.info(f"Build complete! Total time: {end_time - start_time:.2f} seconds.")
    logger.info(
        f"  - {stats['chunks']} chunks, {stats['vertices']} vertices, {stats['indices']} indices"
    )
    logger.info(f"  - Height range: {stats['min_height']:.3f} to {stats['max_height']:.3f}")

    if args.preview:
        heights = preview.sample_region_heights(store.height_field, min_chunk, max_chunk, store.chunk_size)
        preview.save_height_preview(heights, args.preview)
        logger.info(f"Height preview saved to: {args.preview}")

    return 0


# --- Command-Line Interface ---
if __name__ == "__main__":
    sys.exit(main())
