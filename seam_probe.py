# seam_probe.py

"""
================================================================================
SEAM PROBE
================================================================================
Verifies that independently generated neighbouring chunks meet without
cracks: the vertices on a shared edge must be bit-identical, and every edge
vertex height must agree with a direct height query at the same position.

Usage:
    python seam_probe.py --config terrain_config.json --center 0 0
================================================================================
"""
import os
import sys
import json
import logging
import argparse

import numpy as np

sys.path.append(os.path.abspath(os.path.dirname(__file__)))

from terrain_chunks.chunk_store import ChunkStore, chunks_in_radius
from terrain_chunks.params import TerrainParams
from terrain_chunks import config as DEFAULTS

# float32 vertex heights against float64 direct queries.
HEIGHT_TOLERANCE = 1e-4


def shared_edge(store: ChunkStore, first: tuple, second: tuple) -> tuple:
    """
    Vertex rows of two chunks that lie on their common edge.
    `second` must be the +x or +z neighbour of `first`.
    """
    resolution = store.chunk_resolution
    grid_a = store.generate_chunk_mesh(*first).vertices.reshape(resolution, resolution, DEFAULTS.VERTEX_STRIDE)
    grid_b = store.generate_chunk_mesh(*second).vertices.reshape(resolution, resolution, DEFAULTS.VERTEX_STRIDE)

    dx, dz = second[0] - first[0], second[1] - first[1]
    if (dx, dz) == (1, 0):
        return grid_a[:, -1, :], grid_b[:, 0, :]
    if (dx, dz) == (0, 1):
        return grid_a[-1, :, :], grid_b[0, :, :]
    raise ValueError(f"Chunk {second} is not the +x or +z neighbour of {first}.")


def probe_chunk_pair(store: ChunkStore, first: tuple, second: tuple, logger: logging.Logger) -> bool:
    """Checks one shared edge. Returns True when the seam is clean."""
    edge_a, edge_b = shared_edge(store, first, second)

    identical = edge_a.tobytes() == edge_b.tobytes()

    direct = np.array([store.get_height_at_world_pos(x, z) for x, z in edge_a[:, [0, 2]]])
    max_error = float(np.max(np.abs(direct - edge_a[:, 1])))
    heights_match = max_error <= HEIGHT_TOLERANCE

    passed = identical and heights_match
    result = "PASS" if passed else "FAIL"
    logger.info(
        f"  - Edge {first} | {second}: bit-identical={identical}, "
        f"max height error={max_error:.2e} -> {result}"
    )
    return passed


def run_probe(store: ChunkStore, center: tuple, radius: int, logger: logging.Logger) -> bool:
    """Probes every +x and +z seam inside the square around `center`."""
    coords = set(chunks_in_radius(center, radius))
    all_passed = True
    for cx, cz in sorted(coords):
        for neighbour in ((cx + 1, cz), (cx, cz + 1)):
            if neighbour in coords:
                if not probe_chunk_pair(store, (cx, cz), neighbour, logger):
                    all_passed = False
    return all_passed


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Check that neighbouring terrain chunks meet seamlessly.")
    parser.add_argument("--config", type=str, default=None,
                        help="Path to a JSON config file with a 'terrain_parameters' section.")
    parser.add_argument("--center", type=int, nargs=2, default=[0, 0], metavar=("CX", "CZ"))
    parser.add_argument("--radius", type=int, default=1, help="Chunks probed on each side of the center.")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s', stream=sys.stdout)
    logger = logging.getLogger("SeamProbe")

    terrain_config = {}
    if args.config:
        try:
            with open(args.config, 'r') as f:
                terrain_config = json.load(f).get(DEFAULTS.CONFIG_SECTION_KEY, {})
        except (FileNotFoundError, json.JSONDecodeError) as e:
            logger.critical(f"Failed to load or parse config file: {e}")
            return 1

    try:
        params = TerrainParams.from_config(terrain_config)
    except ValueError as e:
        logger.critical(f"Invalid terrain parameters: {e}")
        return 1

    store = ChunkStore(params, logger=logger)
    logger.info(f"--- Probing seams around chunk {tuple(args.center)} (radius {args.radius}) ---")
    if run_probe(store, tuple(args.center), args.radius, logger):
        logger.info("SUCCESS: All probed chunk edges are seamless.")
        return 0
    logger.error("FAILURE: Mismatch detected on one or more chunk edges.")
    return 1


if __name__ == '__main__':
    sys.exit(main())
