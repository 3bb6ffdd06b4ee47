# terrain_chunks/config.py

"""
================================================================================
INTERNAL DEFAULT CONFIGURATION
================================================================================
This module contains the default, fallback internal constants for the chunked
terrain generator. These values are used if they are not explicitly provided
by the user's configuration.

DO NOT MODIFY THIS FILE FOR A SPECIFIC TERRAIN.
Instead, pass a configuration dictionary to TerrainParams.from_config().
================================================================================
"""

# --- Noise Generation ---
DEFAULT_SEED = 12345
# Seeds are reduced to this range before seeding the shuffle, so negative
# seeds behave like an unsigned 32-bit seed.
SEED_MASK = 0xFFFFFFFF

# Number of distinct entries in the permutation table. The stored table is
# twice this long so corner hashing never has to wrap.
PERMUTATION_SIZE = 256
PERMUTATION_MASK = PERMUTATION_SIZE - 1

# --- Fractal Height Field ---
DEFAULT_AMPLITUDE = 2.0     # Height variation in world units
DEFAULT_FREQUENCY = 0.1     # Lower = smoother, larger features
DEFAULT_OCTAVES = 4
DEFAULT_PERSISTENCE = 0.5   # Amplitude decay per octave
DEFAULT_LACUNARITY = 2.0    # Frequency growth per octave
DEFAULT_BASE_HEIGHT = -10.0 # Negative = terrain sits below entities
MIN_OCTAVES = 1

# --- Chunking ---
DEFAULT_CHUNK_SIZE = 16.0       # World units per chunk side
DEFAULT_CHUNK_RESOLUTION = 32   # Vertices per chunk side
MIN_CHUNK_RESOLUTION = 2
# None means the normal finite-difference step equals the vertex spacing.
DEFAULT_NORMAL_STEP = None

# --- Mesh Layout ---
# Interleaved [x, y, z, nx, ny, nz] per vertex.
VERTEX_STRIDE = 6
# Two triangles of three indices per grid cell.
INDICES_PER_CELL = 6

# Cross products shorter than this are treated as degenerate and the normal
# falls back to straight up.
NORMAL_DEGENERATE_EPSILON = 1e-12

# --- Tools ---
# Pixels per chunk side in the grayscale preview written by build_chunks.py.
PREVIEW_PIXELS_PER_CHUNK = 32
# Config-file key holding the flat terrain parameter dictionary.
CONFIG_SECTION_KEY = 'terrain_parameters'
