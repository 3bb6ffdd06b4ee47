"""Tests for the seam probe script."""
from __future__ import annotations

import json
import logging

import pytest

import seam_probe
from terrain_chunks.chunk_store import ChunkStore

LOGGER = logging.getLogger("test.seam_probe")


def test_shared_edge_along_x(small_params) -> None:
    store = ChunkStore(small_params)
    edge_a, edge_b = seam_probe.shared_edge(store, (0, 0), (1, 0))
    assert edge_a.shape == (5, 6)
    assert (edge_a[:, 0] == 8.0).all()
    assert edge_a.tobytes() == edge_b.tobytes()


def test_shared_edge_along_z(small_params) -> None:
    store = ChunkStore(small_params)
    edge_a, edge_b = seam_probe.shared_edge(store, (-2, -1), (-2, 0))
    assert (edge_a[:, 2] == 0.0).all()
    assert edge_a.tobytes() == edge_b.tobytes()


@pytest.mark.parametrize("second", [(1, 1), (-1, 0), (2, 0), (0, 0)])
def test_shared_edge_rejects_non_neighbours(small_params, second) -> None:
    with pytest.raises(ValueError):
        seam_probe.shared_edge(ChunkStore(small_params), (0, 0), second)


def test_probe_chunk_pair_passes(small_params) -> None:
    store = ChunkStore(small_params)
    assert seam_probe.probe_chunk_pair(store, (3, 3), (3, 4), LOGGER)


def test_run_probe_checks_every_inner_seam(small_params, caplog) -> None:
    store = ChunkStore(small_params)
    with caplog.at_level(logging.INFO, logger="test.seam_probe"):
        assert seam_probe.run_probe(store, (0, 0), 1, LOGGER)
    # A 3x3 block has 6 seams along x and 6 along z.
    edges = [record for record in caplog.records if "Edge" in record.message]
    assert len(edges) == 12
    assert len(store) == 9


def test_main_passes_with_config(tmp_path) -> None:
    path = tmp_path / "terrain_config.json"
    path.write_text(json.dumps({'terrain_parameters': {'chunk_size': 8.0, 'chunk_resolution': 6}}))
    assert seam_probe.main(["--config", str(path), "--center", "-1", "2", "--radius", "1"]) == 0


def test_main_fails_on_unreadable_config(tmp_path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    assert seam_probe.main(["--config", str(path)]) == 1


def test_main_fails_on_invalid_parameters(tmp_path) -> None:
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({'terrain_parameters': {'chunk_resolution': 1}}))
    assert seam_probe.main(["--config", str(path)]) == 1
