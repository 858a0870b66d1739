import logging

import pytest

from sectortri.batch import MapTriangulation, triangulate_map
from sectortri.config import TriangulationConfig
from sectortri.errors import UnclosedSectorError
from sectortri.triangulate import StageTimings


def test_map_triangulation(room_map):
    result = triangulate_map(room_map)
    assert sorted(result.polygons) == [0, 1]
    assert result.polygons[0][0].triangle_count == 8
    assert result.polygons[1][0].triangle_count == 2
    assert result.triangle_count == 10
    assert result.incomplete_sectors() == []


def test_failed_sector_is_isolated(room_map, caplog):
    with caplog.at_level(logging.WARNING, logger="sectortri.batch"):
        result = triangulate_map(room_map)
    assert result.failed_sector_count == 1
    error = result.failures[2]
    assert isinstance(error, UnclosedSectorError)
    assert error.sector == 2
    assert str(error).startswith("sector 2: ")
    assert "sector 2" in caplog.text


def test_sector_subset(room_map):
    result = triangulate_map(room_map, sectors=[1])
    assert list(result.polygons) == [1]
    assert result.failures == {}


def test_thread_pool_matches_sequential(room_map):
    sequential = triangulate_map(room_map)
    pooled = triangulate_map(room_map, max_workers=2)
    assert pooled.to_dict() == sequential.to_dict()


def test_shared_timings(room_map):
    timings = StageTimings()
    triangulate_map(room_map, timings=timings, max_workers=2)
    assert timings.calls == 3


def test_incomplete_sector_reported(room_map):
    result = triangulate_map(room_map, config=TriangulationConfig(max_clip_steps=1))
    assert result.incomplete_sectors() == [0]
    assert 0 in result.polygons


def test_iter_polygons_sorted(room_map):
    result = triangulate_map(room_map)
    assert [sector for sector, _ in result.iter_polygons()] == [0, 1]


def test_dict_round_trip(room_map):
    result = triangulate_map(room_map)
    restored = MapTriangulation.from_dict(result.to_dict())
    assert restored.to_dict() == result.to_dict()
    assert str(restored.failures[2]) == str(result.failures[2])


def test_invalid_config_rejected_before_any_sector(room_map):
    with pytest.raises(ValueError, match="max_bridges"):
        triangulate_map(room_map, TriangulationConfig(max_bridges=0))
