import logging
import random

import pytest

from sectortri.config import TriangulationConfig
from sectortri.diagnostics import polygon_area, triangulation_area, validate_triangulation
from sectortri.errors import BridgeOverrunError, UnclosedSectorError
from sectortri.models import BoundaryEdge
from sectortri.triangulate import STAGES, StageTimings, point_in_region, triangulate_sector


def _ring(points):
    n = len(points)
    return [BoundaryEdge(points[i], points[(i + 1) % n]) for i in range(n)]


TWO_PILLARS = (
    _ring([(0.0, 0.0), (0.0, 10.0), (30.0, 10.0), (30.0, 0.0)])
    + _ring([(3.0, 3.0), (3.0, 7.0), (7.0, 7.0), (7.0, 3.0)])
    + _ring([(13.0, 3.0), (13.0, 7.0), (17.0, 7.0), (17.0, 3.0)])
)


# ═══════════════════════════════════════════════════════════════════
# Reference scenarios
# ═══════════════════════════════════════════════════════════════════

class TestScenarios:
    def test_square(self, square_edges):
        polys = triangulate_sector(square_edges)
        assert len(polys) == 1
        assert polys[0].triangle_count == 2
        assert validate_triangulation(polys[0]) == []

    def test_square_with_hole(self, donut_edges):
        polys = triangulate_sector(donut_edges)
        assert len(polys) == 1
        assert polys[0].triangle_count == 8
        assert triangulation_area(polys[0]) == pytest.approx(84.0)
        assert validate_triangulation(polys[0]) == []

    def test_two_disjoint_squares(self, square_edges):
        far = _ring([(20.0, 0.0), (20.0, 10.0), (30.0, 10.0), (30.0, 0.0)])
        polys = triangulate_sector(square_edges + far)
        assert [p.triangle_count for p in polys] == [2, 2]

    def test_open_boundary(self, square_edges):
        with pytest.raises(UnclosedSectorError):
            triangulate_sector(square_edges[:3])

    def test_loop_outside_shell_becomes_island(self, square_edges):
        outside = _ring([(40.0, 40.0), (40.0, 44.0), (44.0, 44.0), (44.0, 40.0)])
        polys = triangulate_sector(square_edges + outside)
        assert len(polys) == 2

    def test_no_edges(self):
        assert triangulate_sector([]) == []

    def test_collinear_midpoints_are_dropped(self):
        edges = _ring([(0.0, 0.0), (0.0, 5.0), (0.0, 10.0), (10.0, 10.0), (10.0, 0.0)])
        polys = triangulate_sector(edges)
        assert len(polys[0].points) == 4

    def test_two_holes(self):
        polys = triangulate_sector(TWO_PILLARS)
        assert len(polys) == 1
        assert len(polys[0].points) == 16
        assert polygon_area(polys[0]) == pytest.approx(300.0 - 32.0)
        assert polys[0].triangle_count == 14
        assert polys[0].complete
        assert triangulation_area(polys[0]) == pytest.approx(300.0 - 32.0)
        assert validate_triangulation(polys[0]) == []


# ═══════════════════════════════════════════════════════════════════
# Rooms with pillars
# ═══════════════════════════════════════════════════════════════════

PILLAR_ROOM = [(0.0, 0.0), (0.0, 64.0), (64.0, 64.0), (64.0, 0.0)]


def _pillar(x0, y0, size):
    x1, y1 = x0 + size, y0 + size
    return [(x0, y0), (x0, y1), (x1, y1), (x1, y0)]


def _room_with(*pillars):
    edges = _ring(PILLAR_ROOM)
    for pillar in pillars:
        edges += _ring(pillar)
    return edges


def _assert_full(poly, area):
    assert poly.complete
    assert poly.triangle_count == len(poly.points) - 2
    assert triangulation_area(poly) == pytest.approx(area)
    assert validate_triangulation(poly) == []


class TestPillarRooms:
    def test_stacked_pillars(self):
        polys = triangulate_sector(_room_with(_pillar(9.0, 9.0, 6.0), _pillar(9.0, 17.0, 6.0)))
        assert len(polys) == 1
        assert len(polys[0].points) == 16
        _assert_full(polys[0], 64.0 * 64.0 - 72.0)

    def test_diagonal_pillars_share_a_bridge_corner(self):
        # both bridges end at (64, 0), so that corner appears three times
        polys = triangulate_sector(_room_with(_pillar(9.0, 9.0, 6.0), _pillar(17.0, 17.0, 6.0)))
        assert polys[0].points.count((64.0, 0.0)) == 3
        _assert_full(polys[0], 64.0 * 64.0 - 72.0)

    @pytest.mark.parametrize("x0", [3.0, 12.0, 20.0, 36.0, 50.0])
    @pytest.mark.parametrize("y0", [2.0, 20.0, 30.0, 44.0])
    def test_second_pillar_anywhere(self, x0, y0):
        polys = triangulate_sector(_room_with(_pillar(9.0, 9.0, 6.0), _pillar(x0, y0, 4.0)))
        assert len(polys) == 1
        _assert_full(polys[0], 64.0 * 64.0 - 36.0 - 16.0)


# ═══════════════════════════════════════════════════════════════════
# Determinism
# ═══════════════════════════════════════════════════════════════════

class TestDeterminism:
    def test_edge_order_does_not_matter(self, donut_edges):
        baseline = triangulate_sector(donut_edges)
        shuffled = list(donut_edges)
        random.Random(7).shuffle(shuffled)
        result = triangulate_sector(shuffled)
        assert [p.points for p in result] == [p.points for p in baseline]
        assert [p.triangles for p in result] == [p.triangles for p in baseline]

    def test_edge_direction_does_not_matter(self, donut_edges):
        baseline = triangulate_sector(donut_edges)
        flipped = [BoundaryEdge(e.end, e.start) for e in reversed(donut_edges)]
        result = triangulate_sector(flipped)
        assert [p.points for p in result] == [p.points for p in baseline]
        assert [p.triangles for p in result] == [p.triangles for p in baseline]

    def test_repeat_calls_identical(self, donut_edges):
        first = triangulate_sector(donut_edges)
        second = triangulate_sector(donut_edges)
        assert [p.to_dict() for p in first] == [p.to_dict() for p in second]

    @pytest.mark.parametrize("edges", [
        TWO_PILLARS,
        _ring([(0.0, 0.0), (0.0, 10.0), (10.0, 10.0), (10.0, 0.0)])
        + _ring([(10.0, 10.0), (10.0, 20.0), (20.0, 20.0), (20.0, 10.0)]),
        _ring([(0.0, 0.0), (-10.0, 5.0), (-10.0, -5.0)])
        + _ring([(0.0, 0.0), (10.0, -5.0), (10.0, 5.0)]),
    ], ids=["two-pillars", "touching-squares", "bowtie"])
    def test_any_permutation_gives_same_triangles(self, edges):
        baseline = [p.to_dict() for p in triangulate_sector(edges)]
        for poly in triangulate_sector(edges):
            assert validate_triangulation(poly) == []
        for seed in range(25):
            rng = random.Random(seed)
            permuted = [BoundaryEdge(e.end, e.start) if rng.random() < 0.5 else e for e in edges]
            rng.shuffle(permuted)
            assert [p.to_dict() for p in triangulate_sector(permuted)] == baseline

    def test_touching_squares_are_two_polygons(self):
        edges = (
            _ring([(0.0, 0.0), (0.0, 10.0), (10.0, 10.0), (10.0, 0.0)])
            + _ring([(10.0, 10.0), (10.0, 20.0), (20.0, 20.0), (20.0, 10.0)])
        )
        polys = triangulate_sector(list(reversed(edges)))
        assert [p.triangle_count for p in polys] == [2, 2]


# ═══════════════════════════════════════════════════════════════════
# Failure handling
# ═══════════════════════════════════════════════════════════════════

class TestIslandFailures:
    def test_bridge_overrun_drops_island(self, caplog):
        config = TriangulationConfig(max_bridges=1)
        with caplog.at_level(logging.WARNING, logger="sectortri.triangulate"):
            assert triangulate_sector(TWO_PILLARS, config) == []
        assert "dropping island" in caplog.text

    def test_bridge_overrun_strict(self):
        config = TriangulationConfig(max_bridges=1, strict=True)
        with pytest.raises(BridgeOverrunError):
            triangulate_sector(TWO_PILLARS, config)


# ═══════════════════════════════════════════════════════════════════
# Timings and helpers
# ═══════════════════════════════════════════════════════════════════

class TestStageTimings:
    def test_records_every_stage(self, square_edges):
        timings = StageTimings()
        triangulate_sector(square_edges, timings=timings)
        triangulate_sector(square_edges, timings=timings)
        assert timings.calls == 2
        assert set(timings.as_dict()) == set(STAGES)
        assert timings.total >= 0.0
        assert repr(timings).startswith("StageTimings(")

    def test_log_report(self, caplog):
        timings = StageTimings()
        with caplog.at_level(logging.INFO, logger="sectortri.triangulate"):
            timings.log_report()
        assert "trace" in caplog.text


@pytest.mark.parametrize("field", ["max_loops", "max_clip_steps", "area_epsilon"])
def test_invalid_config_rejected(square_edges, field):
    with pytest.raises(ValueError, match=field):
        triangulate_sector(square_edges, TriangulationConfig(**{field: 0}))


def test_point_in_region(donut_edges):
    polygon = triangulate_sector(donut_edges)[0]
    assert point_in_region((1.0, 5.0), polygon)
    assert not point_in_region((5.0, 5.0), polygon)
    assert not point_in_region((20.0, 5.0), polygon)
