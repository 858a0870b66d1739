import pytest

from sectortri.models import BoundaryEdge, Linedef, Thing, Vertex
from sectortri.sectormap import SectorMap


def _ring(points):
    n = len(points)
    return [BoundaryEdge(points[i], points[(i + 1) % n]) for i in range(n)]


@pytest.fixture
def square_edges():
    return _ring([(0.0, 0.0), (0.0, 10.0), (10.0, 10.0), (10.0, 0.0)])


@pytest.fixture
def donut_edges():
    """10x10 square room with a 4x4 square hole, hole wound the other way."""
    return (
        _ring([(0.0, 0.0), (0.0, 10.0), (10.0, 10.0), (10.0, 0.0)])
        + _ring([(3.0, 3.0), (7.0, 3.0), (7.0, 7.0), (3.0, 7.0)])
    )


@pytest.fixture
def room_map():
    """Sector 0 is a room around pillar sector 1; sector 2 is left open."""
    vertices = [
        Vertex(0, 0, 0), Vertex(1, 0, 80), Vertex(2, 80, 80), Vertex(3, 80, 0),
        Vertex(4, 24, 24), Vertex(5, 24, 56), Vertex(6, 56, 56), Vertex(7, 56, 24),
        Vertex(8, 200, 0), Vertex(9, 200, 10), Vertex(10, 210, 10),
    ]
    linedefs = [
        Linedef(0, 0, 1, 0),
        Linedef(1, 1, 2, 0),
        Linedef(2, 2, 3, 0),
        Linedef(3, 3, 0, 0),
        Linedef(4, 4, 5, 0, 1),
        Linedef(5, 5, 6, 0, 1),
        Linedef(6, 6, 7, 0, 1),
        Linedef(7, 7, 4, 0, 1),
        Linedef(8, 8, 9, 2),
        Linedef(9, 9, 10, 2),
    ]
    things = [
        Thing(1, 8, 8, type=1),
        Thing(2, 40, 40, type=2),
        Thing(3, 800, 800),
    ]
    return SectorMap(vertices, linedefs, things, metadata={"name": "room"})
