from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

Point = Tuple[float, float]
Loop = List[Point]


@dataclass(frozen=True)
class Vertex:
    id: int
    x: float
    y: float

    @property
    def point(self) -> Point:
        return (float(self.x), float(self.y))


@dataclass(frozen=True)
class Linedef:
    """A map line between two vertices with the sector on each side.

    *back_sector* is ``None`` for one-sided lines.
    """

    id: int
    start: int
    end: int
    front_sector: int
    back_sector: Optional[int] = None

    def is_internal(self) -> bool:
        """True when both sides face the same sector."""
        return self.back_sector is not None and self.front_sector == self.back_sector

    def borders(self, sector: int) -> bool:
        return self.front_sector == sector or self.back_sector == sector


@dataclass(frozen=True)
class BoundaryEdge:
    """One boundary segment of a sector, in map coordinates.

    Endpoints are matched by coordinate equality while tracing, so two
    edges sharing a vertex must carry identical coordinates for it.
    """

    start: Point
    end: Point
    linedef_id: Optional[int] = None

    def is_degenerate(self) -> bool:
        return self.start == self.end


@dataclass(frozen=True)
class Thing:
    id: int
    x: float
    y: float
    type: int = 0

    @property
    def point(self) -> Point:
        return (float(self.x), float(self.y))


@dataclass
class Island:
    """A shell loop plus the sibling hole loops it encloses."""

    shell: Loop
    holes: List[Loop] = field(default_factory=list)

    @property
    def hole_count(self) -> int:
        return len(self.holes)


@dataclass
class TriangulatedPolygon:
    """A simple polygon and its triangles.

    Triangle indices refer to positions in *points*, not to map vertex
    ids.  *complete* is ``False`` when ear clipping stopped early and the
    triangle list only covers part of the polygon.
    """

    points: List[Point]
    triangles: List[Tuple[int, int, int]] = field(default_factory=list)
    complete: bool = True

    @property
    def triangle_count(self) -> int:
        return len(self.triangles)

    def flat_indices(self) -> List[int]:
        return [i for tri in self.triangles for i in tri]

    def offset_triangles(self, offset: int) -> List[int]:
        """Flat index list shifted by *offset*, for concatenating buffers."""
        return [i + offset for i in self.flat_indices()]

    def points_3d(self, height: float) -> List[Tuple[float, float, float]]:
        """Lift points to 3D as ``(x, height, y)``."""
        return [(x, height, y) for x, y in self.points]

    def triangle_points(self) -> List[Tuple[Point, Point, Point]]:
        return [
            (self.points[a], self.points[b], self.points[c])
            for a, b, c in self.triangles
        ]

    def contains(self, point: Point) -> bool:
        from .geometry import point_in_polygon

        return point_in_polygon(point, self.points)

    def to_dict(self) -> dict:
        return {
            "points": [[x, y] for x, y in self.points],
            "triangles": [list(tri) for tri in self.triangles],
            "complete": self.complete,
        }

    @classmethod
    def from_dict(cls, payload: dict) -> "TriangulatedPolygon":
        return cls(
            points=[(float(x), float(y)) for x, y in payload.get("points", [])],
            triangles=[tuple(tri) for tri in payload.get("triangles", [])],
            complete=payload.get("complete", True),
        )
