"""Ear-clipping triangulation of a simple (hole-free) polygon.

Convex polygons are fanned from point 0.  Anything else goes through the
general ear search over a ring of live vertices.  A candidate ear
``(a, b, c)`` of consecutive live vertices is accepted when

* it turns the same way as the polygon with an area above
  ``area_epsilon`` (so it is not collinear),
* no other live vertex lies inside the triangle or on its sides, and no
  live edge properly crosses the chord ``a → c``,
* the chord stays inside the polygon at both of its ends.

Keyhole seams duplicate vertices, so a live vertex may share its
coordinates with a corner of the ear.  Such a copy only blocks the ear
when one of its own edges leads into the triangle's corner.
"""

from __future__ import annotations

import logging
from typing import Iterator, List, Sequence, Tuple

from .config import DEFAULT_CONFIG, TriangulationConfig
from .errors import ClipOverrunError, DegenerateLoopError
from .geometry import (
    convexity,
    inside_corner,
    is_clockwise,
    orientation,
    point_on_triangle,
    segments_intersect,
    triangle_area,
)
from .models import Point, TriangulatedPolygon

logger = logging.getLogger(__name__)

Triangle = Tuple[int, int, int]


def fan_triangles(count: int) -> List[Triangle]:
    """Fan from vertex 0 over a convex polygon of *count* points."""
    return [(0, t + 1, t + 2) for t in range(count - 2)]


def _enters_corner(corner: Point, side1: Point, side2: Point, p: Point) -> bool:
    # strictly between the rays corner→side1 and corner→side2
    return (
        orientation(corner, side1, p) * orientation(corner, side1, side2) > 0
        and orientation(corner, side2, p) * orientation(corner, side2, side1) > 0
    )


def _chord_starts_inside(
    previous: Point, apex: Point, following: Point, target: Point, winding: float,
) -> bool:
    """True unless apex→target leaves the polygon at *apex*.

    Running along one of the apex's own edges counts as inside, which
    happens where a chord lies on a keyhole seam.
    """
    if inside_corner(previous, apex, following, target, winding):
        return True
    for neighbour in (previous, following):
        if orientation(apex, neighbour, target) == 0 and (
            (neighbour[0] - apex[0]) * (target[0] - apex[0])
            + (neighbour[1] - apex[1]) * (target[1] - apex[1])
        ) > 0:
            return True
    return False


class _Ring:
    """Live vertices of the polygon as a doubly linked ring."""

    def __init__(self, count: int) -> None:
        self.next = [(k + 1) % count for k in range(count)]
        self.prev = [(k - 1) % count for k in range(count)]
        self.size = count

    def remove(self, k: int) -> None:
        p, n = self.prev[k], self.next[k]
        self.next[p] = n
        self.prev[n] = p
        self.size -= 1

    def walk(self, start: int) -> Iterator[int]:
        k = start
        for _ in range(self.size):
            yield k
            k = self.next[k]


def _is_ear(
    points: Sequence[Point],
    ring: _Ring,
    i1: int,
    winding: float,
    config: TriangulationConfig,
) -> bool:
    i2 = ring.next[i1]
    i3 = ring.next[i2]
    a, b, c = points[i1], points[i2], points[i3]

    if triangle_area(a, b, c) * winding <= config.area_epsilon:
        return False

    for k in ring.walk(ring.next[i3]):
        if k == i1:
            break
        p = points[k]
        if p in (a, b, c):
            side1, side2 = [corner for corner in (a, b, c) if corner != p]
            for neighbour in (points[ring.prev[k]], points[ring.next[k]]):
                if _enters_corner(p, side1, side2, neighbour):
                    return False
        elif point_on_triangle(p, a, b, c):
            return False

    for k in ring.walk(i3):
        q = ring.next[k]
        if k in (i1, i2, i3) or q == i1:
            continue
        p1, p2 = points[k], points[q]
        if p1 in (a, c) or p2 in (a, c):
            continue
        if segments_intersect(a, c, p1, p2):
            return False

    return (
        _chord_starts_inside(points[ring.prev[i1]], a, b, c, winding)
        and _chord_starts_inside(b, c, points[ring.next[i3]], a, winding)
    )


def ear_clip(
    polygon: Sequence[Point],
    config: TriangulationConfig = DEFAULT_CONFIG,
) -> TriangulatedPolygon:
    """Triangulate a simple polygon into ``len(polygon) - 2`` triangles.

    Triangles come out clockwise.  When ``config.max_clip_steps`` candidates
    in a row fail, or a full lap of the ring finds no ear, the partial
    result is returned with ``complete=False`` (or
    :class:`ClipOverrunError` is raised when ``config.strict`` is set).
    """
    points = list(polygon)
    n = len(points)
    if n < 3:
        raise DegenerateLoopError(f"cannot triangulate {n} points")

    conv = convexity(points)
    if conv != 0:
        if conv == -1:
            points.reverse()
        return TriangulatedPolygon(points, fan_triangles(n))

    winding = -1.0 if is_clockwise(points) else 1.0
    ring = _Ring(n)
    triangles: List[Triangle] = []
    complete = True

    cursor = 0
    misses = 0
    while len(triangles) < n - 2:
        if misses > config.max_clip_steps or misses > ring.size:
            message = (
                f"ear clipping gave up after {misses} misses "
                f"with {len(triangles)}/{n - 2} triangles"
            )
            if config.strict:
                raise ClipOverrunError(message)
            logger.warning(message)
            complete = False
            break

        if _is_ear(points, ring, cursor, winding, config):
            tip = ring.next[cursor]
            triangles.append((cursor, tip, ring.next[tip]))
            ring.remove(tip)
            misses = 0
        else:
            cursor = ring.next[cursor]
            misses += 1

    if winding > 0:
        triangles = [(c, b, a) for a, b, c in reversed(triangles)]

    return TriangulatedPolygon(points, triangles, complete=complete)
