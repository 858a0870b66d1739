"""Geometry primitives shared by every triangulation stage.

All functions take ``(x, y)`` tuples and work in floating point.  The
winding convention used across the package: a loop is *clockwise* when
``sum(x_i * y_{i+1} - x_{i+1} * y_i) <= 0``.
"""

from __future__ import annotations

import math
from typing import List, Sequence, Tuple

from .models import Point


def ccw(a: Point, b: Point, c: Point) -> bool:
    """True if *c* lies strictly counter-clockwise of the directed line a→b."""
    return (c[1] - a[1]) * (b[0] - a[0]) > (b[1] - a[1]) * (c[0] - a[0])


def orientation(a: Point, b: Point, c: Point) -> float:
    """Signed cross product of a→b and a→c (positive = counter-clockwise)."""
    return (b[0] - a[0]) * (c[1] - a[1]) - (b[1] - a[1]) * (c[0] - a[0])


def segments_intersect(a: Point, b: Point, c: Point, d: Point) -> bool:
    """True if segment *ab* properly crosses segment *cd*."""
    return ccw(a, c, d) != ccw(b, c, d) and ccw(a, b, c) != ccw(a, b, d)


def segments_touch_or_cross(
    a: Point, b: Point, c: Point, d: Point, epsilon: float = 0.05,
) -> bool:
    """Like :func:`segments_intersect`, but an endpoint of *cd* resting on
    *ab* also counts as an intersection.

    Used when testing a chord against a polygon's own edges, where a
    collinear touch would otherwise slip through.
    """
    if collinear(a, c, b, epsilon) or collinear(a, d, b, epsilon):
        return True
    return segments_intersect(a, b, c, d)


def find_intersection(p1: Point, p2: Point, p3: Point, p4: Point) -> Point:
    """Intersection of the infinite lines p1p2 and p3p4.

    Callers must check the segments intersect first; parallel lines raise
    ``ZeroDivisionError``.
    """
    dx12 = p2[0] - p1[0]
    dy12 = p2[1] - p1[1]
    dx34 = p4[0] - p3[0]
    dy34 = p4[1] - p3[1]
    denominator = dy12 * dx34 - dx12 * dy34
    t1 = ((p1[0] - p3[0]) * dy34 + (p3[1] - p1[1]) * dx34) / denominator
    return (p1[0] + dx12 * t1, p1[1] + dy12 * t1)


def line_angle(a: Point, b: Point) -> float:
    """Direction angle of a→b in radians."""
    return math.atan2(b[1] - a[1], b[0] - a[0])


def angle_difference(alpha: float, beta: float) -> float:
    """Absolute difference of two angles, wrapped into ``[0, pi]``."""
    diff = (alpha - beta) % (2.0 * math.pi)
    if diff > math.pi:
        diff = 2.0 * math.pi - diff
    return diff


def collinear(a: Point, b: Point, c: Point, epsilon: float = 0.05) -> bool:
    """True if *b* sits on a straight run from *a* to *c*.

    Compares the direction of a→b with b→c, so a spike (a→b→a) is not
    collinear.
    """
    return angle_difference(line_angle(a, b), line_angle(b, c)) < epsilon


def signed_area(loop: Sequence[Point]) -> float:
    """Shoelace area: positive for counter-clockwise, negative for clockwise."""
    n = len(loop)
    total = 0.0
    for i in range(n):
        x1, y1 = loop[i]
        x2, y2 = loop[(i + 1) % n]
        total += x1 * y2 - x2 * y1
    return total / 2.0


def is_clockwise(loop: Sequence[Point]) -> bool:
    return signed_area(loop) <= 0.0


def triangle_area(a: Point, b: Point, c: Point) -> float:
    """Signed area of triangle *abc* (same sign convention as :func:`signed_area`)."""
    return orientation(a, b, c) / 2.0


def point_on_triangle(p: Point, a: Point, b: Point, c: Point) -> bool:
    """True if *p* lies inside triangle *abc* or on one of its sides."""
    d1 = orientation(a, b, p)
    d2 = orientation(b, c, p)
    d3 = orientation(c, a, p)
    has_negative = d1 < 0 or d2 < 0 or d3 < 0
    has_positive = d1 > 0 or d2 > 0 or d3 > 0
    return not (has_negative and has_positive)


def turn_angle(previous: Point, current: Point, following: Point) -> float:
    """Signed turn at *current* going previous→current→following.

    Wrapped into ``(-pi, pi]``; positive turns are counter-clockwise.
    """
    turn = line_angle(current, following) - line_angle(previous, current)
    while turn <= -math.pi:
        turn += 2.0 * math.pi
    while turn > math.pi:
        turn -= 2.0 * math.pi
    return turn


def inside_corner(
    previous: Point, apex: Point, following: Point, p: Point, winding: float,
) -> bool:
    """True if the direction apex→*p* points into the polygon at *apex*.

    *previous* and *following* are the apex's neighbours on a loop whose
    orientation sign is *winding* (``-1`` clockwise, ``+1``
    counter-clockwise).  The interior angle may be reflex.
    """
    after_previous = orientation(previous, apex, p) * winding > 0
    before_following = orientation(apex, following, p) * winding > 0
    if orientation(previous, apex, following) * winding > 0:
        return after_previous and before_following
    return after_previous or before_following


def point_in_polygon(
    point: Point, loop: Sequence[Point], ignore_touching: bool = False,
) -> bool:
    """Ray-cast containment test.

    A ray is cast from *point* to the left, past every vertex of *loop*,
    and crossings with the loop's edges are counted; odd parity means
    inside.  With *ignore_touching*, a point coincident with any loop
    vertex is reported as outside.
    """
    if ignore_touching and any(point == p for p in loop):
        return False
    if not loop:
        return False

    left_x = min(min(p[0] for p in loop), point[0]) - 1.0
    left = (left_x, point[1])
    n = len(loop)
    crosses = 0
    for i in range(n):
        if segments_intersect(left, point, loop[i], loop[(i + 1) % n]):
            crosses += 1
    return crosses % 2 == 1


def rightmost_vertex(loop: Sequence[Point]) -> int:
    """Index of the first vertex with the largest x coordinate."""
    best = 0
    for i in range(1, len(loop)):
        if loop[i][0] > loop[best][0]:
            best = i
    return best


def convexity(loop: Sequence[Point]) -> int:
    """Classify a loop's turn signs.

    Returns ``1`` if every turn is non-negative (clockwise convex under
    the package convention), ``-1`` if every turn is non-positive, and
    ``0`` for a concave loop.
    """
    got_negative = False
    got_positive = False
    n = len(loop)
    for i in range(n):
        a = loop[i]
        b = loop[(i + 1) % n]
        c = loop[(i + 2) % n]
        # z of (a - b) x (c - b)
        cross = (a[0] - b[0]) * (c[1] - b[1]) - (a[1] - b[1]) * (c[0] - b[0])
        if cross < 0:
            got_negative = True
        elif cross > 0:
            got_positive = True
        if got_negative and got_positive:
            return 0
    return 1 if got_positive else -1


def loop_bounds(loop: Sequence[Point]) -> Tuple[float, float, float, float]:
    """``(min_x, min_y, max_x, max_y)`` of a loop."""
    xs = [p[0] for p in loop]
    ys = [p[1] for p in loop]
    return (min(xs), min(ys), max(xs), max(ys))


def rotate_to_min(loop: Sequence[Point]) -> List[Point]:
    """Rotate *loop* so it starts at its lexicographically smallest point."""
    if not loop:
        return []
    start = min(range(len(loop)), key=lambda i: loop[i])
    return list(loop[start:]) + list(loop[:start])
