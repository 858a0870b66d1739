from __future__ import annotations

from typing import List, Sequence

from .errors import DegenerateLoopError
from .geometry import collinear, signed_area
from .models import Loop, Point


def simplify_loop(loop: Sequence[Point], epsilon: float = 0.05) -> Loop:
    """Drop repeated points and points lying on a straight run.

    Repeats until nothing more can be removed.  Raises
    :class:`DegenerateLoopError` instead of returning fewer than three
    points or a zero-area loop.
    """
    points: List[Point] = list(loop)
    changed = True
    while changed:
        changed = False
        i = 0
        while i < len(points):
            n = len(points)
            if n <= 3:
                break
            p1 = points[i]
            p2 = points[(i + 1) % n]
            p3 = points[(i + 2) % n]
            if p1 == p2 or collinear(p1, p2, p3, epsilon):
                del points[(i + 1) % n]
                changed = True
                continue
            i += 1

    if len(set(points)) < 3 or signed_area(points) == 0.0:
        raise DegenerateLoopError(f"loop of {len(loop)} points collapsed")
    return points
