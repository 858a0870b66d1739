"""Keyhole cutting: weld each hole of an island into its shell.

For every hole, a ray is cast from its rightmost vertex towards +x.  The
nearest shell edge it hits gives a bridge vertex; if another shell edge
blocks the straight bridge, the bridge is moved to that edge's rightmost
endpoint until it is clear.  Where earlier seams have left several
copies of the target point, the copy whose corner faces the hole is used.
The hole is then spliced into the shell along a zero-width seam, so the
island becomes one simple polygon that ordinary ear clipping can
triangulate.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .config import DEFAULT_CONFIG, TriangulationConfig
from .errors import BridgeOverrunError, NoVisibleBridgeError
from .geometry import (
    find_intersection,
    inside_corner,
    is_clockwise,
    loop_bounds,
    rightmost_vertex,
    segments_intersect,
)
from .models import Island, Loop, Point

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BridgeHit:
    """Nearest shell feature hit by the ray from a hole's anchor.

    *edge* is the index of the shell edge ``shell[edge] → shell[edge + 1]``.
    *on_vertex* is set when the ray meets ``shell[edge]`` exactly.
    """

    edge: int
    point: Point
    distance: float
    on_vertex: bool


def order_holes(holes: Sequence[Loop]) -> List[Loop]:
    """Sort holes by their rightmost x, largest first (stable)."""
    return sorted(holes, key=lambda h: -hole_anchor(h)[0])


def hole_anchor(hole: Sequence[Point]) -> Point:
    """Rightmost vertex of *hole*, where its bridge starts."""
    return hole[rightmost_vertex(hole)]


def find_bridge(shell: Sequence[Point], anchor: Point) -> Optional[BridgeHit]:
    """Cast a ray from *anchor* along +x and return the nearest shell hit."""
    n = len(shell)
    far = (loop_bounds(shell)[2] + 1.0, anchor[1])
    best: Optional[BridgeHit] = None

    def consider(hit: BridgeHit) -> None:
        nonlocal best
        if best is None or hit.distance < best.distance:
            best = hit
        elif hit.distance == best.distance and hit.on_vertex and not best.on_vertex:
            best = hit

    for j in range(n):
        a = shell[j]
        b = shell[(j + 1) % n]
        if a[0] <= anchor[0] and b[0] <= anchor[0]:
            continue
        if a[1] == anchor[1] and a[0] > anchor[0]:
            consider(BridgeHit(j, a, a[0] - anchor[0], True))
        if segments_intersect(anchor, far, a, b):
            inter = find_intersection(anchor, far, a, b)
            consider(BridgeHit(j, inter, math.dist(inter, anchor), False))

    return best


def bridge_vertex(shell: Sequence[Point], hit: BridgeHit, anchor: Point) -> int:
    """Shell vertex index the bridge initially targets.

    A direct vertex hit is used as-is; otherwise the rightmost endpoint of
    the hit edge, preferring the one nearer the ray on a tie.
    """
    if hit.on_vertex:
        return hit.edge
    i = hit.edge
    k = (hit.edge + 1) % len(shell)
    a, b = shell[i], shell[k]
    if a[0] != b[0]:
        return i if a[0] > b[0] else k
    return i if abs(a[1] - anchor[1]) <= abs(b[1] - anchor[1]) else k


def resolve_visibility(
    shell: Sequence[Point], anchor: Point, index: int,
) -> int:
    """Move the bridge target until no shell edge crosses anchor→target.

    Each blocked attempt redirects to the rightmost endpoint of the
    blocking edge.  Raises :class:`NoVisibleBridgeError` when no visible
    target is found within one pass per shell edge.
    """
    n = len(shell)
    for _ in range(n + 1):
        target = shell[index]
        blocker: Optional[int] = None
        for j in range(n):
            a = shell[j]
            b = shell[(j + 1) % n]
            if a == target or b == target:
                continue
            if segments_intersect(a, b, anchor, target):
                blocker = j
                break
        if blocker is None:
            return index
        k = (blocker + 1) % n
        index = blocker if shell[blocker][0] > shell[k][0] else k

    raise NoVisibleBridgeError(f"no shell vertex visible from {anchor}")


def facing_copy(shell: Sequence[Point], anchor: Point, index: int) -> int:
    """Pick the copy of ``shell[index]`` whose corner opens towards *anchor*.

    Earlier bridges leave the same point in the shell more than once, each
    copy owning a slice of the angle around it.  Splicing into a copy that
    does not face the anchor would cross the existing seams.  Falls back to
    *index* when no copy faces the anchor strictly.
    """
    n = len(shell)
    target = shell[index]
    winding = -1.0 if is_clockwise(shell) else 1.0
    for i in [index] + [k for k in range(n) if k != index]:
        if shell[i] != target:
            continue
        if inside_corner(shell[i - 1], target, shell[(i + 1) % n], anchor, winding):
            return i
    return index


def splice_hole(
    shell: Sequence[Point], hole: Sequence[Point], shell_index: int, hole_index: int,
) -> Loop:
    """Insert *hole* into *shell* at ``shell[shell_index]``.

    The hole is reversed first if it winds the same way as the shell.  The
    bridge vertex and the hole anchor are each duplicated, giving
    ``len(shell) + len(hole) + 2`` points.
    """
    hole = list(hole)
    if is_clockwise(hole) == is_clockwise(shell):
        hole.reverse()
        hole_index = len(hole) - (hole_index + 1)

    m = len(hole)
    seam = [shell[shell_index]]
    seam.extend(hole[(hole_index + i) % m] for i in range(m))
    seam.append(hole[hole_index])

    result = list(shell)
    result[shell_index:shell_index] = seam
    return result


def cut_island(
    island: Island,
    config: TriangulationConfig = DEFAULT_CONFIG,
) -> Loop:
    """Bridge every hole of *island* into its shell and return the result.

    The island itself is left untouched.
    """
    shell = list(island.shell)
    if not island.holes:
        return shell

    holes = order_holes(island.holes)
    if len(holes) > config.max_bridges:
        raise BridgeOverrunError(
            f"island has {len(holes)} holes, limit is {config.max_bridges}"
        )

    for hole in holes:
        anchor_index = rightmost_vertex(hole)
        anchor = hole[anchor_index]

        hit = find_bridge(shell, anchor)
        if hit is None:
            raise NoVisibleBridgeError(f"ray from {anchor} hits no shell edge")

        target = resolve_visibility(shell, anchor, bridge_vertex(shell, hit, anchor))
        target = facing_copy(shell, anchor, target)
        logger.debug("bridging hole at %s to shell vertex %s", anchor, shell[target])
        shell = splice_hole(shell, hole, target, anchor_index)

    return shell
