"""Reconstruct closed vertex loops from a sector's unordered boundary edges."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Dict, Iterable, List, Sequence, Tuple

from .config import DEFAULT_CONFIG, TriangulationConfig
from .errors import TraceOverrunError, UnclosedSectorError
from .geometry import turn_angle
from .models import BoundaryEdge, Loop, Point

logger = logging.getLogger(__name__)


def vertex_incidence(edges: Iterable[BoundaryEdge]) -> Dict[Point, int]:
    """Count edge endpoints per point."""
    counts: Counter = Counter()
    for edge in edges:
        counts[edge.start] += 1
        counts[edge.end] += 1
    return dict(counts)


def check_closure(edges: Sequence[BoundaryEdge]) -> None:
    """Raise :class:`UnclosedSectorError` if the edges cannot close.

    Every point must be shared by an even number of edges: two on a plain
    boundary, four or more where loops touch.
    """
    incidence = vertex_incidence(edges)
    open_points = sorted(p for p, count in incidence.items() if count % 2 == 1)
    if open_points:
        raise UnclosedSectorError(
            f"{len(open_points)} open vertices, first at {open_points[0]}"
        )


class _EdgeArena:
    """Boundary edges with consumed flags, indexed by endpoint."""

    def __init__(self, edges: Sequence[BoundaryEdge]) -> None:
        self.edges = list(edges)
        self.consumed = [False] * len(self.edges)
        self.remaining = len(self.edges)
        self._by_point: Dict[Point, List[int]] = {}
        for idx, edge in enumerate(self.edges):
            self._by_point.setdefault(edge.start, []).append(idx)
            if edge.end != edge.start:
                self._by_point.setdefault(edge.end, []).append(idx)

    def take(self, idx: int) -> BoundaryEdge:
        self.consumed[idx] = True
        self.remaining -= 1
        return self.edges[idx]

    def first_unconsumed(self) -> int:
        return self.consumed.index(False)

    def incident(self, point: Point) -> List[int]:
        return [i for i in self._by_point.get(point, []) if not self.consumed[i]]


def _far_end(edge: BoundaryEdge, point: Point) -> Point:
    return edge.end if edge.start == point else edge.start


def _choose_branch(
    arena: _EdgeArena, candidates: List[int], previous: Point, current: Point,
) -> int:
    """Pick the most clockwise turn at a branch point.

    Turns are signed and wrapped, so the choice depends only on geometry.
    Equal turns (overlapping edges) go to the smaller far point.
    """
    def rank(idx: int) -> Tuple[float, Point]:
        far = _far_end(arena.edges[idx], current)
        return (turn_angle(previous, current, far), far)

    return min(candidates, key=rank)


def split_touching(loop: Sequence[Point]) -> List[Loop]:
    """Split a loop that passes through the same point twice.

    Loops touching at a vertex come out of the walk joined or separate
    depending on edge order.  Cutting at every repeated point gives the
    same simple loops either way.  Pieces of fewer than three points
    (an edge walked there and back) enclose nothing and are dropped.
    """
    pending = [list(loop)]
    pieces: List[Loop] = []
    while pending:
        current = pending.pop()
        first_seen: Dict[Point, int] = {}
        for idx, point in enumerate(current):
            if point in first_seen:
                start = first_seen[point]
                pending.append(current[:start] + current[idx:])
                pending.append(current[start:idx])
                break
            first_seen[point] = idx
        else:
            if len(current) >= 3:
                pieces.append(current)
            else:
                logger.debug("dropping %d-point piece at %s", len(current), current[0])
    return pieces


def trace_loops(
    edges: Sequence[BoundaryEdge],
    config: TriangulationConfig = DEFAULT_CONFIG,
) -> List[Loop]:
    """Walk *edges* into closed loops.

    Each loop is returned without repeating its first point.  Raises
    :class:`UnclosedSectorError` for open boundaries and
    :class:`TraceOverrunError` when either iteration ceiling is hit.
    """
    edges = [e for e in edges if not e.is_degenerate()]
    check_closure(edges)

    arena = _EdgeArena(edges)
    loops: List[Loop] = []

    while arena.remaining > 0:
        if len(loops) >= config.max_loops:
            raise TraceOverrunError(
                f"more than {config.max_loops} loops, {arena.remaining} edges left"
            )

        seed = arena.take(arena.first_unconsumed())
        trace: Loop = [seed.start]
        current = seed.end

        steps = 0
        while current != trace[0]:
            steps += 1
            if steps > config.max_loop_steps:
                raise TraceOverrunError(
                    f"loop exceeded {config.max_loop_steps} steps, "
                    f"{arena.remaining} edges left"
                )

            candidates = arena.incident(current)
            if not candidates:
                raise UnclosedSectorError(f"dead end while tracing at {current}")
            if len(candidates) == 1:
                chosen = candidates[0]
            else:
                chosen = _choose_branch(arena, candidates, trace[-1], current)

            edge = arena.take(chosen)
            trace.append(current)
            current = _far_end(edge, current)

        logger.debug("traced loop of %d points", len(trace))
        loops.extend(split_touching(trace))

    return loops
