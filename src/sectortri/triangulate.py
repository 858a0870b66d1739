"""Sector triangulation entry point.

Runs the stages in order:

1. **trace** — unordered boundary edges → closed loops
2. **simplify** — drop collinear points
3. **islands** — loops → shells with holes
4. **cut** — each island → one simple polygon (keyhole bridges)
5. **clip** — each polygon → triangles

Usage
-----
>>> from sectortri import BoundaryEdge, triangulate_sector
>>> square = [
...     BoundaryEdge((0, 0), (0, 64)), BoundaryEdge((0, 64), (64, 64)),
...     BoundaryEdge((64, 64), (64, 0)), BoundaryEdge((64, 0), (0, 0)),
... ]
>>> [poly.triangle_count for poly in triangulate_sector(square)]
[2]

:func:`triangulate_sector` keeps no state between calls and can be run
for many sectors at once from a worker pool.  The only shared object is
an optional :class:`StageTimings`.
"""

from __future__ import annotations

import logging
import threading
import time
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional, Sequence

from .config import DEFAULT_CONFIG, TriangulationConfig
from .cutter import cut_island
from .earclip import ear_clip
from .errors import BridgeOverrunError, NoVisibleBridgeError
from .geometry import point_in_polygon
from .islands import build_islands
from .models import BoundaryEdge, Point, TriangulatedPolygon
from .simplify import simplify_loop
from .tracer import trace_loops

logger = logging.getLogger(__name__)

STAGES = ("trace", "simplify", "islands", "cut", "clip")


class StageTimings:
    """Cumulative wall-clock seconds per stage, shared across calls."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._elapsed: Dict[str, float] = {name: 0.0 for name in STAGES}
        self.calls = 0

    @contextmanager
    def measure(self, stage: str) -> Iterator[None]:
        t0 = time.perf_counter()
        try:
            yield
        finally:
            dt = time.perf_counter() - t0
            with self._lock:
                self._elapsed[stage] = self._elapsed.get(stage, 0.0) + dt

    def count_call(self) -> None:
        with self._lock:
            self.calls += 1

    def as_dict(self) -> Dict[str, float]:
        with self._lock:
            return dict(self._elapsed)

    @property
    def total(self) -> float:
        return sum(self.as_dict().values())

    def log_report(self, level: int = logging.INFO) -> None:
        for stage, seconds in self.as_dict().items():
            logger.log(level, "%s: %.6fs", stage, seconds)

    def __repr__(self) -> str:
        parts = ", ".join(f"{k}={v:.4f}" for k, v in self.as_dict().items())
        return f"StageTimings({parts})"


@contextmanager
def _stage(timings: Optional[StageTimings], name: str) -> Iterator[None]:
    if timings is None:
        yield
    else:
        with timings.measure(name):
            yield


def triangulate_sector(
    edges: Sequence[BoundaryEdge],
    config: Optional[TriangulationConfig] = None,
    timings: Optional[StageTimings] = None,
) -> List[TriangulatedPolygon]:
    """Triangulate one sector from its boundary edges.

    Returns one :class:`TriangulatedPolygon` per island, or an empty list
    for a sector with no edges.  Raises a
    :class:`~sectortri.errors.TriangulationError` subclass when the
    sector as a whole cannot be triangulated.

    An island whose holes cannot be bridged is logged and skipped, unless
    ``config.strict`` is set, in which case the error propagates.
    A *config* with a non-positive ceiling or tolerance raises
    ``ValueError``.
    """
    config = config or DEFAULT_CONFIG
    config.validate()
    if timings is not None:
        timings.count_call()

    with _stage(timings, "trace"):
        loops = trace_loops(edges, config)
    if not loops:
        return []

    with _stage(timings, "simplify"):
        loops = [simplify_loop(loop, config.collinear_epsilon) for loop in loops]

    with _stage(timings, "islands"):
        islands = build_islands(loops, config)

    polygons = []
    with _stage(timings, "cut"):
        for island in islands:
            try:
                polygons.append(cut_island(island, config))
            except (NoVisibleBridgeError, BridgeOverrunError) as exc:
                if config.strict:
                    raise
                logger.warning("dropping island with %d holes: %s", island.hole_count, exc)

    with _stage(timings, "clip"):
        return [ear_clip(polygon, config) for polygon in polygons]


def point_in_region(point: Point, polygon: TriangulatedPolygon) -> bool:
    """True if *point* falls inside a triangulated sector polygon."""
    return point_in_polygon(point, polygon.points)
