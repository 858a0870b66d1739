"""Triangulate every sector of a map, isolating per-sector failures.

A sector that raises :class:`~sectortri.errors.TriangulationError` is
logged, recorded in :attr:`MapTriangulation.failures` and left out of the
output; the remaining sectors are still processed.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple, Union

from .config import TriangulationConfig
from . import errors
from .errors import TriangulationError
from .models import TriangulatedPolygon
from .sectormap import SectorMap
from .triangulate import StageTimings, triangulate_sector

logger = logging.getLogger(__name__)

_Outcome = Union[List[TriangulatedPolygon], TriangulationError]


@dataclass
class MapTriangulation:
    """Per-sector triangulation results for a whole map.

    Attributes
    ----------
    polygons : dict[int, list[TriangulatedPolygon]]
        Triangulated polygons for every sector that succeeded.
    failures : dict[int, TriangulationError]
        The error raised by every sector that failed.
    """

    polygons: Dict[int, List[TriangulatedPolygon]] = field(default_factory=dict)
    failures: Dict[int, TriangulationError] = field(default_factory=dict)

    @property
    def failed_sector_count(self) -> int:
        return len(self.failures)

    @property
    def triangle_count(self) -> int:
        return sum(p.triangle_count for polys in self.polygons.values() for p in polys)

    def incomplete_sectors(self) -> List[int]:
        """Sectors where ear clipping returned a partial result."""
        return sorted(
            sector
            for sector, polys in self.polygons.items()
            if any(not p.complete for p in polys)
        )

    def iter_polygons(self) -> Iterable[Tuple[int, TriangulatedPolygon]]:
        for sector in sorted(self.polygons):
            for polygon in self.polygons[sector]:
                yield sector, polygon

    def to_dict(self) -> dict:
        return {
            "sectors": {
                str(sector): [p.to_dict() for p in self.polygons[sector]]
                for sector in sorted(self.polygons)
            },
            "failures": {
                str(sector): {
                    "error": type(exc).__name__,
                    "message": exc.args[0] if exc.args else "",
                }
                for sector, exc in sorted(self.failures.items())
            },
        }

    @classmethod
    def from_dict(cls, payload: dict) -> "MapTriangulation":
        polygons = {
            int(sector): [TriangulatedPolygon.from_dict(p) for p in polys]
            for sector, polys in payload.get("sectors", {}).items()
        }
        failures = {
            int(sector): _error_class(info.get("error", ""))(
                info.get("message", ""), sector=int(sector),
            )
            for sector, info in payload.get("failures", {}).items()
        }
        return cls(polygons=polygons, failures=failures)


def _error_class(name: str) -> type:
    cls = getattr(errors, name, None)
    if isinstance(cls, type) and issubclass(cls, TriangulationError):
        return cls
    return TriangulationError


def _run_sector(
    sector_map: SectorMap,
    sector: int,
    config: Optional[TriangulationConfig],
    timings: Optional[StageTimings],
) -> _Outcome:
    try:
        return triangulate_sector(sector_map.boundary_edges(sector), config, timings)
    except TriangulationError as exc:
        exc.sector = sector
        return exc


def triangulate_map(
    sector_map: SectorMap,
    config: Optional[TriangulationConfig] = None,
    timings: Optional[StageTimings] = None,
    sectors: Optional[Iterable[int]] = None,
    max_workers: Optional[int] = None,
) -> MapTriangulation:
    """Triangulate *sectors* (default: all) of *sector_map*.

    With *max_workers* > 1 sectors are spread over a thread pool; results
    are the same as a sequential run.  An invalid *config* raises
    ``ValueError`` before any sector is run.
    """
    if config is not None:
        config.validate()
    sector_ids = sorted(sectors) if sectors is not None else sector_map.sector_ids()

    if max_workers and max_workers > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            outcomes = list(pool.map(
                lambda s: _run_sector(sector_map, s, config, timings), sector_ids,
            ))
    else:
        outcomes = [_run_sector(sector_map, s, config, timings) for s in sector_ids]

    result = MapTriangulation()
    for sector, outcome in zip(sector_ids, outcomes):
        if isinstance(outcome, TriangulationError):
            logger.warning("skipping %s", outcome)
            result.failures[sector] = outcome
        elif outcome:
            result.polygons[sector] = outcome

    logger.info(
        "triangulated %d sectors, %d failed, %d triangles",
        len(result.polygons), result.failed_sector_count, result.triangle_count,
    )
    return result
