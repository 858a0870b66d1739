from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from .batch import MapTriangulation
from .models import Thing
from .triangulate import point_in_region

logger = logging.getLogger(__name__)


@dataclass
class ThingAssignment:
    sectors: Dict[int, int] = field(default_factory=dict)
    unclaimed: List[int] = field(default_factory=list)

    def sector_of(self, thing_id: int) -> int | None:
        return self.sectors.get(thing_id)


def assign_things(
    things: Iterable[Thing], triangulation: MapTriangulation,
) -> ThingAssignment:
    """Place each thing in the first sector polygon that contains it.

    Sectors are visited in ascending id order.  Things outside every
    polygon end up in ``unclaimed`` and are logged.
    """
    assignment = ThingAssignment()
    pending = sorted(things, key=lambda t: t.id)

    for sector, polygon in triangulation.iter_polygons():
        still_pending = []
        for thing in pending:
            if point_in_region(thing.point, polygon):
                assignment.sectors[thing.id] = sector
            else:
                still_pending.append(thing)
        pending = still_pending
        if not pending:
            break

    assignment.unclaimed = [t.id for t in pending]
    for thing_id in assignment.unclaimed:
        logger.warning("unclaimed thing: %d", thing_id)
    return assignment
