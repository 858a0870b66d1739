"""Group traced loops into islands: one shell plus its sibling holes."""

from __future__ import annotations

import logging
from typing import List, Sequence

from .config import DEFAULT_CONFIG, TriangulationConfig
from .errors import ClassificationOverrunError
from .geometry import is_clockwise, point_in_polygon, rotate_to_min
from .models import Island, Loop

logger = logging.getLogger(__name__)


def normalize_winding(loop: Sequence) -> Loop:
    """Return *loop* wound clockwise, starting at its smallest point.

    The fixed start makes the result independent of the order edges were
    traced in.
    """
    points = list(loop)
    if not is_clockwise(points):
        points.reverse()
    return rotate_to_min(points)


def _claim(island: Island, loop: Loop) -> bool:
    """Attach *loop* to *island* if one contains the other.

    A loop inside the shell becomes a hole.  A loop enclosing the shell of
    a hole-free island takes over as its shell, the old shell becoming
    the hole.
    """
    if point_in_polygon(loop[0], island.shell, ignore_touching=True):
        island.holes.append(loop)
        return True
    if not island.holes and point_in_polygon(island.shell[0], loop, ignore_touching=True):
        island.holes.append(island.shell)
        island.shell = loop
        return True
    return False


def build_islands(
    loops: Sequence[Loop],
    config: TriangulationConfig = DEFAULT_CONFIG,
) -> List[Island]:
    """Classify *loops* into islands by containment.

    Loops are normalised to clockwise and sorted by their smallest point,
    so the seed is always an outermost loop.  The first loop seeds the
    island list; every later loop joins the first island it is related to
    or starts a new one.
    """
    pending = sorted((normalize_winding(loop) for loop in loops), key=lambda l: l[0])
    if not pending:
        return []
    if len(pending) == 1:
        return [Island(shell=pending[0])]

    islands = [Island(shell=pending[0])]
    steps = 0
    for loop in pending[1:]:
        for island in islands:
            steps += 1
            if steps > config.max_classification_steps:
                raise ClassificationOverrunError(
                    f"classification exceeded {config.max_classification_steps} steps"
                )
            if _claim(island, loop):
                break
        else:
            islands.append(Island(shell=loop))

    logger.debug(
        "built %d islands with %d holes",
        len(islands), sum(i.hole_count for i in islands),
    )
    return islands
