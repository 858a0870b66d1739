"""Error taxonomy for sector triangulation.

Every :class:`TriangulationError` is scoped to a single sector.  Batch
callers catch them per sector and carry on with the rest of the map.
"""

from __future__ import annotations

from typing import Optional


class TriangulationError(Exception):
    """Base class for a sector that could not be triangulated."""

    def __init__(self, message: str, sector: Optional[int] = None) -> None:
        super().__init__(message)
        self.sector = sector

    def __str__(self) -> str:
        base = super().__str__()
        if self.sector is None:
            return base
        return f"sector {self.sector}: {base}"


class UnclosedSectorError(TriangulationError):
    """Boundary edges do not form closed loops."""


class TraceOverrunError(TriangulationError):
    """Loop tracing hit its iteration ceiling."""


class DegenerateLoopError(TriangulationError):
    """A traced loop collapsed below three points during simplification."""


class ClassificationOverrunError(TriangulationError):
    """Island classification hit its iteration ceiling."""


class NoVisibleBridgeError(TriangulationError):
    """No shell vertex is visible from a hole's rightmost vertex."""


class BridgeOverrunError(TriangulationError):
    """An island has more holes than the bridge limit allows."""


class ClipOverrunError(TriangulationError):
    """Ear clipping hit its iteration ceiling before finishing."""


class MapFormatError(ValueError):
    """A sector map document does not match the expected structure."""
