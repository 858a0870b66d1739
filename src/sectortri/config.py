"""Tuneable limits and tolerances for sector triangulation.

The iteration ceilings are the only termination guard against cyclic or
malformed edge graphs.  Each one maps to its own error type when it is
exhausted, so callers can tell "rejected input" apart from an empty
result.

Usage
-----
>>> from sectortri.config import TriangulationConfig
>>> config = TriangulationConfig(max_clip_steps=20000, strict=True)
"""

from __future__ import annotations

from dataclasses import dataclass, fields


@dataclass(frozen=True)
class TriangulationConfig:
    """All limits used by the triangulation stages.

    Attributes
    ----------
    max_loops : int
        Loops the tracer may emit for one sector.
    max_loop_steps : int
        Edges the tracer may follow while closing a single loop.
    max_classification_steps : int
        Passes the island builder may make over pending loops.
    max_bridges : int
        Holes that may be bridged into one island.
    max_clip_steps : int
        Failed ear candidates in a row tolerated before clipping gives up.
    collinear_epsilon : float
        Direction-angle difference (radians) under which three points
        count as collinear.
    area_epsilon : float
        Area at or below which a candidate ear is considered degenerate.
    strict : bool
        Raise on island cut failures and clip overruns instead of
        dropping the island / returning a partial triangulation.
    """

    max_loops: int = 1000
    max_loop_steps: int = 1000
    max_classification_steps: int = 10000
    max_bridges: int = 100
    max_clip_steps: int = 5000
    collinear_epsilon: float = 0.05
    area_epsilon: float = 1e-9
    strict: bool = False

    def validate(self) -> None:
        for f in fields(self):
            if f.name == "strict":
                continue
            value = getattr(self, f.name)
            if value <= 0:
                raise ValueError(f"{f.name} must be > 0, got {value}")


DEFAULT_CONFIG = TriangulationConfig()

STRICT_CONFIG = TriangulationConfig(strict=True)
