"""sectortri — sector boundary triangulation.

Public API is organised into layers:

- **Core** — models, geometry primitives, configuration, errors
- **Pipeline** — loop tracing, simplification, islands, keyhole cutting,
  ear clipping and the :func:`triangulate_sector` entry point
- **Map data** — sector map container, batch triangulation, thing placement
- **Output** — JSON I/O, diagnostics, rendering (requires matplotlib)
"""

# ── Core ────────────────────────────────────────────────────────────
from .models import (
    BoundaryEdge,
    Island,
    Linedef,
    Point,
    Thing,
    TriangulatedPolygon,
    Vertex,
)
from .config import DEFAULT_CONFIG, STRICT_CONFIG, TriangulationConfig
from .errors import (
    BridgeOverrunError,
    ClassificationOverrunError,
    ClipOverrunError,
    DegenerateLoopError,
    MapFormatError,
    NoVisibleBridgeError,
    TraceOverrunError,
    TriangulationError,
    UnclosedSectorError,
)
from .geometry import (
    collinear,
    is_clockwise,
    orientation,
    point_in_polygon,
    segments_intersect,
    signed_area,
)

# ── Pipeline ────────────────────────────────────────────────────────
from .tracer import check_closure, trace_loops
from .simplify import simplify_loop
from .islands import build_islands, normalize_winding
from .cutter import cut_island
from .earclip import ear_clip
from .triangulate import StageTimings, point_in_region, triangulate_sector

# ── Map data ────────────────────────────────────────────────────────
from .sectormap import SectorMap
from .batch import MapTriangulation, triangulate_map
from .placement import ThingAssignment, assign_things

# ── Output ──────────────────────────────────────────────────────────
from .io import (
    load_map_json,
    load_triangulation_json,
    save_map_json,
    save_triangulation_json,
)
from .diagnostics import diagnostics_report, validate_triangulation

__all__ = [
    # Core
    "BoundaryEdge",
    "Island",
    "Linedef",
    "Point",
    "Thing",
    "TriangulatedPolygon",
    "Vertex",
    "DEFAULT_CONFIG",
    "STRICT_CONFIG",
    "TriangulationConfig",
    "BridgeOverrunError",
    "ClassificationOverrunError",
    "ClipOverrunError",
    "DegenerateLoopError",
    "MapFormatError",
    "NoVisibleBridgeError",
    "TraceOverrunError",
    "TriangulationError",
    "UnclosedSectorError",
    "collinear",
    "is_clockwise",
    "orientation",
    "point_in_polygon",
    "segments_intersect",
    "signed_area",
    # Pipeline
    "check_closure",
    "trace_loops",
    "simplify_loop",
    "build_islands",
    "normalize_winding",
    "cut_island",
    "ear_clip",
    "StageTimings",
    "point_in_region",
    "triangulate_sector",
    # Map data
    "SectorMap",
    "MapTriangulation",
    "triangulate_map",
    "ThingAssignment",
    "assign_things",
    # Output
    "load_map_json",
    "load_triangulation_json",
    "save_map_json",
    "save_triangulation_json",
    "diagnostics_report",
    "validate_triangulation",
]
