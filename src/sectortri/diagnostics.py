from __future__ import annotations

from typing import Dict, List, Sequence

from .batch import MapTriangulation
from .geometry import segments_intersect, signed_area
from .models import Point, TriangulatedPolygon


def triangle_areas(polygon: TriangulatedPolygon):
    """Signed area of every triangle as a numpy array (clockwise < 0)."""
    import numpy as np

    if not polygon.triangles:
        return np.zeros(0)
    pts = np.asarray(polygon.points, dtype=float)
    tris = np.asarray(polygon.triangles, dtype=int)
    a, b, c = pts[tris[:, 0]], pts[tris[:, 1]], pts[tris[:, 2]]
    ab = b - a
    ac = c - a
    return (ab[:, 0] * ac[:, 1] - ab[:, 1] * ac[:, 0]) / 2.0


def triangulation_area(polygon: TriangulatedPolygon) -> float:
    return float(abs(triangle_areas(polygon).sum()))


def polygon_area(polygon: TriangulatedPolygon) -> float:
    return abs(signed_area(polygon.points))


def has_self_crossings(loop: Sequence[Point]) -> bool:
    """True if any two non-adjacent edges of *loop* properly cross."""
    n = len(loop)
    for i in range(n):
        a1, a2 = loop[i], loop[(i + 1) % n]
        for j in range(i + 2, n):
            if i == 0 and j == n - 1:
                continue
            b1, b2 = loop[j], loop[(j + 1) % n]
            if len({a1, a2, b1, b2}) < 4:
                continue
            if segments_intersect(a1, a2, b1, b2):
                return True
    return False


def validate_triangulation(
    polygon: TriangulatedPolygon, rel_tol: float = 1e-6,
) -> List[str]:
    """Check triangle count, index range, winding and area coverage."""
    errors: List[str] = []
    n = len(polygon.points)
    if polygon.triangle_count != n - 2:
        errors.append(f"expected {n - 2} triangles, got {polygon.triangle_count}")

    for t, tri in enumerate(polygon.triangles):
        if any(i < 0 or i >= n for i in tri):
            errors.append(f"triangle {t} has an index out of range: {tri}")
    if errors:
        return errors

    areas = triangle_areas(polygon)
    for t, area in enumerate(areas):
        if area >= 0.0:
            errors.append(f"triangle {t} is degenerate or counter-clockwise (area {area:.6g})")

    expected = polygon_area(polygon)
    got = triangulation_area(polygon)
    if abs(got - expected) > rel_tol * max(expected, 1.0):
        errors.append(f"triangle area {got:.6g} does not match polygon area {expected:.6g}")
    return errors


def diagnostics_report(result: MapTriangulation) -> Dict[str, object]:
    """Summary of a map triangulation as a JSON-ready dict."""
    sectors: Dict[str, object] = {}
    for sector, polys in sorted(result.polygons.items()):
        sectors[str(sector)] = {
            "polygons": len(polys),
            "triangles": sum(p.triangle_count for p in polys),
            "area": sum(polygon_area(p) for p in polys),
            "errors": [e for p in polys for e in validate_triangulation(p)],
        }
    return {
        "sector_count": len(result.polygons) + result.failed_sector_count,
        "failed_sectors": sorted(result.failures),
        "incomplete_sectors": result.incomplete_sectors(),
        "triangle_count": result.triangle_count,
        "sectors": sectors,
    }
