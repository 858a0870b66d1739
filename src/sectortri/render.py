from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from .batch import MapTriangulation
from .sectormap import SectorMap

_SECTOR_COLORS = [
    "#e6194b", "#3cb44b", "#4363d8", "#f58231", "#911eb4",
    "#42d4f4", "#f032e6", "#bfef45", "#fabed4", "#469990",
    "#dcbeff", "#9a6324",
]


def render_png(
    result: MapTriangulation,
    output_path: str | Path,
    sector_map: Optional[SectorMap] = None,
    face_alpha: float = 0.35,
    edge_color: str = "#2b2b2b",
    linewidth: float = 0.4,
    padding: float = 16.0,
    dpi: int = 150,
    highlight: Sequence[int] = (),
) -> None:
    """Render triangulated sectors to PNG, one colour per sector.

    When *sector_map* is given, linedefs of failed sectors are drawn in
    red so gaps in the output are easy to spot.  Requires matplotlib;
    imported lazily to keep the core package lightweight.
    """
    try:
        import matplotlib

        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        from matplotlib.patches import Polygon
    except ImportError as exc:  # pragma: no cover - requires optional dep
        raise RuntimeError(
            "matplotlib is required for rendering. Install with `pip install matplotlib`."
        ) from exc

    fig, ax = plt.subplots()
    xs: list[float] = []
    ys: list[float] = []

    for sector, polygon in result.iter_polygons():
        color = _SECTOR_COLORS[sector % len(_SECTOR_COLORS)]
        alpha = 0.8 if sector in highlight else face_alpha
        for a, b, c in polygon.triangle_points():
            ax.add_patch(Polygon(
                [a, b, c], closed=True, facecolor=color, edgecolor=edge_color,
                alpha=alpha, linewidth=linewidth,
            ))
        xs.extend(p[0] for p in polygon.points)
        ys.extend(p[1] for p in polygon.points)

    if sector_map is not None:
        for sector in result.failures:
            for edge in sector_map.boundary_edges(sector):
                ax.plot(
                    [edge.start[0], edge.end[0]], [edge.start[1], edge.end[1]],
                    color="#d00000", linewidth=1.2,
                )
                xs.extend((edge.start[0], edge.end[0]))
                ys.extend((edge.start[1], edge.end[1]))

    if xs and ys:
        ax.set_xlim(min(xs) - padding, max(xs) + padding)
        ax.set_ylim(min(ys) - padding, max(ys) + padding)
    ax.set_aspect("equal")
    ax.axis("off")

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=dpi, bbox_inches="tight")
    plt.close(fig)
