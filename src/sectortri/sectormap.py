from __future__ import annotations

import json
from typing import Dict, Iterable, List, Optional

from .models import BoundaryEdge, Linedef, Thing, Vertex


class SectorMap:
    """Container for a level's vertices, linedefs and things.

    Sectors exist only as ids referenced from linedef sides; their floor
    and ceiling attributes, if any, ride along in *metadata*.
    """

    VERSION = "1.0"

    def __init__(
        self,
        vertices: Iterable[Vertex],
        linedefs: Iterable[Linedef],
        things: Iterable[Thing] = (),
        metadata: Optional[dict] = None,
    ) -> None:
        self.vertices: Dict[int, Vertex] = {v.id: v for v in vertices}
        self.linedefs: Dict[int, Linedef] = {l.id: l for l in linedefs}
        self.things: Dict[int, Thing] = {t.id: t for t in things}
        self.metadata = metadata or {}

    # ── Sector queries ──────────────────────────────────────────────

    def sector_ids(self) -> List[int]:
        ids = set()
        for line in self.linedefs.values():
            ids.add(line.front_sector)
            if line.back_sector is not None:
                ids.add(line.back_sector)
        return sorted(ids)

    def sector_linedefs(self, sector: int) -> List[Linedef]:
        """Linedefs bordering *sector*, minus those with it on both sides."""
        return [
            line
            for line in sorted(self.linedefs.values(), key=lambda l: l.id)
            if line.borders(sector) and not line.is_internal()
        ]

    def boundary_edges(self, sector: int) -> List[BoundaryEdge]:
        return [
            BoundaryEdge(
                self.vertices[line.start].point,
                self.vertices[line.end].point,
                linedef_id=line.id,
            )
            for line in self.sector_linedefs(sector)
        ]

    def validate(self) -> list[str]:
        errors: list[str] = []
        for line in self.linedefs.values():
            for vertex_id in (line.start, line.end):
                if vertex_id not in self.vertices:
                    errors.append(f"Linedef {line.id} references missing vertex {vertex_id}")
            if line.start == line.end:
                errors.append(f"Linedef {line.id} starts and ends at vertex {line.start}")
        return errors

    # ── Serialisation ───────────────────────────────────────────────

    def to_dict(self) -> dict:
        return {
            "version": self.VERSION,
            "metadata": self.metadata,
            "vertices": [
                {"id": v.id, "x": v.x, "y": v.y}
                for v in sorted(self.vertices.values(), key=lambda v: v.id)
            ],
            "linedefs": [
                {
                    "id": l.id,
                    "start": l.start,
                    "end": l.end,
                    "front": l.front_sector,
                    "back": l.back_sector,
                }
                for l in sorted(self.linedefs.values(), key=lambda l: l.id)
            ],
            "things": [
                {"id": t.id, "x": t.x, "y": t.y, "type": t.type}
                for t in sorted(self.things.values(), key=lambda t: t.id)
            ],
        }

    @classmethod
    def from_dict(cls, payload: dict) -> "SectorMap":
        vertices = [
            Vertex(id=v["id"], x=v["x"], y=v["y"])
            for v in payload.get("vertices", [])
        ]
        linedefs = [
            Linedef(
                id=l["id"],
                start=l["start"],
                end=l["end"],
                front_sector=l["front"],
                back_sector=l.get("back"),
            )
            for l in payload.get("linedefs", [])
        ]
        things = [
            Thing(id=t["id"], x=t["x"], y=t["y"], type=t.get("type", 0))
            for t in payload.get("things", [])
        ]
        return cls(vertices, linedefs, things, payload.get("metadata", {}))

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, sort_keys=True)

    @classmethod
    def from_json(cls, json_data: str) -> "SectorMap":
        return cls.from_dict(json.loads(json_data))
