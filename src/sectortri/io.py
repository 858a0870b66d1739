from __future__ import annotations

import json
from pathlib import Path
from typing import Union

import jsonschema

from .batch import MapTriangulation
from .errors import MapFormatError
from .schema import SECTOR_MAP_SCHEMA
from .sectormap import SectorMap


PathLike = Union[str, Path]


def validate_map_payload(payload: dict) -> None:
    """Raise :class:`MapFormatError` unless *payload* is a valid sector map."""
    try:
        jsonschema.validate(instance=payload, schema=SECTOR_MAP_SCHEMA)
    except jsonschema.ValidationError as exc:
        location = "/".join(str(p) for p in exc.absolute_path) or "<root>"
        raise MapFormatError(f"{location}: {exc.message}") from exc


def load_map_json(path: PathLike) -> SectorMap:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    validate_map_payload(data)
    return SectorMap.from_dict(data)


def save_map_json(sector_map: SectorMap, path: PathLike) -> None:
    Path(path).write_text(sector_map.to_json(), encoding="utf-8")


def load_triangulation_json(path: PathLike) -> MapTriangulation:
    return MapTriangulation.from_dict(json.loads(Path(path).read_text(encoding="utf-8")))


def save_triangulation_json(result: MapTriangulation, path: PathLike, indent: int = 2) -> None:
    Path(path).write_text(
        json.dumps(result.to_dict(), indent=indent, sort_keys=True),
        encoding="utf-8",
    )
