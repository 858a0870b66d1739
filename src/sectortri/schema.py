"""JSON Schema for sector map documents."""

SECTOR_MAP_SCHEMA = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "Sector map",
    "type": "object",
    "required": ["vertices", "linedefs"],
    "properties": {
        "version": {"type": "string"},
        "metadata": {"type": "object"},
        "vertices": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["id", "x", "y"],
                "properties": {
                    "id": {"type": "integer"},
                    "x": {"type": "number"},
                    "y": {"type": "number"},
                },
            },
        },
        "linedefs": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["id", "start", "end", "front"],
                "properties": {
                    "id": {"type": "integer"},
                    "start": {"type": "integer"},
                    "end": {"type": "integer"},
                    "front": {"type": "integer"},
                    "back": {"type": ["integer", "null"]},
                },
            },
        },
        "things": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["id", "x", "y"],
                "properties": {
                    "id": {"type": "integer"},
                    "x": {"type": "number"},
                    "y": {"type": "number"},
                    "type": {"type": "integer"},
                },
            },
        },
    },
}
