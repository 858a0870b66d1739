"""sectortri command-line interface."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Optional

from .config import TriangulationConfig
from .errors import MapFormatError
from .io import load_map_json, save_triangulation_json


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Sector triangulation CLI")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    tri = sub.add_parser("triangulate", help="Triangulate every sector of a map")
    tri.add_argument("--in", dest="input_path", required=True)
    tri.add_argument("--out", dest="output_path", required=True)
    tri.add_argument("--strict", action="store_true",
                     help="fail islands and clip overruns instead of degrading")
    tri.add_argument("--workers", type=int, default=None)
    tri.add_argument("--benchmark", action="store_true", help="log per-stage timings")
    tri.add_argument("--diagnose-json", dest="diagnose_json")

    check = sub.add_parser("check", help="Report sectors that fail to triangulate")
    check.add_argument("--in", dest="input_path", required=True)
    check.add_argument("--strict", action="store_true")

    render = sub.add_parser("render", help="Render a triangulated map to PNG")
    render.add_argument("--in", dest="input_path", required=True)
    render.add_argument("--out", dest="output_path", required=True)
    render.add_argument("--dpi", type=int, default=150)

    return parser


def main(argv: Optional[list[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    try:
        sector_map = load_map_json(args.input_path)
    except MapFormatError as exc:
        print(f"Invalid map {args.input_path}: {exc}")
        raise SystemExit(2)

    errors = sector_map.validate()
    if errors:
        for error in errors:
            print(error)
        raise SystemExit(2)

    if args.command == "triangulate":
        _cmd_triangulate(args, sector_map)

    elif args.command == "check":
        _cmd_check(args, sector_map)

    elif args.command == "render":
        _cmd_render(args, sector_map)


def _cmd_triangulate(args, sector_map) -> None:
    from .batch import triangulate_map
    from .diagnostics import diagnostics_report
    from .triangulate import StageTimings

    timings = StageTimings() if args.benchmark else None
    result = triangulate_map(
        sector_map,
        config=TriangulationConfig(strict=args.strict),
        timings=timings,
        max_workers=args.workers,
    )
    save_triangulation_json(result, args.output_path)
    if timings is not None:
        timings.log_report()
    if args.diagnose_json:
        report = diagnostics_report(result)
        Path(args.diagnose_json).write_text(json.dumps(report, indent=2), encoding="utf-8")
    print(f"Saved {args.output_path}")


def _cmd_check(args, sector_map) -> None:
    from .batch import triangulate_map

    result = triangulate_map(sector_map, config=TriangulationConfig(strict=args.strict))
    for sector, exc in sorted(result.failures.items()):
        print(f"{type(exc).__name__}: {exc}")
    for sector in result.incomplete_sectors():
        print(f"sector {sector}: incomplete triangulation")
    print(f"{result.failed_sector_count} failed sectors")
    if result.failures:
        raise SystemExit(1)
    print("OK")


def _cmd_render(args, sector_map) -> None:
    from .batch import triangulate_map
    from .render import render_png

    result = triangulate_map(sector_map)
    render_png(result, args.output_path, sector_map=sector_map, dpi=args.dpi)
    print(f"Saved {args.output_path}")


if __name__ == "__main__":
    main()
