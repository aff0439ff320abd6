from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from pathlib import Path
from typing import Any, Iterable, Optional, Sequence, TextIO

from .config import get_tile_cover_config
from .cover import calculate_tiles, count_tiles
from .errors import TileCoverError
from .observability import configure_logging, generate_run_id, reset_run_id, set_run_id
from .projection import Projection
from .settings import TileCoverSettings

logger = logging.getLogger(__name__)


def _parse_csv(values: Sequence[str]) -> list[str]:
    parts: list[str] = []
    for raw in values:
        if raw is None:
            continue
        text = str(raw).strip()
        if text == "":
            continue
        parts.extend([p.strip() for p in text.split(",") if p.strip()])
    return parts


def _parse_zooms(values: Sequence[str]) -> list[int]:
    out: list[int] = []
    for item in _parse_csv(values):
        try:
            value = int(item)
        except ValueError as exc:
            raise ValueError(f"Invalid zoom value: {item!r}") from exc
        out.append(value)
    if not out:
        raise ValueError("At least one --zoom value is required")
    return out


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tile-cover",
        description="List the map tiles covering the bounding box of a GeoJSON polygon.",
    )
    parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="GeoJSON file (Feature, FeatureCollection, Polygon or MultiPolygon); '-' for stdin",
    )
    parser.add_argument(
        "-z",
        "--zoom",
        action="append",
        required=True,
        help="Zoom level; repeat or comma-separate for several (e.g. 14,16)",
    )
    parser.add_argument(
        "-p",
        "--projection",
        default=None,
        help="web_mercator (EPSG:3857) or wgs84 (EPSG:4326); defaults to config",
    )
    parser.add_argument(
        "--config",
        dest="config_path",
        default=None,
        help="Path to tile-cover.yaml (defaults to TILE_COVER_CONFIG_FILE / config/tile-cover.yaml).",
    )
    parser.add_argument(
        "--by-zoom",
        action="store_true",
        help="Key the output by zoom even for a single zoom level",
    )
    parser.add_argument("--count", action="store_true", help="Print tile counts instead of tiles")
    parser.add_argument("--log-level", default=None)
    parser.add_argument("--log-format", choices=("json", "text"), default=None)
    return parser


def _read_geojson(source: str, stdin: TextIO) -> Any:
    if source == "-":
        return json.load(stdin)
    return json.loads(Path(source).read_text(encoding="utf-8"))


def _render(result: Any) -> Any:
    if isinstance(result, dict):
        return {str(zoom): _render(value) for zoom, value in result.items()}
    if isinstance(result, list):
        return [tile.to_dict() for tile in result]
    return result


def main(
    argv: Optional[Iterable[str]] = None,
    *,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    try:
        settings = TileCoverSettings()
        configure_logging(
            log_level=args.log_level or settings.log_level,
            log_format=args.log_format or settings.log_format,
        )
    except ValueError as exc:
        # Logging is not set up yet.
        sys.stderr.write(f"tile-cover: {exc}\n")
        return 2

    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    token = set_run_id(generate_run_id())
    t0 = time.perf_counter()
    try:
        zooms = _parse_zooms(args.zoom)
        zoom_levels: Any = zooms if (args.by_zoom or len(zooms) > 1) else zooms[0]

        cfg = get_tile_cover_config(args.config_path)
        projection = Projection.parse(args.projection or cfg.default_projection)
        geojson = _read_geojson(args.input, stdin)

        if args.count:
            result = count_tiles(geojson, zoom_levels, projection, config=cfg)
        else:
            result = calculate_tiles(geojson, zoom_levels, projection, config=cfg)

        stdout.write(json.dumps(_render(result), ensure_ascii=False))
        stdout.write("\n")
        logger.info(
            "tile_cover.completed",
            extra={
                "input": args.input,
                "zooms": zooms,
                "projection": projection.value,
                "duration_ms": round((time.perf_counter() - t0) * 1000, 2),
            },
        )
        return 0
    except (TileCoverError, ValueError, OSError) as exc:
        # json.JSONDecodeError is a ValueError; unreadable input files are OSError.
        logger.error(
            "tile_cover.failed",
            extra={"input": args.input, "error_type": type(exc).__name__, "error": str(exc)},
        )
        return 2
    finally:
        reset_run_id(token)


if __name__ == "__main__":
    raise SystemExit(main())
