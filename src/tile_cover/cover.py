from __future__ import annotations

import logging
from typing import Any, Optional, Sequence, Union

from . import web_mercator, wgs84
from .bbox import BoundingBox, compute_bounding_box
from .config import DEFAULT_TILE_COVER_CONFIG, TileCoverConfig
from .errors import TileLimitExceededError
from .geojson import iter_vertices
from .projection import Projection
from .tiles import Tile, TileRange, count_tiles_in_ranges, iter_tiles_in_ranges, validate_zoom

logger = logging.getLogger(__name__)

ZoomLevels = Union[int, Sequence[int]]
TileResult = Union[list[Tile], dict[int, list[Tile]]]


def _normalize_zoom_levels(zoom_levels: Any) -> tuple[list[int], bool]:
    """Return (zooms, keyed) where ``keyed`` is true for list/tuple input."""

    if isinstance(zoom_levels, (list, tuple)):
        return [validate_zoom(zoom) for zoom in zoom_levels], True
    return [validate_zoom(zoom_levels)], False


def bounding_box_for_geojson(geojson: Any) -> BoundingBox:
    return compute_bounding_box(iter_vertices(geojson))


def tile_ranges_for_bbox(
    bbox: BoundingBox,
    zoom: int,
    projection: Union[Projection, str] = Projection.WEB_MERCATOR,
    *,
    config: Optional[TileCoverConfig] = None,
) -> list[TileRange]:
    cfg = config or DEFAULT_TILE_COVER_CONFIG
    projection = Projection.parse(projection)

    if projection is Projection.WEB_MERCATOR:
        ranges = web_mercator.tile_ranges(
            bbox, zoom, radius=cfg.earth_radius_m, max_lat=cfg.mercator_max_lat
        )
        columns, rows = web_mercator.grid_size(zoom)
    else:
        ranges = wgs84.tile_ranges(bbox, zoom, max_lat=cfg.geographic_max_lat)
        columns, rows = wgs84.grid_size(zoom)

    if cfg.clamp_tile_indices:
        ranges = [tile_range.clamped(columns, rows) for tile_range in ranges]
    return ranges


def _check_limit(ranges: list[TileRange], zoom: int, cfg: TileCoverConfig) -> int:
    total = count_tiles_in_ranges(ranges)
    if cfg.max_tiles_per_zoom is not None and total > cfg.max_tiles_per_zoom:
        raise TileLimitExceededError(
            f"Zoom {zoom} covers {total} tiles, above max_tiles_per_zoom={cfg.max_tiles_per_zoom}"
        )
    return total


def tiles_for_bbox(
    bbox: BoundingBox,
    zoom: int,
    projection: Union[Projection, str] = Projection.WEB_MERCATOR,
    *,
    config: Optional[TileCoverConfig] = None,
) -> list[Tile]:
    cfg = config or DEFAULT_TILE_COVER_CONFIG
    ranges = tile_ranges_for_bbox(bbox, zoom, projection, config=cfg)
    _check_limit(ranges, zoom, cfg)
    return list(iter_tiles_in_ranges(ranges))


def tile_ranges_for_geojson(
    geojson: Any,
    zoom: int,
    projection: Union[Projection, str] = Projection.WEB_MERCATOR,
    *,
    config: Optional[TileCoverConfig] = None,
) -> list[TileRange]:
    bbox = bounding_box_for_geojson(geojson)
    return tile_ranges_for_bbox(bbox, validate_zoom(zoom), projection, config=config)


def calculate_tiles(
    geojson: Any,
    zoom_levels: ZoomLevels,
    projection: Union[Projection, str] = Projection.WEB_MERCATOR,
    *,
    config: Optional[TileCoverConfig] = None,
) -> TileResult:
    """Compute the tiles covering the bounding box of a polygonal GeoJSON value.

    ``zoom_levels`` may be a single zoom or a list/tuple of zooms. A single
    zoom returns a list of tiles; a list returns a dict mapping each zoom to
    its tiles. Vertices are extracted and bounded once for all zooms.
    """

    zooms, keyed = _normalize_zoom_levels(zoom_levels)
    projection = Projection.parse(projection)
    cfg = config or DEFAULT_TILE_COVER_CONFIG

    bbox = bounding_box_for_geojson(geojson)

    results: dict[int, list[Tile]] = {}
    for zoom in zooms:
        tiles = tiles_for_bbox(bbox, zoom, projection, config=cfg)
        results[zoom] = tiles
        logger.debug(
            "tile_cover.zoom_computed",
            extra={
                "zoom": zoom,
                "projection": projection.value,
                "tile_count": len(tiles),
            },
        )

    if keyed:
        return results
    return results[zooms[0]]


def count_tiles(
    geojson: Any,
    zoom_levels: ZoomLevels,
    projection: Union[Projection, str] = Projection.WEB_MERCATOR,
    *,
    config: Optional[TileCoverConfig] = None,
) -> Union[int, dict[int, int]]:
    """Like :func:`calculate_tiles` but returns tile counts only."""

    zooms, keyed = _normalize_zoom_levels(zoom_levels)
    projection = Projection.parse(projection)
    cfg = config or DEFAULT_TILE_COVER_CONFIG

    bbox = bounding_box_for_geojson(geojson)

    counts = {
        zoom: count_tiles_in_ranges(tile_ranges_for_bbox(bbox, zoom, projection, config=cfg))
        for zoom in zooms
    }
    if keyed:
        return counts
    return counts[zooms[0]]
