from __future__ import annotations

import math
from typing import Final

from .bbox import BoundingBox
from .tiles import Tile, TileRange, iter_tiles_in_ranges, validate_zoom

EARTH_RADIUS_M: Final[float] = 6378137.0
WEB_MERCATOR_MAX_LAT: Final[float] = 85.0511


def clamp_lat(lat: float, max_lat: float = WEB_MERCATOR_MAX_LAT) -> float:
    return max(-max_lat, min(max_lat, lat))


def grid_size(zoom: int) -> tuple[int, int]:
    """Return (columns, rows) of the square Web Mercator grid at ``zoom``."""

    n = 1 << validate_zoom(zoom)
    return n, n


def world_size(radius: float = EARTH_RADIUS_M) -> float:
    return 2.0 * math.pi * radius


def lng_to_meters(lng: float, radius: float = EARTH_RADIUS_M) -> float:
    return lng * (math.pi / 180.0) * radius


def lat_to_meters(lat: float, radius: float = EARTH_RADIUS_M) -> float:
    # Singular at the poles; callers clamp first.
    return math.log(math.tan(math.pi / 4.0 + (lat * (math.pi / 180.0)) / 2.0)) * radius


def meters_to_tile_x(x: float, zoom: int, radius: float = EARTH_RADIUS_M) -> int:
    n, _ = grid_size(zoom)
    return int(math.floor((x / world_size(radius) + 0.5) * n))


def meters_to_tile_y(y: float, zoom: int, radius: float = EARTH_RADIUS_M) -> int:
    # Tile rows grow southwards while Mercator y grows northwards.
    _, n = grid_size(zoom)
    return int(math.floor((0.5 - y / world_size(radius)) * n))


def tile_range(
    bbox: BoundingBox,
    zoom: int,
    *,
    radius: float = EARTH_RADIUS_M,
    max_lat: float = WEB_MERCATOR_MAX_LAT,
) -> TileRange:
    """Return the inclusive tile block covering ``bbox`` at ``zoom``.

    Longitudes are projected as given; the x bounds are not reordered.
    """

    zoom = validate_zoom(zoom)

    min_x = lng_to_meters(bbox.min_lng, radius)
    max_x = lng_to_meters(bbox.max_lng, radius)

    y_a = lat_to_meters(clamp_lat(bbox.min_lat, max_lat), radius)
    y_b = lat_to_meters(clamp_lat(bbox.max_lat, max_lat), radius)
    min_y = min(y_a, y_b)
    max_y = max(y_a, y_b)

    return TileRange(
        z=zoom,
        x_min=meters_to_tile_x(min_x, zoom, radius),
        x_max=meters_to_tile_x(max_x, zoom, radius),
        y_min=meters_to_tile_y(max_y, zoom, radius),
        y_max=meters_to_tile_y(min_y, zoom, radius),
    )


def tile_ranges(
    bbox: BoundingBox,
    zoom: int,
    *,
    radius: float = EARTH_RADIUS_M,
    max_lat: float = WEB_MERCATOR_MAX_LAT,
) -> list[TileRange]:
    return [tile_range(bbox, zoom, radius=radius, max_lat=max_lat)]


def tiles_for_bbox(
    bbox: BoundingBox,
    zoom: int,
    *,
    radius: float = EARTH_RADIUS_M,
    max_lat: float = WEB_MERCATOR_MAX_LAT,
) -> list[Tile]:
    return list(iter_tiles_in_ranges(tile_ranges(bbox, zoom, radius=radius, max_lat=max_lat)))


def tile_x_to_lng(x: float, zoom: int) -> float:
    n, _ = grid_size(zoom)
    return x / n * 360.0 - 180.0


def tile_y_to_lat(y: float, zoom: int) -> float:
    _, n = grid_size(zoom)
    lat_rad = math.atan(math.sinh(math.pi * (1.0 - 2.0 * y / n)))
    return math.degrees(lat_rad)


def tile_bounds(tile: Tile) -> BoundingBox:
    return BoundingBox(
        min_lng=tile_x_to_lng(tile.x, tile.z),
        min_lat=tile_y_to_lat(tile.y + 1, tile.z),
        max_lng=tile_x_to_lng(tile.x + 1, tile.z),
        max_lat=tile_y_to_lat(tile.y, tile.z),
    )
