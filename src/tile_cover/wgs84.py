"""Geographic (EPSG:4326, TMS-style) tile grid.

The grid has ``2 * 2**z`` columns and ``2**z`` rows. Column indices are
derived in two stages: longitude is first indexed into the half-width
``2**z`` grid and the resulting bounds are then doubled, so a range of
half-width columns ``[a, b]`` emits full-width columns ``2a .. 2b``. Rows are
counted from the north edge (row 0 touches ``+90``).
"""

from __future__ import annotations

import math
from typing import Final

from .bbox import BoundingBox
from .tiles import Tile, TileRange, iter_tiles_in_ranges, validate_zoom

LON_MIN: Final[float] = -180.0
LON_MAX: Final[float] = 180.0
LAT_MIN: Final[float] = -90.0
LAT_MAX: Final[float] = 90.0

# Same limit as Web Mercator; a policy choice, not a property of this grid.
GEOGRAPHIC_MAX_LAT: Final[float] = 85.0511


def clamp_lat(lat: float, max_lat: float = GEOGRAPHIC_MAX_LAT) -> float:
    return max(-max_lat, min(max_lat, lat))


def normalize_lng(lng: float) -> float:
    """Wrap a longitude into ``[-180, 180)``."""

    span = LON_MAX - LON_MIN
    out = ((lng - LON_MIN) % span) + LON_MIN
    # Float modulo can round up to the full span just below -180.
    if out >= LON_MAX:
        out -= span
    return out


def grid_size(zoom: int) -> tuple[int, int]:
    """Return (columns, rows) of the 2:1 geographic grid at ``zoom``."""

    n = 1 << validate_zoom(zoom)
    return 2 * n, n


def lng_to_tile_x(lng: float, zoom: int) -> int:
    """Index ``lng`` into the half-width (``2**zoom`` column) grid."""

    n = 1 << validate_zoom(zoom)
    return int(math.floor(((lng - LON_MIN) / (LON_MAX - LON_MIN)) * n))


def lat_to_tile_y(lat: float, zoom: int) -> int:
    n = 1 << validate_zoom(zoom)
    return int(math.floor(((LAT_MAX - lat) / (LAT_MAX - LAT_MIN)) * n))


def _span_range(
    west: float, south: float, east: float, north: float, zoom: int
) -> TileRange:
    return TileRange(
        z=zoom,
        x_min=2 * lng_to_tile_x(west, zoom),
        x_max=2 * lng_to_tile_x(east, zoom),
        y_min=lat_to_tile_y(north, zoom),
        y_max=lat_to_tile_y(south, zoom),
    )


def tile_ranges(
    bbox: BoundingBox, zoom: int, *, max_lat: float = GEOGRAPHIC_MAX_LAT
) -> list[TileRange]:
    """Return the tile blocks covering ``bbox`` at ``zoom``.

    A box whose raw longitude span is 360 degrees or more covers every
    column. A box that crosses the antimeridian once longitudes are
    normalised (west > east) is split into ``[west, 180]`` and
    ``[-180, east]``; the west block comes first and blocks are not
    deduplicated.
    """

    zoom = validate_zoom(zoom)

    south = clamp_lat(bbox.min_lat, max_lat)
    north = clamp_lat(bbox.max_lat, max_lat)

    if bbox.max_lng - bbox.min_lng >= LON_MAX - LON_MIN:
        columns, _ = grid_size(zoom)
        return [
            TileRange(
                z=zoom,
                x_min=0,
                x_max=columns - 1,
                y_min=lat_to_tile_y(north, zoom),
                y_max=lat_to_tile_y(south, zoom),
            )
        ]

    west = normalize_lng(bbox.min_lng)
    east = normalize_lng(bbox.max_lng)

    if west > east:
        spans = [(west, LON_MAX), (LON_MIN, east)]
    else:
        spans = [(west, east)]

    return [_span_range(w, south, e, north, zoom) for w, e in spans]


def tiles_for_bbox(
    bbox: BoundingBox, zoom: int, *, max_lat: float = GEOGRAPHIC_MAX_LAT
) -> list[Tile]:
    return list(iter_tiles_in_ranges(tile_ranges(bbox, zoom, max_lat=max_lat)))


def tile_x_to_lng(x: float, zoom: int) -> float:
    columns, _ = grid_size(zoom)
    return LON_MIN + (x / columns) * (LON_MAX - LON_MIN)


def tile_y_to_lat(y: float, zoom: int) -> float:
    _, rows = grid_size(zoom)
    return LAT_MAX - (y / rows) * (LAT_MAX - LAT_MIN)


def tile_bounds(tile: Tile) -> BoundingBox:
    return BoundingBox(
        min_lng=tile_x_to_lng(tile.x, tile.z),
        min_lat=tile_y_to_lat(tile.y + 1, tile.z),
        max_lng=tile_x_to_lng(tile.x + 1, tile.z),
        max_lat=tile_y_to_lat(tile.y, tile.z),
    )
