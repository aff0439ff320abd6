"""Tile coverage for polygonal GeoJSON under Web Mercator and WGS84 grids."""

from .bbox import BoundingBox, compute_bounding_box
from .config import TileCoverConfig, get_tile_cover_config, load_tile_cover_config
from .cover import (
    bounding_box_for_geojson,
    calculate_tiles,
    count_tiles,
    tile_ranges_for_bbox,
    tile_ranges_for_geojson,
    tiles_for_bbox,
)
from .errors import (
    DegenerateInputError,
    TileCoverError,
    TileLimitExceededError,
    UnsupportedGeometryError,
)
from .geojson import extract_vertices, iter_vertices
from .projection import Projection
from .tiles import Tile, TileRange

__all__ = [
    "BoundingBox",
    "DegenerateInputError",
    "Projection",
    "Tile",
    "TileCoverConfig",
    "TileCoverError",
    "TileLimitExceededError",
    "TileRange",
    "UnsupportedGeometryError",
    "bounding_box_for_geojson",
    "calculate_tiles",
    "compute_bounding_box",
    "count_tiles",
    "extract_vertices",
    "get_tile_cover_config",
    "iter_vertices",
    "load_tile_cover_config",
    "tile_ranges_for_bbox",
    "tile_ranges_for_geojson",
    "tiles_for_bbox",
]
