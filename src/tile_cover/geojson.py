from __future__ import annotations

import logging
from typing import Any, Final, Iterable, Iterator, Mapping

from .bbox import Vertex
from .errors import UnsupportedGeometryError

logger = logging.getLogger(__name__)

POLYGONAL_TYPES: Final[frozenset[str]] = frozenset({"Polygon", "MultiPolygon"})


def _as_mapping(value: Any) -> Mapping[str, Any]:
    geo_interface = getattr(value, "__geo_interface__", None)
    if geo_interface is not None:
        value = geo_interface
    if not isinstance(value, Mapping):
        raise UnsupportedGeometryError(
            f"Expected a GeoJSON object, got {type(value).__name__}"
        )
    return value


def _iter_ring(ring: Iterable[Any]) -> Iterator[Vertex]:
    for position in ring:
        yield (float(position[0]), float(position[1]))


def _iter_polygon(rings: Iterable[Iterable[Any]]) -> Iterator[Vertex]:
    # Exterior and holes alike; only the extent matters downstream.
    for ring in rings:
        yield from _iter_ring(ring)


def iter_geometry_vertices(geometry: Any) -> Iterator[Vertex]:
    """Yield the vertices of a bare Polygon or MultiPolygon geometry."""

    if geometry is None:
        raise UnsupportedGeometryError("Feature has no geometry")
    geometry = _as_mapping(geometry)
    geometry_type = geometry.get("type")

    if geometry_type == "Polygon":
        yield from _iter_polygon(geometry["coordinates"])
    elif geometry_type == "MultiPolygon":
        for polygon in geometry["coordinates"]:
            yield from _iter_polygon(polygon)
    else:
        raise UnsupportedGeometryError(
            f"Unsupported geometry type: {geometry_type!r}; expected Polygon or MultiPolygon"
        )


def _is_polygonal(geometry: Any) -> bool:
    if geometry is None:
        return False
    try:
        geometry = _as_mapping(geometry)
    except UnsupportedGeometryError:
        return False
    return geometry.get("type") in POLYGONAL_TYPES


def iter_vertices(geojson: Any) -> Iterator[Vertex]:
    """Yield every polygon vertex of a Feature, FeatureCollection or geometry.

    Features of a FeatureCollection whose geometry is not a Polygon or
    MultiPolygon are skipped. A lone Feature or bare geometry of any other
    type raises ``UnsupportedGeometryError``.
    """

    obj = _as_mapping(geojson)
    obj_type = obj.get("type")

    if obj_type == "Feature":
        yield from iter_geometry_vertices(obj.get("geometry"))
        return

    if obj_type == "FeatureCollection":
        skipped = 0
        for feature in obj.get("features") or []:
            geometry = _as_mapping(feature).get("geometry")
            if not _is_polygonal(geometry):
                skipped += 1
                continue
            yield from iter_geometry_vertices(geometry)
        if skipped:
            logger.debug(
                "geojson.features_skipped",
                extra={"skipped": skipped, "reason": "non_polygonal_geometry"},
            )
        return

    yield from iter_geometry_vertices(obj)


def extract_vertices(geojson: Any) -> list[Vertex]:
    return list(iter_vertices(geojson))
