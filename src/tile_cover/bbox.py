from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

from .errors import DegenerateInputError

Vertex = tuple[float, float]


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned lng/lat rectangle in degrees (EPSG:4326).

    Ordering is not enforced here: a box produced by
    :func:`compute_bounding_box` always has ``min <= max``, but the
    geographic calculator also accepts antimeridian-crossing boxes such as
    ``min_lng=170, max_lng=-170``.
    """

    min_lng: float
    min_lat: float
    max_lng: float
    max_lat: float

    @property
    def west(self) -> float:
        return self.min_lng

    @property
    def south(self) -> float:
        return self.min_lat

    @property
    def east(self) -> float:
        return self.max_lng

    @property
    def north(self) -> float:
        return self.max_lat

    def union(self, other: "BoundingBox") -> "BoundingBox":
        return BoundingBox(
            min_lng=min(self.min_lng, other.min_lng),
            min_lat=min(self.min_lat, other.min_lat),
            max_lng=max(self.max_lng, other.max_lng),
            max_lat=max(self.max_lat, other.max_lat),
        )

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.min_lng, self.min_lat, self.max_lng, self.max_lat)


def compute_bounding_box(vertices: Iterable[Vertex]) -> BoundingBox:
    """Fold vertices into their bounding box.

    Raises ``DegenerateInputError`` for an empty sequence or a non-finite
    coordinate, since neither has a meaningful extent.
    """

    min_lng = math.inf
    min_lat = math.inf
    max_lng = -math.inf
    max_lat = -math.inf
    seen = 0

    for lng, lat in vertices:
        lng = float(lng)
        lat = float(lat)
        if not (math.isfinite(lng) and math.isfinite(lat)):
            raise DegenerateInputError(f"Non-finite vertex: ({lng}, {lat})")
        min_lng = min(min_lng, lng)
        min_lat = min(min_lat, lat)
        max_lng = max(max_lng, lng)
        max_lat = max(max_lat, lat)
        seen += 1

    if seen == 0:
        raise DegenerateInputError("No polygon vertices to bound")

    return BoundingBox(min_lng=min_lng, min_lat=min_lat, max_lng=max_lng, max_lat=max_lat)
