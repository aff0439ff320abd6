from __future__ import annotations

from enum import Enum
from typing import Any


class Projection(str, Enum):
    WEB_MERCATOR = "web_mercator"
    WGS84 = "wgs84"

    @classmethod
    def parse(cls, value: Any) -> "Projection":
        if isinstance(value, Projection):
            return value
        normalized = str(value or "").strip().lower()
        if normalized in _ALIASES:
            return _ALIASES[normalized]
        raise ValueError(
            f"Unsupported projection={value!r}; supported: "
            f"{sorted(p.value for p in Projection)}"
        )


_ALIASES: dict[str, Projection] = {
    "web_mercator": Projection.WEB_MERCATOR,
    "webmercator": Projection.WEB_MERCATOR,
    "mercator": Projection.WEB_MERCATOR,
    "epsg:3857": Projection.WEB_MERCATOR,
    "3857": Projection.WEB_MERCATOR,
    "wgs84": Projection.WGS84,
    "geographic": Projection.WGS84,
    "tms": Projection.WGS84,
    "epsg:4326": Projection.WGS84,
    "4326": Projection.WGS84,
}
