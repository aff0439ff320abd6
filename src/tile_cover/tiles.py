from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Iterator


def validate_zoom(zoom: Any) -> int:
    """Return ``zoom`` as an int, rejecting negatives, floats and bools."""

    if isinstance(zoom, bool) or not isinstance(zoom, int):
        raise ValueError(f"Invalid zoom: {zoom!r}")
    if zoom < 0:
        raise ValueError(f"Invalid zoom: {zoom}")
    return int(zoom)


@dataclass(frozen=True)
class Tile:
    """A single tile address on a projection grid."""

    x: int
    y: int
    z: int

    @property
    def path(self) -> str:
        return f"{self.z}/{self.x}/{self.y}"

    def to_dict(self) -> dict[str, int]:
        return {"x": self.x, "y": self.y, "z": self.z}


def _clamp_int(value: int, minimum: int, maximum: int) -> int:
    return max(minimum, min(maximum, int(value)))


@dataclass(frozen=True)
class TileRange:
    """Inclusive block of tiles at one zoom.

    Iteration is x-major: every row of the first column, then the next
    column. A range whose min bound exceeds its max bound on either axis is
    empty.
    """

    z: int
    x_min: int
    x_max: int
    y_min: int
    y_max: int

    @property
    def width(self) -> int:
        return max(0, self.x_max - self.x_min + 1)

    @property
    def height(self) -> int:
        return max(0, self.y_max - self.y_min + 1)

    @property
    def count(self) -> int:
        return self.width * self.height

    def clamped(self, columns: int, rows: int) -> "TileRange":
        """Clamp the range endpoints into a ``columns x rows`` grid."""

        return TileRange(
            z=self.z,
            x_min=_clamp_int(self.x_min, 0, columns - 1),
            x_max=_clamp_int(self.x_max, 0, columns - 1),
            y_min=_clamp_int(self.y_min, 0, rows - 1),
            y_max=_clamp_int(self.y_max, 0, rows - 1),
        )

    def __iter__(self) -> Iterator[Tile]:
        for x in range(self.x_min, self.x_max + 1):
            for y in range(self.y_min, self.y_max + 1):
                yield Tile(x=x, y=y, z=self.z)


def iter_tiles_in_ranges(ranges: Iterable[TileRange]) -> Iterator[Tile]:
    """Iterate tiles for precomputed ranges, in order, without deduplication."""

    for tile_range in ranges:
        yield from tile_range


def count_tiles_in_ranges(ranges: Iterable[TileRange]) -> int:
    return sum(tile_range.count for tile_range in ranges)
