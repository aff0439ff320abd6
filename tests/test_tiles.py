from __future__ import annotations

import pytest

from tile_cover.tiles import (
    Tile,
    TileRange,
    count_tiles_in_ranges,
    iter_tiles_in_ranges,
    validate_zoom,
)


def test_tile_serialisation() -> None:
    tile = Tile(x=3, y=5, z=4)
    assert tile.to_dict() == {"x": 3, "y": 5, "z": 4}
    assert tile.path == "4/3/5"
    assert tile == Tile(x=3, y=5, z=4)
    assert len({tile, Tile(x=3, y=5, z=4)}) == 1


def test_range_iterates_x_major() -> None:
    tiles = list(TileRange(z=5, x_min=1, x_max=2, y_min=3, y_max=4))
    assert tiles == [
        Tile(x=1, y=3, z=5),
        Tile(x=1, y=4, z=5),
        Tile(x=2, y=3, z=5),
        Tile(x=2, y=4, z=5),
    ]


def test_reversed_range_is_empty() -> None:
    tile_range = TileRange(z=1, x_min=3, x_max=2, y_min=0, y_max=0)
    assert tile_range.count == 0
    assert list(tile_range) == []


def test_clamped_range_stays_inside_grid() -> None:
    tile_range = TileRange(z=1, x_min=-1, x_max=4, y_min=0, y_max=2)
    assert tile_range.clamped(4, 2) == TileRange(z=1, x_min=0, x_max=3, y_min=0, y_max=1)


def test_ranges_are_concatenated_without_deduplication() -> None:
    ranges = [
        TileRange(z=2, x_min=7, x_max=7, y_min=1, y_max=1),
        TileRange(z=2, x_min=7, x_max=7, y_min=1, y_max=1),
    ]
    assert list(iter_tiles_in_ranges(ranges)) == [Tile(x=7, y=1, z=2)] * 2
    assert count_tiles_in_ranges(ranges) == 2


def test_validate_zoom() -> None:
    assert validate_zoom(0) == 0
    assert validate_zoom(18) == 18
    for bad in (-1, 2.0, "1", None, False):
        with pytest.raises(ValueError, match="Invalid zoom"):
            validate_zoom(bad)
