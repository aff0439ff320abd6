from __future__ import annotations

import math

import pytest

from tile_cover.bbox import BoundingBox, compute_bounding_box
from tile_cover.errors import DegenerateInputError


def test_compute_bounding_box_takes_independent_extrema() -> None:
    bbox = compute_bounding_box([(10.0, -5.0), (-3.0, 7.0), (4.0, 1.0)])
    assert bbox == BoundingBox(min_lng=-3.0, min_lat=-5.0, max_lng=10.0, max_lat=7.0)
    assert bbox.as_tuple() == (-3.0, -5.0, 10.0, 7.0)
    assert (bbox.west, bbox.south, bbox.east, bbox.north) == bbox.as_tuple()


def test_compute_bounding_box_is_order_independent() -> None:
    vertices = [(1.0, 2.0), (5.0, -1.0), (-2.0, 9.0), (3.0, 3.0)]
    assert compute_bounding_box(vertices) == compute_bounding_box(list(reversed(vertices)))


def test_union_matches_reduction_over_concatenation() -> None:
    left = [(0.0, 0.0), (1.0, 1.0)]
    right = [(-4.0, 2.0), (0.5, -3.0)]

    merged = compute_bounding_box(left).union(compute_bounding_box(right))

    assert merged == compute_bounding_box(left + right)


def test_single_point_collapses_box() -> None:
    bbox = compute_bounding_box([(116.3, 39.9)] * 3)
    assert bbox.min_lng == bbox.max_lng == 116.3
    assert bbox.min_lat == bbox.max_lat == 39.9


def test_empty_input_is_degenerate() -> None:
    with pytest.raises(DegenerateInputError, match="No polygon vertices"):
        compute_bounding_box([])


@pytest.mark.parametrize("vertex", [(math.nan, 0.0), (0.0, math.inf)])
def test_non_finite_vertex_is_degenerate(vertex: tuple) -> None:
    with pytest.raises(DegenerateInputError, match="Non-finite vertex"):
        compute_bounding_box([(0.0, 0.0), vertex])
