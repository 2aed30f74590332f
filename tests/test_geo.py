"""Tests for food_resources.utils.geo."""

import json
import math

import pytest

from food_resources.utils.geo import (
    BBox,
    compute_distance,
    is_valid_point,
    rank_by_distance,
)

ATLANTA = (33.7490, -84.3880)
DECATUR = (33.7748, -84.2963)
NEW_YORK = (40.7128, -74.0060)


class TestComputeDistance:
    def test_atlanta_to_decatur(self):
        d = compute_distance(*ATLANTA, *DECATUR)
        assert 5 < d < 7

    def test_atlanta_to_new_york(self):
        d = compute_distance(*ATLANTA, *NEW_YORK)
        assert 740 < d < 760

    def test_same_point_is_zero(self):
        assert compute_distance(*ATLANTA, *ATLANTA) == 0.0

    def test_symmetric(self):
        assert compute_distance(*ATLANTA, *NEW_YORK) == compute_distance(*NEW_YORK, *ATLANTA)
        assert compute_distance(*ATLANTA, *DECATUR) == compute_distance(*DECATUR, *ATLANTA)

    def test_rounded_to_one_decimal(self):
        d = compute_distance(33.7490, -84.3880, 33.7591, -84.3981)
        assert d == round(d, 1)
        assert len(str(d).split(".")[1]) <= 1

    def test_equator_one_degree(self):
        # one degree of longitude at the equator is ~69.1 miles
        assert compute_distance(0, 0, 0, 1) == 69.1

    @pytest.mark.parametrize(
        "coords",
        [
            (90, 0, 0, 0),
            (-90, 0, 0, 0),
            (0, 180, 0, 0),
            (0, -180, 0, 0),
            (90, 180, -90, -180),
        ],
    )
    def test_boundaries_accepted(self, coords):
        d = compute_distance(*coords)
        assert d is not None
        assert d >= 0

    def test_antipodes_do_not_raise(self):
        d = compute_distance(0, 0, 0, 180)
        assert d == pytest.approx(math.pi * 3958.8, abs=0.1)

    @pytest.mark.parametrize(
        "coords",
        [
            (None, -84.388, 33.7748, -84.2963),
            (33.749, None, 33.7748, -84.2963),
            (33.749, -84.388, None, -84.2963),
            (33.749, -84.388, 33.7748, None),
            ("33.749", -84.388, 33.7748, -84.2963),
            (33.749, -84.388, [33.7], -84.2963),
            (True, -84.388, 33.7748, -84.2963),
            (float("nan"), -84.388, 33.7748, -84.2963),
            (33.749, -84.388, 33.7748, float("nan")),
            (90.0001, -84.388, 33.7748, -84.2963),
            (-91, -84.388, 33.7748, -84.2963),
            (33.749, 180.5, 33.7748, -84.2963),
            (33.749, -84.388, 33.7748, -181),
            (float("inf"), -84.388, 33.7748, -84.2963),
        ],
    )
    def test_invalid_inputs_are_unknown(self, coords):
        assert compute_distance(*coords) is None

    def test_integers_accepted(self):
        assert compute_distance(33, -84, 34, -84) == 69.1

    def test_huge_json_integer_is_unknown(self):
        # JSON integers are unbounded; float conversion of this one overflows
        big = json.loads("1" + "0" * 400)
        assert compute_distance(big, 0, 0, 0) is None
        assert compute_distance(0, 0, 0, -big) is None


class TestIsValidPoint:
    def test_valid(self):
        assert is_valid_point(33.749, -84.388)
        assert is_valid_point(-90, 180)

    def test_invalid(self):
        assert not is_valid_point(None, -84.388)
        assert not is_valid_point(95, 0)
        assert not is_valid_point(0, "0")


class TestRankByDistance:
    def _entities(self):
        return [
            {"id": 1, "name": "New York", "latitude": NEW_YORK[0], "longitude": NEW_YORK[1]},
            {"id": 2, "name": "No coords A"},
            {"id": 3, "name": "Decatur", "latitude": DECATUR[0], "longitude": DECATUR[1]},
            {"id": 4, "name": "Bad coords", "latitude": 200.0, "longitude": -84.0},
            {"id": 5, "name": "Downtown", "latitude": ATLANTA[0], "longitude": ATLANTA[1]},
            {"id": 6, "name": "No coords B", "latitude": None, "longitude": None},
        ]

    def test_no_origin_returns_input_unchanged(self):
        entities = self._entities()
        assert rank_by_distance(entities, None, None) is entities
        assert rank_by_distance(entities, ATLANTA[0], None) is entities
        assert rank_by_distance(entities, None, ATLANTA[1]) is entities
        assert all("distance" not in e for e in entities)

    def test_nearest_first_unknown_last(self):
        ranked = rank_by_distance(self._entities(), *ATLANTA)
        assert [e["id"] for e in ranked] == [5, 3, 1, 2, 4, 6]
        assert ranked[0]["distance"] == 0.0
        assert 5 < ranked[1]["distance"] < 7
        assert [e["distance"] for e in ranked[3:]] == [None, None, None]

    def test_known_distances_non_decreasing(self):
        ranked = rank_by_distance(self._entities(), *DECATUR)
        known = [e["distance"] for e in ranked if e["distance"] is not None]
        assert known == sorted(known)
        seen_unknown = False
        for e in ranked:
            if e["distance"] is None:
                seen_unknown = True
            else:
                assert not seen_unknown

    def test_ties_keep_input_order(self):
        entities = [
            {"id": "a", "latitude": DECATUR[0], "longitude": DECATUR[1]},
            {"id": "b", "latitude": DECATUR[0], "longitude": DECATUR[1]},
            {"id": "c", "latitude": DECATUR[0], "longitude": DECATUR[1]},
        ]
        ranked = rank_by_distance(entities, *ATLANTA)
        assert [e["id"] for e in ranked] == ["a", "b", "c"]

    def test_input_not_mutated(self):
        entities = self._entities()
        snapshot = [dict(e) for e in entities]
        ranked = rank_by_distance(entities, *ATLANTA)
        assert entities == snapshot
        assert all("distance" not in e for e in entities)
        assert all(r is not e for r in ranked for e in entities)

    def test_invalid_origin_marks_everything_unknown(self):
        ranked = rank_by_distance(self._entities(), 123.0, -84.0)
        assert [e["id"] for e in ranked] == [1, 2, 3, 4, 5, 6]
        assert all(e["distance"] is None for e in ranked)

    def test_empty(self):
        assert rank_by_distance([], *ATLANTA) == []

    def test_huge_integer_latitude_ranked_last(self):
        big = json.loads("1" + "0" * 400)
        entities = [
            {"id": 1, "latitude": big, "longitude": -84.0},
            {"id": 2, "latitude": DECATUR[0], "longitude": DECATUR[1]},
        ]
        ranked = rank_by_distance(entities, *ATLANTA)
        assert [e["id"] for e in ranked] == [2, 1]
        assert ranked[1]["distance"] is None


class TestBBox:
    def test_contains_metro_point(self):
        box = BBox(west=-85.2, south=33.2, east=-83.7, north=34.5)
        assert box.contains(*ATLANTA)
        assert box.contains(*DECATUR)
        assert not box.contains(*NEW_YORK)

    def test_edges_inclusive(self):
        box = BBox(west=-1, south=-1, east=1, north=1)
        assert box.contains(1, -1)
        assert not box.contains(1.01, 0)
