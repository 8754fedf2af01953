"""
Unit Tests for the Spawn Point Selector
=======================================
Legacy (tagged point) and shape (polygon) allocation backends.

Run with: pytest tests/test_spawn_selector.py -v
"""

import os
import random
import sys
import unittest

# Add project root and tests directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from factories import land, make_theater
from pysortie.classes.coordinates import Coordinates, MinMax
from pysortie.classes.enums import Coalition, SpawnPointType
from pysortie.misc.math_utils import point_in_any_polygon
from pysortie.procedural.spawn_selector import SpawnPointSelector
from pysortie.procedural.validation import ConstraintViolationError

LAND = [SpawnPointType.LAND_MEDIUM]

# Everything east of x = 0 is Red territory
RED_EAST = (((0.0, -1e6), (1e6, -1e6), (1e6, 1e6), (0.0, 1e6)),)
WATER_SOUTH = (((-50000.0, -50000.0), (50000.0, -50000.0), (50000.0, -1000.0), (-50000.0, -1000.0)),)
HARBOR = (((-1000.0, -5000.0), (1000.0, -5000.0), (1000.0, -1000.0), (-1000.0, -1000.0)),)


def legacy_selector(points, seed=1):
    return SpawnPointSelector(make_theater(legacy_spawn_points=points), use_shape_spawning=False,
                              rng=random.Random(seed))


def shape_selector(points=(), seed=1, **polygons):
    return SpawnPointSelector(make_theater(spawn_points=points, shape=True, **polygons),
                              rng=random.Random(seed))


class TestAllocate(unittest.TestCase):
    """Random allocation from the consumable point pool."""

    def test_two_point_scenario(self):
        """Only the point inside the ring is returned, then the pool is dry for that ring."""
        for selector in (legacy_selector([land(0, 0), land(10000, 0)]),
                         shape_selector([land(0, 0), land(10000, 0)])):
            result = selector.allocate(LAND, Coordinates(0, 0), MinMax(9000, 11000))
            self.assertEqual(result, Coordinates(10000, 0))
            self.assertEqual(len(selector.remaining_spawn_points()), 1)
            self.assertIsNone(selector.allocate(LAND, Coordinates(0, 0), MinMax(9000, 11000)))

    def test_each_point_allocated_once(self):
        points = [land(1000 * i, 0) for i in range(20)]
        selector = legacy_selector(points)
        allocated = []
        while True:
            result = selector.allocate(LAND)
            if result is None:
                break
            allocated.append(result)
        self.assertEqual(len(allocated), 20)
        self.assertEqual(len(set(allocated)), 20)
        self.assertEqual(selector.remaining_spawn_points(), [])

    def test_result_respects_both_ranges(self):
        points = [land(x, y) for x in range(-50000, 50001, 5000) for y in range(-50000, 50001, 5000)]
        selector = legacy_selector(points, seed=4)
        origin_a, origin_b = Coordinates(0, 0), Coordinates(20000, 0)
        for _ in range(5):
            result = selector.allocate(LAND, origin_a, MinMax(15000, 30000), origin_b, MinMax(0, 12000))
            self.assertIsNotNone(result)
            self.assertTrue(MinMax(15000, 30000).contains(origin_a.distance_to(result)))
            self.assertTrue(MinMax(0, 12000).contains(origin_b.distance_to(result)))

    def test_range_widens_when_empty(self):
        selector = legacy_selector([land(20000, 0)])
        self.assertEqual(selector.allocate(LAND, Coordinates(0, 0), MinMax(1000, 2000)), Coordinates(20000, 0))

    def test_widening_is_bounded(self):
        selector = legacy_selector([land(100000, 0)])
        self.assertIsNone(selector.allocate(LAND, Coordinates(0, 0), MinMax(1000, 2000)))
        self.assertEqual(len(selector.remaining_spawn_points()), 1)

    def test_origin_without_range_is_ignored(self):
        selector = legacy_selector([land(50000, 0)])
        self.assertEqual(selector.allocate(LAND, Coordinates(0, 0), None), Coordinates(50000, 0))

    def test_no_matching_type_returns_none(self):
        selector = legacy_selector([land(0, 0, SpawnPointType.LAND_SMALL)])
        self.assertIsNone(selector.allocate([SpawnPointType.LAND_LARGE]))
        self.assertIsNone(selector.allocate([SpawnPointType.SEA]))
        self.assertEqual(len(selector.remaining_spawn_points()), 1)

    def test_empty_types_rejected(self):
        selector = legacy_selector([land(0, 0)])
        with self.assertRaises(ConstraintViolationError):
            selector.allocate([])

    def test_mixed_land_and_sea_rejected(self):
        selector = legacy_selector([land(0, 0)])
        with self.assertRaises(ConstraintViolationError):
            selector.allocate([SpawnPointType.SEA, SpawnPointType.LAND_SMALL])
        with self.assertRaises(ConstraintViolationError):
            selector.allocate_nearest([SpawnPointType.SEA, SpawnPointType.LAND_LARGE], Coordinates(0, 0))

    def test_reset_restores_pool(self):
        selector = legacy_selector([land(0, 0), land(1, 0)])
        selector.allocate(LAND)
        selector.allocate(LAND)
        self.assertEqual(selector.remaining_spawn_points(), [])
        selector.reset()
        self.assertEqual(len(selector.remaining_spawn_points()), 2)

    def test_seeded_allocation_is_reproducible(self):
        points = [land(1000 * i, 0) for i in range(30)]
        first, second = legacy_selector(points, seed=9), legacy_selector(points, seed=9)
        for _ in range(5):
            self.assertEqual(first.allocate(LAND), second.allocate(LAND))


class TestLegacyBackend(unittest.TestCase):
    """Coalition tags and air handling of legacy points."""

    def test_coalition_tag_must_match(self):
        selector = legacy_selector([
            land(1000, 0, coalition=Coalition.RED),
            land(2000, 0, coalition=Coalition.BLUE),
            land(3000, 0),
        ])
        self.assertEqual(selector.allocate(LAND, coalition=Coalition.RED), Coordinates(1000, 0))
        self.assertIsNone(selector.allocate(LAND, coalition=Coalition.RED))
        self.assertEqual(selector.allocate(LAND, coalition=Coalition.BLUE), Coordinates(2000, 0))
        self.assertEqual(selector.allocate(LAND), Coordinates(3000, 0))

    def test_air_accepts_any_point(self):
        selector = legacy_selector([land(0, 0, SpawnPointType.LAND_SMALL)])
        self.assertEqual(selector.allocate([SpawnPointType.AIR]), Coordinates(0, 0))
        self.assertEqual(selector.remaining_spawn_points(), [])

    def test_legacy_is_used_when_shape_disabled(self):
        theater = make_theater(spawn_points=[land(1, 1)], legacy_spawn_points=[land(2, 2)], shape=True)
        selector = SpawnPointSelector(theater, use_shape_spawning=False, rng=random.Random(0))
        self.assertFalse(selector.use_shape_system)
        self.assertEqual(selector.allocate(LAND), Coordinates(2, 2))


class TestShapeBackend(unittest.TestCase):
    """Polygon territory checks and sampled air and sea positions."""

    def test_hostile_territory_excluded(self):
        selector = shape_selector([land(-5000, 0), land(5000, 0)], red_territory=RED_EAST)
        self.assertEqual(selector.allocate(LAND, coalition=Coalition.BLUE), Coordinates(-5000, 0))
        self.assertIsNone(selector.allocate(LAND, coalition=Coalition.BLUE))
        self.assertEqual(selector.allocate(LAND, coalition=Coalition.RED), Coordinates(5000, 0))

    def test_sea_positions_fall_on_water(self):
        selector = shape_selector([land(0, 0)], seed=2, water=WATER_SOUTH, water_exclusion=HARBOR)
        for _ in range(20):
            result = selector.allocate([SpawnPointType.SEA], Coordinates(0, 0), MinMax(1000, 5000))
            self.assertIsNotNone(result)
            self.assertTrue(point_in_any_polygon(tuple(result), WATER_SOUTH))
            self.assertFalse(point_in_any_polygon(tuple(result), HARBOR))
        # Sampled positions never consume the land pool
        self.assertEqual(len(selector.remaining_spawn_points()), 1)

    def test_sea_without_water_is_exhausted(self):
        selector = shape_selector([land(0, 0)])
        self.assertIsNone(selector.allocate([SpawnPointType.SEA], Coordinates(0, 0), MinMax(1000, 5000)))

    def test_air_positions_avoid_hostile_territory(self):
        selector = shape_selector(seed=6, red_territory=RED_EAST)
        origin_b = Coordinates(-3000, 0)
        for _ in range(20):
            result = selector.allocate([SpawnPointType.AIR], Coordinates(0, 0), MinMax(1000, 5000),
                                       origin_b, MinMax(0, 2500), Coalition.BLUE)
            self.assertIsNotNone(result)
            self.assertFalse(point_in_any_polygon(tuple(result), RED_EAST))
            self.assertLessEqual(origin_b.distance_to(result), 2500)

    def test_air_needs_primary_origin(self):
        selector = shape_selector()
        with self.assertRaises(ValueError):
            selector.allocate([SpawnPointType.AIR])


class TestAllocateNearest(unittest.TestCase):
    """Deterministic nearest-point lookups."""

    def setUp(self):
        self.selector = legacy_selector([land(1000, 0), land(2000, 0), land(5000, 0)])

    def test_nearest_consumed(self):
        self.assertEqual(self.selector.allocate_nearest(LAND, Coordinates(1900, 0)), Coordinates(2000, 0))
        self.assertEqual(len(self.selector.remaining_spawn_points()), 2)
        self.assertEqual(self.selector.allocate_nearest(LAND, Coordinates(1900, 0)), Coordinates(1000, 0))

    def test_nearest_peek(self):
        for _ in range(3):
            result = self.selector.allocate_nearest(LAND, Coordinates(4000, 0), consume=False)
            self.assertEqual(result, Coordinates(5000, 0))
        self.assertEqual(len(self.selector.remaining_spawn_points()), 3)

    def test_nearest_exhausted(self):
        self.assertIsNone(self.selector.allocate_nearest([SpawnPointType.LAND_SMALL], Coordinates(0, 0)))

    def test_nearest_air_in_shape_system(self):
        selector = shape_selector(seed=8)
        origin = Coordinates(10000, 10000)
        result = selector.allocate_nearest([SpawnPointType.AIR], origin)
        self.assertLessEqual(origin.distance_to(result), 1000)


if __name__ == '__main__':
    unittest.main()
