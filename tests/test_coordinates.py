"""
Unit Tests for Coordinates, Ranges and Geometry Helpers
=======================================================

Run with: pytest tests/test_coordinates.py -v
"""

import os
import random
import sys
import unittest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from pysortie.classes.coordinates import NM_TO_METERS, Coordinates, MinMax, MinMaxI
from pysortie.misc.math_utils import (
    calculate_2d_distance,
    distances_from,
    find_closest_position,
    point_in_any_polygon,
    point_in_polygon,
)

SQUARE = ((0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0))


class TestMinMax(unittest.TestCase):
    """Interval behavior used by every radius search."""

    def test_bounds_swapped(self):
        r = MinMax(20, 10)
        self.assertEqual((r.min, r.max), (10, 20))
        ri = MinMaxI(5, 2)
        self.assertEqual((ri.min, ri.max), (2, 5))

    def test_contains_is_inclusive(self):
        r = MinMax(10, 20)
        self.assertTrue(r.contains(10))
        self.assertTrue(20 in r)
        self.assertFalse(r.contains(20.001))

    def test_decayed_widens_both_ends(self):
        r = MinMax(1000, 2000).decayed()
        self.assertAlmostEqual(r.min, 900)
        self.assertAlmostEqual(r.max, 2200)

    def test_decayed_max_floor(self):
        r = MinMax(0, 10).decayed()
        self.assertEqual(r.min, 0)
        self.assertEqual(r.max, 100)

    def test_scaled_to_meters(self):
        r = MinMax(1, 2).scaled(NM_TO_METERS)
        self.assertAlmostEqual(r.min, 1852.0)
        self.assertAlmostEqual(r.max, 3704.0)

    def test_random_values_in_range(self):
        rng = random.Random(3)
        r = MinMax(5, 6)
        ri = MinMaxI(2, 4)
        for _ in range(50):
            self.assertTrue(r.contains(r.random_value(rng)))
            self.assertTrue(ri.contains(ri.random_value(rng)))

    def test_from_sequence(self):
        self.assertEqual(MinMax.from_sequence([3, 1]), MinMax(1.0, 3.0))


class TestCoordinates(unittest.TestCase):
    """Coordinates arithmetic and random placement."""

    def test_arithmetic(self):
        a = Coordinates(1, 2)
        b = Coordinates(3, 5)
        self.assertEqual(a + b, Coordinates(4, 7))
        self.assertEqual(b - a, Coordinates(2, 3))
        self.assertEqual(a * 2, Coordinates(2, 4))
        self.assertEqual(2 * a, Coordinates(2, 4))

    def test_distance(self):
        self.assertAlmostEqual(Coordinates(0, 0).distance_to(Coordinates(3, 4)), 5.0)

    def test_is_zero(self):
        self.assertTrue(Coordinates().is_zero())
        self.assertFalse(Coordinates(0, 1).is_zero())

    def test_random_around_stays_on_ring(self):
        rng = random.Random(11)
        origin = Coordinates(500, -500)
        ring = MinMax(100, 200)
        for _ in range(100):
            point = Coordinates.create_random_around(origin, ring, rng)
            distance = origin.distance_to(point)
            self.assertGreaterEqual(distance, 100 - 1e-6)
            self.assertLessEqual(distance, 200 + 1e-6)

    def test_random_between_uses_midpoint(self):
        rng = random.Random(5)
        point = Coordinates.create_random_between(Coordinates(0, 0), Coordinates(100, 0), MinMax(0, 0), rng)
        self.assertAlmostEqual(point.x, 50.0)
        self.assertAlmostEqual(point.y, 0.0)

    def test_seeded_randomness_is_reproducible(self):
        first = Coordinates(0, 0).create_near_random(MinMax(10, 20), random.Random(42))
        second = Coordinates(0, 0).create_near_random(MinMax(10, 20), random.Random(42))
        self.assertEqual(first, second)


class TestGeometry(unittest.TestCase):
    """Plain-tuple geometry helpers."""

    def test_distance(self):
        self.assertEqual(calculate_2d_distance((0, 0), (3, 4)), 5.0)

    def test_distances_from(self):
        distances = distances_from((0, 0), [(3, 4), (0, 10)])
        self.assertEqual(list(distances), [5.0, 10.0])
        self.assertEqual(len(distances_from((0, 0), [])), 0)

    def test_point_in_polygon(self):
        self.assertTrue(point_in_polygon(5, 5, SQUARE))
        self.assertFalse(point_in_polygon(15, 5, SQUARE))
        self.assertFalse(point_in_polygon(5, -1, SQUARE))

    def test_degenerate_polygon(self):
        self.assertFalse(point_in_polygon(0, 0, ((0, 0), (1, 1))))

    def test_point_in_any_polygon(self):
        other = ((100, 100), (110, 100), (110, 110), (100, 110))
        self.assertTrue(point_in_any_polygon((105, 105), [SQUARE, other]))
        self.assertFalse(point_in_any_polygon((50, 50), [SQUARE, other]))
        self.assertFalse(point_in_any_polygon((5, 5), []))

    def test_find_closest_position(self):
        self.assertEqual(find_closest_position((3, 0), [(0, 0), (5, 0), (10, 0)]), (1, 2.0))
        # Ties resolve to the earliest candidate
        index, _ = find_closest_position((5, 0), [(0, 0), (10, 0)])
        self.assertEqual(index, 0)
        with self.assertRaises(ValueError):
            find_closest_position((0, 0), [])


if __name__ == '__main__':
    unittest.main()
