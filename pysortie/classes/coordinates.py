from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..misc.math_utils import calculate_2d_distance, generate_random_offset

NM_TO_METERS = 1852.0

# Ratio applied to both bounds of a range each time a radius search comes up empty
RANGE_DECAY_MIN = 0.9
RANGE_DECAY_MAX = 1.1
RANGE_DECAY_MAX_FLOOR = 100.0


@dataclass(frozen=True)
class Coordinates:
    """Immutable 2D map position in meters."""
    x: float = 0.0
    y: float = 0.0

    def distance_to(self, other: "Coordinates") -> float:
        return calculate_2d_distance((self.x, self.y), (other.x, other.y))

    def __add__(self, other: "Coordinates") -> "Coordinates":
        return Coordinates(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Coordinates") -> "Coordinates":
        return Coordinates(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> "Coordinates":
        return Coordinates(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __iter__(self):
        yield self.x
        yield self.y

    def to_list(self) -> List[float]:
        return [self.x, self.y]

    def is_zero(self) -> bool:
        return self.x == 0.0 and self.y == 0.0

    def create_near_random(self, distance: "MinMax", rng: Optional[random.Random] = None) -> "Coordinates":
        """Random point whose distance from this one lies in ``distance``."""
        return Coordinates.create_random_around(self, distance, rng)

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> "Coordinates":
        return cls(float(values[0]), float(values[1]))

    @classmethod
    def create_random(cls, min_length: float, max_length: float, rng: Optional[random.Random] = None) -> "Coordinates":
        """Random offset vector with a length between ``min_length`` and ``max_length``."""
        dx, dy = generate_random_offset(min_length, max_length, rng)
        return cls(dx, dy)

    @classmethod
    def create_random_around(cls, origin: "Coordinates", distance: "MinMax", rng: Optional[random.Random] = None) -> "Coordinates":
        """Random point on the ring ``distance.min``..``distance.max`` around ``origin``."""
        return origin + cls.create_random(distance.min, distance.max, rng)

    @classmethod
    def create_random_between(cls, first: "Coordinates", second: "Coordinates", distance: "MinMax",
                              rng: Optional[random.Random] = None) -> "Coordinates":
        """Random point on a ring around the midpoint of two positions."""
        midpoint = (first + second) * 0.5
        return cls.create_random_around(midpoint, distance, rng)


@dataclass(frozen=True)
class MinMax:
    """
    Inclusive numeric interval.

    Bounds are swapped on construction when given in the wrong order.
    """
    min: float = 0.0
    max: float = 0.0

    def __post_init__(self):
        if self.min > self.max:
            low, high = self.max, self.min
            object.__setattr__(self, "min", low)
            object.__setattr__(self, "max", high)

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max

    def __contains__(self, value: float) -> bool:
        return self.contains(value)

    def scaled(self, factor: float) -> "MinMax":
        """Both bounds multiplied by ``factor`` (e.g. NM_TO_METERS)."""
        return MinMax(self.min * factor, self.max * factor)

    def __mul__(self, factor: float) -> "MinMax":
        return self.scaled(factor)

    def decayed(self) -> "MinMax":
        """Range widened for the next radius search iteration."""
        return MinMax(self.min * RANGE_DECAY_MIN, max(RANGE_DECAY_MAX_FLOOR, self.max * RANGE_DECAY_MAX))

    def random_value(self, rng: Optional[random.Random] = None) -> float:
        return (rng or random).uniform(self.min, self.max)

    def to_list(self) -> List[float]:
        return [self.min, self.max]

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> "MinMax":
        return cls(float(values[0]), float(values[1]))


@dataclass(frozen=True)
class MinMaxI:
    """Inclusive integer interval, used for unit counts."""
    min: int = 0
    max: int = 0

    def __post_init__(self):
        if self.min > self.max:
            low, high = self.max, self.min
            object.__setattr__(self, "min", low)
            object.__setattr__(self, "max", high)

    def contains(self, value: int) -> bool:
        return self.min <= value <= self.max

    def random_value(self, rng: Optional[random.Random] = None) -> int:
        return (rng or random).randint(self.min, self.max)

    @classmethod
    def from_sequence(cls, values: Sequence[int]) -> "MinMaxI":
        return cls(int(values[0]), int(values[1]))


# Template flight-plan ranges are expressed in nautical miles.
ANY_RANGE = MinMax(0.0, 999999.0)
HINT_RANGE = MinMax(0.0, 5.0)
