"""
Spawn point allocation for one mission build.

The selector owns the live pools of spawn points and airbase parking spots
for a theater. Every successful land allocation removes the chosen point so
no two objectives can claim it; air and sea positions are synthesized inside
polygon regions and never consumed. Allocation failures are reported as
``None`` and escalated by callers, not here.
"""
from __future__ import annotations

import random
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from ..classes.coordinates import Coordinates, MinMax
from ..classes.enums import Coalition, SpawnPointType
from ..classes.mission_objects import Airbase, ParkingSpot, SpawnPoint
from ..classes.records import UnitRecord
from ..classes.theater import Theater
from ..misc.logger import create_logger
from ..misc.math_utils import distances_from, point_in_any_polygon
from .validation import ConstraintViolationError, describe_types

# How many times a search widens its range before giving up
MAX_RADIUS_SEARCH_ITERATIONS = 32
# Random candidates generated per iteration for continuous air/sea space
AIR_SEA_SAMPLES_PER_ITERATION = 50
# Search ring used when a "nearest" air/sea position is requested
NEAREST_AIR_SEA_RANGE = MinMax(0.0, 1000.0)

AIR_OR_SEA = frozenset({SpawnPointType.AIR, SpawnPointType.SEA})

ParkingAllocation = List[Tuple[int, Coordinates]]


class SpawnPointSelector:
    """
    Selects random spawn points and airbase parking spots from a theater.

    One instance serves exactly one mission build and is not safe for
    concurrent use; the theater itself is never mutated and can be shared.

    Args:
        theater: Read-only theater definition
        use_shape_spawning: Allow the polygon backend when the theater supports it
        rng: Random source (a seeded one makes allocations reproducible)
        verbose: Enable info logging
        debug: Also log pool resets, range widening and failed searches
    """

    def __init__(self, theater: Theater, use_shape_spawning: bool = True,
                 rng: Optional[random.Random] = None, verbose: bool = False, debug: bool = False):
        self.theater = theater
        self.use_shape_system = theater.shape_spawn_system and use_shape_spawning
        self.rng = rng or random.Random()
        self.logger = create_logger(verbose=verbose, name="SpawnPointSelector", debug=debug)

        self._spawn_points: List[SpawnPoint] = []
        self._parking: Dict[int, List[ParkingSpot]] = {}
        self.reset()

    # ========== Pool management ==========

    def reset(self):
        """Repopulate every pool from the theater, discarding all allocations."""
        source = self.theater.spawn_points if self.use_shape_system else self.theater.legacy_spawn_points
        self._spawn_points = list(source)
        self._parking = {}
        for airbase in self.theater.airbases:
            if not airbase.parking_spots or airbase.airbase_id in self._parking:
                continue
            self._parking[airbase.airbase_id] = list(airbase.parking_spots)

        backend = "shape" if self.use_shape_system else "legacy"
        self.logger.debug(
            f"Pools reset ({backend} backend): {len(self._spawn_points)} spawn points, "
            f"{sum(len(s) for s in self._parking.values())} parking spots in {len(self._parking)} airbases."
        )

    def remaining_spawn_points(self) -> List[SpawnPoint]:
        return list(self._spawn_points)

    def remaining_parking(self, airbase_id: int) -> List[ParkingSpot]:
        return list(self._parking.get(airbase_id, []))

    # ========== Spawn points ==========

    def allocate(
        self,
        valid_types: Iterable[SpawnPointType],
        origin_a: Optional[Coordinates] = None,
        range_a: Optional[MinMax] = None,
        origin_b: Optional[Coordinates] = None,
        range_b: Optional[MinMax] = None,
        coalition: Optional[Coalition] = None,
    ) -> Optional[Coordinates]:
        """
        Find one random point matching every constraint and claim it.

        Ranges are in meters. Each (origin, range) pair is only applied when
        both halves are given; the range is widened when nothing matches.

        Returns:
            Coordinates of the allocated point, or None when nothing matches
            after the full radius search

        Raises:
            ConstraintViolationError: If ``valid_types`` is empty or mixes sea and land
        """
        types = self._check_types(valid_types)

        if self.use_shape_system and types & AIR_OR_SEA:
            if origin_a is None or range_a is None:
                raise ValueError("Air and sea allocation needs a primary origin and range.")
            return self._sample_air_or_sea(types, origin_a, range_a, origin_b, range_b, coalition)

        if self.use_shape_system:
            candidates = [sp for sp in self._spawn_points
                          if sp.point_type in types and self._not_in_hostile_territory(sp.coordinates, coalition)]
        else:
            candidates = self._legacy_candidates(types, coalition)

        for origin, distance in ((origin_a, range_a), (origin_b, range_b)):
            if not candidates:
                break
            if origin is None or distance is None:
                continue
            candidates = self._radius_search(candidates, origin, distance)

        if not candidates:
            self.logger.debug(f"No spawn point found for types [{describe_types(types)}].")
            return None

        selected = self.rng.choice(candidates)
        self._spawn_points.remove(selected)
        self.logger.debug(f"Allocated {selected.point_type.value} spawn point at "
                          f"({selected.coordinates.x:.0f}, {selected.coordinates.y:.0f}).")
        return selected.coordinates

    def allocate_nearest(
        self,
        valid_types: Iterable[SpawnPointType],
        origin: Coordinates,
        consume: bool = True,
    ) -> Optional[Coordinates]:
        """
        Closest matching point to ``origin``, without randomization.

        ``consume=False`` peeks at the point without removing it, for when it
        only serves as a direction to head to.
        """
        types = self._check_types(valid_types)

        if self.use_shape_system and types & AIR_OR_SEA:
            return self._sample_air_or_sea(types, origin, NEAREST_AIR_SEA_RANGE, None, None, None)

        if self.use_shape_system:
            candidates = [sp for sp in self._spawn_points if sp.point_type in types]
        else:
            candidates = self._legacy_candidates(types, None)

        if not candidates:
            return None

        distances = distances_from(tuple(origin), [tuple(sp.coordinates) for sp in candidates])
        nearest = candidates[int(np.argmin(distances))]
        if consume:
            self._spawn_points.remove(nearest)
        return nearest.coordinates

    def _check_types(self, valid_types: Iterable[SpawnPointType]) -> frozenset:
        types = frozenset(valid_types)
        if not types:
            raise ConstraintViolationError("No valid spawn point types requested.")
        if SpawnPointType.SEA in types and any(t.is_land for t in types):
            raise ConstraintViolationError(f"Cannot mix land and sea spawn point types: {describe_types(types)}")
        return types

    def _legacy_candidates(self, types: frozenset, coalition: Optional[Coalition]) -> List[SpawnPoint]:
        # Air-capable requests accept any kind of legacy point
        if SpawnPointType.AIR in types:
            candidates = list(self._spawn_points)
        else:
            candidates = [sp for sp in self._spawn_points if sp.point_type in types]
        if coalition is not None:
            candidates = [sp for sp in candidates if sp.coalition is coalition]
        return candidates

    def _radius_search(self, candidates: Sequence[SpawnPoint], origin: Coordinates,
                       distance: MinMax) -> List[SpawnPoint]:
        """Keep candidates within ``distance`` of ``origin``, widening the range until some match."""
        distances = distances_from(tuple(origin), [tuple(sp.coordinates) for sp in candidates])
        search_range = distance
        for iteration in range(MAX_RADIUS_SEARCH_ITERATIONS):
            mask = (distances >= search_range.min) & (distances <= search_range.max)
            if mask.any():
                if iteration:
                    self.logger.debug(f"Radius search widened {iteration} times to "
                                      f"{search_range.min:.0f}-{search_range.max:.0f}m.")
                return [sp for sp, keep in zip(candidates, mask) if keep]
            search_range = search_range.decayed()
        return []

    def _sample_air_or_sea(
        self,
        types: frozenset,
        origin_a: Coordinates,
        range_a: MinMax,
        origin_b: Optional[Coordinates],
        range_b: Optional[MinMax],
        coalition: Optional[Coalition],
    ) -> Optional[Coordinates]:
        """Rejection-sample a position on a ring around ``origin_a``; nothing is consumed."""
        needs_water = SpawnPointType.SEA in types and SpawnPointType.AIR not in types
        search_range = range_a
        for _ in range(MAX_RADIUS_SEARCH_ITERATIONS):
            survivors = []
            for _ in range(AIR_SEA_SAMPLES_PER_ITERATION):
                candidate = Coordinates.create_random_around(origin_a, search_range, self.rng)
                if not self._not_in_hostile_territory(candidate, coalition):
                    continue
                if origin_b is not None and range_b is not None and not range_b.contains(origin_b.distance_to(candidate)):
                    continue
                if needs_water and not self._is_on_water(candidate):
                    continue
                survivors.append(candidate)
            if survivors:
                return self.rng.choice(survivors)
            search_range = search_range.decayed()

        self.logger.debug(f"No {describe_types(types)} position found around "
                          f"({origin_a.x:.0f}, {origin_a.y:.0f}).")
        return None

    def _not_in_hostile_territory(self, coordinates: Coordinates, coalition: Optional[Coalition]) -> bool:
        if coalition is None:
            return True
        return not point_in_any_polygon(tuple(coordinates), self.theater.territory(coalition.enemy))

    def _is_on_water(self, coordinates: Coordinates) -> bool:
        position = tuple(coordinates)
        return (point_in_any_polygon(position, self.theater.water)
                and not point_in_any_polygon(position, self.theater.water_exclusion))

    # ========== Parking ==========

    def allocate_parking(
        self,
        airbase_id: int,
        count: int,
        aircraft: Optional[UnitRecord] = None,
        require_open_air: bool = False,
    ) -> Optional[ParkingAllocation]:
        """
        Claim ``count`` compatible parking spots of one airbase, all or nothing.

        The first spot is random; each following one is picked close to the
        previous spot so a flight parks together.

        Returns:
            List of (spot id, coordinates) pairs, or None if the airbase has
            fewer than ``count`` compatible free spots (nothing is claimed)
        """
        if count <= 0:
            raise ValueError(f"Parking spot count must be positive, got {count}")

        pool = self._parking.get(airbase_id)
        if not pool:
            return None

        allow_shelters = not require_open_air and (aircraft is None or aircraft.can_use_shelters)
        compatible = [spot for spot in pool if allow_shelters or not spot.is_hardened_shelter]
        if len(compatible) < count:
            self.logger.debug(f"Airbase {airbase_id} has {len(compatible)} compatible spots, {count} requested.")
            return None

        selected: List[ParkingSpot] = [self.rng.choice(compatible)]
        compatible.remove(selected[0])
        while len(selected) < count:
            spot = _cluster_next_spot(compatible, selected[-1].coordinates)
            compatible.remove(spot)
            selected.append(spot)

        for spot in selected:
            pool.remove(spot)
        return [(spot.spot_id, spot.coordinates) for spot in selected]

    def allocate_airbase_and_parking(
        self,
        origin: Coordinates,
        count: int,
        coalition: Coalition,
        aircraft: Optional[UnitRecord] = None,
        exclude_airbase_ids: Iterable[int] = (),
        invert_coalitions: bool = False,
    ) -> Optional[Tuple[Airbase, ParkingAllocation]]:
        """Parking at the ``coalition`` airbase closest to ``origin`` that can fit ``count`` aircraft."""
        excluded = set(exclude_airbase_ids)
        airbases = [ab for ab in self.theater.get_airbases(invert_coalitions)
                    if ab.coalition is coalition and ab.airbase_id not in excluded]
        airbases.sort(key=lambda ab: ab.coordinates.distance_to(origin))
        for airbase in airbases:
            spots = self.allocate_parking(airbase.airbase_id, count, aircraft)
            if spots is not None:
                return airbase, spots
        return None


def _cluster_next_spot(candidates: Sequence[ParkingSpot], previous: Coordinates) -> ParkingSpot:
    """
    One-pass approximate nearest spot to ``previous``.

    Keeps the running best and replaces it by a later candidate that is
    strictly closer and not sitting exactly on ``previous``.
    """
    best = candidates[0]
    for spot in candidates[1:]:
        distance = spot.coordinates.distance_to(previous)
        if best.coordinates.distance_to(previous) > distance and distance != 0:
            best = spot
    return best
