"""
Theater definition: the static geographic dataset of one map.

A theater is read-only once built and can be shared by any number of mission
builds; every build drains its own SpawnPointSelector instead.
"""
from __future__ import annotations

import dataclasses
import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .coordinates import Coordinates
from .enums import Coalition, ParkingSpotType, SpawnPointType
from .mission_objects import Airbase, ParkingSpot, SpawnPoint
from ..misc.logger import create_logger

_logger = create_logger(verbose=False, name="Theater")

PolygonCoordinates = Tuple[Tuple[float, float], ...]


@dataclass(frozen=True)
class Theater:
    """Airbases, spawn points and named polygon regions of one map."""
    theater_id: str
    airbases: Tuple[Airbase, ...] = ()
    spawn_points: Tuple[SpawnPoint, ...] = ()
    legacy_spawn_points: Tuple[SpawnPoint, ...] = ()
    shape_spawn_system: bool = False
    red_territory: Tuple[PolygonCoordinates, ...] = ()
    blue_territory: Tuple[PolygonCoordinates, ...] = ()
    water: Tuple[PolygonCoordinates, ...] = ()
    water_exclusion: Tuple[PolygonCoordinates, ...] = ()

    def get_airbase(self, airbase_id: int) -> Optional[Airbase]:
        for airbase in self.airbases:
            if airbase.airbase_id == airbase_id:
                return airbase
        return None

    def get_airbases(self, invert_coalitions: bool = False) -> List[Airbase]:
        """All airbases, with coalitions swapped when ``invert_coalitions`` is set."""
        if not invert_coalitions:
            return list(self.airbases)
        return [dataclasses.replace(ab, coalition=ab.coalition.enemy) for ab in self.airbases]

    def territory(self, coalition: Coalition) -> Tuple[PolygonCoordinates, ...]:
        return self.red_territory if coalition is Coalition.RED else self.blue_territory

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Theater":
        """Build a theater from its JSON-style dictionary form."""
        airbases = tuple(_airbase_from_dict(ab) for ab in data.get("airbases", []))
        theater = cls(
            theater_id=str(data.get("id", "")),
            airbases=airbases,
            spawn_points=tuple(_spawn_point_from_dict(sp) for sp in data.get("spawn_points", [])),
            legacy_spawn_points=tuple(_spawn_point_from_dict(sp) for sp in data.get("legacy_spawn_points", [])),
            shape_spawn_system=bool(data.get("shape_spawn_system", False)),
            red_territory=_polygons(data.get("red_territory", [])),
            blue_territory=_polygons(data.get("blue_territory", [])),
            water=_polygons(data.get("water", [])),
            water_exclusion=_polygons(data.get("water_exclusion", [])),
        )
        _logger.info(
            f"Theater '{theater.theater_id}' loaded: {len(theater.airbases)} airbases, "
            f"{len(theater.spawn_points)} spawn points, {len(theater.legacy_spawn_points)} legacy spawn points."
        )
        return theater


def load_theater(path: str) -> Theater:
    """Load a theater definition from a JSON file."""
    with open(path, "r", encoding="utf-8") as f:
        return Theater.from_dict(json.load(f))


def _coalition(value: Optional[str]) -> Optional[Coalition]:
    return Coalition(value) if value else None


def _spawn_point_from_dict(data: Dict[str, Any]) -> SpawnPoint:
    return SpawnPoint(
        coordinates=Coordinates.from_sequence(data["coordinates"]),
        point_type=SpawnPointType(data["type"]),
        coalition=_coalition(data.get("coalition")),
    )


def _airbase_from_dict(data: Dict[str, Any]) -> Airbase:
    airbase_id = int(data["id"])
    spots = tuple(
        ParkingSpot(
            spot_id=int(spot["id"]),
            airbase_id=airbase_id,
            coordinates=Coordinates.from_sequence(spot["coordinates"]),
            spot_type=ParkingSpotType(spot.get("type", ParkingSpotType.OPEN_AIR.value)),
        )
        for spot in data.get("parking_spots", [])
    )
    return Airbase(
        airbase_id=airbase_id,
        name=data.get("name", f"Airbase {airbase_id}"),
        coordinates=Coordinates.from_sequence(data["coordinates"]),
        coalition=Coalition(data["coalition"]),
        parking_spots=spots,
    )


def _polygons(raw: Sequence[Sequence[Sequence[float]]]) -> Tuple[PolygonCoordinates, ...]:
    return tuple(tuple((float(p[0]), float(p[1])) for p in polygon) for polygon in raw)
