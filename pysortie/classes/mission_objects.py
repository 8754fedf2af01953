# pysortie/classes/mission_objects.py
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .coordinates import Coordinates
from .enums import BriefingItemType, Coalition, DrawingType, ParkingSpotType, SpawnPointType


class BaseSortieObject:
    """Base class for simple mission objects (frozen and mutable dataclasses alike)."""
    def to_dict(self) -> Dict[str, Any]:
        """Converts the object to a plain dictionary (enums by value, coordinates as [x, y])."""
        out = {}
        for k, v in self.__dict__.items():
            if v is None:
                continue
            if isinstance(v, Coordinates):
                v = v.to_list()
            elif isinstance(v, Enum):
                v = v.value
            out[k] = v
        return out


# --- Theater placement candidates ---
@dataclass(frozen=True)
class SpawnPoint(BaseSortieObject):
    """A candidate ground/sea/air location usable for placing units."""
    coordinates: Coordinates
    point_type: SpawnPointType
    coalition: Optional[Coalition] = None


@dataclass(frozen=True)
class ParkingSpot(BaseSortieObject):
    """One aircraft parking spot of an airbase."""
    spot_id: int
    airbase_id: int
    coordinates: Coordinates
    spot_type: ParkingSpotType = ParkingSpotType.OPEN_AIR

    @property
    def is_hardened_shelter(self) -> bool:
        return self.spot_type is ParkingSpotType.HARDENED_AIR_SHELTER


@dataclass(frozen=True)
class Airbase(BaseSortieObject):
    """Theater airbase and its parking spots."""
    airbase_id: int
    name: str
    coordinates: Coordinates
    coalition: Coalition
    parking_spots: Tuple[ParkingSpot, ...] = ()


# --- Waypoint Dataclass ---
@dataclass
class Waypoint(BaseSortieObject):
    """Objective waypoint shown to the player."""
    name: str
    coordinates: Coordinates
    on_ground: bool = True
    group_id: int = 0
    script_ignore: bool = False


# --- Briefing and map output ---
@dataclass(frozen=True)
class BriefingItem(BaseSortieObject):
    """Briefing entry tagged by kind."""
    item_type: BriefingItemType
    text: str


@dataclass
class MapDrawing(BaseSortieObject):
    """Map overlay drawing (target zones and the like)."""
    name: str
    drawing_type: DrawingType
    coordinates: Coordinates
    properties: Dict[str, Any] = field(default_factory=dict)


@dataclass
class GroupWaypoint:
    """Waypoint of a spawned unit group's own route."""
    coordinates: Coordinates
    tasks: List[Dict[str, Any]] = field(default_factory=list)


@dataclass
class UnitEntry:
    """One spawned unit."""
    name: str
    unit_id: str
    coordinates: Coordinates
    parking_id: Optional[int] = None


@dataclass
class GroupRecord:
    """One spawned unit group as it will appear in the mission."""
    group_id: int
    name: str
    units: List[UnitEntry] = field(default_factory=list)
    waypoints: List[GroupWaypoint] = field(default_factory=list)
    late_activation: bool = True
    group_script: str = ""
    unit_script: str = ""
    settings: Dict[str, Any] = field(default_factory=dict)
