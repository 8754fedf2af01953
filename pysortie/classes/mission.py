"""
Mission aggregate mutated by the objective pipeline during one build.

Collects briefing entries, named append-only script fragments, map data and
drawings, media references, waypoints and spawned unit groups. It is not
serialized here; writers downstream consume these collections as-is.
"""
from __future__ import annotations

from typing import Dict, List, Optional, Set

from .coordinates import Coordinates
from .enums import BriefingItemType, Coalition, DrawingType, UnitFamily
from .mission_objects import BriefingItem, MapDrawing, Waypoint
from ..misc.logger import create_logger


class Mission:
    """Mutable, build-lifetime container for everything the generator produces."""

    def __init__(self, theater_id: str = "", player_coalition: Coalition = Coalition.BLUE, verbose: bool = False):
        self.theater_id = theater_id
        self.player_coalition = player_coalition
        self.logger = create_logger(verbose=verbose, name="Mission")

        self.briefing: List[BriefingItem] = []
        self.values: Dict[str, str] = {}
        self.map_data: Dict[str, List[List[float]]] = {}
        self.drawings: List[MapDrawing] = []
        # Path inside the mission archive -> source file path
        self.media_files: Dict[str, str] = {}
        self.waypoints: List[Waypoint] = []
        self.objective_coordinates: List[Coordinates] = []
        self.objective_target_families: List[UnitFamily] = []
        # Spawned UnitGroupInfo objects, in creation order
        self.unit_groups: List[object] = []
        self.populated_airbase_ids: Dict[Coalition, Set[int]] = {c: set() for c in Coalition}

    # ========== Briefing ==========

    def add_briefing_item(self, item_type: BriefingItemType, text: str):
        self.briefing.append(BriefingItem(item_type=item_type, text=text))

    def get_briefing_items(self, item_type: BriefingItemType) -> List[str]:
        return [item.text for item in self.briefing if item.item_type is item_type]

    # ========== Script values ==========

    def append_value(self, key: str, value: str):
        """Append text to the named script fragment, creating it if needed."""
        self.values[key] = self.values.get(key, "") + value

    def get_value(self, key: str) -> str:
        return self.values.get(key, "")

    # ========== Map ==========

    def add_map_data(self, key: str, points: List[Coordinates]):
        if key in self.map_data:
            self.logger.warning(f"Overwriting map data '{key}'")
        self.map_data[key] = [p.to_list() for p in points]

    def add_drawing(self, name: str, drawing_type: DrawingType, coordinates: Coordinates, **properties):
        self.drawings.append(MapDrawing(name=name, drawing_type=drawing_type, coordinates=coordinates,
                                        properties=dict(properties)))

    def get_drawing(self, name: str) -> Optional[MapDrawing]:
        return next((d for d in self.drawings if d.name == name), None)

    # ========== Media ==========

    def add_media_file(self, mission_path: str, source_path: str):
        """Reference a media file; the file itself is bundled by the writer."""
        if mission_path in self.media_files:
            return
        self.media_files[mission_path] = source_path

    # ========== Waypoints and groups ==========

    def add_waypoint(self, waypoint: Waypoint) -> int:
        if not isinstance(waypoint, Waypoint):
            raise TypeError("waypoint must be a Waypoint dataclass.")
        self.waypoints.append(waypoint)
        self.logger.info(f"Waypoint '{waypoint.name}' added at ({waypoint.coordinates.x:.0f}, {waypoint.coordinates.y:.0f}).")
        return len(self.waypoints) - 1

    def add_unit_group(self, group_info: object):
        self.unit_groups.append(group_info)
