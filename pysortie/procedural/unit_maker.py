"""
Unit creation interface used by the objective pipeline.

``UnitMaker`` is the collaborator boundary: the pipeline hands it a family,
a count, a side, group flags, coordinates and movement scripts, and gets back
a populated ``UnitGroupInfo`` or ``None``. ``CatalogUnitMaker`` is the
reference implementation backed by the database unit catalog.
"""
from __future__ import annotations

import random
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional, Tuple

from ..classes.coordinates import Coordinates
from ..classes.enums import ObjectiveOption, Side, UnitCategory, UnitFamily
from ..classes.mission_objects import GroupRecord, GroupWaypoint, UnitEntry
from ..classes.records import UnitRecord
from ..misc.logger import create_logger

if TYPE_CHECKING:
    from ..resources.database import Database

# Spacing between units of one group when no explicit unit coordinates are given
UNIT_SPACING = 50.0


class Visibility(Enum):
    """Map visibility override for a spawned group."""
    DEFAULT = "Default"
    NEVER_HIDDEN = "NeverHidden"
    ALWAYS_HIDDEN = "AlwaysHidden"


@dataclass
class GroupFlags:
    """Group-level modifiers passed to the unit maker."""
    visibility: Visibility = Visibility.DEFAULT
    invisible: bool = False
    embedded_air_defense: bool = False
    immediate_aircraft_spawn: bool = False
    radio_aircraft_spawn: bool = False


def resolve_group_flags(options: Iterable[ObjectiveOption]) -> GroupFlags:
    """
    Derive group flags from objective options.

    SHOW_TARGET overrides every other visibility setting, HIDE_TARGET comes
    next, and only then INVISIBLE applies. EMBEDDED_AIR_DEFENSE always
    combines with the rest.
    """
    options = set(options)
    flags = GroupFlags()
    if ObjectiveOption.SHOW_TARGET in options:
        flags.visibility = Visibility.NEVER_HIDDEN
    elif ObjectiveOption.HIDE_TARGET in options:
        flags.visibility = Visibility.ALWAYS_HIDDEN
    elif ObjectiveOption.INVISIBLE in options:
        flags.invisible = True
    if ObjectiveOption.EMBEDDED_AIR_DEFENSE in options:
        flags.embedded_air_defense = True
    return flags


@dataclass
class UnitGroupInfo:
    """What the unit maker created for one request."""
    group_id: int
    name: str
    unit_names: List[str]
    coordinates: Coordinates
    unit_record: UnitRecord
    family: UnitFamily
    # Statics produce one record per unit; everything else a single record
    groups: List[GroupRecord] = field(default_factory=list)

    @property
    def group(self) -> GroupRecord:
        """Main (first) group record."""
        return self.groups[0]


class UnitMaker(ABC):
    """Abstract unit creation service."""

    @abstractmethod
    def get_units(self, family: UnitFamily, count: int, side: Side,
                  flags: GroupFlags) -> Tuple[List[str], List[UnitRecord]]:
        """
        Pick unit types for a group.

        Returns:
            (unit ids, one per unit; distinct unit records used)
        """
        pass

    @abstractmethod
    def add_unit_group(
        self,
        units: List[str],
        side: Side,
        family: UnitFamily,
        group_script: str,
        unit_script: str,
        coordinates: Coordinates,
        flags: GroupFlags,
        extra_settings: Dict[str, Any],
    ) -> Optional[UnitGroupInfo]:
        """Create a group of ``units`` at ``coordinates``; None if nothing could be created."""
        pass


class CatalogUnitMaker(UnitMaker):
    """
    Unit maker drawing unit types from the database catalog.

    Honors the "UnitCoords" and "ParkingID" settings set by airbase placement
    and gives each group a second route point from "GroupX2"/"GroupY2".
    """

    def __init__(self, database: "Database", rng: Optional[random.Random] = None, verbose: bool = False,
                 debug: bool = False):
        self.database = database
        self.rng = rng or random.Random()
        self.logger = create_logger(verbose=verbose, name="UnitMaker", debug=debug)
        self._next_group_id = 1

    def get_units(self, family: UnitFamily, count: int, side: Side,
                  flags: GroupFlags) -> Tuple[List[str], List[UnitRecord]]:
        records = self.database.units_for_family(family)
        if not records or count <= 0:
            self.logger.warning(f"No {family.value} units available for {side.value} side.")
            return [], []
        record = self.rng.choice(records)
        return [record.id] * count, [record]

    def add_unit_group(
        self,
        units: List[str],
        side: Side,
        family: UnitFamily,
        group_script: str,
        unit_script: str,
        coordinates: Coordinates,
        flags: GroupFlags,
        extra_settings: Dict[str, Any],
    ) -> Optional[UnitGroupInfo]:
        if not units:
            return None
        record = self.database.get_unit(units[0])
        if record is None:
            self.logger.error(f"Unknown unit type '{units[0]}'")
            return None

        settings = dict(extra_settings)
        settings["Hidden"] = flags.visibility is Visibility.ALWAYS_HIDDEN
        settings["NeverHidden"] = flags.visibility is Visibility.NEVER_HIDDEN
        settings["Invisible"] = flags.invisible
        settings["ImmediateSpawn"] = flags.immediate_aircraft_spawn
        settings["RadioSpawn"] = flags.radio_aircraft_spawn

        unit_coords = self._unit_coordinates(coordinates, len(units), settings.get("UnitCoords"))
        parking_ids = list(settings.get("ParkingID", [])) or [None] * len(units)
        destination = None
        if "GroupX2" in settings and "GroupY2" in settings:
            destination = Coordinates(float(settings["GroupX2"]), float(settings["GroupY2"]))

        base_name = f"{side.value} {family.value} #{self._next_group_id}"
        entries = [
            UnitEntry(name=f"{base_name}-{i + 1}", unit_id=unit_id, coordinates=unit_coords[i],
                      parking_id=parking_ids[i] if i < len(parking_ids) else None)
            for i, unit_id in enumerate(units)
        ]

        # Static structures are one group per building
        if family.category is UnitCategory.STATIC:
            batches = [[entry] for entry in entries]
        else:
            batches = [entries]

        groups = []
        for batch in batches:
            group_id = self._next_group_id
            self._next_group_id += 1
            waypoints = [GroupWaypoint(coordinates=batch[0].coordinates)]
            if destination is not None:
                waypoints.append(GroupWaypoint(coordinates=destination))
            groups.append(GroupRecord(
                group_id=group_id,
                name=base_name if not groups else f"{base_name}-{len(groups)}",
                units=batch,
                waypoints=waypoints,
                group_script=group_script,
                unit_script=unit_script,
                settings=dict(settings),
            ))

        info = UnitGroupInfo(
            group_id=groups[0].group_id,
            name=groups[0].name,
            unit_names=[entry.name for entry in entries],
            coordinates=coordinates,
            unit_record=record,
            family=family,
            groups=groups,
        )
        self.logger.info(f"Group '{info.name}' created with {len(entries)} x {record.id}.")
        return info

    def _unit_coordinates(self, origin: Coordinates, count: int,
                          explicit: Optional[List[Coordinates]]) -> List[Coordinates]:
        if explicit:
            coords = list(explicit)
            while len(coords) < count:
                coords.append(coords[-1] + Coordinates(UNIT_SPACING, 0.0))
            return coords
        return [origin + Coordinates(UNIT_SPACING * i, 0.0) for i in range(count)]
