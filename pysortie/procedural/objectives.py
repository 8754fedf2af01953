"""
Objective generation pipeline.

Turns one objective template entry (and its sub-tasks) into mission content:
resolves reference records, claims spawn points and parking from the
injected SpawnPointSelector, creates the target group through the unit
maker, then writes waypoints, briefing entries, script fragments and map
data into the Mission. Any failure raises and aborts the whole build.
"""
from __future__ import annotations

import os
import random
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

from ..classes.coordinates import ANY_RANGE, HINT_RANGE, NM_TO_METERS, Coordinates, MinMax, MinMaxI
from ..classes.enums import (
    BehaviorLocation,
    BriefingItemType,
    DrawingType,
    MissionOption,
    ObjectiveOption,
    Side,
    SpawnPointType,
    UnitCategory,
    UnitFamily,
)
from ..classes.mission import Mission
from ..classes.mission_objects import Airbase, Waypoint
from ..classes.records import ObjectiveTarget, ObjectiveTask, TargetBehavior, UnitRecord
from ..misc.logger import create_logger
from .briefing_text import WaypointNameGenerator, parse_random_string, replace_key
from .features import FeaturesGenerator
from .spawn_selector import SpawnPointSelector
from .spec import MissionTemplate, ObjectiveTemplate, SubTaskTemplate
from .unit_maker import GroupFlags, UnitGroupInfo, UnitMaker, resolve_group_flags
from .validation import (
    AllocationExhaustedError,
    ConstraintViolationError,
    GroupCreationFailedError,
    ReferenceNotFoundError,
    describe_types,
)

# Behavior ids with special handling
IDLE_BEHAVIOR = "Idle"
RELOCATE_BEHAVIOR = "RelocateToNewPosition"
RECOVER_TO_BASE_PREFIX = "RecoverToBase"
FRONT_LINE_BEHAVIOR = "ToFrontLine"
SCRAMBLE_START_FEATURE = "ContextScrambleStart"

# Movement templates forced on aircraft heading for the player's airbase
BOMB_SCRIPT = "AircraftBomb"
CAP_SCRIPT = "AircraftCAP"
BOMB_FAMILIES = frozenset({
    UnitFamily.PLANE_ATTACK, UnitFamily.PLANE_BOMBER, UnitFamily.PLANE_STRIKE, UnitFamily.HELICOPTER_ATTACK,
})
CAP_FAMILIES = frozenset({UnitFamily.PLANE_FIGHTER, UnitFamily.PLANE_INTERCEPTOR})

# Destination offsets from the objective, in nautical miles
DESTINATION_OFFSETS = {
    UnitCategory.PLANE: MinMax(30, 60),
    UnitCategory.HELICOPTER: MinMax(10, 20),
}
INFANTRY_DESTINATION_OFFSET = MinMax(1, 5)
DEFAULT_DESTINATION_OFFSET = MinMax(5, 10)

INACCURATE_WAYPOINT_OFFSET = MinMax(3.0, 6.0)  # NM
INACCURATE_ZONE_RADIUS = 6.0 * NM_TO_METERS
TRANSPORT_ZONE_RADIUS = 500.0
EMBARK_OFFSET = MinMax(5, 50)
EMBARK_ZONE_RADIUS = 500
EMBEDDED_AIR_DEFENSE_OFFSET = MinMax(100, 500)
EMBEDDED_AIR_DEFENSE_UNITS = MinMaxI(1, 2)

# Named script fragments written to the mission
OBJECTIVES_VALUE = "ScriptObjectives"
TRIGGERS_VALUE = "ScriptObjectivesTriggers"
FEATURES_VALUE = "ScriptObjectivesFeatures"

DEFAULT_TASK_TEXT = "Complete objective $OBJECTIVENAME$"


@dataclass(frozen=True)
class ResolvedObjective:
    """Reference records an objective template entry resolved to."""
    target: ObjectiveTarget
    behavior: TargetBehavior
    task: ObjectiveTask
    options: FrozenSet[ObjectiveOption]
    features: Tuple[str, ...]

    def has_option(self, option: ObjectiveOption) -> bool:
        return option in self.options


class ObjectiveGenerator:
    """
    Generates objectives for one mission build.

    Args:
        database: Reference database
        spawn_selector: Allocation engine owned by the current build
        unit_maker: Unit creation service
        rng: Random source shared with the rest of the build
        media_directory: Directory media files are referenced from
        verbose: Enable info logging
        debug: Enable debug logging (requires verbose)
    """

    def __init__(self, database, spawn_selector: SpawnPointSelector, unit_maker: UnitMaker,
                 rng: Optional[random.Random] = None, media_directory: str = "", verbose: bool = False,
                 debug: bool = False):
        self.database = database
        self.spawn_selector = spawn_selector
        self.unit_maker = unit_maker
        self.rng = rng or random.Random()
        self.media_directory = media_directory
        self.logger = create_logger(verbose=verbose, name="Objectives", debug=debug)
        self.features = FeaturesGenerator(database, media_directory, verbose=verbose, debug=debug)
        # Running index across objectives and sub-tasks, 0-based
        self.objective_index = 0

    # ========== Entry point ==========

    def generate_objective(
        self,
        mission: Mission,
        template: MissionTemplate,
        objective: ObjectiveTemplate,
        last_coordinates: Coordinates,
        player_airbase: Airbase,
        waypoint_names: WaypointNameGenerator,
    ) -> Tuple[Coordinates, List[Waypoint]]:
        """
        Generate one objective and its sub-tasks.

        Returns:
            (objective coordinates, waypoints created for this objective in order)
        """
        resolved = self.resolve(objective, objective.features, include_preset_features=True)
        sub_tasks = self._resolve_sub_tasks(objective, resolved)

        use_hint = objective.coordinates_hint is not None and not objective.coordinates_hint.is_zero()
        if use_hint:
            last_coordinates = objective.coordinates_hint
        anchor = self._allocate_anchor(template, resolved.target, last_coordinates, player_airbase, use_hint)

        waypoints: List[Waypoint] = []
        objective_coordinates = self._create_objective(
            mission, template, objective, resolved, anchor, player_airbase, waypoint_names, waypoints)

        for sub_task, sub_resolved in sub_tasks:
            self.objective_index += 1
            sub_anchor = self._nearest_spawn(objective_coordinates, sub_resolved.target, consume=True)
            self._create_objective(
                mission, template, sub_task, sub_resolved, sub_anchor, player_airbase, waypoint_names, waypoints)

        self.objective_index += 1
        return objective_coordinates, waypoints

    # ========== Reference resolution ==========

    def resolve(self, entry: SubTaskTemplate, features: Iterable[str] = (),
                include_preset_features: bool = True) -> ResolvedObjective:
        """
        Resolve target, behavior and task records for one template entry.

        A preset picks a random target and behavior from its lists and
        replaces the task and options of the entry.

        Raises:
            ReferenceNotFoundError: If an id is unknown or the task does not
                fit the target's unit category
        """
        target_id, behavior_id, task_id = entry.target, entry.target_behavior, entry.task
        options = frozenset(entry.options)
        feature_ids = list(features)

        if entry.has_preset:
            preset = self.database.get_preset(entry.preset)
            if preset is None:
                raise ReferenceNotFoundError(f"Objective preset \"{entry.preset}\" not found.")
            target_id = self.rng.choice(preset.targets)
            behavior_id = self.rng.choice(preset.target_behaviors)
            task_id = preset.task
            options = frozenset(preset.options)
            if include_preset_features:
                feature_ids = list(preset.features) + feature_ids

        target = self.database.get_target(target_id)
        if target is None:
            raise ReferenceNotFoundError(f"Target \"{target_id}\" not found for objective.")
        behavior = self.database.get_behavior(behavior_id)
        if behavior is None:
            raise ReferenceNotFoundError(f"Target behavior \"{behavior_id}\" not found for objective.")
        task = self.database.get_task(task_id)
        if task is None:
            raise ReferenceNotFoundError(f"Task \"{task_id}\" not found for objective.")
        if target.unit_category not in task.valid_unit_categories:
            raise ReferenceNotFoundError(
                f"Task \"{task.display_name}\" not valid for objective targets, "
                f"which belong to category \"{target.unit_category.value}\"."
            )

        return ResolvedObjective(target=target, behavior=behavior, task=task, options=options,
                                 features=tuple(dict.fromkeys(feature_ids)))

    def _resolve_sub_tasks(self, objective: ObjectiveTemplate,
                           parent: ResolvedObjective) -> List[Tuple[SubTaskTemplate, ResolvedObjective]]:
        """Resolve and check every sub-task before anything is allocated."""
        valid_spawns: List[SpawnPointType] = list(parent.target.valid_spawn_points)
        resolved = []
        for sub_task in objective.sub_tasks:
            sub_resolved = self.resolve(sub_task, parent.features, include_preset_features=False)
            valid_spawns.extend(sub_resolved.target.valid_spawn_points)
            if SpawnPointType.SEA in valid_spawns and any(t.is_land for t in valid_spawns):
                raise ConstraintViolationError("Cannot mix land and sea objectives. Check sub-objective targets.")
            if sub_resolved.behavior.location.is_airbase and not parent.behavior.location.is_airbase:
                raise ConstraintViolationError(
                    "Spawning on airbase is not a valid sub-objective unless the main objective "
                    "also spawns on an airbase."
                )
            resolved.append((sub_task, sub_resolved))
        return resolved

    # ========== Placement ==========

    def _allocate_anchor(self, template: MissionTemplate, target: ObjectiveTarget, last_coordinates: Coordinates,
                         player_airbase: Airbase, use_hint: bool) -> Coordinates:
        distance = ANY_RANGE if use_hint else template.flight_plan_objective_distance
        separation = HINT_RANGE if use_hint else template.flight_plan_objective_separation
        coalition = template.spawn_point_coalition(Side.ENEMY)

        origin_a, range_a = player_airbase.coordinates, distance
        origin_b, range_b = last_coordinates, separation
        if use_hint:
            # Air and sea positions are sampled around the primary origin
            origin_a, range_a, origin_b, range_b = origin_b, range_b, origin_a, range_a

        point = self.spawn_selector.allocate(
            target.valid_spawn_points,
            origin_a, range_a.scaled(NM_TO_METERS),
            origin_b, range_b.scaled(NM_TO_METERS),
            coalition,
        )
        if point is None:
            raise AllocationExhaustedError(
                f"Failed to spawn objective unit group. {describe_types(target.valid_spawn_points)} "
                f"Please try again (consider adjusting the flight plan).",
                constraints={
                    "valid_types": [t.value for t in target.valid_spawn_points],
                    "distance_nm": distance.to_list(),
                    "separation_nm": separation.to_list(),
                    "coalition": coalition.value if coalition else None,
                },
            )
        return point

    def _nearest_spawn(self, origin: Coordinates, target: ObjectiveTarget, consume: bool = True) -> Coordinates:
        point = self.spawn_selector.allocate_nearest(target.valid_spawn_points, origin, consume)
        if point is None:
            raise AllocationExhaustedError(
                f"Failed to spawn nearby objective point. {describe_types(target.valid_spawn_points)} "
                f"Please try again (consider adjusting the flight plan).",
                constraints={"valid_types": [t.value for t in target.valid_spawn_points], "origin": origin.to_list()},
            )
        return point

    def _place_in_airbase(self, template: MissionTemplate, player_airbase: Airbase, extra_settings: Dict,
                          behavior: TargetBehavior, anchor: Coordinates, unit_count: int,
                          unit_record: UnitRecord) -> Coordinates:
        """Park the target group at the nearest enemy airbase with room for it."""
        enemy = template.player_coalition.enemy
        candidates = [
            ab for ab in self.spawn_selector.theater.get_airbases(template.invert_coalitions)
            if ab.airbase_id != player_airbase.airbase_id and (template.spawn_anywhere or ab.coalition is enemy)
        ]
        candidates.sort(key=lambda ab: ab.coordinates.distance_to(anchor))
        require_open_air = behavior.location is BehaviorLocation.SPAWN_ON_AIRBASE_PARKING_NO_HARDENED_SHELTER

        for airbase in candidates:
            spots = self.spawn_selector.allocate_parking(airbase.airbase_id, unit_count, unit_record, require_open_air)
            if spots is None:
                self.logger.debug(f"Airbase '{airbase.name}' cannot park {unit_count} x {unit_record.id}.")
                continue
            coordinates = [coords for _, coords in spots]
            extra_settings["GroupAirbaseID"] = airbase.airbase_id
            extra_settings["ParkingID"] = [spot_id for spot_id, _ in spots]
            extra_settings["UnitCoords"] = coordinates
            self.logger.info(f"Target group parked at '{airbase.name}'.")
            return self.rng.choice(coordinates)

        raise AllocationExhaustedError(
            f"No airbase has {unit_count} free parking spots for {unit_record.id}.",
            constraints={"airbases": [ab.airbase_id for ab in candidates], "count": unit_count,
                         "require_open_air": require_open_air},
        )

    def _destination(self, template: MissionTemplate, mission: Mission, resolved: ResolvedObjective,
                     family: UnitFamily, objective_coordinates: Coordinates, player_airbase: Airbase,
                     extra_settings: Dict) -> Coordinates:
        """Movement vector end point, before behavior overrides of the group script."""
        target, behavior, task = resolved.target, resolved.behavior, resolved.task

        if target.unit_category in DESTINATION_OFFSETS:
            offset = DESTINATION_OFFSETS[target.unit_category]
        elif family.is_infantry:
            offset = INFANTRY_DESTINATION_OFFSET
        else:
            offset = DEFAULT_DESTINATION_OFFSET
        destination = Coordinates.create_random_around(objective_coordinates, offset.scaled(NM_TO_METERS), self.rng)
        if target.unit_category.script_category == UnitCategory.VEHICLE.value:
            destination = self._nearest_spawn(destination, target, consume=False)

        if behavior.location is BehaviorLocation.GO_TO_PLAYER_AIRBASE:
            if len(player_airbase.parking_spots) > 1:
                destination = self.rng.choice(player_airbase.parking_spots).coordinates
            else:
                destination = player_airbase.coordinates
        elif behavior.location is BehaviorLocation.GO_TO_AIRBASE:
            coalition = template.spawn_point_coalition(task.target_side, force=True)
            airbases = [ab for ab in self.spawn_selector.theater.get_airbases(template.invert_coalitions)
                        if ab.coalition is coalition]
            if not airbases:
                raise AllocationExhaustedError(f"No {coalition.value} airbase to head to.",
                                               constraints={"coalition": coalition.value})
            airbase = min(airbases, key=lambda ab: destination.distance_to(ab.coordinates))
            destination = airbase.coordinates
            extra_settings["EndAirbaseId"] = airbase.airbase_id
            mission.populated_airbase_ids[coalition].add(airbase.airbase_id)
        return destination

    def _allocate_cargo(self, template: MissionTemplate, resolved: ResolvedObjective,
                        objective_coordinates: Coordinates, player_airbase: Airbase) -> Coordinates:
        """Where transport cargo waits: a nearby allied spawn point or allied airbase parking."""
        if resolved.behavior.id == RELOCATE_BEHAVIOR:
            point = self.spawn_selector.allocate(
                resolved.target.valid_spawn_points,
                objective_coordinates,
                template.flight_plan_objective_separation.scaled(NM_TO_METERS),
                coalition=template.spawn_point_coalition(Side.ALLY),
            )
            if point is None:
                raise AllocationExhaustedError("Failed to find cargo spawn point.",
                                               constraints={"valid_types": [t.value for t in resolved.target.valid_spawn_points]})
            return point

        common = self.database.common
        aircraft = self.database.get_unit(common.cargo_aircraft) if common.cargo_aircraft else None
        coalition = template.spawn_point_coalition(Side.ALLY, force=True)
        result = self.spawn_selector.allocate_airbase_and_parking(
            player_airbase.coordinates, 1, coalition, aircraft, invert_coalitions=template.invert_coalitions)
        if result is None:
            raise AllocationExhaustedError("Failed to find cargo spawn point.",
                                           constraints={"coalition": coalition.value, "parking": 1})
        _, spots = result
        return spots[0][1]

    # ========== Objective creation ==========

    def _create_objective(
        self,
        mission: Mission,
        template: MissionTemplate,
        entry: SubTaskTemplate,
        resolved: ResolvedObjective,
        objective_coordinates: Coordinates,
        player_airbase: Airbase,
        waypoint_names: WaypointNameGenerator,
        waypoints: List[Waypoint],
    ) -> Coordinates:
        target, behavior, task = resolved.target, resolved.behavior, resolved.task
        extra_settings: Dict = {}

        flags = resolve_group_flags(resolved.options)
        unit_script = behavior.unit_script(target.unit_category)
        unit_count = target.count_range(entry.target_count).random_value(self.rng)
        family = self.rng.choice(target.unit_families)

        units, unit_records = self.unit_maker.get_units(family, unit_count, task.target_side, flags)
        if not units or not unit_records:
            raise GroupCreationFailedError(f"No operational units in {family.value}.")
        unit_record = unit_records[0]

        if behavior.location.is_airbase and target.unit_category.is_aircraft:
            objective_coordinates = self._place_in_airbase(
                template, player_airbase, extra_settings, behavior, objective_coordinates, len(units), unit_record)

        destination = self._destination(template, mission, resolved, family, objective_coordinates,
                                        player_airbase, extra_settings)
        group_script = behavior.group_script(target.unit_category)
        if behavior.location is BehaviorLocation.GO_TO_PLAYER_AIRBASE and family.category.is_aircraft:
            if family in BOMB_FAMILIES:
                group_script = BOMB_SCRIPT
            elif family in CAP_FAMILIES:
                group_script = CAP_SCRIPT

        extra_settings["GroupX2"] = destination.x
        extra_settings["GroupY2"] = destination.y
        extra_settings["playerCanDrive"] = False
        extra_settings["NoCM"] = True

        unit_coordinates = objective_coordinates
        objective_name = waypoint_names.get_waypoint_name()
        pickup_waypoint: Optional[Waypoint] = None
        reversed_transport = False

        if task.is_transport:
            unit_coordinates = self._allocate_cargo(template, resolved, objective_coordinates, player_airbase)
            if behavior.id.startswith(RECOVER_TO_BASE_PREFIX):
                unit_coordinates, objective_coordinates = objective_coordinates, unit_coordinates
                reversed_transport = True
            pickup_waypoint = self._objective_waypoint(
                mission, template, resolved, unit_coordinates, unit_coordinates,
                f"{objective_name} Pickup", script_ignore=True)
            if task.is_escort:
                extra_settings["GroupX2"] = objective_coordinates.x
                extra_settings["GroupY2"] = objective_coordinates.y
                flags.radio_aircraft_spawn = True
            else:
                # Cargo waits at the pickup point unless escorted
                del extra_settings["GroupX2"]
                del extra_settings["GroupY2"]
                idle = self.database.get_behavior(IDLE_BEHAVIOR)
                if idle is None:
                    raise ReferenceNotFoundError(f"Target behavior \"{IDLE_BEHAVIOR}\" not found.")
                group_script = idle.group_script(target.unit_category)

        if (family.category.is_aircraft and not flags.radio_aircraft_spawn
                and not behavior.location.is_air_on_ground):
            flags.immediate_aircraft_spawn = True

        group_info = self.unit_maker.add_unit_group(
            units, task.target_side, family, group_script, unit_script, unit_coordinates, flags, extra_settings)
        if group_info is None or not group_info.groups:
            raise GroupCreationFailedError("Failed to generate group for objective.")
        mission.add_unit_group(group_info)

        self._post_process_group(template, mission, resolved, group_info, unit_coordinates,
                                 objective_coordinates, flags, extra_settings)
        self._apply_target_suffix(group_info, family, objective_name)

        plural_index = self._write_briefing(mission, template, resolved, family, group_info, objective_name)
        self._write_features(mission, resolved, group_info, objective_name, objective_coordinates)

        mission.objective_coordinates.append(unit_coordinates if reversed_transport else objective_coordinates)
        furthest = objective_coordinates
        for group_waypoint in group_info.group.waypoints:
            if objective_coordinates.distance_to(group_waypoint.coordinates) > objective_coordinates.distance_to(furthest):
                furthest = group_waypoint.coordinates
        waypoint = self._objective_waypoint(
            mission, template, resolved, objective_coordinates, furthest, objective_name, group_info.group_id)

        ordered = [waypoint]
        if pickup_waypoint is not None:
            ordered = [waypoint, pickup_waypoint] if reversed_transport else [pickup_waypoint, waypoint]
        for wp in ordered:
            mission.add_waypoint(wp)
            waypoints.append(wp)

        mission.add_map_data(f"OBJECTIVE_AREA_{self.objective_index}", [waypoint.coordinates])
        mission.objective_target_families.append(family)
        if not group_info.unit_record.is_aircraft:
            mission.add_map_data(
                f"UNIT-{group_info.unit_record.families[0].value}-{task.target_side.value}-{group_info.group_id}",
                [group_info.coordinates])

        self.logger.info(
            f"Objective {objective_name} ({self.objective_index + 1}): {len(group_info.unit_names)} x "
            f"{group_info.unit_record.id}, task {task.id}, {'plural' if plural_index else 'singular'} briefing."
        )
        return objective_coordinates

    def _post_process_group(self, template: MissionTemplate, mission: Mission, resolved: ResolvedObjective,
                            group_info: UnitGroupInfo, unit_coordinates: Coordinates,
                            objective_coordinates: Coordinates, flags: GroupFlags, extra_settings: Dict):
        target, task = resolved.target, resolved.task
        group = group_info.group

        if SCRAMBLE_START_FEATURE in template.mission_features and not task.is_transport:
            group.late_activation = False

        if target.unit_category.is_aircraft:
            group.waypoints[0].tasks.insert(0, {"id": "SetUnlimitedFuel", "params": {"value": True}})

        if target.unit_category is UnitCategory.INFANTRY and task.is_transport:
            embark = unit_coordinates.create_near_random(EMBARK_OFFSET, self.rng)
            group.waypoints[0].tasks.append({
                "id": "EmbarkToTransport",
                "params": {"x": embark.x, "y": embark.y, "zoneRadius": EMBARK_ZONE_RADIUS},
                "auto": False,
            })

        if resolved.has_option(ObjectiveOption.EMBEDDED_AIR_DEFENSE) and target.unit_category is UnitCategory.STATIC:
            self._add_embedded_air_defense(mission, resolved, objective_coordinates, flags, extra_settings)

    def _add_embedded_air_defense(self, mission: Mission, resolved: ResolvedObjective,
                                  objective_coordinates: Coordinates, flags: GroupFlags, extra_settings: Dict):
        """Statics cannot carry air defense, so it gets a group of its own nearby."""
        target, behavior, task = resolved.target, resolved.behavior, resolved.task
        count = EMBEDDED_AIR_DEFENSE_UNITS.random_value(self.rng)
        units, _ = self.unit_maker.get_units(UnitFamily.VEHICLE_AAA, count, task.target_side, flags)
        if not units:
            return
        info = self.unit_maker.add_unit_group(
            units, task.target_side, UnitFamily.VEHICLE_AAA,
            behavior.group_script(target.unit_category), behavior.unit_script(target.unit_category),
            objective_coordinates.create_near_random(EMBEDDED_AIR_DEFENSE_OFFSET, self.rng),
            flags, dict(extra_settings))
        if info is not None:
            mission.add_unit_group(info)

    @staticmethod
    def _apply_target_suffix(group_info: UnitGroupInfo, family: UnitFamily, objective_name: str):
        """Tag groups (and static units) so scripts can find them by name suffix."""
        is_static = family.category is UnitCategory.STATIC
        for i, group in enumerate(group_info.groups):
            suffix = f"{'' if i == 0 else i}-TGT-{objective_name}"
            group.name += suffix
            if is_static:
                for unit in group.units:
                    unit.name += suffix
        group_info.name = group_info.group.name
        group_info.unit_names = [unit.name for group in group_info.groups for unit in group.units]

    # ========== Briefing and scripts ==========

    def _write_briefing(self, mission: Mission, template: MissionTemplate, resolved: ResolvedObjective,
                        family: UnitFamily, group_info: UnitGroupInfo, objective_name: str) -> int:
        task = resolved.task
        mission.add_briefing_item(BriefingItemType.TARGET_GROUP_NAME, f"-TGT-{objective_name}")

        is_static = family.category is UnitCategory.STATIC
        length = len(group_info.groups) if is_static else len(group_info.unit_names)
        plural_index = 0 if length == 1 else 1
        family_name = self.database.unit_family_name(family, plural=bool(plural_index))

        task_text = parse_random_string(task.briefing_task[plural_index], self.rng).replace('"', "''")
        if not task_text:
            task_text = DEFAULT_TASK_TEXT
        task_text = replace_key(task_text, "ObjectiveName", objective_name)
        task_text = replace_key(task_text, "UnitFamily", family_name)
        mission.add_briefing_item(BriefingItemType.TASK, task_text)

        mission.append_value(OBJECTIVES_VALUE, self._objective_script(template, resolved, objective_name,
                                                                      group_info, task_text))
        for trigger in task.completion_triggers:
            script = self.database.get_trigger_script(trigger)
            if script is None:
                self.logger.warning(f"Completion trigger script '{trigger}' not found.")
                continue
            mission.append_value(TRIGGERS_VALUE, replace_key(script, "ObjectiveIndex", self.objective_index + 1))

        if task.briefing_remarks:
            remark = self.rng.choice(task.briefing_remarks.split(";"))
            remark = replace_key(remark, "ObjectiveName", objective_name)
            remark = replace_key(remark, "UnitFamily", family_name)
            mission.add_briefing_item(BriefingItemType.REMARK, remark)

        for ogg in task.include_ogg:
            mission.add_media_file(f"l10n/DEFAULT/{ogg}", os.path.join(self.media_directory, ogg))
        return plural_index

    def _objective_script(self, template: MissionTemplate, resolved: ResolvedObjective, objective_name: str,
                          group_info: UnitGroupInfo, task_text: str) -> str:
        index = self.objective_index + 1
        suffix = f"-TGT-{objective_name}"
        fields = [
            "complete = false",
            "failed = false",
            f"groupName = \"{group_info.name}\"",
            "hideTargetCount = false",
            f"name = \"{objective_name}\"",
            f"targetCategory = Unit.Category.{resolved.target.unit_category.lua_name}",
            f"taskType = \"{resolved.task.id}\"",
            f"task = \"{task_text}\"",
            f"unitsCount = #sortie.getUnitNamesByGroupNameSuffix(\"{suffix}\")",
            f"unitNames = sortie.getUnitNamesByGroupNameSuffix(\"{suffix}\")",
        ]
        script = f"sortie.mission.objectives[{index}] = {{ {', '.join(fields)} }}\n"
        script += (
            f"sortie.f10Menu.objectives[{index}] = missionCommands.addSubMenuForCoalition("
            f"coalition.side.{template.player_coalition.value.upper()}, \"$LANG_OBJECTIVE$ {objective_name}\", nil)\n"
        )
        return script

    def _write_features(self, mission: Mission, resolved: ResolvedObjective, group_info: UnitGroupInfo,
                        objective_name: str, objective_coordinates: Coordinates):
        task = resolved.task
        mission.append_value(FEATURES_VALUE, "")
        override = objective_coordinates if resolved.behavior.id == FRONT_LINE_BEHAVIOR else None
        for feature_id in dict.fromkeys(task.required_features + resolved.features):
            self.features.generate(
                mission, feature_id, objective_name, self.objective_index, group_info, task.target_side,
                resolved.has_option(ObjectiveOption.HIDE_TARGET), override_coords=override)

    # ========== Waypoints ==========

    def _objective_waypoint(self, mission: Mission, template: MissionTemplate, resolved: ResolvedObjective,
                            coordinates: Coordinates, destination: Coordinates, name: str,
                            group_id: int = 0, script_ignore: bool = False) -> Waypoint:
        target, behavior, task = resolved.target, resolved.behavior, resolved.task
        on_ground = not target.unit_category.is_aircraft or behavior.location.is_air_on_ground
        waypoint_coordinates = coordinates

        if resolved.has_option(ObjectiveOption.INACCURATE_WAYPOINT) and (not task.is_transport or name.endswith("Pickup")):
            waypoint_coordinates = coordinates.create_near_random(INACCURATE_WAYPOINT_OFFSET.scaled(NM_TO_METERS), self.rng)
            if MissionOption.MARK_WAYPOINTS in template.options:
                mission.add_drawing(f"Target Zone {name}", DrawingType.CIRCLE, waypoint_coordinates,
                                    radius=INACCURATE_ZONE_RADIUS)
        elif task.is_transport:
            mission.add_drawing(f"Target Zone {name}", DrawingType.CIRCLE, waypoint_coordinates,
                                radius=TRANSPORT_ZONE_RADIUS)
        elif behavior.location is BehaviorLocation.PATROLLING:
            mission.add_drawing(f"Target Zone {name}", DrawingType.CIRCLE, waypoint_coordinates,
                                radius=destination.distance_to(coordinates))

        return Waypoint(name=name, coordinates=waypoint_coordinates, on_ground=on_ground,
                        group_id=group_id, script_ignore=script_ignore)
