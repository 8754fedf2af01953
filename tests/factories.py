"""Small in-code theaters, databases and templates shared by the tests."""
import copy
import random

from pysortie.classes.coordinates import Coordinates, MinMax
from pysortie.classes.enums import Coalition, ParkingSpotType, SpawnPointType
from pysortie.classes.mission import Mission
from pysortie.classes.mission_objects import Airbase, ParkingSpot, SpawnPoint
from pysortie.classes.theater import Theater
from pysortie.procedural.briefing_text import WaypointNameGenerator
from pysortie.procedural.objectives import ObjectiveGenerator
from pysortie.procedural.spawn_selector import SpawnPointSelector
from pysortie.procedural.spec import MissionTemplate, ObjectiveTemplate
from pysortie.procedural.unit_maker import CatalogUnitMaker
from pysortie.resources.database import Database

PLAYER_AIRBASE_ID = 1
RED_AIRBASE_ID = 2
BLUE_FORWARD_AIRBASE_ID = 3

_ALL_SCRIPTS = {"Plane": "AircraftOrbiting", "Helicopter": "AircraftOrbiting", "Ship": "ShipIdle",
                "Vehicle": "GroundIdle", "Static": "Static"}

DATABASE_DATA = {
    "common": {
        "max_objectives": 4,
        "max_objective_distance": 200,
        "max_objective_separation": 100,
        "common_ogg": ["Common.ogg"],
        "cargo_aircraft": "Mi-8MT",
        "unit_family_names": {"VehicleMBT": "tank,tanks", "Infantry": "squad,squads"},
        "waypoint_names": ["Alpha", "Bravo", "Charlie", "Delta", "Echo", "Foxtrot", "Golf", "Hotel"],
    },
    "units": [
        {"id": "T-72B", "families": ["VehicleMBT"]},
        {"id": "Shilka", "families": ["VehicleAAA"]},
        {"id": "Soldier", "families": ["Infantry"]},
        {"id": "FFG", "families": ["ShipFrigate"]},
        {"id": "Bunker", "families": ["StaticStructure"]},
        {"id": "Tu-22M3", "families": ["PlaneBomber"], "can_use_shelters": False},
        {"id": "MiG-29A", "families": ["PlaneFighter"]},
        {"id": "Mi-8MT", "families": ["HelicopterTransport"], "can_use_shelters": False},
    ],
    "targets": [
        {"id": "Tanks", "unit_category": "Vehicle", "unit_families": ["VehicleMBT"],
         "valid_spawn_points": ["LandMedium", "LandLarge"], "unit_count": {"Average": [2, 2], "Low": [1, 1]}},
        {"id": "Boats", "unit_category": "Ship", "unit_families": ["ShipFrigate"],
         "valid_spawn_points": ["Sea"], "unit_count": {"Average": [1, 1]}},
        {"id": "Bunkers", "unit_category": "Static", "unit_families": ["StaticStructure"],
         "valid_spawn_points": ["LandSmall", "LandMedium", "LandLarge"], "unit_count": {"Average": [2, 2]}},
        {"id": "Bombers", "unit_category": "Plane", "unit_families": ["PlaneBomber"],
         "valid_spawn_points": ["Air"], "unit_count": {"Average": [2, 2]}},
        {"id": "Fighters", "unit_category": "Plane", "unit_families": ["PlaneFighter"],
         "valid_spawn_points": ["Air"], "unit_count": {"Average": [2, 2]}},
        {"id": "Troops", "unit_category": "Infantry", "unit_families": ["Infantry"],
         "valid_spawn_points": ["LandSmall", "LandMedium", "LandLarge"], "unit_count": {"Average": [3, 3]}},
    ],
    "behaviors": [
        {"id": "Idle", "location": "Default", "group_scripts": _ALL_SCRIPTS, "unit_scripts": _ALL_SCRIPTS},
        {"id": "Patrolling", "location": "Patrolling",
         "group_scripts": {"Vehicle": "GroundPatrol", "Plane": "AircraftPatrol"},
         "unit_scripts": {"Vehicle": "GroundVehicle", "Plane": "Aircraft"}},
        {"id": "ParkedAircraft", "location": "SpawnOnAirbaseParking",
         "group_scripts": {"Plane": "AircraftParked"}, "unit_scripts": {"Plane": "AircraftParked"}},
        {"id": "AttackPlayerAirbase", "location": "GoToPlayerAirbase",
         "group_scripts": {"Plane": "AircraftMoveToPoint"}, "unit_scripts": {"Plane": "Aircraft"}},
        {"id": "ReturnToBase", "location": "GoToAirbase",
         "group_scripts": {"Plane": "AircraftLand"}, "unit_scripts": {"Plane": "Aircraft"}},
        {"id": "RelocateToNewPosition", "location": "Default",
         "group_scripts": {"Vehicle": "GroundMoveToPoint"}, "unit_scripts": {"Vehicle": "GroundVehicle"}},
        {"id": "RecoverToBase", "location": "Default",
         "group_scripts": {"Vehicle": "GroundMoveToPoint"}, "unit_scripts": {"Vehicle": "GroundVehicle"}},
        {"id": "Airlift", "location": "Default",
         "group_scripts": {"Vehicle": "GroundMoveToPoint"}, "unit_scripts": {"Vehicle": "GroundVehicle"}},
    ],
    "tasks": [
        {"id": "DestroyAll", "target_side": "Enemy",
         "valid_unit_categories": ["Plane", "Helicopter", "Ship", "Vehicle", "Infantry", "Static"],
         "briefing_task": ["Destroy the $UNITFAMILY$ at $OBJECTIVENAME$.", "Destroy all \"$UNITFAMILY$\" at $OBJECTIVENAME$."],
         "briefing_remarks": "Expect resistance at $OBJECTIVENAME$.",
         "include_ogg": ["Destroy.ogg"],
         "completion_triggers": ["DestroyAll.lua"]},
        {"id": "SinkShips", "target_side": "Enemy", "valid_unit_categories": ["Ship"],
         "briefing_task": ["Sink the ship.", "Sink the ships."]},
        {"id": "TransportTroops", "target_side": "Ally", "valid_unit_categories": ["Infantry"],
         "briefing_task": ["Move the $UNITFAMILY$ to $OBJECTIVENAME$.", "Move the $UNITFAMILY$ to $OBJECTIVENAME$."],
         "ui_categories": ["Transport"]},
    ],
    "presets": [
        {"id": "Sead", "targets": ["Tanks"], "target_behaviors": ["Idle"], "task": "DestroyAll",
         "options": ["ShowTarget"], "features": ["Smoke"]},
    ],
    "features": [
        {"id": "Smoke", "script": "smoke($OBJECTIVEINDEX$, \"$GROUPNAME$\", $HIDETARGET$)", "include_ogg": ["Smoke.ogg"]},
        {"id": "Zone", "script": "zone($OBJECTIVEINDEX$, $GROUPX$, $GROUPY$)"},
    ],
    "trigger_scripts": {"DestroyAll.lua": "trigger($OBJECTIVEINDEX$)\n"},
}


def make_database(**overrides):
    data = copy.deepcopy(DATABASE_DATA)
    data.update(overrides)
    return Database.from_dict(data)


def land(x, y, point_type=SpawnPointType.LAND_MEDIUM, coalition=None):
    return SpawnPoint(coordinates=Coordinates(x, y), point_type=point_type, coalition=coalition)


def make_airbase(airbase_id, x, y, coalition, spots=4, hardened=0, spacing=100.0):
    parking = tuple(
        ParkingSpot(
            spot_id=airbase_id * 100 + i,
            airbase_id=airbase_id,
            coordinates=Coordinates(x + spacing * i, y + 200.0),
            spot_type=ParkingSpotType.HARDENED_AIR_SHELTER if i < hardened else ParkingSpotType.OPEN_AIR,
        )
        for i in range(spots)
    )
    return Airbase(airbase_id=airbase_id, name=f"Airbase {airbase_id}", coordinates=Coordinates(x, y),
                   coalition=coalition, parking_spots=parking)


def make_theater(spawn_points=(), legacy_spawn_points=(), airbases=(), shape=False, **polygons):
    return Theater(
        theater_id="Test",
        airbases=tuple(airbases),
        spawn_points=tuple(spawn_points),
        legacy_spawn_points=tuple(legacy_spawn_points),
        shape_spawn_system=shape,
        **polygons,
    )


def combat_theater():
    """
    Legacy theater: Blue player airbase at the origin, a Red airbase 100 km
    east, and a grid of Red land points 80-120 km east.
    """
    points = [land(x, y, coalition=Coalition.RED)
              for x in range(80000, 120001, 5000) for y in range(-20000, 20001, 5000)]
    points += [land(10000 + 2000 * i, 10000, coalition=Coalition.BLUE) for i in range(5)]
    airbases = [
        make_airbase(PLAYER_AIRBASE_ID, 0, 0, Coalition.BLUE, spots=4, hardened=1),
        make_airbase(RED_AIRBASE_ID, 100000, 0, Coalition.RED, spots=4, hardened=2),
        make_airbase(BLUE_FORWARD_AIRBASE_ID, -30000, 30000, Coalition.BLUE, spots=2),
    ]
    return make_theater(legacy_spawn_points=points, airbases=airbases)


def make_template(objectives, **kwargs):
    kwargs.setdefault("player_airbase_id", PLAYER_AIRBASE_ID)
    kwargs.setdefault("flight_plan_objective_distance", MinMax(40, 70))
    kwargs.setdefault("flight_plan_objective_separation", MinMax(0, 100))
    kwargs.setdefault("seed", 7)
    return MissionTemplate(objectives=list(objectives), **kwargs)


def objective(target="Tanks", behavior="Idle", task="DestroyAll", **kwargs):
    return ObjectiveTemplate(target=target, target_behavior=behavior, task=task, **kwargs)


class PipelineHarness:
    """One build's worth of collaborators around an ObjectiveGenerator."""

    def __init__(self, theater=None, database=None, seed=7, shape=False):
        self.theater = theater or combat_theater()
        self.database = database or make_database()
        self.rng = random.Random(seed)
        self.selector = SpawnPointSelector(self.theater, use_shape_spawning=shape, rng=self.rng)
        self.unit_maker = CatalogUnitMaker(self.database, rng=self.rng)
        self.generator = ObjectiveGenerator(self.database, self.selector, self.unit_maker,
                                            rng=self.rng, media_directory="media")
        self.mission = Mission(theater_id=self.theater.theater_id)
        self.names = WaypointNameGenerator(self.database.common.waypoint_names, rng=self.rng)
        self.player_airbase = self.theater.get_airbase(PLAYER_AIRBASE_ID)

    def run(self, template, entry):
        return self.generator.generate_objective(
            self.mission, template, entry, self.player_airbase.coordinates, self.player_airbase, self.names)
