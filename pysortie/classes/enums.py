from enum import Enum


class Coalition(Enum):
    """One of the two opposing sides of a mission."""
    BLUE = "Blue"
    RED = "Red"

    @property
    def enemy(self) -> "Coalition":
        return Coalition.RED if self is Coalition.BLUE else Coalition.BLUE


class Side(Enum):
    """Side relative to the player."""
    ALLY = "Ally"
    ENEMY = "Enemy"


class SpawnPointType(Enum):
    """Kinds of spawn point candidates."""
    LAND_SMALL = "LandSmall"
    LAND_MEDIUM = "LandMedium"
    LAND_LARGE = "LandLarge"
    SEA = "Sea"
    AIR = "Air"

    @property
    def is_land(self) -> bool:
        return self in LAND_SPAWNS


LAND_SPAWNS = frozenset({SpawnPointType.LAND_SMALL, SpawnPointType.LAND_MEDIUM, SpawnPointType.LAND_LARGE})


class UnitCategory(Enum):
    """Broad unit category a target belongs to."""
    PLANE = "Plane"
    HELICOPTER = "Helicopter"
    SHIP = "Ship"
    VEHICLE = "Vehicle"
    INFANTRY = "Infantry"
    STATIC = "Static"

    @property
    def is_aircraft(self) -> bool:
        return self in (UnitCategory.PLANE, UnitCategory.HELICOPTER)

    @property
    def script_category(self) -> str:
        """Key used to pick group/unit script templates (infantry runs as ground vehicles)."""
        if self is UnitCategory.INFANTRY:
            return UnitCategory.VEHICLE.value
        return self.value

    @property
    def lua_name(self) -> str:
        return {
            UnitCategory.PLANE: "AIRPLANE",
            UnitCategory.HELICOPTER: "HELICOPTER",
            UnitCategory.SHIP: "SHIP",
            UnitCategory.STATIC: "STRUCTURE",
        }.get(self, "GROUND_UNIT")


class UnitFamily(Enum):
    """Unit families a target can be drawn from."""
    PLANE_ATTACK = "PlaneAttack"
    PLANE_BOMBER = "PlaneBomber"
    PLANE_FIGHTER = "PlaneFighter"
    PLANE_INTERCEPTOR = "PlaneInterceptor"
    PLANE_STRIKE = "PlaneStrike"
    PLANE_TRANSPORT = "PlaneTransport"
    HELICOPTER_ATTACK = "HelicopterAttack"
    HELICOPTER_TRANSPORT = "HelicopterTransport"
    SHIP_CARGO = "ShipCargo"
    SHIP_FRIGATE = "ShipFrigate"
    SHIP_CRUISER = "ShipCruiser"
    VEHICLE_AAA = "VehicleAAA"
    VEHICLE_APC = "VehicleAPC"
    VEHICLE_MBT = "VehicleMBT"
    VEHICLE_SAM_SHORT = "VehicleSAMShort"
    VEHICLE_TRANSPORT = "VehicleTransport"
    INFANTRY = "Infantry"
    INFANTRY_MANPADS = "InfantryMANPADS"
    STATIC_STRUCTURE = "StaticStructure"
    STATIC_SUPPLY = "StaticSupply"

    @property
    def category(self) -> UnitCategory:
        if self.value.startswith("Plane"):
            return UnitCategory.PLANE
        if self.value.startswith("Helicopter"):
            return UnitCategory.HELICOPTER
        if self.value.startswith("Ship"):
            return UnitCategory.SHIP
        if self.value.startswith("Infantry"):
            return UnitCategory.INFANTRY
        if self.value.startswith("Static"):
            return UnitCategory.STATIC
        return UnitCategory.VEHICLE

    @property
    def is_infantry(self) -> bool:
        return self in (UnitFamily.INFANTRY, UnitFamily.INFANTRY_MANPADS)


class BehaviorLocation(Enum):
    """Where a target group is placed and where it heads to."""
    DEFAULT = "Default"
    SPAWN_ON_AIRBASE = "SpawnOnAirbase"
    SPAWN_ON_AIRBASE_PARKING = "SpawnOnAirbaseParking"
    SPAWN_ON_AIRBASE_PARKING_NO_HARDENED_SHELTER = "SpawnOnAirbaseParkingNoHardenedShelter"
    GO_TO_PLAYER_AIRBASE = "GoToPlayerAirbase"
    GO_TO_AIRBASE = "GoToAirbase"
    PATROLLING = "Patrolling"

    @property
    def is_airbase(self) -> bool:
        return self in AIRBASE_LOCATIONS

    @property
    def is_air_on_ground(self) -> bool:
        return self in AIR_ON_GROUND_LOCATIONS


AIRBASE_LOCATIONS = frozenset({
    BehaviorLocation.SPAWN_ON_AIRBASE,
    BehaviorLocation.SPAWN_ON_AIRBASE_PARKING,
    BehaviorLocation.SPAWN_ON_AIRBASE_PARKING_NO_HARDENED_SHELTER,
})

AIR_ON_GROUND_LOCATIONS = frozenset({
    BehaviorLocation.SPAWN_ON_AIRBASE_PARKING,
    BehaviorLocation.SPAWN_ON_AIRBASE_PARKING_NO_HARDENED_SHELTER,
})


class ObjectiveOption(Enum):
    """Modifier flags attached to one objective instance."""
    SHOW_TARGET = "ShowTarget"
    HIDE_TARGET = "HideTarget"
    INVISIBLE = "Invisible"
    INACCURATE_WAYPOINT = "InaccurateWaypoint"
    EMBEDDED_AIR_DEFENSE = "EmbeddedAirDefense"


class Amount(Enum):
    """Relative amount, used to pick a target unit count range."""
    VERY_LOW = "VeryLow"
    LOW = "Low"
    AVERAGE = "Average"
    HIGH = "High"
    VERY_HIGH = "VeryHigh"


class MissionOption(Enum):
    """Mission-wide switches affecting placement and map drawings."""
    SPAWN_ANYWHERE = "SpawnAnywhere"
    INVERT_COUNTRIES_COALITIONS = "InvertCountriesCoalitions"
    MARK_WAYPOINTS = "MarkWaypoints"


class ParkingSpotType(Enum):
    OPEN_AIR = "OpenAir"
    HARDENED_AIR_SHELTER = "HardenedAirShelter"


class BriefingItemType(Enum):
    TASK = "Task"
    REMARK = "Remark"
    TARGET_GROUP_NAME = "TargetGroupName"


class DrawingType(Enum):
    CIRCLE = "Circle"
    POLYGON = "Polygon"
