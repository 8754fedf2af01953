__version__ = "0.1.0"

# --- Core Data ---
from .classes.coordinates import Coordinates, MinMax, MinMaxI
from .classes.mission import Mission
from .classes.theater import Theater, load_theater

# --- Essential Dataclasses ---
from .classes.mission_objects import (
    SpawnPoint,
    ParkingSpot,
    Airbase,
    Waypoint,
    BriefingItem,
    MapDrawing,
)

# --- Reference Database ---
from .resources.database import Database

# --- Procedural Engine ---
from .procedural import (
    MissionTemplate,
    ObjectiveTemplate,
    SubTaskTemplate,
    MissionGenerator,
    SpawnPointSelector,
    ProceduralGenerationError,
)

from .misc.logger import create_logger
_logger = create_logger(verbose=False, name="pysortie")
_logger.info(f"pysortie {__version__} loaded.")
