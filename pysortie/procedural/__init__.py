"""
Procedural mission generation for pysortie.

The allocation engine (SpawnPointSelector) hands out spawn points and
parking spots for one build; the objective pipeline (ObjectiveGenerator)
consumes it to place target groups and write briefing, script and map
output into a Mission. MissionGenerator wires both together.
"""

from .spec import MissionTemplate, ObjectiveTemplate, SubTaskTemplate
from .engine import MissionGenerator
from .objectives import ObjectiveGenerator
from .spawn_selector import SpawnPointSelector
from .unit_maker import CatalogUnitMaker, GroupFlags, UnitGroupInfo, UnitMaker, Visibility, resolve_group_flags
from .validation import (
    ProceduralGenerationError,
    ReferenceNotFoundError,
    AllocationExhaustedError,
    ConstraintViolationError,
    GroupCreationFailedError,
    InvalidTemplateError,
)

__all__ = [
    "MissionTemplate",
    "ObjectiveTemplate",
    "SubTaskTemplate",
    "MissionGenerator",
    "ObjectiveGenerator",
    "SpawnPointSelector",
    "UnitMaker",
    "CatalogUnitMaker",
    "UnitGroupInfo",
    "GroupFlags",
    "Visibility",
    "resolve_group_flags",
    "ProceduralGenerationError",
    "ReferenceNotFoundError",
    "AllocationExhaustedError",
    "ConstraintViolationError",
    "GroupCreationFailedError",
    "InvalidTemplateError",
]
