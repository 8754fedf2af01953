"""Read-only reference records looked up by string id during generation."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple

from .coordinates import MinMaxI
from .enums import (
    Amount,
    BehaviorLocation,
    ObjectiveOption,
    Side,
    SpawnPointType,
    UnitCategory,
    UnitFamily,
)


@dataclass(frozen=True)
class ObjectiveTarget:
    """What can be targeted: unit families, counts and where they may spawn."""
    id: str
    display_name: str
    unit_category: UnitCategory
    unit_families: Tuple[UnitFamily, ...]
    valid_spawn_points: Tuple[SpawnPointType, ...]
    unit_count: Dict[Amount, MinMaxI] = field(default_factory=dict, hash=False)

    def count_range(self, amount: Amount) -> MinMaxI:
        return self.unit_count.get(amount, MinMaxI(1, 1))


@dataclass(frozen=True)
class TargetBehavior:
    """
    How a target behaves: location policy plus movement templates.

    Script templates are keyed by ``UnitCategory.script_category``.
    """
    id: str
    display_name: str
    location: BehaviorLocation = BehaviorLocation.DEFAULT
    group_scripts: Dict[str, str] = field(default_factory=dict, hash=False)
    unit_scripts: Dict[str, str] = field(default_factory=dict, hash=False)

    def group_script(self, category: UnitCategory) -> str:
        return self.group_scripts.get(category.script_category, "")

    def unit_script(self, category: UnitCategory) -> str:
        return self.unit_scripts.get(category.script_category, "")


@dataclass(frozen=True)
class ObjectiveTask:
    """What the player has to do to a target."""
    id: str
    display_name: str
    target_side: Side
    valid_unit_categories: Tuple[UnitCategory, ...]
    # (singular, plural) briefing templates; each may hold {a|b} random choices
    briefing_task: Tuple[str, str] = ("", "")
    # Semicolon separated list, one is picked at random
    briefing_remarks: str = ""
    include_ogg: Tuple[str, ...] = ()
    required_features: Tuple[str, ...] = ()
    ui_categories: Tuple[str, ...] = ()
    completion_triggers: Tuple[str, ...] = ()
    escort: bool = False

    @property
    def is_transport(self) -> bool:
        return "Transport" in self.ui_categories

    @property
    def is_escort(self) -> bool:
        return self.escort


@dataclass(frozen=True)
class ObjectivePreset:
    """Named bundle resolving to a random target and behavior for a fixed task."""
    id: str
    display_name: str
    targets: Tuple[str, ...]
    target_behaviors: Tuple[str, ...]
    task: str
    options: Tuple[ObjectiveOption, ...] = ()
    features: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ObjectiveFeature:
    """Scripted companion feature expanded once per objective."""
    id: str
    script: str = ""
    include_ogg: Tuple[str, ...] = ()


@dataclass(frozen=True)
class UnitRecord:
    """Unit type the unit maker can spawn."""
    id: str
    families: Tuple[UnitFamily, ...]
    # Large airframes do not fit hardened air shelters
    can_use_shelters: bool = True

    @property
    def category(self) -> UnitCategory:
        return self.families[0].category

    @property
    def is_aircraft(self) -> bool:
        return self.category.is_aircraft


@dataclass(frozen=True)
class CommonSettings:
    """Database-wide limits and shared names."""
    max_objectives: int = 5
    max_objective_distance: int = 300
    max_objective_separation: int = 100
    common_ogg: Tuple[str, ...] = ()
    # UnitFamily value -> "singular,plural"
    unit_family_names: Dict[str, str] = field(default_factory=dict, hash=False)
    # Code words used to name objectives
    waypoint_names: Tuple[str, ...] = ()
    # Unit id used to size cargo pickup parking
    cargo_aircraft: str = ""
