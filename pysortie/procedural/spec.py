from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

from ..classes.coordinates import Coordinates, MinMax
from ..classes.enums import Amount, Coalition, MissionOption, ObjectiveOption, Side


@dataclass
class SubTaskTemplate:
    """
    One objective entry of a mission template.

    Either ``preset`` or the ``target`` / ``target_behavior`` / ``task``
    triple identifies what is generated; a preset wins when both are given.
    """
    target: str = ""
    target_behavior: str = ""
    task: str = ""
    preset: str = ""
    options: Set[ObjectiveOption] = field(default_factory=set)
    target_count: Amount = Amount.AVERAGE

    @property
    def has_preset(self) -> bool:
        return bool(self.preset)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SubTaskTemplate":
        return cls(**_common_fields(data))


@dataclass
class ObjectiveTemplate(SubTaskTemplate):
    """Top-level objective: adds features, an optional hint position and sub-tasks."""
    features: List[str] = field(default_factory=list)
    coordinates_hint: Optional[Coordinates] = None
    sub_tasks: List[SubTaskTemplate] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ObjectiveTemplate":
        hint = data.get("coordinates_hint")
        return cls(
            features=list(data.get("features", [])),
            coordinates_hint=Coordinates.from_sequence(hint) if hint else None,
            sub_tasks=[SubTaskTemplate.from_dict(s) for s in data.get("sub_tasks", [])],
            **_common_fields(data),
        )


@dataclass
class MissionTemplate:
    """
    Contract for the mission generator input.

    Flight plan ranges are in nautical miles; the generator converts them
    to meters before querying the spawn point selector.
    """
    theater_id: str = ""
    player_coalition: Coalition = Coalition.BLUE
    player_airbase_id: int = 0

    flight_plan_objective_distance: MinMax = field(default_factory=lambda: MinMax(40, 80))
    flight_plan_objective_separation: MinMax = field(default_factory=lambda: MinMax(10, 20))

    options: Set[MissionOption] = field(default_factory=set)
    # Free-form mission feature ids (e.g. "ContextScrambleStart")
    mission_features: List[str] = field(default_factory=list)
    use_shape_spawning: bool = True

    objectives: List[ObjectiveTemplate] = field(default_factory=list)

    # Randomness and reproducibility
    seed: Optional[int] = None

    @property
    def spawn_anywhere(self) -> bool:
        return MissionOption.SPAWN_ANYWHERE in self.options

    @property
    def invert_coalitions(self) -> bool:
        return MissionOption.INVERT_COUNTRIES_COALITIONS in self.options

    def side_coalition(self, side: Side) -> Coalition:
        """Coalition fighting on ``side``, after coalition inversion."""
        coalition = self.player_coalition if side is Side.ALLY else self.player_coalition.enemy
        if self.invert_coalitions:
            coalition = coalition.enemy
        return coalition

    def spawn_point_coalition(self, side: Side, force: bool = False) -> Optional[Coalition]:
        """
        Coalition whose territory spawn points must respect for ``side``.

        Returns None (no restriction) when units may spawn anywhere, unless
        ``force`` asks for the coalition regardless.
        """
        if self.spawn_anywhere and not force:
            return None
        return self.side_coalition(side)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MissionTemplate":
        """Build a template from plain JSON-style data."""
        kwargs: Dict[str, Any] = {
            "theater_id": data.get("theater_id", ""),
            "player_coalition": Coalition(data.get("player_coalition", Coalition.BLUE.value)),
            "player_airbase_id": int(data.get("player_airbase_id", 0)),
            "options": {MissionOption(o) for o in data.get("options", [])},
            "mission_features": list(data.get("mission_features", [])),
            "use_shape_spawning": bool(data.get("use_shape_spawning", True)),
            "objectives": [ObjectiveTemplate.from_dict(o) for o in data.get("objectives", [])],
            "seed": data.get("seed"),
        }
        if "flight_plan_objective_distance" in data:
            kwargs["flight_plan_objective_distance"] = MinMax.from_sequence(data["flight_plan_objective_distance"])
        if "flight_plan_objective_separation" in data:
            kwargs["flight_plan_objective_separation"] = MinMax.from_sequence(data["flight_plan_objective_separation"])
        return cls(**kwargs)


def _common_fields(data: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "target": data.get("target", ""),
        "target_behavior": data.get("target_behavior", ""),
        "task": data.get("task", ""),
        "preset": data.get("preset", ""),
        "options": {ObjectiveOption(o) for o in data.get("options", [])},
        "target_count": Amount(data.get("target_count", Amount.AVERAGE.value)),
    }
