"""
Read-only reference database: targets, behaviors, tasks, presets, features,
unit types and database-wide settings, keyed by string id.

Lookups return ``None`` for unknown ids; callers decide whether absence is
an error.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, TypeVar

from ..classes.coordinates import MinMaxI
from ..classes.enums import (
    Amount,
    BehaviorLocation,
    ObjectiveOption,
    Side,
    SpawnPointType,
    UnitCategory,
    UnitFamily,
)
from ..classes.records import (
    CommonSettings,
    ObjectiveFeature,
    ObjectivePreset,
    ObjectiveTarget,
    ObjectiveTask,
    TargetBehavior,
    UnitRecord,
)
from ..misc.logger import create_logger
from .resources import get_database_data, load_json_file

_logger = create_logger(verbose=False, name="Database")

R = TypeVar("R")


class Database:
    """Typed immutable registries populated once and shared by every build."""

    def __init__(
        self,
        targets: Iterable[ObjectiveTarget] = (),
        behaviors: Iterable[TargetBehavior] = (),
        tasks: Iterable[ObjectiveTask] = (),
        presets: Iterable[ObjectivePreset] = (),
        features: Iterable[ObjectiveFeature] = (),
        units: Iterable[UnitRecord] = (),
        trigger_scripts: Optional[Mapping[str, str]] = None,
        common: Optional[CommonSettings] = None,
    ):
        self._targets = _registry(targets)
        self._behaviors = _registry(behaviors)
        self._tasks = _registry(tasks)
        self._presets = _registry(presets)
        self._features = _registry(features)
        self._units = _registry(units)
        self._trigger_scripts = MappingProxyType(dict(trigger_scripts or {}))
        self.common = common or CommonSettings()

    # ========== Lookups ==========

    def get_target(self, target_id: str) -> Optional[ObjectiveTarget]:
        return self._targets.get(target_id)

    def get_behavior(self, behavior_id: str) -> Optional[TargetBehavior]:
        return self._behaviors.get(behavior_id)

    def get_task(self, task_id: str) -> Optional[ObjectiveTask]:
        return self._tasks.get(task_id)

    def get_preset(self, preset_id: str) -> Optional[ObjectivePreset]:
        return self._presets.get(preset_id)

    def get_feature(self, feature_id: str) -> Optional[ObjectiveFeature]:
        return self._features.get(feature_id)

    def get_unit(self, unit_id: str) -> Optional[UnitRecord]:
        return self._units.get(unit_id)

    def get_trigger_script(self, name: str) -> Optional[str]:
        """Completion trigger script template by file name."""
        return self._trigger_scripts.get(name)

    def units_for_family(self, family: UnitFamily) -> List[UnitRecord]:
        return [unit for unit in self._units.values() if family in unit.families]

    def unit_family_name(self, family: UnitFamily, plural: bool = False) -> str:
        """Display name of a unit family, from the "singular,plural" names table."""
        names = self.common.unit_family_names.get(family.value)
        if not names:
            return family.value
        parts = [p.strip() for p in names.split(",")]
        if plural and len(parts) > 1:
            return parts[1]
        return parts[0]

    def summary(self) -> Dict[str, int]:
        return {
            "targets": len(self._targets),
            "behaviors": len(self._behaviors),
            "tasks": len(self._tasks),
            "presets": len(self._presets),
            "features": len(self._features),
            "units": len(self._units),
        }

    # ========== Loading ==========

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Database":
        """Build a database from its JSON-style dictionary form."""
        database = cls(
            targets=[_target_from_dict(d) for d in data.get("targets", [])],
            behaviors=[_behavior_from_dict(d) for d in data.get("behaviors", [])],
            tasks=[_task_from_dict(d) for d in data.get("tasks", [])],
            presets=[_preset_from_dict(d) for d in data.get("presets", [])],
            features=[ObjectiveFeature(id=d["id"], script=d.get("script", ""),
                                       include_ogg=tuple(d.get("include_ogg", [])))
                      for d in data.get("features", [])],
            units=[UnitRecord(id=d["id"], families=tuple(UnitFamily(f) for f in d["families"]),
                              can_use_shelters=bool(d.get("can_use_shelters", True)))
                   for d in data.get("units", [])],
            trigger_scripts=data.get("trigger_scripts", {}),
            common=_common_from_dict(data.get("common", {})),
        )
        _logger.info(f"Database loaded: {database.summary()}")
        return database

    @classmethod
    def from_json(cls, path: str) -> "Database":
        return cls.from_dict(load_json_file(path))

    @classmethod
    def load_default(cls) -> "Database":
        """Packaged database, or the file named by PYSORTIE_DATABASE_PATH."""
        return cls.from_dict(get_database_data())


def _registry(records: Iterable[R]) -> Mapping[str, R]:
    table: Dict[str, R] = {}
    for record in records:
        if record.id in table:
            _logger.warning(f"Duplicate database id '{record.id}', keeping the last definition.")
        table[record.id] = record
    return MappingProxyType(table)


def _target_from_dict(data: Dict[str, Any]) -> ObjectiveTarget:
    return ObjectiveTarget(
        id=data["id"],
        display_name=data.get("display_name", data["id"]),
        unit_category=UnitCategory(data["unit_category"]),
        unit_families=tuple(UnitFamily(f) for f in data["unit_families"]),
        valid_spawn_points=tuple(SpawnPointType(t) for t in data["valid_spawn_points"]),
        unit_count={Amount(k): MinMaxI.from_sequence(v) for k, v in data.get("unit_count", {}).items()},
    )


def _behavior_from_dict(data: Dict[str, Any]) -> TargetBehavior:
    return TargetBehavior(
        id=data["id"],
        display_name=data.get("display_name", data["id"]),
        location=BehaviorLocation(data.get("location", BehaviorLocation.DEFAULT.value)),
        group_scripts=dict(data.get("group_scripts", {})),
        unit_scripts=dict(data.get("unit_scripts", {})),
    )


def _task_from_dict(data: Dict[str, Any]) -> ObjectiveTask:
    briefing = list(data.get("briefing_task", ["", ""]))
    if len(briefing) == 1:
        briefing.append(briefing[0])
    return ObjectiveTask(
        id=data["id"],
        display_name=data.get("display_name", data["id"]),
        target_side=Side(data.get("target_side", Side.ENEMY.value)),
        valid_unit_categories=tuple(UnitCategory(c) for c in data.get("valid_unit_categories", [])),
        briefing_task=(briefing[0], briefing[1]),
        briefing_remarks=data.get("briefing_remarks", ""),
        include_ogg=tuple(data.get("include_ogg", [])),
        required_features=tuple(data.get("required_features", [])),
        ui_categories=tuple(data.get("ui_categories", [])),
        completion_triggers=tuple(data.get("completion_triggers", [])),
        escort=bool(data.get("escort", False)),
    )


def _preset_from_dict(data: Dict[str, Any]) -> ObjectivePreset:
    return ObjectivePreset(
        id=data["id"],
        display_name=data.get("display_name", data["id"]),
        targets=tuple(data["targets"]),
        target_behaviors=tuple(data["target_behaviors"]),
        task=data["task"],
        options=tuple(ObjectiveOption(o) for o in data.get("options", [])),
        features=tuple(data.get("features", [])),
    )


def _common_from_dict(data: Dict[str, Any]) -> CommonSettings:
    defaults = CommonSettings()
    return CommonSettings(
        max_objectives=int(data.get("max_objectives", defaults.max_objectives)),
        max_objective_distance=int(data.get("max_objective_distance", defaults.max_objective_distance)),
        max_objective_separation=int(data.get("max_objective_separation", defaults.max_objective_separation)),
        common_ogg=tuple(data.get("common_ogg", [])),
        unit_family_names=dict(data.get("unit_family_names", {})),
        waypoint_names=tuple(data.get("waypoint_names", [])),
        cargo_aircraft=data.get("cargo_aircraft", ""),
    )
