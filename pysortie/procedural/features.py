from __future__ import annotations

import os
from typing import TYPE_CHECKING, Optional

from ..classes.coordinates import Coordinates
from ..classes.enums import Side
from ..classes.mission import Mission
from ..misc.logger import create_logger
from .briefing_text import replace_key
from .validation import ReferenceNotFoundError

if TYPE_CHECKING:
    from ..resources.database import Database
    from .unit_maker import UnitGroupInfo

FEATURES_VALUE = "ScriptObjectivesFeatures"


class FeaturesGenerator:
    """Expands objective feature scripts into the mission's feature script fragment."""

    def __init__(self, database: "Database", media_directory: str = "", verbose: bool = False,
                 debug: bool = False):
        self.database = database
        self.media_directory = media_directory
        self.logger = create_logger(verbose=verbose, name="Features", debug=debug)

    def generate(
        self,
        mission: Mission,
        feature_id: str,
        objective_name: str,
        objective_index: int,
        group_info: "UnitGroupInfo",
        side: Side,
        hide_target: bool,
        override_coords: Optional[Coordinates] = None,
    ) -> str:
        """
        Append the expanded script of ``feature_id`` for one objective.

        Returns:
            The expanded script text

        Raises:
            ReferenceNotFoundError: If the feature id is unknown
        """
        feature = self.database.get_feature(feature_id)
        if feature is None:
            raise ReferenceNotFoundError(f"Objective feature \"{feature_id}\" not found.")

        coords = override_coords if override_coords is not None else group_info.coordinates
        script = feature.script
        script = replace_key(script, "ObjectiveName", objective_name)
        script = replace_key(script, "ObjectiveIndex", objective_index + 1)
        script = replace_key(script, "GroupName", group_info.name)
        script = replace_key(script, "HideTarget", "true" if hide_target else "false")
        script = replace_key(script, "GroupX", f"{coords.x:.1f}")
        script = replace_key(script, "GroupY", f"{coords.y:.1f}")
        script = replace_key(script, "Side", side.value)

        if script:
            mission.append_value(FEATURES_VALUE, script if script.endswith("\n") else script + "\n")
        for ogg in feature.include_ogg:
            mission.add_media_file(f"l10n/DEFAULT/{ogg}", os.path.join(self.media_directory, ogg))

        self.logger.debug(f"Feature '{feature_id}' added to objective {objective_name}.")
        return script
