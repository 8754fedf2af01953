from __future__ import annotations

import os
import random
from dataclasses import dataclass, field
from typing import Optional

from ..classes.mission import Mission
from ..classes.theater import Theater
from ..resources.database import Database
from ..resources.resources import get_media_directory
from ..misc.logger import create_logger
from .briefing_text import WaypointNameGenerator
from .objectives import ObjectiveGenerator
from .spawn_selector import SpawnPointSelector
from .spec import MissionTemplate
from .unit_maker import CatalogUnitMaker, UnitMaker
from .validation import ReferenceNotFoundError, TemplateValidator


@dataclass
class MissionGenerator:
    """
    Facade that wires the allocation engine and the objective pipeline
    together to produce a Mission from a template and a theater.

    Each call to ``generate`` owns a fresh SpawnPointSelector, so one
    generator (and one theater) can serve any number of builds. Any error
    aborts the build; no partially built mission is returned.
    """
    database: Optional[Database] = None
    unit_maker: Optional[UnitMaker] = None
    verbose: bool = False
    debug: bool = False
    media_directory: Optional[str] = None
    logger: any = field(init=False, repr=False)

    def __post_init__(self):
        self.logger = create_logger(verbose=self.verbose, name="MissionGenerator", debug=self.debug)
        if self.database is None:
            self.database = Database.load_default()
        if self.media_directory is None:
            self.media_directory = get_media_directory()

    def generate(self, template: MissionTemplate, theater: Theater) -> Mission:
        """
        Build a mission.

        Returns:
            Mission: populated with objectives, waypoints, briefing entries,
            script fragments, map data and media references.
        """
        TemplateValidator(self.database.common).validate(template)

        rng = random.Random(template.seed)
        selector = SpawnPointSelector(theater, template.use_shape_spawning, rng=rng, verbose=self.verbose,
                                      debug=self.debug)
        unit_maker = self.unit_maker or CatalogUnitMaker(self.database, rng=rng, verbose=self.verbose,
                                                         debug=self.debug)

        player_airbase = theater.get_airbase(template.player_airbase_id)
        if player_airbase is None:
            raise ReferenceNotFoundError(f"Player airbase {template.player_airbase_id} not found in theater "
                                         f"'{theater.theater_id}'.")

        mission = Mission(theater_id=theater.theater_id, player_coalition=template.player_coalition,
                          verbose=self.verbose)
        for ogg in self.database.common.common_ogg:
            source = os.path.join(self.media_directory, ogg)
            if not os.path.exists(source):
                self.logger.warning(f"Media file \"{source}\" doesn't exist.")
            mission.add_media_file(f"l10n/DEFAULT/{ogg}", source)

        generator = ObjectiveGenerator(self.database, selector, unit_maker, rng=rng,
                                       media_directory=self.media_directory, verbose=self.verbose,
                                       debug=self.debug)
        waypoint_names = WaypointNameGenerator(self.database.common.waypoint_names, rng=rng)

        last_coordinates = player_airbase.coordinates
        for i, objective in enumerate(template.objectives):
            self.logger.info(f"Generating objective {i + 1}/{len(template.objectives)}...")
            last_coordinates, _ = generator.generate_objective(
                mission, template, objective, last_coordinates, player_airbase, waypoint_names)

        self.logger.info(
            f"Mission generated on '{theater.theater_id}': {len(mission.waypoints)} waypoints, "
            f"{len(mission.unit_groups)} unit groups, {len(selector.remaining_spawn_points())} spawn points left."
        )
        return mission
