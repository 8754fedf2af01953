"""
Example generating a mission on the bundled sample theater.

This example shows:
1. Loading the packaged database and sample theater
2. Building a template with presets, a sub-task and a transport objective
3. Inspecting what the generator wrote into the Mission
"""
import os
import sys

# Add pysortie to path
ROOT = os.path.dirname(os.path.dirname(__file__))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from pysortie import Database, MissionGenerator, MissionTemplate, ObjectiveTemplate, SubTaskTemplate, Theater
from pysortie.classes.enums import BriefingItemType, MissionOption, ObjectiveOption
from pysortie.procedural import ProceduralGenerationError
from pysortie.resources.resources import get_sample_theater_data


def main():
    theater = Theater.from_dict(get_sample_theater_data())
    database = Database.load_default()

    template = MissionTemplate(
        theater_id=theater.theater_id,
        player_airbase_id=1,
        options={MissionOption.MARK_WAYPOINTS},
        seed=int(os.environ.get("PYSORTIE_SEED", "2024")),
        objectives=[
            ObjectiveTemplate(preset="Sead"),
            ObjectiveTemplate(
                target="Structures", target_behavior="Idle", task="DestroyAll",
                options={ObjectiveOption.EMBEDDED_AIR_DEFENSE, ObjectiveOption.INACCURATE_WAYPOINT},
                sub_tasks=[SubTaskTemplate(target="ArmoredVehicles", target_behavior="Patrolling", task="DestroyAll")],
            ),
            ObjectiveTemplate(target="Troops", target_behavior="RecoverToBase", task="TransportTroops"),
        ],
    )

    generator = MissionGenerator(database=database, verbose=True)
    try:
        mission = generator.generate(template, theater)
    except ProceduralGenerationError as e:
        print(f"\n[ERROR] Mission generation failed: {e}")
        sys.exit(1)

    print("\n" + "=" * 60)
    print("WAYPOINTS:")
    print("=" * 60)
    for waypoint in mission.waypoints:
        marker = " (script ignored)" if waypoint.script_ignore else ""
        print(f"  {waypoint.name:<20} ({waypoint.coordinates.x:>9.0f}, {waypoint.coordinates.y:>9.0f}){marker}")

    print("\n" + "=" * 60)
    print("BRIEFING:")
    print("=" * 60)
    for task in mission.get_briefing_items(BriefingItemType.TASK):
        print(f"  - {task}")
    for remark in mission.get_briefing_items(BriefingItemType.REMARK):
        print(f"  * {remark}")

    print("\n" + "=" * 60)
    print("UNIT GROUPS:")
    print("=" * 60)
    for info in mission.unit_groups:
        print(f"  {info.name}: {len(info.unit_names)} x {info.unit_record.id}")

    print(f"\nMedia files referenced: {len(mission.media_files)}")
    print(f"Map drawings: {len(mission.drawings)}")


if __name__ == "__main__":
    main()
