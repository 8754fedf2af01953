"""
Unit Tests for Logging and Mission Object Helpers
=================================================

Run with: pytest tests/test_misc.py -v
"""

import io
import os
import sys
import unittest
from contextlib import redirect_stderr, redirect_stdout

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from pysortie.classes.coordinates import Coordinates
from pysortie.classes.enums import Coalition, DrawingType, SpawnPointType
from pysortie.classes.mission import Mission
from pysortie.classes.mission_objects import SpawnPoint, Waypoint
from pysortie.misc.logger import create_logger


class TestLogger(unittest.TestCase):
    """Prefixed print-based logger."""

    def capture(self, logger, method, message):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            getattr(logger, method)(message)
        return out.getvalue(), err.getvalue()

    def test_quiet_logger_keeps_warnings(self):
        logger = create_logger(verbose=False, name="Test")
        self.assertEqual(self.capture(logger, "info", "hello"), ("", ""))
        _, err = self.capture(logger, "warning", "careful")
        self.assertEqual(err, "[pysortie] [Test] Warning: careful\n")

    def test_verbose_logger(self):
        logger = create_logger(verbose=True, name="Test")
        out, _ = self.capture(logger, "info", "hello")
        self.assertEqual(out, "[pysortie] [Test] hello\n")
        self.assertEqual(self.capture(logger, "debug", "hidden"), ("", ""))

    def test_debug_logger(self):
        logger = create_logger(verbose=True, debug=True)
        out, _ = self.capture(logger, "debug", "details")
        self.assertEqual(out, "[pysortie] DEBUG: details\n")


class TestMissionObjects(unittest.TestCase):

    def test_to_dict(self):
        point = SpawnPoint(coordinates=Coordinates(1, 2), point_type=SpawnPointType.SEA, coalition=Coalition.RED)
        self.assertEqual(point.to_dict(), {"coordinates": [1, 2], "point_type": "Sea", "coalition": "Red"})
        # Unset optional fields are left out
        self.assertNotIn("coalition", SpawnPoint(Coordinates(), SpawnPointType.AIR).to_dict())

    def test_mission_collections(self):
        mission = Mission()
        mission.append_value("Script", "a")
        mission.append_value("Script", "b")
        self.assertEqual(mission.get_value("Script"), "ab")
        self.assertEqual(mission.get_value("Missing"), "")

        mission.add_media_file("l10n/DEFAULT/a.ogg", "first")
        mission.add_media_file("l10n/DEFAULT/a.ogg", "second")
        self.assertEqual(mission.media_files, {"l10n/DEFAULT/a.ogg": "first"})

        mission.add_drawing("Zone", DrawingType.CIRCLE, Coordinates(5, 5), radius=10)
        self.assertEqual(mission.get_drawing("Zone").properties, {"radius": 10})
        self.assertIsNone(mission.get_drawing("Other"))

        self.assertEqual(mission.add_waypoint(Waypoint(name="A", coordinates=Coordinates())), 0)
        with self.assertRaises(TypeError):
            mission.add_waypoint("not a waypoint")


if __name__ == '__main__':
    unittest.main()
