#!/usr/bin/env python3
# glidezone/reachability/tests/test_annotator.py

import sys
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parent))

from reachability_fixtures import make_aircraft, make_location
from glidezone.reachability.annotator import LineAnnotator
from glidezone.reachability.data_models import (HumanPresence, ReachabilityConfig, RiskCategory, SurfaceType,
                                                UsageType)
from glidezone.reachability.exceptions import MissingPerformanceDataError


class TestLineAnnotator(unittest.TestCase):
    def setUp(self):
        self.annotator = LineAnnotator()
        self.aircraft = make_aircraft()

    def test_one_feature_per_location(self):
        locations = [
            make_location(name="Meadow"),
            make_location(name="Lake", surface=SurfaceType.WATER, usage=UsageType.WATERWAY),
            make_location(name="Park", human_presence=HumanPresence.DENSE),
        ]
        lines = self.annotator.annotate(locations, self.aircraft)

        self.assertEqual([line.location_id for line in lines], ["Meadow", "Lake", "Park"])
        self.assertEqual([line.risk for line in lines],
                         [RiskCategory.SAFE, RiskCategory.UNSAFE, RiskCategory.RISKY])
        self.assertEqual([line.color for line in lines], ["#388E3C", "#E64A19", "#FFC107"])

    def test_keeps_centerline_coordinates(self):
        location = make_location(name="Meadow", bearing_deg=45)
        (line,) = self.annotator.annotate([location], self.aircraft)
        self.assertEqual(line.coordinates, location.centerline)
        self.assertEqual(line.name, "Meadow")

    def test_airfields_are_skipped(self):
        locations = [make_location(name="Airfield", surface=SurfaceType.ASPHALT, usage=UsageType.AERONAUTICAL),
                     make_location(name="Meadow")]
        lines = self.annotator.annotate(locations, self.aircraft)
        self.assertEqual([line.location_id for line in lines], ["Meadow"])

    def test_custom_palette(self):
        config = ReachabilityConfig()
        config.colors[RiskCategory.SAFE] = "#00FF00"
        (line,) = LineAnnotator(config).annotate([make_location()], self.aircraft)
        self.assertEqual(line.color, "#00FF00")

    def test_missing_headroom_is_an_error(self):
        with self.assertRaises(MissingPerformanceDataError):
            self.annotator.annotate([make_location(headroom=None)], self.aircraft)


if __name__ == '__main__':
    unittest.main()
