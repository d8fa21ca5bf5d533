#!/usr/bin/env python3
# glidezone/reachability/tests/test_core.py

import sys
from pathlib import Path
import unittest

import folium
from shapely.geometry import GeometryCollection, LineString, MultiPolygon, Polygon, box

sys.path.insert(0, str(Path(__file__).resolve().parent))

from reachability_fixtures import ORIGIN, make_aircraft, make_location
from glidezone.reachability import (ReachabilityCalculator, annotate_centerlines, build_envelope, classify_risk,
                                    composite_zones)
from glidezone.reachability.data_models import (GeometryKind, HumanPresence, ReachabilityConfig, RiskCategory,
                                                SurfaceType, UsageType, ZoneGeometry)
from glidezone.reachability.exceptions import MissingPerformanceDataError
from glidezone.reachability.serialization import line_features_to_geojson, zone_map_to_geojson
from glidezone.reachability.utils.coordinates import GeometryKernel
from glidezone.reachability.visualization import ZoneMapVisualizer

ALTITUDE_M = 300


def mixed_locations():
    east = GeometryKernel.rhumb_destination(ORIGIN, 1.5, 90)
    south = GeometryKernel.rhumb_destination(ORIGIN, 2.0, 200)
    return [
        make_location(name="Meadow"),
        make_location(name="Fairground", start=east, human_presence=HumanPresence.EVENT_ONLY),
        make_location(name="Lake", start=south, surface=SurfaceType.WATER, usage=UsageType.WATERWAY),
    ]


class TestReachabilityCalculator(unittest.TestCase):
    def setUp(self):
        self.calculator = ReachabilityCalculator()
        self.aircraft = make_aircraft()

    def test_compute_zones_summary(self):
        results = self.calculator.compute_zones(mixed_locations(), self.aircraft, ALTITUDE_M)
        self.assertEqual(results.aircraft_id, "TEST")
        self.assertEqual(results.altitude_m, ALTITUDE_M)
        self.assertEqual(results.location_count, 3)
        self.assertEqual(results.envelope_counts, {
            RiskCategory.SAFE: 1, RiskCategory.RISKY: 1, RiskCategory.UNSAFE: 1
        })
        self.assertEqual(results.categories, [RiskCategory.SAFE, RiskCategory.RISKY, RiskCategory.UNSAFE])

    def test_compute_zones_logs_and_raises(self):
        with self.assertLogs(level='ERROR'):
            with self.assertRaises(MissingPerformanceDataError):
                self.calculator.compute_zones([make_location(headroom=None)], self.aircraft, ALTITUDE_M)

    def test_build_envelope_is_classified(self):
        envelope = self.calculator.build_envelope(make_location(headroom=-0.3), self.aircraft, ALTITUDE_M)
        self.assertEqual(envelope.risk, RiskCategory.UNSAFE)
        self.assertEqual(len(envelope.ring), 37)

    def test_build_envelope_with_explicit_risk_skips_headroom(self):
        envelope = self.calculator.build_envelope(make_location(headroom=None), self.aircraft, ALTITUDE_M,
                                                  risk=RiskCategory.RISKY)
        self.assertEqual(envelope.risk, RiskCategory.RISKY)
        self.assertEqual(len(envelope.ring), 37)

    def test_location_details(self):
        location = make_location(name="Meadow", reversible=True, headroom=-0.2)
        details = self.calculator.location_details(location, self.aircraft)
        self.assertEqual(details["id"], "Meadow")
        self.assertEqual(details["risk"], "risky")
        self.assertEqual(details["landing_headroom"], -0.2)
        self.assertEqual(details["surface"], "Gras")
        self.assertEqual(details["human_presence"], "None")
        self.assertAlmostEqual(details["reverse_bearing"], location.reverse_bearing)
        self.assertEqual(len(details["coordinates"]), 2)

    def test_location_details_of_one_way_runway(self):
        details = self.calculator.location_details(make_location(), self.aircraft)
        self.assertIsNone(details["reverse_bearing"])
        self.assertEqual(details["risk"], "safe")

    def test_location_details_without_headroom(self):
        with self.assertRaises(MissingPerformanceDataError):
            self.calculator.location_details(make_location(headroom=None), self.aircraft)

    def test_reachability_geojson(self):
        geojson = self.calculator.reachability_geojson(mixed_locations(), self.aircraft, ALTITUDE_M)
        self.assertEqual(geojson['type'], "FeatureCollection")
        self.assertEqual([f['properties']['risk'] for f in geojson['features']], ["safe", "risky", "unsafe"])
        self.assertEqual([f['properties']['color'] for f in geojson['features']],
                         ["#388E3C", "#FFC107", "#E64A19"])
        for feature in geojson['features']:
            self.assertIn(feature['geometry']['type'], ("Polygon", "MultiPolygon"))

    def test_empty_catalog_geojson(self):
        geojson = self.calculator.reachability_geojson([], self.aircraft, ALTITUDE_M)
        self.assertEqual(geojson, {"type": "FeatureCollection", "features": []})

    def test_centerlines_geojson(self):
        geojson = self.calculator.centerlines_geojson(mixed_locations(), self.aircraft)
        feature = geojson['features'][0]
        self.assertEqual(feature['id'], "Meadow")
        self.assertEqual(feature['geometry']['type'], "LineString")
        self.assertEqual(len(feature['geometry']['coordinates']), 2)
        self.assertEqual(feature['properties'], {"name": "Meadow", "risk": "safe", "color": "#388E3C"})

    def test_config_reaches_classifier(self):
        config = ReachabilityConfig(event_only_risk=RiskCategory.SAFE)
        zones = ReachabilityCalculator(config).composite_zones(mixed_locations(), self.aircraft, ALTITUDE_M)
        self.assertNotIn(RiskCategory.RISKY, zones)


class TestFunctionalSurface(unittest.TestCase):
    def setUp(self):
        self.aircraft = make_aircraft()

    def test_classify_risk(self):
        self.assertEqual(classify_risk(make_location(), -0.2), RiskCategory.RISKY)

    def test_build_envelope(self):
        envelope = build_envelope(make_location(), self.aircraft, ALTITUDE_M)
        self.assertEqual(envelope.risk, RiskCategory.SAFE)
        self.assertEqual(envelope.location_id, "Field")

    def test_composite_zones_matches_calculator(self):
        locations = mixed_locations()
        self.assertEqual(composite_zones(locations, self.aircraft, ALTITUDE_M),
                         ReachabilityCalculator().composite_zones(locations, self.aircraft, ALTITUDE_M))

    def test_annotate_centerlines(self):
        lines = annotate_centerlines(mixed_locations(), self.aircraft)
        self.assertEqual([line.risk for line in lines],
                         [RiskCategory.SAFE, RiskCategory.RISKY, RiskCategory.UNSAFE])


class TestZoneGeometry(unittest.TestCase):
    def test_from_nothing(self):
        self.assertTrue(ZoneGeometry.from_shape(None).is_empty)
        self.assertTrue(ZoneGeometry.from_shape(Polygon()).is_empty)
        self.assertIsNone(ZoneGeometry.empty().to_geojson())

    def test_polygon(self):
        geometry = ZoneGeometry.from_shape(box(0, 0, 1, 1))
        self.assertEqual(geometry.kind, GeometryKind.POLYGON)
        self.assertEqual(geometry.to_geojson()['type'], "Polygon")
        self.assertAlmostEqual(geometry.to_shape().area, 1.0)

    def test_multipolygon(self):
        geometry = ZoneGeometry.from_shape(MultiPolygon([box(0, 0, 1, 1), box(2, 2, 3, 3)]))
        self.assertEqual(geometry.kind, GeometryKind.MULTIPOLYGON)
        self.assertAlmostEqual(geometry.to_shape().area, 2.0)

    def test_collection_keeps_only_polygons(self):
        collection = GeometryCollection([box(0, 0, 1, 1), LineString([(5, 5), (6, 6)])])
        geometry = ZoneGeometry.from_shape(collection)
        self.assertEqual(geometry.kind, GeometryKind.POLYGON)

    def test_non_areal_is_empty(self):
        self.assertTrue(ZoneGeometry.from_shape(LineString([(0, 0), (1, 1)])).is_empty)


class TestLocationRecord(unittest.TestCase):
    def test_locations_are_hashable(self):
        first = make_location(name="Meadow")
        same = make_location(name="Meadow")
        self.assertEqual(hash(first), hash(same))
        self.assertEqual(len({first, same, make_location(name="Other")}), 2)


class TestSerialization(unittest.TestCase):
    def test_empty_zones_are_skipped(self):
        zones = {RiskCategory.SAFE: ZoneGeometry.from_shape(box(0, 0, 1, 1)),
                 RiskCategory.RISKY: ZoneGeometry.empty()}
        geojson = zone_map_to_geojson(zones)
        self.assertEqual([f['properties']['risk'] for f in geojson['features']], ["safe"])

    def test_features_follow_precedence_not_insertion_order(self):
        zones = {RiskCategory.UNSAFE: ZoneGeometry.from_shape(box(2, 2, 3, 3)),
                 RiskCategory.SAFE: ZoneGeometry.from_shape(box(0, 0, 1, 1))}
        geojson = zone_map_to_geojson(zones)
        self.assertEqual([f['properties']['risk'] for f in geojson['features']], ["safe", "unsafe"])

    def test_no_lines(self):
        self.assertEqual(line_features_to_geojson([]), {"type": "FeatureCollection", "features": []})


class TestReachabilityConfig(unittest.TestCase):
    def test_defaults(self):
        config = ReachabilityConfig.from_preferences(None)
        self.assertEqual(config.unsafe_headroom, -0.25)
        self.assertEqual(config.risky_headroom, -0.15)
        self.assertEqual(config.precedence, (RiskCategory.SAFE, RiskCategory.RISKY, RiskCategory.UNSAFE))
        self.assertEqual(config.color_for(RiskCategory.RISKY), "#FFC107")

    def test_overrides(self):
        config = ReachabilityConfig.from_preferences({
            'unsafe_headroom': "-0.4", 'risky_headroom': -0.1, 'dense_risk': "unsafe", 'unknown': 1
        })
        self.assertEqual(config.unsafe_headroom, -0.4)
        self.assertEqual(config.risky_headroom, -0.1)
        self.assertEqual(config.dense_risk, RiskCategory.UNSAFE)
        self.assertEqual(config.event_only_risk, RiskCategory.RISKY)

    def test_invalid_values_keep_defaults(self):
        with self.assertLogs(level='WARNING'):
            config = ReachabilityConfig.from_preferences({'unsafe_headroom': "lots", 'event_only_risk': "maybe"})
        self.assertEqual(config.unsafe_headroom, -0.25)
        self.assertEqual(config.event_only_risk, RiskCategory.RISKY)

    def test_to_preferences_round_trip(self):
        config = ReachabilityConfig.from_preferences({'risky_headroom': "-0.1", 'dense_risk': "unsafe"})
        preferences = config.to_preferences()
        self.assertEqual(preferences, {
            'unsafe_headroom': -0.25, 'risky_headroom': -0.1,
            'event_only_risk': "risky", 'dense_risk': "unsafe"
        })
        self.assertEqual(ReachabilityConfig.from_preferences(preferences), config)

    def test_swapped_thresholds_fall_back(self):
        with self.assertLogs(level='WARNING'):
            config = ReachabilityConfig.from_preferences({'unsafe_headroom': 0.1, 'risky_headroom': -0.1})
        self.assertEqual((config.unsafe_headroom, config.risky_headroom), (-0.25, -0.15))


class TestZoneMapVisualizer(unittest.TestCase):
    def test_creates_map_with_layers(self):
        aircraft = make_aircraft()
        calculator = ReachabilityCalculator()
        locations = mixed_locations()
        zones = calculator.composite_zones(locations, aircraft, ALTITUDE_M)
        lines = calculator.annotate_centerlines(locations, aircraft)

        zone_map = ZoneMapVisualizer().create_zone_map((ORIGIN[1], ORIGIN[0]), zones, lines)
        self.assertIsInstance(zone_map, folium.Map)
        html = zone_map.get_root().render()
        self.assertIn("Safe landing range", html)
        self.assertIn("Landing locations", html)


if __name__ == '__main__':
    unittest.main()
