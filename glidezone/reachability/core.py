# glidezone/reachability/core.py
"""
The core orchestrator of the reachability engine. It classifies locations,
builds their envelopes, composites them into risk zones and serializes the
result for rendering. Every call is a pure function of its arguments; the
calculator only holds configuration.
"""
import logging
from typing import Iterable, List, Optional

from .annotator import LineAnnotator
from .classifier import RiskClassifier
from .compositor import ZoneCompositor
from .data_models import (AircraftPerformance, Envelope, LineFeature, Location, ReachabilityConfig,
                          RiskCategory, ZoneMap, ZoneResults)
from .envelope import EnvelopeBuilder
from .exceptions import ReachabilityError
from .serialization import line_features_to_geojson, location_to_dict, zone_map_to_geojson


class ReachabilityCalculator:
    """Main class to compute emergency landing coverage for an aircraft and altitude."""

    def __init__(self, config: Optional[ReachabilityConfig] = None):
        self.config = config or ReachabilityConfig()
        self.builder = EnvelopeBuilder()
        self.compositor = ZoneCompositor(self.config, self.builder)
        self.annotator = LineAnnotator(self.config)
        logging.debug("ReachabilityCalculator initialized.")

    def classify_risk(self, location: Location, headroom_ratio: float) -> RiskCategory:
        return RiskClassifier.classify(location, headroom_ratio, self.config)

    def build_envelope(self, location: Location, aircraft: AircraftPerformance, altitude_m: float,
                       risk: Optional[RiskCategory] = None) -> Envelope:
        """Builds the footprint; the location is classified only when no `risk` is given."""
        if risk is None:
            risk = self.classify_risk(location, location.headroom_for(aircraft.id))
        return self.builder.build(location, aircraft, altitude_m, risk)

    def composite_zones(self, locations: Iterable[Location], aircraft: AircraftPerformance,
                        altitude_m: float) -> ZoneMap:
        return self.compute_zones(locations, aircraft, altitude_m).zones

    def compute_zones(self, locations: Iterable[Location], aircraft: AircraftPerformance,
                      altitude_m: float) -> ZoneResults:
        """The main operational method; returns the zone map with a summary of its inputs."""
        locations = list(locations)
        try:
            envelopes = self.compositor.collect_envelopes(locations, aircraft, altitude_m)
            zones = self.compositor.merge(envelopes)
        except ReachabilityError as e:
            logging.error(f"Unable to compute coverage for {aircraft.id} at {altitude_m:.0f}m: {e}")
            raise

        logging.info(
            f"Computed zones for {aircraft.id} at {altitude_m:.0f}m from {len(locations)} locations: "
            f"{', '.join(risk.value for risk in zones) or 'none'}"
        )
        return ZoneResults(
            aircraft_id=aircraft.id,
            altitude_m=altitude_m,
            zones=zones,
            location_count=len(locations),
            envelope_counts={risk: len(items) for risk, items in envelopes.items()}
        )

    def annotate_centerlines(self, locations: Iterable[Location], aircraft: AircraftPerformance) -> List[LineFeature]:
        return self.annotator.annotate(locations, aircraft)

    def reachability_geojson(self, locations: Iterable[Location], aircraft: AircraftPerformance,
                             altitude_m: float) -> dict:
        return zone_map_to_geojson(self.composite_zones(locations, aircraft, altitude_m), self.config)

    def centerlines_geojson(self, locations: Iterable[Location], aircraft: AircraftPerformance) -> dict:
        return line_features_to_geojson(self.annotate_centerlines(locations, aircraft))

    def location_details(self, location: Location, aircraft: AircraftPerformance) -> dict:
        return location_to_dict(location, aircraft, self.config)


# --- Functional surface ---

def classify_risk(location: Location, headroom_ratio: float,
                  config: Optional[ReachabilityConfig] = None) -> RiskCategory:
    return RiskClassifier.classify(location, headroom_ratio, config)


def build_envelope(location: Location, aircraft: AircraftPerformance, altitude_m: float,
                   config: Optional[ReachabilityConfig] = None, risk: Optional[RiskCategory] = None) -> Envelope:
    return ReachabilityCalculator(config).build_envelope(location, aircraft, altitude_m, risk)


def composite_zones(locations: Iterable[Location], aircraft: AircraftPerformance, altitude_m: float,
                    config: Optional[ReachabilityConfig] = None) -> ZoneMap:
    return ReachabilityCalculator(config).composite_zones(locations, aircraft, altitude_m)


def annotate_centerlines(locations: Iterable[Location], aircraft: AircraftPerformance,
                         config: Optional[ReachabilityConfig] = None) -> List[LineFeature]:
    return ReachabilityCalculator(config).annotate_centerlines(locations, aircraft)
