# glidezone/reachability/annotator.py
"""
Lightweight alternative to the zone map: colors each location's centerline by
its risk category without building any envelopes.
"""
from typing import Iterable, List, Optional

from .classifier import RiskClassifier
from .data_models import AircraftPerformance, LineFeature, Location, ReachabilityConfig, UsageType


class LineAnnotator:
    """Produces independent, possibly overlapping, colored centerline features."""

    def __init__(self, config: Optional[ReachabilityConfig] = None):
        self.config = config or ReachabilityConfig()

    def annotate(self, locations: Iterable[Location], aircraft: AircraftPerformance) -> List[LineFeature]:
        features = []
        for location in locations:
            # Airfields are drawn by the base map already
            if location.usage == UsageType.AERONAUTICAL:
                continue
            risk = RiskClassifier.classify(location, location.headroom_for(aircraft.id), self.config)
            features.append(LineFeature(
                location_id=location.id,
                name=location.name,
                risk=risk,
                color=self.config.color_for(risk),
                coordinates=location.centerline
            ))
        return features
