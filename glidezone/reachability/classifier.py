# glidezone/reachability/classifier.py
"""
Risk classification of landing locations.
"""
from typing import Optional

from .data_models import HumanPresence, Location, ReachabilityConfig, RiskCategory, SurfaceType


class RiskClassifier:
    """
    Assigns a risk category to a location. Rules are evaluated in order and
    the first match wins, so every input yields a category.
    """

    @staticmethod
    def classify(location: Location, headroom_ratio: float,
                 config: Optional[ReachabilityConfig] = None) -> RiskCategory:
        config = config or ReachabilityConfig()

        if location.surface == SurfaceType.WATER:
            return RiskCategory.UNSAFE

        if headroom_ratio < config.unsafe_headroom:
            return RiskCategory.UNSAFE
        if headroom_ratio < config.risky_headroom:
            return RiskCategory.RISKY

        if location.human_presence == HumanPresence.DENSE:
            return config.dense_risk
        if location.human_presence == HumanPresence.EVENT_ONLY:
            return config.event_only_risk

        return RiskCategory.SAFE

    @staticmethod
    def classify_for(location: Location, aircraft_id: str,
                     config: Optional[ReachabilityConfig] = None) -> RiskCategory:
        """Classifies using the location's stored headroom ratio for `aircraft_id`."""
        return RiskClassifier.classify(location, location.headroom_for(aircraft_id), config)
