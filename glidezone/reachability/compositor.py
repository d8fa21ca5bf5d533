# glidezone/reachability/compositor.py
"""
Merges per-location envelopes into non-overlapping risk zones.

Envelopes of the same category are unioned; each category then loses the
ground claimed by every safer category, so that where footprints overlap the
safer classification wins.
"""
import logging
from collections import defaultdict
from functools import reduce
from typing import Dict, Iterable, List, Optional

from .classifier import RiskClassifier
from .data_models import AircraftPerformance, Envelope, Location, ReachabilityConfig, RiskCategory, ZoneGeometry, ZoneMap
from .envelope import EnvelopeBuilder
from .exceptions import DegenerateGeometryError
from .utils.coordinates import GeometryKernel


class ZoneCompositor:
    """Groups, unions and layers envelopes by risk category."""

    def __init__(self, config: Optional[ReachabilityConfig] = None,
                 builder: Optional[EnvelopeBuilder] = None, kernel=GeometryKernel):
        self.config = config or ReachabilityConfig()
        self.kernel = kernel
        self.builder = builder or EnvelopeBuilder(kernel)

    def composite(self, locations: Iterable[Location], aircraft: AircraftPerformance, altitude_m: float) -> ZoneMap:
        return self.merge(self.collect_envelopes(locations, aircraft, altitude_m))

    def collect_envelopes(self, locations: Iterable[Location], aircraft: AircraftPerformance,
                          altitude_m: float) -> Dict[RiskCategory, List[Envelope]]:
        """Classifies every location and builds its envelope, grouped by category."""
        envelopes_by_risk = defaultdict(list)
        for location in locations:
            risk = RiskClassifier.classify(location, location.headroom_for(aircraft.id), self.config)
            envelopes_by_risk[risk].append(self.builder.build(location, aircraft, altitude_m, risk))
        return dict(envelopes_by_risk)

    def merge(self, envelopes_by_risk: Dict[RiskCategory, List[Envelope]]) -> ZoneMap:
        merged = {
            risk: self._union_all(risk, envelopes)
            for risk, envelopes in envelopes_by_risk.items() if envelopes
        }
        layered = self._enforce_precedence(merged)
        return {
            risk: ZoneGeometry.from_shape(layered[risk])
            for risk in self.config.precedence if risk in layered
        }

    def _union_all(self, risk: RiskCategory, envelopes: List[Envelope]):
        polygons = [self.kernel.to_polygon(envelope.ring) for envelope in envelopes]

        def _union(previous, current):
            combined = self.kernel.union(previous, current)
            if combined is None:
                raise DegenerateGeometryError("union", f"'{risk.value}' envelopes produced no area")
            return combined

        return reduce(_union, polygons)

    def _enforce_precedence(self, merged: Dict[RiskCategory, object]) -> Dict[RiskCategory, object]:
        """
        Subtracts every safer category from each less safe one. Subtrahends are
        the unioned shapes before any subtraction, applied nearest rank first:
        unsafe - risky - safe, then risky - safe.
        """
        layered = {}
        precedence = self.config.precedence
        for rank, risk in enumerate(precedence):
            if risk not in merged:
                continue
            geometry = merged[risk]
            for safer in reversed(precedence[:rank]):
                if safer not in merged:
                    continue
                geometry = self.kernel.difference(geometry, merged[safer])
                if geometry is None:
                    break
            if geometry is None:
                logging.debug(f"'{risk.value}' zone fully covered by safer zones, dropping it.")
                continue
            layered[risk] = geometry
        return layered
