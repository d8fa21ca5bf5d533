# glidezone/reachability/envelope.py
"""
Builds the reachable-footprint polygon of a single landing location.

The footprint is first laid out as if the runway pointed north from its
approach end, then rotated about the approach end onto the runway bearing.
The range curve is consumed as an opaque, order-preserving table: the first
half is projected around the approach circle, the second half either around
the far end of the usable runway or, for reversible runways, replaced by the
mirrored first half.
"""
import logging
from typing import List, Sequence, Tuple

from .data_models import AircraftPerformance, Coordinate, Envelope, Location, RangeSample, RiskCategory
from .utils.calculations import LandingCalculations
from .utils.constants import ReachabilityConstants
from .utils.coordinates import GeometryKernel

KM = ReachabilityConstants.METERS_PER_KM


class EnvelopeBuilder:
    """Converts a location and an aircraft's range curve into a closed footprint ring."""

    def __init__(self, kernel=GeometryKernel):
        self.kernel = kernel

    def build(self, location: Location, aircraft: AircraftPerformance, altitude_m: float,
              risk: RiskCategory) -> Envelope:
        ring = self.build_ring(location, aircraft, altitude_m)
        return Envelope(location_id=location.id, risk=risk, ring=tuple(ring))

    def build_ring(self, location: Location, aircraft: AircraftPerformance, altitude_m: float) -> List[Coordinate]:
        offset = aircraft.turn_radius_m
        approach_end = location.approach_end

        # Room for the turn onto final after the engine quits
        center = self.kernel.rhumb_destination(approach_end, offset / KM, 180)

        required = aircraft.landing_distance(location.surface)
        inset = LandingCalculations.inset(location.length_m, required)

        points = self._project(center, aircraft.front_samples, altitude_m)

        if not location.reversible:
            far_point = self.kernel.rhumb_destination(center, inset / KM, 0)
            points += self._project(far_point, aircraft.back_samples, altitude_m)
        else:
            mirror_center = self.kernel.rhumb_destination(center, (2 * offset + location.length_m) / KM, 0)
            points += self._project(mirror_center, aircraft.front_samples, altitude_m, bearing_shift_deg=180)

        points.append(points[0])

        ring = self.kernel.rotate(points, location.bearing, approach_end)
        # Validation only; the ring itself is returned unchanged
        self.kernel.to_polygon(ring)

        logging.debug(
            f"Envelope for '{location.name}' at {altitude_m:.0f}m: {len(ring)} points, "
            f"inset {inset:.0f}m, reversible={location.reversible}"
        )
        return ring

    def _project(self, origin: Coordinate, samples: Sequence[RangeSample], altitude_m: float,
                 bearing_shift_deg: float = 0.0) -> List[Tuple[float, float]]:
        return [
            self.kernel.rhumb_destination(origin, sample.distance(altitude_m) / KM,
                                          sample.bearing_deg + bearing_shift_deg)
            for sample in samples
        ]
