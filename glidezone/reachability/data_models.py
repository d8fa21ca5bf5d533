# glidezone/reachability/data_models.py
"""
Defines the core data structures used throughout the reachability engine.
Locations and aircraft performance are immutable value records; geometry
functions receive fully-resolved values and never live references.
"""
import hashlib
import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Tuple

import numpy as np
from shapely.geometry import GeometryCollection, MultiPolygon, Polygon, mapping, shape

from .exceptions import MissingPerformanceDataError
from .utils.constants import ReachabilityConstants
from .utils.coordinates import GeometryKernel

# (longitude, latitude) in degrees, WGS84
Coordinate = Tuple[float, float]


class SurfaceType(Enum):
    ASPHALT = "Asphalt"
    GRAS = "Gras"
    WATER = "Water"


class UsageType(Enum):
    AGRICULTURAL = "Agricultural"
    AERONAUTICAL = "Aeronautical"
    NATURE = "Nature"
    WATERWAY = "Waterway"
    EVENT = "Event"
    PARK = "Park"


class HumanPresence(Enum):
    NONE = "None"
    SPARSE = "Sparse"
    EVENT_ONLY = "EventOnly"
    DENSE = "Dense"

    @classmethod
    def _missing_(cls, value):
        # Older catalogs spell the empty category "Unlikely"
        if value == "Unlikely":
            return cls.NONE
        return None


class RiskCategory(Enum):
    """Risk of an emergency landing, ordered safest first for rendering precedence."""
    SAFE = "safe"
    RISKY = "risky"
    UNSAFE = "unsafe"


# --- Aircraft performance (supplied by the external performance engine) ---

class RangeSample(NamedTuple):
    """One bearing of the range curve: distance(altitude) = slope * altitude + intercept."""
    bearing_rad: float
    slope: float
    intercept: float

    @property
    def bearing_deg(self) -> float:
        return float(np.degrees(self.bearing_rad))

    def distance(self, altitude_m: float) -> float:
        return self.slope * altitude_m + self.intercept


@dataclass(frozen=True)
class AircraftPerformance:
    """Glide and landing figures for one aircraft, all in meters."""
    id: str
    name: str
    turn_radius_m: float
    range_curve: Tuple[RangeSample, ...]
    landing_ground_roll_m: float
    landing_total_distance_m: float

    def __post_init__(self):
        curve = tuple(RangeSample(*sample) for sample in (self.range_curve or ()))
        if len(curve) != ReachabilityConstants.RANGE_SAMPLE_COUNT:
            raise MissingPerformanceDataError(
                f"range curve with {ReachabilityConstants.RANGE_SAMPLE_COUNT} samples (got {len(curve)})",
                aircraft_id=self.id
            )
        object.__setattr__(self, 'range_curve', curve)

    @property
    def front_samples(self) -> Tuple[RangeSample, ...]:
        return self.range_curve[:ReachabilityConstants.HALF_SAMPLE_COUNT]

    @property
    def back_samples(self) -> Tuple[RangeSample, ...]:
        return self.range_curve[ReachabilityConstants.HALF_SAMPLE_COUNT:]

    def landing_distance(self, surface: SurfaceType) -> float:
        """Total distance to clear a 50ft obstacle and come to a full stop on `surface`."""
        factor = ReachabilityConstants.SURFACE_GROUND_ROLL_FACTORS.get(surface.value)
        if factor is None:
            raise MissingPerformanceDataError(f"landing distance on {surface.value}", aircraft_id=self.id)
        clearance_distance = self.landing_total_distance_m - self.landing_ground_roll_m
        return clearance_distance + self.landing_ground_roll_m * factor


# --- Landing locations ---

@dataclass(frozen=True)
class Location:
    """A candidate landing location with its runway geometry."""
    id: str
    name: str
    approach_end: Coordinate
    bearing: float  # radians
    length_m: float
    reversible: bool
    surface: SurfaceType
    usage: UsageType
    human_presence: HumanPresence = HumanPresence.NONE
    reverse_bearing: Optional[float] = None
    headroom_ratios: Mapping[str, float] = field(default_factory=dict, hash=False)
    centerline: Tuple[Coordinate, ...] = ()

    def __post_init__(self):
        if self.reversible != (self.reverse_bearing is not None):
            raise ValueError(
                f"Location {self.id}: reverse bearing must be set if and only if the runway is reversible"
            )
        object.__setattr__(self, 'headroom_ratios', MappingProxyType(dict(self.headroom_ratios)))
        object.__setattr__(self, 'centerline', tuple(tuple(c) for c in self.centerline))

    @classmethod
    def from_endpoints(cls, name: str, start: Coordinate, end: Coordinate, reversible: bool,
                       surface: SurfaceType, usage: UsageType,
                       human_presence: HumanPresence = HumanPresence.NONE,
                       headroom_ratios: Optional[Mapping[str, float]] = None) -> 'Location':
        """Derives id, length and bearings from the start and end of the landable surface."""
        digest = hashlib.sha1(repr((tuple(start), tuple(end))).encode('utf-8')).hexdigest()
        bearing = np.radians(GeometryKernel.initial_bearing_deg(start, end))
        reverse_bearing = np.radians(GeometryKernel.initial_bearing_deg(end, start)) if reversible else None
        return cls(
            id=digest[:16],
            name=name,
            approach_end=tuple(start),
            bearing=float(bearing),
            length_m=GeometryKernel.haversine_distance_m(start, end),
            reversible=reversible,
            surface=surface,
            usage=usage,
            human_presence=human_presence,
            reverse_bearing=None if reverse_bearing is None else float(reverse_bearing),
            headroom_ratios=headroom_ratios or {},
            centerline=(tuple(start), tuple(end))
        )

    @property
    def midpoint(self) -> Coordinate:
        points = self.centerline or (self.approach_end,)
        lon, lat = np.mean(np.array(points, dtype=float), axis=0)
        return float(lon), float(lat)

    def headroom_for(self, aircraft_id: str) -> float:
        try:
            return self.headroom_ratios[aircraft_id]
        except KeyError:
            raise MissingPerformanceDataError("headroom ratio", aircraft_id=aircraft_id, location_id=self.id) from None

    def with_headroom_ratios(self, ratios: Mapping[str, float]) -> 'Location':
        return replace(self, headroom_ratios={**self.headroom_ratios, **ratios})


# --- Outputs ---

@dataclass(frozen=True)
class Envelope:
    """Closed reachable-footprint ring (first coordinate repeated last)."""
    location_id: str
    risk: RiskCategory
    ring: Tuple[Coordinate, ...]

    @property
    def is_closed(self) -> bool:
        return len(self.ring) > 3 and self.ring[0] == self.ring[-1]


class GeometryKind(Enum):
    EMPTY = "Empty"
    POLYGON = "Polygon"
    MULTIPOLYGON = "MultiPolygon"


@dataclass(frozen=True)
class ZoneGeometry:
    """Tagged geometry variant used at the compositor boundary."""
    kind: GeometryKind
    coordinates: Tuple = ()

    @classmethod
    def empty(cls) -> 'ZoneGeometry':
        return cls(GeometryKind.EMPTY)

    @classmethod
    def from_shape(cls, geometry) -> 'ZoneGeometry':
        if geometry is None or geometry.is_empty:
            return cls.empty()
        if isinstance(geometry, GeometryCollection):
            # Boolean ops may leave slivers of lower dimension next to the polygons
            polygons = []
            for part in geometry.geoms:
                if isinstance(part, Polygon):
                    polygons.append(part)
                elif isinstance(part, MultiPolygon):
                    polygons.extend(part.geoms)
            polygons = [p for p in polygons if not p.is_empty]
            if not polygons:
                return cls.empty()
            geometry = polygons[0] if len(polygons) == 1 else MultiPolygon(polygons)
        if isinstance(geometry, Polygon):
            return cls(GeometryKind.POLYGON, mapping(geometry)['coordinates'])
        if isinstance(geometry, MultiPolygon):
            return cls(GeometryKind.MULTIPOLYGON, mapping(geometry)['coordinates'])
        logging.debug(f"Discarding non-areal geometry of type {geometry.geom_type}")
        return cls.empty()

    @property
    def is_empty(self) -> bool:
        return self.kind is GeometryKind.EMPTY

    def to_geojson(self) -> Optional[Dict[str, Any]]:
        if self.is_empty:
            return None
        return {"type": self.kind.value, "coordinates": _as_lists(self.coordinates)}

    def to_shape(self):
        if self.is_empty:
            return Polygon()
        return shape(self.to_geojson())


def _as_lists(value):
    if isinstance(value, (tuple, list)):
        return [_as_lists(v) for v in value]
    return value


ZoneMap = Dict[RiskCategory, ZoneGeometry]


@dataclass(frozen=True)
class LineFeature:
    """A location centerline colored by its risk category."""
    location_id: str
    name: str
    risk: RiskCategory
    color: str
    coordinates: Tuple[Coordinate, ...]


# --- Configuration ---

@dataclass
class ReachabilityConfig:
    """Thresholds, palette and precedence used by the classifier and compositor."""
    unsafe_headroom: float = ReachabilityConstants.UNSAFE_HEADROOM_RATIO
    risky_headroom: float = ReachabilityConstants.RISKY_HEADROOM_RATIO
    event_only_risk: RiskCategory = RiskCategory.RISKY
    dense_risk: RiskCategory = RiskCategory.RISKY
    colors: Dict[RiskCategory, str] = field(default_factory=lambda: {
        RiskCategory(name): color for name, color in ReachabilityConstants.RISK_COLORS.items()
    })
    precedence: Tuple[RiskCategory, ...] = tuple(
        RiskCategory(name) for name in ReachabilityConstants.RISK_PRECEDENCE
    )

    def color_for(self, risk: RiskCategory) -> str:
        return self.colors[risk]

    @classmethod
    def from_preferences(cls, preferences: Optional[Mapping[str, Any]]) -> 'ReachabilityConfig':
        """
        Builds a config from a partial preferences mapping. Unknown keys are
        ignored; values that fail validation keep the default.
        """
        config = cls()
        if not preferences:
            return config

        for key in ('unsafe_headroom', 'risky_headroom'):
            if key in preferences:
                try:
                    setattr(config, key, float(preferences[key]))
                except (TypeError, ValueError):
                    logging.warning(f"Ignoring invalid preference {key}={preferences[key]!r}, using default.")

        for key in ('event_only_risk', 'dense_risk'):
            if key in preferences:
                try:
                    setattr(config, key, RiskCategory(preferences[key]))
                except ValueError:
                    logging.warning(f"Ignoring invalid preference {key}={preferences[key]!r}, using default.")

        if config.unsafe_headroom > config.risky_headroom:
            logging.warning(
                f"Unsafe headroom {config.unsafe_headroom} exceeds risky headroom {config.risky_headroom}; "
                "falling back to default thresholds."
            )
            config.unsafe_headroom = ReachabilityConstants.UNSAFE_HEADROOM_RATIO
            config.risky_headroom = ReachabilityConstants.RISKY_HEADROOM_RATIO
        return config

    def to_preferences(self) -> Dict[str, Any]:
        """The effective preferences, in the shape `from_preferences` accepts."""
        return {
            'unsafe_headroom': self.unsafe_headroom,
            'risky_headroom': self.risky_headroom,
            'event_only_risk': self.event_only_risk.value,
            'dense_risk': self.dense_risk.value
        }


@dataclass
class ZoneResults:
    """Final output of a reachability request, with the inputs that produced it."""
    aircraft_id: str
    altitude_m: float
    zones: ZoneMap
    location_count: int
    envelope_counts: Dict[RiskCategory, int] = field(default_factory=dict)

    @property
    def categories(self) -> List[RiskCategory]:
        return list(self.zones.keys())
