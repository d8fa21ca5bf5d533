"""
GlideZone - Reachability Module
Builds the reachable emergency landing footprint of every landing location
and merges them into non-overlapping safe / risky / unsafe zones.
"""

from .core import (ReachabilityCalculator, annotate_centerlines, build_envelope, classify_risk,
                   composite_zones)
from .data_models import (AircraftPerformance, Envelope, HumanPresence, LineFeature, Location, RangeSample,
                          ReachabilityConfig, RiskCategory, SurfaceType, UsageType, ZoneGeometry, ZoneResults)
from .catalog_loader import AircraftMap, CatalogLoader, LocationMap
from .exceptions import CatalogError, DegenerateGeometryError, MissingPerformanceDataError, ReachabilityError
from .serialization import line_features_to_geojson, location_to_dict, zone_map_to_geojson

__all__ = [
    "ReachabilityCalculator",
    "classify_risk",
    "build_envelope",
    "composite_zones",
    "annotate_centerlines",
    "AircraftPerformance",
    "Envelope",
    "HumanPresence",
    "LineFeature",
    "Location",
    "RangeSample",
    "ReachabilityConfig",
    "RiskCategory",
    "SurfaceType",
    "UsageType",
    "ZoneGeometry",
    "ZoneResults",
    "AircraftMap",
    "CatalogLoader",
    "LocationMap",
    "CatalogError",
    "DegenerateGeometryError",
    "MissingPerformanceDataError",
    "ReachabilityError",
    "line_features_to_geojson",
    "location_to_dict",
    "zone_map_to_geojson"
]
