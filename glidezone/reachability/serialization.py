# glidezone/reachability/serialization.py
"""
GeoJSON output for the zone map and the annotated centerlines, plus the
per-location detail record.
"""
from typing import Iterable, Optional

from .classifier import RiskClassifier
from .data_models import AircraftPerformance, LineFeature, Location, ReachabilityConfig, ZoneMap


def zone_map_to_geojson(zones: ZoneMap, config: Optional[ReachabilityConfig] = None) -> dict:
    """One feature per present category, safest first."""
    config = config or ReachabilityConfig()
    features = []
    for risk in config.precedence:
        geometry = zones.get(risk)
        if geometry is None or geometry.is_empty:
            continue
        features.append({
            "type": "Feature",
            "geometry": geometry.to_geojson(),
            "properties": {"risk": risk.value, "color": config.color_for(risk)}
        })
    return {"type": "FeatureCollection", "features": features}


def line_features_to_geojson(lines: Iterable[LineFeature]) -> dict:
    features = []
    for line in lines:
        features.append({
            "type": "Feature",
            "id": line.location_id,
            "geometry": {"type": "LineString", "coordinates": [list(c) for c in line.coordinates]},
            "properties": {"name": line.name, "risk": line.risk.value, "color": line.color}
        })
    return {"type": "FeatureCollection", "features": features}


def location_to_dict(location: Location, aircraft: AircraftPerformance,
                     config: Optional[ReachabilityConfig] = None) -> dict:
    """Location details as seen by one aircraft. Bearings are in radians."""
    headroom = location.headroom_for(aircraft.id)
    return {
        "id": location.id,
        "name": location.name,
        "coordinates": [list(c) for c in location.centerline],
        "length_m": location.length_m,
        "reversible": location.reversible,
        "bearing": location.bearing,
        "reverse_bearing": location.reverse_bearing if location.reversible else None,
        "usage": location.usage.value,
        "surface": location.surface.value,
        "human_presence": location.human_presence.value,
        "risk": RiskClassifier.classify(location, headroom, config).value,
        "landing_headroom": headroom
    }
