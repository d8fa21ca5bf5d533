# glidezone/reachability/utils/coordinates.py
"""
Provides the geometry kernel used by the envelope builder and the zone
compositor: rhumb-line projection, rotation about a pivot, and polygon
boolean operations. Coordinates are (longitude, latitude) tuples in degrees.
"""
from typing import List, Optional, Sequence, Tuple

import numpy as np
from shapely.errors import GEOSException
from shapely.geometry import Polygon
from shapely.validation import explain_validity

from ..exceptions import DegenerateGeometryError
from .constants import ReachabilityConstants

_PSI_EPSILON = 10e-12


class GeometryKernel:
    """A collection of static methods for rhumb-line geometry and polygon operations."""

    @staticmethod
    def _rhumb_stretch(phi1: float, phi2: float) -> float:
        """Ratio of latitude change to projected (Mercator) latitude change."""
        delta_psi = np.log(np.tan(phi2 / 2 + np.pi / 4) / np.tan(phi1 / 2 + np.pi / 4))
        return (phi2 - phi1) / delta_psi if abs(delta_psi) > _PSI_EPSILON else np.cos(phi1)

    @staticmethod
    def rhumb_destination(origin: Tuple[float, float], distance_km: float, bearing_deg: float) -> Tuple[float, float]:
        """Point reached from `origin` after `distance_km` along a constant compass bearing."""
        delta = distance_km * ReachabilityConstants.METERS_PER_KM / ReachabilityConstants.EARTH_RADIUS_M
        lambda1 = np.radians(origin[0])
        phi1 = np.radians(origin[1])
        theta = np.radians(bearing_deg)

        delta_phi = delta * np.cos(theta)
        phi2 = phi1 + delta_phi
        # Past a pole, fold back onto the other side
        if abs(phi2) > np.pi / 2:
            phi2 = np.pi - phi2 if phi2 > 0 else -np.pi - phi2

        q = GeometryKernel._rhumb_stretch(phi1, phi2)
        lambda2 = lambda1 + delta * np.sin(theta) / q

        lon = (np.degrees(lambda2) + 540) % 360 - 180
        # Keep the result on the same side of the antimeridian as the origin
        if lon - origin[0] > 180:
            lon -= 360
        elif origin[0] - lon > 180:
            lon += 360
        return float(lon), float(np.degrees(phi2))

    @staticmethod
    def rhumb_bearing_deg(start: Tuple[float, float], end: Tuple[float, float]) -> float:
        phi1, phi2 = np.radians(start[1]), np.radians(end[1])
        delta_lambda = np.radians(end[0] - start[0])
        if delta_lambda > np.pi:
            delta_lambda -= 2 * np.pi
        if delta_lambda < -np.pi:
            delta_lambda += 2 * np.pi
        delta_psi = np.log(np.tan(phi2 / 2 + np.pi / 4) / np.tan(phi1 / 2 + np.pi / 4))
        return float((np.degrees(np.arctan2(delta_lambda, delta_psi)) + 360) % 360)

    @staticmethod
    def rhumb_distance_km(start: Tuple[float, float], end: Tuple[float, float]) -> float:
        phi1, phi2 = np.radians(start[1]), np.radians(end[1])
        delta_lambda = np.radians(end[0] - start[0])
        if abs(delta_lambda) > np.pi:
            delta_lambda = -(2 * np.pi - delta_lambda) if delta_lambda > 0 else 2 * np.pi + delta_lambda
        q = GeometryKernel._rhumb_stretch(phi1, phi2)
        delta = np.sqrt((phi2 - phi1) ** 2 + q * q * delta_lambda ** 2)
        return float(delta * ReachabilityConstants.EARTH_RADIUS_M / ReachabilityConstants.METERS_PER_KM)

    @staticmethod
    def rotate(ring: Sequence[Tuple[float, float]], bearing_rad: float,
               pivot: Tuple[float, float]) -> List[Tuple[float, float]]:
        """
        Rotates every point clockwise about `pivot` by `bearing_rad`, keeping its
        rhumb distance to the pivot.
        """
        angle_deg = float(np.degrees(bearing_rad))
        if angle_deg == 0:
            return [tuple(point) for point in ring]

        rotated = []
        for point in ring:
            if tuple(point) == tuple(pivot):
                rotated.append(tuple(pivot))
                continue
            bearing = GeometryKernel.rhumb_bearing_deg(pivot, point) + angle_deg
            distance = GeometryKernel.rhumb_distance_km(pivot, point)
            rotated.append(GeometryKernel.rhumb_destination(pivot, distance, bearing))
        return rotated

    @staticmethod
    def to_polygon(ring: Sequence[Tuple[float, float]]) -> Polygon:
        """Builds a polygon from a closed ring, refusing anything self-intersecting or empty."""
        if len(ring) < 4 or tuple(ring[0]) != tuple(ring[-1]):
            raise DegenerateGeometryError("polygon", f"ring of {len(ring)} points is not closed")
        try:
            polygon = Polygon(ring)
        except (ValueError, GEOSException) as e:
            raise DegenerateGeometryError("polygon", str(e)) from e
        if polygon.is_empty or polygon.area == 0:
            raise DegenerateGeometryError("polygon", "ring encloses no area")
        if not polygon.is_valid:
            raise DegenerateGeometryError("polygon", explain_validity(polygon))
        return polygon

    @staticmethod
    def union(a, b) -> Optional[object]:
        """Union of two areal geometries, or None when nothing remains."""
        try:
            result = a.union(b)
        except GEOSException as e:
            raise DegenerateGeometryError("union", str(e)) from e
        return None if result.is_empty else result

    @staticmethod
    def difference(a, b) -> Optional[object]:
        """Part of `a` not covered by `b`, or None when nothing remains."""
        try:
            result = a.difference(b)
        except GEOSException as e:
            raise DegenerateGeometryError("difference", str(e)) from e
        if result.is_empty or result.area == 0:
            return None
        return result

    @staticmethod
    def haversine_distance_m(start: Tuple[float, float], end: Tuple[float, float]) -> float:
        """Calculates the Haversine distance between two (lon, lat) points in meters."""
        R = ReachabilityConstants.EARTH_RADIUS_M
        d_lat = np.radians(end[1] - start[1])
        d_lon = np.radians(end[0] - start[0])
        a = np.sin(d_lat / 2)**2 + np.cos(np.radians(start[1])) * np.cos(np.radians(end[1])) * np.sin(d_lon / 2)**2
        c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
        return float(R * c)

    @staticmethod
    def initial_bearing_deg(start: Tuple[float, float], end: Tuple[float, float]) -> float:
        """Great-circle initial bearing from `start` to `end`, 0-360 degrees from true north."""
        phi1, phi2 = np.radians(start[1]), np.radians(end[1])
        d_lon = np.radians(end[0] - start[0])
        y = np.sin(d_lon) * np.cos(phi2)
        x = np.cos(phi1) * np.sin(phi2) - np.sin(phi1) * np.cos(phi2) * np.cos(d_lon)
        return float((np.degrees(np.arctan2(y, x)) + 360) % 360)
