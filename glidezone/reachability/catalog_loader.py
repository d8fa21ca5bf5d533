# glidezone/reachability/catalog_loader.py
"""
Loads the aircraft performance catalog and the landing location catalog from
YAML, resolving them into immutable records and id-keyed lookup tables.

Location coordinates are stored as [latitude, longitude] pairs in the catalog
and flipped to (longitude, latitude) on load. Headroom ratios are derived for
every aircraft in the catalog when the locations are loaded.
"""
import logging
import os
from typing import Any, Dict, Iterator, List, Optional, Tuple

import yaml

from .data_models import AircraftPerformance, HumanPresence, Location, SurfaceType, UsageType
from .exceptions import CatalogError, MissingPerformanceDataError
from .utils.calculations import LandingCalculations
from .utils.coordinates import GeometryKernel


class AircraftMap:
    """Aircraft records keyed by id, iterated lightest first."""

    def __init__(self, aircraft: List[AircraftPerformance], weights: Optional[Dict[str, float]] = None):
        weights = weights or {}
        ordered = sorted(aircraft, key=lambda a: weights.get(a.id, 0))
        self._aircraft = {a.id: a for a in ordered}

    def __len__(self) -> int:
        return len(self._aircraft)

    def __iter__(self) -> Iterator[AircraftPerformance]:
        return iter(self._aircraft.values())

    def __contains__(self, aircraft_id: str) -> bool:
        return aircraft_id in self._aircraft

    def get(self, aircraft_id: str) -> Optional[AircraftPerformance]:
        return self._aircraft.get(aircraft_id)

    def ids(self) -> List[str]:
        return list(self._aircraft.keys())


class LocationMap:
    """Location records keyed by id."""

    def __init__(self, locations: List[Location]):
        self._locations = {location.id: location for location in locations}

    def __len__(self) -> int:
        return len(self._locations)

    def __iter__(self) -> Iterator[Location]:
        return iter(self._locations.values())

    def get(self, location_id: str) -> Optional[Location]:
        return self._locations.get(location_id)

    def ids(self) -> List[str]:
        return list(self._locations.keys())

    def closest(self, lat: float, lon: float) -> Optional[Tuple[Location, float]]:
        """Location whose centerline midpoint is nearest to (lat, lon), with the distance in meters."""
        if not self._locations:
            return None
        point = (lon, lat)
        distances = [
            (GeometryKernel.haversine_distance_m(location.midpoint, point), location)
            for location in self._locations.values()
        ]
        distance, location = min(distances, key=lambda pair: pair[0])
        return location, distance


class CatalogLoader:
    """Parses the YAML catalogs."""

    AIRCRAFT_FILE = "aircrafts.yml"
    LOCATIONS_FILE = "locations.yml"

    def __init__(self, data_dir: Optional[str] = None):
        self.data_dir = data_dir

    def load(self) -> Tuple[AircraftMap, LocationMap]:
        if not self.data_dir or not os.path.isdir(self.data_dir):
            raise CatalogError(str(self.data_dir), "catalog directory not found")
        aircraft = self.load_aircraft(os.path.join(self.data_dir, self.AIRCRAFT_FILE))
        locations = self.load_locations(os.path.join(self.data_dir, self.LOCATIONS_FILE), aircraft)
        logging.info(f"Catalog loaded: {len(aircraft)} aircraft, {len(locations)} locations.")
        return aircraft, locations

    def load_aircraft(self, path: str) -> AircraftMap:
        return self.parse_aircraft(self._read(path), source=path)

    def load_locations(self, path: str, aircraft: AircraftMap) -> LocationMap:
        return self.parse_locations(self._read(path), aircraft, source=path)

    def parse_aircraft(self, text: str, source: str = "<string>") -> AircraftMap:
        records = self._parse_list(text, source)
        aircraft, weights = [], {}
        for index, record in enumerate(records):
            try:
                landing = record['landing']
                performance = AircraftPerformance(
                    id=str(record['id']),
                    name=record.get('name', str(record['id'])),
                    turn_radius_m=float(record['turn_radius_m']),
                    range_curve=[tuple(float(v) for v in sample) for sample in record.get('range') or []],
                    landing_ground_roll_m=float(landing['ground_roll_m']),
                    landing_total_distance_m=float(landing['total_distance_m'])
                )
                weight = float(record.get('mtow', 0))
            except (KeyError, TypeError, ValueError) as e:
                raise CatalogError(source, f"aircraft #{index}: {e!r}") from e
            except MissingPerformanceDataError as e:
                raise CatalogError(source, f"aircraft #{index}: {e}") from e
            if performance.landing_ground_roll_m <= 0 or performance.landing_total_distance_m <= 0:
                raise CatalogError(source, f"aircraft #{index}: landing distances must be positive")
            weights[performance.id] = weight
            aircraft.append(performance)
        return AircraftMap(aircraft, weights)

    def parse_locations(self, text: str, aircraft: AircraftMap, source: str = "<string>") -> LocationMap:
        records = self._parse_list(text, source)
        locations = []
        for index, record in enumerate(records):
            try:
                coordinates = record['coordinates']
                # Catalog order is [lat, lon]
                start = (float(coordinates['start'][1]), float(coordinates['start'][0]))
                end = (float(coordinates['end'][1]), float(coordinates['end'][0]))
                presence = record.get('human_presence', record.get('humanPresence')) or HumanPresence.NONE.value
                location = Location.from_endpoints(
                    name=record['name'],
                    start=start,
                    end=end,
                    reversible=bool(record.get('reversible', False)),
                    surface=SurfaceType(record['surface']),
                    usage=UsageType(record['usage']),
                    human_presence=HumanPresence(presence)
                )
            except (KeyError, IndexError, TypeError, ValueError) as e:
                raise CatalogError(source, f"location #{index}: {e!r}") from e

            try:
                ratios = {
                    a.id: LandingCalculations.headroom_ratio(location.length_m, a.landing_distance(location.surface))
                    for a in aircraft
                }
            except (ValueError, MissingPerformanceDataError) as e:
                raise CatalogError(source, f"location #{index}: {e}") from e
            locations.append(location.with_headroom_ratios(ratios))
        return LocationMap(locations)

    def _read(self, path: str) -> str:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return f.read()
        except OSError as e:
            raise CatalogError(path, str(e)) from e

    def _parse_list(self, text: str, source: str) -> List[Dict[str, Any]]:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise CatalogError(source, f"invalid YAML: {e}") from e
        if data is None:
            return []
        if not isinstance(data, list) or not all(isinstance(r, dict) for r in data):
            raise CatalogError(source, "expected a list of records")
        return data
