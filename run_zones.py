# run_zones.py
import json
import logging
import os
import sys

# Add the project root to the Python path to ensure imports work correctly
project_root = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, project_root)

from glidezone.reachability.catalog_loader import CatalogLoader
from glidezone.reachability.core import ReachabilityCalculator
from glidezone.reachability.exceptions import ReachabilityError
from glidezone.reachability.serialization import line_features_to_geojson, zone_map_to_geojson
from glidezone.reachability.utils.constants import ReachabilityConstants
from glidezone.reachability.visualization import ZoneMapVisualizer

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')


def main():
    """
    Computes the emergency landing zones for one aircraft and altitude and
    writes them as GeoJSON and as an interactive map.
    """
    # --- Configuration ---
    AIRCRAFT_ID = "C172"
    ALTITUDE_FT = 2000
    data_dir = os.path.join(project_root, "data")
    output_dir = os.path.join(project_root, "output")

    print("--- Starting Reachability Computation ---")
    print(f"Aircraft: {AIRCRAFT_ID}, Altitude: {ALTITUDE_FT}ft")
    print("-" * 40)

    aircraft_map, locations = CatalogLoader(data_dir).load()
    aircraft = aircraft_map.get(AIRCRAFT_ID)
    if aircraft is None:
        print(f"\n[!] Unknown aircraft '{AIRCRAFT_ID}'. Available: {', '.join(aircraft_map.ids())}")
        return

    calculator = ReachabilityCalculator()
    altitude_m = ALTITUDE_FT * ReachabilityConstants.FEET_TO_METERS
    try:
        results = calculator.compute_zones(locations, aircraft, altitude_m)
    except ReachabilityError as e:
        print(f"\n[!] Unable to compute coverage for this aircraft/altitude: {e}")
        return
    lines = calculator.annotate_centerlines(locations, aircraft)

    print(f"\nProcessed {results.location_count} locations:")
    for risk, count in results.envelope_counts.items():
        print(f"  > {risk.value.title():<7} {count} envelopes")
    print(f"Zones present on the map: {', '.join(r.value for r in results.categories) or 'none'}")

    os.makedirs(output_dir, exist_ok=True)
    zones_path = os.path.join(output_dir, "zones.geojson")
    with open(zones_path, 'w') as f:
        json.dump(zone_map_to_geojson(results.zones, calculator.config), f)
    lines_path = os.path.join(output_dir, "centerlines.geojson")
    with open(lines_path, 'w') as f:
        json.dump(line_features_to_geojson(lines), f)

    if len(locations):
        lon, lat = next(iter(locations)).midpoint
        zone_map = ZoneMapVisualizer(calculator.config).create_zone_map((lat, lon), results.zones, lines)
        map_path = os.path.join(output_dir, "zone_map.html")
        zone_map.save(map_path)
        print(f"\nOpen '{map_path}' in your browser to see the zones.")

    print("\n--- Computation Complete ---")


if __name__ == "__main__":
    main()
