# app.py
import logging
import math
import os

from flask import Flask, jsonify, request

from glidezone.reachability.catalog_loader import CatalogLoader
from glidezone.reachability.core import ReachabilityCalculator
from glidezone.reachability.data_models import ReachabilityConfig
from glidezone.reachability.exceptions import CatalogError, ReachabilityError
from glidezone.reachability.utils.constants import ReachabilityConstants

app = Flask(__name__)
log = logging.getLogger('werkzeug')
log.setLevel(logging.WARNING)
PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
DATA_DIR = os.environ.get('GLIDEZONE_DATA_DIR', os.path.join(PROJECT_ROOT, "data"))

# Global State Dictionary
state = {
    'aircraft': None,
    'locations': None
}

PREFERENCE_KEYS = ('unsafe_headroom', 'risky_headroom', 'event_only_risk', 'dense_risk')


def ensure_catalog():
    """Loads the catalog on first use; it is read-only afterwards."""
    if state['aircraft'] is None or state['locations'] is None:
        state['aircraft'], state['locations'] = CatalogLoader(DATA_DIR).load()
    return state['aircraft'], state['locations']


def _calculator_from_request() -> ReachabilityCalculator:
    preferences = {key: request.args[key] for key in PREFERENCE_KEYS if key in request.args}
    return ReachabilityCalculator(ReachabilityConfig.from_preferences(preferences))


def _aircraft_from_request(aircraft_map):
    aircraft_id = request.args.get('aircraft')
    if not aircraft_id:
        return None, (jsonify({'error': 'aircraft is required.'}), 400)
    aircraft = aircraft_map.get(aircraft_id)
    if aircraft is None:
        return None, (jsonify({'error': f'Unknown aircraft {aircraft_id}.'}), 404)
    return aircraft, None


@app.errorhandler(CatalogError)
def catalog_error(e):
    logging.error(f"Catalog could not be loaded: {e}")
    return jsonify({'error': f'Could not load catalog: {e}'}), 500


@app.route('/aircraft')
def aircraft_list():
    aircraft_map, _ = ensure_catalog()
    return jsonify([
        {'id': a.id, 'name': a.name, 'turn_radius_m': a.turn_radius_m,
         'landing_total_distance_m': a.landing_total_distance_m}
        for a in aircraft_map
    ])


@app.route('/reachability')
def reachability():
    aircraft_map, locations = ensure_catalog()
    aircraft, error = _aircraft_from_request(aircraft_map)
    if error:
        return error

    try:
        altitude_ft = float(request.args.get('altitude_ft', ''))
    except ValueError:
        return jsonify({'error': 'altitude_ft must be a number.'}), 400
    altitude_m = altitude_ft * ReachabilityConstants.FEET_TO_METERS

    try:
        geojson = _calculator_from_request().reachability_geojson(locations, aircraft, altitude_m)
    except ReachabilityError as e:
        return jsonify({'error': 'unable to compute coverage for this aircraft/altitude', 'detail': str(e)}), 422
    return jsonify(geojson)


@app.route('/centerlines')
def centerlines():
    aircraft_map, locations = ensure_catalog()
    aircraft, error = _aircraft_from_request(aircraft_map)
    if error:
        return error

    try:
        geojson = _calculator_from_request().centerlines_geojson(locations, aircraft)
    except ReachabilityError as e:
        return jsonify({'error': 'unable to classify locations for this aircraft', 'detail': str(e)}), 422
    return jsonify(geojson)


@app.route('/locations/<location_id>')
def location_details(location_id):
    aircraft_map, locations = ensure_catalog()
    aircraft, error = _aircraft_from_request(aircraft_map)
    if error:
        return error
    location = locations.get(location_id)
    if location is None:
        return jsonify({'error': f'Unknown location {location_id}.'}), 404

    try:
        details = _calculator_from_request().location_details(location, aircraft)
    except ReachabilityError as e:
        return jsonify({'error': 'unable to classify this location for this aircraft', 'detail': str(e)}), 422
    return jsonify(details)


@app.route('/preferences')
def preferences():
    """Echoes the preferences that would be applied after validation."""
    return jsonify(_calculator_from_request().config.to_preferences())


@app.route('/closest')
def closest():
    _, locations = ensure_catalog()
    try:
        lat = float(request.args['lat'])
        lon = float(request.args['lon'])
        max_distance_m = float(request.args['max_distance_m']) if 'max_distance_m' in request.args else None
    except (KeyError, ValueError):
        return jsonify({'error': 'lat and lon are required numbers.'}), 400
    if not (math.isfinite(lat) and math.isfinite(lon)):
        return jsonify({'error': 'lat and lon must be finite.'}), 400
    if max_distance_m is not None and not (math.isfinite(max_distance_m) and max_distance_m >= 0):
        return jsonify({'error': 'max_distance_m must be a finite, non-negative number.'}), 400

    result = locations.closest(lat, lon)
    if result is None or (max_distance_m is not None and result[1] >= max_distance_m):
        return jsonify(None)
    location, distance = result
    return jsonify({'location': location.id, 'name': location.name, 'distance': distance})


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    ensure_catalog()
    app.run(debug=True, use_reloader=False)
