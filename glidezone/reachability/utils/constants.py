# glidezone/reachability/utils/constants.py
"""
Static constants used throughout the reachability engine.
Includes the display palette, risk thresholds, and geodesy figures.
"""

class ReachabilityConstants:
    """Constants used by the envelope builder and the zone compositor"""

    # Stable palette shared with any consuming renderer
    RISK_COLORS = {
        'safe': '#388E3C',
        'risky': '#FFC107',
        'unsafe': '#E64A19'
    }

    # Rendering precedence, safest first
    RISK_PRECEDENCE = ('safe', 'risky', 'unsafe')

    UNSAFE_HEADROOM_RATIO = -0.25
    RISKY_HEADROOM_RATIO = -0.15

    # ===== RANGE CURVE =====
    RANGE_SAMPLE_COUNT = 36
    HALF_SAMPLE_COUNT = 18

    # ===== GEODESY =====
    EARTH_RADIUS_M = 6371008.8
    METERS_PER_KM = 1000.0
    FEET_TO_METERS = 1 / 3.2808

    # Ground roll multiplier relative to a paved surface
    SURFACE_GROUND_ROLL_FACTORS = {
        'Asphalt': 1.0,
        'Gras': 1.20,
        'Water': 1.0
    }
