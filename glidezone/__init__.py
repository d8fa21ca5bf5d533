"""
GlideZone - emergency landing coverage maps for light aircraft.
"""
__version__ = "0.1.0"
