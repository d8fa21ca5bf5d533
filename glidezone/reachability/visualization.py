# glidezone/reachability/visualization.py
"""
Interactive folium map of the risk zones and the colored location centerlines.
Each risk category gets its own toggleable layer.
"""
import folium
import logging
from typing import List, Optional

from .data_models import LineFeature, ReachabilityConfig, ZoneMap
from .serialization import zone_map_to_geojson


class ZoneMapVisualizer:
    """Creates folium maps with one layer per risk zone and one for the centerlines."""

    def __init__(self, config: Optional[ReachabilityConfig] = None):
        self.config = config or ReachabilityConfig()

    def create_zone_map(self, center: tuple, zones: ZoneMap,
                        lines: Optional[List[LineFeature]] = None, zoom_start: int = 10) -> folium.Map:
        """
        Args:
            center: (lat, lon) the map opens on
        """
        zone_map = folium.Map(location=list(center), zoom_start=zoom_start, tiles="CartoDB positron")

        for feature in zone_map_to_geojson(zones, self.config)['features']:
            risk = feature['properties']['risk']
            group = folium.FeatureGroup(name=f"{risk.title()} landing range", show=True).add_to(zone_map)
            folium.GeoJson(
                feature,
                style_function=self._zone_style,
                tooltip=f"{risk.title()} emergency landing possible"
            ).add_to(group)

        if lines:
            lines_group = folium.FeatureGroup(name="Landing locations", show=True).add_to(zone_map)
            for line in lines:
                self._create_line_visual(line).add_to(lines_group)

        folium.LayerControl(collapsed=False).add_to(zone_map)
        logging.info(f"Zone map created with {len(zones)} zones and {len(lines or [])} locations.")
        return zone_map

    @staticmethod
    def _zone_style(feature: dict) -> dict:
        color = feature['properties']['color']
        return {'color': color, 'weight': 1, 'fillColor': color, 'fillOpacity': 0.35}

    def _create_line_visual(self, line: LineFeature) -> folium.PolyLine:
        # folium expects (lat, lon)
        points = [(lat, lon) for lon, lat in line.coordinates]
        return folium.PolyLine(locations=points, color=line.color, weight=4, opacity=0.9,
                               tooltip=f"<b>{line.name}</b><br>Risk: {line.risk.value}")
