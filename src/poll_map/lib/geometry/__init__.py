"""Geometry library: county boundary parsing and SVG projection.

Public API:
    - CountyFeature: One parsed county outline
    - parse_feature_collection: Parse a decoded GeoJSON FeatureCollection
    - read_geojson: Read boundaries from a local file
    - project: Polygon/MultiPolygon coordinates to SVG path data
    - project_point: Single lon/lat pair to viewport coordinates
"""

from poll_map.lib.geometry.boundaries import CountyFeature, parse_feature_collection, read_geojson
from poll_map.lib.geometry.projector import MAP_TRANSFORM, VIEWBOX, is_multipolygon, project, project_point

__all__ = [
    "MAP_TRANSFORM",
    "VIEWBOX",
    "CountyFeature",
    "is_multipolygon",
    "parse_feature_collection",
    "project",
    "project_point",
    "read_geojson",
]
