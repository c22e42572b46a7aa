"""Project GeoJSON county rings into SVG path data.

The transform is a fixed scale-and-offset tuned to fit Michigan into a
1000x800 viewport. It does no real map projection: no datum, no
antimeridian handling.
"""

from collections.abc import Sequence
from typing import Any

LON_OFFSET = 89.0
LAT_OFFSET = -41.5
SCALE = 100.0

VIEWBOX = "0 0 1000 800"
# Flips the y axis so north is up once the shapes are drawn.
MAP_TRANSFORM = "translate(200, 750) scale(1, -1.1)"


def project_point(lon: float, lat: float) -> tuple[float, float]:
    """Map a longitude/latitude pair to viewport coordinates."""
    return (lon + LON_OFFSET) * SCALE, (lat + LAT_OFFSET) * SCALE


def _fmt(value: float) -> str:
    text = f"{value:.6f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def _position_depth(value: Any) -> int | None:
    """List depth above the first position, skipping empty lists."""
    if isinstance(value, (int, float)):
        return 0
    if isinstance(value, (list, tuple)):
        for item in value:
            depth = _position_depth(item)
            if depth is not None:
                return depth + 1
    return None


def is_multipolygon(coordinates: Sequence[Any]) -> bool:
    """Return True when ``coordinates`` has the MultiPolygon nesting depth.

    A Polygon is a list of rings of positions; a MultiPolygon adds one more
    list level. Empty polygons and rings are skipped when measuring, so a
    MultiPolygon whose first part is empty is still recognised.
    """
    return _position_depth(coordinates) == 4


def _ring_path(ring: Sequence[Sequence[float]]) -> str:
    points = []
    for position in ring:
        x, y = project_point(position[0], position[1])
        points.append(f"{_fmt(x)},{_fmt(y)}")
    if not points:
        return ""
    return f"M {' L '.join(points)} Z"


def project(coordinates: Sequence[Any] | None, geometry_type: str | None = None) -> str:
    """Convert Polygon or MultiPolygon coordinates into an SVG path string.

    Only the outer ring of each polygon is drawn. Empty or missing input
    yields an empty string.

    Args:
        coordinates: GeoJSON ``geometry.coordinates`` of a Polygon or
            MultiPolygon.
        geometry_type: ``"Polygon"`` or ``"MultiPolygon"`` when known;
            otherwise the type is inferred from the nesting depth.

    Returns:
        Path data such as ``"M 8900,0 L 9000,0 Z"``.
    """
    if not coordinates:
        return ""

    if geometry_type is None:
        multi = is_multipolygon(coordinates)
    else:
        multi = geometry_type == "MultiPolygon"
    polygons = coordinates if multi else [coordinates]

    parts = []
    for polygon in polygons:
        if not polygon:
            continue
        path = _ring_path(polygon[0])
        if path:
            parts.append(path)
    return " ".join(parts)
