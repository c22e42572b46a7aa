"""GeoJSON reader: parses county boundary FeatureCollections into CountyFeature values."""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from loguru import logger
from shapely.errors import GEOSException
from shapely.geometry import shape

_SUPPORTED_TYPES = ("Polygon", "MultiPolygon")


@dataclass(frozen=True)
class CountyFeature:
    """One county outline as loaded from the boundary file."""

    name: str
    geometry_type: str
    coordinates: list[Any]
    label_point: tuple[float, float] | None = None


def _label_point(geom_data: dict[str, Any]) -> tuple[float, float] | None:
    try:
        geom = shape(geom_data)
        if geom.is_empty:
            return None
        point = geom.representative_point()
    except (GEOSException, ValueError, TypeError, AttributeError) as exc:
        logger.debug("No label point for geometry: {}", exc)
        return None
    return point.x, point.y


def parse_feature_collection(data: dict[str, Any]) -> list[CountyFeature]:
    """Parse a GeoJSON FeatureCollection of county outlines.

    Features without a name or without Polygon/MultiPolygon geometry are
    skipped with a warning.

    Args:
        data: Decoded GeoJSON document.

    Returns:
        County features in file order.

    Raises:
        ValueError: If ``data`` is not a FeatureCollection.
    """
    if not isinstance(data, dict) or data.get("type") != "FeatureCollection":
        found = data.get("type") if isinstance(data, dict) else type(data).__name__
        msg = f"Expected FeatureCollection, got {found}"
        raise ValueError(msg)

    features: list[CountyFeature] = []
    for i, feature in enumerate(data.get("features") or []):
        if not isinstance(feature, dict):
            logger.warning(f"Skipping feature {i}: not an object")
            continue
        props = feature.get("properties") or {}
        name = props.get("name") or props.get("NAME")
        if not name:
            logger.warning(f"Skipping feature {i} without a county name")
            continue

        geom_data = feature.get("geometry") or {}
        geom_type = geom_data.get("type")
        if geom_type not in _SUPPORTED_TYPES:
            logger.warning(f"Skipping {name}: unsupported geometry type {geom_type}")
            continue

        features.append(
            CountyFeature(
                name=str(name),
                geometry_type=geom_type,
                coordinates=geom_data.get("coordinates") or [],
                label_point=_label_point(geom_data),
            )
        )

    logger.info(f"Parsed {len(features)} county boundaries")
    return features


def read_geojson(file_path: Path) -> list[CountyFeature]:
    """Read county boundaries from a local GeoJSON file.

    Raises:
        ValueError: If the file is not valid JSON or not a FeatureCollection.
    """
    logger.info(f"Reading GeoJSON: {file_path}")

    with file_path.open("r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as exc:
            msg = f"Invalid GeoJSON in {file_path}: {exc}"
            raise ValueError(msg) from exc

    return parse_feature_collection(data)
