"""Unit tests for the county boundary reader."""

import json
from pathlib import Path

import pytest

from poll_map.lib.geometry.boundaries import CountyFeature, parse_feature_collection, read_geojson


class TestParseFeatureCollection:
    """Tests for parse_feature_collection()."""

    def test_parses_polygon_and_multipolygon(self, feature_collection: dict) -> None:
        features = parse_feature_collection(feature_collection)
        assert [f.name for f in features] == ["Oakland", "Genesee", "Wayne"]
        assert features[0].geometry_type == "Polygon"
        assert features[1].geometry_type == "MultiPolygon"

    def test_label_point_lies_inside_county(self, feature_collection: dict) -> None:
        oakland = parse_feature_collection(feature_collection)[0]
        assert oakland.label_point is not None
        lon, lat = oakland.label_point
        assert -83.7 < lon < -83.1
        assert 42.4 < lat < 42.9

    def test_features_are_immutable(self, feature_collection: dict) -> None:
        feature = parse_feature_collection(feature_collection)[0]
        with pytest.raises(AttributeError):
            feature.name = "Other"  # type: ignore[misc]

    def test_rejects_non_feature_collection(self) -> None:
        with pytest.raises(ValueError, match="Expected FeatureCollection"):
            parse_feature_collection({"type": "Feature"})

    def test_skips_unsupported_and_unnamed_features(self, feature_collection: dict) -> None:
        feature_collection["features"].append(
            {"type": "Feature", "properties": {"name": "Point"}, "geometry": {"type": "Point", "coordinates": [0, 0]}}
        )
        feature_collection["features"].append(
            {"type": "Feature", "properties": {}, "geometry": feature_collection["features"][0]["geometry"]}
        )
        features = parse_feature_collection(feature_collection)
        assert len(features) == 3

    def test_degenerate_geometry_has_no_label_point(self) -> None:
        data = {
            "type": "FeatureCollection",
            "features": [
                {
                    "type": "Feature",
                    "properties": {"name": "Broken"},
                    "geometry": {"type": "Polygon", "coordinates": [[[0, 41.5], [1, 41.5]]]},
                }
            ],
        }
        [feature] = parse_feature_collection(data)
        assert feature == CountyFeature(
            name="Broken",
            geometry_type="Polygon",
            coordinates=[[[0, 41.5], [1, 41.5]]],
            label_point=None,
        )


class TestReadGeojson:
    """Tests for read_geojson()."""

    def test_reads_file(self, tmp_path: Path, feature_collection: dict) -> None:
        path = tmp_path / "counties.geojson"
        path.write_text(json.dumps(feature_collection), encoding="utf-8")
        assert len(read_geojson(path)) == 3

    def test_invalid_json_raises_value_error(self, tmp_path: Path) -> None:
        path = tmp_path / "counties.geojson"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid GeoJSON"):
            read_geojson(path)
