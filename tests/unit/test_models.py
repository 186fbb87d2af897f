"""Tests for the BuildingFeature model."""

from __future__ import annotations

from types import SimpleNamespace

from shapely.geometry import Point

from bag_linked_data.models import BuildingFeature


class TestBuildingFeatureFromFiona:
    def test_geo_interface_geometry(self) -> None:
        record = SimpleNamespace(
            properties={"gml_id": "0001"},
            geometry={"type": "Point", "coordinates": (155000.0, 463000.0, 0.0)},
        )
        feature = BuildingFeature.from_fiona(record, 3)
        assert feature.properties == {"gml_id": "0001"}
        assert feature.geometry == Point(155000, 463000, 0)
        assert feature.feature_index == 3

    def test_missing_geometry(self) -> None:
        record = SimpleNamespace(properties={"gml_id": "0002"}, geometry=None)
        feature = BuildingFeature.from_fiona(record, 0)
        assert feature.geometry is None

    def test_properties_copied(self) -> None:
        props = {"gml_id": "0001"}
        feature = BuildingFeature.from_fiona(SimpleNamespace(properties=props, geometry=None), 0)
        props["gml_id"] = "changed"
        assert feature.properties["gml_id"] == "0001"
