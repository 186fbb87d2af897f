"""Shared pytest fixtures for the BAG Linked Data test suite.

Input datasets are small GeoJSON and OGR GML files in EPSG:28992, written to
``tmp_path`` so every test gets a pristine copy that OGR can open.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

RD_CRS_MEMBER = {"type": "name", "properties": {"name": "urn:ogc:def:crs:EPSG::28992"}}

# Amersfoort, origin of the RD grid.
AMERSFOORT_RD = (155000.0, 463000.0, 0.0)
AMERSFOORT_LON = 5.3872
AMERSFOORT_LAT = 52.1552

SQUARE_RD = [
    [155000.0, 463000.0, 1.5],
    [155010.0, 463000.0, 1.5],
    [155010.0, 463010.0, 1.5],
    [155000.0, 463010.0, 1.5],
    [155000.0, 463000.0, 1.5],
]


def write_geojson(
    path: Path,
    features: list[dict[str, object]],
    *,
    crs: dict[str, object] | None = RD_CRS_MEMBER,
    name: str | None = None,
) -> Path:
    """Write a FeatureCollection to ``path`` and return the path.

    A ``name`` member sets the OGR layer name; without one the layer is
    named after the file stem.
    """
    collection: dict[str, object] = {"type": "FeatureCollection", "features": features}
    if name is not None:
        collection["name"] = name
    if crs is not None:
        collection["crs"] = crs
    path.write_text(json.dumps(collection), encoding="utf-8")
    return path


def building(gml_id: object, geometry: dict[str, object] | None, **extra: object) -> dict[str, object]:
    """Build one GeoJSON feature with a ``gml_id`` property."""
    properties: dict[str, object] = {"gml_id": gml_id, **extra}
    return {"type": "Feature", "properties": properties, "geometry": geometry}


def point(x: float, y: float, z: float) -> dict[str, object]:
    return {"type": "Point", "coordinates": [x, y, z]}


_GML_MEMBER = """\
  <gml:featureMember>
    <ogr:pand gml:id="{gml_id}">
      <ogr:geometryProperty><gml:Point srsName="EPSG:28992"><gml:coordinates>{x},{y},{z}</gml:coordinates></gml:Point></ogr:geometryProperty>
      <ogr:status>Pand in gebruik</ogr:status>
    </ogr:pand>
  </gml:featureMember>
"""


def write_gml(path: Path, points: list[tuple[str, float, float, float]]) -> Path:
    """Write OGR-flavoured GML with one ``pand`` feature per point."""
    members = "".join(
        _GML_MEMBER.format(gml_id=gml_id, x=x, y=y, z=z) for gml_id, x, y, z in points
    )
    path.write_text(
        '<?xml version="1.0" encoding="utf-8" ?>\n'
        '<ogr:FeatureCollection xmlns:gml="http://www.opengis.net/gml"'
        ' xmlns:ogr="http://ogr.maptools.org/">\n'
        f"{members}"
        "</ogr:FeatureCollection>\n",
        encoding="utf-8",
    )
    return path


# ---------------------------------------------------------------------------
# Dataset fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def single_building_geojson(tmp_path: Path) -> Path:
    """One building ``0001`` at Amersfoort as a 3D point."""
    return write_geojson(
        tmp_path / "single_building.geojson",
        [building("0001", point(*AMERSFOORT_RD))],
    )


@pytest.fixture()
def multi_building_geojson(tmp_path: Path) -> Path:
    """Three buildings in non-sorted identifier order, one a 3D polygon."""
    return write_geojson(
        tmp_path / "multi_building.geojson",
        [
            building("0003", {"type": "Polygon", "coordinates": [SQUARE_RD]}),
            building("0001", point(155100.0, 463100.0, 2.0)),
            building("0002", point(155200.0, 463200.0, 3.0)),
        ],
    )


@pytest.fixture()
def bag_gml(tmp_path: Path) -> Path:
    """Two buildings in GML; the layer is ``pand``, the file is ``panden.gml``."""
    return write_gml(
        tmp_path / "panden.gml",
        [
            ("0001", *AMERSFOORT_RD),
            ("0002", 155100.0, 463100.0, 2.0),
        ],
    )


@pytest.fixture()
def named_layer_geojson(tmp_path: Path) -> Path:
    """Two buildings in a GeoJSON layer named ``pand`` inside ``export.geojson``."""
    return write_geojson(
        tmp_path / "export.geojson",
        [
            building("0001", point(*AMERSFOORT_RD)),
            building("0002", point(155100.0, 463100.0, 2.0)),
        ],
        name="pand",
    )


@pytest.fixture()
def integer_id_geojson(tmp_path: Path) -> Path:
    """A building whose ``gml_id`` is numeric, so OGR types the field as integer."""
    return write_geojson(
        tmp_path / "integer_id.geojson",
        [building(1, point(*AMERSFOORT_RD))],
    )


@pytest.fixture()
def missing_id_geojson(tmp_path: Path) -> Path:
    """A building without any ``gml_id`` attribute."""
    feature = {
        "type": "Feature",
        "properties": {"identificatie": "0001"},
        "geometry": point(*AMERSFOORT_RD),
    }
    return write_geojson(tmp_path / "missing_id.geojson", [feature])


@pytest.fixture()
def null_geometry_geojson(tmp_path: Path) -> Path:
    """A valid first building followed by one with a null geometry."""
    return write_geojson(
        tmp_path / "null_geometry.geojson",
        [
            building("0001", point(*AMERSFOORT_RD)),
            building("0002", None),
        ],
    )


@pytest.fixture()
def not_a_dataset(tmp_path: Path) -> Path:
    """A file no OGR driver recognises."""
    path = tmp_path / "garbage.dat"
    path.write_bytes(b"\x00\x01 this is not a vector dataset \xff")
    return path


@pytest.fixture()
def output_path(tmp_path: Path) -> Path:
    return tmp_path / "buildings.ttl"
