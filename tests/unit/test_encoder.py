"""Tests for the per-(feature, CRS) output block and the document prologue."""

from __future__ import annotations

import io

import pytest
from shapely.geometry import Point, Polygon

from bag_linked_data.conversion import encode_geometry, geometry_to_wkt, write_prologue
from bag_linked_data.core.exceptions import (
    EncodingFailedError,
    GeometryError,
    NullGeometryError,
    WriteFailedError,
)

RD_URI = "http://www.opengis.net/def/crs/EPSG/0/28992"
WGS84_URI = "http://www.opengis.net/def/crs/EPSG/0/4326"


class _BrokenSink(io.StringIO):
    def write(self, s: str) -> int:
        raise OSError("disk full")


def _encode(geometry: object, crs_uri: str, srs_name: str = "EPSG:28992") -> str:
    sink = io.StringIO()
    encode_geometry(
        sink,
        "0001",
        geometry,  # type: ignore[arg-type]
        crs_uri,
        ambient_crs_uri=WGS84_URI,
        srs_name=srs_name,
    )
    return sink.getvalue()


class TestBlockLayout:
    def test_source_crs_block(self) -> None:
        block = _encode(Point(155000, 463000, 0), RD_URI)
        assert block == (
            "pand:0001\n"
            "  geo:hasGeometry [\n"
            f"    def:crs <{RD_URI}>;\n"
            '    geo:asGML "<gml:Point xmlns:gml=\\"http://www.opengis.net/gml\\" '
            'srsName=\\"EPSG:28992\\"><gml:coordinates>155000,463000,0</gml:coordinates>'
            '</gml:Point>"^^geo:gmlLiteral;\n'
            f'    geo:asWKT "<{RD_URI}> POINT Z (155000 463000 0)"^^geo:wktLiteral;\n'
            "    geo:dimension 3 ].\n"
        )

    def test_ambient_crs_block_has_no_wkt_prefix(self) -> None:
        block = _encode(Point(5.387, 52.155, 0), WGS84_URI, "EPSG:4326")
        lines = block.splitlines()
        assert lines[2] == f"    def:crs <{WGS84_URI}>;"
        assert lines[4] == '    geo:asWKT "POINT Z (5.387 52.155 0)"^^geo:wktLiteral;'

    def test_line_order(self) -> None:
        lines = _encode(Point(1, 2, 3), RD_URI).splitlines()
        assert len(lines) == 6
        assert lines[0] == "pand:0001"
        assert lines[1] == "  geo:hasGeometry ["
        assert lines[2].startswith("    def:crs <")
        assert lines[3].startswith('    geo:asGML "')
        assert lines[4].startswith('    geo:asWKT "')
        assert lines[5] == "    geo:dimension 3 ]."

    @pytest.mark.parametrize("crs_uri", [RD_URI, WGS84_URI])
    def test_gml_literal_stays_closed(self, crs_uri: str) -> None:
        gml_line = _encode(Point(1, 2, 3), crs_uri).splitlines()[3]
        unescaped = sum(
            1 for idx, char in enumerate(gml_line) if char == '"' and gml_line[idx - 1] != "\\"
        )
        assert unescaped == 2

    def test_geometry_not_mutated(self) -> None:
        polygon = Polygon([(0, 0, 1), (10, 0, 1), (10, 10, 1), (0, 0, 1)])
        before = polygon.wkt
        _encode(polygon, RD_URI)
        assert polygon.wkt == before

    def test_deterministic(self) -> None:
        geometry = Polygon([(0, 0, 1), (10, 0, 1), (10, 10, 1), (0, 0, 1)])
        assert _encode(geometry, RD_URI) == _encode(geometry, RD_URI)


class TestFailures:
    @pytest.mark.parametrize("crs_uri", [RD_URI, WGS84_URI])
    @pytest.mark.parametrize("identifier", ["0001", "", 'odd"id'])
    def test_null_geometry(self, identifier: str, crs_uri: str) -> None:
        sink = io.StringIO()
        with pytest.raises(NullGeometryError) as exc_info:
            encode_geometry(sink, identifier, None, crs_uri, ambient_crs_uri=WGS84_URI)
        assert exc_info.value.code == "NULL_GEOMETRY"
        assert isinstance(exc_info.value, GeometryError)
        assert sink.getvalue() == ""

    def test_empty_geometry_writes_nothing(self) -> None:
        sink = io.StringIO()
        with pytest.raises(EncodingFailedError):
            encode_geometry(sink, "0001", Point(), RD_URI, ambient_crs_uri=WGS84_URI)
        assert sink.getvalue() == ""

    def test_write_failure(self) -> None:
        with pytest.raises(WriteFailedError):
            encode_geometry(_BrokenSink(), "0001", Point(1, 2, 3), RD_URI, ambient_crs_uri=WGS84_URI)


class TestWkt:
    def test_full_precision(self) -> None:
        assert geometry_to_wkt(Point(5.387206211, 52.1551744, 0)) == "POINT Z (5.387206211 52.1551744 0)"

    def test_two_dimensional(self) -> None:
        assert geometry_to_wkt(Point(1, 2)) == "POINT (1 2)"

    def test_empty(self) -> None:
        with pytest.raises(EncodingFailedError):
            geometry_to_wkt(Point())


class TestPrologue:
    def test_prefixes(self) -> None:
        sink = io.StringIO()
        write_prologue(sink)
        assert sink.getvalue() == (
            "prefix geo: <http://www.opengis.net/ont/geosparql#>\n"
            "prefix def: <https://data.labs.pdok.nl/bag/def/>\n"
            "prefix pand: <http://bag.basisregistraties.overheid.nl/bag/id/pand/>\n"
            "\n"
        )

    def test_write_failure(self) -> None:
        with pytest.raises(WriteFailedError):
            write_prologue(_BrokenSink())
