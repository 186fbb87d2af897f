"""GML 2 markup for shapely geometries, built with lxml.

Produces the same element vocabulary OGR writes by default
(``gml:coordinates`` tuples, ``outerBoundaryIs``/``innerBoundaryIs``,
``*Member`` wrappers for collections) with the ``srsName`` attribute on the
outermost element only.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from lxml import etree

from bag_linked_data.core.constants import GML_NAMESPACE
from bag_linked_data.core.exceptions import EncodingFailedError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from shapely.geometry.base import BaseGeometry

_GML = f"{{{GML_NAMESPACE}}}"
_NSMAP = {"gml": GML_NAMESPACE}

# Significant digits for ordinates; matches OGR's default GML precision.
ORDINATE_DIGITS = 15

_MEMBER_TAGS = {
    "MultiPoint": ("MultiPoint", "pointMember"),
    "MultiLineString": ("MultiLineString", "lineStringMember"),
    "MultiPolygon": ("MultiPolygon", "polygonMember"),
    "GeometryCollection": ("MultiGeometry", "geometryMember"),
}


def geometry_to_gml(geometry: BaseGeometry, srs_name: str = "") -> str:
    """Serialise ``geometry`` as a GML 2 fragment.

    Args:
        geometry: Any non-empty shapely geometry.
        srs_name: Value of the ``srsName`` attribute (e.g. ``"EPSG:28992"``);
            omitted when empty.

    Raises:
        EncodingFailedError: If the geometry (or one of its parts) is empty,
            has non-finite ordinates, or is of an unsupported type.
    """
    root = _build(geometry, None)
    if srs_name:
        root.set("srsName", srs_name)
    return etree.tostring(root, encoding="unicode")


def format_ordinate(value: float) -> str:
    """Format one ordinate with up to ``ORDINATE_DIGITS`` significant digits."""
    if not math.isfinite(value):
        msg = f"Cannot encode non-finite ordinate {value!r} as GML"
        raise EncodingFailedError(msg)
    text = format(value, f".{ORDINATE_DIGITS}g")
    return "0" if text == "-0" else text


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _element(tag: str, parent: etree._Element | None) -> etree._Element:
    if parent is None:
        return etree.Element(_GML + tag, nsmap=_NSMAP)
    return etree.SubElement(parent, _GML + tag)


def _coordinates(coords: Iterable[tuple[float, ...]], parent: etree._Element) -> None:
    node = _element("coordinates", parent)
    node.text = " ".join(",".join(format_ordinate(v) for v in coord) for coord in coords)


def _build(geometry: BaseGeometry, parent: etree._Element | None) -> etree._Element:
    geom_type = geometry.geom_type
    if geometry.is_empty:
        msg = f"Cannot encode empty {geom_type} as GML"
        raise EncodingFailedError(msg)

    if geom_type in ("Point", "LineString", "LinearRing"):
        node = _element(geom_type, parent)
        _coordinates(geometry.coords, node)
        return node

    if geom_type == "Polygon":
        node = _element("Polygon", parent)
        outer = _element("outerBoundaryIs", node)
        _coordinates(geometry.exterior.coords, _element("LinearRing", outer))
        for interior in geometry.interiors:
            inner = _element("innerBoundaryIs", node)
            _coordinates(interior.coords, _element("LinearRing", inner))
        return node

    if geom_type in _MEMBER_TAGS:
        collection_tag, member_tag = _MEMBER_TAGS[geom_type]
        node = _element(collection_tag, parent)
        for part in geometry.geoms:
            _build(part, _element(member_tag, node))
        return node

    msg = f"Unsupported geometry type for GML: {geom_type}"
    raise EncodingFailedError(msg)
