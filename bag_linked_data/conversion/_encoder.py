"""Output block writer: one GeoSPARQL geometry node per (feature, CRS).

A block looks like::

    pand:0001
      geo:hasGeometry [
        def:crs <http://www.opengis.net/def/crs/EPSG/0/28992>;
        geo:asGML "<gml:Point ...>"^^geo:gmlLiteral;
        geo:asWKT "<http://www.opengis.net/def/crs/EPSG/0/28992> POINT Z (...)"^^geo:wktLiteral;
        geo:dimension 3 ].

Only the ambient CRS (WGS 84 by default) may omit the CRS URI inside the
WKT literal.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, TextIO

from bag_linked_data.conversion._escape import escape_literal
from bag_linked_data.conversion._gml import geometry_to_gml
from bag_linked_data.core.constants import GEOMETRY_DIMENSION, PREFIXES
from bag_linked_data.core.exceptions import (
    EncodingFailedError,
    NullGeometryError,
    WriteFailedError,
)

if TYPE_CHECKING:
    from shapely.geometry.base import BaseGeometry

logger = logging.getLogger("bag_linked_data.conversion.encoder")


def encode_geometry(
    sink: TextIO,
    identifier: str,
    geometry: BaseGeometry | None,
    crs_uri: str,
    *,
    ambient_crs_uri: str,
    srs_name: str = "",
) -> None:
    """Write one output block for ``geometry`` expressed in ``crs_uri``.

    Both encodings are produced before anything reaches ``sink``, so a
    failure never leaves a half-written block behind. ``geometry`` is not
    modified.

    Args:
        sink: Text stream receiving the block.
        identifier: Building identifier, used as the ``pand:`` local name.
        geometry: Footprint in the CRS named by ``crs_uri``.
        crs_uri: OGC URI of the geometry's CRS.
        ambient_crs_uri: URI of the CRS that needs no explicit WKT tag.
        srs_name: ``srsName`` written on the GML root element.

    Raises:
        NullGeometryError: If ``geometry`` is ``None``.
        EncodingFailedError: If the GML or WKT encoding cannot be produced.
        WriteFailedError: If ``sink`` rejects the write.
    """
    if geometry is None:
        msg = f"Building '{identifier}' has no geometry"
        raise NullGeometryError(msg)

    gml = escape_literal(geometry_to_gml(geometry, srs_name))
    wkt = geometry_to_wkt(geometry)
    if crs_uri != ambient_crs_uri:
        wkt = f"<{crs_uri}> {wkt}"

    block = (
        f"pand:{identifier}\n"
        "  geo:hasGeometry [\n"
        f"    def:crs <{crs_uri}>;\n"
        f'    geo:asGML "{gml}"^^geo:gmlLiteral;\n'
        f'    geo:asWKT "{wkt}"^^geo:wktLiteral;\n'
        f"    geo:dimension {GEOMETRY_DIMENSION} ].\n"
    )
    try:
        sink.write(block)
    except OSError as exc:
        msg = f"Could not write block for building '{identifier}': {exc}"
        raise WriteFailedError(msg) from exc

    logger.debug("Block written | id=%s | crs=%s", identifier, crs_uri)


def write_prologue(sink: TextIO) -> None:
    """Write the namespace prefix declarations followed by a blank line.

    Raises:
        WriteFailedError: If ``sink`` rejects the write.
    """
    prologue = "".join(f"prefix {name}: <{uri}>\n" for name, uri in PREFIXES) + "\n"
    try:
        sink.write(prologue)
    except OSError as exc:
        msg = f"Could not write document prologue: {exc}"
        raise WriteFailedError(msg) from exc


def geometry_to_wkt(geometry: BaseGeometry) -> str:
    """Return ISO WKT for ``geometry`` at full precision (``POINT Z (...)``).

    Raises:
        EncodingFailedError: If the geometry is empty or GEOS cannot write it.
    """
    import shapely
    from shapely.errors import GEOSException

    if geometry.is_empty:
        msg = f"Cannot encode empty {geometry.geom_type} as WKT"
        raise EncodingFailedError(msg)
    try:
        return shapely.to_wkt(geometry, rounding_precision=-1, trim=True, output_dimension=3)
    except (GEOSException, TypeError, ValueError) as exc:
        msg = f"Could not export {geometry.geom_type} as WKT: {exc}"
        raise EncodingFailedError(msg) from exc

