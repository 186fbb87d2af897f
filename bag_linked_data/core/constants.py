"""Shared conversion constants: the single source of truth.

Centralises the namespace prefixes, CRS codes and URI templates used by
the encoder, the pipeline and the command-line tools.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Coordinate reference systems
# ---------------------------------------------------------------------------

DEFAULT_SOURCE_CRS: str = "EPSG:28992"
"""Native CRS of BAG building footprints (Amersfoort / RD New)."""

DEFAULT_TARGET_CRS: str = "EPSG:4326"
"""Geographic WGS 84; the ambient CRS of a GeoSPARQL WKT literal."""

CRS_URI_TEMPLATE: str = "http://www.opengis.net/def/crs/{authority}/0/{code}"

DEFAULT_ID_FIELD: str = "gml_id"
"""Attribute carrying the building identifier (``gml:id`` as read by OGR)."""

# ---------------------------------------------------------------------------
# Output document
# ---------------------------------------------------------------------------

PREFIXES: tuple[tuple[str, str], ...] = (
    ("geo", "http://www.opengis.net/ont/geosparql#"),
    ("def", "https://data.labs.pdok.nl/bag/def/"),
    ("pand", "http://bag.basisregistraties.overheid.nl/bag/id/pand/"),
)

GEOMETRY_DIMENSION: int = 3

GML_NAMESPACE: str = "http://www.opengis.net/gml"


def crs_uri(crs_code: str) -> str:
    """Return the OGC definition URI for an ``AUTHORITY:CODE`` string.

    >>> crs_uri("EPSG:28992")
    'http://www.opengis.net/def/crs/EPSG/0/28992'

    Raises:
        ValueError: If ``crs_code`` is not of the form ``AUTHORITY:CODE``.
    """
    authority, sep, code = crs_code.partition(":")
    if not sep or not authority or not code:
        msg = f"CRS code must look like 'AUTHORITY:CODE', got {crs_code!r}"
        raise ValueError(msg)
    return CRS_URI_TEMPLATE.format(authority=authority.upper(), code=code)
