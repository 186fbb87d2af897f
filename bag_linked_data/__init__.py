"""BAG building footprints as Linked Data.

Converts a vector dataset of BAG buildings in RD New into a GeoSPARQL
document that carries every footprint as both GML and WKT, in RD and in
WGS 84.
"""

__version__ = "0.1.0"
