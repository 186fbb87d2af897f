"""Command-line entry points.

- drivers: ``bag-drivers``, list or export the available OGR drivers
- gml2wkt: ``bag-gml2wkt``, convert a BAG building dataset to Linked Data
"""
