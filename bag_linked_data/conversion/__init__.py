"""BAG → GeoSPARQL conversion.

The conversion is split into focused stages:
- **_escape**: quote escaping for literals holding markup
- **_identifier**: ``gml_id`` lookup against the layer schema
- **_gml**: GML 2 markup built with lxml
- **_encoder**: WKT encoding and the per-(feature, CRS) output block
- **_transform**: CRS resolution and reprojection with pyproj
- **_dataset**: fiona-backed dataset access and driver registration
- **pipeline**: the state machine tying the stages together
"""

from __future__ import annotations

from bag_linked_data.conversion._dataset import (
    VectorDataset,
    initialize_once,
    list_driver_names,
)
from bag_linked_data.conversion._encoder import (
    encode_geometry,
    geometry_to_wkt,
    write_prologue,
)
from bag_linked_data.conversion._escape import escape_literal
from bag_linked_data.conversion._gml import format_ordinate, geometry_to_gml
from bag_linked_data.conversion._identifier import resolve_id
from bag_linked_data.conversion._transform import (
    CrsTransformation,
    apply_transformation,
    build_transformation,
    resolve_crs,
)
from bag_linked_data.conversion.pipeline import (
    ConversionPipeline,
    ConversionSummary,
    PipelineState,
    convert,
    convert_file,
)

__all__ = [
    "ConversionPipeline",
    "ConversionSummary",
    "CrsTransformation",
    "PipelineState",
    "VectorDataset",
    "apply_transformation",
    "build_transformation",
    "convert",
    "convert_file",
    "encode_geometry",
    "escape_literal",
    "format_ordinate",
    "geometry_to_gml",
    "geometry_to_wkt",
    "initialize_once",
    "list_driver_names",
    "resolve_crs",
    "resolve_id",
    "write_prologue",
]
