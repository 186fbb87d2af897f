"""Data models.

- FieldSchema: Ordered field names and types of a layer
- BuildingFeature: One building record with its footprint geometry
"""

from bag_linked_data.models.feature import BuildingFeature, FieldSchema

__all__ = [
    "BuildingFeature",
    "FieldSchema",
]
