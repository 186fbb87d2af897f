"""Data model for a layer schema and a BAG building feature.

A ``FieldSchema`` is read once per layer; a ``BuildingFeature`` is produced
lazily per record while the pipeline iterates the dataset and is not
retained once its two output blocks are written.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shapely.geometry.base import BaseGeometry

TEXTUAL_FIELD_TYPE = "str"


@dataclass(frozen=True, slots=True)
class FieldSchema:
    """Ordered ``(name, type)`` pairs shared by every feature of a layer.

    Types use fiona's notation, e.g. ``"str:80"``, ``"int"``, ``"float:24.15"``.
    """

    fields: tuple[tuple[str, str], ...] = ()

    @classmethod
    def from_fiona(cls, schema: Mapping[str, object]) -> FieldSchema:
        """Build from a fiona collection schema (``{"properties": {...}, ...}``)."""
        properties = schema.get("properties") or {}
        if not isinstance(properties, Mapping):
            msg = f"schema properties must be a mapping, got {type(properties).__name__}"
            raise TypeError(msg)
        return cls(tuple((str(name), str(ftype)) for name, ftype in properties.items()))

    @staticmethod
    def is_textual(field_type: str) -> bool:
        """Whether a fiona field type holds text (``str`` with optional width)."""
        return field_type.partition(":")[0].strip().lower() == TEXTUAL_FIELD_TYPE

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    @property
    def names(self) -> list[str]:
        return [name for name, _ in self.fields]


@dataclass(frozen=True, slots=True)
class BuildingFeature:
    """A single record read from the building layer.

    Attributes:
        properties: Attribute values keyed by field name.
        geometry: Footprint geometry, or ``None`` when the record has none.
        feature_index: Zero-based position in the dataset's native order.
    """

    properties: dict[str, object] = field(default_factory=dict)
    geometry: BaseGeometry | None = None
    feature_index: int = 0

    @classmethod
    def from_fiona(cls, record: object, feature_index: int) -> BuildingFeature:
        """Convert a fiona record into a ``BuildingFeature``.

        The fiona geometry is turned into a shapely geometry through its
        ``__geo_interface__``.
        """
        from shapely.geometry import shape

        raw_props = getattr(record, "properties", None) or {}
        raw_geom = getattr(record, "geometry", None)
        geometry = shape(raw_geom) if raw_geom is not None else None
        return cls(
            properties=dict(raw_props),
            geometry=geometry,
            feature_index=feature_index,
        )
