"""Building identifier lookup."""

from __future__ import annotations

from typing import TYPE_CHECKING

from bag_linked_data.core.constants import DEFAULT_ID_FIELD
from bag_linked_data.core.exceptions import (
    FieldNotFoundError,
    MissingFieldValueError,
    UnexpectedFieldTypeError,
)

if TYPE_CHECKING:
    from bag_linked_data.models.feature import BuildingFeature, FieldSchema


def resolve_id(
    schema: FieldSchema,
    feature: BuildingFeature,
    field_name: str = DEFAULT_ID_FIELD,
) -> str:
    """Return the feature's identifier as stored, without escaping.

    The schema is searched in field order; the first field named
    ``field_name`` wins.

    Raises:
        UnexpectedFieldTypeError: If the field exists but is not textual.
        FieldNotFoundError: If no field is named ``field_name``.
        MissingFieldValueError: If the feature has no value for the field.
    """
    for name, field_type in schema:
        if name != field_name:
            continue
        if not schema.is_textual(field_type):
            msg = f"Field '{field_name}' has type '{field_type}', expected a text field"
            raise UnexpectedFieldTypeError(msg, feature_index=feature.feature_index)
        value = feature.properties.get(field_name)
        if value is None:
            msg = f"Feature {feature.feature_index} has no value for field '{field_name}'"
            raise MissingFieldValueError(msg, feature_index=feature.feature_index)
        return str(value)

    msg = f"Could not find identifier field '{field_name}' in schema {schema.names}"
    raise FieldNotFoundError(msg, feature_index=feature.feature_index)
