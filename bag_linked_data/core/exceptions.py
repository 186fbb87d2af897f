"""Conversion error taxonomy.

Every failure raised by the conversion pipeline inherits from
``PipelineError`` and carries structured context fields (stage, code,
feature position) so the command-line tools can report a human-readable
message and log a stable error payload.

Taxonomy categories
-------------------
- ``IoError``: the dataset cannot be opened, or the sink cannot be written.
- ``SchemaError``: the identifier field is missing, mis-typed or empty.
- ``GeometryError``: a feature has no geometry, or it cannot be encoded.
- ``CrsError``: a CRS cannot be resolved, or a transform is unavailable or fails.

None of these are recoverable: the pipeline never retries and never skips
a feature. Partial or inconsistent triples are worse than no output.
"""

from __future__ import annotations


class PipelineError(Exception):
    """Base exception for all conversion errors.

    Attributes:
        message: Human-readable error description.
        stage: Pipeline stage where the error occurred
            (e.g. ``"open_dataset"``, ``"encode_geometry"``).
        code: Machine-readable error code (e.g. ``"FIELD_NOT_FOUND"``).
        feature_index: Zero-based position of the offending feature in the
            dataset's native order, or ``-1`` when no feature is involved.
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
        feature_index: int = -1,
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.feature_index = feature_index
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, IoError):
            return "io"
        if isinstance(self, SchemaError):
            return "schema"
        if isinstance(self, GeometryError):
            return "geometry"
        if isinstance(self, CrsError):
            return "crs"
        return "pipeline"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
            "feature_index": self.feature_index,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class IoError(PipelineError):
    """Open, read or write failure on the dataset or the output sink."""

    default_stage = "io"
    default_code = "IO_FAILED"


class SchemaError(PipelineError):
    """The identifier field is missing, mis-typed or has no value."""

    default_stage = "resolve_id"
    default_code = "SCHEMA_INVALID"


class GeometryError(PipelineError):
    """A feature geometry is absent or cannot be encoded."""

    default_stage = "encode_geometry"
    default_code = "GEOMETRY_INVALID"


class CrsError(PipelineError):
    """A CRS cannot be resolved, or a transformation is unavailable or fails."""

    default_stage = "transform"
    default_code = "CRS_FAILED"


# ---------------------------------------------------------------------------
# Concrete errors
# ---------------------------------------------------------------------------


class OpenFailedError(IoError):
    """The input cannot be read or is not a recognised vector format."""

    default_stage = "open_dataset"
    default_code = "OPEN_FAILED"


class WriteFailedError(IoError):
    """The output sink rejected a write."""

    default_stage = "write_output"
    default_code = "WRITE_FAILED"


class FieldNotFoundError(SchemaError):
    default_code = "FIELD_NOT_FOUND"


class UnexpectedFieldTypeError(SchemaError):
    default_code = "UNEXPECTED_FIELD_TYPE"


class MissingFieldValueError(SchemaError):
    default_code = "FIELD_VALUE_MISSING"


class NullGeometryError(GeometryError):
    default_code = "NULL_GEOMETRY"


class EncodingFailedError(GeometryError):
    default_code = "ENCODING_FAILED"


class UnknownCrsError(CrsError):
    default_stage = "build_transformation"
    default_code = "UNKNOWN_CRS"


class TransformUnavailableError(CrsError):
    default_stage = "build_transformation"
    default_code = "TRANSFORM_UNAVAILABLE"


class TransformFailedError(CrsError):
    default_code = "TRANSFORM_FAILED"
