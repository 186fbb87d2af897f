"""Conversion configuration loaded from environment variables.

All values have defaults matching the BAG publication pipeline: buildings
in RD New (EPSG:28992) are published in RD and in WGS 84 (EPSG:4326),
keyed by their ``gml_id`` attribute.

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if any value is out of
    its valid range, so bad configuration is caught before a dataset is
    opened or an output file is created.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from bag_linked_data.core.constants import (
    DEFAULT_ID_FIELD,
    DEFAULT_SOURCE_CRS,
    DEFAULT_TARGET_CRS,
    crs_uri,
)
from bag_linked_data.core.exceptions import PipelineError

_LOG_LEVELS = frozenset({"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"})


class ConfigValidationError(PipelineError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class ConversionConfig:
    """Immutable conversion configuration.

    Loaded once per command-line invocation and threaded through the
    pipeline.

    Attributes:
        source_crs: CRS code of the dataset's native projection.
        target_crs: CRS code of the geographic output projection. Blocks in
            this CRS omit the explicit CRS URI inside the WKT literal.
        id_field: Name of the textual attribute holding the building identifier.
        layer: Layer index or layer name to read from the dataset.
        log_level: Name of the ``logging`` level used by the command-line tools.
    """

    source_crs: str = DEFAULT_SOURCE_CRS
    target_crs: str = DEFAULT_TARGET_CRS
    id_field: str = DEFAULT_ID_FIELD
    layer: int | str = 0
    log_level: str = "INFO"

    @property
    def source_crs_uri(self) -> str:
        return crs_uri(self.source_crs)

    @property
    def target_crs_uri(self) -> str:
        return crs_uri(self.target_crs)

    @property
    def log_level_value(self) -> int:
        """Numeric ``logging`` level for ``log_level``."""
        return logging.getLevelName(self.log_level)  # type: ignore[no-any-return]

    @classmethod
    def from_env(cls) -> ConversionConfig:
        """Load and validate configuration from environment variables.

        Reads ``BAG_LD_SOURCE_CRS``, ``BAG_LD_TARGET_CRS``, ``BAG_LD_ID_FIELD``,
        ``BAG_LD_LAYER`` and ``BAG_LD_LOG_LEVEL``. A purely numeric layer is
        taken as an index, anything else as a layer name.

        Raises:
            ConfigValidationError: If a value is empty or out of range.
        """
        raw_layer = os.getenv("BAG_LD_LAYER", "0").strip()
        layer: int | str = int(raw_layer) if raw_layer.lstrip("-").isdigit() else raw_layer

        config = cls(
            source_crs=os.getenv("BAG_LD_SOURCE_CRS", DEFAULT_SOURCE_CRS).strip(),
            target_crs=os.getenv("BAG_LD_TARGET_CRS", DEFAULT_TARGET_CRS).strip(),
            id_field=os.getenv("BAG_LD_ID_FIELD", DEFAULT_ID_FIELD).strip(),
            layer=layer,
            log_level=os.getenv("BAG_LD_LOG_LEVEL", "INFO").strip().upper(),
        )
        _validate(config)
        return config


def _validate(config: ConversionConfig) -> None:
    """Validate configuration values.  Raises ``ConfigValidationError``."""
    for key, value in (
        ("BAG_LD_SOURCE_CRS", config.source_crs),
        ("BAG_LD_TARGET_CRS", config.target_crs),
    ):
        try:
            crs_uri(value)
        except ValueError as exc:
            raise ConfigValidationError(key, value, str(exc)) from exc

    if config.source_crs.upper() == config.target_crs.upper():
        raise ConfigValidationError(
            "BAG_LD_TARGET_CRS",
            config.target_crs,
            "must differ from BAG_LD_SOURCE_CRS",
        )

    if not config.id_field:
        raise ConfigValidationError("BAG_LD_ID_FIELD", config.id_field, "must not be empty")

    if isinstance(config.layer, int) and config.layer < 0:
        raise ConfigValidationError("BAG_LD_LAYER", config.layer, "must be >= 0")

    if config.layer == "":
        raise ConfigValidationError("BAG_LD_LAYER", config.layer, "must not be empty")

    if config.log_level not in _LOG_LEVELS:
        raise ConfigValidationError(
            "BAG_LD_LOG_LEVEL",
            config.log_level,
            f"must be one of {', '.join(sorted(_LOG_LEVELS))}",
        )
