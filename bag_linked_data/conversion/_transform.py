"""CRS resolution and reprojection of footprint geometries (pyproj + shapely).

A ``CrsTransformation`` is built once per run and applied to every feature.
Applying it returns a new geometry; the input geometry is left untouched so
the source-CRS block and the target-CRS block never alias each other.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from bag_linked_data.core.exceptions import (
    TransformFailedError,
    TransformUnavailableError,
    UnknownCrsError,
)

if TYPE_CHECKING:
    from pyproj import CRS, Transformer
    from shapely.geometry.base import BaseGeometry

logger = logging.getLogger("bag_linked_data.conversion.transform")


@dataclass(frozen=True, slots=True)
class CrsTransformation:
    """A reusable source → target coordinate operation.

    Output axis order is always easting/longitude first, northing/latitude
    second; a Z ordinate passes through.
    """

    source_code: str
    target_code: str
    source: CRS
    target: CRS
    transformer: Transformer

    @property
    def description(self) -> str:
        return str(self.transformer.description)


def resolve_crs(code: str) -> CRS:
    """Resolve a CRS code such as ``"EPSG:28992"``.

    Raises:
        UnknownCrsError: If PROJ cannot resolve ``code``.
    """
    from pyproj import CRS
    from pyproj.exceptions import CRSError

    try:
        return CRS.from_user_input(code)
    except CRSError as exc:
        msg = f"Unknown CRS {code!r}: {exc}"
        raise UnknownCrsError(msg) from exc


def build_transformation(source_code: str, target_code: str) -> CrsTransformation:
    """Build the transformation between two CRS codes.

    Raises:
        UnknownCrsError: If either code cannot be resolved.
        TransformUnavailableError: If PROJ has no operation between them.
    """
    from pyproj import Transformer
    from pyproj.exceptions import ProjError

    source = resolve_crs(source_code)
    target = resolve_crs(target_code)
    try:
        transformer = Transformer.from_crs(source, target, always_xy=True)
    except ProjError as exc:
        msg = f"Could not create CRS transformation from {source_code} to {target_code}: {exc}"
        raise TransformUnavailableError(msg) from exc

    transformation = CrsTransformation(
        source_code=source_code,
        target_code=target_code,
        source=source,
        target=target,
        transformer=transformer,
    )
    logger.info(
        "Transformation built | source=%s | target=%s | operation=%s",
        source_code,
        target_code,
        transformation.description,
    )
    return transformation


def apply_transformation(
    transformation: CrsTransformation, geometry: BaseGeometry
) -> BaseGeometry:
    """Return ``geometry`` reprojected into the transformation's target CRS.

    Raises:
        TransformFailedError: If PROJ reports an error for any coordinate, or
            produces a non-finite coordinate (e.g. outside the projection's
            valid domain).
    """
    import numpy as np
    import shapely
    from pyproj.exceptions import ProjError

    transformer = transformation.transformer

    def _project(coords):  # type: ignore[no-untyped-def]
        return np.column_stack(transformer.transform(*coords.T, errcheck=True))

    try:
        result = shapely.transform(geometry, _project, include_z=geometry.has_z)
    except ProjError as exc:
        msg = (
            f"Could not transform {geometry.geom_type} from "
            f"{transformation.source_code} to {transformation.target_code}: {exc}"
        )
        raise TransformFailedError(msg) from exc

    coords = shapely.get_coordinates(result, include_z=result.has_z)
    if not np.isfinite(coords).all():
        msg = (
            f"Transform from {transformation.source_code} to "
            f"{transformation.target_code} produced non-finite coordinates"
        )
        raise TransformFailedError(msg)
    return result
