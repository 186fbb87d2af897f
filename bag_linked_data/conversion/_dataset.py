"""Vector dataset access via fiona (OGR).

- ``initialize_once``: process-wide driver registration, done a single time
- ``list_driver_names``: sorted names of every registered OGR driver
- ``VectorDataset``: one open layer; yields ``BuildingFeature`` records in
  the dataset's native order and closes its handle on every exit path
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from bag_linked_data.core.exceptions import IoError, OpenFailedError
from bag_linked_data.models.feature import BuildingFeature, FieldSchema

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path
    from types import TracebackType

logger = logging.getLogger("bag_linked_data.conversion.dataset")

_initialized = False


def initialize_once() -> None:
    """Make every OGR vector driver GDAL has registered available for reading.

    fiona only opens formats listed in ``fiona.supported_drivers``; drivers
    GDAL knows about but fiona does not list are added in read mode. The
    registry is process-wide state, so this runs once per process.
    """
    global _initialized
    if _initialized:
        return

    import fiona

    with fiona.Env() as env:
        registered = env.drivers()

    added = [name for name in registered if name not in fiona.supported_drivers]
    for name in added:
        fiona.supported_drivers[name] = "r"
    _initialized = True

    logger.debug(
        "Drivers registered | total=%d | added_read_only=%d",
        len(registered),
        len(added),
    )


def list_driver_names() -> list[str]:
    """Return the names of all registered OGR drivers, sorted."""
    import fiona

    initialize_once()
    with fiona.Env() as env:
        return sorted(env.drivers())


class VectorDataset:
    """An open vector layer.

    Use as a context manager; the underlying fiona collection is closed on
    exit whether or not an exception is propagating.
    """

    def __init__(self, collection: object, path: str) -> None:
        self._collection = collection
        self.path = path
        self.schema = FieldSchema.from_fiona(collection.schema)  # type: ignore[attr-defined]

    @classmethod
    def open(cls, path: Path | str, *, layer: int | str = 0) -> VectorDataset:
        """Open ``layer`` of the vector dataset at ``path``.

        An integer ``layer`` is a position in the dataset's layer list; a
        string is a layer name.

        Raises:
            OpenFailedError: If the source cannot be read, is not a
                recognised vector format, or has no such layer.
        """
        import fiona
        from fiona.errors import FionaError

        initialize_once()
        try:
            layer_name = _resolve_layer(str(path), layer)
            collection = fiona.open(str(path), layer=layer_name)
        except (FionaError, OSError, ValueError) as exc:
            msg = f"Opening input file failed: {path}: {exc}"
            raise OpenFailedError(msg) from exc

        try:
            dataset = cls(collection, str(path))
        except (TypeError, ValueError) as exc:
            collection.close()
            msg = f"Unreadable layer schema in {path}: {exc}"
            raise OpenFailedError(msg) from exc

        logger.info(
            "Dataset opened | path=%s | driver=%s | layer=%s | features=%s | crs=%s",
            path,
            getattr(collection, "driver", ""),
            layer_name,
            _safe_len(collection),
            dataset.crs_code or "unknown",
        )
        return dataset

    @property
    def crs_code(self) -> str:
        """``EPSG:<code>`` of the layer's CRS, or ``""`` when it has no EPSG code."""
        crs = getattr(self._collection, "crs", None)
        if not crs:
            return ""
        epsg = getattr(crs, "to_epsg", lambda: None)()
        return f"EPSG:{epsg}" if epsg is not None else ""

    def features(self) -> Iterator[BuildingFeature]:
        """Yield every feature once, in native order, starting from the first.

        Raises:
            IoError: If the driver fails while reading a record.
        """
        from fiona.errors import FionaError

        index = 0
        iterator = iter(self._collection)  # type: ignore[call-overload]
        while True:
            try:
                record = next(iterator)
            except StopIteration:
                return
            except (FionaError, OSError) as exc:
                msg = f"Reading feature {index} from {self.path} failed: {exc}"
                raise IoError(
                    msg, stage="read_feature", code="READ_FAILED", feature_index=index
                ) from exc
            yield BuildingFeature.from_fiona(record, index)
            index += 1

    def close(self) -> None:
        self._collection.close()  # type: ignore[attr-defined]
        logger.debug("Dataset closed | path=%s", self.path)

    def __enter__(self) -> VectorDataset:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def _safe_len(collection: object) -> int | str:
    try:
        return len(collection)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return "unknown"


def _resolve_layer(path: str, layer: int | str) -> str:
    """Map a layer index to its name; names are passed through unchanged."""
    if isinstance(layer, str):
        return layer

    import fiona

    names = fiona.listlayers(path)
    if not 0 <= layer < len(names):
        msg = f"layer index {layer} out of range, dataset has {len(names)} layer(s)"
        raise ValueError(msg)
    return names[layer]
