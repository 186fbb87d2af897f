"""Conversion pipeline: BAG building layer → GeoSPARQL document.

States::

    UNOPENED ──open──▶ OPEN ──run──▶ ITERATING ──exhausted──▶ CLOSED
        │                │               │
        └────────────────┴───────────────┴──── any error ──▶ ABORTED

Per feature the pipeline resolves the identifier, writes the block in the
source CRS, reprojects the footprint and writes the block in the target
CRS. The first error aborts the whole run; blocks already written stay in
the sink. The dataset handle is released on ``CLOSED`` and on ``ABORTED``.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from bag_linked_data.conversion._dataset import VectorDataset
from bag_linked_data.conversion._encoder import encode_geometry, write_prologue
from bag_linked_data.conversion._identifier import resolve_id
from bag_linked_data.conversion._transform import apply_transformation, build_transformation
from bag_linked_data.core.config import ConversionConfig
from bag_linked_data.core.exceptions import PipelineError
from bag_linked_data.utils.sink import open_sink

if TYPE_CHECKING:
    from pathlib import Path
    from types import TracebackType
    from typing import TextIO

    from bag_linked_data.conversion._transform import CrsTransformation
    from bag_linked_data.models.feature import BuildingFeature

logger = logging.getLogger("bag_linked_data.conversion.pipeline")


class PipelineState(enum.Enum):
    UNOPENED = "unopened"
    OPEN = "open"
    ITERATING = "iterating"
    CLOSED = "closed"
    ABORTED = "aborted"


@dataclass(frozen=True, slots=True)
class ConversionSummary:
    """Outcome of a completed run.

    Attributes:
        input_path: Dataset that was converted.
        features_converted: Number of features written (two blocks each).
        blocks_written: Number of geometry blocks written.
        source_crs: CRS code of the first block of every feature.
        target_crs: CRS code of the second block of every feature.
    """

    input_path: str
    features_converted: int
    blocks_written: int
    source_crs: str
    target_crs: str


class ConversionPipeline:
    """Single-use, single-threaded conversion of one dataset.

    Use as a context manager: entering opens the dataset, leaving releases
    it and, if an exception is propagating, marks the run ``ABORTED``.

    Example::

        with ConversionPipeline("panden.gml") as pipeline:
            summary = pipeline.run(sys.stdout)
    """

    def __init__(self, input_path: Path | str, config: ConversionConfig | None = None) -> None:
        self.input_path = str(input_path)
        self.config = config or ConversionConfig()
        self.state = PipelineState.UNOPENED
        self._dataset: VectorDataset | None = None

    # -- transitions --------------------------------------------------------

    def open(self) -> None:
        """``UNOPENED → OPEN``.

        Raises:
            OpenFailedError: If the dataset cannot be opened; the pipeline
                is then ``ABORTED``.
        """
        self._require(PipelineState.UNOPENED)
        try:
            self._dataset = VectorDataset.open(self.input_path, layer=self.config.layer)
        except PipelineError:
            self.state = PipelineState.ABORTED
            raise
        self.state = PipelineState.OPEN

        crs_code = self._dataset.crs_code
        if crs_code and crs_code.upper() != self.config.source_crs.upper():
            logger.warning(
                "Dataset CRS differs from configured source CRS | dataset=%s | source=%s | path=%s",
                crs_code,
                self.config.source_crs,
                self.input_path,
            )

    def run(self, sink: TextIO) -> ConversionSummary:
        """``OPEN → ITERATING → CLOSED``: write the whole document to ``sink``.

        Raises:
            PipelineError: Any identifier, geometry, CRS or write failure.
                The pipeline is then ``ABORTED`` and the dataset released.
        """
        self._require(PipelineState.OPEN)
        dataset = self._dataset
        if dataset is None:
            msg = "Pipeline has no open dataset"
            raise RuntimeError(msg)
        config = self.config

        try:
            self.state = PipelineState.ITERATING
            write_prologue(sink)
            transformation = build_transformation(config.source_crs, config.target_crs)

            features = 0
            for feature in dataset.features():
                self._convert_feature(sink, dataset, feature, transformation)
                features += 1
        except BaseException:
            self._abort()
            raise

        self.close()
        summary = ConversionSummary(
            input_path=self.input_path,
            features_converted=features,
            blocks_written=features * 2,
            source_crs=config.source_crs,
            target_crs=config.target_crs,
        )
        logger.info(
            "Conversion complete | path=%s | features=%d | blocks=%d",
            summary.input_path,
            summary.features_converted,
            summary.blocks_written,
        )
        return summary

    def close(self) -> None:
        """Release the dataset. ``ITERATING`` and ``OPEN`` become ``CLOSED``."""
        self._release()
        if self.state in (PipelineState.OPEN, PipelineState.ITERATING):
            self.state = PipelineState.CLOSED

    # -- per feature --------------------------------------------------------

    def _convert_feature(
        self,
        sink: TextIO,
        dataset: VectorDataset,
        feature: BuildingFeature,
        transformation: CrsTransformation,
    ) -> None:
        config = self.config
        source_uri = config.source_crs_uri
        target_uri = config.target_crs_uri
        try:
            identifier = resolve_id(dataset.schema, feature, config.id_field)
            encode_geometry(
                sink,
                identifier,
                feature.geometry,
                source_uri,
                ambient_crs_uri=target_uri,
                srs_name=config.source_crs,
            )
            transformed = apply_transformation(transformation, feature.geometry)  # type: ignore[arg-type]
            encode_geometry(
                sink,
                identifier,
                transformed,
                target_uri,
                ambient_crs_uri=target_uri,
                srs_name=config.target_crs,
            )
        except PipelineError as exc:
            if exc.feature_index < 0:
                exc.feature_index = feature.feature_index
            raise

    # -- internals ----------------------------------------------------------

    def _require(self, expected: PipelineState) -> None:
        if self.state is not expected:
            msg = f"Pipeline is {self.state.value}, expected {expected.value}"
            raise RuntimeError(msg)

    def _abort(self) -> None:
        self._release()
        self.state = PipelineState.ABORTED
        logger.warning("Conversion aborted | path=%s", self.input_path)

    def _release(self) -> None:
        if self._dataset is not None:
            dataset, self._dataset = self._dataset, None
            dataset.close()

    def __enter__(self) -> ConversionPipeline:
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc_type is not None and self.state not in (PipelineState.CLOSED, PipelineState.ABORTED):
            self._abort()
        else:
            self.close()


def convert(
    input_path: Path | str,
    sink: TextIO,
    config: ConversionConfig | None = None,
) -> ConversionSummary:
    """Convert the dataset at ``input_path`` into ``sink``.

    Raises:
        PipelineError: On the first failure of any stage.
    """
    with ConversionPipeline(input_path, config) as pipeline:
        return pipeline.run(sink)


def convert_file(
    input_path: Path | str,
    output_path: Path | str,
    config: ConversionConfig | None = None,
) -> ConversionSummary:
    """Convert ``input_path`` into the file ``output_path`` (``"-"`` for stdout).

    The output file is only created once the dataset has been opened, so
    an unreadable input leaves no output file behind.

    Raises:
        PipelineError: On the first failure of any stage.
    """
    with ConversionPipeline(input_path, config) as pipeline, open_sink(output_path) as sink:
        return pipeline.run(sink)
