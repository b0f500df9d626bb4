from concurrent.futures import ThreadPoolExecutor
from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from trade_arcs.application.services.base import BaseCurveInterpolator
from trade_arcs.application.services.interpolator import GreatCircleInterpolator
from trade_arcs.domain.constants import SEGMENT_ID_SEPARATOR
from trade_arcs.domain.exceptions import FlowCurveException, RecordProcessingException
from trade_arcs.domain.models.coordinates import TradeFlowRecord
from trade_arcs.domain.models.curves import FlowCurve, PathSegment, RecordError, SegmentBatch
from trade_arcs.domain.models.units import SegmentId
from trade_arcs.domain.validators import validate_max_workers, validate_sample_count
from trade_arcs.logging_config import get_logger

logger = get_logger(__name__)


def make_segment_id(record_index: int, part: int | None = None) -> SegmentId:
    """
    Identifier of one segment.

    A record drawn as a single piece gets its plain index ("5"); the pieces of
    a split record get "index-part" with part counted from 1 ("5-1", "5-2").
    Plain identifiers never contain the separator, so the two forms never collide.
    """
    if part is None:
        return SegmentId(str(record_index))
    return SegmentId(f"{record_index}{SEGMENT_ID_SEPARATOR}{part}")


def label_segments(
    record_index: int, parts: Sequence[NDArray[np.float64]]
) -> list[PathSegment]:
    """Attach segment identifiers to the point lists produced for one record."""
    if len(parts) == 1:
        return [PathSegment(make_segment_id(record_index), record_index, parts[0])]
    return [
        PathSegment(make_segment_id(record_index, j), record_index, points)
        for j, points in enumerate(parts, start=1)
    ]


class FlowSegmentBuilder:
    """
    Turns trade-flow records into labeled path segments.

    Each record is interpolated independently; its position in the input is
    passed explicitly to the labelling step, so identifiers depend only on
    (record index, piece number) and not on processing order.

    Error policy: by default a failing record is collected into
    `SegmentBatch.errors` and the batch continues. With `fail_fast` the first
    failure is raised as RecordProcessingException.
    """

    def __init__(
        self,
        interpolator: BaseCurveInterpolator | None = None,
        sample_count: int | None = None,
        fail_fast: bool = False,
        max_workers: int = 1,
    ):
        if sample_count is not None:
            validate_sample_count(sample_count)
        validate_max_workers(max_workers)

        self.interpolator = interpolator or GreatCircleInterpolator()
        self.sample_count = sample_count
        self.fail_fast = fail_fast
        self.max_workers = max_workers

    def build_curve(self, record_index: int, record: TradeFlowRecord) -> FlowCurve:
        """
        Interpolate and label one record.

        Raises:
            RecordProcessingException: If the interpolator rejects the record.
        """
        try:
            parts = self.interpolator.interpolate(
                record.source, record.dest, self.sample_count
            )
        except FlowCurveException as e:
            raise RecordProcessingException(record_index, e) from e
        return FlowCurve(record_index, label_segments(record_index, parts))

    def _try_build_curve(
        self, record_index: int, record: TradeFlowRecord
    ) -> FlowCurve | RecordError:
        try:
            return self.build_curve(record_index, record)
        except RecordProcessingException as e:
            if self.fail_fast:
                raise
            logger.warning(f"Skipping record {record_index}: {e.cause}")
            return RecordError(record_index, e.cause)

    def build(self, records: Sequence[TradeFlowRecord]) -> SegmentBatch:
        """
        Build labeled segments for every record, in input order.

        Args:
            records: Trade-flow records; the 0-based position is the record index.

        Returns:
            SegmentBatch with one FlowCurve per successful record and one
            RecordError per failed record.

        Raises:
            RecordProcessingException: On the first failure when fail_fast is set.
        """
        batch = SegmentBatch()
        if not records:
            return batch

        if self.max_workers > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                outcomes = list(
                    executor.map(self._try_build_curve, range(len(records)), records)
                )
        else:
            outcomes = [
                self._try_build_curve(index, record)
                for index, record in enumerate(records)
            ]

        for outcome in outcomes:
            if isinstance(outcome, RecordError):
                batch.errors.append(outcome)
            else:
                batch.curves.append(outcome)

        logger.info(
            f"Built {len(batch)} segment(s) from {len(batch.curves)} record(s), "
            f"{len(batch.errors)} failed"
        )
        return batch
