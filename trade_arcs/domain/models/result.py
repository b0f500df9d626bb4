"""Domain models for flow-map results"""

from dataclasses import dataclass, field
from typing import Any

from trade_arcs.domain.models.coordinates import TradeFlowRecord
from trade_arcs.domain.models.curves import SegmentBatch


@dataclass(frozen=True, slots=True)
class FlowMapResult:
    """
    Result of one flow-map run: the input records and the labeled segments.

    Pure data; formatting and plotting live in the infrastructure layer.
    `metadata` holds run details such as sample_count and plot_path.
    """

    records: list[TradeFlowRecord]
    batch: SegmentBatch
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def crossing_count(self) -> int:
        return sum(1 for curve in self.batch.curves if curve.crosses_antimeridian)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            "record_count": len(self.records),
            "segment_count": len(self.batch),
            "crossing_count": self.crossing_count,
            "segments": [segment.to_dict() for segment in self.batch.segments],
            "errors": [error.to_dict() for error in self.batch.errors],
            "metadata": {k: v for k, v in self.metadata.items() if v is not None},
        }
