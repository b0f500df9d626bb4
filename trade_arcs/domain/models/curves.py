from dataclasses import dataclass, field, fields
from typing import Any, Iterator

import numpy as np
from numpy.typing import NDArray

from trade_arcs.domain.exceptions import FlowCurveException
from .coordinates import GeoPoint
from .units import Latitude, Longitude, SegmentId


class BaseModel:
    def to_dict(self):
        """Converts a dataclass instance to a dictionary, handling nested dataclasses,
        NamedTuples, exceptions and numpy arrays.
        """
        result = {}
        for f in fields(self):
            value = self._convert_value(getattr(self, f.name))
            result[f.name] = value
        return result

    def _convert_value(self, value: Any) -> Any:
        if hasattr(value, "to_dict"):
            return value.to_dict()
        if isinstance(value, tuple) and hasattr(value, "_asdict"):  # Handle NamedTuple
            return {k: self._convert_value(v) for k, v in value._asdict().items()}
        if isinstance(value, np.ndarray):
            return value.tolist()
        if isinstance(value, Exception):
            return {"type": type(value).__name__, "message": str(value)}
        if isinstance(value, (list, tuple)):
            return [self._convert_value(v) for v in value]
        return value


@dataclass(frozen=True, slots=True)
class PathSegment(BaseModel):
    """One continuously plottable piece of a geodesic curve.

    `points` has shape (n, 2) with columns (lon, lat), n >= 2.
    """

    segment_id: SegmentId
    record_index: int
    points: NDArray[np.float64]

    def __post_init__(self):
        if self.points.ndim != 2 or self.points.shape[1] != 2:
            raise ValueError("`points` must be an (n, 2) array of (lon, lat).")
        if self.points.shape[0] < 2:
            raise ValueError("A path segment needs at least two points.")

    @property
    def lons(self) -> NDArray[np.float64]:
        return self.points[:, 0]

    @property
    def lats(self) -> NDArray[np.float64]:
        return self.points[:, 1]

    @property
    def start(self) -> GeoPoint:
        return GeoPoint(Longitude(float(self.points[0, 0])), Latitude(float(self.points[0, 1])))

    @property
    def end(self) -> GeoPoint:
        return GeoPoint(Longitude(float(self.points[-1, 0])), Latitude(float(self.points[-1, 1])))

    def __len__(self) -> int:
        return int(self.points.shape[0])


@dataclass(frozen=True, slots=True)
class FlowCurve(BaseModel):
    """Complete output for one trade-flow record: one or more segments."""

    record_index: int
    segments: list[PathSegment]

    @property
    def crosses_antimeridian(self) -> bool:
        return len(self.segments) > 1

    @property
    def point_count(self) -> int:
        return sum(len(segment) for segment in self.segments)


@dataclass(frozen=True, slots=True)
class RecordError(BaseModel):
    """A record that produced no curve, and why."""

    record_index: int
    error: FlowCurveException


@dataclass(slots=True)
class SegmentBatch(BaseModel):
    """Builder output: curves in record order plus per-record failures."""

    curves: list[FlowCurve] = field(default_factory=list)
    errors: list[RecordError] = field(default_factory=list)

    @property
    def segments(self) -> list[PathSegment]:
        return [segment for curve in self.curves for segment in curve.segments]

    def __iter__(self) -> Iterator[tuple[PathSegment, int]]:
        for segment in self.segments:
            yield segment, segment.record_index

    def __len__(self) -> int:
        return sum(len(curve.segments) for curve in self.curves)

    def segment_ids(self) -> list[SegmentId]:
        return [segment.segment_id for segment in self.segments]

    def to_rows(self) -> list[tuple[float, float, SegmentId, int]]:
        """
        Flatten to long-format rows (lon, lat, segment_id, record_index).

        This is the shape a grouped line renderer consumes: rows sharing a
        segment_id form one line, rows with different ids are never joined.
        """
        rows = []
        for segment in self.segments:
            for lon, lat in segment.points:
                rows.append((float(lon), float(lat), segment.segment_id, segment.record_index))
        return rows
