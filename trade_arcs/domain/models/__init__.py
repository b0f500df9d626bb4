# trade_arcs/domain/models/__init__.py
from .units import Degrees, Radians, Kilometers, Longitude, Latitude, SegmentId
from .coordinates import GeoPoint, TradeFlowRecord
from .curves import PathSegment, FlowCurve, RecordError, SegmentBatch
from .result import FlowMapResult

__all__ = [
    "Degrees",
    "Radians",
    "Kilometers",
    "Longitude",
    "Latitude",
    "SegmentId",
    "GeoPoint",
    "TradeFlowRecord",
    "PathSegment",
    "FlowCurve",
    "RecordError",
    "SegmentBatch",
    "FlowMapResult",
]
