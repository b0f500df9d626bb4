"""Great-circle trade-flow curves with antimeridian splitting."""

from trade_arcs.adapter import TradeFlowMapAPI
from trade_arcs.application.services.interpolator import GreatCircleInterpolator
from trade_arcs.application.services.segments import FlowSegmentBuilder
from trade_arcs.domain.models.coordinates import GeoPoint, TradeFlowRecord

__all__ = [
    "TradeFlowMapAPI",
    "GreatCircleInterpolator",
    "FlowSegmentBuilder",
    "GeoPoint",
    "TradeFlowRecord",
]
