# trade_arcs/application/services/__init__.py
from .base import BaseCurveInterpolator, BaseTradeFlowSource
from .interpolator import GreatCircleInterpolator
from .segments import FlowSegmentBuilder, label_segments, make_segment_id

__all__ = [
    "BaseCurveInterpolator",
    "BaseTradeFlowSource",
    "GreatCircleInterpolator",
    "FlowSegmentBuilder",
    "label_segments",
    "make_segment_id",
]
