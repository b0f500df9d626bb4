# trade_arcs/domain/models/units.py
"""
Type-safe unit definitions for flow-curve calculations.

This module uses NewType to create distinct types for different units,
helping catch degree/radian mix-ups at type-checking time.

Usage:
    from trade_arcs.domain.models.units import Degrees, Radians

    def central_angle(a: GeoPoint, b: GeoPoint) -> Radians:
        ...
"""

from typing import NewType

# Base units
Degrees = NewType("Degrees", float)  # Angle in decimal degrees
Radians = NewType("Radians", float)  # Angle in radians
Kilometers = NewType("Kilometers", float)  # Distance in kilometers

# Semantic types (domain-specific meanings)
Longitude = NewType("Longitude", Degrees)  # East-west position, [-180, 180]
Latitude = NewType("Latitude", Degrees)  # North-south position, [-90, 90]
SegmentId = NewType("SegmentId", str)  # Renderer group key of one path segment
