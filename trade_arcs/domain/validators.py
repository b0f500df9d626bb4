"""Input validation utilities for flow-curve calculations."""

import math

import numpy as np

from trade_arcs.domain.constants import MIN_SAMPLE_COUNT
from trade_arcs.domain.exceptions import (
    InvalidCoordinateException,
    InvalidParameterException,
    ValidationError,
)
from trade_arcs.domain.models.coordinates import GeoPoint


def validate_geo_point(point: GeoPoint) -> None:
    """Validate geographic coordinates.

    Args:
        point: GeoPoint to validate

    Raises:
        InvalidCoordinateException: If coordinates are not finite or out of range
    """
    if not isinstance(point, GeoPoint):
        raise InvalidCoordinateException(f"Expected GeoPoint, got {type(point)}")

    try:
        finite = math.isfinite(point.lon) and math.isfinite(point.lat)
    except TypeError as e:
        raise InvalidCoordinateException(
            f"Coordinates must be numeric, got lon={point.lon!r}, lat={point.lat!r}"
        ) from e

    if not finite:
        raise InvalidCoordinateException(
            f"Coordinates must be finite, got lon={point.lon}, lat={point.lat}"
        )

    if not -90 <= point.lat <= 90:
        raise InvalidCoordinateException(
            f"Invalid latitude {point.lat}°. Must be in range [-90, 90]"
        )

    if not -180 <= point.lon <= 180:
        raise InvalidCoordinateException(
            f"Invalid longitude {point.lon}°. Must be in range [-180, 180]"
        )


def validate_sample_count(sample_count: int) -> None:
    """Validate the number of interior samples along an arc.

    Raises:
        InvalidParameterException: If sample_count is not an integer >= 2
    """
    # bool is an int subclass
    if isinstance(sample_count, bool) or not isinstance(sample_count, (int, np.integer)):
        raise InvalidParameterException(
            f"Sample count must be an integer, got {type(sample_count)}"
        )

    if sample_count < MIN_SAMPLE_COUNT:
        raise InvalidParameterException(
            f"Sample count must be >= {MIN_SAMPLE_COUNT}, got {sample_count}"
        )


def validate_max_workers(max_workers: int) -> None:
    """Validate the builder thread pool size.

    Raises:
        InvalidParameterException: If max_workers is not a positive integer
    """
    if isinstance(max_workers, bool) or not isinstance(max_workers, int):
        raise InvalidParameterException(
            f"max_workers must be an integer, got {type(max_workers)}"
        )

    if max_workers < 1:
        raise InvalidParameterException(
            f"max_workers must be positive, got {max_workers}"
        )


def validate_unit_dot(value: float) -> float:
    """Clip a dot product of unit vectors to [-1, 1].

    Args:
        value: Dot product of two unit vectors

    Returns:
        Clipped value within [-1, 1]

    Note:
        Numerical precision errors can push the dot product slightly outside [-1, 1].
        This function safely clips with a small epsilon tolerance.
    """
    epsilon = 1e-10

    if value < -1 - epsilon or value > 1 + epsilon:
        raise ValidationError(
            f"Value {value} is far outside [-1, 1]. "
            "This indicates a serious calculation error, not just floating-point precision."
        )

    return float(np.clip(value, -1.0, 1.0))
