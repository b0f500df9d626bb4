import math

import numpy as np
from numpy.typing import NDArray

from trade_arcs.application.services.base import BaseCurveInterpolator
from trade_arcs.domain.constants import (
    ANTIPODAL_TOLERANCE_RAD,
    DEFAULT_SAMPLE_COUNT,
    DEGENERATE_ANGLE_RAD,
    EARTH_RADIUS_KM,
)
from trade_arcs.domain.exceptions import DegenerateInputException
from trade_arcs.domain.geometry import (
    align_antimeridian_points,
    central_angle,
    slerp,
    split_at_antimeridian,
    to_lon_lat,
    to_unit_vectors,
)
from trade_arcs.domain.models.coordinates import GeoPoint
from trade_arcs.domain.models.units import Kilometers, Radians
from trade_arcs.domain.validators import validate_geo_point, validate_sample_count
from trade_arcs.logging_config import get_logger

logger = get_logger(__name__)


class GreatCircleInterpolator(BaseCurveInterpolator):
    """
    Samples the minor great-circle arc between two points and splits it
    wherever it crosses the antimeridian.

    Points are converted to unit vectors and interpolated with slerp, so the
    samples are evenly spaced along the arc. The boundary point inserted at a
    crossing is the exact intersection of the arc with the ±180° meridian.
    More info: https://en.wikipedia.org/wiki/Slerp
    """

    def __init__(self, sample_count: int = DEFAULT_SAMPLE_COUNT, strict: bool = False):
        """
        Args:
            sample_count: Default number of interior samples per arc.
            strict: Raise DegenerateInputException for coincident endpoints
                    instead of returning a zero-length segment.
        """
        validate_sample_count(sample_count)
        self.sample_count = sample_count
        self.strict = strict

    def interpolate(
        self,
        source: GeoPoint,
        dest: GeoPoint,
        sample_count: int | None = None,
    ) -> list[NDArray[np.float64]]:
        """
        Generate the great-circle path from source to dest.

        Args:
            source: Start point (lon, lat).
            dest: End point (lon, lat).
            sample_count: Interior samples; the two endpoints are always added,
                          so an unsplit path has sample_count + 2 points.

        Returns:
            A list of one or more (n, 2) arrays of (lon, lat). Each crossing of
            the antimeridian adds one array.

        Raises:
            InvalidCoordinateException: If a point is out of range.
            InvalidParameterException: If sample_count is not an integer >= 2.
            DegenerateInputException: For antipodal endpoints, or coincident
                                      endpoints in strict mode.
        """
        if sample_count is None:
            sample_count = self.sample_count
        validate_geo_point(source)
        validate_geo_point(dest)
        validate_sample_count(sample_count)

        vectors = to_unit_vectors(
            np.array([source.lon, dest.lon]), np.array([source.lat, dest.lat])
        )
        omega = central_angle(vectors[0], vectors[1])

        if omega < DEGENERATE_ANGLE_RAD:
            if self.strict:
                raise DegenerateInputException(
                    f"Source and destination coincide at {tuple(source)}"
                )
            logger.debug(f"Coincident endpoints {tuple(source)}, returning zero-length segment")
            points = np.array([[source.lon, source.lat], [dest.lon, dest.lat]], dtype=np.float64)
            points[:, 0] = align_antimeridian_points(points[:, 0])
            return [points]

        if math.pi - omega < ANTIPODAL_TOLERANCE_RAD:
            raise DegenerateInputException(
                f"Points {tuple(source)} and {tuple(dest)} are antipodal; "
                "the great-circle path is not unique."
            )

        t = np.linspace(0.0, 1.0, sample_count + 2)
        arc_vectors = slerp(vectors[0], vectors[1], omega, t)
        points = to_lon_lat(arc_vectors)

        # Exact endpoints, not their round trip through 3D
        points[0] = (source.lon, source.lat)
        points[-1] = (dest.lon, dest.lat)
        points[:, 0] = align_antimeridian_points(points[:, 0])

        pieces = split_at_antimeridian(points, arc_vectors)
        if len(pieces) > 1:
            logger.debug(
                f"Path {tuple(source)} -> {tuple(dest)} crosses the antimeridian, "
                f"split into {len(pieces)} segments"
            )
        return pieces

    def arc_length_km(self, source: GeoPoint, dest: GeoPoint) -> Kilometers:
        """Great-circle distance along the minor arc, on a spherical Earth."""
        validate_geo_point(source)
        validate_geo_point(dest)
        vectors = to_unit_vectors(
            np.array([source.lon, dest.lon]), np.array([source.lat, dest.lat])
        )
        omega: Radians = central_angle(vectors[0], vectors[1])
        return Kilometers(EARTH_RADIUS_KM * omega)
