import math

import numpy as np
from numpy.typing import NDArray

from trade_arcs.domain.constants import ANTIMERIDIAN_LON
from trade_arcs.domain.models.units import Latitude, Radians
from trade_arcs.domain.validators import validate_unit_dot

_MERIDIAN_ATOL = 1e-9


def to_unit_vectors(
    lons: NDArray[np.float64], lats: NDArray[np.float64]
) -> NDArray[np.float64]:
    """Convert geographic coordinates to 3D Cartesian unit vectors.

    Args:
        lons: Longitudes in decimal degrees.
        lats: Latitudes in decimal degrees.

    Returns:
        An (n, 3) array of unit vectors (x towards lon 0, z towards the north pole).
    """
    lon_rad = np.deg2rad(np.asarray(lons, dtype=np.float64))
    lat_rad = np.deg2rad(np.asarray(lats, dtype=np.float64))
    cos_lat = np.cos(lat_rad)
    return np.column_stack(
        (cos_lat * np.cos(lon_rad), cos_lat * np.sin(lon_rad), np.sin(lat_rad))
    )


def to_lon_lat(vectors: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert 3D vectors back to geographic coordinates.

    Vectors are renormalized first, so small drift from interpolation is harmless.

    Returns:
        An (n, 2) array with columns (lon, lat) in decimal degrees,
        longitude in [-180, 180].
    """
    vectors = np.atleast_2d(vectors)
    norms = np.linalg.norm(vectors, axis=1, keepdims=True)
    unit = vectors / norms
    lats = np.rad2deg(np.arcsin(np.clip(unit[:, 2], -1.0, 1.0)))
    lons = np.rad2deg(np.arctan2(unit[:, 1], unit[:, 0]))
    return np.column_stack((lons, lats))


def central_angle(a: NDArray[np.float64], b: NDArray[np.float64]) -> Radians:
    """
    Angular separation of two unit vectors.

    Uses atan2(|a x b|, a . b), which stays accurate for nearly coincident
    and nearly antipodal points where arccos loses precision.
    """
    cross_norm = float(np.linalg.norm(np.cross(a, b)))
    dot = validate_unit_dot(float(np.dot(a, b)))
    return Radians(math.atan2(cross_norm, dot))


def slerp(
    a: NDArray[np.float64],
    b: NDArray[np.float64],
    omega: Radians,
    t: NDArray[np.float64],
) -> NDArray[np.float64]:
    """Spherical linear interpolation between two unit vectors.

    Args:
        a: Start unit vector.
        b: End unit vector.
        omega: Central angle between a and b in radians, 0 < omega < pi.
        t: Interpolation parameters in [0, 1].

    Returns:
        An (len(t), 3) array of unit vectors on the minor arc from a to b.

    Raises:
        ValueError: If omega is outside the open interval (0, pi).
    """
    sin_omega = math.sin(omega)
    if not 0 < omega < math.pi or np.isclose(sin_omega, 0.0, rtol=0, atol=1e-15):
        raise ValueError("Slerp requires 0 < omega < pi")

    t = np.asarray(t, dtype=np.float64)[:, np.newaxis]
    coeff_a = np.sin((1.0 - t) * omega) / sin_omega
    coeff_b = np.sin(t * omega) / sin_omega
    return coeff_a * a + coeff_b * b


def is_on_antimeridian(lon: float) -> bool:
    return math.isclose(abs(lon), ANTIMERIDIAN_LON, rel_tol=0.0, abs_tol=_MERIDIAN_ATOL)


def align_antimeridian_points(lons: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Give points lying on the antimeridian the sign of the side they belong to.

    +180 and -180 are the same meridian; which one a point gets is otherwise
    arbitrary (atan2 of a signed zero). A point takes the sign of the point
    before it; a leading point takes the sign of the first point off the
    meridian.
    """
    aligned = np.array(lons, dtype=np.float64, copy=True)
    on_meridian = np.array([is_on_antimeridian(lon) for lon in aligned], dtype=bool)
    if not on_meridian.any():
        return aligned

    off_meridian = aligned[~on_meridian]
    for i in np.flatnonzero(on_meridian):
        if i > 0:
            reference = aligned[i - 1]
        elif off_meridian.size:
            reference = off_meridian[0]
        else:
            reference = aligned[i]
        aligned[i] = math.copysign(ANTIMERIDIAN_LON, reference)
    return aligned


def antimeridian_crossing_latitude(
    p: NDArray[np.float64], q: NDArray[np.float64]
) -> Latitude:
    """
    Latitude where the great circle through p and q meets the antimeridian.

    The crossing is the intersection of the arc's plane (normal p x q) with
    the meridian plane y = 0, taken on the x < 0 side.

    Args:
        p: Unit vector of the point before the crossing.
        q: Unit vector of the point after the crossing.

    Returns:
        The crossing latitude in decimal degrees.
    """
    normal = np.cross(p, q)
    # normal x (0, 1, 0)
    direction = np.array([-normal[2], 0.0, normal[0]])
    norm = float(np.linalg.norm(direction))

    if np.isclose(norm, 0.0, rtol=0, atol=1e-15):
        # Arc lies in the 0/180 meridian plane: fall back to the mean latitude
        lat_p = math.degrees(math.asin(max(-1.0, min(1.0, float(p[2])))))
        lat_q = math.degrees(math.asin(max(-1.0, min(1.0, float(q[2])))))
        return Latitude((lat_p + lat_q) / 2.0)

    direction /= norm
    if direction[0] > 0:
        direction = -direction

    return Latitude(math.degrees(math.asin(max(-1.0, min(1.0, float(direction[2]))))))


def find_antimeridian_jumps(lons: NDArray[np.float64]) -> NDArray[np.intp]:
    """
    Indices i where the step from point i-1 to point i jumps across the antimeridian.

    A jump is an absolute longitude difference greater than 180 degrees.
    """
    if lons.size < 2:
        return np.array([], dtype=np.intp)
    return np.flatnonzero(np.abs(np.diff(lons)) > ANTIMERIDIAN_LON) + 1


def split_at_antimeridian(
    points: NDArray[np.float64], vectors: NDArray[np.float64]
) -> list[NDArray[np.float64]]:
    """Partition an ordered path into pieces that never wrap across the antimeridian.

    At each crossing the outgoing piece is closed with a boundary point on
    the meridian (+180 or -180, the side it leaves from), and the next piece
    opens with the same point mirrored to the opposite sign.

    Args:
        points: An (n, 2) array of (lon, lat), antimeridian points already aligned.
        vectors: The matching (n, 3) unit vectors, used for the crossing latitude.

    Returns:
        A list of one or more (m, 2) arrays.
    """
    lons = points[:, 0]
    jumps = find_antimeridian_jumps(lons)
    if jumps.size == 0:
        return [points.copy()]

    pieces: list[NDArray[np.float64]] = []
    head = np.empty((0, 2), dtype=np.float64)
    start = 0

    for i in jumps:
        edge_lon = math.copysign(ANTIMERIDIAN_LON, lons[i - 1])

        if is_on_antimeridian(lons[i - 1]):
            # The last point before the jump already sits on the edge
            crossing_lat = float(points[i - 1, 1])
            tail = np.empty((0, 2), dtype=np.float64)
        else:
            crossing_lat = float(antimeridian_crossing_latitude(vectors[i - 1], vectors[i]))
            tail = np.array([[edge_lon, crossing_lat]])

        pieces.append(np.vstack((head, points[start:i], tail)))
        head = np.array([[-edge_lon, crossing_lat]])
        start = i

    pieces.append(np.vstack((head, points[start:])))
    return pieces
