import math
from dataclasses import dataclass
from typing import Any, Mapping, NamedTuple

from .units import Latitude, Longitude


class GeoPoint(NamedTuple):
    lon: Longitude
    lat: Latitude


@dataclass(frozen=True, slots=True)
class TradeFlowRecord:
    """
    One directed trade relationship.

    Source and destination points, and the trade value. The value is
    carried for output collaborators only; curve generation never reads it.
    """

    source: GeoPoint
    dest: GeoPoint
    value: float = 0.0
    label: str | None = None

    def __post_init__(self):
        if not math.isfinite(self.value):
            raise ValueError("value must be a finite number")

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "TradeFlowRecord":
        """Build a record from a mapping with the trade-flow column names."""
        label = row.get("label") or None
        return cls(
            source=GeoPoint(
                lon=Longitude(float(row["source_longitude"])),
                lat=Latitude(float(row["source_latitude"])),
            ),
            dest=GeoPoint(
                lon=Longitude(float(row["dest_longitude"])),
                lat=Latitude(float(row["dest_latitude"])),
            ),
            value=float(row.get("value") or 0.0),
            label=label,
        )
