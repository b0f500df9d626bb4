"""Output formatting services for console display and JSON export."""

import json
from typing import Any, Protocol

from trade_arcs.domain.models.result import FlowMapResult


def _round_points(points: list[list[float]], precision: int) -> list[list[float]]:
    return [[round(lon, precision), round(lat, precision)] for lon, lat in points]


def _build_feature_collection(result: FlowMapResult, precision: int) -> dict[str, Any]:
    """
    GeoJSON FeatureCollection with one LineString per segment.

    Segments of a split record are separate features with their own
    segment_id, so GeoJSON consumers never join them across the antimeridian.
    """
    features = []
    for segment in result.batch.segments:
        record = result.records[segment.record_index]
        properties: dict[str, Any] = {
            "segment_id": segment.segment_id,
            "record_index": segment.record_index,
            "value": record.value,
        }
        if record.label:
            properties["label"] = record.label
        features.append(
            {
                "type": "Feature",
                "geometry": {
                    "type": "LineString",
                    "coordinates": _round_points(segment.points.tolist(), precision),
                },
                "properties": properties,
            }
        )

    return {
        "type": "FeatureCollection",
        "features": features,
        "errors": [
            {
                "record_index": error.record_index,
                "type": type(error.error).__name__,
                "message": str(error.error),
            }
            for error in result.batch.errors
        ],
    }


class OutputFormatter(Protocol):
    """Protocol for output formatting strategies"""

    def format_result(self, result: FlowMapResult) -> Any:
        """Format and display a flow-map result"""
        ...


class ConsoleOutputFormatter:
    """Format flow-map results for console output"""

    def format_result(self, result: FlowMapResult) -> None:
        batch = result.batch

        print(f"\n{'=' * 60}")
        print("Trade Flow Curves")
        print(f"{'=' * 60}")

        print("\n📦 Records:")
        print(f"  Loaded:                  {len(result.records)}")
        print(f"  Curved:                  {len(batch.curves)}")
        print(f"  Failed:                  {len(batch.errors)}")

        print("\n🌍 Segments:")
        print(f"  Total segments:          {len(batch)}")
        print(f"  Antimeridian crossings:  {result.crossing_count}")
        if "sample_count" in result.metadata:
            print(f"  Samples per arc:         {result.metadata['sample_count']}")

        if batch.errors:
            print("\n⚠️  Failed records:")
            for error in batch.errors:
                print(f"  #{error.record_index}: {error.error}")

        if result.metadata.get("plot_path"):
            print(f"\n🗺️  Map saved to {result.metadata['plot_path']}")

        print(f"{'=' * 60}\n")


class JSONOutputFormatter:
    """Format flow-map results as GeoJSON (for API/automation)"""

    def __init__(self, precision: int = 6):
        self.precision = precision

    def format_result(self, result: FlowMapResult) -> str:
        return json.dumps(_build_feature_collection(result, self.precision), indent=2)
