"""Test output formatting (console display and GeoJSON)"""

import json

import pytest

from trade_arcs.application.services.interpolator import GreatCircleInterpolator
from trade_arcs.application.services.segments import FlowSegmentBuilder
from trade_arcs.domain.models.coordinates import GeoPoint, TradeFlowRecord
from trade_arcs.domain.models.result import FlowMapResult
from trade_arcs.infrastructure.output.formatters import (
    ConsoleOutputFormatter,
    JSONOutputFormatter,
)


@pytest.fixture
def sample_result():
    records = [
        TradeFlowRecord(GeoPoint(-73.94, 40.67), GeoPoint(2.35, 48.86), 830.0, "USA->FRA"),
        TradeFlowRecord(GeoPoint(121.47, 31.23), GeoPoint(-118.24, 34.05), 1520.5),
        TradeFlowRecord(GeoPoint(0.0, 99.0), GeoPoint(0.0, 0.0), 1.0),
    ]
    batch = FlowSegmentBuilder(GreatCircleInterpolator(sample_count=10)).build(records)
    return FlowMapResult(
        records, batch, {"sample_count": 10, "plot_path": "output_data/flows.png"}
    )


class TestJSONOutputFormatter:
    def test_feature_per_segment(self, sample_result):
        data = json.loads(JSONOutputFormatter().format_result(sample_result))

        assert data["type"] == "FeatureCollection"
        ids = [f["properties"]["segment_id"] for f in data["features"]]
        assert ids == ["0", "1-1", "1-2"]
        assert all(f["geometry"]["type"] == "LineString" for f in data["features"])

    def test_properties_carry_value_and_label(self, sample_result):
        data = json.loads(JSONOutputFormatter().format_result(sample_result))
        first, second, _ = data["features"]

        assert first["properties"] == {
            "segment_id": "0",
            "record_index": 0,
            "value": 830.0,
            "label": "USA->FRA",
        }
        assert "label" not in second["properties"]
        assert second["properties"]["value"] == 1520.5

    def test_coordinates_are_rounded(self, sample_result):
        data = json.loads(JSONOutputFormatter(precision=2).format_result(sample_result))
        coords = data["features"][0]["geometry"]["coordinates"]
        assert coords[0] == [-73.94, 40.67]
        assert all(round(v, 2) == v for point in coords for v in point)

    def test_errors_are_listed(self, sample_result):
        data = json.loads(JSONOutputFormatter().format_result(sample_result))
        assert data["errors"][0]["record_index"] == 2
        assert data["errors"][0]["type"] == "InvalidCoordinateException"


class TestConsoleOutputFormatter:
    def test_summary(self, sample_result, capsys):
        ConsoleOutputFormatter().format_result(sample_result)
        output = capsys.readouterr().out

        assert "Trade Flow Curves" in output
        assert "Total segments:          3" in output
        assert "Antimeridian crossings:  1" in output
        assert "Samples per arc:         10" in output
        assert "#2:" in output
        assert "output_data/flows.png" in output

    def test_summary_without_errors_or_plot(self, capsys):
        result = FlowMapResult([], FlowSegmentBuilder().build([]))
        ConsoleOutputFormatter().format_result(result)
        output = capsys.readouterr().out

        assert "Failed records" not in output
        assert "Map saved" not in output
