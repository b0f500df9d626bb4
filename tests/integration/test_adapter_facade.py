"""
Integration tests for the TradeFlowMapAPI.

These tests run the whole pipeline from a CSV file to a saved map,
with the real interpolator, builder and matplotlib (Agg backend).
"""

import json

import matplotlib

matplotlib.use("Agg")

import pytest
from environs import Env

from trade_arcs.adapter import TradeFlowMapAPI
from trade_arcs.domain.models.coordinates import GeoPoint, TradeFlowRecord
from trade_arcs.infrastructure.output.formatters import JSONOutputFormatter

FLOWS_CSV = """source_longitude,source_latitude,dest_longitude,dest_latitude,value,label
121.47,31.23,-118.24,34.05,1520.5,Shanghai-Los Angeles
-73.94,40.67,2.35,48.86,830,New York-Paris
151.21,-33.87,-70.65,-33.45,212.25,Sydney-Santiago
0,0,180,0,1,antipodal
"""


@pytest.fixture
def trade_flow_api(tmp_path):
    return TradeFlowMapAPI(sample_count=40, output_dir=str(tmp_path / "maps"))


@pytest.fixture
def flows_csv(tmp_path):
    path = tmp_path / "flows.csv"
    path.write_text(FLOWS_CSV)
    return path


@pytest.mark.asyncio
class TestAdapterFacade:
    """Test suite for the TradeFlowMapAPI."""

    async def test_render_saves_map(self, trade_flow_api, flows_csv, tmp_path):
        result = await trade_flow_api.render(flows_csv)

        assert (tmp_path / "maps" / "flows.png").exists()
        assert result.metadata["plot_path"] == str(tmp_path / "maps" / "flows.png")
        assert len(result.records) == 4
        assert [e.record_index for e in result.batch.errors] == [3]
        assert result.crossing_count == 2

    async def test_render_custom_plot_name(self, trade_flow_api, flows_csv, tmp_path):
        await trade_flow_api.render(str(flows_csv), plot_name="pacific")
        assert (tmp_path / "maps" / "pacific.png").exists()

    async def test_geojson_of_rendered_result(self, trade_flow_api, flows_csv):
        result = await trade_flow_api.render(flows_csv)
        data = json.loads(JSONOutputFormatter().format_result(result))

        ids = [feature["properties"]["segment_id"] for feature in data["features"]]
        assert ids == ["0-1", "0-2", "1", "2-1", "2-2"]
        assert data["features"][2]["properties"]["label"] == "New York-Paris"
        for feature in data["features"]:
            lons = [lon for lon, _ in feature["geometry"]["coordinates"]]
            assert all(abs(b - a) < 180.0 for a, b in zip(lons, lons[1:]))
        assert data["errors"][0]["record_index"] == 3


class TestFacadeInMemory:
    def test_curve_returns_plain_lists(self):
        api = TradeFlowMapAPI(sample_count=10)
        parts = api.curve((170.0, 0.0), (-170.0, 0.0))

        assert len(parts) == 2
        assert isinstance(parts[0], list)
        assert parts[0][0] == (170.0, 0.0)
        assert parts[-1][-1] == (-170.0, 0.0)
        assert all(isinstance(lon, float) for lon, _ in parts[0])

    def test_segments(self):
        api = TradeFlowMapAPI(sample_count=10)
        batch = api.segments(
            [
                TradeFlowRecord(GeoPoint(0.0, 0.0), GeoPoint(10.0, 10.0)),
                TradeFlowRecord(GeoPoint(170.0, 0.0), GeoPoint(-170.0, 0.0)),
            ]
        )
        assert batch.segment_ids() == ["0", "1-1", "1-2"]

    def test_create_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("SAMPLE_COUNT", "25")
        monkeypatch.setenv("FAIL_FAST", "true")
        monkeypatch.setenv("MAX_WORKERS", "3")
        monkeypatch.setenv("OUTPUT_DATA_DIR", str(tmp_path))

        api = TradeFlowMapAPI.create_from_env(Env())

        assert api.interpolator.sample_count == 25
        assert api.builder.fail_fast is True
        assert api.builder.max_workers == 3
        assert api.output_dir == tmp_path
