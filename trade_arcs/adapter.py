"""Facade adapter for simplified API integration."""

from pathlib import Path

from environs import Env

from trade_arcs.application.orchestration import FlowMapService
from trade_arcs.application.services.interpolator import GreatCircleInterpolator
from trade_arcs.application.services.segments import FlowSegmentBuilder
from trade_arcs.domain.constants import DEFAULT_SAMPLE_COUNT, OUTPUT_DATA_DIR
from trade_arcs.domain.models.coordinates import GeoPoint, TradeFlowRecord
from trade_arcs.domain.models.curves import SegmentBatch
from trade_arcs.domain.models.result import FlowMapResult
from trade_arcs.infrastructure.storage import CsvTradeFlowSource
from trade_arcs.infrastructure.visualization.plotter import FlowMapVisualizer


class TradeFlowMapAPI:
    """
    Simplified facade for external integration.

    Hides interpolator, builder and orchestration wiring behind
    plain function calls.
    """

    def __init__(
        self,
        sample_count: int = DEFAULT_SAMPLE_COUNT,
        fail_fast: bool = False,
        max_workers: int = 1,
        output_dir: str = OUTPUT_DATA_DIR,
    ):
        """
        Args:
            sample_count: Interior samples per arc
            fail_fast: Raise on the first bad record instead of collecting errors
            max_workers: Thread pool size for building curves
            output_dir: Where plots are written
        """
        self.interpolator = GreatCircleInterpolator(sample_count=sample_count)
        self.builder = FlowSegmentBuilder(
            self.interpolator, fail_fast=fail_fast, max_workers=max_workers
        )
        self.output_dir = Path(output_dir)
        self._visualizer = FlowMapVisualizer(style="default")

    @classmethod
    def create_from_env(cls, env: Env) -> "TradeFlowMapAPI":
        """
        Factory method: one-line initialization from environment.

        Example:
            >>> from environs import Env
            >>> env = Env()
            >>> env.read_env()
            >>> facade = TradeFlowMapAPI.create_from_env(env)
        """
        return cls(
            sample_count=env.int("SAMPLE_COUNT", DEFAULT_SAMPLE_COUNT),
            fail_fast=env.bool("FAIL_FAST", False),
            max_workers=env.int("MAX_WORKERS", 1),
            output_dir=env.str("OUTPUT_DATA_DIR", OUTPUT_DATA_DIR),
        )

    def curve(
        self, source: tuple[float, float], dest: tuple[float, float]
    ) -> list[list[tuple[float, float]]]:
        """
        Great-circle path between two (lon, lat) pairs as plain Python lists.

        Returns:
            One list of (lon, lat) tuples per drawable segment.
        """
        parts = self.interpolator.interpolate(GeoPoint(*source), GeoPoint(*dest))
        return [[(float(lon), float(lat)) for lon, lat in part] for part in parts]

    def segments(self, records: list[TradeFlowRecord]) -> SegmentBatch:
        """Labeled segments for in-memory records."""
        return self.builder.build(records)

    async def render(
        self, csv_path: str | Path, plot_name: str | None = None
    ) -> FlowMapResult:
        """
        Load a CSV of trade flows, build the curves and save the map as PNG.

        Args:
            csv_path: CSV file with the trade-flow columns
            plot_name: PNG file name without extension (default: the CSV stem)
        """
        csv_path = Path(csv_path)
        plot_path = self.output_dir / f"{plot_name or csv_path.stem}.png"

        orchestrator = FlowMapService(
            source=CsvTradeFlowSource(csv_path),
            builder=self.builder,
            visualizer=self._visualizer,
        )
        return await orchestrator.process(
            display_output=False,
            generate_plot=True,
            save_plot_path=str(plot_path),
        )
