"""Orchestration service (coordinates workflow with dependency injection)"""

from typing import Optional

from trade_arcs.application.services.base import BaseTradeFlowSource
from trade_arcs.application.services.segments import FlowSegmentBuilder
from trade_arcs.domain.models.result import FlowMapResult
from trade_arcs.infrastructure.output.formatters import OutputFormatter
from trade_arcs.infrastructure.visualization.plotter import FlowMapVisualizer
from trade_arcs.logging_config import get_logger

logger = get_logger(__name__)


class FlowMapService:
    """
    Coordinates the complete flow-map workflow.

    Uses dependency injection to decouple components and enable testing.
    All I/O dependencies (record source, formatters, visualizers) are injected.
    """

    def __init__(
        self,
        source: BaseTradeFlowSource,
        builder: FlowSegmentBuilder,
        output_formatter: Optional[OutputFormatter] = None,
        visualizer: Optional[FlowMapVisualizer] = None,
    ):
        """
        Initialize orchestration service with injected dependencies.

        Args:
            source: Where the trade-flow records come from
            builder: Turns records into labeled segments
            output_formatter: Optional formatter for console output
            visualizer: Optional visualizer for the flow map
        """
        self.source = source
        self.builder = builder
        self.output_formatter = output_formatter
        self.visualizer = visualizer

    async def process(
        self,
        display_output: bool = True,
        generate_plot: bool = True,
        save_plot_path: Optional[str] = None,
    ) -> FlowMapResult:
        """
        Execute complete flow-map workflow.

        Steps:
        1. Load trade-flow records
        2. Build labeled segments (pure calculation, no side effects)
        3. Format output (if formatter provided)
        4. Draw the map (if visualizer provided)

        Args:
            display_output: Whether to print results
            generate_plot: Whether to generate plot
            save_plot_path: Optional path to save the plot

        Returns:
            FlowMapResult: Records and segments (pure data)
        """
        records = await self.source.load()
        batch = self.builder.build(records)

        sample_count = self.builder.sample_count
        if sample_count is None:
            sample_count = getattr(self.builder.interpolator, "sample_count", None)

        plotted = generate_plot and self.visualizer is not None
        result = FlowMapResult(
            records=records,
            batch=batch,
            metadata={
                "sample_count": sample_count,
                "plot_path": save_plot_path if plotted else None,
            },
        )

        if display_output and self.output_formatter:
            self.output_formatter.format_result(result)

        if plotted:
            logger.info(f"Drawing {len(batch)} segment(s)")
            self.visualizer.plot_flows(
                batch,
                records,
                save_path=save_plot_path,
                show=save_plot_path is None,
            )

        return result
