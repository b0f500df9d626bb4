"""Flow map visualization service (separated from curve generation)"""

import os
from typing import Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np

from trade_arcs.domain.models.coordinates import TradeFlowRecord
from trade_arcs.domain.models.curves import SegmentBatch


class FlowMapVisualizer:
    """
    Service for drawing trade-flow curves on a longitude/latitude canvas.

    Separated from curve generation to allow:
    - Testing interpolation without matplotlib
    - Running batch builds in headless environments (servers, CI)

    Every segment is drawn with its own plot call, so points with different
    segment ids are never connected. Origins and destinations get markers.
    The background is a plain graticule; base map tiles are not drawn.
    """

    def __init__(self, style: str = "default", color: str = "crimson"):
        """
        Initialize visualizer.

        Args:
            style: Matplotlib style (default, seaborn, ggplot, etc.)
            color: Line color for the flow curves
        """
        self.style = style
        self.color = color
        if style != "default":
            plt.style.use(style)

    def plot_flows(
        self,
        batch: SegmentBatch,
        records: Sequence[TradeFlowRecord],
        show: bool = True,
        save_path: Optional[str] = None,
        title: str = "Trade Flows",
    ) -> None:
        """
        Draw every segment of the batch plus origin and destination markers.

        Args:
            batch: Labeled segments from FlowSegmentBuilder
            records: The records the batch was built from (for the markers)
            show: Whether to display plot interactively
            save_path: Optional path to save figure
            title: Figure title
        """
        fig, ax = plt.subplots(figsize=(19.20, 10.8))

        for segment in batch.segments:
            ax.plot(
                segment.lons,
                segment.lats,
                color=self.color,
                linewidth=1.0,
                alpha=0.7,
                solid_capstyle="round",
            )

        curved = sorted({curve.record_index for curve in batch.curves})
        if curved:
            sources = np.array([records[i].source for i in curved], dtype=np.float64)
            dests = np.array([records[i].dest for i in curved], dtype=np.float64)
            ax.scatter(
                sources[:, 0],
                sources[:, 1],
                c="navy",
                s=30,
                marker="o",
                label="Origin",
                edgecolors="black",
                linewidths=0.5,
                zorder=5,
            )
            ax.scatter(
                dests[:, 0],
                dests[:, 1],
                c="goldenrod",
                s=40,
                marker="^",
                label="Destination",
                edgecolors="black",
                linewidths=0.5,
                zorder=5,
            )
            ax.legend(loc="lower left", fontsize=9)

        ax.set_xlim(-180, 180)
        ax.set_ylim(-90, 90)
        ax.set_xticks(np.arange(-180, 181, 30))
        ax.set_yticks(np.arange(-90, 91, 30))
        ax.set_aspect("equal")
        ax.grid(True, linestyle=":", alpha=0.6)
        ax.set_title(title, fontsize=12, fontweight="bold")
        ax.set_xlabel("Longitude (°)", fontsize=10)
        ax.set_ylabel("Latitude (°)", fontsize=10)

        if batch.errors:
            ax.text(
                0.99,
                0.01,
                f"{len(batch.errors)} record(s) skipped",
                transform=ax.transAxes,
                ha="right",
                va="bottom",
                fontsize=9,
                bbox=dict(boxstyle="round", facecolor="wheat", alpha=0.5),
            )

        fig.tight_layout()

        if save_path:
            output_dir = os.path.dirname(save_path)
            if output_dir:
                os.makedirs(output_dir, exist_ok=True)
            fig.savefig(save_path, dpi=150, facecolor="white")

        if show:
            plt.show()
        else:
            plt.close(fig)
