import asyncio
import argparse
import os
from pathlib import Path

from environs import Env

from trade_arcs.logging_config import setup_logging
from trade_arcs.application.orchestration import FlowMapService
from trade_arcs.application.services.interpolator import GreatCircleInterpolator
from trade_arcs.application.services.segments import FlowSegmentBuilder
from trade_arcs.domain.constants import DEFAULT_SAMPLE_COUNT, OUTPUT_DATA_DIR
from trade_arcs.domain.exceptions import FlowCurveException, TradeDataException
from trade_arcs.infrastructure.storage import CsvTradeFlowSource
from trade_arcs.infrastructure.output.formatters import (
    ConsoleOutputFormatter,
    JSONOutputFormatter,
)
from trade_arcs.infrastructure.visualization.plotter import FlowMapVisualizer


class AppDependencies:
    """Container for application dependencies."""

    def __init__(self, env: Env, args: argparse.Namespace):
        self.output_dir = env.str("OUTPUT_DATA_DIR", OUTPUT_DATA_DIR)
        sample_count = args.samples
        if sample_count is None:
            sample_count = env.int("SAMPLE_COUNT", DEFAULT_SAMPLE_COUNT)
        self.interpolator = GreatCircleInterpolator(sample_count=sample_count)
        self.builder = FlowSegmentBuilder(
            self.interpolator,
            fail_fast=args.fail_fast or env.bool("FAIL_FAST", False),
            max_workers=env.int("MAX_WORKERS", 1),
        )
        self.source = CsvTradeFlowSource(args.csv_path)
        self.output_formatter = ConsoleOutputFormatter()
        self.visualizer = FlowMapVisualizer(style="default")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Trade flow great-circle map")
    parser.add_argument(
        "csv_path",
        type=str,
        help="CSV with source_longitude, source_latitude, dest_longitude, dest_latitude, value",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=None,
        help="Interior samples per arc (default: SAMPLE_COUNT or 100)",
    )
    parser.add_argument(
        "--fail-fast",
        action="store_true",
        help="Stop at the first invalid record instead of skipping it",
    )
    parser.add_argument(
        "--save-json",
        action="store_true",
        help="Save GeoJSON segments to a file in the output_data directory",
    )
    parser.add_argument(
        "--no-plot",
        action="store_true",
        help="Skip drawing the map",
    )
    return parser.parse_args(argv)


async def run(args: argparse.Namespace, deps: AppDependencies) -> None:
    """Runs the flow-map workflow and handles output formatting."""
    name = Path(args.csv_path).stem
    orchestrator = FlowMapService(
        source=deps.source,
        builder=deps.builder,
        output_formatter=deps.output_formatter,
        visualizer=deps.visualizer,
    )

    result = await orchestrator.process(
        display_output=True,
        generate_plot=not args.no_plot,
        save_plot_path=os.path.join(deps.output_dir, f"{name}.png"),
    )

    if args.save_json:
        os.makedirs(deps.output_dir, exist_ok=True)
        json_output = JSONOutputFormatter().format_result(result)
        file_path = os.path.join(deps.output_dir, f"{name}.geojson")
        with open(file_path, "w") as f:
            f.write(json_output)
        print(f"✅ GeoJSON output saved to {file_path}")

    print(
        f"✅ Done! {len(result.batch)} segment(s) from {len(result.batch.curves)} record(s)"
    )


async def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    # Load environment variables as early as possible within main()
    env = Env()
    env.read_env(".env")

    # Setup logging ONLY AFTER environment variables are loaded
    setup_logging(env)

    try:
        deps = AppDependencies(env, args)
        await run(args, deps)
    except TradeDataException as e:
        print(f"Input Error: {e}")
    except (FlowCurveException, ValueError) as e:
        print(f"Error: {e}")
    except OSError as e:
        print(f"File Error: {e}")


def cli() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    cli()
