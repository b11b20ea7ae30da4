"""
Liftoff Telemetry Replay - CLI

Runs both simulation passes on a telemetry file and renders the plots.
"""

import argparse
import logging
import os
import sys
from dataclasses import replace

from .config import create_default_config
from .main import print_summary, run_mission
from .plotting import generate_all_plots

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Liftoff telemetry replay and rocket model",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument(
        "--telemetry", "-t",
        type=str,
        default=create_default_config().telemetry_path,
        help="Telemetry file (one JSON object per line)"
    )
    parser.add_argument(
        "--output-dir", "-o",
        type=str,
        default="plots",
        help="Directory to save output plots"
    )
    parser.add_argument(
        "--duration",
        type=float,
        default=None,
        help="Rocket model duration in seconds"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress verbose output"
    )
    parser.add_argument(
        "--no-plots",
        action="store_true",
        help="Skip plot generation"
    )
    return parser.parse_args(argv)


def main(argv=None):
    """Main execution flow."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.WARNING if args.quiet else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    config = replace(create_default_config(),
                     telemetry_path=args.telemetry,
                     verbose=not args.quiet)
    if args.duration is not None:
        config = replace(config, sim_duration=args.duration)

    try:
        logger.info(f"Replaying telemetry from {config.telemetry_path}")
        result = run_mission(config)

        if config.verbose:
            print_summary(result)

        if not args.no_plots:
            if os.path.isabs(args.output_dir):
                plot_dir = args.output_dir
            else:
                plot_dir = os.path.join(os.getcwd(), args.output_dir)
            logger.info(f"Generating plots in {plot_dir}")
            generate_all_plots(result, plot_dir)

    except Exception as e:
        logger.error(f"Simulation failed: {e}", exc_info=True)
        print(f"\n[ERROR] Simulation failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
