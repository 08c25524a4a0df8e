"""Main entry point for grid_planner.

Usage:
    python -m grid_planner.main --config conf/grid_planner.yaml
    python -m grid_planner.main -c conf/grid_planner.yaml --output reports --debug
"""

import argparse
import logging
import sys

from grid_planner.config import load_config
from grid_planner.planner import evaluate_plans
from grid_planner.reporter import print_console, save_json


def setup_logging(debug: bool = False) -> None:
    """Set up logging with console output."""
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.DEBUG if debug else logging.INFO)
    console_formatter = logging.Formatter(
        "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_handler.setFormatter(console_formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if debug else logging.INFO)
    root_logger.addHandler(console_handler)


logger = logging.getLogger(__name__)


def main(config_path: str = None, output_dir: str = "output", save: bool = True, debug: bool = False) -> int:
    """Main entry point.

    Args:
        config_path: Path to YAML config file
        output_dir: Directory for JSON output
        save: Write JSON results to output_dir
        debug: Enable debug logging

    Returns:
        Exit code: 0 if every plan is accepted, 1 on config errors or rejections
    """
    setup_logging(debug=debug)

    try:
        config = load_config(config_path)
        logger.info(f"Loaded config with {len(config.plans)} plans")
    except FileNotFoundError as e:
        logger.error(f"Config file not found: {e}")
        return 1
    except Exception as e:
        logger.error(f"Config error: {e}")
        return 1

    outcomes = evaluate_plans(config)

    print_console(outcomes)
    if save:
        save_json(outcomes, output_dir)

    return 0 if all(o.accepted for o in outcomes) else 1


def cli() -> None:
    """Command-line interface entry point."""
    parser = argparse.ArgumentParser(
        description="Grid Planner: size futures grids and estimate liquidation before committing capital",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to YAML config file (default: conf/grid_planner.yaml)",
    )
    parser.add_argument(
        "--output", "-o",
        type=str,
        default="output",
        help="Output directory for JSON results (default: output/)",
    )
    parser.add_argument(
        "--no-save",
        action="store_true",
        help="Print results without writing JSON",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()

    try:
        exit_code = main(
            config_path=args.config,
            output_dir=args.output,
            save=not args.no_save,
            debug=args.debug,
        )
        sys.exit(exit_code)
    except KeyboardInterrupt:
        logger.info("Interrupted")
        sys.exit(130)


if __name__ == "__main__":
    cli()
