"""Entry point for aranet: python -m aranet."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import yaml

from .app import AranetApp
from .config import load_config
from .exceptions import AranetError
from .models import AppConfig

DEFAULT_CONFIG_PATH = Path("aranet.yaml")


def setup_logging(verbose: bool) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.WARNING
    format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    # Reduce noise from libraries
    logging.getLogger("bleak").setLevel(logging.WARNING)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="aranet4",
        description="Read current measurements from an Aranet4 CO2 sensor",
    )

    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help=f"Path to configuration file (default: {DEFAULT_CONFIG_PATH} if present)",
    )

    parser.add_argument(
        "-a", "--address",
        default=None,
        help="Connect to this device address instead of the first Aranet4 found",
    )

    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        metavar="SECONDS",
        help="Seconds to scan for the device (default: 10)",
    )

    parser.add_argument(
        "-i", "--info",
        action="store_true",
        help="Also print manufacturer, model, serial and firmware",
    )

    parser.add_argument(
        "-w", "--watch",
        nargs="?",
        const=-1,
        type=int,
        default=None,
        metavar="INTERVAL",
        help=(
            "Keep reading. "
            "--watch alone = watch_interval from config, or read after each device measurement, "
            "--watch 0 = read after each device measurement, "
            "--watch 60 = read every 60 seconds"
        ),
    )

    parser.add_argument(
        "-n", "--count",
        type=int,
        default=None,
        help="Stop watching after this many readings",
    )

    parser.add_argument(
        "-o", "--output",
        default=None,
        metavar="FILE",
        help="Write a plain-text report (one value per line) to FILE",
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print JSON instead of a table",
    )

    parser.add_argument(
        "--demo",
        action="store_true",
        help="Use a simulated device (no Bluetooth needed)",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args(argv)
    if args.count is not None and args.count < 1:
        parser.error("--count must be at least 1")
    return args


def build_config(args: argparse.Namespace) -> AppConfig:
    """Load the configuration file and apply command line overrides."""
    if args.config is not None:
        config = load_config(args.config.resolve())
    elif DEFAULT_CONFIG_PATH.exists():
        config = load_config(DEFAULT_CONFIG_PATH.resolve())
    else:
        config = AppConfig()

    if args.address:
        config.device.address = args.address.upper()
    if args.timeout is not None:
        config.device.scan_timeout = args.timeout
    if args.watch is not None and args.watch >= 0:
        config.watch_interval = args.watch
    if args.output:
        config.output = args.output
    return config


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(args.verbose)

    logger = logging.getLogger(__name__)

    try:
        config = build_config(args)
    except (FileNotFoundError, yaml.YAMLError) as e:
        logger.error("Invalid configuration: %s", e)
        return 1

    watch = args.watch is not None or args.count is not None

    try:
        app = AranetApp(
            config,
            show_info=args.info,
            json_output=args.json,
            watch=watch,
            count=args.count,
            demo=args.demo,
        )
        asyncio.run(app.run())
        return 0
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 0
    except AranetError as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
