"""
Thingful search from the command line.

Runs a text + bounding box search against the Thingful API and prints the
found things as JSON.
"""

import argparse
import asyncio
import logging
import os
import sys
from typing import Any, Dict, List, Optional

from internal.config.manager import ConfigManager
from lib.logging_utils import initLogging
from lib.thingful import BoundingBox, Thing, ThingfulClient, ThingfulError, createClient
from lib.utils import jsonDumps

# Configure basic logging first
logging.basicConfig(format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", level=logging.INFO)
# set higher logging level for httpx to avoid all GET requests being logged
logging.getLogger("httpx").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def parse_arguments(argv: List[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Search the Thingful API for things inside a bounding box, dood!")
    parser.add_argument(
        "-c",
        "--config",
        default="config.toml",
        help="Path to configuration file (default: config.toml)",
    )
    parser.add_argument(
        "--config-dir",
        action="append",
        help="Directory to search for .toml config files recursively (can be specified multiple times)",
    )
    parser.add_argument("-q", "--query", help="Full text search query")
    parser.add_argument(
        "--bounds",
        nargs=4,
        type=float,
        metavar=("MIN_LAT", "MAX_LAT", "MIN_LON", "MAX_LON"),
        help="Search bounding box",
    )
    parser.add_argument("--limit", type=int, help="Things per page (overrides config)")
    parser.add_argument(
        "--pages",
        type=int,
        default=1,
        help="Number of pages to fetch (default: 1)",
    )
    parser.add_argument(
        "--amount",
        type=int,
        help="Page one thing at a time until this many things are collected",
    )
    parser.add_argument("--unit", help="Channel unit to look for together with --amount")
    parser.add_argument(
        "--filter-by-unit",
        action="store_true",
        help="With --amount, only count things having a channel in --unit",
    )
    parser.add_argument(
        "--print-config",
        action="store_true",
        help="Pretty-print loaded configuration and exit",
    )
    args = parser.parse_args(argv)

    args.config = os.path.abspath(args.config)
    if args.config_dir:
        args.config_dir = [os.path.abspath(dirPath) for dirPath in args.config_dir]

    if not args.print_config and (args.query is None or args.bounds is None):
        parser.error("--query and --bounds are required")
    if args.pages < 1:
        parser.error("--pages must be at least 1")

    return args


def boundsFromArgs(values: List[float]) -> BoundingBox:
    minLat, maxLat, minLon, maxLon = values
    return {"minLat": minLat, "maxLat": maxLat, "minLon": minLon, "maxLon": maxLon}


async def runSearch(client: ThingfulClient, args: argparse.Namespace) -> List[Thing]:
    """Run the search described by the arguments and return the found things."""
    bounds = boundsFromArgs(args.bounds)

    if args.amount is not None:
        await client.nextPageUntilAmount(
            args.amount,
            query=args.query,
            bounds=bounds,
            unit=args.unit,
            filterByUnit=args.filter_by_unit,
        )
        return client.things

    await client.query(args.query, bounds)
    things = list(client.things)

    for _ in range(args.pages - 1):
        if client.nextPage is None:
            logger.info("No more pages")
            break
        await client.next()
        things.extend(client.things)

    return things


def loadConfig(args: argparse.Namespace) -> Optional[ConfigManager]:
    if not os.path.exists(args.config) and not args.config_dir:
        logger.info(f"No configuration at {args.config}, using defaults")
        return None
    return ConfigManager(args.config, args.config_dir)


def main(argv: List[str] | None = None) -> None:
    """Main entry point."""
    args = parse_arguments(argv)
    configManager = loadConfig(args)

    if args.print_config:
        print(jsonDumps(configManager.config if configManager else {}, indent=2))
        sys.exit(0)

    thingfulConfig: Dict[str, Any] = {}
    loggingConfig: Dict[str, Any] = {}
    if configManager is not None:
        thingfulConfig = configManager.getThingfulConfig()
        loggingConfig = configManager.getLoggingConfig()

    initLogging(loggingConfig)

    client = createClient(thingfulConfig)
    if args.limit is not None:
        client.limit = args.limit

    try:
        things = asyncio.run(runSearch(client, args))
    except ThingfulError as e:
        logger.error(f"Search failed: {type(e).__name__}: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Search stopped by user")
        sys.exit(130)

    logger.info(f"Found {len(things)} things")
    print(jsonDumps(things, indent=2))


if __name__ == "__main__":
    main()
