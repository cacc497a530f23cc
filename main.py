# main.py

"""Entry point for the EMMSA price tracker and Pantry basket CLI."""

import argparse
import logging
import sys
from datetime import date, datetime, timezone

from src.config.logging_config import setup_logging

logger = logging.getLogger("price_tracker.main")


def _parse_date(value: str) -> date:
    """argparse type for YYYY-MM-DD dates."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"invalid date {value!r}, expected YYYY-MM-DD"
        ) from None


def _today_utc() -> date:
    return datetime.now(timezone.utc).date()


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="price_tracker",
        description=(
            "Fetch EMMSA daily wholesale prices and store them in Pantry."
        ),
        epilog="Pantry modes read the API key from PANTRY_API_KEY.",
    )
    parser.add_argument(
        "-d",
        "--date",
        type=_parse_date,
        default=None,
        dest="target_date",
        help="Trading date as YYYY-MM-DD (default: today, UTC).",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        dest="output_path",
        help="Output JSON file (default: stdout).",
    )
    parser.add_argument(
        "--pantry",
        action="store_true",
        default=False,
        help="Also store the prices in the date's Pantry basket.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Echo debug logging to stderr.",
    )

    baskets = parser.add_mutually_exclusive_group()
    baskets.add_argument(
        "--list-baskets",
        action="store_true",
        default=False,
        dest="list_baskets",
        help="List all baskets in the pantry.",
    )
    baskets.add_argument(
        "--get-basket",
        metavar="NAME",
        default=None,
        dest="get_basket",
        help="Print a basket's JSON content (or write it to --output).",
    )
    baskets.add_argument(
        "--create-basket",
        metavar="NAME",
        default=None,
        dest="create_basket",
        help="Create an empty basket if it does not exist.",
    )
    baskets.add_argument(
        "--update-basket",
        metavar="NAME",
        default=None,
        dest="update_basket",
        help="Replace a basket's content with the --data JSON file.",
    )
    parser.add_argument(
        "--data",
        default=None,
        dest="data_path",
        help="JSON file to upload with --update-basket.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Route to a basket command or the default price fetch."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.update_basket is not None and args.data_path is None:
        parser.error("--update-basket requires --data")

    log_file = setup_logging(debug=args.debug)
    logger.info("price_tracker starting, log file: %s", log_file)

    from src.cli import runner

    if args.list_baskets:
        exit_code = runner.run_list_baskets()
    elif args.get_basket is not None:
        exit_code = runner.run_get_basket(args.get_basket, args.output_path)
    elif args.create_basket is not None:
        exit_code = runner.run_create_basket(args.create_basket)
    elif args.update_basket is not None:
        exit_code = runner.run_update_basket(
            args.update_basket, args.data_path
        )
    else:
        exit_code = runner.run_fetch(
            target_date=args.target_date or _today_utc(),
            output_path=args.output_path,
            enable_pantry=args.pantry,
        )

    logger.info("price_tracker finished with exit code %d", exit_code)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
