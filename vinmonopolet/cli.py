"""Command-line interface for the crawler."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence, TextIO, Tuple

import requests  # type: ignore[import-untyped]

from vinmonopolet.csv_utils import Record, write_csv, write_json
from vinmonopolet.errors import VinmonopoletError
from vinmonopolet.fetcher import create_session
from vinmonopolet.logging_config import get_logger, setup_logging
from vinmonopolet.scraper import (
    get_categories,
    get_product_details,
    get_products_by_category,
    get_products_by_filters,
)

__all__ = ["main", "parse_args", "parse_filter", "run"]

logger = get_logger("cli")


def parse_filter(value: str) -> Tuple[int, str]:
    """Parse an ID=VALUE filter argument, e.g. '25=Rødvin'."""
    filter_id, sep, filter_value = value.partition("=")
    if not sep or not filter_value.strip():
        raise argparse.ArgumentTypeError(f"Expected ID=VALUE, got: {value!r}")
    if "," in filter_value:
        raise argparse.ArgumentTypeError(f"Filter value must not contain a comma, got: {filter_value!r}")
    try:
        return int(filter_id), filter_value.strip()
    except ValueError:
        raise argparse.ArgumentTypeError(f"Filter id must be a number, got: {filter_id!r}")


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="vinmonopolet",
        description="Vinmonopolet catalog crawler: categories, product listings and product details",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List product categories with item counts
  python -m vinmonopolet.cli categories

  # All non-alcoholic products as CSV
  python -m vinmonopolet.cli products --filter 25=Alkoholfritt --format csv --output data/alkoholfritt.csv

  # Products of a category by its title
  python -m vinmonopolet.cli products --category Rødvin

  # Full details for one product
  python -m vinmonopolet.cli product 9351702
        """,
    )

    parser.add_argument(
        "--format",
        choices=["json", "csv"],
        default="json",
        help="Output format (default: json)",
    )
    parser.add_argument(
        "--output",
        metavar="PATH",
        help="Write output to this file instead of stdout",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show debug logging on the console",
    )
    parser.add_argument(
        "--no-log-file",
        action="store_true",
        help="Don't write the JSONL crawl log",
    )
    parser.add_argument(
        "--log-dir",
        type=Path,
        help="Directory for the JSONL crawl log (default: logs/)",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("categories", help="List product categories")

    products = commands.add_parser("products", help="List all products matching filters")
    selection = products.add_mutually_exclusive_group(required=True)
    selection.add_argument(
        "--filter",
        dest="filters",
        metavar="ID=VALUE",
        type=parse_filter,
        action="append",
        help="Search filter, may be repeated (e.g. 25=Alkoholfritt)",
    )
    selection.add_argument(
        "--category",
        metavar="TITLE",
        help="Category title as listed by the 'categories' command",
    )

    product = commands.add_parser("product", help="Show details for one product")
    product.add_argument("sku", type=int, help="Product number (sku)")

    return parser.parse_args(argv)


def _products_for_category(title: str, session: requests.Session) -> List[Record]:
    categories = get_categories(session=session)
    for category in categories:
        if category.title.casefold() == title.casefold():
            return list(get_products_by_category(category, session=session))

    available = ", ".join(c.title for c in categories)
    raise VinmonopoletError(f"Unknown category '{title}'. Available: {available}")


def run(args: argparse.Namespace, session: requests.Session) -> List[Record]:
    """Execute the selected command and return the records to output."""
    if args.command == "categories":
        return list(get_categories(session=session))

    if args.command == "products":
        if args.category:
            return _products_for_category(args.category, session)
        filters: Dict[int, str] = dict(args.filters)
        return list(get_products_by_filters(filters, session=session))

    return [get_product_details(args.sku, session=session)]


def _write(records: List[Record], fmt: str, stream: TextIO) -> int:
    if fmt == "csv":
        return write_csv(records, stream)
    return write_json(records, stream)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for CLI."""
    args = parse_args(argv)
    setup_logging(
        level=logging.DEBUG if args.verbose else logging.INFO,
        log_to_file=not args.no_log_file,
        log_dir=args.log_dir,
    )

    session = create_session()
    try:
        records = run(args, session)
    except VinmonopoletError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        session.close()

    if args.output:
        Path(args.output).parent.mkdir(parents=True, exist_ok=True)
        with open(args.output, "w", newline="", encoding="utf-8") as f:
            count = _write(records, args.format, f)
        logger.info(f"Wrote {count} records to {args.output}")
    else:
        _write(records, args.format, sys.stdout)

    return 0


if __name__ == "__main__":
    sys.exit(main())
