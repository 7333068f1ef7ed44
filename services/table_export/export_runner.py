"""Export runner entry point.

Writes a complete CSV export of one dashboard table, swept page by page
through the same view model the dashboard uses.

Usage:
    python -m services.table_export.export_runner users work_area=Pune --output exports
"""

import argparse
import asyncio
import sys

from shared.clients.backend.BackendClientManager import BackendClientManager
from shared.helper.HelperConfig import HelperConfig
from shared.logging.logging_setup import setup_logging
from shared.models.errors import BackendError
from services.table_export.ExportService import ExportService


def parse_filters(pairs: list[str]) -> dict[str, str]:
    """Turn ["key=value", ...] into a filter dict.

    Raises:
        ValueError: If an argument is not of the form key=value.
    """
    filters: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"Filter '{pair}' must be of the form key=value")
        filters[key.strip()] = value
    return filters


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Export a dashboard table to CSV.")
    parser.add_argument("table", help="Table to export (users, earnings).")
    parser.add_argument("filters", nargs="*", help="Filters as key=value, e.g. work_area=Pune.")
    parser.add_argument("--output", default="exports", help="Directory the CSV file is written to.")
    return parser


async def main(argv: list[str] | None = None) -> int:
    """Run a single export."""
    args = build_parser().parse_args(argv)
    logger = setup_logging()
    config = HelperConfig(logger=logger)

    backend_client = BackendClientManager(helper_config=config).get_client()
    export_service = ExportService(helper_config=config, backend_client=backend_client)

    try:
        await backend_client.boot()
        await export_service.do_export(args.table, parse_filters(args.filters), args.output)
    except (BackendError, ValueError) as e:
        logger.error("Export failed: %s", e)
        return 1
    finally:
        await backend_client.close()
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
