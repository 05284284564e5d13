#!/usr/bin/env python3
"""CLI for Table service management tasks.

Usage:
    python -m cli <command>

Commands:
    create-schema   Create database tables from the model metadata
    list            Print one page of Tables as JSON
"""

import argparse
import asyncio
import sys

from core.config import get_settings
from core.database import (
    create_engine,
    create_schema,
    create_session_maker,
    dispose_engine,
    session_scope,
)
from core.logger import configure_logging, get_logger
from core.pagination import DEFAULT_PAGE_INDEX, DEFAULT_PAGE_SIZE, PageRequest
from services.tables_service import find_all_tables

logger = get_logger(__name__)


async def _create_schema() -> None:
    engine = create_engine()
    try:
        await create_schema(engine)
    finally:
        await dispose_engine(engine)


async def _list_tables(page: PageRequest) -> str:
    engine = create_engine()
    try:
        session_maker = create_session_maker(engine)
        async with session_scope(session_maker, read_only=True) as db:
            result = await find_all_tables(db, page)
    finally:
        await dispose_engine(engine)
    return result.model_dump_json(indent=2)


def cmd_create_schema() -> int:
    """Create database tables."""
    # Strip credentials from the URL before logging
    database = get_settings().database_url.split("@")[-1]
    logger.info("cli.create_schema.start", database=database)
    asyncio.run(_create_schema())
    logger.info("cli.create_schema.complete")
    return 0


def cmd_list(page: int, size: int) -> int:
    """Print a page of Tables; invalid page/size fall back to the defaults."""
    output = asyncio.run(_list_tables(PageRequest(index=page, size=size)))
    print(output)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Table service CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser(
        "create-schema",
        help="Create database tables from the model metadata",
    )
    list_parser = subparsers.add_parser("list", help="Print one page of Tables")
    list_parser.add_argument("--page", type=int, default=DEFAULT_PAGE_INDEX)
    list_parser.add_argument("--size", type=int, default=DEFAULT_PAGE_SIZE)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    configure_logging(get_settings().service_name)

    if args.command == "create-schema":
        return cmd_create_schema()
    return cmd_list(args.page, args.size)


if __name__ == "__main__":
    sys.exit(main())
