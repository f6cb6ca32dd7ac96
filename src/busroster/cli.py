"""Command line front end for the bus roster.

Examples:
  BUSROSTER_BASE_URL=http://localhost:3000 busroster list --search express
  busroster --base-url http://localhost:3000 add --number B1 --type Deluxe \
    --capacity 52 --last 2024-01-01 --next 2024-06-01
  busroster --base-url http://localhost:3000 edit 3 --capacity 48
  busroster --base-url http://localhost:3000 delete 3

Every command loads the list first and prints the resulting screen.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from collections.abc import Sequence
from typing import Any

import aiohttp

from .client import Client
from .const import BUS_TYPES
from .exceptions import ValidationError
from .roster import BusRoster
from .view import render

_LOGGER = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="busroster", description="Manage the bus fleet.")
    parser.add_argument("--base-url", dest="base_url", help="API base URL.")
    parser.add_argument("--api-uri", dest="api_uri", help="Optional API URI prefix.")
    parser.add_argument(
        "--timeout",
        dest="timeout",
        type=float,
        default=30.0,
        help="Total request timeout in seconds.",
    )
    parser.add_argument(
        "--retries",
        dest="retry_count",
        type=int,
        default=0,
        help="Retries for failed list requests.",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="Show the bus list.")
    list_parser.add_argument("--search", dest="search", default="", help="Filter term.")

    add_parser = subparsers.add_parser("add", help="Add a new bus.")
    add_parser.add_argument("--number", dest="bus_number", required=True, help="Bus number.")
    add_parser.add_argument("--type", dest="type", choices=BUS_TYPES, help="Bus type.")
    add_parser.add_argument("--capacity", dest="capacity", type=int, help="Passenger capacity.")
    add_parser.add_argument(
        "--last",
        dest="last_maintenance",
        required=True,
        help="Last maintenance date (YYYY-MM-DD).",
    )
    add_parser.add_argument(
        "--next",
        dest="next_maintenance",
        required=True,
        help="Next maintenance date (YYYY-MM-DD).",
    )

    edit_parser = subparsers.add_parser("edit", help="Update an existing bus.")
    edit_parser.add_argument("bus_id", type=int, help="Bus id.")
    edit_parser.add_argument("--number", dest="bus_number", help="Bus number.")
    edit_parser.add_argument("--type", dest="type", choices=BUS_TYPES, help="Bus type.")
    edit_parser.add_argument("--capacity", dest="capacity", type=int, help="Passenger capacity.")
    edit_parser.add_argument("--last", dest="last_maintenance", help="Last maintenance date.")
    edit_parser.add_argument("--next", dest="next_maintenance", help="Next maintenance date.")

    delete_parser = subparsers.add_parser("delete", help="Delete a bus.")
    delete_parser.add_argument("bus_id", type=int, help="Bus id.")
    return parser.parse_args(argv)


def _form_fields(args: argparse.Namespace) -> dict[str, Any]:
    names = ("bus_number", "type", "capacity", "last_maintenance", "next_maintenance")
    return {name: getattr(args, name) for name in names if getattr(args, name) is not None}


async def _run_command(roster: BusRoster, args: argparse.Namespace) -> None:
    await roster.load()
    if roster.state.error:
        return
    if args.command == "list":
        roster.filter(args.search)
    elif args.command == "add":
        roster.open_add_dialog()
        roster.set_new_bus(**_form_fields(args))
        await roster.create()
    elif args.command == "edit":
        roster.start_edit(args.bus_id)
        fields = _form_fields(args)
        if fields:
            roster.set_editing_bus(**fields)
        await roster.update()
    elif args.command == "delete":
        await roster.delete(args.bus_id)


async def run(
    args: argparse.Namespace,
    *,
    session: aiohttp.ClientSession | None = None,
) -> int:
    base_url = args.base_url or os.getenv("BUSROSTER_BASE_URL")
    api_uri = args.api_uri or os.getenv("BUSROSTER_API_URI")
    if not base_url:
        print("Missing required value: base_url", file=sys.stderr)
        return 2
    _LOGGER.debug("Using base_url=%s api_uri=%s", base_url, api_uri)

    async with Client(
        session=session,
        base_url=base_url,
        api_uri=api_uri,
        timeout=aiohttp.ClientTimeout(total=args.timeout),
        retry_count=args.retry_count,
    ) as client:
        roster = client.get_roster()
        try:
            await _run_command(roster, args)
        except ValidationError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1

    for line in render(roster.state):
        print(line)
    return 1 if roster.state.error else 0


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING)
    return asyncio.run(run(args))


if __name__ == "__main__":
    raise SystemExit(main())
