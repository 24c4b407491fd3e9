"""Command-line front end for the Soloway client.

Credentials are read from SOLOWAY_USERNAME / SOLOWAY_PASSWORD
(optionally SOLOWAY_BASE_URL and SOLOWAY_TIMEOUT).

Usage:
    soloway whoami
    soloway placements
    soloway placements-stat GUID [GUID ...] --start 2024-01-01 --stop 2024-01-31 [--with-archived]
    soloway stat-by-day GUID --start 2024-01-01 --stop 2024-01-31
"""

import argparse
import logging
import sys
from collections.abc import Sequence
from datetime import date

import requests
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from soloway_sdk import __version__
from soloway_sdk.client import SolowayClient, SolowayError
from soloway_sdk.config_schema import load_connection_config_from_env
from soloway_sdk.schemas import PlacementsInfo, PlacementsStatByDay

logger = logging.getLogger(__name__)


def _add_date_range(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--start", type=date.fromisoformat, required=True, help="First day (YYYY-MM-DD)")
    parser.add_argument("--stop", type=date.fromisoformat, required=True, help="Last day (YYYY-MM-DD)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="soloway", description="Soloway DSP API client")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("whoami", help="Show the current account")
    subparsers.add_parser("placements", help="List placements of the account's client")

    stat = subparsers.add_parser("placements-stat", help="Request aggregated placement statistics")
    stat.add_argument("placement_ids", nargs="+", help="Placement GUIDs")
    _add_date_range(stat)
    stat.add_argument("--with-archived", action="store_true", help="Include archived placements")

    by_day = subparsers.add_parser("stat-by-day", help="Show per-day statistics of a placement")
    by_day.add_argument("placement_guid", help="Placement GUID")
    _add_date_range(by_day)

    return parser


def render_placements(console: Console, placements: PlacementsInfo) -> None:
    table = Table(title=f"Placements ({len(placements.placements)})")
    table.add_column("GUID")
    table.add_column("Name")
    for placement in placements.placements:
        table.add_row(placement.guid, placement.name or "")
    console.print(table)


def render_stat_by_day(console: Console, placement_guid: str, stat: PlacementsStatByDay) -> None:
    table = Table(title=f"Placement {placement_guid}")
    table.add_column("Date")
    table.add_column("Exposures", justify="right")
    table.add_column("Clicks", justify="right")
    table.add_column("Cost", justify="right")
    for day in stat.days:
        table.add_row(
            day.date,
            "" if day.exposures is None else str(day.exposures),
            "" if day.clicks is None else str(day.clicks),
            "" if day.cost is None else f"{day.cost:.2f}",
        )
    console.print(table)


def run(args: argparse.Namespace, client: SolowayClient, console: Console) -> None:
    """Log in and execute the selected command."""
    client.login()

    if args.command == "stat-by-day":
        stat = client.get_placement_stat_by_day(args.placement_guid, args.start, args.stop)
        render_stat_by_day(console, args.placement_guid, stat)
        return

    account = client.whoami()
    if args.command == "whoami":
        console.print(f"[bold]{account.username}[/bold] (client {account.client.guid})")
    elif args.command == "placements":
        render_placements(console, client.get_placements())
    elif args.command == "placements-stat":
        client.get_placements_stat(args.placement_ids, args.start, args.stop, with_archived=args.with_archived)
        console.print("[green]Placement statistics request accepted[/green]")


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    console = Console()

    try:
        config = load_connection_config_from_env()
    except (ValueError, ValidationError) as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        return 1

    with SolowayClient.from_config(config) as client:
        try:
            run(args, client, console)
        except (SolowayError, requests.RequestException, ValidationError) as e:
            logger.debug("Command %s failed", args.command, exc_info=True)
            console.print(f"[red]Error:[/red] {e}")
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
