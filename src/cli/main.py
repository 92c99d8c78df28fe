"""SmartERP CLI entry points.
This module exposes commands for bootstrapping and querying the record store.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
import json
import math
from dataclasses import replace
from pathlib import Path
from typing import Any, Sequence

from cli.run_script_command import add_run_script_command, run_run_script_command
from core.config import SmartErpConfig
from core.types import Scalar
from store.client_sdk import SmartErpClient


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="smarterp", description="SmartERP record store CLI")
    parser.add_argument("--data-root", help="Override SMARTERP_DATA_ROOT for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_init_command(subparsers)
    _add_query_command(subparsers)
    _add_tables_command(subparsers)
    add_run_script_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the SmartERP CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    client = _build_client(args.data_root)
    if args.command == "init":
        return _run_init_command(client)
    if args.command == "query":
        return _run_query_command(client, args)
    if args.command == "tables":
        return _run_tables_command(client)
    if args.command == "run-script":
        return run_run_script_command(client, args)
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_client(data_root: str | None) -> SmartErpClient:
    """Build SDK client with optional data-root override.

    Args:
        data_root: Optional override path.

    Returns:
        Configured SDK client.
    """
    config = SmartErpConfig.from_env()
    if data_root:
        config = replace(config, data_root=Path(data_root).expanduser().resolve())
    return SmartErpClient(config)


def _run_init_command(client: SmartErpClient) -> int:
    report = client.initialize()
    print(f"tables_created={','.join(report.tables_created) or '-'}")
    print(f"admin_seeded={str(report.admin_seeded).lower()}")
    return 0


def _run_query_command(client: SmartErpClient, args: argparse.Namespace) -> int:
    """Handle query command.

    Rows are printed as one JSON object per line, followed by the count.
    """
    parameters = [parse_cli_parameter(value) for value in args.param]
    result = client.execute(args.sql, parameters)
    for row in result.rows:
        print(json.dumps(row, sort_keys=True))
    print(f"row_count={result.row_count}")
    return 0


def _run_tables_command(client: SmartErpClient) -> int:
    for summary in client.tables():
        print(f"{summary.name}\t{summary.size}")
    return 0


def parse_cli_parameter(raw_value: str) -> Scalar:
    """Decode one ``--param`` value.

    JSON scalars (numbers, booleans, null, quoted strings) are decoded;
    anything else is passed through as the raw string.
    """
    try:
        decoded: Any = json.loads(raw_value)
    except json.JSONDecodeError:
        return raw_value
    if isinstance(decoded, float) and not math.isfinite(decoded):
        return raw_value
    if decoded is None or isinstance(decoded, (str, int, float, bool)):
        return decoded
    return raw_value


def _add_init_command(subparsers: Any) -> None:
    """Register init subcommand."""
    subparsers.add_parser("init", help="Create default tables and seed the admin user")


def _add_query_command(subparsers: Any) -> None:
    """Register query subcommand."""
    parser = subparsers.add_parser("query", help="Run one statement against the store")
    parser.add_argument("sql", help="Statement text, e.g. \"SELECT * FROM users\"")
    parser.add_argument(
        "--param",
        action="append",
        default=[],
        help="Positional parameter; repeat in placeholder order",
    )


def _add_tables_command(subparsers: Any) -> None:
    """Register tables subcommand."""
    subparsers.add_parser("tables", help="List tables and their record counts")
