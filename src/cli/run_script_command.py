"""Statement-script CLI command wiring.

This module registers the run-script subcommand and delegates execution
to the SDK client's script runner.
"""

from __future__ import annotations

import argparse
from typing import Any

from store.client_sdk import SmartErpClient


def add_run_script_command(subparsers: Any) -> None:
    """Register run-script subcommand."""
    parser = subparsers.add_parser(
        "run-script",
        help="Run a YAML file of statements in order",
    )
    parser.add_argument("script_file", help="Path to YAML statement script")


def run_run_script_command(client: SmartErpClient, args: argparse.Namespace) -> int:
    """Handle run-script command invocation."""
    results = client.run_script(args.script_file)
    for result in results:
        print(f"row_count={result.row_count}")
    return 0
