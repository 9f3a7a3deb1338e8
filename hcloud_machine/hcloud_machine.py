#!/usr/bin/env python3
"""Hetzner Cloud machine tool — CLI entrypoint."""

import argparse
import os

from hcloud_machine.commands import register_machine_commands
from hcloud_machine.driver.store import DEFAULT_STORE_PATH
from hcloud_machine.logging_setup import setup_cli_logging


def main():
    parser = argparse.ArgumentParser(description="Manage a Hetzner Cloud machine")
    parser.add_argument(
        "--storage-path",
        default=os.environ.get("HCLOUD_MACHINE_STORAGE_PATH", DEFAULT_STORE_PATH),
        help=f"Directory holding machine records (default: {DEFAULT_STORE_PATH}, env: HCLOUD_MACHINE_STORAGE_PATH)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    register_machine_commands(subparsers)

    args = parser.parse_args()
    setup_cli_logging(verbose=args.verbose)
    args.func(args)


if __name__ == "__main__":
    main()
