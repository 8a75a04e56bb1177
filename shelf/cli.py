from __future__ import annotations

import argparse
import json
from typing import Sequence

from shelf import __version__
from shelf.app import main as run_app
from shelf.core.config import get_runtime_config
from shelf.core.paths import SETTINGS_FILENAME, user_settings_path
from shelf.core.settings_store import SettingsStore


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shelf",
        description="shelf - a terminal file browser",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
        help="Print version and exit.",
    )

    subparsers = parser.add_subparsers(dest="command")

    config_parser = subparsers.add_parser(
        "print-config",
        help=f"Print resolved runtime config and {SETTINGS_FILENAME} to stdout.",
    )
    config_parser.set_defaults(handler=handle_print_config)

    return parser


def handle_print_config(_args: argparse.Namespace) -> None:
    settings_path = user_settings_path()
    settings_store = SettingsStore(settings_path)
    payload = {
        "runtime": get_runtime_config().model_dump(mode="json"),
        "settings_path": str(settings_path),
        "settings": settings_store.load(),
    }
    print(json.dumps(payload, indent=2))


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "print-config":
        args.handler(args)
        return

    run_app()


if __name__ == "__main__":
    main()
