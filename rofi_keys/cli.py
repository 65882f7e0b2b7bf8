"""CLI for rofi-keys."""

from __future__ import annotations

import argparse
import logging
import sys

from rofi_keys import __version__
from rofi_keys.config_store import ConfigError, initialize_default
from rofi_keys.executors.shell_executor import DryRunExecutor
from rofi_keys.launcher import EXIT_CONFIG_ERROR, EXIT_MENU_ERROR, EXIT_OK, Launcher
from rofi_keys.settings import LauncherSettings, load_env_files
from rofi_keys.utils.log_utils import configure_logging


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rofi-keys",
        description="A keyboard-driven application launcher using rofi.",
    )
    parser.add_argument(
        "-c",
        "--config",
        metavar="FILE",
        help="Specify an alternate config file path.",
    )
    parser.add_argument(
        "--init",
        action="store_true",
        help="Initialize a default config file and exit.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the selected command instead of running it.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging on stderr.",
    )
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _init_config(settings: LauncherSettings) -> int:
    try:
        initialize_default(settings.config_path)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    print(f"Default configuration initialized at {settings.config_path}")
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    load_env_files()
    settings = LauncherSettings.from_env(args.config)
    configure_logging(logging.DEBUG if args.verbose else settings.log_level)

    if args.init:
        return _init_config(settings)

    try:
        launcher = Launcher(
            settings,
            executor=DryRunExecutor() if args.dry_run else None,
        )
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_MENU_ERROR
    return launcher.run().exit_code


if __name__ == "__main__":
    raise SystemExit(main())
