"""CLI entrypoint for healing a stuck Antigravity IDE."""

import argparse
import sys
from pathlib import Path

from colorama import just_fix_windows_console

from antigravity_healer.config import ConfigError, find_config_file, load_run_configuration
from antigravity_healer.healer import Healer
from antigravity_healer.logger import Logger
from antigravity_healer.path_resolver import resolve_cache_paths
from antigravity_healer.platforms import detect_platform


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Kill hung Antigravity background processes and clear its caches",
    )
    parser.add_argument(
        "--target",
        action="append",
        metavar="NAME",
        help="Process name/pattern to kill (repeatable; replaces the configured list)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=None,
        help="Report which cache directories would be deleted without deleting them",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to a JSON config file with 'targets' and 'dry_run'",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )
    parser.add_argument(
        "--list-paths",
        action="store_true",
        help="Print the cache directories for this host and exit",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    just_fix_windows_console()
    logger = Logger(color=not args.no_color)

    # Host facts are read once and stay fixed for the whole run
    platform = detect_platform()
    home_dir = Path.home()

    if args.list_paths:
        for cache_path in resolve_cache_paths(platform, home_dir):
            print(f"{cache_path.label:10} {cache_path.path}")
        return 0

    config_file = args.config or find_config_file()
    try:
        config = load_run_configuration(
            config_file=config_file,
            targets=args.target,
            dry_run=args.dry_run,
        )
    except ConfigError as e:
        logger.error(str(e))
        return 1

    Healer(config, platform, home_dir, logger=logger).execute()
    return 0


if __name__ == "__main__":
    sys.exit(main())
