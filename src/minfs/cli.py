"""
Command-line interface for the MinFS mount client.

This module handles argument parsing and runs the startup sequence:
credential bootstrap, configuration build and validation. The validated
configuration is what the mount layer consumes.
"""

import argparse
import sys
from typing import List, Tuple

from .access import DEFAULT_CONFIG_DIR, Bootstrap, init_config
from .config import Config, new_config
from .errors import MinFSError
from .logging import MinFSLogger, get_logger
from .options import Option, debug, insecure, mountpoint, parse_mount_options
from .version import get_version


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="minfs",
        description="Mount a bucket of an object storage server on a local directory",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment:
  MINFS_ACCESS_KEY    access key (overrides config.json)
  MINFS_SECRET_KEY    secret key (overrides config.json)
  MINFS_SECRET_TOKEN  session token (overrides config.json)

Example:
  minfs -o cache=/tmp/minfs,uid=1000,gid=1000 https://play.min.io/mybucket /mnt/mybucket""".strip(),
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output"
    )
    parser.add_argument("--version", action="version", version=get_version())
    parser.add_argument(
        "-o",
        dest="mount_options",
        action="append",
        default=[],
        help="Mount options: cache=PATH,uid=N,gid=N,insecure,debug",
    )
    parser.add_argument(
        "--config-dir",
        default=DEFAULT_CONFIG_DIR,
        help=f"Directory holding config.json (default: {DEFAULT_CONFIG_DIR})",
    )
    parser.add_argument(
        "--insecure", action="store_true", help="Allow insecure connections"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug mode")
    parser.add_argument("target", help="URL of the bucket and optional path")
    parser.add_argument("mountpoint", help="Local directory to mount on")
    return parser.parse_args()


def get_options_from_args(args: argparse.Namespace) -> List[Option]:
    """Get config options based on command line arguments."""
    options = [mountpoint(args.mountpoint)]
    for text in args.mount_options:
        options.extend(parse_mount_options(text))
    if args.insecure:
        options.append(insecure())
    if args.debug:
        options.append(debug())
    return options


def get_logger_from_args(args: argparse.Namespace) -> MinFSLogger:
    """Get logger based on command line arguments."""
    return get_logger(args.verbose or args.debug)


def run(args: argparse.Namespace, logger: MinFSLogger) -> Tuple[Config, Bootstrap]:
    """Bootstrap credentials and build the validated mount configuration."""
    bootstrap = init_config(args.config_dir, logger=logger)
    config = new_config(
        args.target,
        *get_options_from_args(args),
        access=bootstrap.access,
        logger=logger,
    )
    logger.log_config_ready(config.redacted(), bootstrap.mount_time.isoformat())
    return config, bootstrap


def main() -> None:
    """Main entry point for the CLI."""
    args = parse_args()
    logger = get_logger_from_args(args)

    try:
        run(args, logger)
    except MinFSError as e:
        logger.log_bootstrap_failed(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
        sys.exit(1)


if __name__ == "__main__":
    main()
