from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .config import DEFAULT_CONFIG_FILE, load_config
from .core import run
from .dedup import Ledger
from .exceptions import FeedsToInstapaperError
from .importer import import_csv

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="feeds-to-instapaper",
        description="Send new RSS/Atom feed entries to Instapaper.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG_FILE,
        metavar="FILE",
        help="Sets a custom config file (default: %(default)s)",
    )
    parser.add_argument(
        "-y", "--auto-add",
        action="store_true",
        help="Add posts to Instapaper without asking",
    )
    parser.add_argument(
        "-s", "--skip-download-errors",
        action="store_true",
        help="Proceed after failed feed download",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command")
    imp = sub.add_parser("import", help="Import exported Instapaper CSV to pre-fill link log")
    imp.add_argument("input", metavar="INPUT", help="CSV file exported from Instapaper")
    return parser


def _print_error(err: BaseException) -> None:
    print(f"error: {err}", file=sys.stderr)
    cause = err.__cause__
    while cause is not None:
        print(f"  caused by: {cause}", file=sys.stderr)
        cause = cause.__cause__


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )
    try:
        config = load_config(args.config, require_credentials=args.command != "import")
        config.auto_add = args.auto_add
        config.skip_download_errors = args.skip_download_errors

        if args.command == "import":
            with Ledger.open(config.links_log_file) as ledger:
                import_csv(args.input, ledger)
            return 0

        report = run(config)
    except FeedsToInstapaperError as e:
        _print_error(e)
        return 1
    except KeyboardInterrupt:
        return 130
    logger.info(
        "%d added, %d marked as skipped, %d already known",
        report.submitted, report.declined, report.skipped,
    )
    return 0
