"""
Main entrypoint for the mechanic shop console.

``main`` parses the command line, sets up logging, opens the data
store, makes sure the schema exists and hands control to the menu.
The store is opened once and closed on every way out: the exit
option, end of input, an interrupt or an error.

Usage::

    mechanic-shop [DATABASE] [--log-level LEVEL] [--log-file PATH]

``DATABASE`` defaults to ``SHOP_DATABASE_URL`` (see ``core.config``).
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from .cli.menu import MechanicShop
from .cli.prompts import Console
from .core.config import settings
from .core.db import DataStore, get_database_path, init_db
from .core.exceptions import StoreConnectionError
from .core.logging_config import setup_logging


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="mechanic-shop", description=f"{settings.project_name} console.")
    ap.add_argument(
        "database",
        nargs="?",
        default=None,
        help="Path to the SQLite database file (default: SHOP_DATABASE_URL or mechanic_shop.db)",
    )
    ap.add_argument("--log-level", default=settings.log_level, help="Logging level (default: %(default)s)")
    ap.add_argument("--log-file", default=settings.log_file or None, help="Also write logs to this file")
    return ap


def main(argv: Optional[Sequence[str]] = None, console: Optional[Console] = None) -> int:
    """Run the shop console and return the process exit status."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, args.log_file)
    logger = logging.getLogger(__name__)

    console = console or Console()
    db_path = get_database_path(args.database)
    console.write(f"Connecting to database {db_path}...")
    try:
        with DataStore(db_path) as store:
            init_db(store)
            console.write("Done")
            MechanicShop(store, console).run()
            console.write("Disconnecting from database...")
    except StoreConnectionError as exc:
        logger.error("Startup failed: %s", exc)
        print(f"Error - Unable to connect to database: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        console.write()
        logger.info("Interrupted by operator")
        return 130
    console.write("Done\n\nBye !")
    return 0


if __name__ == "__main__":
    sys.exit(main())
