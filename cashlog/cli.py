"""The cash-log command."""

import argparse
import logging
import os
import sys

from dotenv import load_dotenv

from cashlog.catalog import (
    CatalogError,
    interactive_add_category,
    interactive_add_type,
    interactive_remove_category,
    interactive_remove_type,
    show_info,
)
from cashlog.db import DatabaseError, connect, seed_defaults
from cashlog.report import interactive_report
from cashlog.scheduler import start_reminder_scheduler
from cashlog.selectors import SelectionError
from cashlog.transactions import interactive_add, interactive_delete, interactive_edit, view_balance
from cashlog.view import interactive_view

VERSION = "v1.0.0"

COMMANDS = {
    "add": interactive_add,
    "view": interactive_view,
    "balance": view_balance,
    "edit": interactive_edit,
    "delete": interactive_delete,
    "report": interactive_report,
    "add-category": interactive_add_category,
    "add-type": interactive_add_type,
    "remove-category": interactive_remove_category,
    "remove-type": interactive_remove_type,
    "info": show_info,
}

_USAGE = ("add", "view", "balance", "edit", "delete", "add-category",
          "remove-category", "add-type", "remove-type", "info")


def show_usage():
    print("Usage:")
    for command in _USAGE:
        print(f"  {command}")


def main(argv=None):
    """Run one cash-log command and return the exit status."""
    parser = argparse.ArgumentParser(prog="cash-log", allow_abbrev=False)
    parser.add_argument("-version", "--version", action="store_true", help="Print version and exit")
    parser.add_argument("command", nargs="?")
    args, _ = parser.parse_known_args(argv)

    if args.version:
        print("App Version:", VERSION)
        return 0

    if os.environ.get("CASHLOG_ENV") in ("development", "dev") and not load_dotenv():
        logging.getLogger(__name__).warning("Warning: .env file not found or failed to load")

    command = args.command
    if command != "remind" and command not in COMMANDS:
        show_usage()
        return 0

    try:
        database = connect()
        database.migrate()
        seed_defaults(database)
        if command == "remind":
            thread, stop = start_reminder_scheduler()
            try:
                thread.join()
            except KeyboardInterrupt:
                stop.set()
            return 0
        with database.session() as session:
            COMMANDS[command](session)
    except (DatabaseError, SelectionError, CatalogError, ValueError, EOFError) as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())