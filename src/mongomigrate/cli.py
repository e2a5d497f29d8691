import argparse
import getpass
import logging
import sys
from pathlib import Path
from typing import Callable, List, Optional

from .core.coordinator import MigrationCoordinator
from .core.summary import report, write_report
from .exceptions import MigrationError, UnknownActionError
from .options import Action, Connection, MigrationOptions, ToolConfig

SENSITIVE_KEYS = {"password"}


def mask_sensitive(ns: argparse.Namespace) -> dict:
    """Return a dict copy of args with sensitive values masked."""
    data = vars(ns).copy()
    for k in list(data.keys()):
        if k in SENSITIVE_KEYS and data[k]:
            data[k] = "****"
    return data


def configure_logging(debug: bool, log_file: Optional[Path]) -> None:
    level = logging.DEBUG if debug else logging.INFO
    handlers: List[logging.Handler] = []
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    else:
        handlers.append(logging.StreamHandler(sys.stderr))

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        handlers=handlers,
    )


def split_collections(val: str) -> List[str]:
    return [c.strip() for c in val.strip().split(",") if c.strip()]


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="mongomigrate",
        description="Export MongoDB collections to JSON files or import them back, one collection at a time",
    )
    p.add_argument("action", nargs="?", help="Action to do: import or export")
    mode = p.add_mutually_exclusive_group()
    mode.add_argument("-I", "--import", dest="do_import", action="store_true", help="Import")
    mode.add_argument("-E", "--export", dest="do_export", action="store_true", help="Export")
    p.add_argument("-d", "--database", help="Database name")
    p.add_argument("-H", "--host", help="Host. Default localhost")
    p.add_argument("-p", "--port", help="Port. Default 27017")
    p.add_argument("-U", "--user", help="Username to log in to database")
    p.add_argument("-P", "--password", help="Password of given user to log in to database")
    p.add_argument("-c", "--collections", type=split_collections,
                   help="List of collections separated by comma ','. "
                        "(All will be used if there is no specified)")
    p.add_argument("-o", "--output", help="Output directory, or a .json file name to fan out (exporting)")
    p.add_argument("-f", "--from", dest="source",
                   help="Directory where the collections are located, or a single .json file (importing)")
    p.add_argument("--bin-dir", help="Directory holding mongoexport, mongoimport and mongo.")
    p.add_argument("--timeout", type=float, default=None,
                   help="Give up on a single collection after this many seconds.")
    p.add_argument("--report", type=Path, default=None,
                   help="Write a per-collection outcome table (.csv or .json).")
    p.add_argument("--no-input", action="store_true",
                   help="Never prompt for missing values.")
    p.add_argument("--debug", action="store_true", help="Enable verbose debug logging.")
    p.add_argument("--log-file", type=Path, default=None,
                   help="Write logs to this file instead of stderr.")
    return p


def resolve_action(args: argparse.Namespace) -> Action:
    if args.do_import:
        return Action.IMPORT
    if args.do_export:
        return Action.EXPORT
    return Action.parse(args.action or "")


def fill_from_prompts(args: argparse.Namespace, action: Action,
                      ask: Callable[[str], str] = input,
                      ask_secret: Callable[[str], str] = getpass.getpass) -> None:
    """Ask for every connection value the command line left out."""
    args.database = args.database or ask("Database name: ").strip()
    args.host = args.host or ask("Host (localhost): ").strip()
    args.port = args.port or ask("Port (27017): ").strip()
    args.user = args.user or ask("DB login username: ").strip()
    if args.user and not args.password:
        args.password = ask_secret("DB login password: ")

    if action is Action.EXPORT:
        if not args.collections:
            args.collections = split_collections(ask("Collections: "))
        args.output = args.output or ask("Output dir: ").strip()
    else:
        args.source = args.source or ask("From: ").strip()


def options_from_args(args: argparse.Namespace, action: Action) -> MigrationOptions:
    connection = Connection(
        database=args.database or "",
        host=args.host or "localhost",
        port=args.port or None,
        user=args.user or None,
        password=(args.password or None) if args.user else None,
    )
    return MigrationOptions.build(
        action,
        connection,
        collections=args.collections,
        output=args.output,
        source=args.source,
    )


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging(args.debug, args.log_file)

    log = logging.getLogger("cli")
    log.debug("Parsed args (masked): %s", mask_sensitive(args))

    try:
        action = resolve_action(args)
    except UnknownActionError as e:
        log.error("Unrecognized action: '%s'", e.action)
        sys.exit(1)

    try:
        # Flag-style invocations (-I/-E) never prompt.
        interactive = (not args.no_input and not (args.do_import or args.do_export)
                       and sys.stdin.isatty())
        if interactive:
            fill_from_prompts(args, action)

        tools = ToolConfig(bin_dir=args.bin_dir, timeout=args.timeout)
        coord = MigrationCoordinator(options_from_args(args, action), tools=tools)
        if not coord.validate():
            sys.exit(1)

        summary = coord.run()
        report(summary, log)
        if args.report is not None:
            try:
                write_report(summary, args.report)
            except (OSError, ValueError) as e:
                log.error("Could not write report %s: %s", args.report, e)
        # Per-collection failures are in the summary; a completed run exits 0.
        sys.exit(0)
    except KeyboardInterrupt:
        log.warning("Interrupted by user.")
        sys.exit(130)
    except MigrationError as e:
        log.error("%s", e)
        sys.exit(1)
    except Exception:
        log.exception("Unhandled error during execution")
        sys.exit(1)


if __name__ == "__main__":

    main()
