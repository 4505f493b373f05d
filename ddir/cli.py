"""Command-line front door for ddir.

Parses CLI options, locates the description store, and either records a
description/pattern or prints the description that applies to a path.

Exit codes: ``0`` success, ``1`` no description found, ``2`` usage error,
``3`` path, store-format or write failure.
"""

from __future__ import annotations

import argparse
import logging
import sys

from .config import log_level, store_path
from .errors import ArgumentError, DdirError
from .output import format_description, format_error, format_not_found, stream_supports_color
from .resolver import resolve
from .store import EntryKind, load_store, normalize, save_store

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_USAGE = 2
EXIT_ERROR = 3

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logger = logging.getLogger(__name__)


def _setup_logging(level: int) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%H:%M:%S", stream=sys.stderr)
    logging.getLogger("ddir").setLevel(level)


def build_parser() -> argparse.ArgumentParser:
    """Return the ddir argument parser."""
    parser = argparse.ArgumentParser(
        prog="ddir",
        description="Attach descriptions to directories and print them back.",
        epilog="In a pattern, every '*' is replaced by the name of the child being described.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Path to describe. Defaults to current directory.")
    mutation = parser.add_mutually_exclusive_group()
    mutation.add_argument(
        "--add",
        nargs=2,
        metavar=("PATH", "DESCRIPTION"),
        help="Describe PATH itself.",
    )
    mutation.add_argument(
        "--pattern",
        nargs=2,
        metavar=("PATH", "DESCRIPTION"),
        help="Describe every child of PATH.",
    )
    parser.add_argument(
        "--config-dir",
        metavar="DIR",
        default=None,
        help="Directory holding the description store (default: $DDIR_CONFIG_DIR or the user config dir).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug details to stderr.")
    return parser


MUTATION_FLAGS = {"--add": EntryKind.DIRECT, "--pattern": EntryKind.PATTERN}

Mutation = tuple[str, EntryKind, str, str]


def _extract_mutation(argv: list[str]) -> tuple[list[str], Mutation | None]:
    """Pull the first ``--add``/``--pattern`` and its two values out of ``argv``.

    Values are taken by position, so a path or description starting with
    ``-`` is accepted as is. Flags after a ``--`` separator are left alone,
    as is a flag missing its values, which argparse then reports.
    """
    for index, token in enumerate(argv):
        if token == "--":
            break
        kind = MUTATION_FLAGS.get(token)
        if kind is None or len(argv) - index < 3:
            continue
        mutation = (token, kind, argv[index + 1], argv[index + 2])
        return argv[:index] + argv[index + 3 :], mutation
    return argv, None


def _requested_mutation(args: argparse.Namespace, mutation: Mutation | None) -> tuple[EntryKind, str, str] | None:
    """Validate the extracted mutation against the remaining parsed arguments."""
    if mutation is None:
        return None
    flag, kind, path, description = mutation
    if args.add is not None or args.pattern is not None:
        raise ArgumentError("only one of --add/--pattern may be given")
    if args.path is not None:
        raise ArgumentError(f"cannot combine positional path with {flag}")
    return kind, path, description


def _store_entry(args: argparse.Namespace, kind: EntryKind, path: str, description: str) -> int:
    target = store_path(args.config_dir)
    store = load_store(target)
    entry = store.set(path, description, kind)
    save_store(store, target)
    logger.info("stored %s entry for %s in %s", kind.value, entry.path, target)
    return EXIT_OK


def _describe(args: argparse.Namespace) -> int:
    store = load_store(store_path(args.config_dir))
    query = normalize(args.path if args.path is not None else ".")
    color = stream_supports_color(sys.stdout, args.no_color)
    resolution = resolve(store, query)
    if resolution is None:
        print(format_not_found(query, color))
        return EXIT_NOT_FOUND
    print(format_description(resolution.path, resolution.description, color))
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """Parse CLI arguments, run one lookup or mutation, and return an exit code.

    ``argv`` defaults to ``sys.argv[1:]``. Usage errors exit through argparse
    with status 2 before the store is touched.
    """
    parser = build_parser()
    rest, extracted = _extract_mutation(list(sys.argv[1:] if argv is None else argv))
    args = parser.parse_args(rest)
    try:
        mutation = _requested_mutation(args, extracted)
    except ArgumentError as exc:
        parser.error(str(exc))

    _setup_logging(log_level(args.verbose))

    try:
        if mutation is not None:
            return _store_entry(args, *mutation)
        return _describe(args)
    except DdirError as exc:
        logger.debug("command failed", exc_info=True)
        print(format_error(str(exc), stream_supports_color(sys.stderr, args.no_color)), file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
