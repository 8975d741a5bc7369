"""CLI entrypoint: assign and validate document IDs for a repository.

Run from the repository root (or pass --root). Every Markdown file gets a
``<!-- ID: XXXXXX -->`` first line and the ID -> path mapping is kept in
``.github/ids.json``. Moved files are picked up automatically; a tracked ID
that no longer appears in any file is an error, so deleting a document means
removing its entry from the ID file as well.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys

from doc_ids.errors import ERR_DRIFT, DocIdError
from doc_ids.ids import DEFAULT_ID_LENGTH, MAX_ATTEMPTS
from doc_ids.scanner import DEFAULT_PATTERNS
from doc_ids.store import DEFAULT_IDS_FILE

_LEVEL_PREFIX = {
    logging.WARNING: "🟡 ",
    logging.ERROR: "🔴 ",
    logging.CRITICAL: "🔴 ",
}


class _ConsoleFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        return _LEVEL_PREFIX.get(record.levelno, "") + super().format(record)


def parse_patterns(raw: list[str]) -> list[str]:
    """Split comma-separated glob args into individual patterns."""
    patterns = []
    for item in raw:
        for p in item.split(","):
            p = p.strip()
            if p:
                patterns.append(p)
    return patterns


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    env_patterns = os.environ.get("DOC_IDS_PATTERNS")
    parser = argparse.ArgumentParser(
        prog="doc-ids",
        description="Give every document a unique ID marker and track ID -> path in a JSON file",
    )
    parser.add_argument("--root", default=".", help="Repository root to scan (default: current directory)")
    parser.add_argument(
        "--ids-file",
        default=os.environ.get("DOC_IDS_FILE", str(DEFAULT_IDS_FILE)),
        help=f"ID file, relative to --root unless absolute (default: {DEFAULT_IDS_FILE})",
    )
    parser.add_argument(
        "--pattern",
        dest="patterns",
        action="append",
        default=None,
        help="Glob of documents to track, repeatable or comma separated (default: *.md)",
    )
    parser.add_argument("--exclude", dest="excludes", action="append", default=[], help="Glob of relative paths to skip")
    parser.add_argument(
        "--id-length",
        type=int,
        default=os.environ.get("DOC_IDS_LENGTH", str(DEFAULT_ID_LENGTH)),
        help=f"Length of generated IDs (default: {DEFAULT_ID_LENGTH})",
    )
    parser.add_argument("--max-attempts", type=int, default=MAX_ATTEMPTS, help=f"Retries on ID collision (default: {MAX_ATTEMPTS})")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--dry-run", action="store_true", help="Report what would change without writing anything")
    mode.add_argument("--check", action="store_true", help="Like --dry-run, but exit 1 if anything would change")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    verbosity.add_argument("--quiet", "-q", action="store_true", help="Only print warnings and errors")
    args = parser.parse_args(argv)

    if args.patterns is None:
        args.patterns = [env_patterns] if env_patterns else list(DEFAULT_PATTERNS)
    args.patterns = parse_patterns(args.patterns)
    args.excludes = parse_patterns(args.excludes)
    if args.id_length < 1:
        parser.error("--id-length must be at least 1")
    if args.max_attempts < 1:
        parser.error("--max-attempts must be at least 1")
    return args


def _setup_logging(args: argparse.Namespace) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(_ConsoleFormatter("%(message)s"))
    logging.basicConfig(level=logging.WARNING, handlers=[handler])
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logging.getLogger("doc_ids").setLevel(level)


def main(argv: list[str] | None = None) -> None:
    from dotenv import load_dotenv

    load_dotenv()
    args = parse_args(argv)
    _setup_logging(args)

    from doc_ids.run import run_sync

    try:
        result = run_sync(
            root=args.root,
            ids_file=args.ids_file,
            patterns=args.patterns,
            excludes=args.excludes,
            id_length=args.id_length,
            max_attempts=args.max_attempts,
            dry_run=args.dry_run or args.check,
        )
    except DocIdError as exc:
        print(f"🔴 Error: {exc}", file=sys.stderr)
        sys.exit(exc.code)

    summary = (
        f"{len(result.mapping)} IDs tracked "
        f"({result.moved} moved, {result.adopted} adopted, {result.assigned} new)"
    )
    if args.check and result.changed:
        print(f"🔴 IDs out of date: {summary}", file=sys.stderr)
        sys.exit(ERR_DRIFT)
    if not result.written:
        if not args.quiet:
            print(f"Dry-run complete. {summary}")
        return
    if not args.quiet:
        print(f"🟢 Successfully validated/updated all IDs: {summary}")


if __name__ == "__main__":
    main()
