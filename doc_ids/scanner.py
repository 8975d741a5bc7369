"""Walk the document tree and extract first-line ID markers."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from fnmatch import fnmatch
from pathlib import Path
from typing import Iterator, Sequence

from doc_ids.errors import DuplicateIdError
from doc_ids.fs import relative_posix

log = logging.getLogger(__name__)

DEFAULT_PATTERNS = ("*.md",)

MARKER_RE = re.compile(r"^<!-- ID: ([A-Za-z0-9]+) -->$")


def format_marker(token: str) -> str:
    return f"<!-- ID: {token} -->"


def parse_marker(line: str) -> str | None:
    """Return the token of a marker line, or None if ``line`` is not one."""
    m = MARKER_RE.match(line.rstrip("\r\n"))
    return m.group(1) if m else None


def read_first_line(path: Path) -> str:
    with open(path, "rb") as f:
        raw = f.readline()
    return raw.decode("utf-8", errors="replace").rstrip("\r\n")


@dataclass
class ScannedDocument:
    rel_path: str
    path: Path
    first_line: str
    token: str | None = None


@dataclass
class ScanResult:
    found: dict[str, str] = field(default_factory=dict)  # token -> rel_path
    pending: list[ScannedDocument] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.found) + len(self.pending)


def iter_documents(
    root: Path,
    patterns: Sequence[str] = DEFAULT_PATTERNS,
    excludes: Sequence[str] = (),
) -> Iterator[Path]:
    """Yield matching files under ``root`` in sorted relative-path order."""
    matches: set[Path] = set()
    for pattern in patterns:
        for path in root.rglob(pattern):
            if path.is_symlink():
                log.debug("Skipping symlink %s", relative_posix(path, root))
                continue
            if path.is_file():
                matches.add(path)
    for path in sorted(matches, key=lambda p: relative_posix(p, root)):
        rel = relative_posix(path, root)
        if any(fnmatch(rel, ex) for ex in excludes):
            log.debug("Excluded %s", rel)
            continue
        yield path


def scan_documents(
    root: Path,
    patterns: Sequence[str] = DEFAULT_PATTERNS,
    excludes: Sequence[str] = (),
) -> ScanResult:
    """Collect marked documents and queue unmarked ones.

    Raises DuplicateIdError as soon as a token is seen in a second file.
    """
    result = ScanResult()
    for path in iter_documents(root, patterns, excludes):
        rel = relative_posix(path, root)
        first_line = read_first_line(path)
        token = parse_marker(first_line)
        if token is None:
            result.pending.append(ScannedDocument(rel_path=rel, path=path, first_line=first_line))
            continue
        if token in result.found:
            raise DuplicateIdError(token, rel, result.found[token])
        result.found[token] = rel

    log.debug("Scanned %d documents: %d marked, %d pending", result.total, len(result.found), len(result.pending))
    return result
