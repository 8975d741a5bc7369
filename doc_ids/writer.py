"""Prepend generated markers to unmarked documents."""

from __future__ import annotations

import logging
import random
from pathlib import Path
from typing import Sequence

from doc_ids.fs import atomic_write_bytes
from doc_ids.ids import DEFAULT_ID_LENGTH, MAX_ATTEMPTS, generate_id
from doc_ids.scanner import ScannedDocument, format_marker

log = logging.getLogger(__name__)


def assign_ids(
    pending: Sequence[ScannedDocument],
    mapping: dict[str, str],
    *,
    length: int = DEFAULT_ID_LENGTH,
    max_attempts: int = MAX_ATTEMPTS,
    rng: random.Random | None = None,
) -> list[tuple[str, ScannedDocument]]:
    """Pick a fresh token for every pending document and record it in ``mapping``.

    Nothing is written to disk here, so an IdGenerationError leaves the tree intact.
    """
    rng = rng or random.Random()
    assignments: list[tuple[str, ScannedDocument]] = []
    for doc in pending:
        token = generate_id(mapping, length=length, max_attempts=max_attempts, rng=rng)
        mapping[token] = doc.rel_path
        assignments.append((token, doc))
    return assignments


def prepend_marker(path: Path, token: str) -> None:
    """Insert the marker as the new first line, keeping the existing bytes."""
    original = path.read_bytes()
    atomic_write_bytes(path, format_marker(token).encode("utf-8") + b"\n" + original)


def write_markers(assignments: Sequence[tuple[str, ScannedDocument]]) -> int:
    for token, doc in assignments:
        log.info("Adding new ID %s to %s", token, doc.rel_path)
        prepend_marker(doc.path, token)
    return len(assignments)
