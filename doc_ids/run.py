"""One full pass: load -> scan -> reconcile -> assign/write -> persist."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from doc_ids.ids import DEFAULT_ID_LENGTH, MAX_ATTEMPTS
from doc_ids.reconcile import reconcile
from doc_ids.scanner import DEFAULT_PATTERNS, scan_documents
from doc_ids.store import DEFAULT_IDS_FILE, MappingStore
from doc_ids.writer import assign_ids, write_markers

log = logging.getLogger(__name__)


@dataclass
class RunResult:
    mapping: dict[str, str]
    tracked: int
    moved: int
    adopted: int
    assigned: int
    store_created: bool
    written: bool

    @property
    def changed(self) -> bool:
        return bool(self.moved or self.adopted or self.assigned or self.store_created)


class IdSync:
    def __init__(
        self,
        *,
        root: Path | str = ".",
        ids_file: Path | str = DEFAULT_IDS_FILE,
        patterns: Sequence[str] = DEFAULT_PATTERNS,
        excludes: Sequence[str] = (),
        id_length: int = DEFAULT_ID_LENGTH,
        max_attempts: int = MAX_ATTEMPTS,
        dry_run: bool = False,
        rng: random.Random | None = None,
    ):
        self.root = Path(root)
        ids_path = Path(ids_file)
        self.store = MappingStore(ids_path if ids_path.is_absolute() else self.root / ids_path)
        self.patterns = tuple(patterns)
        self.excludes = tuple(excludes)
        self.id_length = id_length
        self.max_attempts = max_attempts
        self.dry_run = dry_run
        self.rng = rng or random.Random()

    def run(self) -> RunResult:
        store_created = not self.store.exists()
        stored = self.store.load()
        scan = scan_documents(self.root, self.patterns, self.excludes)
        report = reconcile(stored, scan.found)

        mapping = report.mapping
        assignments = assign_ids(
            scan.pending,
            mapping,
            length=self.id_length,
            max_attempts=self.max_attempts,
            rng=self.rng,
        )

        result = RunResult(
            mapping=mapping,
            tracked=len(stored),
            moved=len(report.moved),
            adopted=len(report.adopted),
            assigned=len(assignments),
            store_created=store_created,
            written=False,
        )

        if self.dry_run:
            for token, doc in assignments:
                log.info("Would add new ID %s to %s", token, doc.rel_path)
            return result

        write_markers(assignments)
        self.store.save(mapping)
        result.written = True
        return result


def run_sync(**kwargs) -> RunResult:
    return IdSync(**kwargs).run()
