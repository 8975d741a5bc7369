"""Compare the scanned tree against the stored mapping."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from doc_ids.errors import MissingIdError

log = logging.getLogger(__name__)


@dataclass
class ReconcileReport:
    mapping: dict[str, str]
    moved: list[tuple[str, str, str]] = field(default_factory=list)  # (token, old, new)
    adopted: list[tuple[str, str]] = field(default_factory=list)  # (token, path)

    @property
    def changed(self) -> bool:
        return bool(self.moved or self.adopted)


def reconcile(stored: dict[str, str], found: dict[str, str]) -> ReconcileReport:
    """Return the stored mapping updated to match ``found``.

    Moved files get their new path, untracked markers are adopted, and a
    stored token carried by no file raises MissingIdError. ``stored`` is
    left untouched.
    """
    report = ReconcileReport(mapping=dict(stored))

    for token, old_path in stored.items():
        new_path = found.get(token)
        if new_path is None:
            raise MissingIdError(token, old_path)
        if new_path != old_path:
            log.info("Updating relative path for ID %s from %s to %s", token, old_path, new_path)
            report.mapping[token] = new_path
            report.moved.append((token, old_path, new_path))

    for token, path in found.items():
        if token not in stored:
            log.warning("Adding untracked ID %s from %s", token, path)
            report.mapping[token] = path
            report.adopted.append((token, path))

    return report
