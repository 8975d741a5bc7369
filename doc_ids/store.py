"""Load and persist the identifier -> path mapping."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from doc_ids.errors import MappingFormatError
from doc_ids.fs import atomic_write_text

log = logging.getLogger(__name__)

DEFAULT_IDS_FILE = Path(".github") / "ids.json"


class MappingStore:
    """JSON object on disk mapping identifier strings to relative paths."""

    def __init__(self, path: Path = DEFAULT_IDS_FILE):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> dict[str, str]:
        """Return the stored mapping, or an empty one if the file is absent."""
        if not self.exists():
            log.warning("%s not found. Creating a new ID file...", self.path)
            return {}

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise MappingFormatError(str(self.path), f"invalid JSON ({exc.msg} at line {exc.lineno})") from exc
        except UnicodeDecodeError as exc:
            raise MappingFormatError(str(self.path), f"not valid UTF-8 ({exc.reason} at byte {exc.start})") from exc

        if not isinstance(data, dict):
            raise MappingFormatError(str(self.path), "expected a JSON object")
        for key, value in data.items():
            if not isinstance(value, str):
                raise MappingFormatError(str(self.path), f"value for {key!r} is not a string")

        log.info("Found %d IDs in %s", len(data), self.path)
        return data

    def save(self, mapping: dict[str, str]) -> Path:
        """Overwrite the store with the full mapping (sorted keys, trailing newline)."""
        payload = json.dumps(mapping, indent=2, sort_keys=True, ensure_ascii=False) + "\n"
        atomic_write_text(self.path, payload)
        log.debug("Wrote %d IDs to %s", len(mapping), self.path)
        return self.path


def load_mapping(path: Path = DEFAULT_IDS_FILE) -> dict[str, str]:
    return MappingStore(path).load()


def save_mapping(mapping: dict[str, str], path: Path = DEFAULT_IDS_FILE) -> Path:
    return MappingStore(path).save(mapping)
