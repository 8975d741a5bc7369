"""Fatal error taxonomy and process exit codes."""

from __future__ import annotations

from dataclasses import dataclass

OK = 0
ERR_DRIFT = 1
ERR_USAGE = 2
ERR_DUPLICATE = 3
ERR_MISSING = 4
ERR_EXHAUSTED = 5
ERR_FORMAT = 6


@dataclass
class DocIdError(Exception):
    message: str
    code: int = ERR_USAGE

    def __str__(self) -> str:
        return self.message


class DuplicateIdError(DocIdError):
    def __init__(self, token: str, path: str, other_path: str) -> None:
        super().__init__(f"Duplicate ID {token} found in {path} and {other_path}", ERR_DUPLICATE)
        self.token = token
        self.paths = (path, other_path)


class MissingIdError(DocIdError):
    def __init__(self, token: str, expected_path: str) -> None:
        super().__init__(f"ID {token} not found in any files (last seen in {expected_path})", ERR_MISSING)
        self.token = token
        self.expected_path = expected_path


class IdGenerationError(DocIdError):
    def __init__(self, attempts: int) -> None:
        super().__init__(f"Failed to generate a unique ID after {attempts} attempts", ERR_EXHAUSTED)
        self.attempts = attempts


class MappingFormatError(DocIdError):
    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Malformed ID file {path}: {reason}", ERR_FORMAT)
        self.path = path
