"""Random fixed-length document identifiers."""

from __future__ import annotations

import random
import string
from typing import Container

from doc_ids.errors import IdGenerationError

ALPHABET = string.ascii_letters + string.digits
DEFAULT_ID_LENGTH = 6
MAX_ATTEMPTS = 5


def generate_id(
    taken: Container[str],
    *,
    length: int = DEFAULT_ID_LENGTH,
    max_attempts: int = MAX_ATTEMPTS,
    rng: random.Random | None = None,
) -> str:
    """Draw a token not in ``taken``; give up after ``max_attempts`` collisions."""
    if length < 1:
        raise ValueError("length must be positive")
    rng = rng or random.Random()
    for _ in range(max_attempts):
        token = "".join(rng.choices(ALPHABET, k=length))
        if token not in taken:
            return token
    raise IdGenerationError(max_attempts)
