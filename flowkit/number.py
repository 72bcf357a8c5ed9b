"""Number functions."""

from __future__ import annotations

import random
from typing import Any

from .coerce import CoercionError, to_int

_DEFAULT_LIMIT = 10


def random_int(*args: Any) -> int:
    """Return a random integer in ``[0, limit)``; the limit defaults to 10."""
    limit = _DEFAULT_LIMIT
    if args:
        try:
            limit = to_int(args[0])
        except CoercionError:
            limit = _DEFAULT_LIMIT
    if limit <= 0:
        raise ValueError(f"random limit must be positive, got {limit}")
    return random.randrange(limit)