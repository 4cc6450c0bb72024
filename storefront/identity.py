# storefront/identity.py
"""Synthetic identifiers and cover colours for catalog records."""

import random
import time
from typing import List


def random_cover_color() -> str:
    """Return a random ``#rrggbb`` colour (always six hex digits)."""
    return f"#{random.randrange(0x1000000):06x}"


class IdSequence:
    """Monotonic integer ids seeded from wall-clock milliseconds.

    Two ids handed out within the same millisecond still differ: the
    sequence never returns a value lower than or equal to one it has
    already returned.
    """

    def __init__(self) -> None:
        self._last = 0

    @staticmethod
    def _now_ms() -> int:
        return int(time.time() * 1000)

    def next(self) -> int:
        candidate = max(self._now_ms(), self._last + 1)
        self._last = candidate
        return candidate

    def reserve(self, count: int) -> List[int]:
        """Return ``count`` consecutive ids (base time + position)."""
        if count <= 0:
            return []
        base = max(self._now_ms(), self._last + 1)
        ids = [base + index for index in range(count)]
        self._last = ids[-1]
        return ids


# Shared by the generator and the store so ids never collide between them.
default_sequence = IdSequence()
