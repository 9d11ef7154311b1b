"""Id allocation for forked arrangements and containers.

Ids are never derived from wall-clock time: two forks in the same clock
tick would collide. Allocators are injected into the version graph so
tests can pin the sequence.

INVARIANT: An allocated id is never a member of the ``taken`` set it was
allocated against.
"""

from __future__ import annotations

import uuid
from collections.abc import Collection
from typing import Protocol


class IdAllocator(Protocol):
    """Produces fresh ids that do not collide with existing ones."""

    def allocate(self, prefix: str, taken: Collection[str]) -> str: ...


class CounterIdAllocator:
    """Monotonic counter allocator: ``arr-0001``, ``arr-0002``, ...

    Each prefix has its own counter. A counter never goes backwards, and
    ids already present in *taken* (for example from a loaded workspace)
    are skipped.
    """

    def __init__(self, start: int = 1) -> None:
        self._start = start
        self._next: dict[str, int] = {}

    def allocate(self, prefix: str, taken: Collection[str]) -> str:
        n = self._next.get(prefix, self._start)
        while True:
            candidate = f"{prefix}-{n:04d}"
            n += 1
            if candidate not in taken:
                self._next[prefix] = n
                return candidate


class UuidIdAllocator:
    """Random allocator: ``arr-3f2a9c1b7d4e``."""

    def allocate(self, prefix: str, taken: Collection[str]) -> str:
        while True:
            candidate = f"{prefix}-{uuid.uuid4().hex[:12]}"
            if candidate not in taken:
                return candidate
