"""Per-user mutation locks."""

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from uuid import UUID


@dataclass
class _Entry:
    lock: threading.Lock = field(default_factory=threading.Lock)
    holders: int = 0


class UserLocks:
    """Registry of one lock per user id.

    An entry exists only while some thread holds or waits for it, so the
    registry is bounded by the number of users with in-flight mutations.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._entries: dict[UUID, _Entry] = {}

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)

    @contextmanager
    def hold(self, user_id: UUID) -> Iterator[None]:
        """Serialize the enclosed block with other mutations of this user."""
        with self._guard:
            entry = self._entries.setdefault(user_id, _Entry())
            entry.holders += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._guard:
                entry.holders -= 1
                if entry.holders == 0:
                    del self._entries[user_id]
