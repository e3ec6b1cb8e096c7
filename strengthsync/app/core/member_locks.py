"""
Per-member locks serializing theme replacement

Only needed when rows are committed in parallel: two writers must never
interleave delete/insert for the same member.
"""
import threading
from contextlib import contextmanager
from typing import Dict


class _MemberLock:
    """A lock plus the number of threads holding or waiting for it"""

    __slots__ = ("lock", "users")

    def __init__(self):
        self.lock = threading.Lock()
        self.users = 0


class MemberLockRegistry:
    """
    Hands out one lock per member id

    An entry exists only while some thread holds or waits for it, so the
    registry stays as small as the set of members being committed right now.
    """

    def __init__(self):
        self._locks: Dict[str, _MemberLock] = {}
        self._guard = threading.Lock()

    @contextmanager
    def hold(self, member_id: str):
        """Context manager holding the member's lock"""
        with self._guard:
            entry = self._locks.get(member_id)
            if entry is None:
                entry = _MemberLock()
                self._locks[member_id] = entry
            entry.users += 1

        try:
            with entry.lock:
                yield
        finally:
            with self._guard:
                entry.users -= 1
                if entry.users == 0:
                    del self._locks[member_id]

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)


_registry = None
_registry_lock = threading.Lock()


def get_member_lock_registry() -> MemberLockRegistry:
    """Get or create the process-wide lock registry"""
    global _registry
    if _registry is None:
        with _registry_lock:
            if _registry is None:
                _registry = MemberLockRegistry()
    return _registry
