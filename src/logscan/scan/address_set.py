"""Shared deduplication store for addresses seen by all workers."""

from __future__ import annotations

import threading


class AddressSet:
    """Insert-only set of addresses with a distinct counter.

    Membership and the counter are guarded by one lock, so the existence
    check and the insert-plus-increment form a single critical section.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._seen: set[str] = set()
        self._distinct_count = 0

    def insert_if_absent(self, address: str) -> bool:
        """Insert address; return True when this call added a new entry."""
        with self._lock:
            if address in self._seen:
                return False
            self._seen.add(address)
            self._distinct_count += 1
            return True

    @property
    def distinct_count(self) -> int:
        """Return number of distinct addresses inserted so far."""
        with self._lock:
            return self._distinct_count

    def __len__(self) -> int:
        return self.distinct_count

    def __contains__(self, address: object) -> bool:
        with self._lock:
            return address in self._seen
