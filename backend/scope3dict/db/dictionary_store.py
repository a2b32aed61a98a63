"""In-memory, append-only dictionary store.

Writers are serialized by a lock; the entry tuple is swapped copy-on-write,
so a matching pass holding a snapshot keeps seeing a stable collection while
new entries land.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from dataclasses import dataclass

from scope3dict.models.dictionary_entry import DictionaryEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DictionaryStats:
    total_entries: int
    learned_entries: int
    manual_entries: int

    @classmethod
    def of(cls, entries: Iterable[DictionaryEntry]) -> DictionaryStats:
        entries = tuple(entries)
        return cls(
            total_entries=len(entries),
            learned_entries=sum(1 for e in entries if e.source == "learned"),
            manual_entries=sum(1 for e in entries if e.source == "manual"),
        )


class DictionaryStore:
    def __init__(self, entries: Iterable[DictionaryEntry] = ()):
        self._lock = threading.Lock()
        self._entries: tuple[DictionaryEntry, ...] = tuple(entries)

    def __len__(self) -> int:
        return len(self._entries)

    def snapshot(self) -> tuple[DictionaryEntry, ...]:
        """Current entries in insertion order. Later writes don't affect it."""
        return self._entries

    def get(self, entry_id: str) -> DictionaryEntry | None:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def append(self, entry: DictionaryEntry) -> None:
        self.extend([entry])

    def extend(self, entries: Iterable[DictionaryEntry]) -> int:
        """Append a batch atomically. Returns the number of entries added."""
        batch = tuple(entries)
        if not batch:
            return 0
        with self._lock:
            self._entries = self._entries + batch
            total = len(self._entries)
        logger.info("Dictionary store: +%d entries (total %d)", len(batch), total)
        return len(batch)

    def stats(self) -> DictionaryStats:
        return DictionaryStats.of(self._entries)
