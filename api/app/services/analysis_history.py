"""In-memory history of recent analysis results (newest first)."""

from __future__ import annotations

import threading
from typing import Optional

from app.models.analysis import AnalysisResult

DEFAULT_CAPACITY = 10


class AnalysisHistory:
    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        self._capacity = max(1, int(capacity))
        self._items: list[AnalysisResult] = []
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    def add(self, result: AnalysisResult) -> None:
        """Insert at head; evict the oldest past capacity."""
        with self._lock:
            self._items.insert(0, result)
            del self._items[self._capacity :]

    def recent(self, limit: Optional[int] = None) -> list[AnalysisResult]:
        with self._lock:
            items = list(self._items)
        if limit is not None:
            items = items[: max(0, int(limit))]
        return items

    def latest_for(self, repository: str) -> Optional[AnalysisResult]:
        """Most recent result whose repository matches (case-insensitive)."""
        key = repository.lower()
        with self._lock:
            for item in self._items:
                if item.repository.lower() == key:
                    return item
        return None

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
