"""
In-memory queue of captured moods (not persisted).
"""
from __future__ import annotations
from typing import List, Optional
import itertools
import threading
import time

from core.models import CATEGORIES, InvalidFeatureInput, MoodQueueItem
from core.music import music_query_for


class MoodQueue:
    """Ordered list of moods the user chose to keep, each with its music query."""
    def __init__(self):
        self._items: List[MoodQueueItem] = []
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def add(self, mood: str, timestamp: Optional[float] = None) -> MoodQueueItem:
        if mood not in CATEGORIES:
            raise InvalidFeatureInput(f"unknown mood category {mood!r}")
        item = MoodQueueItem(
            id=next(self._ids),
            mood=mood,
            timestamp=time.time() if timestamp is None else float(timestamp),
            music_query=music_query_for(mood),
        )
        with self._lock:
            self._items.append(item)
        return item

    def remove(self, item_id: int) -> bool:
        with self._lock:
            for i, item in enumerate(self._items):
                if item.id == item_id:
                    del self._items[i]
                    return True
        return False

    def items(self) -> List[MoodQueueItem]:
        with self._lock:
            return list(self._items)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def __len__(self) -> int:
        return len(self._items)
