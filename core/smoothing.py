"""
Temporal smoothing of per-frame moods via majority consensus.
"""
from __future__ import annotations
from collections import Counter, deque
from typing import Deque, Optional
import logging

from core.config import Settings
from core.models import CATEGORIES, Category, InvalidFeatureInput

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LENGTH = 15    # ~15 frames of evidence
DEFAULT_WARMUP = 5             # pass raw moods through until this many are seen
DEFAULT_CONSENSUS = 0.4        # share of the window needed to assert a non-neutral mood


class MoodSmoother:
    """
    Bounded FIFO of raw moods -> stabilized mood.

    Neutral never needs consensus; any other mood needs at least
    `consensus` of the window. Without consensus the raw mood passes through.
    """
    def __init__(
        self,
        history_length: int = DEFAULT_HISTORY_LENGTH,
        warmup: int = DEFAULT_WARMUP,
        consensus: float = DEFAULT_CONSENSUS,
    ):
        self.history_length = int(history_length)
        # warm-up longer than the window would never end
        self.warmup = min(int(warmup), self.history_length)
        self.consensus = float(consensus)
        self._history: Deque[Category] = deque(maxlen=self.history_length)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "MoodSmoother":
        s = settings or Settings()
        return cls(
            history_length=s.MOOD_HISTORY_LENGTH,
            warmup=s.MOOD_WARMUP_FRAMES,
            consensus=s.MOOD_CONSENSUS_RATIO,
        )

    @property
    def history(self) -> tuple[Category, ...]:
        return tuple(self._history)

    @property
    def is_warming_up(self) -> bool:
        return len(self._history) < self.warmup

    def counts(self) -> Counter:
        # Counter keeps first-seen order, which max() relies on for ties
        return Counter(self._history)

    def reset(self) -> None:
        """Clear history (new capture session)."""
        self._history.clear()

    def smooth(self, raw: Category) -> Category:
        if raw not in CATEGORIES:
            raise InvalidFeatureInput(f"unknown mood category {raw!r}")

        self._history.append(raw)
        if self.is_warming_up:
            return raw

        counts = self.counts()
        dominant = max(counts, key=counts.get)
        threshold = len(self._history) * self.consensus

        if dominant == "neutral" or counts[dominant] >= threshold:
            if dominant != raw:
                logger.debug(f"[smoother] raw={raw} -> {dominant} ({counts[dominant]}/{len(self._history)})")
            return dominant
        return raw
