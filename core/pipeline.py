# core/pipeline.py
"""
Per-frame mood pipeline: features -> scorer -> smoother.
"""
from __future__ import annotations
from collections import Counter
from typing import Any, Dict, Iterable, List, Optional, Tuple
import logging
import math
import numbers

import numpy as np
from pydantic import ValidationError

from core.config import Settings
from core.features import blendshapes_to_map, extract_features
from core.models import (
    CATEGORIES,
    Category,
    EmotionScores,
    FrameInput,
    InvalidFeatureInput,
    MoodReading,
    MoodSummary,
    SessionStatus,
)
from core.music import music_query_for
from core.scorer import score
from core.smoothing import MoodSmoother

logger = logging.getLogger(__name__)

NO_FACE_STATUS = "No face detected"


def status_line(mood: str, raw_mood: Optional[str]) -> str:
    if raw_mood and raw_mood != mood:
        return f"Detected: {mood} (raw: {raw_mood})"
    return f"Detected: {mood}"


def classify(blendshapes: Any, settings: Optional[Settings] = None) -> Tuple[Category, EmotionScores]:
    """
    Stateless raw classification of one frame (no smoothing).
    """
    s = settings or Settings()
    features = extract_features(blendshapes_to_map(blendshapes))
    return score(features, confidence_threshold=s.CONFIDENCE_THRESHOLD)


class MoodSession:
    """
    One detection session: owns the smoothing history and the duplicate-frame guard.

    Not thread-safe; callers must feed frames one at a time.
    """
    def __init__(self, settings: Optional[Settings] = None):
        self.s = settings or Settings()
        self.smoother = MoodSmoother.from_settings(self.s)
        self._last_ts: Optional[float] = None
        self._last_reading: Optional[MoodReading] = None
        self._frames = 0
        self._skipped = 0
        self._no_face = 0

    # ---- lifecycle ----
    def reset(self) -> None:
        """Session boundary (e.g. camera stream re-acquired)."""
        self.smoother.reset()
        self._last_ts = None
        self._last_reading = None
        self._frames = 0
        self._skipped = 0
        self._no_face = 0
        logger.debug("[session] reset")

    def status(self) -> SessionStatus:
        return SessionStatus(
            frames_processed=self._frames,
            frames_skipped=self._skipped,
            no_face_frames=self._no_face,
            warming_up=self.smoother.is_warming_up,
            history=list(self.smoother.history),
            last_reading=self._last_reading,
        )

    @property
    def current_mood(self) -> Category:
        return self._last_reading.mood if self._last_reading else "neutral"

    # ---- frames ----
    def process_frame(self, timestamp: float, blendshapes: Any) -> MoodReading | None:
        """
        Process one frame result from the upstream face tracker.

        Args:
            timestamp: frame timestamp; a repeat of the last accepted one is skipped.
            blendshapes: name -> score mapping or MediaPipe category list;
                None / empty means no face in this frame.

        Returns:
            MoodReading, or None for a duplicate frame.

        Raises:
            InvalidFeatureInput: malformed timestamp or scores.
        """
        if isinstance(timestamp, bool) or not isinstance(timestamp, numbers.Real) or not math.isfinite(timestamp):
            raise InvalidFeatureInput(f"timestamp {timestamp!r} is not a finite number")
        ts = float(timestamp)
        if self._last_ts is not None and ts == self._last_ts:
            self._skipped += 1
            logger.debug(f"[session] duplicate frame ts={ts}; skipped")
            return None

        raw_map = blendshapes_to_map(blendshapes)
        self._last_ts = ts
        self._frames += 1

        if not raw_map:
            self._no_face += 1
            mood = self.current_mood
            logger.debug(f"[session] ts={ts} no face; holding mood={mood}")
            reading = MoodReading(
                ts=ts,
                mood=mood,
                flag="NO_FACE",
                status=NO_FACE_STATUS,
                music_query=music_query_for(mood),
            )
        else:
            raw_mood, scores = score(
                extract_features(raw_map),
                confidence_threshold=self.s.CONFIDENCE_THRESHOLD,
            )
            mood = self.smoother.smooth(raw_mood)
            reading = MoodReading(
                ts=ts,
                mood=mood,
                raw_mood=raw_mood,
                scores=scores,
                status=status_line(mood, raw_mood),
                music_query=music_query_for(mood),
            )

        self._last_reading = reading
        return reading


def _as_frame(frame: Any) -> FrameInput:
    if isinstance(frame, FrameInput):
        return frame
    try:
        return FrameInput.model_validate(frame)
    except ValidationError as e:
        raise InvalidFeatureInput(f"bad frame {frame!r}: {e.errors()[0].get('msg', 'validation error')}") from e


def replay_frames(frames: Iterable[Any], settings: Optional[Settings] = None) -> List[MoodReading]:
    """
    Run a fresh session over recorded frames; duplicates are dropped.
    """
    session = MoodSession(settings)
    readings: List[MoodReading] = []
    for frame in frames:
        f = _as_frame(frame)
        reading = session.process_frame(f.timestamp, f.blendshapes)
        if reading is not None:
            readings.append(reading)
    logger.debug(f"[pipeline] replay finished; readings={len(readings)}")
    return readings


def summarize_readings(readings: List[MoodReading]) -> MoodSummary:
    """
    Aggregate a reading timeline: mood shares, switches, mean raw scores.
    """
    moods = [r.mood for r in readings]
    frames = len(moods)
    counts = Counter(moods)

    share: Dict[str, float] = {
        c: round(counts[c] / frames, 4) for c in CATEGORIES if counts[c]
    } if frames else {}
    switches = sum(1 for a, b in zip(moods, moods[1:]) if a != b)

    scored = [r.scores for r in readings if r.flag is None and r.scores]
    mean_scores: Dict[str, float] = {}
    if scored:
        mat = np.array([[sc.get(c, 0.0) for c in CATEGORIES] for sc in scored], dtype=float)
        mean_scores = {c: round(float(m), 4) for c, m in zip(CATEGORIES, mat.mean(axis=0))}

    return MoodSummary(
        frames=frames,
        no_face_frames=sum(1 for r in readings if r.flag == "NO_FACE"),
        mood_share=share,
        switches=switches,
        dominant_mood=counts.most_common(1)[0][0] if counts else None,
        mean_scores=mean_scores,
    )
