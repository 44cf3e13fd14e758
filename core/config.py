"""
Configuration for the mood detection pipeline.
"""
from pydantic import BaseModel
import logging
import os

class Settings(BaseModel):
    """
    Runtime settings with environment-variable overrides.
    """
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Temporal smoothing
    MOOD_HISTORY_LENGTH: int = int(os.getenv("MOOD_HISTORY_LENGTH", "15"))
    MOOD_WARMUP_FRAMES: int = int(os.getenv("MOOD_WARMUP_FRAMES", "5"))
    MOOD_CONSENSUS_RATIO: float = float(os.getenv("MOOD_CONSENSUS_RATIO", "0.4"))

    # Scoring
    CONFIDENCE_THRESHOLD: float = float(os.getenv("CONFIDENCE_THRESHOLD", "1.0"))

    def __init__(self, **data):
        super().__init__(**data)
        # Normalize LOG_LEVEL: strip, upper-case, validate against logging names
        level = (self.LOG_LEVEL or "").strip().upper() or "INFO"
        if not isinstance(logging.getLevelName(level), int):
            level = "INFO"
        object.__setattr__(self, "LOG_LEVEL", level)
        object.__setattr__(self, "MOOD_HISTORY_LENGTH", max(1, int(self.MOOD_HISTORY_LENGTH)))
        object.__setattr__(self, "MOOD_WARMUP_FRAMES", min(self.MOOD_HISTORY_LENGTH, max(1, int(self.MOOD_WARMUP_FRAMES))))
        object.__setattr__(self, "MOOD_CONSENSUS_RATIO", min(1.0, max(0.0, float(self.MOOD_CONSENSUS_RATIO))))
