"""
Pydantic data models for mood detection IO.
"""
from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field, StrictFloat
from typing import Dict, List, Optional, Literal, Union

# Evaluation order matters: scorer and smoother both keep the first category reaching the max.
CATEGORIES = ("happy", "sad", "angry", "surprised", "fearful", "disgusted", "neutral")

Category = Literal["happy", "sad", "angry", "surprised", "fearful", "disgusted", "neutral"]

EmotionScores = Dict[str, float]


class InvalidFeatureInput(ValueError):
    """Raised for malformed blendshape payloads or unknown categories."""
    def __init__(self, detail: str):
        super().__init__(f"invalid feature input: {detail}")
        self.detail = detail


class FeatureRecord(BaseModel):
    """Named facial features derived from one frame of blendshape scores."""
    model_config = ConfigDict(frozen=True)

    # smile / frown
    smile_left: float = 0.0
    smile_right: float = 0.0
    smile: float = 0.0
    frown_left: float = 0.0
    frown_right: float = 0.0
    frown: float = 0.0

    # upper lip
    mouth_upper_up_left: float = 0.0
    mouth_upper_up_right: float = 0.0
    mouth_upper_up: float = 0.0

    # brows
    brow_down_left: float = 0.0
    brow_down_right: float = 0.0
    brow_down: float = 0.0
    brow_inner_up: float = 0.0
    brow_outer_up_left: float = 0.0
    brow_outer_up_right: float = 0.0
    brow_outer_up: float = 0.0

    # eyes
    eye_wide_left: float = 0.0
    eye_wide_right: float = 0.0
    eye_wide: float = 0.0
    eye_squint_left: float = 0.0
    eye_squint_right: float = 0.0
    eye_squint: float = 0.0
    eye_blink_left: float = 0.0
    eye_blink_right: float = 0.0

    # mouth shape
    mouth_pucker: float = 0.0
    mouth_funnel: float = 0.0
    jaw_open: float = 0.0
    mouth_close: float = 0.0
    mouth_stretch_left: float = 0.0
    mouth_stretch_right: float = 0.0
    mouth_press: float = 0.0
    mouth_left: float = 0.0
    mouth_right: float = 0.0
    mouth_asymmetry: float = 0.0

    # cheeks / nose
    cheek_puff: float = 0.0
    cheek_squint_left: float = 0.0
    cheek_squint_right: float = 0.0
    cheek_squint: float = 0.0
    nose_sneer_left: float = 0.0
    nose_sneer_right: float = 0.0
    nose_sneer: float = 0.0


class BlendshapeCategory(BaseModel):
    """One entry of MediaPipe's per-face blendshape list."""
    categoryName: str
    score: StrictFloat


class FrameInput(BaseModel):
    timestamp: float
    # None / empty means no face was detected in this frame
    blendshapes: Union[Dict[str, StrictFloat], List[BlendshapeCategory], None] = None


class ClassifyRequest(BaseModel):
    blendshapes: Union[Dict[str, StrictFloat], List[BlendshapeCategory], None] = None


class MoodReading(BaseModel):
    ts: float
    mood: Category
    raw_mood: Optional[Category] = None
    scores: EmotionScores = Field(default_factory=dict)
    flag: Optional[Literal["NO_FACE"]] = None
    status: str
    music_query: str


class SessionStatus(BaseModel):
    frames_processed: int
    frames_skipped: int
    no_face_frames: int
    warming_up: bool
    history: List[Category] = Field(default_factory=list)
    last_reading: MoodReading | None = None


class MoodSummary(BaseModel):
    frames: int
    no_face_frames: int
    mood_share: Dict[str, float] = Field(default_factory=dict)
    switches: int
    dominant_mood: Optional[Category] = None
    mean_scores: EmotionScores = Field(default_factory=dict)


class MoodQueueItem(BaseModel):
    id: int
    mood: Category
    timestamp: float
    music_query: str


class QueueAddRequest(BaseModel):
    mood: Optional[Category] = None
