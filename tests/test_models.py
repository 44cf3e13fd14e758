import pytest
from pydantic import ValidationError

from core.models import FrameInput, MoodReading, MoodQueueItem, SessionStatus

def test_models():
    r = MoodReading(ts=1.0, mood="happy", raw_mood="sad", scores={"happy": 1.2},
                    status="Detected: happy (raw: sad)", music_query="upbeat happy music playlist")
    st = SessionStatus(frames_processed=1, frames_skipped=0, no_face_frames=0,
                       warming_up=True, history=["sad"], last_reading=r)
    assert st.last_reading.mood == "happy"
    q = MoodQueueItem(id=1, mood="neutral", timestamp=0.0, music_query="ambient chill music")
    assert q.model_dump()["mood"] == "neutral"

def test_category_is_closed():
    with pytest.raises(ValidationError):
        MoodReading(ts=0.0, mood="bored", status="", music_query="")

def test_frame_input_forms():
    f = FrameInput(timestamp=0.5, blendshapes=[{"categoryName": "jawOpen", "score": 0.3}])
    assert f.blendshapes[0].categoryName == "jawOpen"
    assert FrameInput(timestamp=0.5).blendshapes is None
    assert FrameInput(timestamp=0.5, blendshapes={"jawOpen": 0.3}).blendshapes == {"jawOpen": 0.3}
