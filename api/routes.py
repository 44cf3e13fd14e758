"""
REST endpoints for frame-by-frame mood detection.
"""
import threading
import logging
from fastapi import APIRouter, HTTPException

from core.config import Settings
from core.models import ClassifyRequest, FrameInput, InvalidFeatureInput, QueueAddRequest
from core.mood_queue import MoodQueue
from core.pipeline import MoodSession, classify

router = APIRouter()
settings = Settings()
logger = logging.getLogger(__name__)

# One session per process; the lock keeps the smoother single-writer
session = MoodSession(settings)
session_lock = threading.Lock()
mood_queue = MoodQueue()


@router.post("/mood/frame")
def mood_frame(frame: FrameInput):
    """
    Feed one frame of blendshape scores into the live session.

    Args:
        frame: Timestamp plus blendshapes (mapping or MediaPipe category list);
            omit blendshapes when no face was found.

    Returns:
        The smoothed reading, or {"skipped": true} for a duplicate timestamp.
    """
    try:
        with session_lock:
            reading = session.process_frame(frame.timestamp, frame.blendshapes)
    except InvalidFeatureInput as e:
        logger.warning(f"[api] /mood/frame rejected: {e}")
        raise HTTPException(status_code=422, detail=str(e))
    if reading is None:
        return {"skipped": True, "timestamp": frame.timestamp}
    return reading


@router.post("/mood/classify")
def mood_classify(req: ClassifyRequest):
    """
    Classify one frame without touching the session history.
    """
    try:
        mood, scores = classify(req.blendshapes, settings)
    except InvalidFeatureInput as e:
        logger.warning(f"[api] /mood/classify rejected: {e}")
        raise HTTPException(status_code=422, detail=str(e))
    return {"mood": mood, "scores": scores}


@router.get("/mood/status")
def mood_status():
    with session_lock:
        return session.status()


@router.post("/mood/reset")
def mood_reset():
    with session_lock:
        session.reset()
    logger.debug("[api] session reset")
    return {"status": "reset"}


@router.get("/queue")
def queue_list():
    return mood_queue.items()


@router.post("/queue")
def queue_add(req: QueueAddRequest | None = None):
    """
    Queue a mood; defaults to the session's current smoothed mood.
    """
    mood = req.mood if (req is not None and req.mood) else None
    if mood is None:
        with session_lock:
            mood = session.current_mood
    return mood_queue.add(mood)


@router.delete("/queue/{item_id}")
def queue_remove(item_id: int):
    if not mood_queue.remove(item_id):
        raise HTTPException(status_code=404, detail=f"Queue item not found: {item_id}")
    return {"status": "removed", "id": item_id}
