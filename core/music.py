"""
Mood -> music search query mapping.
"""
from __future__ import annotations

MOOD_TO_MUSIC = {
    "happy": "upbeat happy music playlist",
    "sad": "melancholic calm music",
    "angry": "intense energetic music",
    "neutral": "ambient chill music",
    "surprised": "exciting uplifting music",
    "fearful": "calming soothing music",
    "disgusted": "alternative indie music",
}


def music_query_for(mood: str | None) -> str:
    return MOOD_TO_MUSIC.get(mood or "neutral", MOOD_TO_MUSIC["neutral"])
