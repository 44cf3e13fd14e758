"""
Blendshape score map -> named feature record.
"""
from __future__ import annotations
from typing import Any, Dict, Mapping, Optional
import logging
import math
import numbers

from core.models import FeatureRecord, InvalidFeatureInput

logger = logging.getLogger(__name__)

# record field -> upstream blendshape name
DIRECT = {
    "smile_left": "mouthSmileLeft",
    "smile_right": "mouthSmileRight",
    "frown_left": "mouthFrownLeft",
    "frown_right": "mouthFrownRight",
    "mouth_upper_up_left": "mouthUpperUpLeft",
    "mouth_upper_up_right": "mouthUpperUpRight",
    "brow_down_left": "browDownLeft",
    "brow_down_right": "browDownRight",
    "brow_inner_up": "browInnerUp",
    "brow_outer_up_left": "browOuterUpLeft",
    "brow_outer_up_right": "browOuterUpRight",
    "eye_wide_left": "eyeWideLeft",
    "eye_wide_right": "eyeWideRight",
    "eye_squint_left": "eyeSquintLeft",
    "eye_squint_right": "eyeSquintRight",
    "eye_blink_left": "eyeBlinkLeft",
    "eye_blink_right": "eyeBlinkRight",
    "mouth_pucker": "mouthPucker",
    "mouth_funnel": "mouthFunnel",
    "jaw_open": "jawOpen",
    "mouth_close": "mouthClose",
    "mouth_stretch_left": "mouthStretchLeft",
    "mouth_stretch_right": "mouthStretchRight",
    "mouth_press": "mouthPress",
    "mouth_left": "mouthLeft",
    "mouth_right": "mouthRight",
    "cheek_puff": "cheekPuff",
    "cheek_squint_left": "cheekSquintLeft",
    "cheek_squint_right": "cheekSquintRight",
    "nose_sneer_left": "noseSneerLeft",
    "nose_sneer_right": "noseSneerRight",
}

# bilateral feature -> (left field, right field)
BILATERAL = {
    "smile": ("smile_left", "smile_right"),
    "frown": ("frown_left", "frown_right"),
    "mouth_upper_up": ("mouth_upper_up_left", "mouth_upper_up_right"),
    "brow_down": ("brow_down_left", "brow_down_right"),
    "brow_outer_up": ("brow_outer_up_left", "brow_outer_up_right"),
    "eye_wide": ("eye_wide_left", "eye_wide_right"),
    "eye_squint": ("eye_squint_left", "eye_squint_right"),
    "cheek_squint": ("cheek_squint_left", "cheek_squint_right"),
    "nose_sneer": ("nose_sneer_left", "nose_sneer_right"),
}


def _as_score(key: Any, value: Any) -> float:
    if not isinstance(key, str):
        raise InvalidFeatureInput(f"feature name {key!r} is not a string")
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidFeatureInput(f"{key}={value!r} is not numeric")
    score = float(value)
    if not math.isfinite(score):
        raise InvalidFeatureInput(f"{key}={value!r} is not finite")
    return score


def blendshapes_to_map(payload: Any) -> Dict[str, float]:
    """
    Flatten an upstream blendshape payload into a name -> score dict.

    Accepts:
      - None (no face) -> {}
      - a mapping {name: score}
      - MediaPipe's category list: dicts with categoryName/score, or objects
        exposing category_name (python tasks API) / categoryName and score
    """
    if payload is None:
        return {}
    if isinstance(payload, Mapping):
        return {k: _as_score(k, v) for k, v in payload.items()}
    if isinstance(payload, (list, tuple)):
        out: Dict[str, float] = {}
        for item in payload:
            if isinstance(item, Mapping):
                name = item.get("categoryName", item.get("category_name"))
                score = item.get("score")
            else:
                name = getattr(item, "category_name", None) or getattr(item, "categoryName", None)
                score = getattr(item, "score", None)
            if name is None:
                raise InvalidFeatureInput(f"blendshape entry {item!r} has no category name")
            out[name] = _as_score(name, score)
        return out
    raise InvalidFeatureInput(f"unsupported blendshape payload type {type(payload).__name__}")


def extract_features(raw: Optional[Mapping[str, float]]) -> FeatureRecord:
    """
    Build a FeatureRecord from a raw blendshape score map.

    Missing names default to 0.0; bilateral features are the mean of left and
    right; mouth_asymmetry is |mouthLeft - mouthRight|.

    Raises:
        InvalidFeatureInput: a score is non-numeric or not finite.
    """
    scores = blendshapes_to_map(raw)

    values: Dict[str, float] = {
        field: scores.get(name, 0.0) for field, name in DIRECT.items()
    }
    for field, (left, right) in BILATERAL.items():
        values[field] = (values[left] + values[right]) / 2
    values["mouth_asymmetry"] = abs(values["mouth_left"] - values["mouth_right"])

    logger.debug(f"[features] extracted from {len(scores)} blendshapes")
    return FeatureRecord(**values)
