"""
Declarative rule table for blendshape -> emotion scoring.

Each category is one table entry. Cue rules are gated on their primary
indicators, then accumulate weighted terms, combo bonuses and conflict
penalties (in that order). Neutral is a stillness rule: it scores high when
total expressiveness is low.

Weights and thresholds are empirically tuned; comparisons are strict.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from core.models import FeatureRecord

CONFIDENCE_THRESHOLD = 1.0   # best score below this -> neutral


@dataclass(frozen=True)
class Cond:
    """feature > above (and < below, when given)."""
    feature: str
    above: float
    below: Optional[float] = None

    def holds(self, f: FeatureRecord) -> bool:
        v = getattr(f, self.feature)
        return v > self.above and (self.below is None or v < self.below)


@dataclass(frozen=True)
class Term:
    """Adds value * weight when value > threshold; value is the max over features."""
    features: Tuple[str, ...]
    threshold: float
    weight: float

    def value(self, f: FeatureRecord) -> float:
        return max(getattr(f, name) for name in self.features)


@dataclass(frozen=True)
class Bonus:
    when: Tuple[Cond, ...]
    amount: float


@dataclass(frozen=True)
class Penalty:
    when: Cond
    amount: float


@dataclass(frozen=True)
class CueRule:
    category: str
    gate: Tuple[Tuple[Cond, ...], ...]   # any alternative, all conditions within it
    terms: Tuple[Term, ...] = ()
    bonuses: Tuple[Bonus, ...] = ()
    penalties: Tuple[Penalty, ...] = ()


@dataclass(frozen=True)
class StillnessRule:
    category: str
    weights: Tuple[Tuple[str, float], ...]   # summed in this order
    base: float = 2.5
    scale: float = 3.0
    still_below: float = 0.3
    still_bonus: float = 1.5


Rule = Union[CueRule, StillnessRule]


def _t(feature: Union[str, Tuple[str, ...]], threshold: float, weight: float) -> Term:
    features = (feature,) if isinstance(feature, str) else tuple(feature)
    return Term(features, threshold, weight)


RULES: Tuple[Rule, ...] = (
    # Duchenne smile: AU6 + AU12
    CueRule(
        "happy",
        gate=((Cond("smile", 0.3),),),
        terms=(
            _t("smile", 0.3, 3.0),
            _t("cheek_squint", 0.15, 2.0),
            _t("eye_squint", 0.1, 1.5),
        ),
        penalties=(
            Penalty(Cond("brow_down", 0.2), 0.5),
            Penalty(Cond("frown", 0.15), 0.5),
        ),
    ),
    # AU1 + AU4 + AU15
    CueRule(
        "sad",
        gate=((Cond("brow_inner_up", 0.3),), (Cond("frown", 0.2),)),
        terms=(
            _t("brow_inner_up", 0.3, 2.5),
            _t("frown", 0.15, 2.0),
        ),
        bonuses=(
            Bonus((Cond("brow_inner_up", 0.4), Cond("frown", 0.2)), 1.0),
            Bonus((Cond("jaw_open", 0.1, below=0.3),), 0.3),
        ),
        penalties=(Penalty(Cond("smile", 0.2), 0.8),),
    ),
    # AU4 + AU5 + AU7 + AU23
    CueRule(
        "angry",
        gate=((Cond("brow_down", 0.25),), (Cond("eye_squint", 0.3),), (Cond("mouth_press", 0.3),)),
        terms=(
            _t("brow_down", 0.25, 3.0),
            _t("eye_squint", 0.2, 1.5),
            _t("mouth_close", 0.3, 1.5),
            _t("mouth_press", 0.3, 1.5),
        ),
        bonuses=(Bonus((Cond("brow_down", 0.3), Cond("mouth_close", 0.4)), 1.2),),
        penalties=(
            Penalty(Cond("smile", 0.2), 1.0),
            Penalty(Cond("brow_inner_up", 0.3), 0.5),
        ),
    ),
    # AU1 + AU2 + AU5 + AU26
    CueRule(
        "surprised",
        gate=((Cond("eye_wide", 0.4),), (Cond("brow_outer_up", 0.3), Cond("jaw_open", 0.3))),
        terms=(
            _t("eye_wide", 0.4, 2.5),
            _t("brow_inner_up", 0.25, 1.5),
            _t("brow_outer_up", 0.25, 1.5),
            _t("jaw_open", 0.25, 2.0),
        ),
        bonuses=(
            Bonus((Cond("eye_wide", 0.5), Cond("brow_outer_up", 0.3), Cond("jaw_open", 0.3)), 1.5),
        ),
        penalties=(Penalty(Cond("eye_squint", 0.2), 1.0),),
    ),
    # AU1 + AU2 + AU4 + AU5 + AU20 + AU25/26
    CueRule(
        "fearful",
        gate=((Cond("brow_inner_up", 0.35), Cond("eye_wide", 0.3)),),
        terms=(
            _t("brow_inner_up", 0.35, 2.5),
            _t("eye_wide", 0.3, 2.0),
            _t(("mouth_stretch_left", "mouth_stretch_right"), 0.2, 1.5),
            _t("mouth_funnel", 0.15, 1.2),
        ),
        bonuses=(Bonus((Cond("brow_inner_up", 0.4), Cond("eye_wide", 0.4)), 1.0),),
        penalties=(Penalty(Cond("smile", 0.2), 0.8),),
    ),
    # AU9 + AU15 + AU16
    CueRule(
        "disgusted",
        gate=((Cond("mouth_upper_up", 0.25),), (Cond("nose_sneer", 0.25),)),
        terms=(
            _t("mouth_upper_up", 0.25, 3.0),
            _t("nose_sneer", 0.25, 2.5),
            _t("mouth_asymmetry", 0.3, 1.5),
            _t("mouth_pucker", 0.25, 1.2),
        ),
        bonuses=(Bonus((Cond("mouth_upper_up", 0.35), Cond("nose_sneer", 0.2)), 1.0),),
        penalties=(Penalty(Cond("smile", 0.2), 0.8),),
    ),
    StillnessRule(
        "neutral",
        weights=(
            ("smile", 1.0),
            ("frown", 1.0),
            ("brow_down", 1.0),
            ("brow_inner_up", 1.0),
            ("eye_wide", 1.0),
            ("eye_squint", 1.0),
            ("mouth_upper_up", 1.0),
            ("jaw_open", 0.5),
        ),
    ),
)
