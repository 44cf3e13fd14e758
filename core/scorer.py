"""
Rule-table evaluation and category selection.
"""
from __future__ import annotations
from typing import Optional, Sequence, Tuple
import logging

from core.models import CATEGORIES, Category, EmotionScores, FeatureRecord
from core.rules import CONFIDENCE_THRESHOLD, RULES, CueRule, Rule, StillnessRule

logger = logging.getLogger(__name__)


def expressiveness(rule: StillnessRule, f: FeatureRecord) -> float:
    total = 0.0
    for name, weight in rule.weights:
        total += getattr(f, name) * weight
    return total


def evaluate_rule(rule: Rule, f: FeatureRecord) -> float:
    """Score one category for one frame."""
    if isinstance(rule, StillnessRule):
        total = expressiveness(rule, f)
        s = max(0.0, rule.base - total * rule.scale)
        if total < rule.still_below:
            s += rule.still_bonus
        return s

    if isinstance(rule, CueRule):
        if not any(all(c.holds(f) for c in alt) for alt in rule.gate):
            return 0.0
        s = 0.0
        for term in rule.terms:
            v = term.value(f)
            if v > term.threshold:
                s += v * term.weight
        for bonus in rule.bonuses:
            if all(c.holds(f) for c in bonus.when):
                s += bonus.amount
        for penalty in rule.penalties:
            if penalty.when.holds(f):
                s -= penalty.amount
        return s

    raise TypeError(f"unknown rule type: {type(rule).__name__}")


def score(
    features: Optional[FeatureRecord],
    confidence_threshold: float = CONFIDENCE_THRESHOLD,
    rules: Sequence[Rule] = RULES,
) -> Tuple[Category, EmotionScores]:
    """
    Score every category and select the raw mood for this frame.

    The first category (in CATEGORIES order) with a strictly higher score than
    all before it wins. A best score under `confidence_threshold` yields
    "neutral". No features (None) means no expression: "neutral", all zeros.

    Returns:
        (category, scores) with scores covering all seven categories.
    """
    scores: EmotionScores = {c: 0.0 for c in CATEGORIES}
    if features is None:
        return "neutral", scores

    for rule in rules:
        scores[rule.category] = evaluate_rule(rule, features)

    best: Category = "neutral"
    best_score = 0.0
    for category in CATEGORIES:
        if scores[category] > best_score:
            best, best_score = category, scores[category]

    if best_score < confidence_threshold:
        logger.debug(f"[scorer] best={best} score={best_score:.3f} below floor -> neutral")
        return "neutral", scores

    logger.debug(f"[scorer] best={best} score={best_score:.3f}")
    return best, scores
