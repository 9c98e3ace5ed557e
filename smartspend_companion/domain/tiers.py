"""Generic percentage-to-tier classification shared by the insight analyzers"""

import math
from dataclasses import dataclass
from typing import Sequence
from smartspend_companion.domain.models import Insight, InsightEmotion


@dataclass(frozen=True)
class Tier:
    """One rung of a threshold ladder: matches when percentage >= threshold"""

    threshold: float
    emotion: InsightEmotion
    confidence: float
    template: str
    label: str


def finite_or_zero(value) -> float:
    """Normalize None/NaN/inf/garbage numeric input to 0.0"""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def safe_percentage(part, whole) -> float:
    """part/whole*100, or 0.0 when whole is zero, negative or not a number"""
    part = finite_or_zero(part)
    whole = finite_or_zero(whole)
    if whole <= 0:
        return 0.0
    return part / whole * 100


def classify_percentage(percentage: float, tiers: Sequence[Tier], **context) -> Insight:
    """
    Pick the highest tier whose threshold the percentage reaches.

    The last tier should use threshold float("-inf") as a catch-all. Templates
    are str.format strings; `percentage` plus any context kwargs are available.
    """
    for tier in sorted(tiers, key=lambda t: t.threshold, reverse=True):
        if percentage >= tier.threshold:
            return Insight(
                message=tier.template.format(percentage=percentage, **context),
                emotion=tier.emotion,
                confidence=tier.confidence,
                tier=tier.label,
            )
    raise ValueError("Tier ladder has no catch-all tier")
