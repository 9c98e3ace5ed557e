"""Purchase decision engine - core heuristic for "should I buy this?" """

import math
from dataclasses import replace
from decimal import Decimal, InvalidOperation
from typing import Dict, List, Optional
from smartspend_companion.domain.models import (
    BudgetCategory,
    BudgetContext,
    DecisionResult,
    DecisiveFactor,
    EmotionalTag,
    PurchaseRequest,
    Recommendation,
)
from smartspend_companion.domain.exceptions import ValidationError

DESIRE_WEIGHT = 0.45
URGENCY_WEIGHT = 0.55

YES_THRESHOLD = 0.6
NO_THRESHOLD = 0.2
CONFIDENCE_MIDPOINT = 0.4
FORCED_NO_PRESSURE = 1.0

EMOTIONAL_ADJUSTMENTS: Dict[EmotionalTag, float] = {
    EmotionalTag.STRESS: -0.15,
    EmotionalTag.BOREDOM: -0.15,
    EmotionalTag.PEER_PRESSURE: -0.15,
    EmotionalTag.NECESSITY: 0.05,
    EmotionalTag.REWARD: 0.05,
}

ALTERNATIVES: Dict[BudgetCategory, List[str]] = {
    BudgetCategory.FOOD_AND_DINING: ["Cook a special meal at home", "Try a new recipe instead", "Have a picnic"],
    BudgetCategory.SHOPPING: ["Check if you already own something similar", "Browse free alternatives online", "Wait for a sale"],
    BudgetCategory.ENTERTAINMENT: ["Find free events in your area", "Try a free trial instead", "Enjoy nature or exercise"],
    BudgetCategory.TRANSPORTATION: ["Walk or cycle if possible", "Use public transport", "Combine errands into one trip"],
    BudgetCategory.OTHER: ["Find a DIY solution", "Borrow from a friend", "Look for free alternatives"],
}


def to_decimal(value) -> Decimal:
    """Coerce a money value to Decimal; None, NaN and garbage become 0"""
    if value is None:
        return Decimal("0")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        return Decimal("0")
    return amount if amount.is_finite() else Decimal("0")


def clamp_level(level: int) -> int:
    """Clamp a 1-10 self-reported level instead of rejecting it"""
    if isinstance(level, float) and math.isnan(level):
        return 1
    return max(1, min(10, int(level)))


def validate_purchase_request(request: PurchaseRequest) -> PurchaseRequest:
    """
    Reject malformed requests before any scoring happens.

    Returns a normalized copy: Decimal amount, enum category and a parsed
    emotional tag (unknown tags are dropped rather than rejected).
    """
    if not request.item_name or not str(request.item_name).strip():
        raise ValidationError("Item name is required")

    if request.amount is None:
        raise ValidationError("Amount is required")
    try:
        amount = Decimal(str(request.amount))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"Amount is not a number: {request.amount!r}")
    if not amount.is_finite() or amount <= 0:
        raise ValidationError("Amount must be a positive number")

    if request.category is None:
        raise ValidationError("Category is required")
    category = BudgetCategory.parse(request.category)
    if category is None:
        raise ValidationError(f"Unknown budget category: {request.category}")

    if request.desire_level is None or request.urgency is None:
        raise ValidationError("Desire level and urgency are required")

    return replace(
        request,
        item_name=str(request.item_name).strip(),
        amount=amount,
        category=category,
        emotional_tag=EmotionalTag.parse(request.emotional_tag),
    )


def calculate_budget_pressure(amount: Decimal, budget: Optional[BudgetContext]) -> float:
    """
    How far the purchase would push spending past the monthly limit.

    0.0 means it fits; 0.5 means it overshoots by half the limit. A missing
    budget is treated as no constraint.
    """
    if budget is None:
        return 0.0

    limit = to_decimal(budget.monthly_limit)
    spent = to_decimal(budget.spent)
    overshoot = max(Decimal("0"), spent + to_decimal(amount) - limit)

    return round(float(overshoot / max(limit, Decimal("1"))), 4)


def calculate_desire_urgency_score(desire_level: int, urgency: int) -> float:
    """
    Weighted average of desire and urgency, normalized to 0-1.

    Urgency weighs slightly more: time-sensitive needs should lean toward
    approval more than plain wants.
    """
    desire = clamp_level(desire_level) / 10
    urgent = clamp_level(urgency) / 10
    return round(DESIRE_WEIGHT * desire + URGENCY_WEIGHT * urgent, 4)


def emotional_adjustment(tag: Optional[EmotionalTag]) -> float:
    """Penalty for regret-prone contexts, small bonus for needs and rewards"""
    if tag is None:
        return 0.0
    return EMOTIONAL_ADJUSTMENTS.get(tag, 0.0)


def classify_net_score(net_score: float, budget_pressure: float = 0.0) -> Recommendation:
    """
    Map net score to a recommendation tier.

    - >= 0.6: yes
    - <= 0.2: no
    - between: think_again
    A purchase that overshoots the limit by more than the whole limit is
    always a no.
    """
    if budget_pressure > FORCED_NO_PRESSURE:
        return Recommendation.NO
    if net_score >= YES_THRESHOLD:
        return Recommendation.YES
    if net_score <= NO_THRESHOLD:
        return Recommendation.NO
    return Recommendation.THINK_AGAIN


def calculate_confidence(net_score: float) -> float:
    """Distance from the think_again midpoint, scaled to 0-1"""
    return round(min(1.0, abs(net_score - CONFIDENCE_MIDPOINT) * 2), 3)


def determine_decisive_factor(
    raw_score: float,
    adjusted_score: float,
    budget_pressure: float,
    recommendation: Recommendation,
) -> DecisiveFactor:
    """Find the signal that moved the outcome away from what the others would give"""
    if budget_pressure > FORCED_NO_PRESSURE:
        return DecisiveFactor.BUDGET
    if budget_pressure > 0 and classify_net_score(adjusted_score) != recommendation:
        return DecisiveFactor.BUDGET
    if adjusted_score != raw_score and classify_net_score(raw_score - budget_pressure) != recommendation:
        return DecisiveFactor.EMOTION
    return DecisiveFactor.DESIRE_URGENCY


_VERDICTS = {
    Recommendation.YES: "Go for it!",
    Recommendation.THINK_AGAIN: "Maybe sleep on it for 24 hours.",
    Recommendation.NO: "I'd skip this one for now.",
}


def compose_reasoning(
    request: PurchaseRequest,
    budget: Optional[BudgetContext],
    recommendation: Recommendation,
    factor: DecisiveFactor,
    score: float,
    currency: str = "£",
) -> str:
    """Human-readable justification built around the decisive factor"""
    verdict = _VERDICTS[recommendation]
    category = request.category.value

    if factor == DecisiveFactor.BUDGET and budget is not None:
        remaining = to_decimal(budget.monthly_limit) - to_decimal(budget.spent)
        if remaining <= 0:
            return (
                f"You've already used your whole {category} budget this month, "
                f"and {request.item_name} costs {currency}{request.amount:.2f}. {verdict}"
            )
        return (
            f"{request.item_name} costs {currency}{request.amount:.2f} but you only have "
            f"{currency}{remaining:.2f} left in your {category} budget. {verdict}"
        )

    if factor == DecisiveFactor.EMOTION and request.emotional_tag is not None:
        tag = request.emotional_tag.label.lower()
        if emotional_adjustment(request.emotional_tag) < 0:
            return f"You tagged this purchase as {tag}, and that's when regret tends to follow. {verdict}"
        return f"You tagged this purchase as {tag}, which tips the balance in its favour. {verdict}"

    reasoning = (
        f"Your desire ({clamp_level(request.desire_level)}/10) and urgency "
        f"({clamp_level(request.urgency)}/10) give a score of {score:.2f}. {verdict}"
    )
    if budget is None:
        reasoning += f" There's no {category} budget set, so this is based on desire and urgency alone."
    return reasoning


def decide(
    request: PurchaseRequest,
    budget: Optional[BudgetContext],
    currency: str = "£",
) -> DecisionResult:
    """
    Main entry point: score a purchase request against its budget.

    Raises:
        ValidationError: if the request is malformed
    """
    request = validate_purchase_request(request)

    budget_pressure = calculate_budget_pressure(request.amount, budget)
    raw_score = calculate_desire_urgency_score(request.desire_level, request.urgency)
    adjustment = emotional_adjustment(request.emotional_tag)
    adjusted_score = round(min(1.0, max(0.0, raw_score + adjustment)), 4)

    net_score = round(adjusted_score - budget_pressure, 4)
    recommendation = classify_net_score(net_score, budget_pressure)
    factor = determine_decisive_factor(raw_score, adjusted_score, budget_pressure, recommendation)

    alternatives: List[str] = []
    if recommendation != Recommendation.YES:
        alternatives = list(ALTERNATIVES.get(request.category, ALTERNATIVES[BudgetCategory.OTHER]))

    return DecisionResult(
        recommendation=recommendation,
        confidence=calculate_confidence(net_score),
        reasoning=compose_reasoning(request, budget, recommendation, factor, adjusted_score, currency),
        budget_pressure=budget_pressure,
        desire_urgency_score=adjusted_score,
        net_score=net_score,
        emotional_adjustment=adjustment,
        decisive_factor=factor,
        alternatives=alternatives,
    )
