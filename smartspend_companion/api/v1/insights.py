"""POST /v1/insights/* - companion commentary on budgets, goals and emotions"""

from fastapi import APIRouter, Depends

from smartspend_companion.api.v1.schemas import (
    BudgetInsightRequest,
    EmotionInsightRequest,
    GoalInsightRequest,
    InsightResponse,
)
from smartspend_companion.api.dependencies import get_dialogue
from smartspend_companion.companion.dialogue import DialogueBank
from smartspend_companion.config import settings
from smartspend_companion.domain.insights import analyze_budget, analyze_emotion, analyze_goal, emoji_for
from smartspend_companion.domain.models import Insight

router = APIRouter()


def _to_response(insight: Insight) -> InsightResponse:
    return InsightResponse(
        message=insight.message,
        emotion=insight.emotion.value,
        emoji=emoji_for(insight.emotion),
        confidence=insight.confidence,
        tier=insight.tier,
    )


@router.post("/insights/budget", response_model=InsightResponse)
def budget_insight(body: BudgetInsightRequest):
    return _to_response(analyze_budget(body.spent, body.limit, body.category, currency=settings.currency_symbol))


@router.post("/insights/goal", response_model=InsightResponse)
def goal_insight(body: GoalInsightRequest):
    return _to_response(analyze_goal(body.current, body.target, body.title))


@router.post("/insights/emotion", response_model=InsightResponse)
def emotion_insight(body: EmotionInsightRequest, dialogue: DialogueBank = Depends(get_dialogue)):
    return _to_response(analyze_emotion(body.tag, dialogue=dialogue))
