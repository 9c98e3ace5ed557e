"""Pydantic schemas for API request/response validation"""

from decimal import Decimal
from pydantic import BaseModel, Field
from typing import Any, List, Optional


class DecisionRequest(BaseModel):
    """Request body for POST /v1/decision"""

    user_id: str = Field(..., min_length=1, description="User identifier")
    item_name: str = Field(..., min_length=1, description="What the user wants to buy")
    amount: Decimal = Field(..., gt=0, description="Purchase price")
    category: str = Field(..., min_length=1, description="Budget category, e.g. 'Food & Dining'")
    desire_level: int = Field(..., description="1-10, clamped")
    urgency: int = Field(..., description="1-10, clamped")
    emotional_tag: Optional[str] = None


class DecisionResponse(BaseModel):
    """Response for POST /v1/decision"""

    decision_id: str
    recommendation: str
    confidence: float
    reasoning: str
    budget_pressure: float
    desire_urgency_score: float
    decisive_factor: str
    alternatives: List[str] = []


class FeedbackRequest(BaseModel):
    """Request body for POST /v1/decision/{decision_id}/feedback"""

    followed: bool
    regret_level: Optional[int] = Field(None, ge=1, le=10)


class HistoryItem(BaseModel):
    """Single decision in history"""

    decision_id: str
    item_name: str
    amount: Decimal
    category: str
    recommendation: str
    confidence: float
    reasoning: str
    followed: Optional[bool] = None
    regret_level: Optional[int] = None
    created_at: str


class HistoryResponse(BaseModel):
    """Response for GET /v1/decision/history"""

    user_id: str
    decisions: List[HistoryItem]


class BudgetInsightRequest(BaseModel):
    spent: float = 0
    limit: float = 0
    category: str = Field(..., min_length=1)


class GoalInsightRequest(BaseModel):
    current: float = 0
    target: float = 0
    title: str = Field(..., min_length=1)


class EmotionInsightRequest(BaseModel):
    tag: Optional[str] = None


class InsightResponse(BaseModel):
    """Companion commentary with the face to show alongside it"""

    message: str
    emotion: str
    emoji: str
    confidence: float
    tier: Optional[str] = None


class CompanionEventRequest(BaseModel):
    """Request body for POST /v1/companion/events"""

    type: str = Field(..., description="expense-entry | purchase-decision | streak-update | overspending | goal-achieved")
    data: Optional[Any] = None


class CompanionEventAccepted(BaseModel):
    accepted: bool = True
    pending: int
    state: str


class ReactionSchema(BaseModel):
    message: str
    pose: str
    duration_ms: int
    kind: str


class ReactionsResponse(BaseModel):
    reactions: List[ReactionSchema]


class GreetingResponse(BaseModel):
    time_of_day: str
    message: str
