"""Decision history and feedback endpoints"""

import uuid
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from smartspend_companion.api.v1.schemas import FeedbackRequest, HistoryResponse, HistoryItem
from smartspend_companion.infrastructure.database.session import get_db
from smartspend_companion.infrastructure.database.repositories import DecisionRepository
from smartspend_companion.infrastructure.database.models import PurchaseDecisionRecord

router = APIRouter()


def _to_history_item(d: PurchaseDecisionRecord) -> HistoryItem:
    return HistoryItem(
        decision_id=str(d.id),
        item_name=d.item_name,
        amount=d.amount,
        category=d.category,
        recommendation=d.recommendation,
        confidence=d.confidence,
        reasoning=d.reasoning,
        followed=d.followed,
        regret_level=d.regret_level,
        created_at=d.created_at.isoformat(),
    )


@router.get("/decision/history", response_model=HistoryResponse)
def get_decision_history(
    user_id: str = Query(..., description="User identifier"),
    db: Session = Depends(get_db),
):
    """
    Retrieve recent purchase decisions for a user.

    Returns:
        List of decisions, newest first, with any feedback recorded so far
    """
    decision_repo = DecisionRepository(db)
    decisions = decision_repo.get_decisions_by_user(user_id, limit=20)

    return HistoryResponse(user_id=user_id, decisions=[_to_history_item(d) for d in decisions])


@router.post("/decision/{decision_id}/feedback", response_model=HistoryItem)
def record_decision_feedback(decision_id: str, feedback: FeedbackRequest, db: Session = Depends(get_db)):
    """Record whether the user followed the recommendation and how much they regret it"""
    try:
        decision_uuid = uuid.UUID(decision_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid decision ID format")

    decision_repo = DecisionRepository(db)
    db_decision = decision_repo.record_feedback(decision_uuid, feedback.followed, feedback.regret_level)

    if not db_decision:
        raise HTTPException(status_code=404, detail="Decision not found")

    db.commit()
    return _to_history_item(db_decision)
