"""Data access layer for purchase decisions"""

import uuid
from typing import List, Optional
from sqlalchemy.orm import Session
from smartspend_companion.infrastructure.database.models import PurchaseDecisionRecord
from smartspend_companion.domain.models import DecisionResult, PurchaseRequest
from smartspend_companion.domain.decision import clamp_level


class DecisionRepository:
    """Repository for purchase decisions"""

    def __init__(self, db: Session):
        self.db = db

    def create_decision(
        self,
        user_id: str,
        request: PurchaseRequest,
        decision: DecisionResult,
    ) -> PurchaseDecisionRecord:
        """Persist purchase decision to database"""
        db_decision = PurchaseDecisionRecord(
            user_id=user_id,
            item_name=request.item_name,
            amount=request.amount,
            category=request.category.value,
            desire_level=clamp_level(request.desire_level),
            urgency=clamp_level(request.urgency),
            emotional_tag=request.emotional_tag.value if request.emotional_tag else None,
            recommendation=decision.recommendation.value,
            confidence=decision.confidence,
            reasoning=decision.reasoning,
            signals={
                "budget_pressure": decision.budget_pressure,
                "desire_urgency_score": decision.desire_urgency_score,
                "net_score": decision.net_score,
                "emotional_adjustment": decision.emotional_adjustment,
                "decisive_factor": decision.decisive_factor.value,
            },
        )
        self.db.add(db_decision)
        self.db.flush()  # Get ID without committing
        return db_decision

    def get_decisions_by_user(self, user_id: str, limit: int = 10) -> List[PurchaseDecisionRecord]:
        """Fetch recent decisions for a user"""
        return (
            self.db.query(PurchaseDecisionRecord)
            .filter(PurchaseDecisionRecord.user_id == user_id)
            .order_by(PurchaseDecisionRecord.created_at.desc())
            .limit(limit)
            .all()
        )

    def get_decision_by_id(self, decision_id: uuid.UUID) -> Optional[PurchaseDecisionRecord]:
        return (
            self.db.query(PurchaseDecisionRecord)
            .filter(PurchaseDecisionRecord.id == decision_id)
            .first()
        )

    def record_feedback(
        self,
        decision_id: uuid.UUID,
        followed: bool,
        regret_level: Optional[int] = None,
    ) -> Optional[PurchaseDecisionRecord]:
        """Annotate a decision with whether the user followed it and how they feel now"""
        db_decision = self.get_decision_by_id(decision_id)
        if db_decision is None:
            return None

        db_decision.followed = followed
        db_decision.regret_level = regret_level
        self.db.flush()
        return db_decision
