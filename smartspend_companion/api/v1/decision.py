"""POST /v1/decision - purchase decision endpoint"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from smartspend_companion.api.v1.schemas import DecisionRequest, DecisionResponse
from smartspend_companion.api.dependencies import get_budget_client, get_reaction_queue, get_request_id
from smartspend_companion.companion.queue import ReactionQueue
from smartspend_companion.config import settings
from smartspend_companion.infrastructure.database.session import get_db
from smartspend_companion.infrastructure.database.repositories import DecisionRepository
from smartspend_companion.infrastructure.clients.budget import BudgetClient
from smartspend_companion.domain.decision import decide, validate_purchase_request
from smartspend_companion.domain.models import CompanionEvent, CompanionEventType, PurchaseRequest
from smartspend_companion.domain.exceptions import BudgetStoreError, ValidationError
from smartspend_companion.infrastructure.observability.metrics import record_decision, budget_fetch_failures_counter
from smartspend_companion.infrastructure.observability.logging import log_decision
from smartspend_companion.utils.date_utils import month_key

router = APIRouter()


@router.post("/decision", response_model=DecisionResponse)
async def create_decision(
    request_body: DecisionRequest,
    request: Request,
    db: Session = Depends(get_db),
    budget_client: BudgetClient = Depends(get_budget_client),
    reaction_queue: ReactionQueue = Depends(get_reaction_queue),
):
    """
    Recommend whether to make a purchase.

    Flow:
    1. Validate the purchase request
    2. Fetch this month's budget for the category (none = no constraint)
    3. Score desire, urgency, emotion and budget pressure
    4. Persist the decision
    5. Queue companion reactions
    6. Return the recommendation
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        # 1. Validate
        purchase = validate_purchase_request(
            PurchaseRequest(
                item_name=request_body.item_name,
                amount=request_body.amount,
                category=request_body.category,
                desire_level=request_body.desire_level,
                urgency=request_body.urgency,
                emotional_tag=request_body.emotional_tag,
            )
        )

        # 2. Fetch budget context
        budget = await budget_client.get_budget(request_body.user_id, purchase.category, month_key())
        if budget is None:
            logging.info(
                f"No {purchase.category.value} budget set, deciding on desire and urgency alone",
                extra={"request_id": request_id},
            )

        # 3. Decide
        decision = decide(purchase, budget, currency=settings.currency_symbol)

        # 4. Persist decision
        decision_repo = DecisionRepository(db)
        db_decision = decision_repo.create_decision(
            user_id=request_body.user_id,
            request=purchase,
            decision=decision,
        )
        db.commit()

    except BudgetStoreError as e:
        budget_fetch_failures_counter.inc()
        db.rollback()
        logging.error(f"Budget store error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Budget service unavailable")

    except ValidationError as e:
        db.rollback()
        logging.warning(f"Invalid purchase request: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    # 5. Companion reactions
    event_data = {
        "decision_id": str(db_decision.id),
        "item_name": purchase.item_name,
        "recommendation": decision.recommendation.value,
    }
    reaction_queue.enqueue(CompanionEvent(type=CompanionEventType.PURCHASE_DECISION, data=event_data))
    if decision.budget_pressure > 0:
        reaction_queue.enqueue(CompanionEvent(type=CompanionEventType.OVERSPENDING, data=event_data))

    # Record metrics and logs
    duration_ms = (time.time() - start_time) * 1000
    record_decision(decision.recommendation.value, decision.confidence)
    log_decision(
        request_id,
        request_body.user_id,
        decision.recommendation.value,
        decision.confidence,
        decision.decisive_factor.value,
        duration_ms,
    )

    return DecisionResponse(
        decision_id=str(db_decision.id),
        recommendation=decision.recommendation.value,
        confidence=decision.confidence,
        reasoning=decision.reasoning,
        budget_pressure=decision.budget_pressure,
        desire_urgency_score=decision.desire_urgency_score,
        decisive_factor=decision.decisive_factor.value,
        alternatives=decision.alternatives,
    )
