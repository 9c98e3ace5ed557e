"""Companion event intake, reaction polling and greetings"""

from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query

from smartspend_companion.api.v1.schemas import (
    CompanionEventAccepted,
    CompanionEventRequest,
    GreetingResponse,
    ReactionSchema,
    ReactionsResponse,
)
from smartspend_companion.api.dependencies import get_dialogue, get_reaction_queue, get_recent_reactions
from smartspend_companion.companion.dialogue import DialogueBank
from smartspend_companion.companion.queue import ReactionQueue, RecentReactions
from smartspend_companion.domain.models import CompanionEvent, CompanionEventType
from smartspend_companion.utils.date_utils import time_of_day

router = APIRouter()


@router.post("/companion/events", response_model=CompanionEventAccepted, status_code=202)
async def enqueue_event(
    body: CompanionEventRequest,
    reaction_queue: ReactionQueue = Depends(get_reaction_queue),
):
    """Queue a domain event for the companion to narrate"""
    try:
        event_type = CompanionEventType(body.type)
    except ValueError:
        raise HTTPException(status_code=422, detail=f"Unknown companion event type: {body.type}")

    reaction_queue.enqueue(CompanionEvent(type=event_type, data=body.data))

    return CompanionEventAccepted(pending=reaction_queue.pending, state=reaction_queue.state.value)


@router.get("/companion/reactions", response_model=ReactionsResponse)
def recent_reactions(recent: RecentReactions = Depends(get_recent_reactions)):
    """Reactions emitted so far, oldest first"""
    return ReactionsResponse(
        reactions=[
            ReactionSchema(message=r.message, pose=r.pose.value, duration_ms=r.duration_ms, kind=r.kind.value)
            for r in recent.snapshot()
        ]
    )


@router.get("/companion/greeting", response_model=GreetingResponse)
def greeting(
    name: Optional[str] = None,
    hour: Optional[int] = Query(None, ge=0, le=23),
    dialogue: DialogueBank = Depends(get_dialogue),
):
    period = time_of_day(datetime.now().hour if hour is None else hour)
    return GreetingResponse(time_of_day=period, message=dialogue.greeting(period, name))
