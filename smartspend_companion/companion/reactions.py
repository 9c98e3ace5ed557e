"""Companion event -> reaction mapping"""

from dataclasses import dataclass
from typing import Dict, Set
from smartspend_companion.companion.dialogue import DialogueBank
from smartspend_companion.domain.models import (
    CompanionEvent,
    CompanionEventType,
    CompanionReaction,
    Pose,
    ReactionKind,
)


@dataclass(frozen=True)
class ReactionStyle:
    """Everything about a reaction except the randomly chosen phrase"""

    dialogue_category: str
    pose: Pose
    kind: ReactionKind
    duration_ms: int


REACTION_STYLES: Dict[CompanionEventType, ReactionStyle] = {
    CompanionEventType.EXPENSE_ENTRY: ReactionStyle("expense_entry", Pose.HAPPY, ReactionKind.PRAISE, 2000),
    CompanionEventType.PURCHASE_DECISION: ReactionStyle("purchase_decision", Pose.THINKING, ReactionKind.COACHING, 3000),
    CompanionEventType.STREAK_UPDATE: ReactionStyle("streak_achieved", Pose.CELEBRATING, ReactionKind.CELEBRATION, 4000),
    CompanionEventType.OVERSPENDING: ReactionStyle("overspending", Pose.CONCERNED, ReactionKind.WARNING, 5000),
    CompanionEventType.GOAL_ACHIEVED: ReactionStyle("streak_achieved", Pose.CELEBRATING, ReactionKind.CELEBRATION, 4000),
}

DEFAULT_STYLE = ReactionStyle("good_progress", Pose.HAPPY, ReactionKind.PRAISE, 3000)


def required_categories() -> Set[str]:
    """Dialogue categories a phrase bank must carry to narrate every event type"""
    return {style.dialogue_category for style in REACTION_STYLES.values()} | {DEFAULT_STYLE.dialogue_category}


def generate_reaction(event: CompanionEvent, dialogue: DialogueBank) -> CompanionReaction:
    """Pose, kind and duration by event type; message drawn at random from the matching category"""
    style = REACTION_STYLES.get(event.type, DEFAULT_STYLE)
    return CompanionReaction(
        message=dialogue.pick(style.dialogue_category),
        pose=style.pose,
        duration_ms=style.duration_ms,
        kind=style.kind,
    )
