"""Domain models - pure Python dataclasses representing business entities"""

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, List, Optional


def _lookup_key(value: str) -> str:
    """Normalize free text for case/spacing-insensitive enum lookup"""
    return re.sub(r"[\s_\-&]+", "", value.strip().lower())


class BudgetCategory(str, Enum):
    """Spending categories a monthly budget can be set for"""

    FOOD_AND_DINING = "Food & Dining"
    SHOPPING = "Shopping"
    TRANSPORTATION = "Transportation"
    ENTERTAINMENT = "Entertainment"
    UTILITIES = "Utilities"
    OTHER = "Other"

    @classmethod
    def parse(cls, value: "str | BudgetCategory | None") -> Optional["BudgetCategory"]:
        """Match a display value or member name, ignoring case and separators"""
        if value is None or isinstance(value, cls):
            return value
        key = _lookup_key(str(value))
        for member in cls:
            if key in (_lookup_key(member.value), _lookup_key(member.name)):
                return member
        return None


class EmotionalTag(str, Enum):
    """Emotional context a user can attach to a purchase"""

    STRESS = "stress"
    BOREDOM = "boredom"
    CELEBRATION = "celebration"
    PEER_PRESSURE = "peer pressure"
    IMPULSE = "impulse"
    NECESSITY = "necessity"
    REWARD = "reward"

    @property
    def label(self) -> str:
        return self.value.title()

    @classmethod
    def parse(cls, value: "str | EmotionalTag | None") -> Optional["EmotionalTag"]:
        """Case-insensitive lookup; unknown tags parse to None"""
        if value is None or isinstance(value, cls):
            return value
        key = _lookup_key(str(value))
        for member in cls:
            if key == _lookup_key(member.value):
                return member
        return None


class Recommendation(str, Enum):
    YES = "yes"
    THINK_AGAIN = "think_again"
    NO = "no"


class DecisiveFactor(str, Enum):
    """Which signal determined the recommendation"""

    BUDGET = "budget"
    DESIRE_URGENCY = "desire_urgency"
    EMOTION = "emotion"


@dataclass(frozen=True)
class PurchaseRequest:
    """A single "should I buy this?" attempt"""

    item_name: str
    amount: Decimal
    category: BudgetCategory
    desire_level: int  # 1-10
    urgency: int  # 1-10
    emotional_tag: Optional[EmotionalTag] = None


@dataclass(frozen=True)
class BudgetContext:
    """Monthly budget for one category, supplied by the budget store"""

    category: BudgetCategory
    monthly_limit: Decimal
    spent: Decimal

    @property
    def remaining(self) -> Decimal:
        return self.monthly_limit - self.spent


@dataclass(frozen=True)
class DecisionResult:
    """Output of the purchase decision heuristic"""

    recommendation: Recommendation
    confidence: float
    reasoning: str
    budget_pressure: float
    desire_urgency_score: float
    net_score: float
    emotional_adjustment: float
    decisive_factor: DecisiveFactor
    alternatives: List[str] = field(default_factory=list)


class InsightEmotion(str, Enum):
    HAPPY = "happy"
    CONCERNED = "concerned"
    EXCITED = "excited"
    THOUGHTFUL = "thoughtful"
    PROUD = "proud"


@dataclass(frozen=True)
class Insight:
    """Companion commentary on a budget, goal or emotional context"""

    message: str
    emotion: InsightEmotion
    confidence: float
    tier: Optional[str] = None


class CompanionEventType(str, Enum):
    EXPENSE_ENTRY = "expense-entry"
    PURCHASE_DECISION = "purchase-decision"
    STREAK_UPDATE = "streak-update"
    OVERSPENDING = "overspending"
    GOAL_ACHIEVED = "goal-achieved"


@dataclass(frozen=True)
class CompanionEvent:
    """Notable domain action the companion should react to"""

    type: CompanionEventType
    data: Any = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class Pose(str, Enum):
    HAPPY = "happy"
    THINKING = "thinking"
    CONCERNED = "concerned"
    CELEBRATING = "celebrating"
    NERVOUS = "nervous"


class ReactionKind(str, Enum):
    COACHING = "coaching"
    PRAISE = "praise"
    WARNING = "warning"
    CELEBRATION = "celebration"


@dataclass(frozen=True)
class CompanionReaction:
    """One display cycle of the companion"""

    message: str
    pose: Pose
    duration_ms: int
    kind: ReactionKind
