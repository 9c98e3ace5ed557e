"""Budget, goal and emotion insight analyzers"""

from typing import Dict, List, Optional
from smartspend_companion.companion.dialogue import DialogueBank
from smartspend_companion.domain.models import EmotionalTag, Insight, InsightEmotion
from smartspend_companion.domain.tiers import Tier, classify_percentage, finite_or_zero, safe_percentage

BUDGET_TIERS: List[Tier] = [
    Tier(
        100, InsightEmotion.CONCERNED, 1.0,
        "Oops! You're at {percentage:.0f}% of your {category} budget, {currency}{overage:.2f} over the limit. "
        "Let's tighten up for the rest of the month! 🚨",
        "over_budget",
    ),
    Tier(
        80, InsightEmotion.CONCERNED, 0.9,
        "You're at {percentage:.0f}% of your {category} budget. Time to slow down a bit! 🟡",
        "approaching_limit",
    ),
    Tier(
        50, InsightEmotion.THOUGHTFUL, 0.8,
        "Halfway through your {category} budget at {percentage:.0f}%! You're tracking well - keep it up! 📊",
        "on_track",
    ),
    Tier(
        float("-inf"), InsightEmotion.PROUD, 0.9,
        "Great job! You're only at {percentage:.0f}% of your {category} budget. Excellent control! 🎯",
        "under_control",
    ),
]

GOAL_TIERS: List[Tier] = [
    Tier(
        100, InsightEmotion.EXCITED, 1.0,
        "🎉 GOAL ACHIEVED! You've reached {percentage:.0f}% of your {title} goal! "
        "Time to celebrate and set a new challenge!",
        "achieved",
    ),
    Tier(
        75, InsightEmotion.EXCITED, 0.9,
        "So close! You're {percentage:.0f}% of the way to your {title} goal. The finish line is in sight! 🏁",
        "almost_there",
    ),
    Tier(
        50, InsightEmotion.PROUD, 0.8,
        "Halfway there! Your {title} progress is solid at {percentage:.0f}%. Keep the momentum going! 💪",
        "halfway",
    ),
    Tier(
        25, InsightEmotion.HAPPY, 0.7,
        "Good start! You're {percentage:.0f}% towards your {title} goal. Every contribution counts! 📈",
        "good_start",
    ),
    Tier(
        float("-inf"), InsightEmotion.EXCITED, 0.8,
        "Great goal! You're {percentage:.0f}% of the way to {title} and starting to save is a smart move. "
        "You've got this! 🚀",
        "just_started",
    ),
]

EMOTION_RESPONSES: Dict[EmotionalTag, Insight] = {
    EmotionalTag.STRESS: Insight(
        "I see you're feeling stressed. Remember, retail therapy rarely fixes the underlying issue. "
        "Maybe try a walk or talking to a friend instead? 💙",
        InsightEmotion.CONCERNED, 0.9, EmotionalTag.STRESS.value,
    ),
    EmotionalTag.BOREDOM: Insight(
        "Spending when bored is super common! Next time, try a free activity like reading, walking, "
        "or calling a friend. Your wallet will thank you! 😊",
        InsightEmotion.THOUGHTFUL, 0.8, EmotionalTag.BOREDOM.value,
    ),
    EmotionalTag.CELEBRATION: Insight(
        "Celebrations deserve recognition! Just make sure this fits your budget. "
        "There are many ways to celebrate that don't break the bank! 🎉",
        InsightEmotion.HAPPY, 0.7, EmotionalTag.CELEBRATION.value,
    ),
    EmotionalTag.PEER_PRESSURE: Insight(
        "Peer pressure is tough! Remember, your friends who truly care about you will understand "
        "if you say no for budget reasons. Stay strong! 💪",
        InsightEmotion.CONCERNED, 0.9, EmotionalTag.PEER_PRESSURE.value,
    ),
    EmotionalTag.IMPULSE: Insight(
        "Impulse purchases happen to everyone! The good news is recognizing it is the first step. "
        "Maybe sleep on big decisions? 🛌",
        InsightEmotion.THOUGHTFUL, 0.8, EmotionalTag.IMPULSE.value,
    ),
    EmotionalTag.NECESSITY: Insight(
        "Necessary expenses are part of life! You're being responsible by tracking them. "
        "Great job staying mindful of your spending! ✅",
        InsightEmotion.PROUD, 0.9, EmotionalTag.NECESSITY.value,
    ),
    EmotionalTag.REWARD: Insight(
        "You deserve rewards for your hard work! Just make sure this reward aligns with your budget "
        "and goals. Balance is key! 🏆",
        InsightEmotion.EXCITED, 0.8, EmotionalTag.REWARD.value,
    ),
}

EMOTION_EMOJI: Dict[InsightEmotion, str] = {
    InsightEmotion.HAPPY: "😊",
    InsightEmotion.CONCERNED: "😰",
    InsightEmotion.EXCITED: "🤩",
    InsightEmotion.THOUGHTFUL: "🤔",
    InsightEmotion.PROUD: "😌",
}


def analyze_budget(spent, limit, category: str, currency: str = "£") -> Insight:
    """
    Classify spend-vs-limit for one category.

    A zero (or unset) limit yields a neutral 0% insight instead of dividing.
    """
    spent = finite_or_zero(spent)
    limit = finite_or_zero(limit)

    if limit <= 0:
        return Insight(
            message=f"You're at 0% of your {category} budget because no limit is set yet. "
                    f"Set one and I'll keep an eye on it! 📝",
            emotion=InsightEmotion.THOUGHTFUL,
            confidence=0.7,
            tier="no_limit",
        )

    return classify_percentage(
        safe_percentage(spent, limit),
        BUDGET_TIERS,
        category=category,
        currency=currency,
        overage=max(0.0, spent - limit),
    )


def analyze_goal(current, target, title: str) -> Insight:
    """Classify savings goal progress; a zero target counts as 0%"""
    return classify_percentage(safe_percentage(current, target), GOAL_TIERS, title=title)


def analyze_emotion(tag: "str | EmotionalTag | None" = None, dialogue: Optional[DialogueBank] = None) -> Insight:
    """
    Canned coaching response for an emotional tag.

    Missing or unrecognized tags fall back to an analytical remark drawn from
    the dialogue bank.
    """
    if dialogue is None:
        dialogue = DialogueBank()

    if tag is None or not str(tag).strip():
        return Insight(
            message=dialogue.message("analytical", "I notice you didn't tag this with an emotion. That's totally fine!"),
            emotion=InsightEmotion.THOUGHTFUL,
            confidence=0.7,
        )

    parsed = EmotionalTag.parse(tag)
    if parsed is None:
        return Insight(
            message=dialogue.message(
                "analytical", "Interesting emotional context! I'm always learning about spending psychology."
            ),
            emotion=InsightEmotion.THOUGHTFUL,
            confidence=0.6,
        )

    return EMOTION_RESPONSES[parsed]


def emoji_for(emotion: Optional[InsightEmotion]) -> str:
    """Companion face for an insight emotion"""
    return EMOTION_EMOJI.get(emotion, "🤖")
