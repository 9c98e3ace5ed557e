"""Companion phrase bank with injectable random selection"""

import random
from typing import Dict, List, Mapping, Optional, Sequence

DEFAULT_PHRASES: Dict[str, List[str]] = {
    # Reaction phrases, one category per companion event family
    "expense_entry": [
        "Got it logged! 📝",
        "Tracking that! 👀",
        "Added to your books! 📊",
        "Noted and recorded! 📋",
    ],
    "purchase_decision": [
        "Smart thinking! 🧠",
        "Wise choice! 💭",
        "Good decision! ✅",
        "You've got this! 💪",
    ],
    "overspending": [
        "Oof! Time to cut back... 😅",
        "Let's slow down spending! 🛑",
        "Budget alert! 🚨",
        "Rein it in, champ! 💡",
    ],
    "good_progress": [
        "You're crushing it! 💎",
        "Perfect balance! ⚖️",
        "Smart choices! 🎯",
        "Nice control! 👏",
    ],
    "streak_achieved": [
        "Legendary saver! 🌟",
        "You're on fire! 🔥",
        "Streak master! 💪",
        "Amazing progress! ✨",
    ],
    # Personality phrases
    "motivational": [
        "You're crushing it! Keep up the amazing work! 💪",
        "Every smart decision brings you closer to your goals! 🎯",
        "I believe in you! Let's make today count! ✨",
        "You've got this! One step at a time! 🚀",
        "Your future self will thank you for this! 🙏",
        "Building wealth, one decision at a time! 💰",
    ],
    "supportive": [
        "It's okay to slip up sometimes. What matters is getting back on track! 🤗",
        "Every expert was once a beginner. You're learning! 📚",
        "Financial wellness is a journey, not a destination! 🛤️",
        "I'm here to help you succeed, no judgment! 💙",
        "Small steps lead to big changes! 👣",
        "Everyone makes mistakes - what counts is what we learn! 🌱",
    ],
    "celebratory": [
        "🎉 Fantastic! That's exactly the smart thinking I love to see!",
        "🏆 Victory! You just made an excellent financial decision!",
        "✨ Brilliant choice! Your wallet is definitely smiling!",
        "🎯 Bullseye! That decision aligns perfectly with your goals!",
        "🌟 Stellar decision! You're truly mastering your money!",
    ],
    "warning": [
        "🚨 Hold on! This might impact your budget more than you think!",
        "⚠️ Careful there! Let's think this through together!",
        "🛑 Pause for a moment! Is this aligned with your goals?",
        "⏰ This feels like it might be an impulse decision!",
        "📊 The numbers suggest you might want to reconsider!",
    ],
    "analytical": [
        "Based on your spending patterns, here's what I've noticed...",
        "Your budget analysis reveals...",
        "Looking at your financial trends...",
        "Your spending behavior suggests...",
        "The numbers tell an interesting story...",
        "From a financial wellness perspective...",
    ],
}

DEFAULT_GREETINGS: Dict[str, List[str]] = {
    "morning": [
        "Good morning, {name}! ☀️ Ready to make some smart money moves today?",
        "Rise and shine, {name}! 🌅 Let's start this day with some financial wins!",
        "Morning, {name}! ☕ Time to brew up some great spending decisions!",
    ],
    "afternoon": [
        "Good afternoon, {name}! 🌞 How's your budget looking today?",
        "Hey there, {name}! 👋 Hope you're making smart choices this afternoon!",
        "Afternoon, {name}! ⏰ Perfect time to check in on your financial goals!",
    ],
    "evening": [
        "Good evening, {name}! 🌙 Time to reflect on today's financial wins!",
        "Evening, {name}! ✨ Let's see how you did with your money today!",
        "Hey {name}! 🌆 Winding down with some financial reflection?",
    ],
}


def _validated(phrases: Mapping[str, Sequence[str]], kind: str) -> Dict[str, List[str]]:
    bank = {}
    for category, options in phrases.items():
        if not options:
            raise ValueError(f"{kind} category '{category}' has no phrases")
        bank[category] = list(options)
    return bank


class DialogueBank:
    """
    Categorized phrase sets with uniform random selection.

    Pass a seeded `random.Random` (or just a seed) for deterministic picks.
    """

    def __init__(
        self,
        phrases: Optional[Mapping[str, Sequence[str]]] = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        greetings: Optional[Mapping[str, Sequence[str]]] = None,
    ):
        self._phrases = _validated(phrases if phrases is not None else DEFAULT_PHRASES, "Dialogue")
        self._greetings = _validated(greetings if greetings is not None else DEFAULT_GREETINGS, "Greeting")
        self._rng = rng or random.Random(seed)

    @property
    def categories(self) -> List[str]:
        return list(self._phrases)

    def phrases(self, category: str) -> List[str]:
        if category not in self._phrases:
            raise KeyError(f"Unknown dialogue category: {category}")
        return list(self._phrases[category])

    def pick(self, category: str) -> str:
        """Uniformly random phrase from a category"""
        return self._rng.choice(self.phrases(category))

    def message(self, category: str, context: Optional[str] = None) -> str:
        """Random phrase, optionally followed by a context sentence"""
        phrase = self.pick(category)
        return f"{phrase} {context}" if context else phrase

    def greeting(self, time_of_day: str, name: Optional[str] = None) -> str:
        if time_of_day not in self._greetings:
            raise KeyError(f"Unknown time of day: {time_of_day}")
        return self._rng.choice(self._greetings[time_of_day]).format(name=name or "there")
