"""Unit tests for the companion phrase bank"""

import random
import pytest
from smartspend_companion.companion.dialogue import DEFAULT_PHRASES, DialogueBank


def test_pick_returns_phrase_from_category(dialogue):
    for category in dialogue.categories:
        assert dialogue.pick(category) in DEFAULT_PHRASES[category]


def test_seeded_selection_is_deterministic():
    """Same seed, same sequence of picks"""
    first = DialogueBank(seed=123)
    second = DialogueBank(seed=123)

    assert [first.pick("overspending") for _ in range(10)] == [second.pick("overspending") for _ in range(10)]


def test_injected_rng_is_used():
    rng = random.Random(5)
    expected = random.Random(5).choice(DEFAULT_PHRASES["expense_entry"])

    assert DialogueBank(rng=rng).pick("expense_entry") == expected


def test_custom_phrases():
    bank = DialogueBank({"only": ["just this"]})

    assert bank.categories == ["only"]
    assert bank.pick("only") == "just this"


def test_empty_category_rejected():
    with pytest.raises(ValueError):
        DialogueBank({"empty": []})


def test_unknown_category_raises(dialogue):
    with pytest.raises(KeyError):
        dialogue.pick("nope")


def test_message_appends_context():
    bank = DialogueBank({"analytical": ["Looking at your trends..."]})

    assert bank.message("analytical") == "Looking at your trends..."
    assert bank.message("analytical", "Nice.") == "Looking at your trends... Nice."


def test_greeting_uses_name_or_there(dialogue):
    assert "Sam" in dialogue.greeting("morning", "Sam")
    assert "there" in dialogue.greeting("evening")


def test_greeting_unknown_time_of_day(dialogue):
    with pytest.raises(KeyError):
        dialogue.greeting("midnight")
