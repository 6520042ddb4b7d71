#!/usr/bin/env python3
"""
Session Store Tests

Verifies bounded, ordered, in-memory session history.

Run: python3 tests/test_session_store.py
"""

import sys
from dataclasses import FrozenInstanceError
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from memory.session_store import SessionStore
from memory.types import Role, SessionContext, Turn


def test_sessions_created_lazily():
    print("=" * 60)
    print("TEST: Lazy session creation")
    print("=" * 60)

    store = SessionStore(max_turns=4)
    assert store.get_history("unknown") == []

    context = store.get_or_create("abc")
    assert context.session_id == "abc"
    assert context.turns == []
    assert store.get_or_create("abc") is context

    print("  ✅ PASSED\n")


def test_window_keeps_most_recent_in_order():
    print("=" * 60)
    print("TEST: Sliding window trimming")
    print("=" * 60)

    store = SessionStore(max_turns=5)
    for i in range(12):
        role = Role.USER if i % 2 == 0 else Role.ASSISTANT
        store.append_turn("s", role, f"m{i}")
        assert len(store.get_history("s")) <= 5

    history = store.get_history("s")
    assert [t.content for t in history] == ["m7", "m8", "m9", "m10", "m11"]
    assert [t.role for t in history] == [
        Role.ASSISTANT, Role.USER, Role.ASSISTANT, Role.USER, Role.ASSISTANT,
    ]

    print("  ✅ PASSED\n")


def test_sessions_are_isolated():
    store = SessionStore(max_turns=3)
    store.append_turn("a", Role.USER, "hello a")
    store.append_turn("b", Role.USER, "hello b")

    assert [t.content for t in store.get_history("a")] == ["hello a"]
    assert [t.content for t in store.get_history("b")] == ["hello b"]


def test_history_is_a_snapshot():
    store = SessionStore(max_turns=3)
    store.append_turn("s", Role.USER, "one")
    snapshot = store.get_history("s")
    store.append_turn("s", Role.ASSISTANT, "two")

    assert len(snapshot) == 1
    assert len(store.get_history("s")) == 2


def test_turns_are_immutable():
    turn = Turn(role=Role.USER, content="x")
    with pytest.raises(FrozenInstanceError):
        turn.content = "y"
    assert turn.to_message() == {"role": "user", "content": "x"}


def test_trim_reapplies_window():
    store = SessionStore(max_turns=2)
    context = store.get_or_create("s")
    context.turns.extend([Turn(Role.USER, str(i)) for i in range(5)])

    store.trim("s")
    assert [t.content for t in store.get_history("s")] == ["3", "4"]


def test_max_turns_must_be_positive():
    with pytest.raises(ValueError):
        SessionStore(max_turns=0)


def test_session_context_add_turn_returns_turn():
    context = SessionContext(session_id="s", max_turns=1)
    context.add_turn(Role.USER, "old")
    turn = context.add_turn(Role.ASSISTANT, "new")

    assert turn == Turn(role=Role.ASSISTANT, content="new")
    assert context.turns == [turn]


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
