"""
Tests for bounded per-session conversation histories.
"""

import threading

import pytest

from assistant_backend.shared.models.enums import Role
from assistant_backend.shared.models.internal import Message
from assistant_backend.shared.services.session import ConversationStore, ConversationHistory


class TestConversationStore:
    """Per-key history behaviour."""

    def test_history_is_bounded_and_evicts_oldest(self):
        store = ConversationStore(max_turns=20)
        for i in range(25):
            store.append("s1", Role.USER, f"message {i}")

        messages = store.snapshot("s1")
        assert len(messages) == 20
        assert messages[0].content == "message 5"
        assert messages[-1].content == "message 24"

    def test_append_turn_adds_user_and_assistant(self, store):
        store.append_turn("s1", "question", "answer")

        messages = store.snapshot("s1")
        assert [(m.role, m.content) for m in messages] == [
            (Role.USER, "question"),
            (Role.ASSISTANT, "answer"),
        ]

    def test_sessions_are_independent(self, store):
        store.append("a", Role.USER, "for a")
        store.append("b", Role.USER, "for b")

        assert [m.content for m in store.snapshot("a")] == ["for a"]
        assert [m.content for m in store.snapshot("b")] == ["for b"]

    def test_get_or_create_returns_same_history(self, store):
        assert store.get_or_create("s1") is store.get_or_create("s1")

    def test_unknown_key_yields_empty_snapshot(self, store):
        assert store.snapshot("never-seen") == ()

    def test_reset_clears_history(self, store):
        store.append_turn("s1", "q", "a")
        store.reset("s1")

        assert store.snapshot("s1") == ()
        assert store.session_count() == 1

    def test_snapshot_is_a_copy(self, store):
        store.append("s1", Role.USER, "first")
        snapshot = store.snapshot("s1")
        store.append("s1", Role.USER, "second")

        assert len(snapshot) == 1

    def test_new_session_ids_are_unique(self):
        ids = {ConversationStore.new_session_id() for _ in range(100)}
        assert len(ids) == 100

    def test_concurrent_first_touch_shares_one_history(self):
        """Two threads appending to a brand-new key both land in the same history."""
        store = ConversationStore(max_turns=20)
        barrier = threading.Barrier(2)

        def worker(content):
            barrier.wait()
            store.append("fresh", Role.USER, content)

        threads = [threading.Thread(target=worker, args=(c,)) for c in ("one", "two")]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        contents = sorted(m.content for m in store.snapshot("fresh"))
        assert contents == ["one", "two"]
        assert store.session_count() == 1

    def test_concurrent_appends_respect_bound(self):
        store = ConversationStore(max_turns=10)

        def worker(n):
            for i in range(50):
                store.append("busy", Role.USER, f"{n}-{i}")

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(store.snapshot("busy")) == 10


class TestConversationHistory:

    def test_rejects_non_positive_bound(self):
        with pytest.raises(ValueError):
            ConversationHistory(max_turns=0)

    def test_multi_message_append_trims_from_front(self):
        history = ConversationHistory(max_turns=3)
        history.append(Message(role=Role.USER, content="a"), Message(role=Role.ASSISTANT, content="b"))
        history.append(Message(role=Role.USER, content="c"), Message(role=Role.ASSISTANT, content="d"))

        assert [m.content for m in history.snapshot()] == ["b", "c", "d"]

    def test_clear(self):
        history = ConversationHistory()
        history.append(Message(role=Role.USER, content="a"))
        history.clear()
        assert len(history) == 0
