"""Tests for the bounded chat history log."""
from hypothesis import given, settings
from hypothesis import strategies as st

import pytest

from artanalyst.config import MAX_CHAT_HISTORY_SIZE
from artanalyst.state import BoundedHistoryLog, ChatMessage
from artanalyst.state.history import HISTORY_KEY
from artanalyst.state.in_memory import InMemoryStateStore

from conftest import make_message


@pytest.fixture
def history(store):
    return BoundedHistoryLog(store)


class TestBoundedHistoryLog:
    """Tests for append, delete and clear."""

    def test_empty_store_lists_nothing(self, history):
        assert history.list() == []
        assert len(history) == 0
        assert history.last() is None

    def test_save_list_delete_clear(self, history, store):
        """Test the full message lifecycle a chat session goes through."""
        assert history.append(make_message("a", "user", "hi", 1000))
        assert history.append(make_message("b", "assistant", "hello", 1001))

        assert [m.id for m in history.list()] == ["a", "b"]

        assert history.delete("a")
        assert [m.to_record() for m in history.list()] == [make_message("b", "assistant", "hello", 1001)]

        assert history.clear()
        assert history.list() == []
        assert store.get(HISTORY_KEY) == []

    def test_append_accepts_model(self, history):
        message = ChatMessage(id="m", role="assistant", content="ok", timestamp=5)
        assert history.append(message)
        assert history.list() == [message]

    def test_invalid_message_not_persisted(self, history, set_spy):
        """Test that an invalid message leaves the history unchanged."""
        history.append(make_message("a"))
        raw = make_message("b")
        del raw["content"]

        assert history.append(raw) is False
        assert [m.id for m in history.list()] == ["a"]
        assert set_spy.call_count == 1

    def test_overflow_evicts_oldest(self, store):
        """Test that 1005 appends keep only the newest 1000 messages."""
        history = BoundedHistoryLog(store)
        for i in range(MAX_CHAT_HISTORY_SIZE + 5):
            assert history.append(make_message(f"m{i}", timestamp=i))

        messages = history.list()
        assert len(messages) == MAX_CHAT_HISTORY_SIZE
        assert messages[0].id == "m5"
        assert messages[-1].id == f"m{MAX_CHAT_HISTORY_SIZE + 4}"

    def test_delete_missing_id_is_noop(self, history):
        history.append(make_message("a"))
        assert history.delete("zzz")
        assert [m.id for m in history.list()] == ["a"]

    def test_delete_is_idempotent(self, history):
        history.append(make_message("a"))
        history.append(make_message("b"))

        assert history.delete("a")
        assert history.delete("a")
        assert [m.id for m in history.list()] == ["b"]

    def test_delete_removes_all_duplicates(self, history):
        """Test that every message sharing the id is removed."""
        history.append(make_message("a", content="one"))
        history.append(make_message("b"))
        history.append(make_message("a", content="two"))

        history.delete("a")

        assert [m.id for m in history.list()] == ["b"]

    def test_corrupt_record_reads_as_empty(self):
        """Test that appending to a corrupt history starts it over."""
        store = InMemoryStateStore(initial={HISTORY_KEY: [{"id": 1}]})
        history = BoundedHistoryLog(store)

        assert history.list() == []
        assert history.append(make_message("a"))
        assert [m.id for m in history.list()] == ["a"]

    def test_last_filters_by_role(self, history):
        history.append(make_message("a", role="user"))
        history.append(make_message("b", role="assistant"))
        history.append(make_message("c", role="user"))

        assert history.last().id == "c"
        assert history.last("assistant").id == "b"

    def test_failed_write_reports_false(self, history, store, monkeypatch):
        monkeypatch.setattr(store, "set", lambda key, value: False)
        assert history.append(make_message()) is False

    @pytest.mark.parametrize("capacity", [0, MAX_CHAT_HISTORY_SIZE + 1])
    def test_capacity_out_of_range(self, store, capacity):
        with pytest.raises(ValueError, match="capacity"):
            BoundedHistoryLog(store, capacity=capacity)


class TestHistoryProperties:
    """Property-based tests for eviction order."""

    @given(
        capacity=st.integers(min_value=1, max_value=8),
        count=st.integers(min_value=0, max_value=30),
    )
    @settings(max_examples=50)
    def test_keeps_newest_in_order(self, capacity: int, count: int):
        """Property test: the log always holds the newest ``capacity`` messages in append order."""
        history = BoundedHistoryLog(InMemoryStateStore(), capacity=capacity)
        for i in range(count):
            history.append(make_message(str(i), timestamp=i))

        expected = [str(i) for i in range(max(0, count - capacity), count)]
        assert [m.id for m in history.list()] == expected
