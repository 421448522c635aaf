import pytest

from registry import StatusBoard


class FakeTicker:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


@pytest.fixture
def ticker():
    return FakeTicker()


class TestStatusBoard:
    """Messages dismiss themselves after the configured delay."""

    def test_posted_message_is_active(self, ticker):
        board = StatusBoard(ttl_seconds=3.0, clock=ticker)
        board.post("Student registered successfully!", "success")
        assert [m.text for m in board.active()] == ["Student registered successfully!"]

    def test_message_expires(self, ticker):
        board = StatusBoard(ttl_seconds=3.0, clock=ticker)
        board.post("Student ID already exists!", "error")
        ticker.now += 2.0
        assert len(board.active()) == 1
        ticker.now += 1.0
        assert board.active() == []

    def test_messages_expire_independently(self, ticker):
        board = StatusBoard(ttl_seconds=3.0, clock=ticker)
        board.post("first", "info")
        ticker.now += 2.0
        board.post("second", "info")
        ticker.now += 1.5
        assert [m.text for m in board.active()] == ["second"]
        ticker.now += 2.0
        assert board.active() == []

    def test_unknown_kind(self, ticker):
        board = StatusBoard(clock=ticker)
        with pytest.raises(ValueError):
            board.post("hello", "warning")
