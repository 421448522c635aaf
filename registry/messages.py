"""Transient status messages that dismiss themselves after a fixed delay."""

from dataclasses import dataclass
from typing import Callable
import time

MESSAGE_KINDS = ("success", "error", "info")


@dataclass
class StatusMessage:
    text: str
    kind: str
    posted_at: float


class StatusBoard:
    """
    Holds status banners until each one is older than ``ttl_seconds``.

    Every message expires on its own schedule; nothing cancels one early.
    """

    def __init__(self, ttl_seconds: float = 3.0, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._messages: list[StatusMessage] = []

    def post(self, text: str, kind: str = "info") -> StatusMessage:
        if kind not in MESSAGE_KINDS:
            raise ValueError(f"Unknown message kind: {kind}")
        message = StatusMessage(text=text, kind=kind, posted_at=self.clock())
        self._messages.append(message)
        return message

    def active(self) -> list[StatusMessage]:
        """Return messages still within their display time, dropping expired ones."""
        now = self.clock()
        self._messages = [m for m in self._messages if now - m.posted_at < self.ttl_seconds]
        return list(self._messages)
