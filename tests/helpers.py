"""Test doubles shared across test modules."""

from typing import Dict, List, Optional, Union

Reply = Union[str, Exception]


class StubCompletion:
    """Stands in for CompletionClient: returns queued replies (or raises them) and records calls."""

    def __init__(self, replies: Optional[List[Reply]] = None) -> None:
        self.replies: List[Reply] = list(replies or [])
        self.calls: List[Dict] = []

    def queue(self, reply: Reply) -> None:
        self.replies.append(reply)

    @property
    def call_count(self) -> int:
        return len(self.calls)

    async def complete(self, messages, temperature, max_tokens=None) -> str:
        self.calls.append({"messages": messages, "temperature": temperature, "max_tokens": max_tokens})
        if not self.replies:
            raise AssertionError("StubCompletion called with no queued reply")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply
