"""In-memory consumer template for tests and local mode.

Messages are queued per exact destination URI with publish(); receive() pops the oldest
one or waits up to the timeout for one to be published.
"""
from __future__ import annotations

import asyncio
from collections import defaultdict, deque

from verifier.app.domain.messages import ReceivedMessage


class InMemoryConsumerTemplate:
    def __init__(self) -> None:
        self.messages: dict[str, deque[ReceivedMessage]] = defaultdict(deque)
        self.requested_uris: list[str] = []
        self._published = asyncio.Condition()
        self.closed = False

    async def publish(self, uri: str, message: ReceivedMessage) -> None:
        async with self._published:
            self.messages[uri].append(message)
            self._published.notify_all()

    async def receive(self, uri: str, timeout_ms: int) -> ReceivedMessage | None:
        self.requested_uris.append(uri)
        async with self._published:
            if timeout_ms > 0:
                try:
                    await asyncio.wait_for(
                        self._published.wait_for(lambda: bool(self.messages[uri])),
                        timeout_ms / 1000,
                    )
                except asyncio.TimeoutError:
                    return None
            if not self.messages[uri]:
                return None
            return self.messages[uri].popleft()

    async def close(self) -> None:
        self.closed = True
