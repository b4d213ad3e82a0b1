"""Port: poll a single message from a destination URI. Implementations live in infrastructure."""
from __future__ import annotations

from typing import Protocol

from verifier.app.domain.messages import ReceivedMessage


class ConsumerTemplate(Protocol):
    async def receive(self, uri: str, timeout_ms: int) -> ReceivedMessage | None:
        """Wait up to timeout_ms for one message on uri. Returns None on timeout."""
        ...

    async def close(self) -> None: ...
