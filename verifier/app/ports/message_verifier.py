"""Port: message verifier used by contract tests. Receive-only implementations raise on send."""
from __future__ import annotations

from typing import Any, Mapping, Protocol

from verifier.app.domain.contract import Contract
from verifier.app.domain.messages import ReceivedMessage
from verifier.app.domain.time_unit import TimeUnit

DEFAULT_RECEIVE_TIMEOUT = 5


class UnsupportedOperationError(NotImplementedError):
    """Raised for operations a verifier deliberately does not offer."""


class MessageVerifier(Protocol):
    async def receive(
        self,
        destination: str,
        timeout: float = DEFAULT_RECEIVE_TIMEOUT,
        unit: TimeUnit = TimeUnit.SECONDS,
        contract: Contract | None = None,
    ) -> ReceivedMessage | None: ...

    async def send(
        self,
        message: ReceivedMessage,
        destination: str,
        contract: Contract | None = None,
    ) -> None: ...

    async def send_payload(
        self,
        payload: Any,
        headers: Mapping[str, Any] | None,
        destination: str,
        contract: Contract | None = None,
    ) -> None: ...
