"""Verification-layer facade: receives through a MessageVerifier and normalizes messages."""
from __future__ import annotations

from typing import Any, Mapping

from verifier.app.domain.contract import Contract
from verifier.app.domain.messages import ReceivedMessage, VerifierMessage
from verifier.app.domain.time_unit import TimeUnit
from verifier.app.ports.message_verifier import DEFAULT_RECEIVE_TIMEOUT, MessageVerifier


class ContractVerifierMessaging:
    def __init__(self, verifier: MessageVerifier) -> None:
        self._verifier = verifier

    @property
    def verifier(self) -> MessageVerifier:
        return self._verifier

    def create(self, payload: Any, headers: Mapping[str, Any] | None = None) -> VerifierMessage:
        return VerifierMessage(payload, dict(headers or {}))

    def convert(self, received: ReceivedMessage) -> VerifierMessage:
        """Pure conversion; a missing message is a caller error, not an empty result."""
        if received is None:
            raise TypeError("cannot convert a missing message")
        return VerifierMessage(received.body, dict(received.headers))

    async def receive(
        self,
        destination: str,
        contract: Contract | None = None,
        timeout: float = DEFAULT_RECEIVE_TIMEOUT,
        unit: TimeUnit = TimeUnit.SECONDS,
    ) -> VerifierMessage | None:
        received = await self._verifier.receive(destination, timeout, unit, contract)
        if received is None:
            return None
        return self.convert(received)

    async def send(
        self,
        message: VerifierMessage,
        destination: str,
        contract: Contract | None = None,
    ) -> None:
        await self._verifier.send_payload(message.payload, message.headers, destination, contract)
