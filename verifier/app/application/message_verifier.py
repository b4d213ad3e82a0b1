from __future__ import annotations

from typing import Any, Mapping

from loguru import logger

from verifier.app.core import SERVICE_NAME
from verifier.app.domain.contract import Contract
from verifier.app.domain.destination import build_destination_uri
from verifier.app.domain.messages import ReceivedMessage
from verifier.app.domain.messaging_type import MessagingType
from verifier.app.domain.time_unit import TimeUnit
from verifier.app.ports.consumer_template import ConsumerTemplate
from verifier.app.ports.message_verifier import DEFAULT_RECEIVE_TIMEOUT, UnsupportedOperationError
from verifier.app.ports.property_source import PropertySource

RECEIVE_ONLY_MESSAGE = "Currently supports only receiving"


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


class ConsumerMessageVerifier:
    """
    Receive-only MessageVerifier backed by a ConsumerTemplate.

    Every receive builds the destination URI from scratch (scheme from the messaging
    type, options from the contract and the property source) and performs exactly one
    bounded wait on the consumer template. Nothing is retried or buffered here.
    """

    def __init__(
        self,
        messaging_type: MessagingType,
        properties: PropertySource,
        consumer: ConsumerTemplate,
    ) -> None:
        self._messaging_type = messaging_type
        self._properties = properties
        self._consumer = consumer

    @property
    def messaging_type(self) -> MessagingType:
        return self._messaging_type

    def destination_uri(self, destination: str, contract: Contract | None = None) -> str:
        return build_destination_uri(self._messaging_type, destination, contract, self._properties)

    async def receive(
        self,
        destination: str,
        timeout: float = DEFAULT_RECEIVE_TIMEOUT,
        unit: TimeUnit = TimeUnit.SECONDS,
        contract: Contract | None = None,
    ) -> ReceivedMessage | None:
        uri = self.destination_uri(destination, contract)
        timeout_ms = unit.to_millis(timeout)
        _log("receive_started", destination=destination, uri=uri, timeout_ms=timeout_ms)
        message = await self._consumer.receive(uri, timeout_ms)
        if message is None:
            _log("receive_timed_out", destination=destination, timeout_ms=timeout_ms)
            return None
        _log("message_received", destination=destination)
        return message

    async def send(
        self,
        message: ReceivedMessage,
        destination: str,
        contract: Contract | None = None,
    ) -> None:
        raise UnsupportedOperationError(RECEIVE_ONLY_MESSAGE)

    async def send_payload(
        self,
        payload: Any,
        headers: Mapping[str, Any] | None,
        destination: str,
        contract: Contract | None = None,
    ) -> None:
        raise UnsupportedOperationError(RECEIVE_ONLY_MESSAGE)
