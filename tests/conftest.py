from __future__ import annotations

from typing import Any

import pytest

from verifier.app.config.settings import Settings
from verifier.app.domain.contract import Contract
from verifier.app.domain.messages import ReceivedMessage
from verifier.app.infrastructure.config.property_sources import MappingPropertySource


class FakeConsumerTemplate:
    """Implements ConsumerTemplate for tests; returns queued messages in order, then None."""

    def __init__(self, messages: list[ReceivedMessage] | None = None) -> None:
        self._messages = list(messages or [])
        self.calls: list[tuple[str, int]] = []
        self.closed = False

    async def receive(self, uri: str, timeout_ms: int) -> ReceivedMessage | None:
        self.calls.append((uri, timeout_ms))
        if not self._messages:
            return None
        return self._messages.pop(0)

    async def close(self) -> None:
        self.closed = True


def make_settings(**env: Any) -> Settings:
    """Settings from explicit env-style values only (no .env file)."""
    return Settings(_env_file=None, **env)


def amqp_contract(queue: str | None = None, routing_key: str | None = None) -> Contract:
    output_message: dict[str, Any] = {"messageProperties": {}}
    if queue is not None:
        output_message["declareQueueWithName"] = queue
    if routing_key is not None:
        output_message["messageProperties"]["receivedRoutingKey"] = routing_key
    return Contract(
        name="order_created",
        input={"triggeredBy": "createOrder()"},
        outputMessage={"sentTo": "orders", "body": {"id": 1}},
        metadata={"amqp": {"outputMessage": output_message}},
    )


@pytest.fixture()
def kafka_properties() -> MappingPropertySource:
    return MappingPropertySource({"SPRING_KAFKA_BOOTSTRAP_SERVERS": "broker:9092"})


@pytest.fixture()
def rabbit_properties() -> MappingPropertySource:
    return MappingPropertySource({"SPRING_RABBITMQ_ADDRESSES": "rabbit:5672"})


@pytest.fixture()
def fake_consumer() -> FakeConsumerTemplate:
    return FakeConsumerTemplate()
