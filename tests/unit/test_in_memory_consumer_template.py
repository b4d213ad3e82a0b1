from __future__ import annotations

import asyncio

import pytest

from verifier.app.domain.messages import ReceivedMessage
from verifier.app.infrastructure.messaging.inmemory.in_memory_consumer_template import InMemoryConsumerTemplate


@pytest.mark.asyncio
async def test_receive_pops_published_messages_in_order():
    template = InMemoryConsumerTemplate()
    await template.publish("kafka://orders", ReceivedMessage(body=1))
    await template.publish("kafka://orders", ReceivedMessage(body=2))

    first = await template.receive("kafka://orders", 0)
    second = await template.receive("kafka://orders", 10)

    assert (first.body, second.body) == (1, 2)
    assert template.requested_uris == ["kafka://orders", "kafka://orders"]


@pytest.mark.asyncio
@pytest.mark.parametrize("timeout_ms", [0, -5, 20])
async def test_receive_without_messages_returns_none(timeout_ms):
    template = InMemoryConsumerTemplate()
    assert await template.receive("kafka://orders", timeout_ms) is None


@pytest.mark.asyncio
async def test_receive_waits_for_publish():
    template = InMemoryConsumerTemplate()

    async def publish_later() -> None:
        await asyncio.sleep(0.01)
        await template.publish("rabbitmq://orders", ReceivedMessage(body="late"))

    task = asyncio.create_task(publish_later())
    message = await template.receive("rabbitmq://orders", 2000)
    await task

    assert message is not None and message.body == "late"


@pytest.mark.asyncio
async def test_messages_are_scoped_per_uri():
    template = InMemoryConsumerTemplate()
    await template.publish("kafka://orders", ReceivedMessage(body=1))

    assert await template.receive("kafka://payments", 0) is None
    await template.close()
    assert template.closed is True
