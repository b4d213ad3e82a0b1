"""Kafka endpoint consumer: subscribes one topic with aiokafka and polls a single record per receive."""
from __future__ import annotations

from typing import Any

import aiokafka
from loguru import logger

from verifier.app.config.settings import Settings
from verifier.app.core import SERVICE_NAME
from verifier.app.domain.messages import ReceivedMessage
from verifier.app.infrastructure.messaging.endpoint import EndpointUri

DEFAULT_AUTO_OFFSET_RESET = "latest"

HEADER_TOPIC = "kafka.TOPIC"
HEADER_PARTITION = "kafka.PARTITION"
HEADER_OFFSET = "kafka.OFFSET"
HEADER_KEY = "kafka.KEY"
HEADER_TIMESTAMP = "kafka.TIMESTAMP"


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


class KafkaEndpointConsumer:
    """EndpointConsumer for ``kafka://<topic>?brokers=...&groupId=...&autoOffsetReset=...``."""

    def __init__(self, endpoint: EndpointUri, settings: Settings) -> None:
        self._topic = endpoint.destination
        self._brokers = endpoint.options.get("brokers") or settings.kafka_bootstrap_servers
        if not self._brokers:
            raise ValueError(f"kafka endpoint {self._topic!r} has no brokers configured")
        self._group_id = endpoint.options.get("groupId") or None
        self._auto_offset_reset = endpoint.options.get("autoOffsetReset") or DEFAULT_AUTO_OFFSET_RESET
        self._consumer: aiokafka.AIOKafkaConsumer | None = None

    @property
    def group_id(self) -> str | None:
        return self._group_id

    async def connect(self) -> None:
        _log("kafka_subscribing", topic=self._topic, group_id=self._group_id)
        consumer = aiokafka.AIOKafkaConsumer(
            self._topic,
            bootstrap_servers=self._brokers,
            group_id=self._group_id,
            auto_offset_reset=self._auto_offset_reset,
            enable_auto_commit=True,
        )
        try:
            await consumer.start()
        except Exception as exc:
            logger.warning("kafka consumer start failed: {}", exc)
            await consumer.stop()
            raise
        self._consumer = consumer
        _log("kafka_subscribed", topic=self._topic)

    async def receive(self, timeout_ms: int) -> ReceivedMessage | None:
        if self._consumer is None:
            raise RuntimeError("kafka consumer not connected")
        batches = await self._consumer.getmany(timeout_ms=max(timeout_ms, 0), max_records=1)
        for records in batches.values():
            for record in records:
                return self._to_message(record)
        return None

    @staticmethod
    def _to_message(record: Any) -> ReceivedMessage:
        headers: dict[str, Any] = {key: value for key, value in (record.headers or ())}
        headers[HEADER_TOPIC] = record.topic
        headers[HEADER_PARTITION] = record.partition
        headers[HEADER_OFFSET] = record.offset
        headers[HEADER_TIMESTAMP] = record.timestamp
        if record.key is not None:
            headers[HEADER_KEY] = record.key
        return ReceivedMessage(body=record.value, headers=headers)

    async def close(self) -> None:
        if self._consumer is not None:
            consumer, self._consumer = self._consumer, None
            await consumer.stop()
            _log("kafka_unsubscribed", topic=self._topic)
