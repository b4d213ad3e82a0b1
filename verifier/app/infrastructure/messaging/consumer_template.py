"""
ConsumerTemplate over broker endpoints.

One endpoint consumer is created and connected per distinct URI and reused for later
receives on the same URI, so a Kafka group or a declared RabbitMQ queue keeps its
position between calls. Only the first receive on a URI waits for its connect;
close() releases every cached endpoint.
"""
from __future__ import annotations

import asyncio
from typing import Any, Callable

from loguru import logger

from verifier.app.core import SERVICE_NAME
from verifier.app.domain.messages import ReceivedMessage
from verifier.app.infrastructure.messaging.endpoint import EndpointConsumer, EndpointUri


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


class EndpointConsumerTemplate:
    """ConsumerTemplate implementation"""

    def __init__(self, endpoint_factory: Callable[[EndpointUri], EndpointConsumer]) -> None:
        self._endpoint_factory = endpoint_factory
        self._endpoints: dict[str, EndpointConsumer] = {}
        self._connect_locks: dict[str, asyncio.Lock] = {}

    async def _endpoint_for(self, uri: str) -> EndpointConsumer:
        endpoint = self._endpoints.get(uri)
        if endpoint is not None:
            return endpoint
        # Connects are serialized per URI only; other URIs keep receiving meanwhile.
        async with self._connect_locks.setdefault(uri, asyncio.Lock()):
            endpoint = self._endpoints.get(uri)
            if endpoint is not None:
                return endpoint
            endpoint = self._endpoint_factory(EndpointUri.parse(uri))
            await endpoint.connect()
            self._endpoints[uri] = endpoint
            _log("endpoint_started", uri=uri)
            return endpoint

    async def receive(self, uri: str, timeout_ms: int) -> ReceivedMessage | None:
        endpoint = await self._endpoint_for(uri)
        return await endpoint.receive(timeout_ms)

    async def close(self) -> None:
        endpoints, self._endpoints = self._endpoints, {}
        self._connect_locks = {}
        for uri, endpoint in endpoints.items():
            try:
                await endpoint.close()
            except Exception as exc:
                logger.warning("endpoint close failed for {}: {}", uri, exc)
        _log("consumer_template_closed", endpoints=len(endpoints))
