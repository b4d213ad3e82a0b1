"""
RabbitMQ endpoint consumer: ``rabbitmq://<exchange>?addresses=...[&queue=...][&routingKey=...]``.

Lifecycle:
  DISCONNECTED -> CONNECTING (backoff over the address list) -> CONNECTED ->
  CHANNEL_OPEN -> QUEUE_DECLARED -> READY.
  close(): READY -> CLOSING -> close channel/connection -> CLOSED.

The exchange is declared durable (type from ``exchangeType``, topic by default). With
``queue`` a durable queue of that name is declared, otherwise an exclusive server-named
queue; either is bound to the exchange with ``routingKey`` (``#`` by default).
receive() polls the queue with basic.get until a message arrives or the timeout elapses.
"""
from __future__ import annotations

import asyncio
from typing import Any
from urllib.parse import quote

import aio_pika
from loguru import logger

from verifier.app.config.settings import Settings
from verifier.app.core import SERVICE_NAME
from verifier.app.core.backoff import exponential_backoff
from verifier.app.domain.messages import ReceivedMessage
from verifier.app.infrastructure.messaging.endpoint import EndpointUri
from verifier.app.infrastructure.messaging.rabbitmq.constants import (
    DEFAULT_EXCHANGE_TYPE,
    DEFAULT_PORT,
    DEFAULT_ROUTING_KEY,
    HEADER_CONTENT_TYPE,
    HEADER_CORRELATION_ID,
    HEADER_EXCHANGE_NAME,
    HEADER_MESSAGE_ID,
    HEADER_ROUTING_KEY,
    POLL_INTERVAL_SECONDS,
    ConsumerState,
)


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


def parse_addresses(addresses: str) -> list[tuple[str, int]]:
    """``host[:port][,host[:port]...]`` -> [(host, port), ...]."""
    parsed: list[tuple[str, int]] = []
    for address in addresses.split(","):
        address = address.strip()
        if not address:
            continue
        host, sep, port = address.rpartition(":")
        if not sep:
            parsed.append((address, DEFAULT_PORT))
        else:
            parsed.append((host, int(port)))
    if not parsed:
        raise ValueError(f"no rabbitmq addresses in {addresses!r}")
    return parsed


class RabbitMQEndpointConsumer:
    """EndpointConsumer implementation"""

    def __init__(self, endpoint: EndpointUri, settings: Settings) -> None:
        self._settings = settings
        self._exchange_name = endpoint.destination
        self._addresses = parse_addresses(
            endpoint.options.get("addresses") or settings.rabbitmq_addresses
        )
        self._queue_name = endpoint.options.get("queue") or ""
        self._routing_key = endpoint.options.get("routingKey") or DEFAULT_ROUTING_KEY
        self._exchange_type = aio_pika.ExchangeType(
            endpoint.options.get("exchangeType") or DEFAULT_EXCHANGE_TYPE
        )
        self._state = ConsumerState.DISCONNECTED
        self._connection: aio_pika.abc.AbstractRobustConnection | None = None
        self._channel: aio_pika.abc.AbstractChannel | None = None
        self._queue: aio_pika.abc.AbstractQueue | None = None

    @property
    def state(self) -> ConsumerState:
        return self._state

    def _set_state(self, state: ConsumerState) -> None:
        self._state = state

    def _build_amqp_url(self, host: str, port: int) -> str:
        vhost = self._settings.rabbitmq_virtual_host
        vhost_path = "" if vhost == "/" else quote(vhost, safe="")
        return (
            f"amqp://{quote(self._settings.rabbitmq_username, safe='')}"
            f":{quote(self._settings.rabbitmq_password, safe='')}"
            f"@{host}:{port}/{vhost_path}"
        )

    async def _open_connection(self) -> aio_pika.abc.AbstractRobustConnection:
        last_error: Exception | None = None
        for host, port in self._addresses:
            try:
                return await aio_pika.connect_robust(self._build_amqp_url(host, port))
            except Exception as e:
                logger.warning("rmq connect to {}:{} failed: {}", host, port, e)
                last_error = e
        raise last_error or RuntimeError("no rabbitmq address reachable")

    async def _open_channel_and_declare(self) -> None:
        if not self._connection:
            return
        self._channel = await self._connection.channel()
        self._set_state(ConsumerState.CHANNEL_OPEN)
        exchange = await self._channel.declare_exchange(
            self._exchange_name, self._exchange_type, durable=True
        )
        if self._queue_name:
            self._queue = await self._channel.declare_queue(self._queue_name, durable=True)
        else:
            self._queue = await self._channel.declare_queue(exclusive=True)
        await self._queue.bind(exchange, routing_key=self._routing_key)
        self._set_state(ConsumerState.QUEUE_DECLARED)
        self._set_state(ConsumerState.READY)
        _log(
            "rmq_queue_bound",
            exchange=self._exchange_name,
            queue=self._queue.name,
            routing_key=self._routing_key,
        )

    async def connect(self) -> None:
        self._set_state(ConsumerState.CONNECTING)
        _log("rmq_connecting", exchange=self._exchange_name)
        attempt = 0
        async for delay in exponential_backoff(
            self._settings.initial_backoff_seconds,
            self._settings.max_backoff_seconds,
            self._settings.backoff_multiplier,
            self._settings.max_connection_attempts,
        ):
            attempt += 1
            _log("rmq_connect_attempt", attempt=attempt, delay=delay)
            try:
                self._connection = await self._open_connection()
                break
            except Exception:
                if attempt >= self._settings.max_connection_attempts:
                    _log("rmq_connect_failed", attempt=attempt)
                    self._set_state(ConsumerState.DISCONNECTED)
                    raise
        self._set_state(ConsumerState.CONNECTED)
        _log("rmq_connected")
        try:
            await self._open_channel_and_declare()
        except Exception:
            await self._close_channel_and_connection()
            self._set_state(ConsumerState.DISCONNECTED)
            raise

    async def receive(self, timeout_ms: int) -> ReceivedMessage | None:
        if self._queue is None:
            raise RuntimeError("consumer not connected")
        loop = asyncio.get_running_loop()
        deadline = loop.time() + max(timeout_ms, 0) / 1000
        while True:
            message = await self._queue.get(no_ack=False, fail=False)
            if message is not None:
                await message.ack()
                return self._to_message(message)
            remaining = deadline - loop.time()
            if remaining <= 0:
                return None
            await asyncio.sleep(min(POLL_INTERVAL_SECONDS, remaining))

    @staticmethod
    def _to_message(message: Any) -> ReceivedMessage:
        headers: dict[str, Any] = dict(message.headers or {})
        headers[HEADER_EXCHANGE_NAME] = message.exchange
        headers[HEADER_ROUTING_KEY] = message.routing_key
        if message.content_type:
            headers[HEADER_CONTENT_TYPE] = message.content_type
        if message.message_id:
            headers[HEADER_MESSAGE_ID] = message.message_id
        if message.correlation_id:
            headers[HEADER_CORRELATION_ID] = message.correlation_id
        return ReceivedMessage(body=message.body, headers=headers)

    async def _close_channel_and_connection(self) -> None:
        self._queue = None
        if self._channel:
            try:
                await self._channel.close()
            except Exception as e:
                logger.warning("channel close failed (continuing to close connection): {}", e)
            self._channel = None
        if self._connection:
            try:
                await self._connection.close()
            except Exception as e:
                logger.warning("connection close failed: {}", e)
            self._connection = None

    async def close(self) -> None:
        self._set_state(ConsumerState.CLOSING)
        await self._close_channel_and_connection()
        self._set_state(ConsumerState.CLOSED)
        _log("rmq_endpoint_closed", exchange=self._exchange_name)
