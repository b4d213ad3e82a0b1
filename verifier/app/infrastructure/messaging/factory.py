"""Consumer template factory: selects implementation from config. Only place that imports concrete endpoint consumers."""
from __future__ import annotations

from functools import partial

from verifier.app.config.settings import Settings
from verifier.app.domain.messaging_type import MessagingType
from verifier.app.infrastructure.messaging.consumer_template import EndpointConsumerTemplate
from verifier.app.infrastructure.messaging.endpoint import EndpointConsumer, EndpointUri
from verifier.app.infrastructure.messaging.inmemory.in_memory_consumer_template import InMemoryConsumerTemplate
from verifier.app.infrastructure.messaging.kafka.kafka_endpoint_consumer import KafkaEndpointConsumer
from verifier.app.infrastructure.messaging.rabbitmq.rabbitmq_endpoint_consumer import RabbitMQEndpointConsumer
from verifier.app.ports.consumer_template import ConsumerTemplate


def create_endpoint_consumer(endpoint: EndpointUri, settings: Settings) -> EndpointConsumer:
    if endpoint.scheme == MessagingType.KAFKA.scheme:
        return KafkaEndpointConsumer(endpoint, settings)

    if endpoint.scheme == MessagingType.RABBITMQ.scheme:
        return RabbitMQEndpointConsumer(endpoint, settings)

    raise ValueError(f"Unsupported endpoint scheme: {endpoint.scheme}")


def create_consumer_template(settings: Settings) -> ConsumerTemplate:
    backend = settings.consumer_backend.strip().lower()

    if backend == "broker":
        return EndpointConsumerTemplate(partial(create_endpoint_consumer, settings=settings))

    if backend == "inmemory":
        return InMemoryConsumerTemplate()

    raise ValueError(f"Unsupported consumer backend: {backend}")
