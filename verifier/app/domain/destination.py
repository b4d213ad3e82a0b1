"""Destination URI construction for the embedded consumer template.

URI grammar: ``<scheme>://<destination>[?key1=val1&key2=val2...]``.
Kafka keys: brokers, autoOffsetReset, groupId.
RabbitMQ keys: addresses, queue (optional), routingKey (optional).
"""
from __future__ import annotations

import hashlib
import json

from verifier.app.domain.amqp_metadata import AmqpMetadata
from verifier.app.domain.contract import Contract
from verifier.app.domain.messaging_type import MessagingType
from verifier.app.ports.property_source import PropertySource

KAFKA_BOOTSTRAP_SERVERS = "SPRING_KAFKA_BOOTSTRAP_SERVERS"
RABBITMQ_ADDRESSES = "SPRING_RABBITMQ_ADDRESSES"
KAFKA_AUTO_OFFSET_RESET = "latest"
CONSUMER_GROUP_LENGTH = 16


def _has_text(value: str | None) -> bool:
    return bool(value and value.strip())


def consumer_group_for(contract: Contract) -> str:
    """Stable group id: equal input and output-message descriptors always map to the same group."""
    canonical = json.dumps(
        [contract.input, contract.output_message],
        sort_keys=True,
        separators=(",", ":"),
        default=str,
    )
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()[:CONSUMER_GROUP_LENGTH]


def kafka_options(contract: Contract, properties: PropertySource) -> str:
    brokers = properties.get_required_property(KAFKA_BOOTSTRAP_SERVERS)
    return (
        f"?brokers={brokers}"
        f"&autoOffsetReset={KAFKA_AUTO_OFFSET_RESET}"
        f"&groupId={consumer_group_for(contract)}"
    )


def rabbitmq_options(contract: Contract, properties: PropertySource) -> str:
    opts = "?addresses=" + properties.get_required_property(RABBITMQ_ADDRESSES)
    output_message = AmqpMetadata.from_metadata(contract.metadata).output_message
    if _has_text(output_message.declare_queue_with_name):
        opts += f"&queue={output_message.declare_queue_with_name}"
    routing_key = output_message.message_properties.received_routing_key
    if _has_text(routing_key):
        opts += f"&routingKey={routing_key}"
    return opts


def build_options(
    messaging_type: MessagingType,
    contract: Contract | None,
    properties: PropertySource,
) -> str:
    if contract is None:
        return ""
    if messaging_type is MessagingType.KAFKA:
        return kafka_options(contract, properties)
    return rabbitmq_options(contract, properties)


def build_destination_uri(
    messaging_type: MessagingType,
    destination: str,
    contract: Contract | None,
    properties: PropertySource,
) -> str:
    return f"{messaging_type.scheme}://{destination}" + build_options(messaging_type, contract, properties)
