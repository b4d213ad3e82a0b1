"""AMQP section of contract metadata (`metadata.amqp`).

Only the output-message fields the receive adapter needs are modelled; unknown keys
are ignored so contracts written for richer tooling still parse.
"""
from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field

AMQP_METADATA_KEY = "amqp"


class _AmqpModel(BaseModel):
    model_config = ConfigDict(
        frozen=True, populate_by_name=True, extra="ignore", coerce_numbers_to_str=True
    )


class AmqpMessageProperties(_AmqpModel):
    received_routing_key: str | None = Field(None, alias="receivedRoutingKey")
    content_type: str | None = Field(None, alias="contentType")


class AmqpOutputMessage(_AmqpModel):
    declare_queue_with_name: str | None = Field(None, alias="declareQueueWithName")
    message_properties: AmqpMessageProperties = Field(
        default_factory=AmqpMessageProperties, alias="messageProperties"
    )


class AmqpMetadata(_AmqpModel):
    output_message: AmqpOutputMessage = Field(default_factory=AmqpOutputMessage, alias="outputMessage")

    @classmethod
    def from_metadata(cls, metadata: Mapping[str, Any] | None) -> "AmqpMetadata":
        section = (metadata or {}).get(AMQP_METADATA_KEY) or {}
        return cls.model_validate(section)
