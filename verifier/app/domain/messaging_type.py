"""Broker backend selection from the MESSAGING_TYPE flag."""
from __future__ import annotations

from enum import Enum


class MessagingType(str, Enum):
    KAFKA = "kafka"
    RABBITMQ = "rabbitmq"

    @property
    def scheme(self) -> str:
        return self.value

    @classmethod
    def from_config(cls, value: str | None) -> "MessagingType":
        """Kafka only for an exact case-insensitive "kafka"; everything else falls back to RabbitMQ."""
        if value is not None and value.lower() == "kafka":
            return cls.KAFKA
        return cls.RABBITMQ
