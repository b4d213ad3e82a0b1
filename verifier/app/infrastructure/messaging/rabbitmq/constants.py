"""RabbitMQ endpoint consumer lifecycle states."""
from enum import Enum


class ConsumerState(str, Enum):
    DISCONNECTED = "DISCONNECTED"
    CONNECTING = "CONNECTING"
    CONNECTED = "CONNECTED"
    CHANNEL_OPEN = "CHANNEL_OPEN"
    QUEUE_DECLARED = "QUEUE_DECLARED"
    READY = "READY"
    CLOSING = "CLOSING"
    CLOSED = "CLOSED"


DEFAULT_PORT = 5672
DEFAULT_EXCHANGE_TYPE = "topic"
DEFAULT_ROUTING_KEY = "#"
POLL_INTERVAL_SECONDS = 0.05

HEADER_EXCHANGE_NAME = "rabbitmq.EXCHANGE_NAME"
HEADER_ROUTING_KEY = "rabbitmq.ROUTING_KEY"
HEADER_CONTENT_TYPE = "rabbitmq.CONTENT_TYPE"
HEADER_MESSAGE_ID = "rabbitmq.MESSAGE_ID"
HEADER_CORRELATION_ID = "rabbitmq.CORRELATIONID"
