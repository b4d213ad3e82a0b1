"""Endpoint URI parsing and the per-endpoint consumer contract used by the consumer template."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol
from urllib.parse import parse_qsl

from verifier.app.domain.messages import ReceivedMessage


@dataclass(frozen=True)
class EndpointUri:
    """Parsed ``<scheme>://<destination>[?options]``. Option values are URL-decoded."""

    scheme: str
    destination: str
    options: dict[str, str] = field(default_factory=dict)

    @staticmethod
    def parse(uri: str) -> "EndpointUri":
        scheme, sep, rest = uri.partition("://")
        if not sep or not scheme:
            raise ValueError(f"endpoint uri has no scheme: {uri!r}")
        destination, _, query = rest.partition("?")
        if not destination:
            raise ValueError(f"endpoint uri has no destination: {uri!r}")
        options = dict(parse_qsl(query, keep_blank_values=True)) if query else {}
        return EndpointUri(scheme=scheme.lower(), destination=destination, options=options)


class EndpointConsumer(Protocol):
    async def connect(self) -> None: ...

    async def receive(self, timeout_ms: int) -> ReceivedMessage | None: ...

    async def close(self) -> None: ...
