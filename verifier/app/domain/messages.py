"""Message value objects exchanged between consumers and the verification layer."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ReceivedMessage:
    """A message as returned by a consumer template: raw body plus broker headers."""

    body: Any
    headers: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class VerifierMessage:
    """Normalized (body, headers) pair handed to contract assertions."""

    payload: Any
    headers: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.headers, dict):
            raise TypeError("message headers must be a dict")

    def get_header(self, name: str) -> Any:
        return self.headers.get(name)
