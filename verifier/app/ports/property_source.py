"""Property source port: read configuration values by environment-variable name.

The verifier resolves broker connection properties through this port at call time
instead of reading process-global state. Infrastructure provides implementations.
"""
from __future__ import annotations

from typing import Protocol, runtime_checkable


class MissingPropertyError(KeyError):
    """Raised when a required property is absent or blank."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Required key '{self.name}' not found"


@runtime_checkable
class PropertySource(Protocol):
    def get_property(self, name: str, default: str | None = None) -> str | None: ...

    def get_required_property(self, name: str) -> str:
        """Return the value; raise MissingPropertyError when absent or blank."""
        ...
