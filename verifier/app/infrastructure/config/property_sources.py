"""PropertySource implementations: pydantic Settings (runtime) and a plain mapping (tests, CLI overrides)."""
from __future__ import annotations

from typing import Mapping

from verifier.app.config.settings import Settings
from verifier.app.ports.property_source import MissingPropertyError


def _require(name: str, value: str | None) -> str:
    if value is None or not str(value).strip():
        raise MissingPropertyError(name)
    return str(value)


class SettingsPropertySource:
    """Resolves properties by the environment-variable alias declared on Settings fields."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._field_by_alias = {
            str(info.validation_alias): field_name
            for field_name, info in type(settings).model_fields.items()
            if info.validation_alias is not None
        }

    def get_property(self, name: str, default: str | None = None) -> str | None:
        field_name = self._field_by_alias.get(name)
        if field_name is None:
            return default
        value = getattr(self._settings, field_name)
        if value is None or value == "":
            return default
        return str(value)

    def get_required_property(self, name: str) -> str:
        return _require(name, self.get_property(name))


class MappingPropertySource:
    def __init__(self, values: Mapping[str, str] | None = None) -> None:
        self._values = dict(values or {})

    def get_property(self, name: str, default: str | None = None) -> str | None:
        return self._values.get(name, default)

    def get_required_property(self, name: str) -> str:
        return _require(name, self._values.get(name))
