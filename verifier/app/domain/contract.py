"""Contract descriptor: the parts of a YAML contract the messaging adapter reads."""
from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field


class Contract(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    name: str | None = None
    description: str | None = None
    label: str | None = None
    input: dict[str, Any] | None = None
    output_message: dict[str, Any] | None = Field(None, alias="outputMessage")
    metadata: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def load_all(cls, text: str) -> list["Contract"]:
        """Parse every contract in a YAML document (single mapping, list, or multi-document stream)."""
        contracts: list[Contract] = []
        for document in yaml.safe_load_all(text):
            if document is None:
                continue
            items = document if isinstance(document, list) else [document]
            for item in items:
                if not isinstance(item, dict):
                    raise ValueError(f"contract must be a mapping, got {type(item).__name__}")
                contracts.append(cls.model_validate(item))
        return contracts

    @classmethod
    def from_yaml(cls, text: str) -> "Contract":
        contracts = cls.load_all(text)
        if not contracts:
            raise ValueError("no contract found in document")
        return contracts[0]

    @classmethod
    def from_file(cls, path: str | Path) -> "Contract":
        return cls.from_yaml(Path(path).read_text(encoding="utf-8"))
