from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from .address import AccountAddress


@dataclass(frozen=True)
class EventDefinition:
    """Declared shape of an event struct emitted by a deployed module."""

    package_name: str
    module_address: str
    module_name: str
    name: str
    fields: Dict[str, str] = field(default_factory=dict)

    @property
    def event_name(self) -> str:
        """Identity used to match mapping keys: ``package::module::name``."""
        return f"{self.package_name}::{self.module_name}::{self.name}"

    @property
    def materialized_name(self) -> str:
        """Key of the event in the processor config: ``address::module::name``."""
        return f"{self.module_address}::{self.module_name}::{self.name}"

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "EventDefinition":
        if not isinstance(d, dict):
            raise ValueError(f"Event definition must be an object, got {type(d).__name__}")
        missing = {"package_name", "module_address", "module_name", "name", "fields"} - set(d)
        if missing:
            raise ValueError(f"Missing required keys: {sorted(missing)}")

        for key in ("package_name", "module_name", "name"):
            if not isinstance(d[key], str) or not d[key]:
                raise ValueError(f"{key} must be a non-empty string")
        fields = d["fields"]
        if not isinstance(fields, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in fields.items()
        ):
            raise ValueError("fields must map field names to type strings")

        return EventDefinition(
            package_name=d["package_name"],
            module_address=AccountAddress.parse(d["module_address"]).to_standard_string(),
            module_name=d["module_name"],
            name=d["name"],
            fields=dict(sorted(fields.items())),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "package_name": self.package_name,
            "module_address": self.module_address,
            "module_name": self.module_name,
            "name": self.name,
            "fields": dict(sorted(self.fields.items())),
        }
