from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from ..schema.types import Scalar, SchemaCatalogue

SPEC_CREATOR = "shepherd@aptoslabs.com"
SPEC_NAME = "remapping-processor"
SPEC_VERSION = "0.0.10"

# downstream processor addresses event fields with JSON-path keys
EVENT_FIELD_PREFIX = "$."


class Network(str, Enum):
    MAINNET = "mainnet"
    TESTNET = "testnet"
    DEVNET = "devnet"
    LOCAL = "local"
    CUSTOM = "custom"

    @staticmethod
    def parse(s: "str | Network") -> "Network":
        if isinstance(s, Network):
            return s
        text = str(s).strip().lower()
        try:
            return Network(text)
        except ValueError as exc:
            allowed = ", ".join(n.value for n in Network)
            raise ValueError(f"Invalid network {s!r} (expected one of {allowed})") from exc

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ColumnTarget:
    table: str
    column: str

    @staticmethod
    def split(s: str) -> Optional["ColumnTarget"]:
        """Parse ``table::column``; None when the separator is absent."""
        table, sep, column = str(s).partition("::")
        if not sep:
            return None
        return ColumnTarget(table=table, column=column)

    def __str__(self) -> str:
        return f"{self.table}::{self.column}"


TargetMap = Dict[str, List[ColumnTarget]]


@dataclass(frozen=True)
class SpecIdentifier:
    spec_creator: str = SPEC_CREATOR
    spec_name: str = SPEC_NAME
    spec_version: str = SPEC_VERSION


@dataclass
class CommonConfig:
    network: str
    starting_version: int
    starting_version_override: Optional[int] = None


@dataclass
class EventMapping:
    # reserved for manual overrides; generation always leaves it empty
    constant_values: List[Scalar] = field(default_factory=list)
    event_fields: TargetMap = field(default_factory=dict)
    event_metadata: TargetMap = field(default_factory=dict)


@dataclass
class CustomConfig:
    db_schema: SchemaCatalogue = field(default_factory=dict)
    events: Dict[str, EventMapping] = field(default_factory=dict)
    transaction_metadata: TargetMap = field(default_factory=dict)
    payload: Dict[str, Any] = field(default_factory=dict)
    event_metadata: TargetMap = field(default_factory=dict)


@dataclass
class ProcessorConfig:
    """Declarative config consumed by the remapping processor."""

    spec_identifier: SpecIdentifier
    common_config: CommonConfig
    custom_config: CustomConfig
