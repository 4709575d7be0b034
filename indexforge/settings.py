from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Mapping, Optional

from .schema.types import parse_bool_cell

MalformedOverrideMode = Literal["drop", "error"]


@dataclass(frozen=True)
class ResolutionPolicy:
    """How the generator treats incomplete mappings.

    - strict: any unmapped event, field or table column fails the run.
    - malformed_overrides: what to do with a field-override destination that
      is not written as ``table::column`` ("drop" it or raise an "error").
    """

    strict: bool = False
    malformed_overrides: MalformedOverrideMode = "drop"

    def __post_init__(self) -> None:
        if self.malformed_overrides not in ("drop", "error"):
            raise ValueError(
                f"malformed_overrides must be 'drop' or 'error', got {self.malformed_overrides!r}"
            )


@dataclass(frozen=True)
class GenerateSettings:
    network: str = "testnet"
    events_dir: Path = Path("./events")
    db_schema: Path = Path("./db_schema.csv")
    event_mapping: Path = Path("./event_mapping.csv")
    output_file: Path = Path("./processor_config.yaml")
    strict: bool = False


def get_generate_settings(env: Optional[Mapping[str, str]] = None) -> GenerateSettings:
    env = os.environ if env is None else env
    defaults = GenerateSettings()
    strict = env.get("INDEXFORGE_STRICT")
    return GenerateSettings(
        network=env.get("INDEXFORGE_NETWORK", defaults.network),
        events_dir=Path(env.get("INDEXFORGE_EVENTS_DIR", defaults.events_dir)),
        db_schema=Path(env.get("INDEXFORGE_DB_SCHEMA", defaults.db_schema)),
        event_mapping=Path(env.get("INDEXFORGE_EVENT_MAPPING", defaults.event_mapping)),
        output_file=Path(env.get("INDEXFORGE_OUTPUT_FILE", defaults.output_file)),
        strict=defaults.strict if strict is None else parse_bool_cell(strict),
    )
