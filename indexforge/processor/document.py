from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..errors import ParseError
from ..schema.types import ColumnSpec, ColumnTypeSpec, SchemaCatalogue
from ..sources import read_text_source, write_text_output
from .config import (
    ColumnTarget,
    CommonConfig,
    CustomConfig,
    EventMapping,
    ProcessorConfig,
    SpecIdentifier,
    TargetMap,
)

logger = logging.getLogger(__name__)

_FLAGS = ("is_index", "is_nullable", "is_option", "is_primary_key", "is_vec")


# ---------------------------
# to plain data
# ---------------------------
# Entities keep their field declaration order; mappings are emitted sorted by key.


def _targets_to_list(targets: List[ColumnTarget]) -> List[Dict[str, str]]:
    return [{"column": t.column, "table": t.table} for t in targets]


def _target_map_to_dict(targets: TargetMap) -> Dict[str, Any]:
    return {key: _targets_to_list(v) for key, v in sorted(targets.items())}


def _column_spec_to_dict(spec: ColumnSpec) -> Dict[str, Any]:
    d: Dict[str, Any] = {
        "column_type": {
            "column_type": spec.column_type.column_type,
            "type": spec.column_type.type.value,
        }
    }
    if spec.default_value is not None:
        d["default_value"] = spec.default_value
    for flag in _FLAGS:
        d[flag] = getattr(spec, flag)
    return d


def _db_schema_to_dict(db_schema: SchemaCatalogue) -> Dict[str, Any]:
    return {
        table: {column: _column_spec_to_dict(spec) for column, spec in sorted(columns.items())}
        for table, columns in sorted(db_schema.items())
    }


def config_to_dict(cfg: ProcessorConfig) -> Dict[str, Any]:
    common: Dict[str, Any] = {
        "network": cfg.common_config.network,
        "starting_version": cfg.common_config.starting_version,
    }
    if cfg.common_config.starting_version_override is not None:
        common["starting_version_override"] = cfg.common_config.starting_version_override

    custom = cfg.custom_config
    return {
        "spec_identifier": {
            "spec_creator": cfg.spec_identifier.spec_creator,
            "spec_name": cfg.spec_identifier.spec_name,
            "spec_version": cfg.spec_identifier.spec_version,
        },
        "common_config": common,
        "custom_config": {
            "db_schema": _db_schema_to_dict(custom.db_schema),
            "events": {
                name: {
                    "constant_values": list(mapping.constant_values),
                    "event_fields": _target_map_to_dict(mapping.event_fields),
                    "event_metadata": _target_map_to_dict(mapping.event_metadata),
                }
                for name, mapping in sorted(custom.events.items())
            },
            "transaction_metadata": _target_map_to_dict(custom.transaction_metadata),
            "payload": dict(sorted(custom.payload.items())),
            "event_metadata": _target_map_to_dict(custom.event_metadata),
        },
    }


# ---------------------------
# from plain data
# ---------------------------
def _mapping(value: Any, where: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{where} must be a mapping")
    return value


def _required(d: Dict[str, Any], key: str, where: str) -> Any:
    if key not in d:
        raise ValueError(f"{where}.{key} is required")
    return d[key]


def _as_int(value: Any, where: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{where} must be an integer")
    return value


def _as_bool(value: Any, where: str) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"{where} must be a boolean")
    return value


def _targets_from_list(value: Any, where: str) -> List[ColumnTarget]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{where} must be a list")
    out = []
    for i, item in enumerate(value):
        item = _mapping(item, f"{where}[{i}]")
        out.append(
            ColumnTarget(
                table=str(_required(item, "table", f"{where}[{i}]")),
                column=str(_required(item, "column", f"{where}[{i}]")),
            )
        )
    return out


def _target_map_from_dict(value: Any, where: str) -> TargetMap:
    return {
        str(key): _targets_from_list(v, f"{where}.{key}")
        for key, v in sorted(_mapping(value, where).items())
    }


def _column_spec_from_dict(value: Any, where: str) -> ColumnSpec:
    d = _mapping(value, where)
    type_d = _mapping(_required(d, "column_type", where), f"{where}.column_type")
    type_spec = ColumnTypeSpec.parse(
        _required(type_d, "type", f"{where}.column_type"),
        _required(type_d, "column_type", f"{where}.column_type"),
    )
    return ColumnSpec(
        column_type=type_spec,
        default_value=d.get("default_value"),
        **{flag: _as_bool(_required(d, flag, where), f"{where}.{flag}") for flag in _FLAGS},
    )


def _event_mapping_from_dict(value: Any, where: str) -> EventMapping:
    d = _mapping(value, where)
    constant_values = d.get("constant_values") or []
    if not isinstance(constant_values, list):
        raise ValueError(f"{where}.constant_values must be a list")
    return EventMapping(
        constant_values=list(constant_values),
        event_fields=_target_map_from_dict(d.get("event_fields"), f"{where}.event_fields"),
        event_metadata=_target_map_from_dict(d.get("event_metadata"), f"{where}.event_metadata"),
    )


def config_from_dict(data: Any) -> ProcessorConfig:
    """Build a ProcessorConfig from parsed YAML; raises ValueError on bad shape."""
    root = _mapping(data, "config")
    spec = _mapping(_required(root, "spec_identifier", "config"), "spec_identifier")
    common = _mapping(_required(root, "common_config", "config"), "common_config")
    custom = _mapping(_required(root, "custom_config", "config"), "custom_config")

    override = common.get("starting_version_override")
    db_schema = {
        str(table): {
            str(column): _column_spec_from_dict(col, f"db_schema.{table}.{column}")
            for column, col in sorted(_mapping(columns, f"db_schema.{table}").items())
        }
        for table, columns in sorted(_mapping(custom.get("db_schema"), "db_schema").items())
    }
    return ProcessorConfig(
        spec_identifier=SpecIdentifier(
            spec_creator=str(_required(spec, "spec_creator", "spec_identifier")),
            spec_name=str(_required(spec, "spec_name", "spec_identifier")),
            spec_version=str(_required(spec, "spec_version", "spec_identifier")),
        ),
        common_config=CommonConfig(
            network=str(_required(common, "network", "common_config")),
            starting_version=_as_int(
                _required(common, "starting_version", "common_config"),
                "common_config.starting_version",
            ),
            starting_version_override=(
                None
                if override is None
                else _as_int(override, "common_config.starting_version_override")
            ),
        ),
        custom_config=CustomConfig(
            db_schema=db_schema,
            events={
                str(name): _event_mapping_from_dict(m, f"events.{name}")
                for name, m in sorted(_mapping(custom.get("events"), "events").items())
            },
            transaction_metadata=_target_map_from_dict(
                custom.get("transaction_metadata"), "transaction_metadata"
            ),
            payload=dict(sorted(_mapping(custom.get("payload"), "payload").items())),
            event_metadata=_target_map_from_dict(custom.get("event_metadata"), "event_metadata"),
        ),
    )


# ---------------------------
# YAML text / files
# ---------------------------
def dumps_processor_config(cfg: ProcessorConfig) -> str:
    return yaml.safe_dump(
        config_to_dict(cfg),
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
    )


def loads_processor_config(text: str, path: Optional[Path] = None) -> ProcessorConfig:
    where = "YAML config" if path is None else f"YAML config: {path}"
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ParseError(f"failed to parse {where}: {exc}", path) from exc
    try:
        return config_from_dict(data)
    except ValueError as exc:
        raise ParseError(f"failed to parse {where}: {exc}", path) from exc


def load_processor_config_yaml(path: Path | str) -> ProcessorConfig:
    path = Path(path)
    return loads_processor_config(read_text_source(path), path)


def save_processor_config_yaml(path: Path | str, cfg: ProcessorConfig) -> None:
    path = Path(path)
    write_text_output(path, dumps_processor_config(cfg))
    logger.debug("wrote processor config to %s", path)
