from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping, NamedTuple, Optional, Sequence, Set, Tuple

from ..errors import ParseError, ResolutionError, UnmappedItemsError
from ..events.definition import EventDefinition
from ..schema.types import (
    EVENT_METADATA_FIELDS,
    TRANSACTION_METADATA_FIELDS,
    ColumnSpec,
    SchemaCatalogue,
    TableSchema,
    TypeCategory,
)
from ..settings import ResolutionPolicy
from .config import (
    EVENT_FIELD_PREFIX,
    ColumnTarget,
    CommonConfig,
    CustomConfig,
    EventMapping,
    Network,
    ProcessorConfig,
    SpecIdentifier,
    TargetMap,
)

logger = logging.getLogger(__name__)


class GenerationResult(NamedTuple):
    config: ProcessorConfig
    unmapped_events: List[str]
    unmapped_table_columns: List[Tuple[str, str]]

    @property
    def has_warnings(self) -> bool:
        return bool(self.unmapped_events or self.unmapped_table_columns)


def _sorted_tables(
    table_schemas: Mapping[str, TableSchema], names: Iterable[str]
) -> List[Tuple[str, List[Tuple[str, ColumnSpec]]]]:
    return [(name, sorted(table_schemas[name].items())) for name in names]


def _field_overrides(
    event_name: str,
    event_mapping: Mapping[str, Sequence[str]],
    policy: ResolutionPolicy,
) -> Dict[str, List[ColumnTarget]]:
    """Collect ``<event_name>::<field> -> table::column`` overrides for one event."""
    prefix = f"{event_name}::"
    overrides: Dict[str, List[ColumnTarget]] = {}
    for key, destinations in event_mapping.items():
        if not key.startswith(prefix) or len(key) == len(prefix):
            continue
        targets: List[ColumnTarget] = []
        for destination in destinations:
            target = ColumnTarget.split(destination)
            if target is None:
                if policy.malformed_overrides == "error":
                    raise ParseError(
                        f"invalid field override {key} -> {destination}: expected table::column"
                    )
                logger.warning(
                    "dropping field override %s -> %s: expected table::column",
                    key,
                    destination,
                )
                continue
            if target not in targets:
                targets.append(target)
        overrides[key[len(prefix):]] = targets
    return overrides


def _metadata_targets(
    tables: Sequence[Tuple[str, Sequence[Tuple[str, ColumnSpec]]]],
    category: TypeCategory,
    key: str,
) -> List[ColumnTarget]:
    # first matching column of each table
    targets = []
    for table_name, columns in tables:
        for column_name, spec in columns:
            if spec.column_type.matches(category, key):
                targets.append(ColumnTarget(table=table_name, column=column_name))
                break
    return targets


def _check_override(
    event_name: str,
    field_name: str,
    target: ColumnTarget,
    table_schemas: SchemaCatalogue,
) -> None:
    if target.column not in table_schemas.get(target.table, {}):
        raise ResolutionError(
            f"Table column for mapping {event_name}::{field_name} -> "
            f"{target.table}::{target.column} not found"
        )


def generate_processor_config(
    network: "Network | str",
    starting_version: int,
    event_definitions: Sequence[EventDefinition],
    table_schemas: SchemaCatalogue,
    event_mapping: Mapping[str, Sequence[str]],
    policy: Optional[ResolutionPolicy] = None,
) -> GenerationResult:
    """Resolve every event field and metadata key to the columns that receive it.

    Returns the processor config together with the unmapped events/fields and
    the schema columns nothing writes to. Inputs are never mutated.

    Raises
    ------
    ResolutionError
        A mapping names a table, or an override names a (table, column),
        that is not in ``table_schemas``. In strict mode also when anything
        is left unmapped (UnmappedItemsError).
    ParseError
        A malformed override destination when ``policy.malformed_overrides``
        is "error".
    """
    policy = policy or ResolutionPolicy()
    network = Network.parse(network)
    starting_version = int(starting_version)
    if starting_version < 0:
        raise ValueError(f"starting_version must be non-negative, got {starting_version}")

    bound: Set[Tuple[str, str]] = set()
    unmapped_events: List[str] = []
    events: Dict[str, EventMapping] = {}

    def bind(targets: List[ColumnTarget]) -> List[ColumnTarget]:
        bound.update((t.table, t.column) for t in targets)
        return targets

    for definition in event_definitions:
        event_name = definition.event_name
        overrides = _field_overrides(event_name, event_mapping, policy)

        mapped_tables = event_mapping.get(event_name)
        if mapped_tables is None:
            logger.debug("event %s has no table mapping", event_name)
            unmapped_events.append(event_name)
            continue
        for table in mapped_tables:
            if table not in table_schemas:
                raise ResolutionError(
                    f"Table schema for mapping {event_name} -> {table} not found"
                )

        event_fields: TargetMap = {}
        for field_name in definition.fields:
            targets = [
                ColumnTarget(table=table, column=field_name)
                for table in mapped_tables
                if field_name in table_schemas[table]
            ]
            if not targets and field_name in overrides:
                for target in overrides[field_name]:
                    _check_override(event_name, field_name, target, table_schemas)
                targets = list(overrides[field_name])
            if targets:
                event_fields[f"{EVENT_FIELD_PREFIX}{field_name}"] = bind(targets)
            else:
                unmapped_events.append(f"{event_name}::{field_name}")

        mapped = _sorted_tables(table_schemas, sorted(mapped_tables))
        event_metadata = {
            key: bind(_metadata_targets(mapped, TypeCategory.EVENT_METADATA, key))
            for key in EVENT_METADATA_FIELDS
        }

        materialized = definition.materialized_name
        if materialized in events:
            logger.warning("event %s is defined more than once; keeping the last", materialized)
        events[materialized] = EventMapping(
            constant_values=[],
            event_fields=dict(sorted(event_fields.items())),
            event_metadata=event_metadata,
        )
        logger.debug(
            "resolved %s: %d of %d field(s) mapped",
            materialized,
            len(event_fields),
            len(definition.fields),
        )

    catalogue = _sorted_tables(table_schemas, sorted(table_schemas))
    transaction_metadata = {
        key: bind(_metadata_targets(catalogue, TypeCategory.TRANSACTION_METADATA, key))
        for key in TRANSACTION_METADATA_FIELDS
    }
    catalogue_event_metadata = {
        key: bind(_metadata_targets(catalogue, TypeCategory.EVENT_METADATA, key))
        for key in EVENT_METADATA_FIELDS
    }

    unmapped_table_columns = [
        (table, column)
        for table, columns in catalogue
        for column, _ in columns
        if (table, column) not in bound
    ]

    if policy.strict and (unmapped_events or unmapped_table_columns):
        raise UnmappedItemsError(unmapped_events, unmapped_table_columns)

    config = ProcessorConfig(
        spec_identifier=SpecIdentifier(),
        common_config=CommonConfig(
            network=str(network),
            starting_version=starting_version,
            starting_version_override=None,
        ),
        custom_config=CustomConfig(
            db_schema={table: dict(columns) for table, columns in catalogue},
            events=dict(sorted(events.items())),
            transaction_metadata=transaction_metadata,
            payload={},
            event_metadata=catalogue_event_metadata,
        ),
    )
    return GenerationResult(config, unmapped_events, unmapped_table_columns)
