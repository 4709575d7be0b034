"""indexforge: processor-config synthesis for event-indexing pipelines."""

__version__ = "0.1.0"

from .errors import (
    IndexforgeError,
    ParseError,
    ResolutionError,
    SourceIOError,
    UnmappedItemsError,
)
from .schema import (
    ColumnSpec,
    ColumnTypeSpec,
    TypeCategory,
    load_db_schema_from_csv,
    load_db_schema_into_custom,
)
from .events import AccountAddress, EventDefinition, load_event_definitions_from_dir
from .processor import (
    ColumnTarget,
    CommonConfig,
    CustomConfig,
    EventMapping,
    GenerationResult,
    Network,
    ProcessorConfig,
    SpecIdentifier,
    format_warnings,
    generate_processor_config,
    load_processor_config_yaml,
    save_processor_config_yaml,
    unmapped_report,
)
from .mapping import ensure_events_exist_from_mapping, load_event_table_mappings_from_csv
from .settings import GenerateSettings, ResolutionPolicy, get_generate_settings

__all__ = [
    "IndexforgeError",
    "ParseError",
    "ResolutionError",
    "SourceIOError",
    "UnmappedItemsError",
    "ColumnSpec",
    "ColumnTypeSpec",
    "TypeCategory",
    "load_db_schema_from_csv",
    "load_db_schema_into_custom",
    "AccountAddress",
    "EventDefinition",
    "load_event_definitions_from_dir",
    "ColumnTarget",
    "CommonConfig",
    "CustomConfig",
    "EventMapping",
    "GenerationResult",
    "Network",
    "ProcessorConfig",
    "SpecIdentifier",
    "format_warnings",
    "generate_processor_config",
    "load_processor_config_yaml",
    "save_processor_config_yaml",
    "unmapped_report",
    "ensure_events_exist_from_mapping",
    "load_event_table_mappings_from_csv",
    "GenerateSettings",
    "ResolutionPolicy",
    "get_generate_settings",
]
