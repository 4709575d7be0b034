from .config import (
    EVENT_FIELD_PREFIX,
    SPEC_CREATOR,
    SPEC_NAME,
    SPEC_VERSION,
    ColumnTarget,
    CommonConfig,
    CustomConfig,
    EventMapping,
    Network,
    ProcessorConfig,
    SpecIdentifier,
)
from .generator import GenerationResult, generate_processor_config
from .document import (
    config_from_dict,
    config_to_dict,
    dumps_processor_config,
    load_processor_config_yaml,
    loads_processor_config,
    save_processor_config_yaml,
)
from .report import format_warnings, unmapped_report

__all__ = [
    "EVENT_FIELD_PREFIX",
    "SPEC_CREATOR",
    "SPEC_NAME",
    "SPEC_VERSION",
    "ColumnTarget",
    "CommonConfig",
    "CustomConfig",
    "EventMapping",
    "Network",
    "ProcessorConfig",
    "SpecIdentifier",
    "GenerationResult",
    "generate_processor_config",
    "config_from_dict",
    "config_to_dict",
    "dumps_processor_config",
    "load_processor_config_yaml",
    "loads_processor_config",
    "save_processor_config_yaml",
    "format_warnings",
    "unmapped_report",
]
