from .table import (
    EventTableMapping,
    ensure_events_exist_from_mapping,
    load_event_table_mappings_from_csv,
)

__all__ = [
    "EventTableMapping",
    "ensure_events_exist_from_mapping",
    "load_event_table_mappings_from_csv",
]
