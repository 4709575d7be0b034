from .address import AccountAddress
from .definition import EventDefinition
from .catalogue import (
    EVENT_DOCUMENT_SUFFIX,
    event_document_path,
    load_event_definitions,
    load_event_definitions_from_dir,
    write_event_definitions,
)

__all__ = [
    "AccountAddress",
    "EventDefinition",
    "EVENT_DOCUMENT_SUFFIX",
    "event_document_path",
    "load_event_definitions",
    "load_event_definitions_from_dir",
    "write_event_definitions",
]
