from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Mapping, Sequence

from ..processor.config import CustomConfig, EventMapping
from ..schema.types import EVENT_METADATA_FIELDS
from ..sources import read_csv_source

logger = logging.getLogger(__name__)

EventTableMapping = Dict[str, List[str]]


def _trimmed(cell) -> str:
    return cell.strip() if isinstance(cell, str) else ""


def load_event_table_mappings_from_csv(path: Path | str) -> EventTableMapping:
    """Load ``event-or-field key -> destinations`` from a two-column CSV.

    The first row is a header and is always skipped. Rows with an empty cell
    are dropped, destinations are deduplicated per key and sorted.
    """
    path = Path(path)
    df = read_csv_source(path, header=None)
    if df.shape[1] < 2:
        return {}

    mapping: EventTableMapping = {}
    dropped = 0
    for event_cell, table_cell in df.iloc[1:, :2].itertuples(index=False, name=None):
        event = _trimmed(event_cell)
        table = _trimmed(table_cell)
        if not event or not table:
            dropped += 1
            continue
        tables = mapping.setdefault(event, [])
        if table not in tables:
            tables.append(table)

    logger.debug(
        "loaded %d mapping key(s) from %s (%d incomplete row(s) dropped)",
        len(mapping),
        path,
        dropped,
    )
    return {event: sorted(tables) for event, tables in sorted(mapping.items())}


def ensure_events_exist_from_mapping(
    custom: CustomConfig, mapping: Mapping[str, Sequence[str]]
) -> List[str]:
    """Add an empty EventMapping for each mapping key missing from ``custom.events``.

    Placeholders carry every event-metadata key with an empty target list.
    Existing entries are left untouched. Returns the keys that were added.
    """
    added = []
    for event in mapping:
        if event not in custom.events:
            custom.events[event] = EventMapping(
                event_metadata={key: [] for key in EVENT_METADATA_FIELDS}
            )
            added.append(event)
    if added:
        custom.events = dict(sorted(custom.events.items()))
    return added
