from __future__ import annotations

import pandas as pd

from ..errors import UnmappedItemsError
from .generator import GenerationResult

REPORT_COLUMNS = ["kind", "event", "field", "table", "column"]


def unmapped_report(result: GenerationResult) -> pd.DataFrame:
    """One row per unmapped item, sorted by kind then name."""
    rows = []
    for item in result.unmapped_events:
        # event names have three "::" parts; a fourth part is a field
        parts = item.split("::")
        if len(parts) > 3:
            event, field = "::".join(parts[:3]), "::".join(parts[3:])
            rows.append({"kind": "event_field", "event": event, "field": field})
        else:
            rows.append({"kind": "event", "event": item, "field": None})
    for table, column in result.unmapped_table_columns:
        rows.append({"kind": "table_column", "table": table, "column": column})

    df = pd.DataFrame(rows, columns=REPORT_COLUMNS)
    if df.empty:
        return df
    return df.sort_values(REPORT_COLUMNS, na_position="first", kind="mergesort").reset_index(
        drop=True
    )


def format_warnings(
    result: "GenerationResult | UnmappedItemsError",
    header: str = "Processor config generated with warnings:",
) -> str:
    """Render the unmapped items as the operator-facing warning block ("" if none)."""
    lines = []
    if result.unmapped_events:
        lines.append("Unmapped events:")
        lines.extend(f"  - {event}" for event in result.unmapped_events)
    if result.unmapped_table_columns:
        lines.append("Unmapped table columns:")
        lines.extend(f"  - {table},{column}" for table, column in result.unmapped_table_columns)
    if not lines:
        return ""
    return header + "\n" + "\n".join(lines) + "\n"
