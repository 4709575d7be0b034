from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict

from ..errors import ParseError
from ..sources import csv_record_widths, read_csv_source
from .types import ColumnSpec, ColumnTypeSpec, SchemaCatalogue, parse_bool_cell

if TYPE_CHECKING:
    from ..processor.config import CustomConfig

logger = logging.getLogger(__name__)

SCHEMA_COLUMNS = (
    "table",
    "column",
    "column_type",
    "type",
    "default_value",
    "is_index",
    "is_nullable",
    "is_option",
    "is_primary_key",
    "is_vec",
)
_FLAG_COLUMNS = ("is_index", "is_nullable", "is_option", "is_primary_key", "is_vec")


def _cell(rec: Dict[str, Any], name: str) -> str:
    return str(rec[name]).strip()


def _column_spec_from_row(rec: Dict[str, Any], path: Path, row: int) -> ColumnSpec:
    try:
        type_spec = ColumnTypeSpec.parse(
            _cell(rec, "type"), _cell(rec, "column_type")
        )
    except ParseError:
        raise
    except ValueError as exc:
        raise ParseError(f"failed to parse CSV row {row} in {path}: {exc}", path, row) from exc

    flags = {name: parse_bool_cell(_cell(rec, name)) for name in _FLAG_COLUMNS}
    return ColumnSpec(
        column_type=type_spec,
        default_value=type_spec.coerce_default(_cell(rec, "default_value")),
        **flags,
    )


def load_db_schema_from_csv(path: Path | str) -> SchemaCatalogue:
    """Load a table-schema catalogue (table -> column -> ColumnSpec) from CSV.

    Rows are applied in file order, so a repeated (table, column) pair keeps
    the last row. Tables and columns come back sorted by name.
    """
    path = Path(path)
    df = read_csv_source(path)
    if df.empty and not len(df.columns):
        return {}

    df.columns = [str(c).strip() for c in df.columns]
    missing = set(SCHEMA_COLUMNS) - set(df.columns)
    if missing:
        raise ParseError(
            f"failed to parse CSV header in {path}: missing required columns: {sorted(missing)}",
            path,
        )

    width = len(df.columns)
    for row, fields in enumerate(csv_record_widths(path)[1:], start=1):
        if fields != width:
            raise ParseError(
                f"failed to parse CSV row {row} in {path}: expected {width} fields, found {fields}",
                path,
                row,
            )

    tables: Dict[str, Dict[str, ColumnSpec]] = {}
    for row, rec in enumerate(df.to_dict("records"), start=1):
        table = _cell(rec, "table")
        column = _cell(rec, "column")
        if not table or not column:
            raise ParseError(
                f"failed to parse CSV row {row} in {path}: table and column are required",
                path,
                row,
            )
        tables.setdefault(table, {})[column] = _column_spec_from_row(rec, path, row)

    logger.debug(
        "loaded %d table(s), %d column(s) from %s",
        len(tables),
        sum(len(cols) for cols in tables.values()),
        path,
    )
    return {t: dict(sorted(cols.items())) for t, cols in sorted(tables.items())}


def load_db_schema_into_custom(custom: "CustomConfig", path: Path | str) -> None:
    custom.db_schema = load_db_schema_from_csv(path)
