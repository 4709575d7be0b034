from .types import (
    EVENT_METADATA_FIELDS,
    TRANSACTION_METADATA_FIELDS,
    ColumnSpec,
    ColumnTypeSpec,
    SchemaCatalogue,
    TableSchema,
    TypeCategory,
    parse_bool_cell,
)
from .catalogue import SCHEMA_COLUMNS, load_db_schema_from_csv, load_db_schema_into_custom

__all__ = [
    "EVENT_METADATA_FIELDS",
    "TRANSACTION_METADATA_FIELDS",
    "ColumnSpec",
    "ColumnTypeSpec",
    "SchemaCatalogue",
    "TableSchema",
    "TypeCategory",
    "parse_bool_cell",
    "SCHEMA_COLUMNS",
    "load_db_schema_from_csv",
    "load_db_schema_into_custom",
]
