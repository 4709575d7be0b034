from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Union

Scalar = Union[int, float, bool, str]


class TypeCategory(str, Enum):
    MOVE_TYPE = "move_type"
    TRANSACTION_METADATA = "transaction_metadata"
    EVENT_METADATA = "event_metadata"


EVENT_METADATA_FIELDS = (
    "account_address",
    "creation_number",
    "event_index",
    "event_type",
    "sequence_number",
)
TRANSACTION_METADATA_FIELDS = ("block_height", "epoch", "timestamp", "version")

_UNSIGNED_MOVE_TYPES = frozenset({"u8", "u16", "u32", "u64"})
_NUMERIC_EVENT_METADATA = frozenset({"creation_number", "sequence_number", "event_index"})
_U64_MAX = 2**64 - 1
_TRUTHY = frozenset({"true", "t", "1", "yes", "y"})


def parse_bool_cell(s: str) -> bool:
    return str(s).strip().lower() in _TRUTHY


def _parse_u64(s: str) -> Optional[int]:
    text = s[1:] if s.startswith("+") else s
    if not text.isascii() or not text.isdigit():
        return None
    value = int(text)
    return value if value <= _U64_MAX else None


@dataclass(frozen=True)
class ColumnTypeSpec:
    """Two-level type tag of a table column, e.g. ``event_metadata/sequence_number``."""

    type: TypeCategory
    column_type: str

    @staticmethod
    def parse(type: str, column_type: str) -> "ColumnTypeSpec":
        """Validate a (category, subtype) pair.

        Metadata subtypes must name one of the fixed metadata keys. ``move_type``
        subtypes are open-ended: any non-empty Move type is accepted (``u128``,
        ``vector<u8>``, ``0x1::string::String``, user structs), and only the
        subtypes known to ``coerce_default`` get typed defaults.
        """
        category_text = str(type).strip()
        subtype = str(column_type).strip()
        try:
            category = TypeCategory(category_text)
        except ValueError as exc:
            allowed = ", ".join(c.value for c in TypeCategory)
            raise ValueError(
                f"Unknown column type category {category_text!r} (expected one of {allowed})"
            ) from exc
        if not subtype:
            raise ValueError(f"Column type for category {category.value!r} is required.")
        if (
            category == TypeCategory.TRANSACTION_METADATA
            and subtype not in TRANSACTION_METADATA_FIELDS
        ):
            raise ValueError(f"Unknown transaction_metadata column type: {subtype}")
        if category == TypeCategory.EVENT_METADATA and subtype not in EVENT_METADATA_FIELDS:
            raise ValueError(f"Unknown event_metadata column type: {subtype}")
        return ColumnTypeSpec(type=category, column_type=subtype)

    def matches(self, category: TypeCategory, column_type: str) -> bool:
        return self.type == category and self.column_type == column_type

    def coerce_default(self, cell: Optional[str]) -> Optional[Scalar]:
        """Type a raw default-value cell; blank cells mean "no default"."""
        if cell is None:
            return None
        v = str(cell).strip()
        if not v:
            return None

        numeric = (
            (self.type == TypeCategory.MOVE_TYPE and self.column_type in _UNSIGNED_MOVE_TYPES)
            or self.type == TypeCategory.TRANSACTION_METADATA
            or (
                self.type == TypeCategory.EVENT_METADATA
                and self.column_type in _NUMERIC_EVENT_METADATA
            )
        )
        if numeric:
            parsed = _parse_u64(v)
            return v if parsed is None else parsed
        if self.type == TypeCategory.MOVE_TYPE and self.column_type == "bool":
            # the processor expects the literal strings, not YAML booleans
            return "true" if parse_bool_cell(v) else "false"
        return v


@dataclass(frozen=True)
class ColumnSpec:
    column_type: ColumnTypeSpec
    default_value: Optional[Scalar] = None
    is_index: bool = False
    is_nullable: bool = False
    is_option: bool = False
    is_primary_key: bool = False
    is_vec: bool = False


TableSchema = Dict[str, ColumnSpec]
SchemaCatalogue = Dict[str, TableSchema]
