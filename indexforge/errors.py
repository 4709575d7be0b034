from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence, Tuple


class IndexforgeError(Exception):
    """Base class for every fatal error raised by indexforge."""


class SourceIOError(IndexforgeError, OSError):
    """A source could not be opened/read, or an output could not be written."""

    def __init__(self, message: str, path: Optional[Path | str] = None):
        super().__init__(message)
        self.path = None if path is None else Path(path)

    def __str__(self) -> str:
        return self.args[0]


class ParseError(IndexforgeError, ValueError):
    """Malformed row or document content in one of the loaders."""

    def __init__(
        self,
        message: str,
        path: Optional[Path | str] = None,
        row: Optional[int] = None,
    ):
        super().__init__(message)
        self.path = None if path is None else Path(path)
        self.row = row


class ResolutionError(IndexforgeError, ValueError):
    """A mapping references a table or (table, column) missing from the schema."""


class UnmappedItemsError(ResolutionError):
    """Raised in strict mode when resolution leaves anything unmapped."""

    def __init__(
        self,
        unmapped_events: Sequence[str],
        unmapped_table_columns: Sequence[Tuple[str, str]],
    ):
        self.unmapped_events = list(unmapped_events)
        self.unmapped_table_columns = list(unmapped_table_columns)
        super().__init__(
            f"{len(self.unmapped_events)} unmapped event(s)/field(s) and "
            f"{len(self.unmapped_table_columns)} unmapped table column(s)"
        )
